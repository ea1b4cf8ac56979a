from django.apps import AppConfig


class RisksConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'rms.risks'
    verbose_name = 'Risks'
