from django.apps import AppConfig


class OutputsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'rms.outputs'
    verbose_name = 'Patents and Publications'
