from django.apps import AppConfig


class AssistantConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'rms.assistant'
    verbose_name = 'Research Assistant'
