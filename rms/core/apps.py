from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'rms.core'
    verbose_name = 'Core'

    def ready(self):
        """Import signals when app is ready"""
        import rms.core.cache_signals  # noqa: F401
