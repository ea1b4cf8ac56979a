from django.apps import AppConfig


class PlanningConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'rms.planning'
    verbose_name = 'Tasks, Milestones and Deliverables'
