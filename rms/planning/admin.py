from django.contrib import admin
from .models import ProjectTask, ProjectMilestone, ProjectDeliverable


@admin.register(ProjectTask)
class ProjectTaskAdmin(admin.ModelAdmin):
    list_display = ['title', 'project', 'status', 'priority', 'assigned_to', 'due_date', 'progress']
    list_filter = ['status', 'priority', 'project']
    search_fields = ['title', 'description', 'tags']
    ordering = ['-created_at']


@admin.register(ProjectMilestone)
class ProjectMilestoneAdmin(admin.ModelAdmin):
    list_display = ['title', 'project', 'status', 'due_date', 'completion_date', 'progress']
    list_filter = ['status', 'project']
    search_fields = ['title', 'description', 'responsible_person']
    ordering = ['due_date']


@admin.register(ProjectDeliverable)
class ProjectDeliverableAdmin(admin.ModelAdmin):
    list_display = ['title', 'project', 'type', 'status', 'approval_status', 'due_date', 'version']
    list_filter = ['status', 'approval_status', 'type']
    search_fields = ['title', 'description', 'responsible_person']
    ordering = ['due_date']
