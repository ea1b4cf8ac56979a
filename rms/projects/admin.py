from django.contrib import admin
from .models import ResearchProject


@admin.register(ResearchProject)
class ResearchProjectAdmin(admin.ModelAdmin):
    list_display = ['title', 'status', 'priority', 'research_area', 'principal_investigator',
                    'start_date', 'end_date', 'completion_percentage']
    list_filter = ['status', 'priority', 'research_area']
    search_fields = ['title', 'description', 'keywords', 'principal_investigator', 'institution']
    ordering = ['-created_at']
    readonly_fields = ['created_by', 'created_at', 'updated_at']
