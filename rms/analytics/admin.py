from django.contrib import admin
from .models import ResearchAnalytics


@admin.register(ResearchAnalytics)
class ResearchAnalyticsAdmin(admin.ModelAdmin):
    list_display = ['project_title', 'completion_rate', 'duration_days', 'actual_duration_days',
                    'on_time_completion', 'calculated_date']
    list_filter = ['on_time_completion', 'calculated_date']
    search_fields = ['project_title']
    ordering = ['-calculated_date']
    readonly_fields = ['created_at']
