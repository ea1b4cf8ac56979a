from django.contrib import admin
from .models import ProjectRisk


@admin.register(ProjectRisk)
class ProjectRiskAdmin(admin.ModelAdmin):
    list_display = ['title', 'project', 'category', 'probability', 'impact', 'risk_score', 'risk_level', 'status']
    list_filter = ['risk_level', 'status', 'category']
    search_fields = ['title', 'description', 'owner']
    ordering = ['-risk_score']
    readonly_fields = ['risk_score', 'risk_level', 'created_at', 'updated_at']
