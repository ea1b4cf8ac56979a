from django.contrib import admin
from .models import ProjectPatent, ProjectPublication


@admin.register(ProjectPatent)
class ProjectPatentAdmin(admin.ModelAdmin):
    list_display = ['patent_number', 'title', 'project', 'type', 'status', 'filing_date', 'grant_date']
    list_filter = ['type', 'status', 'patent_office']
    search_fields = ['patent_number', 'title', 'inventors', 'assignee']
    ordering = ['-filing_date']


@admin.register(ProjectPublication)
class ProjectPublicationAdmin(admin.ModelAdmin):
    list_display = ['title', 'project', 'type', 'status', 'year', 'citations', 'open_access']
    list_filter = ['type', 'status', 'open_access', 'year']
    search_fields = ['title', 'authors', 'doi', 'journal_name', 'keywords']
    ordering = ['-year', 'title']
