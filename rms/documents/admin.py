from django.contrib import admin
from .models import ProjectDocument


@admin.register(ProjectDocument)
class ProjectDocumentAdmin(admin.ModelAdmin):
    list_display = ['file_name', 'project', 'file_type', 'file_size', 'status', 'access_level', 'upload_date']
    list_filter = ['status', 'access_level', 'document_type']
    search_fields = ['file_name', 'description', 'tags']
    ordering = ['-upload_date']
    readonly_fields = ['file_size', 'content_text', 'processed_at', 'upload_date', 'updated_at']
