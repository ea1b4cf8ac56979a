import os
from django.conf import settings
from django.db import models


def document_upload_path(instance, filename):
    return f"documents/project_{instance.project_id}/{filename}"


class ProjectDocument(models.Model):
    ACCESS_LEVEL_CHOICES = [
        ('PUBLIC', 'Public'),
        ('PRIVATE', 'Private'),
        ('RESTRICTED', 'Restricted'),
    ]
    STATUS_CHOICES = [
        ('UPLOADED', 'Uploaded'),
        ('PROCESSED', 'Processed'),
        ('FAILED', 'Failed'),
    ]

    project = models.ForeignKey('projects.ResearchProject', on_delete=models.CASCADE, related_name='documents')
    file = models.FileField(upload_to=document_upload_path, max_length=500, null=True, blank=True)
    file_name = models.CharField(max_length=255)
    file_type = models.CharField(max_length=100, blank=True)
    file_path = models.CharField(max_length=500, blank=True)
    file_size = models.PositiveBigIntegerField(default=0)
    description = models.TextField(blank=True)
    document_type = models.CharField(max_length=50, blank=True)
    version = models.CharField(max_length=20, blank=True)
    tags = models.CharField(max_length=200, blank=True)
    access_level = models.CharField(max_length=20, choices=ACCESS_LEVEL_CHOICES, default='PRIVATE')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='UPLOADED')
    content_text = models.TextField(blank=True, help_text="Text extracted for search and the assistant")
    processed_at = models.DateTimeField(null=True, blank=True)
    uploaded_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                    related_name='uploaded_documents')
    upload_date = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'project_documents'
        ordering = ['-upload_date', '-id']
        indexes = [
            models.Index(fields=['project', 'status'], name='documents_project_status_idx'),
            models.Index(fields=['file_type'], name='documents_file_type_idx'),
        ]

    def __str__(self):
        return self.file_name

    @property
    def extension(self):
        return os.path.splitext(self.file_name)[1].lstrip('.').lower()

    @property
    def searchable_text(self):
        """Description plus extracted content, as used for retrieval"""
        return f"{self.description or ''} {self.content_text or ''}".strip()
