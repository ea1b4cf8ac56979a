from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Extended user model with research profile fields"""
    ROLE_CHOICES = [
        ('RESEARCHER', 'Researcher'),
        ('PRINCIPAL_INVESTIGATOR', 'Principal Investigator'),
        ('PROJECT_MANAGER', 'Project Manager'),
        ('ADMIN', 'Administrator'),
        ('VIEWER', 'Viewer'),
    ]

    phone = models.CharField(max_length=20, blank=True, null=True)
    institution = models.CharField(max_length=200, blank=True)
    department = models.CharField(max_length=200, blank=True)
    role = models.CharField(max_length=30, choices=ROLE_CHOICES, default='RESEARCHER')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'


class AuditLog(models.Model):
    """Audit log for mutations on research records"""
    ACTION_CHOICES = [
        ('create', 'Create'),
        ('update', 'Update'),
        ('delete', 'Delete'),
        ('view', 'View'),
        ('upload', 'Document Uploaded'),
        ('download', 'Document Downloaded'),
        ('process', 'Document Processed'),
        ('calculate', 'Analytics Calculated'),
        ('chat', 'Assistant Chat'),
    ]

    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='audit_logs')
    action = models.CharField(max_length=50, choices=ACTION_CHOICES)
    model_name = models.CharField(max_length=100)
    object_id = models.CharField(max_length=100)
    object_name = models.CharField(max_length=255, blank=True, null=True, help_text="Human-readable name of the object (e.g., project title, file name)")
    object_reference = models.CharField(max_length=255, blank=True, null=True, help_text="Reference identifier (e.g., owning project, patent number, DOI)")
    changes = models.JSONField(default=dict, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'audit_logs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['-created_at'], name='audit_logs_created_idx'),
            models.Index(fields=['action'], name='audit_logs_action_idx'),
            models.Index(fields=['model_name'], name='audit_logs_model_idx'),
            models.Index(fields=['object_reference'], name='audit_logs_reference_idx'),
        ]

    def __str__(self):
        return f"{self.action} {self.model_name}#{self.object_id}"
