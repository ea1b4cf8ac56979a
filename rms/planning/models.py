from django.conf import settings
from django.core.validators import MaxValueValidator
from django.db import models
from django.utils import timezone


def _complete(record, completed_statuses):
    """Stamp progress and completion date when a record reaches a done status"""
    if record.status in completed_statuses:
        record.progress = 100
        if not record.completion_date:
            record.completion_date = timezone.localdate()


class ProjectTask(models.Model):
    STATUS_CHOICES = [
        ('PENDING', 'Pending'),
        ('IN_PROGRESS', 'In Progress'),
        ('COMPLETED', 'Completed'),
        ('CANCELLED', 'Cancelled'),
    ]
    PRIORITY_CHOICES = [
        ('LOW', 'Low'),
        ('MEDIUM', 'Medium'),
        ('HIGH', 'High'),
        ('URGENT', 'Urgent'),
    ]

    project = models.ForeignKey('projects.ResearchProject', on_delete=models.CASCADE, related_name='tasks')
    title = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='PENDING')
    priority = models.CharField(max_length=20, choices=PRIORITY_CHOICES, default='MEDIUM')
    due_date = models.DateField(null=True, blank=True)
    completion_date = models.DateField(null=True, blank=True)
    estimated_hours = models.PositiveIntegerField(default=0)
    actual_hours = models.PositiveIntegerField(default=0)
    progress = models.PositiveSmallIntegerField(default=0, validators=[MaxValueValidator(100)])
    tags = models.CharField(max_length=200, blank=True)
    dependencies = models.TextField(blank=True)
    notes = models.TextField(blank=True)
    assigned_to = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                    related_name='assigned_tasks')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'project_tasks'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['project', 'status'], name='tasks_project_status_idx'),
            models.Index(fields=['due_date'], name='tasks_due_date_idx'),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        _complete(self, ('COMPLETED',))
        super().save(*args, **kwargs)

    @property
    def is_overdue(self):
        return (
            self.due_date is not None
            and self.status not in ('COMPLETED', 'CANCELLED')
            and self.due_date < timezone.localdate()
        )


class ProjectMilestone(models.Model):
    STATUS_CHOICES = [
        ('PENDING', 'Pending'),
        ('IN_PROGRESS', 'In Progress'),
        ('COMPLETED', 'Completed'),
        ('CANCELLED', 'Cancelled'),
        ('DELAYED', 'Delayed'),
    ]

    project = models.ForeignKey('projects.ResearchProject', on_delete=models.CASCADE, related_name='milestones')
    title = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    due_date = models.DateField()
    completion_date = models.DateField(null=True, blank=True)
    progress = models.PositiveSmallIntegerField(default=0, validators=[MaxValueValidator(100)])
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='PENDING')
    deliverables = models.TextField(blank=True)
    responsible_person = models.CharField(max_length=100, blank=True)
    dependencies = models.TextField(blank=True)
    risks = models.TextField(blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'project_milestones'
        ordering = ['due_date', 'id']

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        _complete(self, ('COMPLETED',))
        super().save(*args, **kwargs)


class ProjectDeliverable(models.Model):
    STATUS_CHOICES = [
        ('PENDING', 'Pending'),
        ('IN_PROGRESS', 'In Progress'),
        ('COMPLETED', 'Completed'),
        ('APPROVED', 'Approved'),
        ('REJECTED', 'Rejected'),
    ]
    APPROVAL_CHOICES = [
        ('PENDING', 'Pending'),
        ('APPROVED', 'Approved'),
        ('REJECTED', 'Rejected'),
    ]

    project = models.ForeignKey('projects.ResearchProject', on_delete=models.CASCADE, related_name='deliverables')
    title = models.CharField(max_length=100)
    type = models.CharField(max_length=50, blank=True)
    description = models.TextField(blank=True)
    file_path = models.CharField(max_length=500, blank=True)
    file_type = models.CharField(max_length=50, blank=True)
    due_date = models.DateField(null=True, blank=True)
    completion_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='PENDING')
    responsible_person = models.CharField(max_length=100, blank=True)
    quality_criteria = models.TextField(blank=True)
    approval_status = models.CharField(max_length=20, choices=APPROVAL_CHOICES, default='PENDING')
    notes = models.TextField(blank=True)
    version = models.CharField(max_length=20, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'project_deliverables'
        ordering = ['due_date', 'id']

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if self.status in ('COMPLETED', 'APPROVED') and not self.completion_date:
            self.completion_date = timezone.localdate()
        super().save(*args, **kwargs)
