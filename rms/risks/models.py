from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


def risk_level_for_score(score):
    """Map a probability x impact score (1-25) onto a risk level"""
    if score <= 4:
        return 'LOW'
    if score <= 9:
        return 'MEDIUM'
    if score <= 15:
        return 'HIGH'
    return 'CRITICAL'


class ProjectRisk(models.Model):
    LEVEL_CHOICES = [
        ('LOW', 'Low'),
        ('MEDIUM', 'Medium'),
        ('HIGH', 'High'),
        ('CRITICAL', 'Critical'),
    ]
    STATUS_CHOICES = [
        ('OPEN', 'Open'),
        ('MITIGATED', 'Mitigated'),
        ('CLOSED', 'Closed'),
    ]
    HIGH_LEVELS = ('HIGH', 'CRITICAL')

    project = models.ForeignKey('projects.ResearchProject', on_delete=models.CASCADE, related_name='risks')
    title = models.CharField(max_length=100)
    category = models.CharField(max_length=50, blank=True)
    description = models.TextField(blank=True)
    probability = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1), MaxValueValidator(5)])
    impact = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1), MaxValueValidator(5)])
    risk_score = models.PositiveSmallIntegerField(default=1)
    risk_level = models.CharField(max_length=20, choices=LEVEL_CHOICES, default='LOW')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='OPEN')
    mitigation_plan = models.TextField(blank=True)
    contingency_plan = models.TextField(blank=True)
    owner = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'project_risks'
        ordering = ['-risk_score', '-created_at', '-id']
        indexes = [
            models.Index(fields=['project', 'status'], name='risks_project_status_idx'),
            models.Index(fields=['risk_level'], name='risks_level_idx'),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        self.risk_score = self.probability * self.impact
        self.risk_level = risk_level_for_score(self.risk_score)
        super().save(*args, **kwargs)
