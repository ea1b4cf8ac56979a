from decimal import Decimal
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class ResearchProject(models.Model):
    """A research project; every other research record hangs off one"""
    STATUS_CHOICES = [
        ('PLANNING', 'Planning'),
        ('ACTIVE', 'Active'),
        ('ON_HOLD', 'On Hold'),
        ('COMPLETED', 'Completed'),
        ('CANCELLED', 'Cancelled'),
    ]
    PRIORITY_CHOICES = [
        ('LOW', 'Low'),
        ('MEDIUM', 'Medium'),
        ('HIGH', 'High'),
        ('CRITICAL', 'Critical'),
    ]

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='PLANNING')
    priority = models.CharField(max_length=20, choices=PRIORITY_CHOICES, default='MEDIUM')
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    budget = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'),
                                 validators=[MinValueValidator(Decimal('0.00'))])
    research_area = models.CharField(max_length=200, blank=True)
    principal_investigator = models.CharField(max_length=200, blank=True)
    institution = models.CharField(max_length=200, blank=True)
    keywords = models.CharField(max_length=500, blank=True, help_text="Space or comma separated keywords")
    objectives = models.TextField(blank=True)
    methodology = models.TextField(blank=True)
    expected_outcomes = models.TextField(blank=True)
    completion_percentage = models.PositiveSmallIntegerField(default=0, validators=[MaxValueValidator(100)])
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                                   related_name='research_projects')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'research_projects'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['status'], name='projects_status_idx'),
            models.Index(fields=['priority'], name='projects_priority_idx'),
            models.Index(fields=['research_area'], name='projects_area_idx'),
        ]

    def __str__(self):
        return self.title

    @property
    def keyword_set(self):
        """Lower-cased keywords split on whitespace and commas"""
        return {word for word in self.keywords.lower().replace(',', ' ').split() if word}
