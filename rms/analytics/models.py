from django.db import models


class ResearchAnalytics(models.Model):
    """Snapshot of a project's schedule progress, one row per calculation"""
    project = models.ForeignKey('projects.ResearchProject', on_delete=models.CASCADE, related_name='analytics')
    project_title = models.CharField(max_length=200)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    actual_end_date = models.DateField()
    completion_rate = models.FloatField(default=0.0)
    duration_days = models.PositiveIntegerField(default=1)
    actual_duration_days = models.PositiveIntegerField(default=0)
    on_time_completion = models.BooleanField(default=True)
    calculated_date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'research_analytics'
        verbose_name_plural = 'Research analytics'
        ordering = ['-calculated_date', '-id']
        indexes = [
            models.Index(fields=['project', 'calculated_date'], name='analytics_project_date_idx'),
        ]

    def __str__(self):
        return f"{self.project_title} ({self.calculated_date})"
