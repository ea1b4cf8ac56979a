from django.conf import settings
from django.db import models


class TeamMember(models.Model):
    ROLE_CHOICES = [
        ('PRINCIPAL_INVESTIGATOR', 'Principal Investigator'),
        ('CO_INVESTIGATOR', 'Co-Investigator'),
        ('RESEARCH_ASSISTANT', 'Research Assistant'),
        ('GRADUATE_STUDENT', 'Graduate Student'),
        ('POSTDOC', 'Postdoctoral Researcher'),
        ('TECHNICIAN', 'Technician'),
        ('MEMBER', 'Member'),
    ]

    project = models.ForeignKey('projects.ResearchProject', on_delete=models.CASCADE, null=True, blank=True,
                                related_name='team_members')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
                             related_name='team_memberships')
    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=100)
    role = models.CharField(max_length=30, choices=ROLE_CHOICES, default='MEMBER')
    expertise = models.CharField(max_length=200, blank=True)
    department = models.CharField(max_length=100, blank=True)
    affiliation = models.CharField(max_length=200, blank=True)
    responsibilities = models.TextField(blank=True)
    join_date = models.DateField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'team_members'
        ordering = ['name', 'id']
        constraints = [
            models.UniqueConstraint(fields=['project', 'email'], name='team_member_unique_email_per_project'),
        ]

    def __str__(self):
        return self.name
