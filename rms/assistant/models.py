from django.conf import settings
from django.db import models


class ChatMessage(models.Model):
    """One turn of a user's conversation with the research assistant"""
    ROLE_CHOICES = [
        ('user', 'User'),
        ('assistant', 'Assistant'),
    ]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='chat_messages')
    project = models.ForeignKey('projects.ResearchProject', on_delete=models.SET_NULL, null=True, blank=True,
                                related_name='chat_messages')
    role = models.CharField(max_length=20, choices=ROLE_CHOICES)
    content = models.TextField()
    sources = models.JSONField(default=list, blank=True)
    llm_used = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'chat_messages'
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['user', 'created_at'], name='chat_user_created_idx'),
        ]

    def __str__(self):
        return f"{self.role}: {self.content[:50]}"
