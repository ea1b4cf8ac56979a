from django.contrib import admin
from .models import ChatMessage


@admin.register(ChatMessage)
class ChatMessageAdmin(admin.ModelAdmin):
    list_display = ['user', 'project', 'role', 'short_content', 'llm_used', 'created_at']
    list_filter = ['role', 'llm_used', 'created_at']
    search_fields = ['content', 'user__username']
    ordering = ['-created_at']
    readonly_fields = ['created_at']

    def short_content(self, obj):
        return obj.content[:80]
    short_content.short_description = 'Content'
