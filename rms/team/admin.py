from django.contrib import admin
from .models import TeamMember


@admin.register(TeamMember)
class TeamMemberAdmin(admin.ModelAdmin):
    list_display = ['name', 'email', 'role', 'project', 'department', 'is_active']
    list_filter = ['role', 'is_active', 'department']
    search_fields = ['name', 'email', 'expertise', 'affiliation']
    ordering = ['name']
