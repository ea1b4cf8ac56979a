from rest_framework import serializers
from .models import ProjectTask, ProjectMilestone, ProjectDeliverable


class ProjectTaskSerializer(serializers.ModelSerializer):
    project_title = serializers.CharField(source='project.title', read_only=True)
    assigned_to_username = serializers.CharField(source='assigned_to.username', read_only=True, default=None)
    is_overdue = serializers.BooleanField(read_only=True)

    class Meta:
        model = ProjectTask
        fields = ['id', 'project', 'project_title', 'title', 'description', 'status', 'priority',
                  'due_date', 'completion_date', 'estimated_hours', 'actual_hours', 'progress',
                  'tags', 'dependencies', 'notes', 'assigned_to', 'assigned_to_username',
                  'is_overdue', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class ProjectMilestoneSerializer(serializers.ModelSerializer):
    project_title = serializers.CharField(source='project.title', read_only=True)

    class Meta:
        model = ProjectMilestone
        fields = ['id', 'project', 'project_title', 'title', 'description', 'due_date',
                  'completion_date', 'progress', 'status', 'deliverables', 'responsible_person',
                  'dependencies', 'risks', 'notes', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']


class ProjectDeliverableSerializer(serializers.ModelSerializer):
    project_title = serializers.CharField(source='project.title', read_only=True)

    class Meta:
        model = ProjectDeliverable
        fields = ['id', 'project', 'project_title', 'title', 'type', 'description', 'file_path',
                  'file_type', 'due_date', 'completion_date', 'status', 'responsible_person',
                  'quality_criteria', 'approval_status', 'notes', 'version', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']
