from rest_framework import serializers
from .models import ResearchProject


class ResearchProjectSerializer(serializers.ModelSerializer):
    created_by_username = serializers.CharField(source='created_by.username', read_only=True, default=None)
    team_size = serializers.SerializerMethodField()
    task_count = serializers.SerializerMethodField()
    document_count = serializers.SerializerMethodField()

    class Meta:
        model = ResearchProject
        fields = ['id', 'title', 'description', 'status', 'priority', 'start_date', 'end_date',
                  'budget', 'research_area', 'principal_investigator', 'institution', 'keywords',
                  'objectives', 'methodology', 'expected_outcomes', 'completion_percentage',
                  'created_by', 'created_by_username', 'team_size', 'task_count', 'document_count',
                  'created_at', 'updated_at']
        read_only_fields = ['created_by', 'created_at', 'updated_at']

    # list views annotate these counts; single records fall back to a query each
    def get_team_size(self, obj):
        if hasattr(obj, 'annotated_team_size'):
            return obj.annotated_team_size
        return obj.team_members.filter(is_active=True).count()

    def get_task_count(self, obj):
        if hasattr(obj, 'annotated_task_count'):
            return obj.annotated_task_count
        return obj.tasks.count()

    def get_document_count(self, obj):
        if hasattr(obj, 'annotated_document_count'):
            return obj.annotated_document_count
        return obj.documents.count()

    def validate(self, attrs):
        start_date = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end_date = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start_date and end_date and end_date < start_date:
            raise serializers.ValidationError({'end_date': 'End date cannot be before start date'})
        return attrs


class ProjectSummarySerializer(serializers.ModelSerializer):
    """Lightweight project row for dashboards and pickers"""
    class Meta:
        model = ResearchProject
        fields = ['id', 'title', 'status', 'priority', 'research_area', 'principal_investigator',
                  'start_date', 'end_date', 'completion_percentage', 'created_at']
