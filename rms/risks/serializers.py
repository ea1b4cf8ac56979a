from rest_framework import serializers
from .models import ProjectRisk


class ProjectRiskSerializer(serializers.ModelSerializer):
    project_title = serializers.CharField(source='project.title', read_only=True)

    class Meta:
        model = ProjectRisk
        fields = ['id', 'project', 'project_title', 'title', 'category', 'description',
                  'probability', 'impact', 'risk_score', 'risk_level', 'status',
                  'mitigation_plan', 'contingency_plan', 'owner', 'notes', 'created_at', 'updated_at']
        read_only_fields = ['risk_score', 'risk_level', 'created_at', 'updated_at']
