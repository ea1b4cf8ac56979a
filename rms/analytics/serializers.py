from rest_framework import serializers
from .models import ResearchAnalytics


class ResearchAnalyticsSerializer(serializers.ModelSerializer):
    project_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = ResearchAnalytics
        fields = ['id', 'project_id', 'project_title', 'start_date', 'end_date', 'actual_end_date',
                  'completion_rate', 'duration_days', 'actual_duration_days', 'on_time_completion',
                  'calculated_date', 'created_at']
        read_only_fields = fields
