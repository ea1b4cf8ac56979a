from rest_framework import serializers
from .models import ProjectPatent, ProjectPublication


class ProjectPatentSerializer(serializers.ModelSerializer):
    project_title = serializers.CharField(source='project.title', read_only=True, default=None)

    class Meta:
        model = ProjectPatent
        fields = ['id', 'project', 'project_title', 'title', 'abstract', 'patent_number', 'type', 'status',
                  'inventors', 'assignee', 'patent_office', 'filing_date', 'publication_date',
                  'grant_date', 'priority_date', 'licensing_status', 'revenue_generated',
                  'ipc_class', 'cpc_class', 'claims', 'url', 'commercialization_status',
                  'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']

    def validate(self, attrs):
        filing_date = attrs.get('filing_date', getattr(self.instance, 'filing_date', None))
        grant_date = attrs.get('grant_date', getattr(self.instance, 'grant_date', None))
        if filing_date and grant_date and grant_date < filing_date:
            raise serializers.ValidationError({'grant_date': 'Grant date cannot be before filing date'})
        return attrs


class ProjectPublicationSerializer(serializers.ModelSerializer):
    project_title = serializers.CharField(source='project.title', read_only=True)

    class Meta:
        model = ProjectPublication
        fields = ['id', 'project', 'project_title', 'title', 'abstract', 'type', 'status',
                  'journal_name', 'conference_name', 'authors', 'corresponding_author', 'doi',
                  'issn', 'isbn', 'volume', 'issue', 'pages', 'year', 'publisher', 'url',
                  'keywords', 'submission_date', 'acceptance_date', 'publication_date',
                  'impact_factor', 'citations', 'open_access', 'license', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']
