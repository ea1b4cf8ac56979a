import mimetypes
import os
from rest_framework import serializers
from rms.projects.models import ResearchProject
from .models import ProjectDocument


class ProjectDocumentSerializer(serializers.ModelSerializer):
    project_title = serializers.CharField(source='project.title', read_only=True)
    uploaded_by_username = serializers.CharField(source='uploaded_by.username', read_only=True, default=None)
    has_file = serializers.SerializerMethodField()

    class Meta:
        model = ProjectDocument
        fields = ['id', 'project', 'project_title', 'file_name', 'file_type', 'file_path', 'file_size',
                  'description', 'document_type', 'version', 'tags', 'access_level', 'status',
                  'processed_at', 'uploaded_by', 'uploaded_by_username', 'has_file',
                  'upload_date', 'updated_at']
        read_only_fields = ['file_size', 'status', 'processed_at', 'uploaded_by', 'upload_date', 'updated_at']

    def get_has_file(self, obj):
        return bool(obj.file)


class DocumentUploadSerializer(serializers.Serializer):
    """Multipart upload of a project document"""
    file = serializers.FileField()
    project = serializers.PrimaryKeyRelatedField(queryset=ResearchProject.objects.all())
    description = serializers.CharField(required=False, allow_blank=True, default='')
    document_type = serializers.CharField(required=False, allow_blank=True, max_length=50, default='')
    version = serializers.CharField(required=False, allow_blank=True, max_length=20, default='')
    tags = serializers.CharField(required=False, allow_blank=True, max_length=200, default='')
    access_level = serializers.ChoiceField(choices=ProjectDocument.ACCESS_LEVEL_CHOICES, default='PRIVATE')

    def create(self, validated_data):
        upload = validated_data.pop('file')
        file_name = os.path.basename(upload.name)
        file_type = (
            getattr(upload, 'content_type', None)
            or mimetypes.guess_type(file_name)[0]
            or os.path.splitext(file_name)[1].lstrip('.').lower()
        )
        document = ProjectDocument(
            file_name=file_name,
            file_type=file_type,
            file_size=upload.size,
            **validated_data,
        )
        document.file.save(file_name, upload, save=False)
        document.file_path = document.file.name
        document.save()
        return document
