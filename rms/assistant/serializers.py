from rest_framework import serializers
from .models import ChatMessage


class ChatMessageSerializer(serializers.ModelSerializer):
    project_title = serializers.CharField(source='project.title', read_only=True, default=None)

    class Meta:
        model = ChatMessage
        fields = ['id', 'project', 'project_title', 'role', 'content', 'sources', 'llm_used', 'created_at']
        read_only_fields = fields


class RAGQuerySerializer(serializers.Serializer):
    query = serializers.CharField(max_length=1000, trim_whitespace=True)
    projectId = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class ChatRequestSerializer(serializers.Serializer):
    message = serializers.CharField(max_length=4000, trim_whitespace=True)
    projectId = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class AIQuerySerializer(serializers.Serializer):
    """Body of the ai/ endpoints; ``message`` is accepted as an alias of ``query``"""
    query = serializers.CharField(max_length=4000, required=False, allow_blank=True)
    message = serializers.CharField(max_length=4000, required=False, allow_blank=True)
    projectId = serializers.IntegerField(required=False, allow_null=True, min_value=1)

    def validate(self, attrs):
        text = (attrs.get('query') or attrs.get('message') or '').strip()
        attrs['query'] = text
        return attrs


class DocumentRequestSerializer(serializers.Serializer):
    documentId = serializers.IntegerField(min_value=1)
    query = serializers.CharField(max_length=1000, required=False, allow_blank=True)
