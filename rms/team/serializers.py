from rest_framework import serializers
from .models import TeamMember


class TeamMemberSerializer(serializers.ModelSerializer):
    project_title = serializers.CharField(source='project.title', read_only=True, default=None)

    class Meta:
        model = TeamMember
        fields = ['id', 'project', 'project_title', 'user', 'name', 'email', 'role', 'expertise',
                  'department', 'affiliation', 'responsibilities', 'join_date', 'is_active',
                  'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']
        # (project, email) uniqueness is enforced in validate()
        validators = []

    def validate(self, attrs):
        project = attrs.get('project', getattr(self.instance, 'project', None))
        email = attrs.get('email', getattr(self.instance, 'email', None))
        if project is not None and email:
            duplicates = TeamMember.objects.filter(project=project, email__iexact=email)
            if self.instance is not None:
                duplicates = duplicates.exclude(pk=self.instance.pk)
            if duplicates.exists():
                raise serializers.ValidationError({'email': 'This email is already on the project team'})
        return attrs
