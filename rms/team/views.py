import logging
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django.shortcuts import get_object_or_404
from rms.core.crud import (
    list_response, create_response, detail_response,
    normalize_choice, invalid_choice_response,
)
from rms.projects.models import ResearchProject
from .models import TeamMember
from .serializers import TeamMemberSerializer
from .filters import TeamMemberFilter

logger = logging.getLogger('rms.team')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def team_member_list_create(request):
    """List team members (filterable) or add a member"""
    if request.method == 'GET':
        queryset = TeamMember.objects.select_related('project')
        return list_response(request, queryset, TeamMemberSerializer, TeamMemberFilter)
    return create_response(request, TeamMemberSerializer, logger)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def team_member_detail(request, pk):
    """Retrieve, update or remove a team member"""
    member = get_object_or_404(TeamMember.objects.select_related('project'), pk=pk)
    return detail_response(request, member, TeamMemberSerializer, logger)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def team_member_by_project(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    queryset = TeamMember.objects.select_related('project').filter(project=project)
    return list_response(request, queryset, TeamMemberSerializer, TeamMemberFilter)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def team_member_by_project_role(request, project_id, role):
    project = get_object_or_404(ResearchProject, pk=project_id)
    member_role = normalize_choice(role, TeamMember.ROLE_CHOICES)
    if member_role is None:
        return invalid_choice_response('role', role, TeamMember.ROLE_CHOICES)
    queryset = TeamMember.objects.select_related('project').filter(project=project, role=member_role)
    return Response(TeamMemberSerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def team_member_active_by_project(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    queryset = TeamMember.objects.select_related('project').filter(project=project, is_active=True)
    return Response(TeamMemberSerializer(queryset, many=True).data)
