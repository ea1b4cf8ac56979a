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
from .models import ProjectRisk
from .serializers import ProjectRiskSerializer
from .filters import ProjectRiskFilter

logger = logging.getLogger('rms.risks')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def risk_list_create(request):
    """List risks (filterable) or register a new risk"""
    if request.method == 'GET':
        queryset = ProjectRisk.objects.select_related('project')
        return list_response(request, queryset, ProjectRiskSerializer, ProjectRiskFilter)
    return create_response(request, ProjectRiskSerializer, logger)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def risk_detail(request, pk):
    """Retrieve, update or delete a risk"""
    risk = get_object_or_404(ProjectRisk.objects.select_related('project'), pk=pk)
    return detail_response(request, risk, ProjectRiskSerializer, logger)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def risk_by_project(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    queryset = ProjectRisk.objects.select_related('project').filter(project=project)
    return list_response(request, queryset, ProjectRiskSerializer, ProjectRiskFilter)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def risk_by_project_status(request, project_id, status_value):
    project = get_object_or_404(ResearchProject, pk=project_id)
    risk_status = normalize_choice(status_value, ProjectRisk.STATUS_CHOICES)
    if risk_status is None:
        return invalid_choice_response('status', status_value, ProjectRisk.STATUS_CHOICES)
    queryset = ProjectRisk.objects.select_related('project').filter(project=project, status=risk_status)
    return Response(ProjectRiskSerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def risk_by_project_category(request, project_id, category):
    project = get_object_or_404(ResearchProject, pk=project_id)
    queryset = ProjectRisk.objects.select_related('project').filter(project=project, category__iexact=category)
    return Response(ProjectRiskSerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def risk_high_count(request, project_id):
    """Number of HIGH or CRITICAL risks of a project that are not closed"""
    project = get_object_or_404(ResearchProject, pk=project_id)
    count = (
        ProjectRisk.objects.filter(project=project, risk_level__in=ProjectRisk.HIGH_LEVELS)
        .exclude(status='CLOSED')
        .count()
    )
    return Response({'project_id': project.id, 'count': count})
