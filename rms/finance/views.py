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
from .models import ProjectBudget
from .serializers import ProjectBudgetSerializer
from .filters import ProjectBudgetFilter
from .services import budget_summary

logger = logging.getLogger('rms.finance')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def budget_list_create(request):
    """List budget lines (filterable) or create a new line"""
    if request.method == 'GET':
        queryset = ProjectBudget.objects.select_related('project')
        return list_response(request, queryset, ProjectBudgetSerializer, ProjectBudgetFilter)
    return create_response(request, ProjectBudgetSerializer, logger)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def budget_detail(request, pk):
    """Retrieve, update or delete a budget line"""
    budget = get_object_or_404(ProjectBudget.objects.select_related('project'), pk=pk)
    return detail_response(request, budget, ProjectBudgetSerializer, logger)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def budget_by_project(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    queryset = ProjectBudget.objects.select_related('project').filter(project=project)
    return list_response(request, queryset, ProjectBudgetSerializer, ProjectBudgetFilter)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def budget_by_project_status(request, project_id, status_value):
    project = get_object_or_404(ResearchProject, pk=project_id)
    budget_status = normalize_choice(status_value, ProjectBudget.STATUS_CHOICES)
    if budget_status is None:
        return invalid_choice_response('status', status_value, ProjectBudget.STATUS_CHOICES)
    queryset = ProjectBudget.objects.select_related('project').filter(project=project, status=budget_status)
    return Response(ProjectBudgetSerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def budget_by_project_category(request, project_id, category):
    project = get_object_or_404(ResearchProject, pk=project_id)
    queryset = ProjectBudget.objects.select_related('project').filter(project=project, category__iexact=category)
    return Response(ProjectBudgetSerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def budget_summary_by_project(request, project_id):
    """Budgeted vs actual totals and utilization for one project"""
    project = get_object_or_404(ResearchProject, pk=project_id)
    summary = budget_summary(project)
    logger.debug(f"Budget summary for project {project_id}: {summary['utilization_percentage']}% utilized")
    return Response(summary)
