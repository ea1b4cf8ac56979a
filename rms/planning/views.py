import logging
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django.db.models import F
from django.shortcuts import get_object_or_404
from rms.core.crud import (
    list_response, create_response, detail_response,
    normalize_choice, invalid_choice_response,
)
from rms.projects.models import ResearchProject
from .models import ProjectTask, ProjectMilestone, ProjectDeliverable
from .serializers import ProjectTaskSerializer, ProjectMilestoneSerializer, ProjectDeliverableSerializer
from .filters import ProjectTaskFilter, ProjectMilestoneFilter, ProjectDeliverableFilter

logger = logging.getLogger('rms.planning')


def _tasks():
    return ProjectTask.objects.select_related('project', 'assigned_to')


# Task views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def task_list_create(request):
    """List tasks (filterable) or create a new task"""
    if request.method == 'GET':
        return list_response(request, _tasks(), ProjectTaskSerializer, ProjectTaskFilter)
    return create_response(request, ProjectTaskSerializer, logger)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def task_detail(request, pk):
    """Retrieve, update or delete a task"""
    task = get_object_or_404(_tasks(), pk=pk)
    return detail_response(request, task, ProjectTaskSerializer, logger)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def task_by_project(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    return list_response(request, _tasks().filter(project=project), ProjectTaskSerializer, ProjectTaskFilter)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def task_by_project_status(request, project_id, status_value):
    project = get_object_or_404(ResearchProject, pk=project_id)
    task_status = normalize_choice(status_value, ProjectTask.STATUS_CHOICES)
    if task_status is None:
        return invalid_choice_response('status', status_value, ProjectTask.STATUS_CHOICES)
    queryset = _tasks().filter(project=project, status=task_status)
    return Response(ProjectTaskSerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def task_by_project_priority(request, project_id, priority):
    project = get_object_or_404(ResearchProject, pk=project_id)
    task_priority = normalize_choice(priority, ProjectTask.PRIORITY_CHOICES)
    if task_priority is None:
        return invalid_choice_response('priority', priority, ProjectTask.PRIORITY_CHOICES)
    queryset = _tasks().filter(project=project, priority=task_priority)
    return Response(ProjectTaskSerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def task_by_project_assignee(request, project_id, user_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    queryset = _tasks().filter(project=project, assigned_to_id=user_id)
    return Response(ProjectTaskSerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def task_by_project_sorted(request, project_id):
    """Tasks of a project by due date, undated tasks last"""
    project = get_object_or_404(ResearchProject, pk=project_id)
    queryset = _tasks().filter(project=project).order_by(F('due_date').asc(nulls_last=True), 'id')
    return Response(ProjectTaskSerializer(queryset, many=True).data)


# Milestone views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def milestone_list_create(request):
    """List milestones (filterable) or create a new milestone"""
    if request.method == 'GET':
        queryset = ProjectMilestone.objects.select_related('project')
        return list_response(request, queryset, ProjectMilestoneSerializer, ProjectMilestoneFilter)
    return create_response(request, ProjectMilestoneSerializer, logger)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def milestone_detail(request, pk):
    """Retrieve, update or delete a milestone"""
    milestone = get_object_or_404(ProjectMilestone.objects.select_related('project'), pk=pk)
    return detail_response(request, milestone, ProjectMilestoneSerializer, logger)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def milestone_by_project(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    queryset = ProjectMilestone.objects.select_related('project').filter(project=project)
    return list_response(request, queryset, ProjectMilestoneSerializer, ProjectMilestoneFilter)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def milestone_by_project_status(request, project_id, status_value):
    project = get_object_or_404(ResearchProject, pk=project_id)
    milestone_status = normalize_choice(status_value, ProjectMilestone.STATUS_CHOICES)
    if milestone_status is None:
        return invalid_choice_response('status', status_value, ProjectMilestone.STATUS_CHOICES)
    queryset = ProjectMilestone.objects.select_related('project').filter(project=project, status=milestone_status)
    return Response(ProjectMilestoneSerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def milestone_by_project_sorted(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    queryset = ProjectMilestone.objects.select_related('project').filter(project=project).order_by('due_date', 'id')
    return Response(ProjectMilestoneSerializer(queryset, many=True).data)


# Deliverable views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def deliverable_list_create(request):
    """List deliverables (filterable) or create a new deliverable"""
    if request.method == 'GET':
        queryset = ProjectDeliverable.objects.select_related('project')
        return list_response(request, queryset, ProjectDeliverableSerializer, ProjectDeliverableFilter)
    return create_response(request, ProjectDeliverableSerializer, logger)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def deliverable_detail(request, pk):
    """Retrieve, update or delete a deliverable"""
    deliverable = get_object_or_404(ProjectDeliverable.objects.select_related('project'), pk=pk)
    return detail_response(request, deliverable, ProjectDeliverableSerializer, logger)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def deliverable_by_project(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    queryset = ProjectDeliverable.objects.select_related('project').filter(project=project)
    return list_response(request, queryset, ProjectDeliverableSerializer, ProjectDeliverableFilter)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def deliverable_by_project_status(request, project_id, status_value):
    project = get_object_or_404(ResearchProject, pk=project_id)
    deliverable_status = normalize_choice(status_value, ProjectDeliverable.STATUS_CHOICES)
    if deliverable_status is None:
        return invalid_choice_response('status', status_value, ProjectDeliverable.STATUS_CHOICES)
    queryset = ProjectDeliverable.objects.select_related('project').filter(project=project, status=deliverable_status)
    return Response(ProjectDeliverableSerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def deliverable_by_project_type(request, project_id, deliverable_type):
    project = get_object_or_404(ResearchProject, pk=project_id)
    queryset = ProjectDeliverable.objects.select_related('project').filter(
        project=project, type__iexact=deliverable_type
    )
    return Response(ProjectDeliverableSerializer(queryset, many=True).data)
