import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django.db.models import Q
from django.shortcuts import get_object_or_404
from rms.core.crud import normalize_choice, invalid_choice_response
from rms.core.utils import create_audit_log
from rms.projects.models import ResearchProject
from rms.projects.serializers import ProjectSummarySerializer
from .models import ResearchAnalytics
from .serializers import ResearchAnalyticsSerializer
from . import services

logger = logging.getLogger('rms.analytics')


# Analytics views
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def analytics_list(request):
    """All analytics calculations, newest first"""
    queryset = ResearchAnalytics.objects.order_by('-calculated_date', '-id')
    return Response(ResearchAnalyticsSerializer(queryset, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def analytics_calculate_all(request):
    """Recalculate analytics for every project"""
    created, failed = services.calculate_all_analytics()
    logger.info(f"User {request.user.username} calculated analytics for {len(created)} projects ({len(failed)} failed)")
    create_audit_log(
        request=request,
        action='calculate',
        model_name='ResearchAnalytics',
        object_id='all',
        object_name='All projects',
        changes={'calculated': len(created), 'failed': failed},
    )
    return Response({
        'calculated': len(created),
        'failed': failed,
        'results': ResearchAnalyticsSerializer(created, many=True).data,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def analytics_calculate_project(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    analytics = services.calculate_project_analytics(project)
    create_audit_log(
        request=request,
        action='calculate',
        model_name='ResearchAnalytics',
        object_id=analytics.id,
        object_name=project.title,
        object_reference=project.title,
        changes={'completion_rate': analytics.completion_rate},
    )
    return Response(ResearchAnalyticsSerializer(analytics).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def analytics_by_project(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    queryset = ResearchAnalytics.objects.filter(project=project).order_by('-calculated_date', '-id')
    return Response(ResearchAnalyticsSerializer(queryset, many=True).data)


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def analytics_delete(request, pk):
    analytics = get_object_or_404(ResearchAnalytics, pk=pk)
    analytics_id = analytics.id
    title = analytics.project_title
    analytics.delete()
    logger.info(f"Analytics {analytics_id} deleted by {request.user.username}")
    create_audit_log(
        request=request,
        action='delete',
        model_name='ResearchAnalytics',
        object_id=analytics_id,
        object_name=title,
    )
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def analytics_dashboard(request):
    return Response(services.analytics_dashboard())


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def analytics_tasks(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    return Response(services.task_analytics(project))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def analytics_budget(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    return Response(services.budget_analytics(project))


# Dashboard views
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_stats(request):
    """Headline counts for the dashboard cards"""
    return Response(services.dashboard_stats())


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_activity(request):
    return Response(services.recent_activity())


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_projects_by_status(request, status_value):
    project_status = normalize_choice(status_value, ResearchProject.STATUS_CHOICES)
    if project_status is None:
        return invalid_choice_response('status', status_value, ResearchProject.STATUS_CHOICES)
    queryset = ResearchProject.objects.filter(status=project_status)
    return Response(ProjectSummarySerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_projects_by_priority(request, priority):
    project_priority = normalize_choice(priority, ResearchProject.PRIORITY_CHOICES)
    if project_priority is None:
        return invalid_choice_response('priority', priority, ResearchProject.PRIORITY_CHOICES)
    queryset = ResearchProject.objects.filter(priority=project_priority)
    return Response(ProjectSummarySerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_projects_recent(request):
    queryset = ResearchProject.objects.order_by('-created_at', '-id')[:5]
    return Response(ProjectSummarySerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_projects_active(request):
    queryset = ResearchProject.objects.filter(status='ACTIVE')
    return Response(ProjectSummarySerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_projects_search(request):
    """Projects whose title, description or research area contains the query"""
    query = (request.query_params.get('query') or request.query_params.get('q') or '').strip()
    if not query:
        return Response([])
    queryset = ResearchProject.objects.filter(
        Q(title__icontains=query) | Q(description__icontains=query) | Q(research_area__icontains=query)
    )
    return Response(ProjectSummarySerializer(queryset, many=True).data)
