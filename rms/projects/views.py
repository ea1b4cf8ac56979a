import logging
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from django.db.models import Count, Q
from django.shortcuts import get_object_or_404
from rms.core.crud import list_response, create_response, detail_response
from .models import ResearchProject
from .serializers import ResearchProjectSerializer
from .filters import ResearchProjectFilter

logger = logging.getLogger('rms.projects')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def project_list_create(request):
    """List research projects (filterable) or create a new one"""
    if request.method == 'GET':
        logger.debug(f"User {request.user.username} requested project list")
        queryset = ResearchProject.objects.select_related('created_by').annotate(
            annotated_team_size=Count('team_members', filter=Q(team_members__is_active=True), distinct=True),
            annotated_task_count=Count('tasks', distinct=True),
            annotated_document_count=Count('documents', distinct=True),
        )
        return list_response(request, queryset, ResearchProjectSerializer, ResearchProjectFilter)
    return create_response(request, ResearchProjectSerializer, logger, created_by=request.user)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def project_detail(request, pk):
    """Retrieve, update or delete a research project"""
    project = get_object_or_404(ResearchProject, pk=pk)
    return detail_response(request, project, ResearchProjectSerializer, logger)
