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
from .models import ProjectPatent, ProjectPublication
from .serializers import ProjectPatentSerializer, ProjectPublicationSerializer
from .filters import ProjectPatentFilter, ProjectPublicationFilter

logger = logging.getLogger('rms.outputs')


def _patents():
    return ProjectPatent.objects.select_related('project')


def _publications():
    return ProjectPublication.objects.select_related('project')


# Patent views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def patent_list_create(request):
    """List patents (filterable) or record a new patent"""
    if request.method == 'GET':
        return list_response(request, _patents(), ProjectPatentSerializer, ProjectPatentFilter)
    return create_response(request, ProjectPatentSerializer, logger)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def patent_detail(request, pk):
    """Retrieve, update or delete a patent"""
    patent = get_object_or_404(_patents(), pk=pk)
    return detail_response(request, patent, ProjectPatentSerializer, logger)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patent_by_project(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    return list_response(request, _patents().filter(project=project), ProjectPatentSerializer, ProjectPatentFilter)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patent_by_project_status(request, project_id, status_value):
    project = get_object_or_404(ResearchProject, pk=project_id)
    patent_status = normalize_choice(status_value, ProjectPatent.STATUS_CHOICES)
    if patent_status is None:
        return invalid_choice_response('status', status_value, ProjectPatent.STATUS_CHOICES)
    queryset = _patents().filter(project=project, status=patent_status)
    return Response(ProjectPatentSerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patent_by_project_type(request, project_id, patent_type):
    project = get_object_or_404(ResearchProject, pk=project_id)
    normalized_type = normalize_choice(patent_type, ProjectPatent.TYPE_CHOICES)
    if normalized_type is None:
        return invalid_choice_response('type', patent_type, ProjectPatent.TYPE_CHOICES)
    queryset = _patents().filter(project=project, type=normalized_type)
    return Response(ProjectPatentSerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def patent_by_inventor(request, inventor):
    """Patents naming the inventor (case-insensitive substring match)"""
    queryset = _patents().filter(inventors__icontains=inventor.strip())
    return Response(ProjectPatentSerializer(queryset, many=True).data)


# Publication views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def publication_list_create(request):
    """List publications (filterable) or record a new publication"""
    if request.method == 'GET':
        return list_response(request, _publications(), ProjectPublicationSerializer, ProjectPublicationFilter)
    return create_response(request, ProjectPublicationSerializer, logger)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def publication_detail(request, pk):
    """Retrieve, update or delete a publication"""
    publication = get_object_or_404(_publications(), pk=pk)
    return detail_response(request, publication, ProjectPublicationSerializer, logger)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def publication_by_project(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    queryset = _publications().filter(project=project)
    return list_response(request, queryset, ProjectPublicationSerializer, ProjectPublicationFilter)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def publication_by_project_status(request, project_id, status_value):
    project = get_object_or_404(ResearchProject, pk=project_id)
    publication_status = normalize_choice(status_value, ProjectPublication.STATUS_CHOICES)
    if publication_status is None:
        return invalid_choice_response('status', status_value, ProjectPublication.STATUS_CHOICES)
    queryset = _publications().filter(project=project, status=publication_status)
    return Response(ProjectPublicationSerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def publication_by_project_type(request, project_id, publication_type):
    project = get_object_or_404(ResearchProject, pk=project_id)
    normalized_type = normalize_choice(publication_type, ProjectPublication.TYPE_CHOICES)
    if normalized_type is None:
        return invalid_choice_response('type', publication_type, ProjectPublication.TYPE_CHOICES)
    queryset = _publications().filter(project=project, type=normalized_type)
    return Response(ProjectPublicationSerializer(queryset, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def publication_by_author(request, author):
    """Publications listing the author (case-insensitive substring match)"""
    queryset = _publications().filter(authors__icontains=author.strip())
    return Response(ProjectPublicationSerializer(queryset, many=True).data)
