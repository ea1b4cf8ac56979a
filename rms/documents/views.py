import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django.http import FileResponse
from django.shortcuts import get_object_or_404
from rms.core.crud import list_response, create_response, detail_response
from rms.core.utils import create_audit_log
from rms.projects.models import ResearchProject
from .models import ProjectDocument
from .serializers import ProjectDocumentSerializer, DocumentUploadSerializer
from .filters import ProjectDocumentFilter
from .processing import process_document

logger = logging.getLogger('rms.documents')


def _documents():
    return ProjectDocument.objects.select_related('project', 'uploaded_by')


def _delete_stored_file(document):
    if document.file:
        document.file.delete(save=False)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def document_list_create(request):
    """List documents (filterable) or register a document without a stored file"""
    if request.method == 'GET':
        return list_response(request, _documents(), ProjectDocumentSerializer, ProjectDocumentFilter)
    return create_response(request, ProjectDocumentSerializer, logger, uploaded_by=request.user)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def document_detail(request, pk):
    """Retrieve, update or delete a document (deleting also removes the stored file)"""
    document = get_object_or_404(_documents(), pk=pk)
    return detail_response(request, document, ProjectDocumentSerializer, logger, on_delete=_delete_stored_file)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def document_by_project(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    return list_response(request, _documents().filter(project=project), ProjectDocumentSerializer, ProjectDocumentFilter)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def document_by_type(request, file_type):
    """Documents whose MIME type or extension matches the given type"""
    queryset = _documents().filter(file_type__icontains=file_type)
    return Response(ProjectDocumentSerializer(queryset, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def document_upload(request):
    """Upload a file to a project; pass process=true to extract its text immediately"""
    serializer = DocumentUploadSerializer(data=request.data)
    if not serializer.is_valid():
        logger.warning(f"Document upload validation failed: {serializer.errors}")
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    document = serializer.save(uploaded_by=request.user)
    logger.info(f"User {request.user.username} uploaded '{document.file_name}' ({document.file_size} bytes) to project {document.project_id}")
    create_audit_log(
        request=request,
        action='upload',
        model_name='ProjectDocument',
        object_id=document.id,
        object_name=document.file_name,
        object_reference=document.project.title,
        changes={'file_size': document.file_size, 'file_type': document.file_type},
    )

    if str(request.data.get('process', '')).lower() in ('1', 'true', 'yes'):
        process_document(document)

    return Response(ProjectDocumentSerializer(document).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def document_download(request, pk):
    """Stream the stored file of a document as an attachment"""
    document = get_object_or_404(_documents(), pk=pk)
    if not document.file:
        return Response({'error': 'Document has no stored file'}, status=status.HTTP_404_NOT_FOUND)

    try:
        handle = document.file.open('rb')
    except (OSError, ValueError):
        logger.error(f"Stored file for document {pk} is missing: {document.file.name}", exc_info=True)
        return Response({'error': 'Stored file not found'}, status=status.HTTP_404_NOT_FOUND)

    create_audit_log(
        request=request,
        action='download',
        model_name='ProjectDocument',
        object_id=document.id,
        object_name=document.file_name,
        object_reference=document.project.title,
    )
    content_type = document.file_type if '/' in (document.file_type or '') else 'application/octet-stream'
    return FileResponse(handle, as_attachment=True, filename=document.file_name, content_type=content_type)
