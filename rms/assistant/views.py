import logging
import time
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django.shortcuts import get_object_or_404
from rms.core.utils import create_audit_log
from rms.documents.models import ProjectDocument
from rms.documents.processing import process_document
from rms.projects.models import ResearchProject
from . import chatbot, insights
from .llm import LLMClient, LLMUnavailable
from .models import ChatMessage
from .retrieval import answer_question
from .serializers import (
    ChatMessageSerializer, RAGQuerySerializer, ChatRequestSerializer,
    AIQuerySerializer, DocumentRequestSerializer,
)

logger = logging.getLogger('rms.assistant')


def _payload(request):
    """Query params overlaid with the request body, so both forms are accepted"""
    data = request.query_params.dict()
    if hasattr(request.data, 'dict'):
        data.update(request.data.dict())
    elif isinstance(request.data, dict):
        data.update(request.data)
    return data


def _project_or_none(project_id):
    if not project_id:
        return None
    return ResearchProject.objects.filter(pk=project_id).first()


# RAG views
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def rag_search(request):
    """
    Answer a question from a project's documents.

    Accepts query and projectId in the body or as query params. Returns
    {answer, sources, query, llm_used}.
    """
    serializer = RAGQuerySerializer(data=_payload(request))
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    query = serializer.validated_data['query']
    project_id = serializer.validated_data.get('projectId')
    if project_id and not ResearchProject.objects.filter(pk=project_id).exists():
        return Response({'error': 'Project not found'}, status=status.HTTP_404_NOT_FOUND)

    result = answer_question(query, project_id)
    logger.info(
        f"RAG search by {request.user.username} on project {project_id}: "
        f"{len(result['sources'])} sources, llm_used={result['llm_used']}"
    )
    return Response(result)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def rag_chat(request):
    """Send a chat message; returns {response, sources, messageId, llm_used}"""
    serializer = ChatRequestSerializer(data=_payload(request))
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    project = None
    project_id = serializer.validated_data.get('projectId')
    if project_id:
        project = _project_or_none(project_id)
        if project is None:
            return Response({'error': 'Project not found'}, status=status.HTTP_404_NOT_FOUND)

    reply, sources = chatbot.chat(request.user, serializer.validated_data['message'], project)
    create_audit_log(
        request=request,
        action='chat',
        model_name='ChatMessage',
        object_id=reply.id,
        object_name=serializer.validated_data['message'][:100],
        object_reference=project.title if project else None,
        changes={'llm_used': reply.llm_used, 'sources': len(sources)},
    )
    return Response({
        'response': reply.content,
        'sources': sources,
        'messageId': reply.id,
        'llm_used': reply.llm_used,
    })


@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated])
def rag_history(request):
    """The current user's conversation (optionally for one project); DELETE clears it"""
    messages = ChatMessage.objects.filter(user=request.user).select_related('project')
    project_id = request.query_params.get('projectId')
    if project_id:
        if not project_id.isdigit():
            return Response({'error': f"Invalid projectId '{project_id}'"}, status=status.HTTP_400_BAD_REQUEST)
        messages = messages.filter(project_id=int(project_id))

    if request.method == 'DELETE':
        deleted, _ = messages.delete()
        logger.info(f"User {request.user.username} cleared {deleted} chat messages")
        return Response(status=status.HTTP_204_NO_CONTENT)

    return Response(ChatMessageSerializer(messages, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def rag_suggestions(request):
    return Response({'suggestions': insights.suggested_questions(request.user)})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def rag_insights(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    return Response(insights.project_insights(project))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def rag_summarize(request):
    """Summarize a document with the language model, or extractively when it is unavailable"""
    serializer = DocumentRequestSerializer(data=_payload(request))
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    document = get_object_or_404(ProjectDocument, pk=serializer.validated_data['documentId'])
    query = serializer.validated_data.get('query') or ''
    text = document.searchable_text
    keywords = insights.top_words([text], min_length=3)

    if not text:
        return Response({
            'documentId': document.id,
            'fileName': document.file_name,
            'summary': 'This document has no description or extracted text to summarize.',
            'keywords': [],
            'query': query,
            'llm_used': False,
        })

    focus = f" Focus on: {query}." if query else ''
    prompt = f"Summarize the following research document '{document.file_name}'.{focus}\n\n{text[:8000]}"
    try:
        summary = LLMClient().ask(prompt)
        llm_used = True
    except LLMUnavailable as e:
        logger.warning(f"Summarizing document {document.id} without the language model: {str(e)}")
        summary = insights.summarize_text(text)
        if keywords:
            summary = f"{summary}\n\nKey terms: {', '.join(keywords)}"
        llm_used = False

    return Response({
        'documentId': document.id,
        'fileName': document.file_name,
        'summary': summary,
        'keywords': keywords,
        'query': query,
        'llm_used': llm_used,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def rag_process_document(request):
    """Extract a document's text so the assistant can search it"""
    serializer = DocumentRequestSerializer(data=_payload(request))
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    document = get_object_or_404(ProjectDocument.objects.select_related('project'),
                                 pk=serializer.validated_data['documentId'])
    success = process_document(document)
    create_audit_log(
        request=request,
        action='process',
        model_name='ProjectDocument',
        object_id=document.id,
        object_name=document.file_name,
        object_reference=document.project.title,
        changes={'status': document.status},
    )
    if not success:
        return Response({
            'success': False,
            'message': f"Document '{document.file_name}' could not be processed",
            'documentId': document.id,
        }, status=status.HTTP_422_UNPROCESSABLE_ENTITY)

    return Response({
        'success': True,
        'message': f"Document '{document.file_name}' processed successfully",
        'documentId': document.id,
    })


# AI helper views
def _ai_response(request, response_type):
    serializer = AIQuerySerializer(data=_payload(request))
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    query = serializer.validated_data['query']
    if not query:
        return Response({'error': 'query is required'}, status=status.HTTP_400_BAD_REQUEST)

    started = time.perf_counter()
    response, sources, llm_used = chatbot.answer(query, serializer.validated_data.get('projectId'))
    return Response({
        'response': response,
        'confidence': 'high' if llm_used else 'medium',
        'sources': [source['title'] for source in sources],
        'processingTime': int((time.perf_counter() - started) * 1000),
        'type': response_type,
        'error': None,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def ai_query(request):
    return _ai_response(request, 'query')


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def ai_chat(request):
    return _ai_response(request, 'chat')


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def ai_analyze(request):
    """Health analysis of a project"""
    serializer = AIQuerySerializer(data=_payload(request))
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    project_id = serializer.validated_data.get('projectId')
    if not project_id:
        return Response({'error': 'projectId is required'}, status=status.HTTP_400_BAD_REQUEST)
    project = get_object_or_404(ResearchProject, pk=project_id)

    started = time.perf_counter()
    analysis = insights.project_analysis(project)
    return Response({
        'response': analysis,
        'confidence': 'high',
        'sources': [project.title],
        'processingTime': int((time.perf_counter() - started) * 1000),
        'type': 'analyze',
        'error': None,
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def ai_suggestions(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    return Response(insights.project_suggestions(project))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def ai_recommendations(request, project_id):
    """Projects in the same research area ranked by keyword overlap"""
    project = get_object_or_404(ResearchProject, pk=project_id)
    return Response(insights.similar_projects(project))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def ai_document_analysis(request, document_id):
    document = get_object_or_404(ProjectDocument, pk=document_id)
    return Response(insights.analyze_document(document))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def ai_project_summary(request, project_id):
    project = get_object_or_404(ResearchProject, pk=project_id)
    return Response(insights.project_summary(project))
