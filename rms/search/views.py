import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from .engine import SearchFilters, SearchQueryError, search, suggestions

logger = logging.getLogger('rms.search')


def _run_search(request, query, filters, page, size):
    try:
        result = search(query, filters=filters, page=page, size=size)
    except SearchQueryError as e:
        logger.warning(f"Rejected search from {request.user.username}: {str(e)}")
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    logger.info(f"User {request.user.username} searched '{result['query']}': {result['totalResults']} results")
    return Response(result)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def global_search(request):
    """
    Ranked search across every research record type.

    Query params: query (or q), page (zero-based), size, type, status,
    priority, department, projectId, date_from, date_to. List params accept
    comma separated values.
    """
    params = request.query_params
    query = params.get('query', params.get('q', ''))
    try:
        filters = SearchFilters(
            entity_types=params.get('type'),
            statuses=params.get('status'),
            priorities=params.get('priority'),
            date_start=params.get('date_from'),
            date_end=params.get('date_to'),
            department=params.get('department'),
            project_id=params.get('projectId'),
        )
    except SearchQueryError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    return _run_search(request, query, filters, params.get('page'), params.get('size'))


def _payload_search(request, entity_types=None):
    data = request.data if isinstance(request.data, dict) else {}
    query = data.get('query', '')
    try:
        filters = SearchFilters.from_payload(data.get('filters'), project_id=data.get('projectId'))
    except SearchQueryError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    if entity_types is not None:
        filters.entity_types = entity_types
    return _run_search(request, query, filters, data.get('page'), data.get('size'))


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def global_search_post(request):
    """Body: {query, filters: {entityTypes, status, priority, dateRange: {start, end}}, page, size}"""
    return _payload_search(request)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def search_documents(request):
    return _payload_search(request, entity_types=['document'])


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def search_team_members(request):
    return _payload_search(request, entity_types=['team_member'])


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def search_suggestions(request):
    """Up to five record names containing the typed text"""
    query = request.query_params.get('query', request.query_params.get('q', ''))
    return Response(suggestions(query))
