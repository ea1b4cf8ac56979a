"""
API exception handling

DRF's own exceptions keep their default responses; anything else escaping a
view is logged with its traceback and reported as a generic 500.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger('rms.core')


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get('view')
    view_name = getattr(view, '__name__', None) or view.__class__.__name__
    logger.error(f"Unhandled exception in {view_name}: {str(exc)}", exc_info=exc)
    return Response({'error': 'An unexpected error occurred'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
