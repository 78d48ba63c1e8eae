import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .exceptions import DomainValidationError, ExternalServiceError

logger = logging.getLogger(__name__)


def _view_name(context):
    view = context.get('view')
    return view.__class__.__name__ if view is not None else 'unknown view'


def api_exception_handler(exc, context):
    """
    Render every API error as ``{"error": ..., "details": ...}``.

    Unhandled exceptions are logged with traceback and answered with a
    generic 500 body so no internals reach the client.
    """
    response = exception_handler(exc, context)

    if response is None:
        logger.error('Unhandled error in %s', _view_name(context), exc_info=exc)
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, DomainValidationError):
        body = {'error': str(exc.detail), 'details': exc.errors}
    elif isinstance(exc, ExternalServiceError):
        body = {'error': str(exc.detail), 'raw_response': exc.raw_response}
    elif isinstance(response.data, dict) and set(response.data) == {'detail'}:
        body = {'error': str(response.data['detail'])}
    else:
        # Serializer errors: field -> messages
        body = {'error': 'Invalid data.', 'details': response.data}

    if response.status_code >= 500:
        logger.error('%s failed: %s', _view_name(context), exc)
    elif response.status_code in (401, 403):
        logger.info('%s denied: %s', _view_name(context), exc)
    else:
        logger.warning('%s rejected request: %s', _view_name(context), exc)

    response.data = body
    return response
