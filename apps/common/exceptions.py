"""
Error taxonomy shared by every app.

Service modules raise these (or app-specific subclasses from their own
``services/exceptions.py``); the DRF exception handler in
``apps.common.handlers`` renders them with the right status code.
"""
from rest_framework import exceptions as drf_exceptions
from rest_framework.exceptions import APIException


class Unauthenticated(drf_exceptions.NotAuthenticated):
    """No valid session or identity."""
    default_detail = 'Authentication required.'
    default_code = 'unauthenticated'


class Forbidden(drf_exceptions.PermissionDenied):
    """Valid identity, insufficient role or inactive account."""
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'forbidden'


class NotFound(drf_exceptions.NotFound):
    """Entity absent or soft-deleted."""
    default_detail = 'Not found.'
    default_code = 'not_found'


class DomainValidationError(APIException):
    """
    Input failed validation.

    Carries every violated field at once in ``errors`` so callers never
    have to fix problems one round trip at a time.
    """
    status_code = 400
    default_detail = 'Invalid data.'
    default_code = 'invalid'

    def __init__(self, errors=None, detail=None, code=None):
        self.errors = errors or {}
        super().__init__(detail=detail, code=code)


class Conflict(APIException):
    """Referential guard or duplicate unique key."""
    status_code = 409
    default_detail = 'The request conflicts with existing data.'
    default_code = 'conflict'


class ExternalServiceError(APIException):
    """An external collaborator failed; not retried."""
    status_code = 502
    default_detail = 'External service failed.'
    default_code = 'external_service_error'

    def __init__(self, detail=None, code=None, raw_response=None):
        self.raw_response = raw_response
        super().__init__(detail=detail, code=code)
