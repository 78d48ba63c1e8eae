from rest_framework import serializers, status

from apps.common.exceptions import Conflict, DomainValidationError, ExternalServiceError, NotFound
from apps.common.handlers import api_exception_handler


class TestApiExceptionHandler:

    def test_domain_validation_keeps_every_field(self):
        exc = DomainValidationError(
            errors={'date': ['Invalid date.'], 'line_items': [{'quantity': ['Too small.']}]},
            detail='Purchase data is invalid.',
        )

        response = api_exception_handler(exc, {})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Purchase data is invalid.'
        assert set(response.data['details']) == {'date', 'line_items'}

    def test_conflict(self):
        response = api_exception_handler(Conflict('Category is in use.'), {})

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data == {'error': 'Category is in use.'}

    def test_not_found(self):
        response = api_exception_handler(NotFound(), {})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Not found.'}

    def test_external_service_carries_raw_response(self):
        exc = ExternalServiceError(detail='Failed to parse invoice data', raw_response='???')

        response = api_exception_handler(exc, {})

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data == {'error': 'Failed to parse invoice data', 'raw_response': '???'}

    def test_serializer_errors(self):
        exc = serializers.ValidationError({'name': ['This field is required.']})

        response = api_exception_handler(exc, {})

        assert response.data == {
            'error': 'Invalid data.',
            'details': {'name': ['This field is required.']},
        }

    def test_unhandled_error_is_generic(self):
        response = api_exception_handler(RuntimeError('db password is hunter2'), {})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {'error': 'Internal server error'}
