# exceptions.py
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
from django.core.exceptions import ValidationError
from django.db import IntegrityError
import logging
from django.conf import settings

logger = logging.getLogger(__name__)

DEFAULT_MESSAGES = {
    400: 'Validation error',
    401: 'Authentication required',
    403: 'Permission denied',
    404: 'Resource not found',
    409: 'Conflict',
    500: 'Internal server error',
    502: 'Upstream service error',
}


def custom_exception_handler(exc, context):
    """
    Wrap every API error as {error, message, details, status_code}.

    Errors raised with a plain string detail (domain errors such as a failed
    order insert or a gateway failure) keep that string as the message so the
    client can show it as is.
    """
    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        custom_response_data = {
            'error': True,
            'message': DEFAULT_MESSAGES.get(response.status_code, 'An error occurred'),
            'details': response.data,
            'status_code': response.status_code
        }

        if isinstance(response.data, dict):
            detail = response.data.get('detail')
        elif isinstance(response.data, list) and response.data:
            # ValidationError raised with a message instead of field errors
            detail = response.data[0]
        else:
            detail = None
        if isinstance(detail, str):
            custom_response_data['message'] = str(detail)

        response.data = custom_response_data

    # Handle Django ValidationError
    elif isinstance(exc, ValidationError):
        logger.error(f"Validation Error: {exc}")
        response = Response({
            'error': True,
            'message': 'Validation error',
            'details': {'non_field_errors': exc.messages},
            'status_code': 400
        }, status=status.HTTP_400_BAD_REQUEST)

    # Handle Django IntegrityError
    elif isinstance(exc, IntegrityError):
        logger.error(f"Integrity Error: {exc}")
        response = Response({
            'error': True,
            'message': 'Database integrity error',
            'details': {'error': 'This operation violates database constraints'},
            'status_code': 400
        }, status=status.HTTP_400_BAD_REQUEST)

    # Handle unexpected errors
    else:
        logger.exception(f"Unexpected Error: {exc}")
        response = Response({
            'error': True,
            'message': 'An unexpected error occurred',
            'details': {'error': str(exc)} if settings.DEBUG else {},
            'status_code': 500
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return response
