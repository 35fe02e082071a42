"""
Custom exceptions and DRF exception handler for the onboarding backend.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ClientNotFoundError(APIException):
    """Raised when a client does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Client not found.'
    default_code = 'client_not_found'


class DuplicateEmailError(APIException):
    """Raised when registering an email that is already in use."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = 'A client with this email already exists.'
    default_code = 'duplicate_email'


class InvalidCredentialsError(APIException):
    """Raised when login credentials do not match a client."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Invalid email or password.'
    default_code = 'invalid_credentials'


class PersistenceFailure(Exception):
    """
    Raised by a profile gateway when saving a wizard step fails.

    The wizard treats it as retryable: the in-memory draft is kept.
    """

    def __init__(self, message, step=None):
        super().__init__(message)
        self.step = step


class WizardStateError(Exception):
    """Raised on a programming error against the wizard state machine."""

    pass


def custom_exception_handler(exc, context):
    """
    Custom DRF exception handler that returns consistent error responses.

    Handles all DRF exceptions and adds logging for server errors.
    """
    response = exception_handler(exc, context)

    if response is not None:
        error_data = {
            'error': True,
            'status_code': response.status_code,
            'detail': response.data,
        }
        response.data = error_data
    else:
        logger.exception(
            "Unhandled exception in %s",
            context.get('view', 'unknown'),
            exc_info=exc,
        )
        response = Response(
            {
                'error': True,
                'status_code': 500,
                'detail': 'An unexpected error occurred. Please try again later.',
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return response
