"""
API Error Taxonomy

Domain exceptions raised by the service layer and the DRF exception handler
that renders every error as ``{'success': False, 'message': ...}``.
"""
import logging

from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ValidationError(exceptions.APIException):
    """Missing or malformed input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request'
    default_code = 'invalid'

    def __init__(self, detail=None, errors=None):
        super().__init__(detail)
        self.errors = errors


class AuthenticationError(exceptions.APIException):
    """Missing or invalid bearer token."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Not authorized to access this route'
    default_code = 'not_authenticated'


class AuthorizationError(exceptions.APIException):
    """Authenticated, but not permitted for this resource or role."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Not authorized'
    default_code = 'permission_denied'


class NotFoundError(exceptions.APIException):
    """Referenced entity does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found'
    default_code = 'not_found'


class InternalError(exceptions.APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal server error'
    default_code = 'error'


class InvalidStatusTransition(ValidationError):
    """Raised when a status change is not an edge of the lifecycle table."""
    default_detail = 'Invalid status transition'
    default_code = 'invalid_transition'


class UpstreamDeliveryError(Exception):
    """
    SMS provider failure for a single recipient.

    Raised inside gateway adapters and converted into a failed delivery
    result; it never reaches the API layer.
    """

    def __init__(self, message, phone=None, status_code=None):
        super().__init__(message)
        self.phone = phone
        self.status_code = status_code


def _message_from_detail(detail):
    """Pick a readable message out of a DRF error detail structure."""
    if isinstance(detail, (list, tuple)) and detail:
        return _message_from_detail(detail[0])
    if isinstance(detail, dict) and detail:
        return _message_from_detail(next(iter(detail.values())))
    return str(detail)


def api_exception_handler(exc, context):
    """
    DRF exception handler producing the success/message envelope.

    Known API exceptions keep their status code. Anything else is logged
    with its traceback and returned as a generic 500.
    """
    if isinstance(exc, Http404):
        exc = NotFoundError()
    elif isinstance(exc, PermissionDenied):
        exc = AuthorizationError()

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(
            f"Unhandled error in {view.__class__.__name__ if view else 'view'}: {exc}"
        )
        return Response(
            {'success': False, 'message': InternalError.default_detail},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    body = {'success': False}

    if isinstance(exc, exceptions.ValidationError):
        body['message'] = 'Validation failed'
        body['errors'] = response.data
    else:
        body['message'] = _message_from_detail(exc.detail)
        errors = getattr(exc, 'errors', None)
        if errors:
            body['errors'] = errors

    response.data = body
    return response
