import logging

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class HotelServiceError(Exception):
    """Base class for errors raised by the room, booking and payment handlers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(HotelServiceError):
    """Required input is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(HotelServiceError):
    """An identifier does not resolve to a stored record."""

    status_code = status.HTTP_404_NOT_FOUND


class StoreError(HotelServiceError):
    """The backing store failed to read or write a record."""


def error_response(message, status_code):
    return Response({'success': False, 'error': message}, status=status_code)


def envelope_exception_handler(exc, context):
    """Render every handler failure in the ``{success, error}`` envelope.

    Client errors keep their own message. Store failures and anything
    unexpected become a 500 carrying the view's generic message for the
    current action; the details only go to the server log.
    """
    if isinstance(exc, (ValidationError, NotFoundError)):
        return error_response(exc.message, exc.status_code)

    if isinstance(exc, Http404):
        return error_response('Not found', status.HTTP_404_NOT_FOUND)

    if isinstance(exc, APIException):
        detail = exc.detail
        if isinstance(detail, (list, dict)):
            detail = str(detail)
        return error_response(str(detail), exc.status_code)

    view = context.get('view')
    message = 'Internal server error'
    if view is not None:
        messages = getattr(view, 'failure_messages', {})
        message = messages.get(getattr(view, 'action', None), message)

    logger.error('%s: %s', message, exc, exc_info=exc)
    return error_response(message, status.HTTP_500_INTERNAL_SERVER_ERROR)
