"""Middleware turning exceptions into JSON error responses."""

import logging
from collections.abc import Callable

from django.db import DatabaseError
from django.http import HttpRequest, HttpResponse, JsonResponse

from server.apps.core.exceptions import FilesManagerError, InfrastructureError

logger = logging.getLogger(__name__)


class ErrorResponseMiddleware:
    """Render API errors as ``{"error": message}`` bodies.

    Domain errors keep their status and message. Infrastructure failures
    (store unreachable, database or disk errors) are logged and returned
    as a generic 500 without internal details.
    """

    def __init__(
        self,
        get_response: Callable[[HttpRequest], HttpResponse],
    ) -> None:
        """Initialize the middleware.

        Args:
            get_response: Next handler in the middleware chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Pass the request through."""
        return self.get_response(request)

    def process_exception(
        self,
        request: HttpRequest,
        exception: Exception,
    ) -> HttpResponse | None:
        """Convert known exceptions raised by views.

        Args:
            request: Current request.
            exception: Exception raised by the view.

        Returns:
            JSON error response, or None to let Django handle it.
        """
        if isinstance(exception, InfrastructureError):
            logger.error(
                'Infrastructure failure on %s %s: %s',
                request.method,
                request.path,
                exception.__cause__ or exception,
            )
            return error_response(InfrastructureError())

        if isinstance(exception, FilesManagerError):
            return error_response(exception)

        if isinstance(exception, (DatabaseError, OSError)):
            logger.error(
                'Backing store failure on %s %s',
                request.method,
                request.path,
                exc_info=exception,
            )
            return error_response(InfrastructureError())

        return None


def error_response(error: FilesManagerError) -> JsonResponse:
    """Build the JSON response for an API error.

    Args:
        error: Error to render.

    Returns:
        Response with the error status and message.
    """
    return JsonResponse({'error': error.message}, status=error.status_code)
