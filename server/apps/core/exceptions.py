"""Error taxonomy shared by every app of the API.

Each error carries the HTTP status it maps to and a message that is
safe to show to the caller.
"""

from typing import ClassVar


class FilesManagerError(Exception):
    """Base class for errors rendered by the API."""

    status_code: ClassVar[int] = 500
    default_message: ClassVar[str] = 'Internal server error'

    def __init__(self, message: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Public message, defaults to the class message.
        """
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(FilesManagerError):
    """Request is well-formed but cannot be served as asked."""

    status_code = 400
    default_message = 'Bad request'


class ValidationError(BadRequestError):
    """Missing or invalid field, or invalid parent reference."""

    default_message = 'Invalid request'


class ConflictError(BadRequestError):
    """Resource already exists (e.g. duplicate email)."""

    default_message = 'Already exist'


class AuthenticationError(FilesManagerError):
    """Missing or invalid credentials or session token."""

    status_code = 401
    default_message = 'Unauthorized'


class NotFoundError(FilesManagerError):
    """Resource is absent, or private and not owned by the caller.

    Both cases share one shape so private resources do not leak.
    """

    status_code = 404
    default_message = 'Not found'


class InfrastructureError(FilesManagerError):
    """A backing store is unreachable or timed out."""

    status_code = 500
    default_message = 'Internal server error'
