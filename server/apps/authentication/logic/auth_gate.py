"""Resolution of the API caller from request credentials.

Two credential forms are supported, tried in this order:

1. ``X-Token`` header with a session token issued by ``/connect``
2. ``Authorization: Basic base64(email:password)``, consulted only when
   no session token was supplied
"""

import base64
import binascii
import logging
from typing import TYPE_CHECKING, Final, final

from django.http import HttpRequest

from server.apps.authentication.logic.session_store import SessionStore
from server.apps.authentication.request import AuthenticatedRequest
from server.apps.core.exceptions import AuthenticationError
from server.apps.users.logic.user_directory import UserDirectory

if TYPE_CHECKING:
    from django.contrib.auth.models import User

logger = logging.getLogger(__name__)

# WSGI environ keys of the credential headers
TOKEN_HEADER: Final = 'HTTP_X_TOKEN'
AUTHORIZATION_HEADER: Final = 'HTTP_AUTHORIZATION'

_BASIC_SCHEME: Final = 'basic'


def parse_basic_credentials(authorization: str) -> tuple[str, str] | None:
    """Decode an HTTP Basic ``Authorization`` header value.

    Args:
        authorization: Header value, e.g. ``Basic Ym9iQGR5bGFuLmNvbTp0b3Rv``.

    Returns:
        ``(email, password)`` split on the first colon, or None when the
        header is malformed or either part is empty.
    """
    parts = authorization.split(maxsplit=1)
    if len(parts) != 2 or parts[0].lower() != _BASIC_SCHEME:
        return None

    try:
        decoded = base64.b64decode(parts[1], validate=True).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError):
        return None

    email, separator, password = decoded.partition(':')
    if not separator or not email or not password:
        return None
    return email, password


@final
class AuthGate:
    """Request-level authenticator."""

    def __init__(
        self,
        session_store: SessionStore,
        user_directory: UserDirectory,
    ) -> None:
        """Initialize the gate.

        Args:
            session_store: Store of session tokens.
            user_directory: Directory of user records.
        """
        self._sessions = session_store
        self._users = user_directory

    def authenticate(self, request: HttpRequest) -> AuthenticatedRequest:
        """Resolve the caller from a session token or Basic credentials.

        Args:
            request: Incoming HTTP request.

        Returns:
            Request carrying the resolved user.

        Raises:
            AuthenticationError: If neither credential form authenticates.
        """
        auth = self.identify(request)
        if auth.is_anonymous:
            logger.warning('Unauthenticated request to %s', request.path)
            raise AuthenticationError()
        return auth

    def identify(self, request: HttpRequest) -> AuthenticatedRequest:
        """Resolve the caller without failing on missing credentials.

        Args:
            request: Incoming HTTP request.

        Returns:
            Request carrying the user, or no user for anonymous callers.

        Raises:
            InfrastructureError: If the session store is unreachable.
        """
        token = request.META.get(TOKEN_HEADER)
        if token:
            return AuthenticatedRequest(
                http=request,
                user=self._user_from_token(token),
                token=token,
            )

        authorization = request.META.get(AUTHORIZATION_HEADER)
        if authorization:
            return AuthenticatedRequest(
                http=request,
                user=self._user_from_basic(authorization),
            )

        return AuthenticatedRequest(http=request)

    def authenticate_basic(self, request: HttpRequest) -> AuthenticatedRequest:
        """Resolve the caller from Basic credentials only.

        Args:
            request: Incoming HTTP request.

        Returns:
            Request carrying the resolved user.

        Raises:
            AuthenticationError: If the credentials are missing or wrong.
        """
        authorization = request.META.get(AUTHORIZATION_HEADER, '')
        user = self._user_from_basic(authorization) if authorization else None
        if user is None:
            raise AuthenticationError()
        return AuthenticatedRequest(http=request, user=user)

    def authenticate_token(self, request: HttpRequest) -> AuthenticatedRequest:
        """Resolve the caller from the session token only.

        Args:
            request: Incoming HTTP request.

        Returns:
            Request carrying the resolved user and its token.

        Raises:
            AuthenticationError: If the token is missing or invalid.
        """
        token = request.META.get(TOKEN_HEADER, '')
        user = self._user_from_token(token) if token else None
        if user is None:
            raise AuthenticationError()
        return AuthenticatedRequest(http=request, user=user, token=token)

    def _user_from_token(self, token: str) -> 'User | None':
        user_id = self._sessions.resolve(token)
        if user_id is None:
            logger.debug('Unknown or expired session token: %s', token[:8])
            return None
        # A token can outlive its user
        return self._users.get_by_id(user_id)

    def _user_from_basic(self, authorization: str) -> 'User | None':
        credentials = parse_basic_credentials(authorization)
        if credentials is None:
            logger.warning('Malformed Basic authorization header')
            return None
        email, password = credentials
        return self._users.verify_credentials(email, password)
