"""Explicit request value carrying the resolved caller."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, final

from django.http import HttpRequest

from server.apps.core.exceptions import AuthenticationError

if TYPE_CHECKING:
    from django.contrib.auth.models import User


@final
@dataclass(frozen=True, slots=True)
class AuthenticatedRequest:
    """An HTTP request together with the caller resolved by AuthGate.

    ``user`` is None for anonymous callers. ``token`` is the session
    token the caller authenticated with, if any.
    """

    http: HttpRequest
    user: 'User | None' = None
    token: str | None = None

    @property
    def is_anonymous(self) -> bool:
        """Whether no caller could be resolved."""
        return self.user is None

    def require_user(self) -> 'User':
        """Return the caller or fail.

        Returns:
            Resolved user.

        Raises:
            AuthenticationError: If the request is anonymous.
        """
        if self.user is None:
            raise AuthenticationError()
        return self.user

    def is_owner_of(self, owner_id: int) -> bool:
        """Whether the caller is the given owner.

        Args:
            owner_id: Owner user id of a resource.

        Returns:
            True for the owner, False for others and anonymous callers.
        """
        return self.user is not None and self.user.pk == owner_id
