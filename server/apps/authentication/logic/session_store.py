"""Session tokens for API clients.

Maps opaque random tokens to user ids in the key-value store. Token
lifetime is owned by the store through per-key expiration.
"""

import logging
import secrets
from typing import Final, final

from django.core.cache.backends.base import BaseCache
from redis.exceptions import RedisError

from server.apps.core.exceptions import InfrastructureError

logger = logging.getLogger(__name__)

# Token length in bytes (generates 32 hex chars)
_TOKEN_BYTES: Final = 16
_KEY_PREFIX: Final = 'auth_'
_ISSUE_ATTEMPTS: Final = 3
_PING_KEY: Final = 'auth__ping'

DEFAULT_TTL: Final = 24 * 60 * 60


def _key(token: str) -> str:
    return f'{_KEY_PREFIX}{token}'


@final
class SessionStore:
    """Token to user id mapping with expiration."""

    def __init__(self, cache: BaseCache, ttl_seconds: int = DEFAULT_TTL) -> None:
        """Initialize the store.

        Args:
            cache: Cache backend of the key-value store.
            ttl_seconds: Default lifetime of issued tokens.
        """
        self._cache = cache
        self._ttl = ttl_seconds

    def issue(self, user_id: int, ttl_seconds: int | None = None) -> str:
        """Create a session token for the user.

        Args:
            user_id: Id of the authenticated user.
            ttl_seconds: Token lifetime, defaults to the store's TTL.

        Returns:
            New opaque token.

        Raises:
            InfrastructureError: If the store is unreachable or no free
                token could be drawn.
        """
        timeout = self._ttl if ttl_seconds is None else ttl_seconds
        for _attempt in range(_ISSUE_ATTEMPTS):
            token = secrets.token_hex(_TOKEN_BYTES)
            try:
                stored = self._cache.add(_key(token), str(user_id), timeout)
            except RedisError as error:
                logger.exception('Failed to store session token')
                raise InfrastructureError() from error
            if stored:
                logger.info(
                    'Session issued for user %d: %s',
                    user_id,
                    token[:8],
                )
                return token
            logger.warning('Session token collision: %s', token[:8])

        raise InfrastructureError()

    def resolve(self, token: str) -> int | None:
        """Get the user id a token belongs to.

        Args:
            token: Session token.

        Returns:
            User id, or None if the token was never issued or expired.

        Raises:
            InfrastructureError: If the store is unreachable.
        """
        if not token:
            return None
        try:
            user_id = self._cache.get(_key(token))
        except RedisError as error:
            logger.exception('Failed to resolve session token')
            raise InfrastructureError() from error

        if user_id is None:
            return None
        return int(user_id)

    def revoke(self, token: str) -> bool:
        """Delete a token. Revoking an unknown token is not an error.

        Args:
            token: Session token.

        Returns:
            True if a mapping existed and was deleted.

        Raises:
            InfrastructureError: If the store is unreachable.
        """
        if not token:
            return False
        try:
            deleted = self._cache.delete(_key(token))
        except RedisError as error:
            logger.exception('Failed to revoke session token')
            raise InfrastructureError() from error

        if deleted:
            logger.info('Session revoked: %s', token[:8])
        return bool(deleted)

    def is_alive(self) -> bool:
        """Check that the key-value store answers.

        Returns:
            True if a read round trip succeeded.
        """
        try:
            self._cache.get(_PING_KEY)
        except RedisError:
            logger.warning('Key-value store is not reachable', exc_info=True)
            return False
        return True

    def close(self) -> None:
        """Close the connection to the key-value store."""
        self._cache.close()
