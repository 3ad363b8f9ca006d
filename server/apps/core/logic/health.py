"""Health probes for the backing stores."""

import logging

from django.db import DatabaseError, connection

from server.apps.core.services import Services

logger = logging.getLogger(__name__)


def database_is_alive() -> bool:
    """Check that the document store accepts connections.

    Returns:
        True if a connection could be established.
    """
    try:
        connection.ensure_connection()
    except DatabaseError:
        logger.warning('Database is not reachable', exc_info=True)
        return False
    return True


def get_status(services: Services) -> dict[str, bool]:
    """Report reachability of the key-value store and the database.

    Args:
        services: Wired API services.

    Returns:
        Mapping with ``redis`` and ``db`` flags.
    """
    return {
        'redis': services.session_store.is_alive(),
        'db': database_is_alive(),
    }


def get_stats(services: Services) -> dict[str, int]:
    """Count users and file nodes.

    Args:
        services: Wired API services.

    Returns:
        Mapping with ``users`` and ``files`` counts.

    Raises:
        DatabaseError: If the database cannot be queried.
    """
    return {
        'users': services.user_directory.count(),
        'files': services.file_hierarchy.count(),
    }
