"""Construction and wiring of the API components.

Components never reach for global store clients themselves: they are
built here from settings and receive their collaborators explicitly.
The process entry point owns the lifecycle through ``get_services`` and
``close_services``.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Final, final

from django.conf import settings
from django.core.cache import caches
from django.core.files.storage import storages
from django.db import connections

from server.apps.authentication.logic.auth_gate import AuthGate
from server.apps.authentication.logic.session_store import SessionStore
from server.apps.files.infrastructure.jobs import JobDispatcher
from server.apps.files.infrastructure.storage import ContentService
from server.apps.files.logic.file_operations import FileHierarchy
from server.apps.users.logic.user_directory import UserDirectory
from server.celery import app as celery_app

logger = logging.getLogger(__name__)

# Settings that change how components are built
SERVICE_SETTINGS: Final = frozenset((
    'CACHES',
    'FILES_PAGE_SIZE',
    'SESSION_CACHE_ALIAS',
    'SESSION_TTL',
    'STORAGES',
    'THUMBNAIL_QUEUE',
))

_lock = threading.Lock()
_services: 'Services | None' = None


@final
@dataclass(frozen=True, slots=True)
class Services:
    """Every component of the API, wired together."""

    session_store: SessionStore
    user_directory: UserDirectory
    auth_gate: AuthGate
    content_service: ContentService
    job_dispatcher: JobDispatcher
    file_hierarchy: FileHierarchy

    def close(self) -> None:
        """Release connections held by the backing stores."""
        self.session_store.close()
        connections.close_all()


def build_services() -> Services:
    """Build all components from the current settings.

    Returns:
        Freshly wired services.
    """
    session_store = SessionStore(
        caches[settings.SESSION_CACHE_ALIAS],
        ttl_seconds=settings.SESSION_TTL,
    )
    user_directory = UserDirectory()
    content_service = ContentService(
        storages.create_storage(settings.STORAGES['default']),
    )
    job_dispatcher = JobDispatcher(
        celery_app,
        queue=settings.THUMBNAIL_QUEUE,
    )
    return Services(
        session_store=session_store,
        user_directory=user_directory,
        auth_gate=AuthGate(session_store, user_directory),
        content_service=content_service,
        job_dispatcher=job_dispatcher,
        file_hierarchy=FileHierarchy(
            content_service,
            job_dispatcher,
            page_size=settings.FILES_PAGE_SIZE,
        ),
    )


def get_services() -> Services:
    """Return the process-wide services, building them on first use.

    Returns:
        Wired services.
    """
    global _services  # noqa: WPS420
    if _services is None:
        with _lock:
            if _services is None:
                logger.debug('Building API services')
                _services = build_services()  # noqa: WPS442
    return _services


def close_services() -> None:
    """Close backing store connections and forget the services."""
    global _services  # noqa: WPS420
    with _lock:
        if _services is not None:
            logger.info('Closing API services')
            _services.close()
            _services = None  # noqa: WPS442


def reset_services() -> None:
    """Forget the services so they are rebuilt from settings."""
    global _services  # noqa: WPS420
    with _lock:
        _services = None  # noqa: WPS442
