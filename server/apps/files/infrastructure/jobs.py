"""Dispatch of background jobs to external workers."""

import logging
from typing import Final, final

from celery import Celery

logger = logging.getLogger(__name__)

# Task implemented by the thumbnail generation worker
THUMBNAIL_TASK: Final = 'files.generate_thumbnails'


@final
class JobDispatcher:
    """Fire-and-forget publisher of job descriptors.

    Delivery is best-effort: failures are logged and never reach the
    caller.
    """

    def __init__(self, celery_app: Celery, queue: str) -> None:
        """Initialize the dispatcher.

        Args:
            celery_app: Celery application connected to the broker.
            queue: Queue consumed by the thumbnail worker.
        """
        self._app = celery_app
        self._queue = queue

    def request_thumbnails(self, owner_id: int, file_id: int) -> bool:
        """Ask the worker to generate thumbnails of an image.

        Args:
            owner_id: Owner of the image.
            file_id: Id of the image node.

        Returns:
            True if the job was handed to the broker.
        """
        try:
            self._app.send_task(
                THUMBNAIL_TASK,
                kwargs={'userId': str(owner_id), 'fileId': str(file_id)},
                queue=self._queue,
            )
        except Exception:
            # Best-effort: the upload already succeeded
            logger.exception(
                'Failed to enqueue thumbnail job [%d-%d]',
                owner_id,
                file_id,
            )
            return False

        logger.info('Thumbnail job enqueued [%d-%d]', owner_id, file_id)
        return True
