"""Filesystem storage of uploaded file content."""

import logging
from pathlib import Path
from typing import Any, final, override

from django.core.files.base import ContentFile
from django.core.files.storage import FileSystemStorage

from server.apps.files.infrastructure.metadata import (
    decode_payload,
    generate_storage_name,
    variant_path,
)

logger = logging.getLogger(__name__)


@final
class FileStorage(FileSystemStorage):
    """Local filesystem storage backend for user files.

    Extends Django's FileSystemStorage with enhanced error logging.
    The storage root is created on first write.
    """

    @override
    def save(
        self,
        name: str | None,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Save file to disk with error handling and logging.

        Args:
            name: Storage name for the file.
            content: File content (file-like object).
            max_length: Optional maximum length for the filename.

        Returns:
            Actual storage name used.

        Raises:
            OSError: If writing to disk fails.
        """
        try:
            logger.info('Writing file to storage: %s', name)
            saved_name = super().save(name, content, max_length)
            logger.info('Successfully wrote file: %s', saved_name)
        except OSError:
            logger.exception('Failed to write file to storage: %s', name)
            raise
        else:
            return saved_name


@final
class ContentService:
    """Maps file nodes to their byte payload on disk.

    Does not own any metadata: callers keep the returned storage path
    and hand it back for reads.
    """

    def __init__(self, storage: FileSystemStorage) -> None:
        """Initialize the service.

        Args:
            storage: Filesystem storage rooted at the content directory.
        """
        self._storage = storage

    def store(self, payload_base64: str, name: str) -> str:
        """Decode a base64 payload and write it under a fresh opaque name.

        Args:
            payload_base64: Base64 encoded content.
            name: Client-supplied file name, used for logging only.

        Returns:
            Absolute path of the stored content.

        Raises:
            ValidationError: If the payload is not valid base64.
            OSError: If writing to disk fails.
        """
        content = decode_payload(payload_base64)
        saved_name = self._storage.save(
            generate_storage_name(),
            ContentFile(content),
        )
        storage_path = self._storage.path(saved_name)
        logger.info(
            'Stored content of %s (%d bytes) at %s',
            name,
            len(content),
            storage_path,
        )
        return storage_path

    def read(self, storage_path: str, size: str | None = None) -> bytes | None:
        """Read stored content, or one of its size variants.

        Args:
            storage_path: Path returned by ``store``.
            size: Size variant suffix, or None for the original.

        Returns:
            File bytes, or None if nothing exists at that path.

        Raises:
            OSError: If the file exists but cannot be read.
        """
        path = Path(variant_path(storage_path, size))
        try:
            return path.read_bytes()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            logger.info('No content on disk at %s', path)
            return None
