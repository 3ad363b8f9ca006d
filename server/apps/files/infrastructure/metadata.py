"""Metadata utilities for file content."""

import base64
import binascii
import mimetypes
import uuid
from typing import Final

from server.apps.core.exceptions import ValidationError

_DEFAULT_MIME_TYPE: Final = 'application/octet-stream'
_TEXT_CHARSET: Final = 'utf-8'


def detect_mime_type(filename: str) -> str:
    """Detect the content type of a file from its name.

    Textual types carry a charset parameter, matching what HTTP clients
    expect for text content.

    Args:
        filename: Filename with extension.

    Returns:
        Content type (e.g., 'image/png', 'text/plain; charset=utf-8').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return _DEFAULT_MIME_TYPE
    if mime_type.startswith('text/'):
        return f'{mime_type}; charset={_TEXT_CHARSET}'
    return mime_type


def generate_storage_name() -> str:
    """Generate an opaque name for stored content.

    Client-supplied names never reach the filesystem.

    Returns:
        Random UUID string.
    """
    return str(uuid.uuid4())


def decode_payload(payload_base64: str) -> bytes:
    """Decode a base64 encoded upload payload.

    Args:
        payload_base64: Base64 text sent by the client.

    Returns:
        Decoded bytes.

    Raises:
        ValidationError: If the payload is not valid base64.
    """
    try:
        return base64.b64decode(payload_base64)
    except (binascii.Error, ValueError) as error:
        raise ValidationError('Invalid data') from error


def variant_path(storage_path: str, size: str | None = None) -> str:
    """Build the on-disk path of a content variant.

    Size variants (thumbnails) are produced by an external worker next
    to the original, named ``<path>_<size>``.

    Args:
        storage_path: Path of the original content.
        size: Requested size variant, or None for the original.

    Returns:
        Path of the requested variant.
    """
    if not size:
        return storage_path
    return f'{storage_path}_{size}'
