"""Helpers for JSON request bodies."""

import json
from typing import Any

from django.http import HttpRequest

from server.apps.core.exceptions import ValidationError


def read_json_body(request: HttpRequest) -> dict[str, Any]:
    """Parse the request body as a JSON object.

    An empty body is treated as an empty object.

    Args:
        request: Incoming HTTP request.

    Returns:
        Decoded JSON object.

    Raises:
        ValidationError: If the body is not a JSON object.
    """
    if not request.body:
        return {}
    try:
        body = json.loads(request.body)
    except (UnicodeDecodeError, json.JSONDecodeError) as error:
        raise ValidationError('Invalid JSON') from error
    if not isinstance(body, dict):
        raise ValidationError('Invalid JSON')
    return body
