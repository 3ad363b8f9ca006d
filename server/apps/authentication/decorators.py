"""View decorators passing the resolved caller to API views."""

from collections.abc import Callable
from functools import wraps
from typing import Any

from django.http import HttpRequest, HttpResponse

from server.apps.core.services import get_services

_AuthView = Callable[..., HttpResponse]


def authentication_required(view: _AuthView) -> Callable[..., HttpResponse]:
    """Call the view with an authenticated caller, or fail with 401.

    The wrapped view receives an ``AuthenticatedRequest`` instead of the
    bare ``HttpRequest``.
    """
    @wraps(view)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        auth = get_services().auth_gate.authenticate(request)
        return view(auth, *args, **kwargs)
    return wrapper


def authentication_optional(view: _AuthView) -> Callable[..., HttpResponse]:
    """Call the view with the caller if any, anonymous otherwise."""
    @wraps(view)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        auth = get_services().auth_gate.identify(request)
        return view(auth, *args, **kwargs)
    return wrapper
