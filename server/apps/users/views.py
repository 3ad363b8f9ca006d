"""User endpoints."""

from typing import TYPE_CHECKING

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from server.apps.authentication.decorators import authentication_required
from server.apps.authentication.request import AuthenticatedRequest
from server.apps.core.http import read_json_body
from server.apps.core.services import get_services

if TYPE_CHECKING:
    from django.contrib.auth.models import User


def _user_json(user: 'User') -> dict[str, str]:
    return {'id': str(user.pk), 'email': user.email}


@csrf_exempt
@require_POST
def create_user(request: HttpRequest) -> JsonResponse:
    """POST /users: sign up with email and password."""
    body = read_json_body(request)
    user = get_services().user_directory.register(
        body.get('email'),
        body.get('password'),
    )
    return JsonResponse(_user_json(user), status=201)


@require_GET
@authentication_required
def me(auth: AuthenticatedRequest) -> JsonResponse:
    """GET /users/me: the authenticated caller."""
    return JsonResponse(_user_json(auth.require_user()))
