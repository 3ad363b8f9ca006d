"""Session endpoints: log in with Basic credentials, log out with a token."""

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.http import require_GET

from server.apps.core.services import get_services


@require_GET
def connect(request: HttpRequest) -> JsonResponse:
    """GET /connect: exchange Basic credentials for a session token."""
    services = get_services()
    auth = services.auth_gate.authenticate_basic(request)
    token = services.session_store.issue(auth.require_user().pk)
    return JsonResponse({'token': token})


@require_GET
def disconnect(request: HttpRequest) -> HttpResponse:
    """GET /disconnect: revoke the session token of the caller."""
    services = get_services()
    auth = services.auth_gate.authenticate_token(request)
    services.session_store.revoke(auth.token or '')
    return HttpResponse(status=204)
