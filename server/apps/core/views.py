"""Health and statistics endpoints."""

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET

from server.apps.core.logic.health import get_stats, get_status
from server.apps.core.services import get_services


@require_GET
def status(request: HttpRequest) -> JsonResponse:
    """GET /status: reachability of the backing stores."""
    return JsonResponse(get_status(get_services()))


@require_GET
def stats(request: HttpRequest) -> JsonResponse:
    """GET /stats: number of users and files."""
    return JsonResponse(get_stats(get_services()))
