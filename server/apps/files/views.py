"""File endpoints of the JSON API."""

from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from server.apps.authentication.decorators import (
    authentication_optional,
    authentication_required,
)
from server.apps.authentication.request import AuthenticatedRequest
from server.apps.core.exceptions import NotFoundError
from server.apps.core.http import read_json_body
from server.apps.core.services import get_services
from server.apps.files.logic.file_operations import PublicFile


@csrf_exempt
@require_http_methods(['GET', 'POST'])
@authentication_required
def files(auth: AuthenticatedRequest) -> JsonResponse:
    """GET /files lists a page of nodes, POST /files creates one."""
    if auth.http.method == 'POST':
        return _create_file(auth)
    return _list_files(auth)


def _create_file(auth: AuthenticatedRequest) -> JsonResponse:
    body = read_json_body(auth.http)
    created = get_services().file_hierarchy.create(
        auth.require_user(),
        name=body.get('name'),
        file_type=body.get('type'),
        parent_id=body.get('parentId'),
        is_public=body.get('isPublic', False),
        data=body.get('data'),
    )
    return JsonResponse(created.as_json(), status=201)


def _list_files(auth: AuthenticatedRequest) -> JsonResponse:
    page = get_services().file_hierarchy.list_children(
        auth.require_user().pk,
        parent_id=auth.http.GET.get('parentId'),
        page=auth.http.GET.get('page', 0),
    )
    return JsonResponse([item.as_json() for item in page], safe=False)


@require_GET
@authentication_required
def file_detail(auth: AuthenticatedRequest, file_id: str) -> JsonResponse:
    """GET /files/:id: a node owned by the caller."""
    node = get_services().file_hierarchy.get_owned(
        file_id,
        auth.require_user().pk,
    )
    if node is None:
        raise NotFoundError()
    return JsonResponse(PublicFile.from_node(node).as_json())


@csrf_exempt
@require_http_methods(['PUT'])
@authentication_required
def publish(auth: AuthenticatedRequest, file_id: str) -> JsonResponse:
    """PUT /files/:id/publish: make a node readable by anyone."""
    updated = get_services().file_hierarchy.set_visibility(
        file_id,
        auth.require_user().pk,
        is_public=True,
    )
    return JsonResponse(updated.as_json())


@csrf_exempt
@require_http_methods(['PUT'])
@authentication_required
def unpublish(auth: AuthenticatedRequest, file_id: str) -> JsonResponse:
    """PUT /files/:id/unpublish: make a node readable by its owner only."""
    updated = get_services().file_hierarchy.set_visibility(
        file_id,
        auth.require_user().pk,
        is_public=False,
    )
    return JsonResponse(updated.as_json())


@require_GET
@authentication_optional
def file_data(auth: AuthenticatedRequest, file_id: str) -> HttpResponse:
    """GET /files/:id/data: raw content, public nodes need no credentials."""
    content = get_services().file_hierarchy.get_content(
        file_id,
        auth,
        size=auth.http.GET.get('size'),
    )
    return HttpResponse(content.data, content_type=content.content_type)
