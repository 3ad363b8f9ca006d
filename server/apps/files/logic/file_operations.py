"""Business logic for file node operations."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final, final

from django.db import DatabaseError

from server.apps.core.exceptions import (
    BadRequestError,
    NotFoundError,
    ValidationError,
)
from server.apps.files.infrastructure.jobs import JobDispatcher
from server.apps.files.infrastructure.metadata import detect_mime_type
from server.apps.files.infrastructure.storage import ContentService
from server.apps.files.logic.parents import (
    MalformedParentError,
    NodeId,
    ParentRef,
    parent_ref_of,
    parse_parent_ref,
    to_wire,
)
from server.apps.files.models import FileNode, FileType

if TYPE_CHECKING:
    from django.contrib.auth.models import User

    from server.apps.authentication.request import AuthenticatedRequest

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE: Final = 20

# Largest LIMIT/OFFSET the database accepts (signed 64-bit)
_MAX_OFFSET: Final = 2 ** 63 - 1


@final
@dataclass(frozen=True, slots=True)
class PublicFile:
    """Externally visible fields of a file node.

    The on-disk path of the content is deliberately absent.
    """

    id: int  # noqa: WPS125
    owner_id: int
    name: str
    type: str  # noqa: WPS125
    is_public: bool
    parent: ParentRef

    @classmethod
    def from_node(cls, node: FileNode) -> 'PublicFile':
        """Project a file node.

        Args:
            node: Persisted file node.

        Returns:
            Public projection of the node.
        """
        return cls(
            id=node.pk,
            owner_id=node.owner_id,
            name=node.name,
            type=node.type,
            is_public=node.is_public,
            parent=parent_ref_of(node.parent_id),
        )

    def as_json(self) -> dict[str, Any]:
        """Render the projection for API responses.

        Returns:
            JSON-serializable mapping.
        """
        return {
            'id': str(self.id),
            'userId': str(self.owner_id),
            'name': self.name,
            'type': self.type,
            'isPublic': self.is_public,
            'parentId': to_wire(self.parent),
        }


@final
@dataclass(frozen=True, slots=True)
class FileContent:
    """Bytes of a file together with their content type."""

    data: bytes
    content_type: str


def _positive_int(raw: object) -> int | None:
    """Parse a positive integer such as a node id or a size variant.

    Args:
        raw: Candidate value from a URL or request.

    Returns:
        Positive integer, or None for anything else.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw > 0 else None
    if isinstance(raw, str) and raw.isascii() and raw.isdigit():
        value = int(raw)
        return value if value > 0 else None
    return None


def _parse_page(raw: object) -> int:
    """Parse a zero-based page number, falling back to the first page.

    Args:
        raw: Page number from the query string.

    Returns:
        Non-negative page number.
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        return max(raw, 0)
    if isinstance(raw, str) and raw.isascii() and raw.isdigit():
        return int(raw)
    return 0


@final
class FileHierarchy:
    """Owner of file node records.

    Enforces ownership and visibility of nodes, validates the parent
    hierarchy and delegates content bytes to the content service.
    """

    def __init__(
        self,
        content_service: ContentService,
        job_dispatcher: JobDispatcher,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """Initialize the hierarchy.

        Args:
            content_service: Storage of file content.
            job_dispatcher: Publisher of thumbnail jobs.
            page_size: Maximum number of nodes per listing page.
        """
        self._content = content_service
        self._jobs = job_dispatcher
        self._page_size = page_size

    def create(  # noqa: WPS211
        self,
        caller: 'User',
        name: object,
        file_type: object,
        parent_id: object = None,
        is_public: object = False,
        data: object = None,
    ) -> PublicFile:
        """Create a folder, file or image owned by the caller.

        Files and images are written to disk first, then their metadata
        is saved. If saving metadata fails, the written content is left
        on disk and the error propagates.

        Args:
            caller: Authenticated owner of the new node.
            name: Node name.
            file_type: One of ``folder``, ``file`` or ``image``.
            parent_id: Raw parent id, root when missing or ``0``.
            is_public: Whether the node is readable by anyone.
            data: Base64 content, required unless creating a folder.

        Returns:
            Public projection of the created node.

        Raises:
            ValidationError: If a field is missing or invalid, or the
                parent is not an existing folder.
        """
        if not name or not isinstance(name, str):
            raise ValidationError('Missing name')
        if not isinstance(file_type, str) or file_type not in FileType.values:
            raise ValidationError('Missing type')
        if file_type != FileType.FOLDER and (not data or not isinstance(data, str)):
            raise ValidationError('Missing data')
        if not isinstance(is_public, bool):
            raise ValidationError('Invalid isPublic')

        node = FileNode(
            owner=caller,
            name=name,
            type=file_type,
            parent=self._resolve_parent(parent_id),
            is_public=is_public,
        )

        if not node.is_folder:
            node.local_path = self._content.store(str(data), name)

        try:
            node.save()
        except DatabaseError:
            if node.local_path:
                logger.exception(
                    'Failed to save file metadata, orphaned content: %s',
                    node.local_path,
                )
            raise

        logger.info(
            'Created %s %s for user %d (ID: %d)',
            node.type,
            node.name,
            caller.pk,
            node.pk,
        )

        if node.type == FileType.IMAGE:
            self._jobs.request_thumbnails(caller.pk, node.pk)

        return PublicFile.from_node(node)

    def get_by_id(self, file_id: object) -> FileNode | None:
        """Get a node by id regardless of its owner.

        Args:
            file_id: Raw node id.

        Returns:
            FileNode if found, None otherwise.
        """
        node_id = _positive_int(file_id)
        if node_id is None:
            return None
        return FileNode.objects.filter(pk=node_id).first()

    def get_owned(self, file_id: object, caller_id: int) -> FileNode | None:
        """Get a node by id only if the caller owns it.

        Args:
            file_id: Raw node id.
            caller_id: Id of the caller.

        Returns:
            FileNode if found and owned by the caller, None otherwise.
        """
        node_id = _positive_int(file_id)
        if node_id is None:
            return None
        return FileNode.objects.filter(pk=node_id, owner_id=caller_id).first()

    def list_children(
        self,
        caller_id: int,
        parent_id: object = None,
        page: object = 0,
    ) -> list[PublicFile]:
        """List one page of the caller's nodes under a parent.

        The root matches only nodes at the top level. Nodes are ordered
        by creation (id), so pages are stable while data is unchanged.

        Args:
            caller_id: Id of the caller.
            parent_id: Raw parent id, root when missing or ``0``.
            page: Zero-based page number.

        Returns:
            Up to ``page_size`` public projections. A malformed parent id
            or a page beyond any possible node matches nothing.
        """
        try:
            parent = parse_parent_ref(parent_id)
        except MalformedParentError:
            logger.debug('Listing with malformed parent id: %r', parent_id)
            return []

        queryset = FileNode.objects.filter(owner_id=caller_id)
        if isinstance(parent, NodeId):
            queryset = queryset.filter(parent_id=parent.value)
        else:
            queryset = queryset.filter(parent__isnull=True)

        offset = _parse_page(page) * self._page_size
        if offset + self._page_size > _MAX_OFFSET:
            return []
        nodes = queryset.order_by('id')[offset:offset + self._page_size]
        return [PublicFile.from_node(node) for node in nodes]

    def set_visibility(
        self,
        file_id: object,
        caller_id: int,
        is_public: bool,
    ) -> PublicFile:
        """Publish or unpublish a node owned by the caller.

        Args:
            file_id: Raw node id.
            caller_id: Id of the caller.
            is_public: New visibility.

        Returns:
            Public projection of the updated node.

        Raises:
            NotFoundError: If the node does not exist or is not owned by
                the caller.
        """
        node_id = _positive_int(file_id)
        if node_id is None:
            raise NotFoundError()

        updated = FileNode.objects.filter(
            pk=node_id,
            owner_id=caller_id,
        ).update(is_public=is_public)
        if updated == 0:
            logger.warning(
                'Visibility change denied: node %d, user %d',
                node_id,
                caller_id,
            )
            raise NotFoundError()

        logger.info(
            'Node %d is now %s',
            node_id,
            'public' if is_public else 'private',
        )
        return PublicFile.from_node(FileNode.objects.get(pk=node_id))

    def get_content(
        self,
        file_id: object,
        auth: 'AuthenticatedRequest',
        size: str | None = None,
    ) -> FileContent:
        """Read the content of a node on behalf of an optional caller.

        Private nodes are reported as missing to everyone but their
        owner, so their existence does not leak.

        Args:
            file_id: Raw node id.
            auth: Request with the caller, possibly anonymous.
            size: Size variant produced by the thumbnail worker.

        Returns:
            Content bytes and their content type.

        Raises:
            NotFoundError: If the node is missing, private and not owned
                by the caller, or has no content on disk.
            BadRequestError: If the node is a folder.
        """
        node = self.get_by_id(file_id)
        if node is None:
            raise NotFoundError()

        if not node.is_public and not auth.is_owner_of(node.owner_id):
            raise NotFoundError()

        if node.is_folder:
            raise BadRequestError("A folder doesn't have content")

        if size and _positive_int(size) is None:
            # Only positive integer sizes name a variant
            raise NotFoundError()

        data = self._content.read(node.local_path, size or None)
        if data is None:
            raise NotFoundError()

        return FileContent(data=data, content_type=detect_mime_type(node.name))

    def count(self) -> int:
        """Count all file nodes.

        Returns:
            Number of nodes of every owner.
        """
        return FileNode.objects.count()

    def _resolve_parent(self, parent_id: object) -> FileNode | None:
        """Check that a raw parent id names the root or a folder.

        Args:
            parent_id: Raw parent id.

        Returns:
            Parent folder, or None for the root.

        Raises:
            ValidationError: If the parent does not exist or is not a
                folder.
        """
        try:
            parent = parse_parent_ref(parent_id)
        except MalformedParentError as error:
            raise ValidationError('Parent not found') from error

        if not isinstance(parent, NodeId):
            return None

        folder = FileNode.objects.filter(pk=parent.value).first()
        if folder is None:
            raise ValidationError('Parent not found')
        if not folder.is_folder:
            raise ValidationError('Parent is not a folder')
        return folder
