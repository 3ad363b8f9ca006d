"""Database models for files app."""

from typing import ClassVar, Final, final, override

from django.conf import settings
from django.db import models

# Constants for field max lengths
_TYPE_MAX_LENGTH: Final = 16
_LOCAL_PATH_MAX_LENGTH: Final = 1024


class FileType(models.TextChoices):
    """Kinds of file nodes."""

    FOLDER = 'folder', 'Folder'
    FILE = 'file', 'File'
    IMAGE = 'image', 'Image'


@final
class FileNode(models.Model):
    """Folder, file or image owned by a user.

    Nodes form a hierarchy through ``parent``: a null parent is the root
    sentinel, otherwise the parent is a folder. Files and images keep
    their content on disk at ``local_path``; folders have no content.

    The auto-incremented ``id`` doubles as the creation order used for
    pagination. Only ``is_public`` changes after creation.
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='file_nodes',
        db_index=True,
    )

    name = models.TextField()

    type = models.CharField(  # noqa: WPS125
        max_length=_TYPE_MAX_LENGTH,
        choices=FileType.choices,
    )

    parent = models.ForeignKey(
        'self',
        on_delete=models.PROTECT,
        related_name='children',
        null=True,
        blank=True,
        help_text='Containing folder, empty for the root level',
    )

    is_public = models.BooleanField(default=False)

    local_path = models.CharField(
        max_length=_LOCAL_PATH_MAX_LENGTH,
        blank=True,
        default='',
        help_text='Absolute path of the content on disk (files and images)',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['id']

        indexes: ClassVar[list[models.Index]] = [
            # Optimize paginated listing of a folder
            models.Index(
                fields=['owner', 'parent', 'id'],
                name='files_owner_parent_idx',
            ),
        ]

        constraints: ClassVar[list[models.BaseConstraint]] = [
            # Folders never have content on disk
            models.CheckConstraint(
                condition=(
                    ~models.Q(type=FileType.FOLDER)
                    | models.Q(local_path='')
                ),
                name='files_folder_without_content',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.owner_id}:{self.name} ({self.type})'

    @property
    def is_folder(self) -> bool:
        """Whether this node is a folder."""
        return self.type == FileType.FOLDER
