"""Django admin configuration for files app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.files.models import FileNode


@admin.register(FileNode)
class FileNodeAdmin(admin.ModelAdmin[FileNode]):
    """Admin interface for FileNode model.

    Nodes are read-only here: owners and hierarchy never change after
    creation, and visibility is changed by owners through the API.
    """

    list_display = [
        'name',
        'type',
        'owner',
        'parent_display',
        'is_public',
        'created_at',
    ]

    list_filter = [
        'type',
        'is_public',
        'created_at',
    ]

    search_fields = [
        'name',
        'owner__email',
    ]

    readonly_fields = [
        'owner',
        'name',
        'type',
        'parent',
        'is_public',
        'local_path',
        'created_at',
    ]

    fieldsets = (
        ('Node', {
            'fields': ('name', 'type', 'owner', 'parent'),
        }),
        ('Sharing', {
            'fields': ('is_public',),
        }),
        ('Storage', {
            'fields': ('local_path',),
        }),
        ('Timestamps', {
            'fields': ('created_at',),
        }),
    )

    def parent_display(self, obj: FileNode) -> str:
        """Display the containing folder.

        Args:
            obj: FileNode instance.

        Returns:
            Parent folder name, or '/' for the root level.
        """
        if obj.parent is None:
            return '/'
        return obj.parent.name
    parent_display.short_description = 'Parent'  # type: ignore[attr-defined]

    def has_add_permission(self, request: HttpRequest) -> bool:
        """Nodes are only created through the API."""
        return False

    def get_queryset(self, request: HttpRequest) -> QuerySet[FileNode]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('owner', 'parent')
