"""Django admin configuration for portfolio app.

Admin is read-mostly: objects in storage are only ever written through
the logic layer, so File rows are not editable here.
"""

from typing import override

from django.contrib import admin
from django.db.models import Count, QuerySet
from django.http import HttpRequest

from server.apps.portfolio.infrastructure.metadata import format_bytes
from server.apps.portfolio.logic.path_naming import PathNamer
from server.apps.portfolio.models import File, Subject

_path_namer = PathNamer()


@admin.register(Subject)
class SubjectAdmin(admin.ModelAdmin):
    """Admin interface for Subject model."""

    list_display = [
        'title',
        'icon',
        'owner',
        'sort_order',
        'file_count',
        'created_at',
    ]

    list_filter = [
        'created_at',
    ]

    search_fields = [
        'title',
        'owner',
    ]

    readonly_fields = ['created_at']

    def file_count(self, obj: Subject) -> int:
        """Count of File rows filed under this subject.

        Args:
            obj: Subject instance.

        Returns:
            Number of files.
        """
        return obj.file_count  # type: ignore[attr-defined]
    file_count.short_description = 'Files'  # type: ignore[attr-defined]

    @override
    def get_queryset(self, request: HttpRequest) -> QuerySet[Subject]:
        """Annotate subjects with their file count.

        Args:
            request: HTTP request.

        Returns:
            Annotated QuerySet.
        """
        return super().get_queryset(request).annotate(
            file_count=Count('files'),
        )


@admin.register(File)
class FileAdmin(admin.ModelAdmin):
    """Admin interface for File model."""

    list_display = [
        'title',
        'owner',
        'subject',
        'category',
        'size_display',
        'mime_type',
        'created_at',
    ]

    list_filter = [
        'category',
        'mime_type',
        'created_at',
    ]

    search_fields = [
        'title',
        'object_path',
        'owner',
    ]

    readonly_fields = [
        'owner',
        'subject',
        'category',
        'object_path',
        'key_name_display',
        'size_bytes',
        'mime_type',
        'created_at',
    ]

    fieldsets = (
        ('File Information', {
            'fields': ('title', 'owner', 'subject', 'category'),
        }),
        ('Storage', {
            'fields': (
                'object_path',
                'key_name_display',
                'size_bytes',
                'mime_type',
            ),
        }),
        ('Timestamps', {
            'fields': ('created_at',),
        }),
    )

    def size_display(self, obj: File) -> str:
        """Display file size in human-readable format.

        Args:
            obj: File instance.

        Returns:
            Formatted size string (e.g., '1.5 MB', '234 B').
        """
        return format_bytes(obj.size_bytes) or '-'
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    def key_name_display(self, obj: File) -> str:
        """Display the last segment of the object key.

        Args:
            obj: File instance.

        Returns:
            ``token-name`` part of the storage path.
        """
        return _path_namer.get_name(obj.object_path)
    key_name_display.short_description = 'Key name'  # type: ignore[attr-defined]

    @override
    def get_queryset(self, request: HttpRequest) -> QuerySet[File]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('subject')

    @override
    def has_add_permission(self, request: HttpRequest) -> bool:
        """Disable adding files via admin.

        Rows without a matching object would dangle.

        Args:
            request: HTTP request.

        Returns:
            False - files are created by uploads only.
        """
        return False
