"""Database models for portfolio app."""

from typing import ClassVar, Final, final, override

from django.db import models

# Constants for field max lengths
OWNER_MAX_LENGTH: Final = 64
_TITLE_MAX_LENGTH: Final = 255
_ICON_MAX_LENGTH: Final = 16
_CATEGORY_MAX_LENGTH: Final = 16
_OBJECT_PATH_MAX_LENGTH: Final = 1024  # S3 key limit
_MIME_TYPE_MAX_LENGTH: Final = 255


class Category(models.TextChoices):
    """Fixed partition of files within a subject."""

    PERFORMANCE = 'performance', 'Performance'
    WRITTEN = 'written', 'Written'


@final
class Subject(models.Model):
    """Top level of an owner's content hierarchy.

    ``sort_order`` only drives display order. New subjects are appended
    after the current maximum, ties fall back to insertion order.
    """

    # Opaque identifier issued by the external auth service
    owner = models.CharField(
        max_length=OWNER_MAX_LENGTH,
        db_index=True,
    )

    title = models.CharField(
        max_length=_TITLE_MAX_LENGTH,
    )

    icon = models.CharField(
        max_length=_ICON_MAX_LENGTH,
        blank=True,
        default='',
    )

    sort_order = models.IntegerField(
        default=1,
        help_text='Display position, ascending',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        db_table = 'subjects'
        verbose_name = 'Subject'  # type: ignore[mutable-override]
        verbose_name_plural = 'Subjects'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['sort_order', 'id']

        indexes: ClassVar[list[models.Index]] = [
            models.Index(
                fields=['owner', 'sort_order'],
                name='subjects_owner_sort_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.owner}:{self.title}'


@final
class File(models.Model):
    """Metadata row for one object in storage.

    ``object_path`` is the only link to the object store. Every row is
    expected to point at a live object; objects under an owner prefix
    that no row references are orphans.
    """

    owner = models.CharField(
        max_length=OWNER_MAX_LENGTH,
        db_index=True,
    )

    subject = models.ForeignKey(
        Subject,
        on_delete=models.CASCADE,
        related_name='files',
    )

    category = models.CharField(
        max_length=_CATEGORY_MAX_LENGTH,
        choices=Category.choices,
    )

    # Display name, initially the original filename
    title = models.CharField(
        max_length=_TITLE_MAX_LENGTH,
    )

    object_path = models.CharField(
        max_length=_OBJECT_PATH_MAX_LENGTH,
        unique=True,
        help_text=(
            'Storage path: '
            '{owner}/subjects/{subject}/{category}/{token}-{name}'
        ),
    )

    mime_type = models.CharField(
        max_length=_MIME_TYPE_MAX_LENGTH,
        blank=True,
        default='',
        help_text='MIME type as reported by the client',
    )

    size_bytes = models.BigIntegerField(
        default=0,
        help_text='File size in bytes',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        db_table = 'files'
        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at', '-id']

        indexes: ClassVar[list[models.Index]] = [
            # Optimize listing of one (subject, category) folder
            models.Index(
                fields=['owner', 'subject', 'category', '-created_at'],
                name='files_owner_folder_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.owner}:{self.object_path}'
