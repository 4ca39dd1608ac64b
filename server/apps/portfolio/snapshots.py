"""Immutable values returned by portfolio operations.

Callers hold these snapshots instead of live model instances, so a
listing never changes under a view that displays it.
"""

import dataclasses
from datetime import datetime
from typing import final

from server.apps.portfolio.infrastructure.metadata import is_image
from server.apps.portfolio.models import File, Subject


@final
@dataclasses.dataclass(frozen=True, slots=True)
class SubjectSnapshot:
    """Read-only view of a Subject row."""

    id: int
    owner: str
    title: str
    icon: str
    sort_order: int

    @classmethod
    def from_model(cls, subject: Subject) -> 'SubjectSnapshot':
        """Build a snapshot from a Subject instance."""
        return cls(
            id=subject.id,
            owner=subject.owner,
            title=subject.title,
            icon=subject.icon,
            sort_order=subject.sort_order,
        )


@final
@dataclasses.dataclass(frozen=True, slots=True)
class FileSnapshot:
    """Read-only view of a File row."""

    id: int
    owner: str
    subject_id: int
    category: str
    title: str
    object_path: str
    mime_type: str
    size_bytes: int
    created_at: datetime

    @classmethod
    def from_model(cls, file_instance: File) -> 'FileSnapshot':
        """Build a snapshot from a File instance."""
        return cls(
            id=file_instance.id,
            owner=file_instance.owner,
            subject_id=file_instance.subject_id,
            category=file_instance.category,
            title=file_instance.title,
            object_path=file_instance.object_path,
            mime_type=file_instance.mime_type,
            size_bytes=file_instance.size_bytes,
            created_at=file_instance.created_at,
        )


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Preview:
    """Signed URL plus what a viewer needs to render it."""

    url: str
    title: str
    mime_type: str

    @property
    def is_image(self) -> bool:
        """Whether the object can be shown inline as an image."""
        return is_image(self.mime_type)
