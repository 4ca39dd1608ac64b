"""Metadata helpers for uploaded content."""

import mimetypes
import re
from pathlib import PurePosixPath
from typing import Final

from django.core.exceptions import ValidationError

_DEFAULT_MIME_TYPE: Final = 'application/octet-stream'
_DEFAULT_FILENAME: Final = 'upload'

# Anything outside this set is unsafe in an object key
_UNSAFE_FILENAME_CHARS: Final = re.compile(r'[^A-Za-z0-9_.\-]')

_BYTE_UNITS: Final = ('B', 'KB', 'MB', 'GB')
_UNIT_STEP: Final = 1024


def detect_mime_type(filename: str, reported: str | None = None) -> str:
    """Pick the MIME type to store for an upload.

    The client-reported type wins. When the client sends nothing the
    type is guessed from the filename extension.

    Args:
        filename: Original filename with extension.
        reported: MIME type reported by the client, if any.

    Returns:
        MIME type string (e.g., 'image/jpeg', 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    if reported:
        return reported
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return _DEFAULT_MIME_TYPE
    return mime_type


def sanitize_filename(filename: str | None) -> str:
    """Make a filename safe to embed in an object key.

    Every character outside ``[A-Za-z0-9_.-]`` becomes ``_``. The
    extension is kept as-is, nothing is inferred or validated.

    Args:
        filename: Original filename as reported by the client.

    Returns:
        Sanitized filename, ``upload`` when the name is empty.
    """
    if not filename:
        return _DEFAULT_FILENAME
    return _UNSAFE_FILENAME_CHARS.sub('_', filename)


def validate_storage_path(owner: str, storage_path: str) -> None:
    """Validate storage path follows owner isolation rules.

    Ensures the storage path starts with the owner's id so that keys of
    different owners can never collide.

    Args:
        owner: Owner identifier.
        storage_path: Proposed storage path.

    Raises:
        ValidationError: If path doesn't start with owner or is invalid.
    """
    if not storage_path:
        raise ValidationError('Storage path cannot be empty')

    path_parts = PurePosixPath(storage_path).parts
    if len(path_parts) < 2:
        raise ValidationError('Storage path must include an object name')

    if path_parts[0] != owner:
        raise ValidationError(
            f'Storage path owner ({path_parts[0]}) does not match '
            f'owner ({owner})',
        )


def is_image(mime_type: str | None) -> bool:
    """Check whether a MIME type can be shown inline as an image."""
    return (mime_type or '').startswith('image/')


def format_bytes(size_bytes: int) -> str:
    """Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size string (e.g., '1.5 MB', '234 B').
        Empty string for zero or unknown sizes.
    """
    if not size_bytes:
        return ''

    size = float(size_bytes)
    unit_index = 0
    while size >= _UNIT_STEP and unit_index < len(_BYTE_UNITS) - 1:
        size /= _UNIT_STEP
        unit_index += 1

    if unit_index == 0:
        return f'{size_bytes} B'
    return f'{size:.1f} {_BYTE_UNITS[unit_index]}'
