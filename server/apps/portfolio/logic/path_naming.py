"""Object key derivation for portfolio content.

File objects live under::

    {owner}/subjects/{subject_id}/{category}/{token}-{sanitized name}

Avatars use the fixed key ``{owner}/profile/avatar.jpg``.
"""

import secrets
import time
from typing import Final, final

from server.apps.portfolio.infrastructure.metadata import (
    sanitize_filename,
    validate_storage_path,
)

_PATH_SEPARATOR: Final = '/'
_SUBJECTS_SEGMENT: Final = 'subjects'
_AVATAR_KEY: Final = 'profile/avatar.jpg'

_BASE36_DIGITS: Final = '0123456789abcdefghijklmnopqrstuvwxyz'

# 8 random bytes -> 16 hex chars
_TOKEN_RANDOM_BYTES: Final = 8


def _to_base36(number: int) -> str:
    if number == 0:
        return '0'
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return ''.join(reversed(digits))


def make_token() -> str:
    """Generate a per-call unique token.

    A base36 millisecond timestamp keeps keys roughly time ordered, the
    random suffix separates calls made within the same millisecond.
    Uniqueness is overwhelmingly likely but not checked.

    Returns:
        Token such as ``m3k9x2a1f4c2b9e07d15a3c6``.
    """
    timestamp = _to_base36(time.time_ns() // 1_000_000)
    return timestamp + secrets.token_hex(_TOKEN_RANDOM_BYTES)


@final
class PathNamer:
    """Derives object storage keys for portfolio content.

    Keys are always prefixed with the owner id so that the key space is
    partitioned per owner.
    """

    def derive(
        self,
        owner: str,
        subject_id: int | str,
        category: str,
        original_name: str | None,
    ) -> str:
        """Build a fresh object key for a file upload.

        Args:
            owner: Owner identifier.
            subject_id: Subject the file belongs to.
            category: Category within the subject.
            original_name: Filename reported by the client.

        Returns:
            Storage path, e.g.
            ``abc/subjects/4/written/m3k9x2a1f4c2b9e07d15a3c6-notes.pdf``.
        """
        filename = '{token}-{name}'.format(
            token=make_token(),
            name=sanitize_filename(original_name),
        )
        storage_path = _PATH_SEPARATOR.join((
            owner,
            _SUBJECTS_SEGMENT,
            str(subject_id),
            category,
            filename,
        ))
        validate_storage_path(owner, storage_path)
        return storage_path

    def avatar_path(self, owner: str) -> str:
        """Return the fixed avatar key for an owner."""
        return f'{owner}/{_AVATAR_KEY}'

    def owner_prefix(self, owner: str) -> str:
        """Return the key prefix every object of an owner starts with."""
        return owner + _PATH_SEPARATOR

    def get_name(self, storage_path: str) -> str:
        """Get the final key segment (``token-name``) of a storage path.

        Args:
            storage_path: Storage path.

        Returns:
            Last path component, empty string for an empty path.
        """
        normalized = storage_path.strip(_PATH_SEPARATOR)
        return normalized.rsplit(_PATH_SEPARATOR, 1)[-1]
