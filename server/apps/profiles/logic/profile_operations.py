"""Business logic for profile operations.

The avatar is stored at a fixed key per owner and overwritten in place.
Signed avatar URLs are time-boxed; after an upload the caller reloads
the profile to get a URL for the new image.
"""

import dataclasses
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Final, final

from django.conf import settings
from django.core.files.storage import storages
from django.core.files.uploadedfile import UploadedFile
from django.db import DatabaseError, transaction

from server.apps.portfolio.infrastructure.metadata import detect_mime_type
from server.apps.portfolio.logic.path_naming import PathNamer
from server.apps.portfolio.notifications import (
    Notifier,
    get_notifier,
    reject,
    report,
)
from server.apps.profiles.exceptions import (
    AvatarSaveFailedError,
    AvatarUploadFailedError,
    ProfileSaveFailedError,
)
from server.apps.profiles.models import Profile

if TYPE_CHECKING:
    from server.apps.portfolio.infrastructure.storage import ObjectStorage

logger = logging.getLogger(__name__)

# Minimum trimmed length of each field for a profile to count as set up
_MIN_FIELD_LENGTH: Final = 2

_path_namer = PathNamer()


@final
@dataclasses.dataclass(frozen=True, slots=True)
class ProfileSnapshot:
    """Read-only view of a Profile row plus a fresh avatar URL."""

    owner: str
    name: str
    section: str
    school: str
    avatar_path: str | None
    updated_at: datetime
    avatar_url: str | None = None

    @classmethod
    def from_model(
        cls,
        profile: Profile,
        avatar_url: str | None = None,
    ) -> 'ProfileSnapshot':
        """Build a snapshot from a Profile instance."""
        return cls(
            owner=profile.owner,
            name=profile.name,
            section=profile.section,
            school=profile.school,
            avatar_path=profile.avatar_path or None,
            updated_at=profile.updated_at,
            avatar_url=avatar_url,
        )


def _get_storage() -> 'ObjectStorage':
    return storages['default']  # type: ignore[return-value]


def ensure_profile(owner: str) -> ProfileSnapshot:
    """Get the owner's profile, creating a blank one on first sight.

    Args:
        owner: Owner identifier.

    Returns:
        Snapshot of the profile (without avatar URL).

    Raises:
        ValidationError: If owner is empty.
    """
    if not owner:
        raise reject(get_notifier(), 'Sign in first')

    profile, created = Profile.objects.get_or_create(owner=owner)
    if created:
        logger.info('Created blank profile for owner %s', owner)
    return ProfileSnapshot.from_model(profile)


def refresh_avatar_url(avatar_path: str | None) -> str | None:
    """Sign a fresh URL for an avatar.

    Args:
        avatar_path: Stored avatar path, may be empty.

    Returns:
        Signed URL, or None when there is no avatar or signing fails.
    """
    if not avatar_path:
        return None
    try:
        return _get_storage().signed_url(
            avatar_path,
            settings.PORTFOLIO_AVATAR_URL_TTL,
        )
    except Exception:
        logger.exception('Failed to sign avatar URL: %s', avatar_path)
        return None


def load_profile(owner: str) -> ProfileSnapshot | None:
    """Load the owner's profile together with a signed avatar URL.

    Args:
        owner: Owner identifier.

    Returns:
        Snapshot, or None when the owner has no profile yet.
    """
    try:
        profile = Profile.objects.get(owner=owner)
    except Profile.DoesNotExist:
        logger.debug('No profile for owner %s', owner)
        return None
    return ProfileSnapshot.from_model(
        profile,
        avatar_url=refresh_avatar_url(profile.avatar_path),
    )


def save_profile(
    owner: str,
    *,
    name: str,
    section: str,
    school: str,
    notifier: Notifier | None = None,
) -> ProfileSnapshot:
    """Save the owner's text fields.

    Args:
        owner: Owner identifier.
        name: Display name.
        section: Class section.
        school: School name.
        notifier: Notification sink, settings default when omitted.

    Returns:
        Snapshot of the saved profile with a fresh avatar URL.

    Raises:
        ValidationError: If owner is empty.
        ProfileSaveFailedError: If the update fails.
    """
    notifier = notifier or get_notifier()
    if not owner:
        raise reject(notifier, 'Sign in first')

    try:
        with transaction.atomic():
            profile, _ = Profile.objects.update_or_create(
                owner=owner,
                defaults={
                    'name': name or '',
                    'section': section or '',
                    'school': school or '',
                },
            )
    except DatabaseError as exc:
        logger.exception('Failed to save profile for owner %s', owner)
        raise report(notifier, ProfileSaveFailedError(owner)) from exc

    logger.info('Profile saved for owner %s', owner)
    notifier.notify('Profile saved')
    return ProfileSnapshot.from_model(
        profile,
        avatar_url=refresh_avatar_url(profile.avatar_path),
    )


def upload_avatar(
    owner: str,
    upload: UploadedFile,
    notifier: Notifier | None = None,
) -> str:
    """Replace the owner's avatar image.

    Writes the object at the fixed avatar key, overwriting any previous
    image, then records the key on the profile.

    Args:
        owner: Owner identifier.
        upload: Uploaded image.
        notifier: Notification sink, settings default when omitted.

    Returns:
        Avatar storage path.

    Raises:
        ValidationError: If owner is empty.
        AvatarUploadFailedError: If the object could not be written.
        AvatarSaveFailedError: If the profile row could not be updated.
    """
    notifier = notifier or get_notifier()
    if not owner:
        raise reject(notifier, 'Sign in first')

    avatar_path = _path_namer.avatar_path(owner)
    mime_type = detect_mime_type(avatar_path, upload.content_type)

    # Step 1: Overwrite the object in place
    try:
        _get_storage().put_object(
            avatar_path,
            upload,
            mime_type,
            overwrite=True,
        )
    except Exception as exc:
        logger.exception('Failed to upload avatar: %s', avatar_path)
        raise report(notifier, AvatarUploadFailedError(avatar_path)) from exc

    # Step 2: Point the profile at it
    try:
        with transaction.atomic():
            Profile.objects.update_or_create(
                owner=owner,
                defaults={'avatar_path': avatar_path},
            )
    except DatabaseError as exc:
        logger.exception('Failed to save avatar path for owner %s', owner)
        raise report(notifier, AvatarSaveFailedError(avatar_path)) from exc

    logger.info('Avatar updated for owner %s', owner)
    notifier.notify('Avatar updated')
    return avatar_path


def is_profile_complete(profile: ProfileSnapshot) -> bool:
    """Check whether the owner finished the profile setup.

    Args:
        profile: Profile snapshot.

    Returns:
        True when name, section and school each have at least two
        characters after trimming.
    """
    return all(
        len((field_value or '').strip()) >= _MIN_FIELD_LENGTH
        for field_value in (profile.name, profile.section, profile.school)
    )
