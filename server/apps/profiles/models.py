"""Database models for profiles app."""

from typing import Final, final, override

from django.db import models

from server.apps.portfolio.models import OWNER_MAX_LENGTH

_TEXT_MAX_LENGTH: Final = 255
_AVATAR_PATH_MAX_LENGTH: Final = 1024


@final
class Profile(models.Model):
    """Display details of an owner.

    Created blank the first time an owner is seen. ``avatar_path`` is
    either empty or the owner's fixed avatar key.
    """

    owner = models.CharField(
        max_length=OWNER_MAX_LENGTH,
        primary_key=True,
    )

    name = models.CharField(
        max_length=_TEXT_MAX_LENGTH,
        blank=True,
        default='',
    )

    section = models.CharField(
        max_length=_TEXT_MAX_LENGTH,
        blank=True,
        default='',
    )

    school = models.CharField(
        max_length=_TEXT_MAX_LENGTH,
        blank=True,
        default='',
    )

    avatar_path = models.CharField(
        max_length=_AVATAR_PATH_MAX_LENGTH,
        blank=True,
        default='',
        help_text='Storage path: {owner}/profile/avatar.jpg',
    )

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Model metadata."""

        db_table = 'profiles'
        verbose_name = 'Profile'  # type: ignore[mutable-override]
        verbose_name_plural = 'Profiles'  # type: ignore[mutable-override]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.owner}:{self.name or "-"}'
