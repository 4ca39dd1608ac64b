"""Django admin configuration for profiles app."""

from django.contrib import admin

from server.apps.profiles.logic.profile_operations import (
    ProfileSnapshot,
    is_profile_complete,
)
from server.apps.profiles.models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """Admin interface for Profile model."""

    list_display = [
        'owner',
        'name',
        'section',
        'school',
        'setup_complete',
        'updated_at',
    ]

    search_fields = [
        'owner',
        'name',
        'school',
    ]

    readonly_fields = [
        'owner',
        'avatar_path',
        'updated_at',
    ]

    fieldsets = (
        ('Owner', {
            'fields': ('owner',),
        }),
        ('Details', {
            'fields': ('name', 'section', 'school'),
        }),
        ('Avatar', {
            'fields': ('avatar_path',),
        }),
        ('Timestamps', {
            'fields': ('updated_at',),
        }),
    )

    @admin.display(boolean=True, description='Setup complete')
    def setup_complete(self, obj: Profile) -> bool:
        """Show whether the owner finished the profile setup.

        Args:
            obj: Profile instance.

        Returns:
            True when every detail field is filled in.
        """
        return is_profile_complete(ProfileSnapshot.from_model(obj))
