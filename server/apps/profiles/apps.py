"""Django app configuration for profiles app."""

from django.apps import AppConfig


class ProfilesConfig(AppConfig):
    """Configuration for profiles app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.profiles'
    verbose_name = 'Profiles'
