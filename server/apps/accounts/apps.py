"""Django app configuration for accounts app."""

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """Configuration for accounts app.

    Authentication itself is external; this app only models the session
    mode an owner is in.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.accounts'
    verbose_name = 'Accounts'
