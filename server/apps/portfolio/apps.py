"""Django app configuration for portfolio app."""

from django.apps import AppConfig


class PortfolioConfig(AppConfig):
    """Configuration for portfolio app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.portfolio'
    verbose_name = 'Portfolio'
