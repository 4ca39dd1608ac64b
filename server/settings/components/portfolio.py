"""Portfolio content settings."""

from server.settings.components import config

# Lifetime of signed URLs handed out for file previews (seconds)
PORTFOLIO_PREVIEW_URL_TTL = config(
    'PORTFOLIO_PREVIEW_URL_TTL',
    cast=int,
    default=600,
)

# Lifetime of signed URLs for profile avatars (seconds)
PORTFOLIO_AVATAR_URL_TTL = config(
    'PORTFOLIO_AVATAR_URL_TTL',
    cast=int,
    default=1800,
)

# Dotted path of the user-facing notification sink
PORTFOLIO_NOTIFIER = config(
    'PORTFOLIO_NOTIFIER',
    default='server.apps.portfolio.notifications.LoggingNotifier',
)
