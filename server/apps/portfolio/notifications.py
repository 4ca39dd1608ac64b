"""User-facing status notifications.

Each operation reports its outcome once through a ``Notifier``. Messages
are ephemeral: there is no queue and no history.
"""

import logging
from typing import Protocol, final

from django.conf import settings
from django.core.exceptions import ValidationError
from django.utils.module_loading import import_string

from server.apps.portfolio.exceptions import PortfolioOperationError

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Sink for short, human-readable status messages."""

    def notify(self, message: str) -> None:
        """Show a message to the user."""


@final
class LoggingNotifier:
    """Notifier that writes messages to the application log.

    Used when no presentation layer is attached (management commands,
    shell sessions).
    """

    def notify(self, message: str) -> None:
        """Log the message.

        Args:
            message: Status message.
        """
        logger.info('Notification: %s', message)


def get_notifier() -> Notifier:
    """Instantiate the notifier configured in settings.

    Returns:
        Instance of ``settings.PORTFOLIO_NOTIFIER``.
    """
    notifier_class = import_string(settings.PORTFOLIO_NOTIFIER)
    return notifier_class()


def reject(notifier: Notifier, message: str) -> ValidationError:
    """Report a validation failure and build the error to raise.

    Args:
        notifier: Notification sink.
        message: Reason shown to the user.

    Returns:
        ValidationError carrying the same message.
    """
    notifier.notify(message)
    return ValidationError(message)


def report(
    notifier: Notifier,
    error: PortfolioOperationError,
) -> PortfolioOperationError:
    """Report a failed operation and hand back the error to raise.

    Args:
        notifier: Notification sink.
        error: Error describing the failure.

    Returns:
        The same error.
    """
    notifier.notify(error.user_message)
    return error
