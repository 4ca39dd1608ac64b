"""Exceptions for profiles app."""

from server.apps.portfolio.exceptions import PortfolioOperationError


class ProfileSaveFailedError(PortfolioOperationError):
    """Profile text fields could not be saved."""

    user_message = 'Failed to save profile'


class AvatarUploadFailedError(PortfolioOperationError):
    """Avatar object could not be written, the profile is unchanged."""

    user_message = 'Avatar upload failed'


class AvatarSaveFailedError(PortfolioOperationError):
    """Avatar object was written but the profile row was not updated."""

    user_message = 'Failed to save avatar'
