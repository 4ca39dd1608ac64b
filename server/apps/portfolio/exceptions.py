"""Exceptions for portfolio app."""

from typing import ClassVar


class ObjectExistsError(Exception):
    """Raised when a non-overwriting put targets an existing object."""

    def __init__(self, name: str) -> None:
        """Initialize ObjectExistsError.

        Args:
            name: Storage path that already holds an object.
        """
        self.name = name
        super().__init__(f'Object already exists: {name}')


class ObjectNotFoundError(Exception):
    """Raised when an object is expected in storage but missing."""

    def __init__(self, name: str) -> None:
        """Initialize ObjectNotFoundError.

        Args:
            name: Storage path that has no object.
        """
        self.name = name
        super().__init__(f'Object not found: {name}')


class ObjectDeleteError(Exception):
    """Raised when a batch delete reports keys it could not remove."""

    def __init__(self, failed: dict[str, str]) -> None:
        """Initialize ObjectDeleteError.

        Args:
            failed: Storage path to S3 error code for each failed key.
        """
        self.failed = failed
        super().__init__(
            'Failed to delete objects: {0}'.format(', '.join(sorted(failed))),
        )


class PortfolioOperationError(Exception):
    """Base class for failed content operations.

    Each subclass carries the short message shown to the user. The
    failure is terminal for the invocation; callers retry by invoking
    the operation again.
    """

    user_message: ClassVar[str] = 'Operation failed'

    def __init__(self, detail: str = '') -> None:
        """Initialize the error.

        Args:
            detail: Technical context for logs (path, id).
        """
        self.detail = detail
        message = self.user_message
        if detail:
            message = f'{message}: {detail}'
        super().__init__(message)


class UploadFailedError(PortfolioOperationError):
    """Object upload failed, no metadata row was written."""

    user_message = 'Upload failed'


class RecordInsertFailedError(PortfolioOperationError):
    """Object was uploaded but the File row was not created.

    The uploaded object is left in storage as an orphan.
    """

    user_message = 'Upload saved but DB insert failed'

    def __init__(self, orphan_path: str) -> None:
        """Initialize RecordInsertFailedError.

        Args:
            orphan_path: Storage path of the unreferenced object.
        """
        self.orphan_path = orphan_path
        super().__init__(orphan_path)


class RenameFailedError(PortfolioOperationError):
    """File title update failed."""

    user_message = 'Rename failed'


class StorageDeleteFailedError(PortfolioOperationError):
    """Object removal failed, the File row was kept."""

    user_message = 'Storage delete failed'


class RecordDeleteFailedError(PortfolioOperationError):
    """Object was removed but the File row could not be deleted.

    The row now references a missing object (dangling row).
    """

    user_message = 'DB delete failed'

    def __init__(self, dangling_path: str) -> None:
        """Initialize RecordDeleteFailedError.

        Args:
            dangling_path: Storage path the remaining row points to.
        """
        self.dangling_path = dangling_path
        super().__init__(dangling_path)


class PreviewFailedError(PortfolioOperationError):
    """Signed URL could not be issued."""

    user_message = 'Preview failed'


class FilesLoadFailedError(PortfolioOperationError):
    """File listing query failed."""

    user_message = 'Failed to load files'


class SubjectsLoadFailedError(PortfolioOperationError):
    """Subject listing query failed."""

    user_message = 'Failed to load subjects'


class SubjectCreateFailedError(PortfolioOperationError):
    """Subject row could not be inserted."""

    user_message = 'Failed to add subject'


class SubjectDeleteFailedError(PortfolioOperationError):
    """Subject cascade deletion failed."""

    user_message = 'Failed to delete subject'


class DeleteAllFailedError(PortfolioOperationError):
    """Deleting every subject of an owner failed."""

    user_message = 'Delete all failed'
