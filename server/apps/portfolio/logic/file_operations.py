"""Business logic for file operations.

Files live in two stores: the object in S3-compatible storage and the
metadata row in the ``files`` table. There is no transaction spanning
both, so every operation orders its calls to choose which inconsistency
a partial failure may leave behind:

- upload writes the object first, then the row. A failed insert leaves
  an orphan object, never a row without an object.
- delete removes the object first, then the row. A failed object
  removal keeps the row intact. A failed row removal after the object is
  gone leaves a dangling row and is reported separately.

Nothing is retried or compensated automatically; every failure is logged,
reported once through the notifier and raised to the caller.
"""

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.files.storage import storages
from django.core.files.uploadedfile import UploadedFile
from django.db import DatabaseError, transaction

from server.apps.portfolio.exceptions import (
    FilesLoadFailedError,
    PreviewFailedError,
    RecordDeleteFailedError,
    RecordInsertFailedError,
    RenameFailedError,
    StorageDeleteFailedError,
    UploadFailedError,
)
from server.apps.portfolio.infrastructure.metadata import (
    detect_mime_type,
    validate_storage_path,
)
from server.apps.portfolio.logic.path_naming import PathNamer
from server.apps.portfolio.models import Category, File, Subject
from server.apps.portfolio.notifications import (
    Notifier,
    get_notifier,
    reject,
    report,
)
from server.apps.portfolio.snapshots import FileSnapshot, Preview

if TYPE_CHECKING:
    from server.apps.portfolio.infrastructure.storage import ObjectStorage

logger = logging.getLogger(__name__)

_path_namer = PathNamer()


def _get_storage() -> 'ObjectStorage':
    """Get the configured default storage backend.

    Returns:
        ObjectStorage instance with proper S3 configuration.
    """
    return storages['default']  # type: ignore[return-value]


def _get_file_size(upload: UploadedFile) -> int:
    """Get file size from an uploaded file.

    Args:
        upload: Uploaded file.

    Returns:
        File size in bytes.
    """
    if upload.size is not None:
        return upload.size
    file_size = len(upload.read())
    upload.seek(0)
    return file_size


def _validate_owner(owner: str, notifier: Notifier) -> None:
    if not owner:
        raise reject(notifier, 'Sign in first')


def _validate_folder(
    owner: str,
    subject_id: int | None,
    category: str | None,
    notifier: Notifier,
) -> None:
    """Check the (owner, subject, category) triple an upload targets.

    Args:
        owner: Owner identifier.
        subject_id: Target subject.
        category: Target category.
        notifier: Notification sink.

    Raises:
        ValidationError: If any part is missing or the subject is not
            owned by ``owner``.
    """
    _validate_owner(owner, notifier)
    if not subject_id:
        raise reject(notifier, 'Select a subject')
    if category not in Category.values:
        raise reject(notifier, 'Select a category')
    if not Subject.objects.filter(owner=owner, id=subject_id).exists():
        logger.warning(
            'Subject %s not found for owner %s',
            subject_id,
            owner,
        )
        raise reject(notifier, 'Subject not found')


def upload_file(
    owner: str,
    subject_id: int | None,
    category: str | None,
    upload: UploadedFile,
    notifier: Notifier | None = None,
) -> FileSnapshot:
    """Upload file to storage and create its metadata row.

    Transaction safety: upload to storage first, then create the row.
    If the row insert fails the object stays in storage as an orphan;
    it is not deleted.

    Args:
        owner: Owner of the file.
        subject_id: Subject the file is filed under.
        category: ``performance`` or ``written``.
        upload: Uploaded file (name, content type and bytes).
        notifier: Notification sink, settings default when omitted.

    Returns:
        Snapshot of the created File row.

    Raises:
        ValidationError: If owner, subject or category is missing.
        UploadFailedError: If the object could not be stored.
        RecordInsertFailedError: If the object was stored but the row
            was not.
    """
    notifier = notifier or get_notifier()
    _validate_folder(owner, subject_id, category, notifier)

    original_name = upload.name or ''
    try:
        object_path = _path_namer.derive(
            owner,
            subject_id,
            category,
            original_name,
        )
    except ValidationError as exc:
        logger.warning('Rejected storage path for owner %s: %s', owner, exc)
        raise reject(notifier, exc.messages[0]) from exc
    mime_type = detect_mime_type(original_name, upload.content_type)
    file_size = _get_file_size(upload)

    # Step 1: Upload to storage first
    storage = _get_storage()
    try:
        storage.put_object(object_path, upload, mime_type, overwrite=False)
    except Exception as exc:
        logger.exception(
            'Failed to upload object, no record written: %s',
            object_path,
        )
        raise report(notifier, UploadFailedError(object_path)) from exc

    # Step 2: Create database record
    try:
        with transaction.atomic():
            file_instance = File.objects.create(
                owner=owner,
                subject_id=subject_id,
                category=category,
                title=original_name or 'Untitled',
                object_path=object_path,
                mime_type=mime_type,
                size_bytes=file_size,
            )
    except DatabaseError as exc:
        logger.exception(
            'File record insert failed, object left orphaned: %s',
            object_path,
        )
        raise report(notifier, RecordInsertFailedError(object_path)) from exc

    logger.info(
        'File record created: %s (ID: %d)',
        object_path,
        file_instance.id,
    )
    notifier.notify('Uploaded')
    return FileSnapshot.from_model(file_instance)


def rename_file(
    owner: str,
    file_id: int,
    new_title: str,
    notifier: Notifier | None = None,
) -> None:
    """Change the display title of a file.

    Only the ``title`` column changes; the object key is immutable once
    created, so storage is not touched.

    Args:
        owner: Owner of the file.
        file_id: ID of file to rename.
        new_title: New title, surrounding whitespace is dropped.
        notifier: Notification sink, settings default when omitted.

    Raises:
        ValidationError: If the title is empty after trimming.
        RenameFailedError: If the row is missing or the update fails.
    """
    notifier = notifier or get_notifier()
    _validate_owner(owner, notifier)
    title = (new_title or '').strip()
    if not title:
        raise reject(notifier, 'Enter new name')

    try:
        updated = File.objects.filter(owner=owner, id=file_id).update(
            title=title,
        )
    except DatabaseError as exc:
        logger.exception('Failed to rename file: ID=%d', file_id)
        raise report(notifier, RenameFailedError(f'ID={file_id}')) from exc

    if not updated:
        logger.warning('Rename target not found: ID=%d', file_id)
        raise report(notifier, RenameFailedError(f'ID={file_id}'))

    logger.info('File renamed: ID=%d', file_id)
    notifier.notify('Renamed')


def delete_file(
    owner: str,
    file_row: FileSnapshot,
    notifier: Notifier | None = None,
) -> None:
    """Delete file from storage and database.

    Transaction safety: delete the object first. If that fails the row
    is kept so it never points at a missing object. If the object is gone
    but the row delete fails, the row dangles and a distinct error says
    so.

    Args:
        owner: Owner of the file.
        file_row: Snapshot of the file to delete.
        notifier: Notification sink, settings default when omitted.

    Raises:
        ValidationError: If the row does not belong to ``owner``.
        StorageDeleteFailedError: If the object could not be removed.
        RecordDeleteFailedError: If the object was removed but the row
            was not.
    """
    notifier = notifier or get_notifier()
    _validate_owner(owner, notifier)
    if file_row.owner != owner:
        raise reject(notifier, 'File not found')
    try:
        validate_storage_path(owner, file_row.object_path)
    except ValidationError as exc:
        logger.warning(
            'Rejected delete outside owner prefix: %s',
            file_row.object_path,
        )
        raise reject(notifier, 'File not found') from exc

    logger.info(
        'Deleting file: ID=%d, path=%s',
        file_row.id,
        file_row.object_path,
    )

    # Step 1: Delete from storage
    try:
        _get_storage().delete_objects({file_row.object_path})
    except Exception as exc:
        logger.exception(
            'Failed to delete object, record kept: %s',
            file_row.object_path,
        )
        raise report(
            notifier,
            StorageDeleteFailedError(file_row.object_path),
        ) from exc

    # Step 2: Delete database record
    try:
        with transaction.atomic():
            File.objects.filter(owner=owner, id=file_row.id).delete()
    except DatabaseError as exc:
        logger.exception(
            'Failed to delete record, row now dangling: ID=%d',
            file_row.id,
        )
        raise report(
            notifier,
            RecordDeleteFailedError(file_row.object_path),
        ) from exc

    logger.info('File deleted: ID=%d', file_row.id)
    notifier.notify('Deleted')


def preview_file(
    file_row: FileSnapshot,
    notifier: Notifier | None = None,
) -> Preview:
    """Issue a signed URL to view a file.

    A new URL is signed on every call, nothing is cached.

    Args:
        file_row: Snapshot of the file to preview.
        notifier: Notification sink, settings default when omitted.

    Returns:
        Preview with the signed URL, title and MIME type.

    Raises:
        PreviewFailedError: If the object is missing or signing fails.
    """
    notifier = notifier or get_notifier()
    if not file_row.object_path:
        raise report(notifier, PreviewFailedError(f'ID={file_row.id}'))

    try:
        url = _get_storage().signed_url(
            file_row.object_path,
            settings.PORTFOLIO_PREVIEW_URL_TTL,
        )
    except Exception as exc:
        logger.exception(
            'Failed to sign preview URL: %s',
            file_row.object_path,
        )
        raise report(
            notifier,
            PreviewFailedError(file_row.object_path),
        ) from exc

    return Preview(
        url=url,
        title=file_row.title,
        mime_type=file_row.mime_type,
    )


def list_files(
    owner: str,
    subject_id: int,
    category: str,
    notifier: Notifier | None = None,
) -> tuple[FileSnapshot, ...]:
    """List files of one (subject, category) folder, newest first.

    Args:
        owner: Owner of files.
        subject_id: Subject to list.
        category: Category within the subject.
        notifier: Notification sink, settings default when omitted.

    Returns:
        Tuple of snapshots, empty when the folder has no files yet.

    Raises:
        FilesLoadFailedError: If the query fails.
    """
    logger.debug(
        'Listing files: owner=%s subject=%s category=%s',
        owner,
        subject_id,
        category,
    )
    try:
        files = File.objects.filter(
            owner=owner,
            subject_id=subject_id,
            category=category,
        ).order_by('-created_at', '-id')
        return tuple(FileSnapshot.from_model(row) for row in files)
    except DatabaseError as exc:
        logger.exception('Failed to load files for subject %s', subject_id)
        raise report(
            notifier or get_notifier(),
            FilesLoadFailedError(f'subject={subject_id}'),
        ) from exc


def get_file(owner: str, file_id: int) -> FileSnapshot:
    """Get a single file of an owner.

    Args:
        owner: Owner of the file.
        file_id: ID of the file.

    Returns:
        Snapshot of the File row.

    Raises:
        File.DoesNotExist: If file not found.
    """
    return FileSnapshot.from_model(File.objects.get(owner=owner, id=file_id))


def referenced_object_paths(owner: str) -> set[str]:
    """Collect every object path the owner's File rows point at.

    Args:
        owner: Owner of files.

    Returns:
        Set of storage paths.
    """
    return set(
        File.objects.filter(owner=owner).values_list('object_path', flat=True),
    )


def find_orphan_paths(
    owner: str,
    also_referenced: Iterable[str] = (),
) -> list[str]:
    """Find objects under an owner's prefix that no row references.

    Orphans are left behind by failed row inserts and by subject
    deletion. This only reports them, nothing is deleted.

    Args:
        owner: Owner whose prefix is scanned.
        also_referenced: Extra paths to treat as referenced (avatar).

    Returns:
        Sorted list of orphan storage paths.
    """
    referenced = referenced_object_paths(owner)
    referenced.update(also_referenced)
    stored = _get_storage().list_object_keys(_path_namer.owner_prefix(owner))
    return sorted(set(stored) - referenced)
