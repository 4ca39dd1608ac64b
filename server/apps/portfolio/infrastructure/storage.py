"""Object storage backend for S3-compatible buckets."""

import logging
from collections.abc import Iterable, Iterator
from typing import Any, Final, final

from botocore.exceptions import ClientError
from django.core.files.base import File
from storages.backends.s3 import S3Storage
from storages.utils import clean_name

from server.apps.portfolio.exceptions import (
    ObjectDeleteError,
    ObjectExistsError,
    ObjectNotFoundError,
)

logger = logging.getLogger(__name__)

# S3 accepts at most 1000 keys per DeleteObjects request
_DELETE_BATCH_SIZE: Final = 1000

# Error codes S3-compatible servers use for a failed If-None-Match write
_CONDITIONAL_WRITE_CODES: Final = frozenset((
    'PreconditionFailed',
    'ConditionalRequestConflict',
))


@final
class ObjectStorage(S3Storage):
    """S3 storage backend for portfolio objects.

    Extends django-storages S3Storage with the operations the content
    layer relies on:
    - put with an explicit overwrite flag (never renames on conflict)
    - idempotent batch delete
    - signed URL issuance that fails for missing objects
    - prefix listing for orphan reports
    """

    def put_object(
        self,
        name: str,
        content: Any,
        content_type: str,
        *,
        overwrite: bool,
    ) -> str:
        """Upload content to an exact storage path.

        Without ``overwrite`` the write is conditional (``If-None-Match``),
        so of two concurrent writers to one path only the first succeeds.

        Args:
            name: Storage path for the object.
            content: File-like object with the bytes to store.
            content_type: MIME type recorded on the object.
            overwrite: Replace an existing object silently when True,
                fail when False.

        Returns:
            Storage path used.

        Raises:
            ObjectExistsError: If overwrite is False and the path exists.
            Exception: If S3 upload fails.
        """
        if not overwrite and self.exists(name):
            logger.warning('Refusing to overwrite object: %s', name)
            raise ObjectExistsError(name)

        try:
            logger.info('Uploading object to storage: %s', name)
            if overwrite:
                payload = File(content, name=name)
                payload.content_type = (  # type: ignore[attr-defined]
                    content_type
                )
                saved_name = self._save(name, payload)
            else:
                saved_name = self._put_if_absent(name, content, content_type)
        except ObjectExistsError:
            logger.warning('Object appeared during upload: %s', name)
            raise
        except Exception:
            logger.exception('Failed to upload object to storage: %s', name)
            raise
        logger.info('Successfully uploaded object: %s', saved_name)
        return saved_name

    def _put_if_absent(
        self,
        name: str,
        content: Any,
        content_type: str,
    ) -> str:
        cleaned_name = clean_name(name)
        # Django File wrappers proxy to the raw stream botocore reads
        body = getattr(content, 'file', None) or content
        if hasattr(body, 'seek'):
            body.seek(0)
        try:
            self.bucket.Object(self._normalize_name(cleaned_name)).put(
                Body=body,
                ContentType=content_type,
                IfNoneMatch='*',
            )
        except ClientError as exc:
            if exc.response['Error']['Code'] in _CONDITIONAL_WRITE_CODES:
                raise ObjectExistsError(name) from exc
            raise
        return cleaned_name

    def delete_objects(self, names: Iterable[str]) -> None:
        """Delete a set of objects with batched DeleteObjects requests.

        Deleting a path that holds no object is not an error. Keys are
        sent in batches of up to 1000; a batch with any per-key error
        stops the operation.

        Args:
            names: Storage paths to delete.

        Raises:
            ObjectDeleteError: If S3 reports keys it did not delete.
            Exception: If a batch request fails as a whole.
        """
        keys = sorted({
            self._normalize_name(clean_name(name)) for name in names
        })
        for start in range(0, len(keys), _DELETE_BATCH_SIZE):
            batch = keys[start:start + _DELETE_BATCH_SIZE]
            logger.info('Deleting %d objects from storage', len(batch))
            response = self.bucket.delete_objects(Delete={
                'Objects': [{'Key': key} for key in batch],
                'Quiet': True,
            })
            errors = response.get('Errors', [])
            if errors:
                failed = {
                    error['Key']: error.get('Code', '') for error in errors
                }
                logger.error('Failed to delete objects: %s', failed)
                raise ObjectDeleteError(failed)

    def signed_url(self, name: str, ttl_seconds: int) -> str:
        """Issue a time-limited URL granting read access to one object.

        Args:
            name: Storage path of the object.
            ttl_seconds: Seconds until the URL stops working.

        Returns:
            Signed URL.

        Raises:
            ObjectNotFoundError: If no object exists at the path.
            Exception: If signing fails.
        """
        if not self.exists(name):
            raise ObjectNotFoundError(name)
        logger.debug('Signing URL for %s (ttl=%ds)', name, ttl_seconds)
        return self.url(name, expire=ttl_seconds)

    def list_object_keys(self, prefix: str) -> Iterator[str]:
        """Yield every object key under a prefix.

        Args:
            prefix: Key prefix, e.g. ``{owner}/``.

        Yields:
            Object keys in bucket order.
        """
        normalized = self._normalize_name(clean_name(prefix))
        for summary in self.bucket.objects.filter(Prefix=normalized):
            yield summary.key
