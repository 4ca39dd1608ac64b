"""Shared fixtures for all app tests."""

import uuid

import boto3
import pytest
from django.conf import settings
from django.core.files.storage import storages
from django.core.files.uploadedfile import SimpleUploadedFile
from moto import mock_aws


class RecordingNotifier:
    """Notifier that keeps every message for assertions."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def owner() -> str:
    """Owner id as issued by the auth service.

    Returns:
        Random UUID string.
    """
    return str(uuid.uuid4())


@pytest.fixture
def other_owner() -> str:
    """Second owner id for isolation tests.

    Returns:
        Random UUID string.
    """
    return str(uuid.uuid4())


@pytest.fixture
def bucket_name() -> str:
    """Bucket the default storage writes to."""
    return settings.STORAGES['default']['OPTIONS']['bucket_name']


@pytest.fixture
def mock_s3(bucket_name):
    """Mock S3 service with the portfolio bucket.

    Yields:
        boto3 S3 resource with the bucket created.
    """
    with mock_aws():
        conn = boto3.resource('s3', region_name='us-east-1')
        conn.create_bucket(Bucket=bucket_name)
        yield conn


@pytest.fixture
def object_storage(mock_s3):
    """Default storage backend, talking to the mocked bucket.

    Returns:
        ObjectStorage instance.
    """
    return storages['default']


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Notifier collecting messages instead of showing them."""
    return RecordingNotifier()


@pytest.fixture
def make_upload():
    """Build uploaded files the way Django hands them to views.

    Returns:
        Factory taking a name, content and content type.
    """
    def factory(
        name: str = 'notes.pdf',
        content: bytes = b'%PDF-1.4 test content',
        content_type: str = 'application/pdf',
    ) -> SimpleUploadedFile:
        return SimpleUploadedFile(name, content, content_type=content_type)

    return factory
