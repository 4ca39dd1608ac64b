"""Shared fixtures for portfolio app tests."""

import pytest

from server.apps.portfolio.models import Category, File, Subject


@pytest.fixture
def subject(db, owner):
    """Create a subject for the test owner.

    Returns:
        Subject instance.
    """
    return Subject.objects.create(owner=owner, title='Mathematics', icon='📘')


@pytest.fixture
def other_subject(db, other_owner):
    """Create a subject owned by somebody else.

    Returns:
        Subject instance of ``other_owner``.
    """
    return Subject.objects.create(owner=other_owner, title='History')


@pytest.fixture
def file_row(subject):
    """Create a File row without a backing object.

    Returns:
        File instance.
    """
    return File.objects.create(
        owner=subject.owner,
        subject=subject,
        category=Category.WRITTEN,
        title='essay.docx',
        object_path=f'{subject.owner}/subjects/{subject.id}/written/abc-essay.docx',
        mime_type='application/msword',
        size_bytes=2048,
    )
