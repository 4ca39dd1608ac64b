"""Tests for Subject and File models."""

import pytest
from django.db import IntegrityError

from server.apps.portfolio.models import Category, File, Subject
from server.apps.portfolio.snapshots import FileSnapshot, SubjectSnapshot


@pytest.mark.django_db
def test_subject_str(subject, owner):
    """Test Subject __str__ method."""
    assert str(subject) == f'{owner}:Mathematics'


@pytest.mark.django_db
def test_file_str(file_row, owner):
    """Test File __str__ method."""
    assert str(file_row) == f'{owner}:{file_row.object_path}'


def test_category_values():
    """Files are partitioned into exactly two categories."""
    assert Category.values == ['performance', 'written']


@pytest.mark.django_db
def test_object_path_is_unique(file_row):
    """Two rows can never point at the same object."""
    with pytest.raises(IntegrityError):
        File.objects.create(
            owner=file_row.owner,
            subject=file_row.subject,
            category=Category.WRITTEN,
            title='copy',
            object_path=file_row.object_path,
        )


@pytest.mark.django_db
def test_subject_default_ordering(owner):
    """Subjects are ordered by sort order, then insertion."""
    late = Subject.objects.create(owner=owner, title='Late', sort_order=5)
    early = Subject.objects.create(owner=owner, title='Early', sort_order=2)

    assert list(Subject.objects.filter(owner=owner)) == [early, late]


@pytest.mark.django_db
def test_subject_snapshot(subject):
    """Snapshot copies every displayed field."""
    snapshot = SubjectSnapshot.from_model(subject)

    assert snapshot.id == subject.id
    assert snapshot.owner == subject.owner
    assert snapshot.title == 'Mathematics'
    assert snapshot.icon == '📘'
    assert snapshot.sort_order == 1


@pytest.mark.django_db
def test_file_snapshot_is_immutable(file_row):
    """Snapshots cannot be changed after creation."""
    snapshot = FileSnapshot.from_model(file_row)

    with pytest.raises(AttributeError):
        snapshot.title = 'changed'  # type: ignore[misc]

    assert snapshot.size_bytes == 2048
    assert snapshot.subject_id == file_row.subject_id
