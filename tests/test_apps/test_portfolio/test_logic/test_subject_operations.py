"""Tests for subject operations business logic."""

import pytest
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.db.models.query import QuerySet

from server.apps.portfolio.exceptions import (
    DeleteAllFailedError,
    SubjectCreateFailedError,
    SubjectDeleteFailedError,
)
from server.apps.portfolio.logic.file_operations import (
    find_orphan_paths,
    list_files,
    upload_file,
)
from server.apps.portfolio.logic.subject_operations import (
    DEFAULT_ICON,
    create_subject,
    delete_all_subjects,
    delete_subject,
    list_subjects,
    seed_default_subjects,
)
from server.apps.portfolio.models import File, Subject


def _raise_database_error(*args, **kwargs):
    raise DatabaseError('database unavailable')


@pytest.mark.django_db
def test_create_subject_appends(owner, notifier):
    """New subjects get sort orders 1, 2, 3 in creation order."""
    created = [
        create_subject(owner, title, notifier=notifier)
        for title in ('Maths', 'Physics', 'Art')
    ]

    assert [row.sort_order for row in created] == [1, 2, 3]
    assert [row.title for row in list_subjects(owner)] == [
        'Maths',
        'Physics',
        'Art',
    ]
    assert created[0].icon == DEFAULT_ICON
    assert notifier.messages == ['Subject added'] * 3


@pytest.mark.django_db
def test_create_subject_after_highest_sort_order(owner):
    """Sort order continues after the current maximum, gaps are kept."""
    Subject.objects.create(owner=owner, title='Pinned', sort_order=10)

    created = create_subject(owner, 'Next', icon='🎨')

    assert created.sort_order == 11
    assert created.icon == '🎨'


@pytest.mark.django_db
def test_create_subject_sort_order_per_owner(owner, other_owner):
    """Sort orders of different owners are independent."""
    create_subject(owner, 'Maths')
    create_subject(owner, 'Physics')

    assert create_subject(other_owner, 'History').sort_order == 1


@pytest.mark.django_db
@pytest.mark.parametrize('title', ['', '   ', None])
def test_create_subject_blank_title(owner, notifier, title):
    """Blank titles are rejected."""
    with pytest.raises(ValidationError):
        create_subject(owner, title, notifier=notifier)

    assert Subject.objects.count() == 0
    assert notifier.messages == ['Enter subject name']


@pytest.mark.django_db
def test_create_subject_requires_owner(notifier):
    """Anonymous sessions cannot create subjects."""
    with pytest.raises(ValidationError):
        create_subject('', 'Maths', notifier=notifier)

    assert notifier.messages == ['Sign in first']


@pytest.mark.django_db
def test_create_subject_database_failure(owner, notifier, monkeypatch):
    """Insert failures surface as SubjectCreateFailedError."""
    monkeypatch.setattr(Subject.objects, 'create', _raise_database_error)

    with pytest.raises(SubjectCreateFailedError):
        create_subject(owner, 'Maths', notifier=notifier)

    assert notifier.messages == ['Failed to add subject']


@pytest.mark.django_db
def test_create_subject_strips_title(owner):
    """Surrounding whitespace is not stored."""
    assert create_subject(owner, '  Chemistry ').title == 'Chemistry'


@pytest.mark.django_db
def test_list_subjects_new_owner_is_empty(owner):
    """Nothing is seeded implicitly."""
    assert list_subjects(owner) == ()


@pytest.mark.django_db
def test_list_subjects_ties_by_insertion(owner, other_owner):
    """Equal sort orders fall back to insertion order."""
    first = Subject.objects.create(owner=owner, title='B', sort_order=1)
    second = Subject.objects.create(owner=owner, title='A', sort_order=1)
    Subject.objects.create(owner=other_owner, title='Hidden', sort_order=0)

    assert [row.id for row in list_subjects(owner)] == [first.id, second.id]


@pytest.mark.django_db
def test_delete_subject_cascades_rows_not_objects(
    owner, object_storage, make_upload, notifier,
):
    """Rows go with the subject, the objects stay as orphans."""
    subject = create_subject(owner, 'Maths')
    uploaded = [
        upload_file(owner, subject.id, 'written', make_upload('a.pdf')),
        upload_file(owner, subject.id, 'performance', make_upload('b.pdf')),
    ]

    files_deleted = delete_subject(owner, subject.id, notifier)

    assert files_deleted == 2
    assert not Subject.objects.filter(id=subject.id).exists()
    assert File.objects.filter(owner=owner).count() == 0
    assert list_files(owner, subject.id, 'written') == ()
    for file_row in uploaded:
        assert object_storage.exists(file_row.object_path)
    assert find_orphan_paths(owner) == sorted(
        file_row.object_path for file_row in uploaded
    )
    assert notifier.messages[-1] == 'Deleted'


@pytest.mark.django_db
def test_delete_subject_of_other_owner(owner, other_subject):
    """Subjects of other owners are left alone."""
    delete_subject(owner, other_subject.id)

    assert Subject.objects.filter(id=other_subject.id).exists()


@pytest.mark.django_db
def test_delete_subject_database_failure(owner, subject, notifier, monkeypatch):
    """Nothing is deleted when the cascade fails."""
    monkeypatch.setattr(QuerySet, 'delete', _raise_database_error)

    with pytest.raises(SubjectDeleteFailedError):
        delete_subject(owner, subject.id, notifier)

    monkeypatch.undo()
    assert Subject.objects.filter(id=subject.id).exists()
    assert notifier.messages == ['Failed to delete subject']


@pytest.mark.django_db
def test_delete_all_subjects(
    owner, other_owner, object_storage, make_upload, notifier,
):
    """Every subject and row of the owner goes, other owners keep theirs."""
    maths = create_subject(owner, 'Maths')
    create_subject(owner, 'Physics')
    kept = create_subject(other_owner, 'History')
    uploaded = upload_file(owner, maths.id, 'written', make_upload())

    subjects_deleted = delete_all_subjects(owner, notifier)

    assert subjects_deleted == 2
    assert list_subjects(owner) == ()
    assert File.objects.filter(owner=owner).count() == 0
    assert list_subjects(other_owner) == (kept,)
    assert object_storage.exists(uploaded.object_path)
    assert notifier.messages[-1] == 'All subjects deleted'


@pytest.mark.django_db
def test_delete_all_subjects_database_failure(owner, notifier, monkeypatch):
    """Failures surface as DeleteAllFailedError."""
    create_subject(owner, 'Maths')
    monkeypatch.setattr(QuerySet, 'delete', _raise_database_error)

    with pytest.raises(DeleteAllFailedError):
        delete_all_subjects(owner, notifier)

    monkeypatch.undo()
    assert Subject.objects.filter(owner=owner).count() == 1
    assert notifier.messages[-1] == 'Delete all failed'


@pytest.mark.django_db
def test_seed_default_subjects(owner):
    """Seeding creates Subject 1 to Subject 8 in order."""
    seeded = seed_default_subjects(owner)

    assert [row.title for row in seeded] == [
        f'Subject {position}' for position in range(1, 9)
    ]
    assert [row.sort_order for row in seeded] == list(range(1, 9))
    assert list_subjects(owner) == seeded
