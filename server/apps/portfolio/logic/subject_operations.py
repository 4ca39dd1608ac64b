"""Business logic for subject operations.

Deleting subjects cascades to File rows only. The objects those rows
pointed at stay in storage as orphans; ``list_orphans`` reports them.
"""

import logging
from typing import Final

from django.db import DatabaseError, transaction
from django.db.models import Max

from server.apps.portfolio.exceptions import (
    DeleteAllFailedError,
    SubjectCreateFailedError,
    SubjectDeleteFailedError,
    SubjectsLoadFailedError,
)
from server.apps.portfolio.models import File, Subject
from server.apps.portfolio.notifications import (
    Notifier,
    get_notifier,
    reject,
    report,
)
from server.apps.portfolio.snapshots import SubjectSnapshot

logger = logging.getLogger(__name__)

DEFAULT_ICON: Final = '📘'

_SEED_COUNT: Final = 8
_SEED_ICON: Final = '📄'


def _next_sort_order(owner: str) -> int:
    highest = Subject.objects.filter(owner=owner).aggregate(
        highest=Max('sort_order'),
    )['highest']
    if highest is None:
        return 1
    return highest + 1


def list_subjects(
    owner: str,
    notifier: Notifier | None = None,
) -> tuple[SubjectSnapshot, ...]:
    """List an owner's subjects in display order.

    A new owner has no subjects; nothing is seeded implicitly.

    Args:
        owner: Owner of the subjects.
        notifier: Notification sink, settings default when omitted.

    Returns:
        Snapshots ordered by ascending ``sort_order``, ties by insertion.

    Raises:
        SubjectsLoadFailedError: If the query fails.
    """
    try:
        subjects = Subject.objects.filter(owner=owner).order_by(
            'sort_order',
            'id',
        )
        return tuple(SubjectSnapshot.from_model(row) for row in subjects)
    except DatabaseError as exc:
        logger.exception('Failed to load subjects for owner %s', owner)
        raise report(
            notifier or get_notifier(),
            SubjectsLoadFailedError(owner),
        ) from exc


def create_subject(
    owner: str,
    title: str,
    icon: str = DEFAULT_ICON,
    notifier: Notifier | None = None,
) -> SubjectSnapshot:
    """Append a new subject after the owner's existing ones.

    Args:
        owner: Owner of the subject.
        title: Subject title, surrounding whitespace is dropped.
        icon: Emoji shown next to the title.
        notifier: Notification sink, settings default when omitted.

    Returns:
        Snapshot of the created subject.

    Raises:
        ValidationError: If owner or title is missing.
        SubjectCreateFailedError: If the insert fails.
    """
    notifier = notifier or get_notifier()
    if not owner:
        raise reject(notifier, 'Sign in first')
    clean_title = (title or '').strip()
    if not clean_title:
        raise reject(notifier, 'Enter subject name')

    try:
        with transaction.atomic():
            subject = Subject.objects.create(
                owner=owner,
                title=clean_title,
                icon=icon,
                sort_order=_next_sort_order(owner),
            )
    except DatabaseError as exc:
        logger.exception('Failed to add subject for owner %s', owner)
        raise report(notifier, SubjectCreateFailedError(clean_title)) from exc

    logger.info(
        'Subject created: %s (ID: %d, sort: %d)',
        clean_title,
        subject.id,
        subject.sort_order,
    )
    notifier.notify('Subject added')
    return SubjectSnapshot.from_model(subject)


def delete_subject(
    owner: str,
    subject_id: int,
    notifier: Notifier | None = None,
) -> int:
    """Delete a subject and every File row filed under it.

    File rows go first so none is left referencing a missing subject.
    Their objects are NOT removed from storage.

    Args:
        owner: Owner of the subject.
        subject_id: ID of subject to delete.
        notifier: Notification sink, settings default when omitted.

    Returns:
        Number of File rows removed.

    Raises:
        SubjectDeleteFailedError: If the cascade fails; nothing is
            deleted in that case.
    """
    notifier = notifier or get_notifier()
    try:
        with transaction.atomic():
            files_deleted, _ = File.objects.filter(
                owner=owner,
                subject_id=subject_id,
            ).delete()
            Subject.objects.filter(owner=owner, id=subject_id).delete()
    except DatabaseError as exc:
        logger.exception('Failed to delete subject: ID=%d', subject_id)
        raise report(
            notifier,
            SubjectDeleteFailedError(f'ID={subject_id}'),
        ) from exc

    logger.info(
        'Subject deleted: ID=%d (%d file records, objects kept)',
        subject_id,
        files_deleted,
    )
    notifier.notify('Deleted')
    return files_deleted


def delete_all_subjects(
    owner: str,
    notifier: Notifier | None = None,
) -> int:
    """Delete every subject of an owner and all their File rows.

    Same cascade as ``delete_subject``: objects stay in storage.

    Args:
        owner: Owner whose catalog is cleared.
        notifier: Notification sink, settings default when omitted.

    Returns:
        Number of subjects removed.

    Raises:
        DeleteAllFailedError: If the cascade fails.
    """
    notifier = notifier or get_notifier()
    try:
        with transaction.atomic():
            files_deleted, _ = File.objects.filter(owner=owner).delete()
            subjects_deleted, _ = Subject.objects.filter(owner=owner).delete()
    except DatabaseError as exc:
        logger.exception('Delete all failed for owner %s', owner)
        raise report(notifier, DeleteAllFailedError(owner)) from exc

    logger.info(
        'All subjects deleted for owner %s: %d subjects, %d file records',
        owner,
        subjects_deleted,
        files_deleted,
    )
    notifier.notify('All subjects deleted')
    return subjects_deleted


def seed_default_subjects(owner: str) -> tuple[SubjectSnapshot, ...]:
    """Create the starter set of subjects for an owner.

    Opt-in helper, never called by the regular flows.

    Args:
        owner: Owner to seed.

    Returns:
        Snapshots of the created subjects.
    """
    with transaction.atomic():
        subjects = [
            Subject.objects.create(
                owner=owner,
                title=f'Subject {position}',
                icon=_SEED_ICON,
                sort_order=position,
            )
            for position in range(1, _SEED_COUNT + 1)
        ]

    logger.info('Seeded %d subjects for owner %s', len(subjects), owner)
    return tuple(SubjectSnapshot.from_model(row) for row in subjects)
