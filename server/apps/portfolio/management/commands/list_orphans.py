"""Management command to report objects no File row references."""

import logging
from typing import Any, final, override

from django.core.management.base import BaseCommand

from server.apps.portfolio.logic.file_operations import find_orphan_paths
from server.apps.profiles.models import Profile

logger = logging.getLogger(__name__)


@final
class Command(BaseCommand):
    """List orphan objects under an owner's storage prefix.

    Report only: orphans are an accepted outcome of failed inserts and
    subject deletion, and nothing here removes them.
    """

    help = 'List stored objects of an owner that no record references'

    @override
    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument('owner', help='Owner identifier to scan')

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the report.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        owner = options['owner']
        avatar_paths = Profile.objects.filter(
            owner=owner,
        ).exclude(
            avatar_path='',
        ).values_list('avatar_path', flat=True)

        orphans = find_orphan_paths(owner, also_referenced=avatar_paths)

        for orphan_path in orphans:
            self.stdout.write(orphan_path)

        logger.info('Found %d orphan objects for %s', len(orphans), owner)
        self.stdout.write(
            self.style.SUCCESS(f'Found {len(orphans)} orphan objects'),
        )
