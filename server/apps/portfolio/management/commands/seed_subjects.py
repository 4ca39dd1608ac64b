"""Management command to create the starter subjects for an owner."""

import logging
from typing import Any, final, override

from django.core.management.base import BaseCommand, CommandError

from server.apps.portfolio.logic.subject_operations import (
    list_subjects,
    seed_default_subjects,
)

logger = logging.getLogger(__name__)


@final
class Command(BaseCommand):
    """Seed ``Subject 1`` to ``Subject 8`` for one owner."""

    help = 'Create the default starter subjects for an owner'

    @override
    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument('owner', help='Owner identifier to seed')
        parser.add_argument(
            '--force',
            action='store_true',
            help='Seed even if the owner already has subjects',
        )

    @override
    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the seeding command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        owner = options['owner']
        existing = list_subjects(owner)

        if existing and not options['force']:
            raise CommandError(
                f'Owner {owner} already has {len(existing)} subjects, '
                'use --force to seed anyway',
            )

        seeded = seed_default_subjects(owner)
        self.stdout.write(
            self.style.SUCCESS(f'Seeded {len(seeded)} subjects for {owner}'),
        )
