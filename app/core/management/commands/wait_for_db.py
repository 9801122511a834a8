"""
Block until the database accepts connections.

Used as a container entrypoint step before migrate/runserver:

    python manage.py wait_for_db
    python manage.py wait_for_db --max-attempts 10 --backoff 2
"""

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from core.connection import DatabaseConnectionManager
from core.exceptions import StoreUnavailableError


class Command(BaseCommand):
    help = "Wait for the database to become available, retrying with fixed backoff."

    def add_arguments(self, parser):
        parser.add_argument("--database", default="default", help="Database alias to check.")
        parser.add_argument(
            "--max-attempts",
            type=int,
            default=None,
            help="Override DATABASE_CONNECT_MAX_ATTEMPTS.",
        )
        parser.add_argument(
            "--backoff",
            type=float,
            default=None,
            help="Override DATABASE_CONNECT_BACKOFF_SECONDS.",
        )

    def handle(self, *args, **options):
        max_attempts = options["max_attempts"]
        if max_attempts is None:
            max_attempts = settings.DATABASE_CONNECT_MAX_ATTEMPTS
        backoff = options["backoff"]
        if backoff is None:
            backoff = settings.DATABASE_CONNECT_BACKOFF_SECONDS

        manager = DatabaseConnectionManager(
            max_attempts=max_attempts,
            backoff_seconds=backoff,
            alias=options["database"],
        )

        try:
            attempts = manager.ensure_connected()
        except StoreUnavailableError as e:
            raise CommandError(str(e)) from e

        self.stdout.write(
            self.style.SUCCESS(f"Database '{options['database']}' available (attempts: {attempts})")
        )
