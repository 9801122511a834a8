"""
Report chat records that break group or message invariants.

    python manage.py check_chat_integrity

Exits non-zero when anything is found, so it can gate deploys or run from
cron after manual data fixes.
"""

from django.core.management.base import BaseCommand, CommandError

from chat.services import ChatIntegrityService


class Command(BaseCommand):
    help = "Check groups and messages for invariant violations."

    def handle(self, *args, **options):
        problems = ChatIntegrityService.scan()

        for problem in problems:
            self.stderr.write(f"[{problem.code}] #{problem.object_id}: {problem.detail}")

        if problems:
            raise CommandError(f"{len(problems)} chat integrity problem(s) found")

        self.stdout.write(self.style.SUCCESS("Chat data is consistent"))
