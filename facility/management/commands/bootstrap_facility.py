# facility/management/commands/bootstrap_facility.py
import logging

from django.core.management import call_command
from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError

from facility.services.seed import seed_all

logger = logging.getLogger(__name__)

# Schema objects that already exist are fine; anything else is fatal
BENIGN_MARKERS = ("already exists", "duplicate column")


class Command(BaseCommand):
    help = "Apply migrations (adopting pre-existing tables) and seed reference data (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--skip-migrate", action="store_true", help="Only seed reference data.")
        parser.add_argument("--no-demo-users", action="store_true", help="Do not create the default accounts.")

    def handle(self, *args, **opts):
        if not opts["skip_migrate"]:
            self.migrate(verbosity=opts["verbosity"])
        counts = seed_all(users=not opts["no_demo_users"])
        for name, created in counts.items():
            self.stdout.write(self.style.SUCCESS(f"ok: {name} (+{created})"))
        self.stdout.write(self.style.SUCCESS("Facility bootstrap complete."))

    def migrate(self, verbosity: int = 1) -> None:
        try:
            call_command("migrate", fake_initial=True, interactive=False, verbosity=verbosity)
        except DatabaseError as exc:
            message = str(exc).lower()
            if any(marker in message for marker in BENIGN_MARKERS):
                logger.info("Schema already up to date: %s", exc)
                return
            logger.error("Schema migration failed: %s", exc)
            raise CommandError(f"Schema migration failed: {exc}") from exc
