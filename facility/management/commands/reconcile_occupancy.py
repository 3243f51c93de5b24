from django.core.management.base import BaseCommand

from facility.services.rooms import reconcile_occupancy


class Command(BaseCommand):
    help = "Recompute room occupant counters from resident assignments."

    def handle(self, *args, **opts):
        fixed = reconcile_occupancy()
        for room_name, stored, actual in fixed:
            self.stdout.write(self.style.WARNING(f"fixed: {room_name} {stored} -> {actual}"))
        self.stdout.write(self.style.SUCCESS(f"Occupancy reconciled ({len(fixed)} room(s) corrected)."))
