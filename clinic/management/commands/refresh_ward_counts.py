from django.core.management.base import BaseCommand
from django.utils import timezone

from clinic.services import notifications
from clinic.services.beds import refresh_ward_records
from clinic.services.reports import format_ward


class Command(BaseCommand):
    help = "Recompute Ward bed counters from Bed rows; broadcast a wards-refreshed event."

    def handle(self, *args, **options):
        now = timezone.now()
        wards = refresh_ward_records()

        # No surrounding transaction here, so push directly.
        delivered = notifications.send_event(notifications.WARDS_REFRESHED, {
            'version': int(now.timestamp()),
            'wards': [format_ward(w) for w in wards],
        })
        if not delivered:
            self.stdout.write(self.style.WARNING("wards-refreshed event was not delivered"))

        self.stdout.write(self.style.SUCCESS(f"Refreshed {len(wards)} wards at {now}"))
