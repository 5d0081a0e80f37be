import logging

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from matches.models import Match, GameEvent

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Spread the events of a match uniformly between 0s and --duration (ordered by timestamp, then id)."

    def add_arguments(self, parser):
        parser.add_argument("match_id", type=int)
        parser.add_argument("--duration", type=int, default=60 * 60, help="Total match duration in seconds (default 3600)")

    def handle(self, *args, **opts):
        match_id = opts["match_id"]
        duration = opts["duration"]
        if duration < 0:
            raise CommandError("--duration must be zero or positive")
        if not Match.objects.filter(pk=match_id).exists():
            raise CommandError(f"Match {match_id} not found")

        events = list(GameEvent.objects.filter(match_id=match_id).order_by("timestamp", "id"))
        if not events:
            self.stdout.write(self.style.WARNING(f"No events found for match {match_id}"))
            return

        step = duration / (len(events) - 1) if len(events) > 1 else 0
        with transaction.atomic():
            for index, event in enumerate(events):
                event.timestamp = round(index * step)
                event.save(update_fields=["timestamp"])

        logger.info("Reflowed %d events for match %s", len(events), match_id)
        self.stdout.write(self.style.SUCCESS(f"Updated {len(events)} events for match {match_id}"))
