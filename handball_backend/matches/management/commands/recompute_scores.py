import logging

from django.core.management.base import BaseCommand
from django.db import transaction
from django.db.models import Count, F, Q

from matches.models import Match

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Rebuild home/away scores from recorded goal events (all matches, or the given ids)."

    def add_arguments(self, parser):
        parser.add_argument("match_ids", nargs="*", type=int)
        parser.add_argument("--dry-run", action="store_true", help="Report differences without saving")

    def handle(self, *args, **opts):
        goal = Q(events__type="Shot", events__subtype="Goal")
        qs = Match.objects.annotate(
            home_goals=Count("events", filter=goal & Q(events__team_id=F("home_team_id"))),
            away_goals=Count("events", filter=goal & Q(events__team_id=F("away_team_id"))),
        )
        if opts["match_ids"]:
            qs = qs.filter(pk__in=opts["match_ids"])

        fixed = 0
        with transaction.atomic():
            for m in qs:
                if (m.home_score, m.away_score) == (m.home_goals, m.away_goals):
                    continue
                self.stdout.write(
                    f"  match {m.pk}: {m.home_score}-{m.away_score} -> {m.home_goals}-{m.away_goals}"
                )
                fixed += 1
                if not opts["dry_run"]:
                    Match.objects.filter(pk=m.pk).update(home_score=m.home_goals, away_score=m.away_goals)

        logger.info("recompute_scores: %d match(es) out of sync", fixed)
        self.stdout.write(self.style.SUCCESS(f"{fixed} match(es) {'to fix' if opts['dry_run'] else 'fixed'}"))
