from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from matches.models import GameEvent

pytestmark = pytest.mark.django_db


def make_events(match, team, timestamps, subtype="Miss"):
    return [
        GameEvent.objects.create(match=match, team=team, type="Shot", subtype=subtype, timestamp=ts)
        for ts in timestamps
    ]


def test_reflow_spreads_events_uniformly(match, teams):
    first, second, third = make_events(match, teams[0], [5, 5, 7])

    call_command("reflow_match_timestamps", match.pk, "--duration", "100", stdout=StringIO())

    for event in (first, second, third):
        event.refresh_from_db()
    assert [first.timestamp, second.timestamp, third.timestamp] == [0, 50, 100]


def test_reflow_single_event_goes_to_zero(match, teams):
    (event,) = make_events(match, teams[0], [900])
    call_command("reflow_match_timestamps", match.pk, stdout=StringIO())
    event.refresh_from_db()
    assert event.timestamp == 0


def test_reflow_unknown_match(db):
    with pytest.raises(CommandError):
        call_command("reflow_match_timestamps", 999, stdout=StringIO())


def test_recompute_scores_from_goal_events(match, teams):
    make_events(match, teams[0], [10, 20], subtype="Goal")
    make_events(match, teams[1], [30], subtype="Goal")
    make_events(match, teams[1], [40], subtype="Save")

    out = StringIO()
    call_command("recompute_scores", "--dry-run", stdout=out)
    match.refresh_from_db()
    assert (match.home_score, match.away_score) == (0, 0)
    assert "0-0 -> 2-1" in out.getvalue()

    call_command("recompute_scores", match.pk, stdout=StringIO())
    match.refresh_from_db()
    assert (match.home_score, match.away_score) == (2, 1)
