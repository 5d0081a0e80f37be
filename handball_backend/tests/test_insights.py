import datetime

import pytest
from django.utils import timezone

from matches.models import GameEvent, Match
from stats.insights import compute_weekly_insights, default_week_range

pytestmark = pytest.mark.django_db


def loaded_events():
    return GameEvent.objects.select_related(
        "player", "match__home_team__club", "match__away_team__club",
    )


def add_event(match, team, player=None, **fields):
    data = {"type": "Shot", "subtype": "Goal", "timestamp": 60}
    data.update(fields)
    return GameEvent.objects.create(match=match, team=team, player=player, **data)


def test_default_week_range_is_previous_monday_to_monday():
    thursday = timezone.make_aware(datetime.datetime(2026, 10, 15, 18, 30))
    start, end = default_week_range(thursday)
    assert start == timezone.make_aware(datetime.datetime(2026, 10, 5))
    assert end == timezone.make_aware(datetime.datetime(2026, 10, 12))


def test_no_events_gives_empty_metrics():
    metrics = compute_weekly_insights([])
    assert metrics["total_events"] == 0
    assert metrics["top_scorer_overall"] is None
    assert metrics["top_scorers_by_category"] == []
    assert metrics["team_with_most_fouls"] is None


def test_scorers_collective_goals_and_fouls(started_match, teams, players):
    home, away = teams
    shooter, keeper = players
    add_event(started_match, home, shooter)
    add_event(started_match, home, shooter, is_collective=True)
    add_event(started_match, away, keeper)
    add_event(started_match, home, shooter, subtype="Miss")
    # faute de Barça : provoquée par Granollers
    add_event(started_match, away, keeper, type="Sanction", subtype="Foul", sanction_type="Foul")

    metrics = compute_weekly_insights(loaded_events())

    assert metrics["total_events"] == 5
    top = metrics["top_scorer_overall"]
    assert top["player_name"] == "Aleix Gomez"
    assert top["goals"] == 2
    assert top["club_name"] == "BM Granollers"
    assert metrics["top_individual_scorer"]["goals"] == 1
    assert [e["team_category"] for e in metrics["top_scorers_by_category"]] == ["Senior M"]
    assert metrics["team_with_most_collective_goals"]["team_name"] == "Granollers A"
    assert metrics["team_with_most_collective_goals"]["count"] == 1
    assert metrics["team_with_most_fouls"]["team_name"] == "Granollers A"


def test_weekly_endpoint_filters_on_match_date(api_client, started_match, teams, players):
    home, away = teams
    add_event(started_match, home, players[0])
    old = Match.objects.create(date=timezone.now() - datetime.timedelta(days=30),
                               home_team=away, away_team=home, status="COMPLETED")
    add_event(old, away, players[1])

    today = timezone.localdate()
    resp = api_client.get("/api/stats/insights/weekly/", {
        "start": (today - datetime.timedelta(days=1)).isoformat(),
        "end": (today + datetime.timedelta(days=1)).isoformat(),
    })
    assert resp.status_code == 200
    assert resp.data["metrics"]["total_events"] == 1
    assert resp.data["metrics"]["top_scorer_overall"]["player_name"] == "Aleix Gomez"
    assert resp.data["range"]["start"].startswith((today - datetime.timedelta(days=1)).isoformat())


def test_recompute_returns_fresh_insights(api_client, started_match, teams, players):
    add_event(started_match, teams[0], players[0])
    today = timezone.localdate()
    resp = api_client.post(
        f"/api/stats/insights/weekly/recompute/?start={today.isoformat()}"
        f"&end={(today + datetime.timedelta(days=1)).isoformat()}"
    )
    assert resp.status_code == 200
    assert resp.data["metrics"]["total_events"] == 1

    assert api_client.get("/api/stats/insights/weekly/recompute/").status_code == 405


@pytest.mark.parametrize("query,field", [
    ("start=yesterday", "start"),
    ("end=2026-13-01", "end"),
    ("start=2026-10-12&end=2026-10-05", "end"),
    ("start=2026-10-12&end=2026-10-12", "end"),
])
def test_weekly_endpoint_rejects_bad_ranges(api_client, query, field):
    resp = api_client.get(f"/api/stats/insights/weekly/?{query}")
    assert resp.status_code == 400
    assert field in resp.data


def test_default_range_excludes_current_week(api_client, started_match, teams, players):
    add_event(started_match, teams[0], players[0])
    resp = api_client.get("/api/stats/insights/weekly/")
    assert resp.status_code == 200
    assert resp.data["metrics"]["total_events"] == 0
