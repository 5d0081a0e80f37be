import pytest
from django.utils import timezone

from matches.models import Match

pytestmark = pytest.mark.django_db


def match_payload(teams, **extra):
    data = {
        "date": timezone.now().isoformat(),
        "home_team": teams[0].pk,
        "away_team": teams[1].pk,
    }
    data.update(extra)
    return data


def test_create_match(api_client, teams):
    resp = api_client.post("/api/matches/", match_payload(teams), format="json")
    assert resp.status_code == 201
    assert resp.data["status"] == "PENDING"
    assert resp.data["home_score"] == 0
    assert resp.data["home_team_name"] == "Granollers A"


def test_create_match_rejects_same_team(api_client, teams):
    resp = api_client.post(
        "/api/matches/", match_payload(teams, away_team=teams[0].pk), format="json"
    )
    assert resp.status_code == 400
    assert "away_team" in resp.data
    assert not Match.objects.exists()


def test_create_match_rejects_negative_score(api_client, teams):
    resp = api_client.post("/api/matches/", match_payload(teams, home_score=-1), format="json")
    assert resp.status_code == 400
    assert resp.data["home_score"][0] == "Score must be zero or positive"


def test_update_match_rejects_negative_score(api_client, match):
    resp = api_client.patch(f"/api/matches/{match.pk}/", {"away_score": -3}, format="json")
    assert resp.status_code == 400
    match.refresh_from_db()
    assert match.away_score == 0


def test_update_match_rejects_swapping_to_same_team(api_client, match):
    resp = api_client.patch(
        f"/api/matches/{match.pk}/", {"away_team": match.home_team_id}, format="json"
    )
    assert resp.status_code == 400


def test_patch_video_markers_and_locks(api_client, match):
    resp = api_client.patch(f"/api/matches/{match.pk}/", {
        "video_url": "https://video.example.com/match.mp4",
        "first_half_video_start": 95,
        "home_events_locked": True,
    }, format="json")
    assert resp.status_code == 200
    match.refresh_from_db()
    assert match.first_half_video_start == 95
    assert match.home_events_locked is True


def test_status_filter_accepts_aliases(api_client, match, teams):
    Match.objects.create(
        date=timezone.now(), home_team=teams[1], away_team=teams[0], status="COMPLETED"
    )
    resp = api_client.get("/api/matches/?status=finished")
    assert resp.status_code == 200
    assert [m["status"] for m in resp.data["results"]] == ["COMPLETED"]

    resp = api_client.get("/api/matches/?status=unknown")
    assert resp.data["results"] == []


def test_half_markers_drive_status(api_client, match):
    url = f"/api/matches/{match.pk}/half/"
    t0 = 1_700_000_000_000

    resp = api_client.post(url, {"half": 1, "boundary": "start", "timestamp": t0}, format="json")
    assert resp.status_code == 200
    assert resp.data["status"] == "IN_PROGRESS"
    assert resp.data["real_time_first_half_start"] == t0

    api_client.post(url, {"half": 1, "boundary": "end", "timestamp": t0 + 1_800_000}, format="json")
    api_client.post(url, {"half": 2, "boundary": "start", "timestamp": t0 + 2_400_000}, format="json")
    resp = api_client.post(url, {"half": 2, "boundary": "end", "timestamp": t0 + 4_200_000}, format="json")
    assert resp.status_code == 200
    assert resp.data["status"] == "COMPLETED"
    assert resp.data["is_finished"] is True

    resp = api_client.post(url, {"half": 1, "boundary": "start"}, format="json")
    assert resp.status_code == 400


def test_half_requires_first_half_started(api_client, match):
    resp = api_client.post(f"/api/matches/{match.pk}/half/", {"half": 2}, format="json")
    assert resp.status_code == 400
    assert resp.data["detail"] == "First half has not started yet"


def test_first_half_start_cannot_move_after_play(api_client, match, teams):
    url = f"/api/matches/{match.pk}/half/"
    t0 = 1_700_000_000_000
    api_client.post(url, {"half": 1, "boundary": "start", "timestamp": t0}, format="json")
    resp = api_client.post("/api/game-events/", {
        "match": match.pk, "team": teams[0].pk, "type": "Shot", "subtype": "Goal",
        "position": "CB", "distance": "9M", "timestamp": 300,
    }, format="json")
    assert resp.status_code == 201

    resp = api_client.post(url, {"half": 1, "boundary": "start", "timestamp": t0 + 60_000}, format="json")
    assert resp.status_code == 400
    assert resp.data["detail"] == "First half start cannot change once events are recorded"

    api_client.post(url, {"half": 1, "boundary": "end", "timestamp": t0 + 1_800_000}, format="json")
    resp = api_client.post(url, {"half": 1, "boundary": "start", "timestamp": t0 + 3_000_000}, format="json")
    assert resp.status_code == 400
    assert resp.data["detail"] == "First half has already ended"

    match.refresh_from_db()
    assert match.real_time_first_half_start == t0


def test_second_half_needs_first_half_end(api_client, match):
    url = f"/api/matches/{match.pk}/half/"
    t0 = 1_700_000_000_000
    api_client.post(url, {"half": 1, "boundary": "start", "timestamp": t0}, format="json")

    resp = api_client.post(url, {"half": 2, "boundary": "start", "timestamp": t0 + 2_400_000}, format="json")
    assert resp.status_code == 400
    assert resp.data["detail"] == "First half has not ended yet"

    resp = api_client.post(url, {"half": 1, "boundary": "end", "timestamp": t0 - 1}, format="json")
    assert resp.status_code == 400
    assert "timestamp" in resp.data

    api_client.post(url, {"half": 1, "boundary": "end", "timestamp": t0 + 1_800_000}, format="json")
    resp = api_client.post(url, {"half": 2, "boundary": "end", "timestamp": t0 + 4_000_000}, format="json")
    assert resp.status_code == 400
    assert resp.data["detail"] == "Second half has not started yet"

    resp = api_client.post(url, {"half": 2, "boundary": "start", "timestamp": t0 + 1_000_000}, format="json")
    assert resp.status_code == 400
    assert "timestamp" in resp.data

    match.refresh_from_db()
    assert match.real_time_second_half_start is None


def test_half_keeps_explicit_zero_timestamp(api_client, match):
    resp = api_client.post(
        f"/api/matches/{match.pk}/half/", {"half": 1, "boundary": "start", "timestamp": 0}, format="json"
    )
    assert resp.status_code == 200
    assert resp.data["real_time_first_half_start"] == 0
    assert resp.data["status"] == "IN_PROGRESS"

    resp = api_client.get(f"/api/matches/{match.pk}/clock/?now=60000")
    assert resp.data["half"] == 1
    assert resp.data["elapsed"] == 60


@pytest.mark.parametrize("value", ["inf", "-inf", "nan", "abc"])
def test_clock_rejects_non_finite_video_time(api_client, match, value):
    resp = api_client.get(f"/api/matches/{match.pk}/clock/?video_time={value}")
    assert resp.status_code == 400
    assert "video_time" in resp.data


def test_clock_endpoint(api_client, match):
    t0 = 1_700_000_000_000
    match.real_time_first_half_start = t0
    match.first_half_video_start = 100
    match.save()

    resp = api_client.get(f"/api/matches/{match.pk}/clock/?now={t0 + 60_000}&video_time=160.7")
    assert resp.status_code == 200
    assert resp.data["time"] == 60
    assert resp.data["elapsed"] == 60
    assert resp.data["should_tick"] is True
    assert resp.data["half"] == 1
    assert resp.data["video_time"] == 160
    assert resp.data["match_time"] == 60


def test_clock_before_kickoff(api_client, match):
    resp = api_client.get(f"/api/matches/{match.pk}/clock/")
    assert resp.status_code == 200
    assert resp.data["time"] is None
    assert resp.data["elapsed"] is None
    assert resp.data["half"] is None


def test_unknown_match_is_404(api_client, db):
    assert api_client.get("/api/matches/999/").status_code == 404
    assert api_client.get("/api/matches/999/events/").status_code == 404
