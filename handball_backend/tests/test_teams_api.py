import pytest

from teams.models import PlayerTeamSeason, POSITION_GOALKEEPER, POSITION_UNSET

pytestmark = pytest.mark.django_db


def test_team_list_counts_players(api_client, players, teams):
    resp = api_client.get("/api/teams/")
    assert resp.status_code == 200
    counts = {t["id"]: t["players_count"] for t in resp.data["results"]}
    assert counts == {teams[0].pk: 1, teams[1].pk: 1}


def test_my_teams_filter(api_client, teams):
    resp = api_client.get("/api/teams/?my=1")
    assert [t["name"] for t in resp.data["results"]] == ["Granollers A"]


def test_roster_lists_players_with_position(api_client, players, teams):
    resp = api_client.get(f"/api/teams/{teams[1].pk}/players/")
    assert resp.status_code == 200
    assert len(resp.data) == 1
    entry = resp.data[0]
    assert entry["player_name"] == "Emil Nielsen"
    assert entry["position"] == POSITION_GOALKEEPER
    assert entry["is_goalkeeper"] is True


def test_assign_player_to_team(api_client, players, teams):
    shooter, keeper = players
    resp = api_client.post(f"/api/teams/{teams[1].pk}/players/", {"player": shooter.pk}, format="json")
    assert resp.status_code == 201
    assert resp.data["position"] == POSITION_UNSET
    assert PlayerTeamSeason.objects.filter(team=teams[1], player=shooter).exists()


def test_assign_goalkeeper_defaults_to_goalkeeper_position(api_client, players, teams):
    _, keeper = players
    resp = api_client.post(f"/api/teams/{teams[0].pk}/players/", {"player": keeper.pk}, format="json")
    assert resp.status_code == 201
    assert resp.data["position"] == POSITION_GOALKEEPER


def test_assign_twice_is_rejected(api_client, players, teams):
    shooter, _ = players
    resp = api_client.post(f"/api/teams/{teams[0].pk}/players/", {"player": shooter.pk}, format="json")
    assert resp.status_code == 400
    assert resp.data["player"] == "Player already assigned to this team"


def test_assign_unknown_player(api_client, teams):
    resp = api_client.post(f"/api/teams/{teams[0].pk}/players/", {"player": 4242}, format="json")
    assert resp.status_code == 404


def test_remove_player_from_team(api_client, players, teams):
    shooter, _ = players
    resp = api_client.delete(f"/api/teams/{teams[0].pk}/players/{shooter.pk}/")
    assert resp.status_code == 204
    assert not PlayerTeamSeason.objects.filter(team=teams[0], player=shooter).exists()

    resp = api_client.delete(f"/api/teams/{teams[0].pk}/players/{shooter.pk}/")
    assert resp.status_code == 404


def test_club_name_unique_case_insensitive(api_client, clubs):
    resp = api_client.post("/api/clubs/", {"name": "bm granollers"}, format="json")
    assert resp.status_code == 400


def test_season_end_must_follow_start(api_client, db):
    resp = api_client.post("/api/seasons/", {
        "name": "2026-2027", "start_date": "2026-09-01", "end_date": "2026-08-01",
    }, format="json")
    assert resp.status_code == 400
    assert "end_date" in resp.data
