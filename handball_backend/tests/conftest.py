import datetime

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from clubs.models import Club
from matches.models import Match
from players.models import Player
from seasons.models import Season
from teams.models import Team, PlayerTeamSeason, POSITION_GOALKEEPER


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def season(db):
    return Season.objects.create(
        name="2025-2026",
        start_date=datetime.date(2025, 9, 1),
        end_date=datetime.date(2026, 6, 30),
    )


@pytest.fixture
def clubs(db):
    return (
        Club.objects.create(name="BM Granollers"),
        Club.objects.create(name="FC Barcelona"),
    )


@pytest.fixture
def teams(clubs, season):
    home = Team.objects.create(name="Granollers A", category="Senior M", club=clubs[0], season=season, is_my_team=True)
    away = Team.objects.create(name="Barça A", category="Senior M", club=clubs[1], season=season)
    return home, away


@pytest.fixture
def players(teams):
    home, away = teams
    shooter = Player.objects.create(name="Aleix Gomez", number=8)
    keeper = Player.objects.create(name="Emil Nielsen", number=1, is_goalkeeper=True)
    PlayerTeamSeason.objects.create(player=shooter, team=home)
    PlayerTeamSeason.objects.create(player=keeper, team=away, position=POSITION_GOALKEEPER)
    return shooter, keeper


@pytest.fixture
def match(teams):
    home, away = teams
    return Match.objects.create(date=timezone.now(), home_team=home, away_team=away)


@pytest.fixture
def started_match(match):
    """Match démarré en vidéo : coup d'envoi à 100 s dans la vidéo."""
    match.first_half_video_start = 100
    match.status = "IN_PROGRESS"
    match.save()
    return match
