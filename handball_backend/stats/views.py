# stats/views.py
import datetime

from django.conf import settings
from django.db.models import Q
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from rest_framework.exceptions import ValidationError
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from matches.models import Match, GameEvent
from matches.serializers import MatchSerializer
from players.models import Player
from teams.models import Team
from teams.serializers import TeamSerializer

from .engine import compute_statistics, player_statistics
from .insights import compute_weekly_insights, default_week_range

POINTS_WIN = 2
POINTS_DRAW = 1


def _int_param(request, name):
    raw = request.query_params.get(name)
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError({name: f"{name} must be an integer"})


def _datetime_param(request, name):
    """YYYY-MM-DD ou ISO 8601 ; None si absent"""
    raw = request.query_params.get(name)
    if not raw:
        return None
    try:
        value = parse_datetime(raw)
        day = None if value else parse_date(raw)
    except ValueError:
        value = day = None
    if value is None:
        if day is None:
            raise ValidationError({name: f"{name} must be a date (YYYY-MM-DD) or an ISO datetime"})
        value = datetime.datetime.combine(day, datetime.time.min)
    if timezone.is_naive(value):
        value = timezone.make_aware(value)
    return value


def weekly_insights(start=None, end=None):
    default_start, default_end = default_week_range()
    start = start or default_start
    end = end or default_end
    events = (
        GameEvent.objects
        .filter(match__date__gte=start, match__date__lt=end)
        .select_related(
            "player",
            "match__home_team", "match__home_team__club",
            "match__away_team", "match__away_team__club",
        )
    )
    return {
        "range": {"start": start.isoformat(), "end": end.isoformat()},
        "generated_at": timezone.now().isoformat(),
        "metrics": compute_weekly_insights(events),
    }


def _player_rows(events, faced_shots):
    """Lignes joueurs enrichies (nom, numéro), triées par buts puis nom."""
    events = list(events)
    faced_shots = list(faced_shots)
    own_ids = {e.player_id for e in events if e.player_id}
    gk_ids = set(
        Player.objects.filter(id__in=own_ids, is_goalkeeper=True).values_list("id", flat=True)
    )
    rows = player_statistics(events, faced_shots, gk_ids)
    players = Player.objects.in_bulk(list(rows))
    out = []
    for pid, row in rows.items():
        p = players.get(pid)
        row["name"] = p.name if p else ""
        row["number"] = p.number if p else None
        out.append(row)
    out.sort(key=lambda r: (-r["goals"], r["name"]))
    return out


class MatchStatisticsView(APIView):
    """
    GET /api/stats/matches/<match_id>/
    -> { match, home: {team, attack, goalkeeping, players}, away: {...} }
    """
    permission_classes = [AllowAny]

    def get(self, request, match_id):
        match = get_object_or_404(
            Match.objects.select_related("home_team", "away_team"), pk=match_id
        )
        events = list(match.events.all())

        def side(team_id, opponent_id):
            team_events = [e for e in events if e.team_id == team_id]
            opponent_shots = [e for e in events if e.team_id == opponent_id and e.type == "Shot"]
            return {
                "team_id": team_id,
                "attack": compute_statistics(team_events),
                "goalkeeping": compute_statistics(opponent_shots, goalkeeper_mode=True),
                "players": _player_rows(team_events, opponent_shots),
            }

        home = side(match.home_team_id, match.away_team_id)
        home["team_name"] = match.home_team.name
        away = side(match.away_team_id, match.home_team_id)
        away["team_name"] = match.away_team.name
        return Response({
            "match": MatchSerializer(match).data,
            "home": home,
            "away": away,
        })


class PlayerStatisticsView(APIView):
    """
    GET /api/stats/players/?team=<id>&match=<id>
    -> statistiques par joueur ; les gardiens sont évalués sur les tirs adverses
    """
    permission_classes = [AllowAny]

    def get(self, request):
        team_id = _int_param(request, "team")
        match_id = _int_param(request, "match")

        base = GameEvent.objects.all()
        if match_id is not None:
            base = base.filter(match_id=match_id)

        own = base
        faced = base.filter(type="Shot", active_goalkeeper__isnull=False)
        if team_id is not None:
            own = own.filter(team_id=team_id)
            faced = faced.exclude(team_id=team_id).filter(
                Q(match__home_team_id=team_id) | Q(match__away_team_id=team_id)
            )
        return Response(_player_rows(own, faced))


class StandingsView(APIView):
    """
    GET /api/stats/standings/?season=<id>
    -> classement trié (points, diff, buts pour, nom) sur les matchs terminés
    """
    permission_classes = [AllowAny]

    def get(self, request):
        season_id = _int_param(request, "season")

        teams = Team.objects.select_related("club")
        if season_id is not None:
            teams = teams.filter(season_id=season_id)

        table = {
            t.id: {
                "team_id": t.id,
                "team_name": t.name,
                "club_name": t.club.name if t.club_id else "",
                "played": 0,
                "wins": 0,
                "draws": 0,
                "losses": 0,
                "goals_for": 0,
                "goals_against": 0,
                "goal_diff": 0,
                "points": 0,
            }
            for t in teams
        }

        def apply_match(m):
            hs, as_ = int(m.home_score), int(m.away_score)
            th, ta = table.get(m.home_team_id), table.get(m.away_team_id)
            if not th or not ta:
                return

            th["played"] += 1
            ta["played"] += 1
            th["goals_for"] += hs
            th["goals_against"] += as_
            ta["goals_for"] += as_
            ta["goals_against"] += hs

            if hs > as_:
                th["wins"] += 1
                ta["losses"] += 1
                th["points"] += POINTS_WIN
            elif hs < as_:
                ta["wins"] += 1
                th["losses"] += 1
                ta["points"] += POINTS_WIN
            else:
                th["draws"] += 1
                ta["draws"] += 1
                th["points"] += POINTS_DRAW
                ta["points"] += POINTS_DRAW

        for m in (
            Match.objects
            .only("id", "home_team_id", "away_team_id", "home_score", "away_score", "status")
            .filter(status="COMPLETED")
        ):
            apply_match(m)

        rows = []
        for r in table.values():
            r["goal_diff"] = r["goals_for"] - r["goals_against"]
            rows.append(r)

        rows.sort(key=lambda r: (-r["points"], -r["goal_diff"], -r["goals_for"], r["team_name"]))
        for i, r in enumerate(rows, start=1):
            r["position"] = i
        return Response(rows)


class DashboardView(APIView):
    """GET /api/stats/dashboard/ -> matchs en attente, derniers résultats, mes équipes."""
    permission_classes = [AllowAny]

    def get(self, request):
        matches = Match.objects.select_related(
            "home_team", "home_team__club", "away_team", "away_team__club",
        )
        pending = matches.filter(status="PENDING").order_by("date", "id")[
            :settings.DASHBOARD_PENDING_MATCH_LIMIT
        ]
        recent = matches.filter(status="COMPLETED").order_by("-date", "-id")[
            :settings.DASHBOARD_RECENT_MATCH_LIMIT
        ]
        my_teams = Team.objects.select_related("club", "season").filter(is_my_team=True)
        return Response({
            "pending_matches": MatchSerializer(pending, many=True).data,
            "recent_matches": MatchSerializer(recent, many=True).data,
            "my_teams": TeamSerializer(my_teams, many=True).data,
            "weekly_insights": weekly_insights(),
        })


class InsightsView(APIView):
    """
    GET  /api/stats/insights/weekly/?start=YYYY-MM-DD&end=YYYY-MM-DD
    POST /api/stats/insights/weekly/recompute/
    -> faits marquants (buteurs, buts collectifs, fautes provoquées) ;
       par défaut la semaine précédente, fin exclue
    """
    permission_classes = [AllowAny]

    def get(self, request):
        default_start, default_end = default_week_range()
        start = _datetime_param(request, "start") or default_start
        end = _datetime_param(request, "end") or default_end
        if end <= start:
            raise ValidationError({"end": "end must be after start"})
        return Response(weekly_insights(start, end))

    def post(self, request):
        # rien n'est mis en cache : recalculer revient à relire
        return self.get(request)
