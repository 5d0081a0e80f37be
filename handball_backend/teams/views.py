# teams/views.py
import logging

from django.db.models import Count
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, filters, status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from players.models import Player
from .models import Team, PlayerTeamSeason, resolve_position
from .serializers import TeamSerializer, RosterEntrySerializer, AssignPlayerSerializer

logger = logging.getLogger(__name__)


def _ids(raw):
    """support "1" ou "1,2,3" """
    return [s.strip() for s in str(raw).split(",") if s.strip().isdigit()]


class TeamViewSet(viewsets.ModelViewSet):
    """
    /api/teams/
      - ?club=<id>[,<id>...]    → équipes de ce(s) club(s)
      - ?season=<id>            → équipes de la saison
      - ?my=1                   → uniquement "mes équipes"
      - search, ordering
    /api/teams/{id}/players/                (GET roster, POST assigner)
    /api/teams/{id}/players/{player_id}/    (DELETE désassigner)
    """
    serializer_class = TeamSerializer
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["name", "category", "club__name"]
    ordering_fields = ["name", "category", "id"]
    ordering = ["name", "id"]

    def get_queryset(self):
        qs = (
            Team.objects
            .select_related("club", "season")
            .annotate(players_count=Count("memberships", distinct=True))
        )

        club = self.request.query_params.get("club") or self.request.query_params.get("club_id")
        if club:
            ids = _ids(club)
            if ids:
                qs = qs.filter(club_id__in=ids)

        season = self.request.query_params.get("season")
        if season and str(season).isdigit():
            qs = qs.filter(season_id=int(season))

        my = str(self.request.query_params.get("my", "")).lower()
        if my in {"1", "true", "yes"}:
            qs = qs.filter(is_my_team=True)

        return qs

    @action(detail=True, methods=["get", "post"], url_path="players", pagination_class=None)
    def players(self, request, pk=None):
        team = self.get_object()

        if request.method == "GET":
            qs = team.memberships.select_related("player").order_by("player__number", "id")
            return Response(RosterEntrySerializer(qs, many=True).data)

        payload = AssignPlayerSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data

        player = get_object_or_404(Player, pk=data["player"])
        if PlayerTeamSeason.objects.filter(team=team, player=player).exists():
            raise ValidationError({"player": "Player already assigned to this team"})

        membership = PlayerTeamSeason.objects.create(
            team=team,
            player=player,
            role=data.get("role") or "Player",
            position=resolve_position(data.get("position"), player.is_goalkeeper),
        )
        logger.info("Player %s assigned to team %s", player.pk, team.pk)
        return Response(RosterEntrySerializer(membership).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["delete"], url_path=r"players/(?P<player_id>\d+)")
    def remove_player(self, request, pk=None, player_id=None):
        team = self.get_object()
        membership = get_object_or_404(PlayerTeamSeason, team=team, player_id=player_id)
        membership.delete()
        logger.info("Player %s removed from team %s", player_id, team.pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
