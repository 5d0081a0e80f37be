# players/views.py
import logging

from django.db import transaction
from django.db.models import Prefetch
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, filters, status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from matches.models import GameEvent
from teams.models import Team, PlayerTeamSeason, POSITION_GOALKEEPER, resolve_position
from .models import Player
from .serializers import (
    PlayerSerializer,
    DuplicateCheckSerializer,
    BatchPlayersSerializer,
    MergePlayerSerializer,
)
from .similarity import find_similar_players

logger = logging.getLogger(__name__)


def _first_error(errors):
    """Premier message d'erreur lisible d'un dict/list DRF."""
    if isinstance(errors, dict):
        for value in errors.values():
            return _first_error(value)
    if isinstance(errors, (list, tuple)) and errors:
        return _first_error(errors[0])
    return str(errors)


class PlayerViewSet(viewsets.ModelViewSet):
    """
    /api/players/
      - ?team=<id>            → ne renvoie que les joueurs de cette équipe
      - ?team=<id1,id2,...>   → plusieurs équipes possibles
      - ?goalkeepers=1        → uniquement les gardiens
      - search, ordering
    /api/players/duplicates/  (POST) → noms proches déjà en base
    /api/players/batch/       (POST) → création en lot (+ équipe optionnelle)
    /api/players/merge/       (POST) → fusion d'un ancien joueur dans un nouveau
    """
    serializer_class = PlayerSerializer

    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["name", "memberships__team__name", "memberships__team__club__name"]
    ordering_fields = ["name", "number", "id"]
    ordering = ["name", "id"]

    def get_queryset(self):
        qs = Player.objects.prefetch_related(
            Prefetch(
                "memberships",
                queryset=PlayerTeamSeason.objects.select_related("team", "team__club"),
            )
        )

        raw = self.request.query_params.get("team") or self.request.query_params.get("team_id")
        if raw:
            ids = [s.strip() for s in str(raw).split(",") if s.strip().isdigit()]
            if ids:
                qs = qs.filter(memberships__team_id__in=ids).distinct()

        gk = str(self.request.query_params.get("goalkeepers", "")).lower()
        if gk in {"1", "true", "yes"}:
            qs = qs.filter(is_goalkeeper=True)

        return qs

    # -------- Import / dédoublonnage -------- #
    @action(detail=False, methods=["post"])
    def duplicates(self, request):
        payload = DuplicateCheckSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        names = payload.validated_data["names"]
        threshold = payload.validated_data["threshold"]

        candidates = list(Player.objects.prefetch_related("memberships__team__club"))
        out = []
        for name in names:
            matches = find_similar_players(name, threshold, queryset=candidates)
            out.append({"name": name, "has_duplicates": bool(matches), "matches": matches})
        return Response({"duplicates": out})

    @action(detail=False, methods=["post"])
    def batch(self, request):
        """
        Body JSON:
        {
          "team": 3,
          "players": [
            {"name": "Aleix Gómez", "number": 8, "handedness": "RIGHT"},
            {"name": "Gonzalo Pérez de Vargas", "number": 1, "is_goalkeeper": true}
          ]
        }
        Un joueur invalide n'empêche pas la création des autres.
        """
        payload = BatchPlayersSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        items = payload.validated_data["players"]

        team = None
        team_id = payload.validated_data.get("team")
        if team_id:
            team = Team.objects.filter(pk=team_id).first()
            if team is None:
                raise ValidationError({"team": "Team not found"})

        created, failed = [], []
        for item in items:
            ser = PlayerSerializer(data=item)
            if not ser.is_valid():
                failed.append({"player": item, "error": _first_error(ser.errors)})
                continue
            with transaction.atomic():
                player = ser.save()
                if team is not None:
                    PlayerTeamSeason.objects.create(
                        player=player,
                        team=team,
                        position=resolve_position(None, player.is_goalkeeper),
                    )
            created.append(player)

        if failed:
            logger.warning("Batch import: %d player(s) rejected", len(failed))

        return Response({
            "success": True,
            "created": len(created),
            "errors": len(failed),
            "players": PlayerSerializer(created, many=True).data,
            "failed_players": failed,
        })

    @action(detail=False, methods=["post"])
    def merge(self, request):
        """
        Remplace `old_player` par un nouveau joueur :
        événements de match et appartenances aux équipes sont transférés,
        puis l'ancien joueur est supprimé (le tout atomiquement).
        """
        payload = MergePlayerSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data

        old = get_object_or_404(Player, pk=data["old_player"])
        new_data = dict(data["new_player_data"])
        position = new_data.pop("position", None)
        resolved = resolve_position(position, new_data.get("is_goalkeeper", False))

        team_id = data.get("team")
        if team_id and not Team.objects.filter(pk=team_id).exists():
            raise ValidationError({"team": "Team not found"})

        with transaction.atomic():
            old_memberships = list(old.memberships.all())
            was_goalkeeper = old.is_goalkeeper or any(
                m.position == POSITION_GOALKEEPER for m in old_memberships
            )

            new_data["is_goalkeeper"] = (
                new_data.get("is_goalkeeper", False)
                or was_goalkeeper
                or resolved == POSITION_GOALKEEPER
            )
            player = Player.objects.create(**new_data)

            moved = GameEvent.objects.filter(player=old).update(player=player)
            GameEvent.objects.filter(active_goalkeeper=old).update(active_goalkeeper=player)

            for m in old_memberships:
                PlayerTeamSeason.objects.create(
                    player=player, team_id=m.team_id, role=m.role, position=m.position,
                )

            if team_id and not PlayerTeamSeason.objects.filter(player=player, team_id=team_id).exists():
                PlayerTeamSeason.objects.create(player=player, team_id=team_id, position=resolved)

            old.delete()

        logger.info("Merged player %s into %s (%d events moved)", data["old_player"], player.pk, moved)
        player = self.get_queryset().get(pk=player.pk)
        return Response(
            {
                "success": True,
                "player": PlayerSerializer(player).data,
                "message": "Successfully merged player. Statistics and team associations transferred.",
            },
            status=status.HTTP_200_OK,
        )
