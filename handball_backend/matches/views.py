# matches/views.py
import logging
import math

from django.utils import timezone
from django.utils.dateparse import parse_date
from django.db import transaction
from django.db.models import Q
from django.shortcuts import get_object_or_404

from rest_framework import viewsets, filters
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from .clock import (
    compute_clock_time,
    event_timestamps,
    first_half_duration,
    live_elapsed_seconds,
    match_time_from_video,
    now_ms,
)
from .models import Match, GameEvent
from .rules import (
    EventRuleError,
    assert_match_started,
    assert_second_half_started_if_needed,
    assert_team_unlocked,
    first_half_boundary_seconds,
    score_patch_for_goal,
)
from .serializers import MatchSerializer, GameEventSerializer, HalfMarkerSerializer

logger = logging.getLogger(__name__)

STATUS_ALIASES = {
    "PENDING": "PENDING", "SCHEDULED": "PENDING",
    "IN_PROGRESS": "IN_PROGRESS", "LIVE": "IN_PROGRESS",
    "COMPLETED": "COMPLETED", "FINISHED": "COMPLETED", "FT": "COMPLETED",
}

HALF_MARKER_ORDER = (
    "real_time_first_half_start", "real_time_first_half_end",
    "real_time_second_half_start", "real_time_second_half_end",
)

MARKER_FIELDS = HALF_MARKER_ORDER + (
    "first_half_video_start", "second_half_video_start",
)


def _rule_error(exc):
    return ValidationError({"detail": str(exc)})


def _apply_score(match, team_id, event_type, subtype, direction):
    """Ajuste le score du match (déjà verrouillé) pour un but ajouté / retiré."""
    patch = score_patch_for_goal(match, team_id, event_type, subtype, direction)
    if not patch:
        return None
    for field, value in patch.items():
        setattr(match, field, value)
    match.save(update_fields=list(patch))
    logger.info("Match %s score now %s-%s", match.pk, match.home_score, match.away_score)
    return patch


def _lock_match(match_id):
    return Match.objects.select_for_update().get(pk=match_id)


# -----------------------
# DRF ViewSets (API REST)
# -----------------------
class MatchViewSet(viewsets.ModelViewSet):
    """
    Endpoints:
      - /api/matches/                (liste filtrable/paginée)
      - /api/matches/{id}/           (PATCH pour les repères chrono / vidéo / verrous)
      - /api/matches/{id}/clock/     (lecture du chrono)
      - /api/matches/{id}/half/      (POST début / fin de mi-temps)
      - /api/matches/{id}/events/    (événements du match, non paginés)
      - /api/matches/recent/         (terminés récents)
      - /api/matches/upcoming/       (en attente à venir)
      - /api/matches/live/           (en cours)
    """
    serializer_class = MatchSerializer

    # Recherche & tri
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["home_team__name", "away_team__name", "home_team__club__name", "away_team__club__name"]
    ordering_fields = ["date", "id"]
    ordering = ["-date", "-id"]

    def get_queryset(self):
        """
        Pré-charge les équipes et applique les filtres query string :
          - status: pending / in_progress / completed (alias: live, finished)
          - team: matchs joués par l'équipe (domicile ou extérieur)
          - season: saison de l'équipe à domicile
          - date_from/date_to (YYYY-MM-DD)
        """
        qs = Match.objects.select_related(
            "home_team", "home_team__club", "away_team", "away_team__club",
        )
        params = self.request.query_params

        raw_status = params.get("status")
        if raw_status:
            s = STATUS_ALIASES.get(raw_status.upper().replace("-", "_"))
            qs = qs.filter(status=s) if s else qs.none()

        team = params.get("team")
        if team and team.isdigit():
            qs = qs.filter(Q(home_team_id=int(team)) | Q(away_team_id=int(team)))

        season = params.get("season")
        if season and season.isdigit():
            qs = qs.filter(home_team__season_id=int(season))

        date_from = params.get("date_from")
        date_to = params.get("date_to")
        if date_from:
            d = parse_date(date_from)
            if d:
                qs = qs.filter(date__date__gte=d)
        if date_to:
            d = parse_date(date_to)
            if d:
                qs = qs.filter(date__date__lte=d)

        return qs

    def perform_update(self, serializer):
        changed = [f for f in MARKER_FIELDS if f in serializer.validated_data]
        match = serializer.save()
        if changed:
            logger.info("Match %s clock markers updated: %s", match.pk, ", ".join(changed))

    # -------- Chrono -------- #
    @action(detail=True, methods=["get"])
    def clock(self, request, pk=None):
        """
        Lecture du chrono. Params optionnels :
          - now=<epoch ms>        (défaut: maintenant)
          - video_time=<secondes> (position du lecteur → temps de match)
        """
        match = self.get_object()
        markers = match.clock_markers

        now = request.query_params.get("now")
        now = int(now) if now and now.isdigit() else now_ms()

        reading = compute_clock_time(markers, now)
        elapsed = live_elapsed_seconds(markers, now)
        data = {
            "match": match.pk,
            "now": now,
            "time": reading.time,
            "should_tick": reading.should_tick,
            "elapsed": elapsed,
            "half": 2 if markers.second_half_started else (1 if markers.has_live_start or markers.has_video_start else None),
            "first_half_duration": first_half_duration(markers),
        }

        raw_video = request.query_params.get("video_time")
        if raw_video:
            try:
                video_time = float(raw_video)
            except ValueError:
                video_time = math.nan
            if not math.isfinite(video_time):
                raise ValidationError({"video_time": "A valid number is required."})
            data["video_time"] = math.floor(max(0.0, video_time))
            data["match_time"] = match_time_from_video(markers, data["video_time"])

        return Response(data)

    @action(detail=True, methods=["post"])
    def half(self, request, pk=None):
        """
        Body JSON: {"half": 1|2, "boundary": "start"|"end", "timestamp": <epoch ms optionnel>}
        Début 1MT → IN_PROGRESS ; fin 2MT → COMPLETED.
        Les repères se posent dans l'ordre 1MT début, 1MT fin, 2MT début, 2MT fin.
        """
        payload = HalfMarkerSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        half = payload.validated_data["half"]
        boundary = payload.validated_data["boundary"]
        if "timestamp" in payload.validated_data:
            stamp = payload.validated_data["timestamp"]
        else:
            stamp = now_ms()

        field = f"real_time_{'first' if half == 1 else 'second'}_half_{boundary}"

        with transaction.atomic():
            match = _lock_match(self.get_object().pk)
            if match.is_finished:
                raise ValidationError({"detail": "Match is already finished"})

            if half == 1 and boundary == "start":
                if match.real_time_first_half_end is not None:
                    raise ValidationError({"detail": "First half has already ended"})
                if match.events.exists():
                    raise ValidationError({"detail": "First half start cannot change once events are recorded"})
            if half == 1 and boundary == "end" and match.real_time_second_half_start is not None:
                raise ValidationError({"detail": "Second half has already started"})
            if (half, boundary) != (1, "start") and match.real_time_first_half_start is None:
                raise ValidationError({"detail": "First half has not started yet"})
            if half == 2 and match.real_time_first_half_end is None:
                raise ValidationError({"detail": "First half has not ended yet"})
            if half == 2 and boundary == "end" and match.real_time_second_half_start is None:
                raise ValidationError({"detail": "Second half has not started yet"})

            previous = HALF_MARKER_ORDER.index(field) - 1
            if previous >= 0:
                floor = getattr(match, HALF_MARKER_ORDER[previous])
                if floor is not None and stamp < floor:
                    raise ValidationError({"timestamp": "Marker cannot be earlier than the previous half marker"})

            setattr(match, field, stamp)
            update = [field]

            if half == 1 and boundary == "start" and match.status == "PENDING":
                match.status = "IN_PROGRESS"
                update.append("status")
            if half == 2 and boundary == "end":
                match.status = "COMPLETED"
                update.append("status")

            match.save(update_fields=update)

        logger.info("Match %s: half %s %s at %s", match.pk, half, boundary, stamp)
        return Response(self.get_serializer(match).data)

    @action(detail=True, methods=["get"], pagination_class=None)
    def events(self, request, pk=None):
        match = self.get_object()
        qs = (
            GameEvent.objects
            .filter(match=match)
            .select_related("player", "team")
            .order_by("timestamp", "id")
        )
        return Response(GameEventSerializer(qs, many=True).data)

    # -------- Actions pratiques pour le front -------- #
    @action(detail=False, methods=["get"])
    def recent(self, request):
        """Matchs terminés récents (non paginés). Param: limit (def=10)."""
        limit = _limit(request, 10)
        qs = self.get_queryset().filter(status="COMPLETED").order_by("-date", "-id")[:limit]
        return Response(self.get_serializer(qs, many=True).data)

    @action(detail=False, methods=["get"])
    def upcoming(self, request):
        """Matchs en attente à venir (non paginés). Param: limit (def=10)."""
        limit = _limit(request, 10)
        qs = (
            self.get_queryset()
            .filter(status="PENDING", date__gte=timezone.now())
            .order_by("date", "id")[:limit]
        )
        return Response(self.get_serializer(qs, many=True).data)

    @action(detail=False, methods=["get"])
    def live(self, request):
        """Matchs en cours."""
        qs = self.get_queryset().filter(status="IN_PROGRESS").order_by("-date", "-id")
        return Response(self.get_serializer(qs, many=True).data)


def _limit(request, default):
    raw = request.query_params.get("page_size") or request.query_params.get("limit")
    try:
        value = int(raw) if raw else default
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


class GameEventViewSet(viewsets.ModelViewSet):
    """
    /api/game-events/
      - ?match=<id> ?team=<id> ?player=<id> ?type=Shot
    /api/game-events/match/{match_id}/   (non paginé, ordre chronologique)

    Création : `timestamp` explicite, sinon dérivé du chrono du match
    (ou de `video_time` en mode vidéo, qui renseigne aussi `video_timestamp`).
    Un but met à jour le score du match ; sa suppression le décrémente.
    """
    serializer_class = GameEventSerializer

    def get_queryset(self):
        qs = GameEvent.objects.select_related("player", "team", "match")
        params = self.request.query_params
        for param, field in (("match", "match_id"), ("team", "team_id"), ("player", "player_id")):
            raw = params.get(param)
            if raw and raw.isdigit():
                qs = qs.filter(**{field: int(raw)})
        event_type = params.get("type")
        if event_type:
            qs = qs.filter(type=event_type)
        return qs.order_by("timestamp", "id")

    @action(detail=False, methods=["get"], url_path=r"match/(?P<match_id>\d+)", pagination_class=None)
    def by_match(self, request, match_id=None):
        match = get_object_or_404(Match, pk=match_id)
        qs = self.get_queryset().filter(match=match)
        return Response(self.get_serializer(qs, many=True).data)

    def perform_create(self, serializer):
        data = serializer.validated_data
        video_time = data.pop("video_time", None)

        with transaction.atomic():
            match = _lock_match(data["match"].pk)
            team_id = data["team"].pk
            try:
                assert_team_unlocked(match, team_id)
                assert_match_started(match)

                extra = {}
                if "timestamp" not in data:
                    timestamp, video_timestamp = event_timestamps(
                        match.clock_markers, now_ms(), video_time
                    )
                    if timestamp is None:
                        raise ValidationError({"timestamp": "timestamp is required when the match clock is not running"})
                    extra["timestamp"] = timestamp
                    if video_timestamp is not None:
                        extra["video_timestamp"] = video_timestamp
                elif video_time is not None and data.get("video_timestamp") is None:
                    extra["video_timestamp"] = math.floor(video_time)

                timestamp = extra.get("timestamp", data.get("timestamp"))
                assert_second_half_started_if_needed(first_half_boundary_seconds(match), timestamp, match)
            except EventRuleError as exc:
                raise _rule_error(exc) from exc

            event = serializer.save(**extra)
            _apply_score(match, event.team_id, event.type, event.subtype, +1)

        logger.info("Event %s (%s/%s) recorded for match %s at %ss",
                    event.pk, event.type, event.subtype or "-", match.pk, event.timestamp)

    def perform_update(self, serializer):
        instance = serializer.instance
        data = serializer.validated_data
        video_time = data.pop("video_time", None)
        before = (instance.team_id, instance.type, instance.subtype)

        with transaction.atomic():
            match = _lock_match(instance.match_id)
            new_team_id = data["team"].pk if "team" in data else instance.team_id
            try:
                assert_team_unlocked(match, instance.team_id)
                assert_team_unlocked(match, new_team_id)
            except EventRuleError as exc:
                raise _rule_error(exc) from exc

            extra = {}
            if video_time is not None:
                extra["video_timestamp"] = math.floor(video_time)
                if "timestamp" not in data:
                    extra["timestamp"] = match_time_from_video(match.clock_markers, video_time)

            timestamp = extra.get("timestamp", data.get("timestamp"))
            if timestamp is not None and timestamp != instance.timestamp:
                try:
                    assert_second_half_started_if_needed(
                        first_half_boundary_seconds(match), timestamp, match
                    )
                except EventRuleError as exc:
                    raise _rule_error(exc) from exc

            event = serializer.save(**extra)
            after = (event.team_id, event.type, event.subtype)
            if before != after:
                _apply_score(match, *before, -1)
                _apply_score(match, *after, +1)

    def perform_destroy(self, instance):
        with transaction.atomic():
            match = _lock_match(instance.match_id)
            try:
                assert_team_unlocked(match, instance.team_id)
            except EventRuleError as exc:
                raise _rule_error(exc) from exc
            event_id = instance.pk
            instance.delete()
            _apply_score(match, instance.team_id, instance.type, instance.subtype, -1)
        logger.info("Event %s deleted from match %s", event_id, match.pk)
