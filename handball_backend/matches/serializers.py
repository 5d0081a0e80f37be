from rest_framework import serializers
from .models import (
    Match, GameEvent,
    EVENT_SUBTYPES, NINE_METER_POSITIONS,
)

SCORE_ERRORS = {"min_value": "Score must be zero or positive", "invalid": "Score must be an integer"}


# ---------- MATCH ----------
class MatchSerializer(serializers.ModelSerializer):
    home_team_name = serializers.CharField(source="home_team.name", read_only=True)
    away_team_name = serializers.CharField(source="away_team.name", read_only=True)
    home_club_name = serializers.CharField(source="home_team.club.name", read_only=True)
    away_club_name = serializers.CharField(source="away_team.club.name", read_only=True)
    is_finished = serializers.BooleanField(read_only=True)

    home_score = serializers.IntegerField(min_value=0, required=False, error_messages=SCORE_ERRORS)
    away_score = serializers.IntegerField(min_value=0, required=False, error_messages=SCORE_ERRORS)

    video_url = serializers.URLField(max_length=500, required=False, allow_null=True, allow_blank=True)
    first_half_video_start = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    second_half_video_start = serializers.IntegerField(min_value=0, required=False, allow_null=True)

    real_time_first_half_start = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    real_time_first_half_end = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    real_time_second_half_start = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    real_time_second_half_end = serializers.IntegerField(min_value=0, required=False, allow_null=True)

    class Meta:
        model = Match
        fields = [
            "id",
            "date",
            "home_team", "home_team_name", "home_club_name",
            "away_team", "away_team_name", "away_club_name",
            "home_score", "away_score",
            "status", "is_finished",
            "real_time_first_half_start", "real_time_first_half_end",
            "real_time_second_half_start", "real_time_second_half_end",
            "video_url", "first_half_video_start", "second_half_video_start",
            "home_events_locked", "away_events_locked",
        ]

    def validate_video_url(self, value):
        return value or None

    def validate(self, attrs):
        home = attrs.get("home_team", getattr(self.instance, "home_team", None))
        away = attrs.get("away_team", getattr(self.instance, "away_team", None))
        if home is not None and away is not None and home.pk == away.pk:
            raise serializers.ValidationError({"away_team": "Home and Away teams must be different"})
        return attrs


class HalfMarkerSerializer(serializers.Serializer):
    half = serializers.ChoiceField(choices=[1, 2])
    boundary = serializers.ChoiceField(choices=["start", "end"], default="start")
    timestamp = serializers.IntegerField(min_value=0, required=False)  # epoch ms, défaut = maintenant


# ---------- GAME EVENTS ----------
class GameEventSerializer(serializers.ModelSerializer):
    team_name = serializers.CharField(source="team.name", read_only=True)
    player_name = serializers.CharField(source="player.name", read_only=True, default=None)
    player_number = serializers.IntegerField(source="player.number", read_only=True, default=None)

    # absent → dérivé du chrono du match à la création
    timestamp = serializers.IntegerField(
        min_value=0, required=False,
        error_messages={"min_value": "timestamp must be zero or positive"},
    )
    video_timestamp = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    # position courante du lecteur vidéo (s) ; sert à calculer timestamp + video_timestamp
    video_time = serializers.FloatField(min_value=0, required=False, write_only=True)

    class Meta:
        model = GameEvent
        fields = [
            "id",
            "match",
            "team", "team_name",
            "player", "player_name", "player_number",
            "active_goalkeeper",
            "type", "subtype",
            "position", "distance", "zone", "goal_zone",
            "sanction_type",
            "is_collective", "has_opposition", "is_counter_attack",
            "timestamp", "video_timestamp", "video_time",
            "created_at",
        ]
        read_only_fields = ["zone", "created_at"]

    def _current(self, attrs, name, default=None):
        if name in attrs:
            return attrs[name]
        return getattr(self.instance, name, default)

    def validate(self, attrs):
        errors = {}

        match = self._current(attrs, "match")
        if self.instance is not None and "match" in attrs and attrs["match"].pk != self.instance.match_id:
            errors["match"] = "An event cannot be moved to another match"

        team = self._current(attrs, "team")
        if match is not None and team is not None and team.pk not in (match.home_team_id, match.away_team_id):
            errors["team"] = "Team does not play in this match"

        event_type = self._current(attrs, "type")
        subtype = self._current(attrs, "subtype") or ""
        sanction_type = self._current(attrs, "sanction_type")
        distance = self._current(attrs, "distance")
        position = self._current(attrs, "position")
        goal_zone = self._current(attrs, "goal_zone")

        # sanctions : subtype et sanction_type portent la même valeur
        if event_type == "Sanction":
            if sanction_type and not subtype:
                subtype = attrs["subtype"] = sanction_type
            elif subtype and not sanction_type:
                sanction_type = attrs["sanction_type"] = subtype
            elif subtype and sanction_type and subtype != sanction_type:
                errors["sanction_type"] = "sanction_type must match subtype"
        elif sanction_type:
            errors["sanction_type"] = "sanction_type is only allowed on Sanction events"

        allowed = EVENT_SUBTYPES.get(event_type, ())
        if subtype and subtype not in allowed:
            errors["subtype"] = f"Invalid subtype '{subtype}' for {event_type}"

        if distance == "7M":
            if position:
                attrs["position"] = None
            if event_type == "Shot" and subtype == "Block":
                errors["subtype"] = "A 7m shot cannot be blocked"
        elif distance == "9M" and position and position not in NINE_METER_POSITIONS:
            errors["position"] = f"Position {position} is not valid from 9m"

        if goal_zone and not (event_type == "Shot" and subtype in ("Goal", "Save")):
            errors["goal_zone"] = "goal_zone is only allowed on Goal or Save shots"

        if errors:
            raise serializers.ValidationError(errors)
        return attrs
