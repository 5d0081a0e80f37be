# teams/serializers.py
from rest_framework import serializers
from .models import Team, PlayerTeamSeason, PLAYER_POSITIONS


class TeamSerializer(serializers.ModelSerializer):
    club_name = serializers.CharField(source="club.name", read_only=True)
    season_name = serializers.CharField(source="season.name", read_only=True)
    players_count = serializers.SerializerMethodField()

    class Meta:
        model = Team
        fields = [
            "id", "name", "category",
            "club", "club_name",
            "season", "season_name",
            "is_my_team", "players_count",
        ]

    def get_players_count(self, obj):
        annotated = getattr(obj, "players_count", None)
        if annotated is not None:
            return annotated
        return obj.memberships.count()


class TeamMinimalSerializer(serializers.ModelSerializer):
    club_name = serializers.CharField(source="club.name", read_only=True)

    class Meta:
        model = Team
        fields = ["id", "name", "category", "club", "club_name"]


class RosterEntrySerializer(serializers.ModelSerializer):
    """Une ligne du roster : le joueur + son rôle / poste dans CETTE équipe."""
    player_name = serializers.CharField(source="player.name", read_only=True)
    number = serializers.IntegerField(source="player.number", read_only=True)
    handedness = serializers.CharField(source="player.handedness", read_only=True)
    is_goalkeeper = serializers.SerializerMethodField()

    class Meta:
        model = PlayerTeamSeason
        fields = [
            "id", "player", "player_name", "number", "handedness",
            "is_goalkeeper", "role", "position",
        ]

    def get_is_goalkeeper(self, obj):
        return bool(obj.player.is_goalkeeper or obj.is_goalkeeper)


class AssignPlayerSerializer(serializers.Serializer):
    player = serializers.IntegerField(min_value=1)
    role = serializers.CharField(max_length=40, required=False, default="Player")
    position = serializers.ChoiceField(choices=PLAYER_POSITIONS, required=False)
