# players/serializers.py
from rest_framework import serializers

from teams.models import PLAYER_POSITIONS
from .models import Player, HANDEDNESS, MAX_PLAYER_NUMBER


class PlayerSerializer(serializers.ModelSerializer):
    name = serializers.CharField(
        max_length=120,
        error_messages={"blank": "Name is required", "required": "Name is required"},
    )
    number = serializers.IntegerField(
        min_value=0,
        max_value=MAX_PLAYER_NUMBER,
        error_messages={
            "min_value": "Player number must be zero or positive",
            "max_value": f"Player number must be at most {MAX_PLAYER_NUMBER}",
            "invalid": "Player number must be an integer",
        },
    )
    handedness = serializers.ChoiceField(
        choices=HANDEDNESS,
        required=False,
        error_messages={"invalid_choice": "Handedness must be LEFT or RIGHT"},
    )
    teams = serializers.SerializerMethodField()

    class Meta:
        model = Player
        fields = ["id", "name", "number", "handedness", "is_goalkeeper", "teams"]

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value

    def get_teams(self, obj):
        return [
            {
                "id": m.team_id,
                "name": m.team.name,
                "category": m.team.category,
                "club": m.team.club.name if m.team.club_id else None,
                "season": m.team.season_id,
                "role": m.role,
                "position": m.position,
            }
            for m in obj.memberships.all()
        ]


# ---------- payloads des actions d'import ----------
class DuplicateCheckSerializer(serializers.Serializer):
    names = serializers.ListField(
        child=serializers.CharField(allow_blank=False),
        allow_empty=False,
        error_messages={"empty": "Names array is required", "required": "Names array is required"},
    )
    threshold = serializers.IntegerField(min_value=0, required=False, default=3)


class BatchPlayersSerializer(serializers.Serializer):
    # chaque joueur est validé individuellement dans la vue
    players = serializers.ListField(
        child=serializers.DictField(),
        allow_empty=False,
        error_messages={"empty": "Players array is required", "required": "Players array is required"},
    )
    team = serializers.IntegerField(min_value=1, required=False)


class MergePlayerDataSerializer(PlayerSerializer):
    position = serializers.ChoiceField(choices=PLAYER_POSITIONS, required=False)

    class Meta(PlayerSerializer.Meta):
        fields = ["name", "number", "handedness", "is_goalkeeper", "position"]


class MergePlayerSerializer(serializers.Serializer):
    old_player = serializers.IntegerField(min_value=1)
    new_player_data = MergePlayerDataSerializer()
    team = serializers.IntegerField(min_value=1, required=False)
