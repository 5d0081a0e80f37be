# clubs/serializers.py
from rest_framework import serializers
from .models import Club


class ClubSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=120, trim_whitespace=True)
    teams_count = serializers.SerializerMethodField()

    class Meta:
        model = Club
        fields = ["id", "name", "teams_count"]

    def get_teams_count(self, obj):
        annotated = getattr(obj, "teams_count", None)
        return annotated if annotated is not None else obj.teams.count()

    def validate_name(self, value):
        # unicité insensible à la casse ("BM Granollers" == "bm granollers")
        qs = Club.objects.filter(name__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("A club with this name already exists.")
        return value


class ClubMinimalSerializer(serializers.ModelSerializer):
    class Meta:
        model = Club
        fields = ['id', 'name']
