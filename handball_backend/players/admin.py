# players/admin.py
from django.contrib import admin

from teams.models import PlayerTeamSeason
from .models import Player


class MembershipInline(admin.TabularInline):
    model = PlayerTeamSeason
    extra = 0
    fields = ["team", "role", "position"]
    raw_id_fields = ["team"]


@admin.register(Player)
class PlayerAdmin(admin.ModelAdmin):
    list_display = ("id", "number", "name", "handedness", "is_goalkeeper")
    list_filter = ("handedness", "is_goalkeeper")
    search_fields = ("name",)
    ordering = ("name",)
    inlines = [MembershipInline]
