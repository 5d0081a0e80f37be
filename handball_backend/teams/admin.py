# teams/admin.py
from django.contrib import admin

from .models import Team, PlayerTeamSeason


# ---------- Roster sur la page d'une équipe ----------
class RosterInline(admin.TabularInline):
    model = PlayerTeamSeason
    extra = 0
    fields = ["player", "role", "position"]
    raw_id_fields = ["player"]


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "category", "club", "season", "is_my_team")
    list_filter = ("is_my_team", "season", "club")
    search_fields = ("name", "category", "club__name")
    inlines = [RosterInline]


@admin.register(PlayerTeamSeason)
class PlayerTeamSeasonAdmin(admin.ModelAdmin):
    list_display = ("id", "player", "team", "role", "position")
    list_filter = ("position", "team__season")
    search_fields = ("player__name", "team__name")
    raw_id_fields = ("player", "team")
