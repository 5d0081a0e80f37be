# matches/admin.py
from django.contrib import admin

from .models import Match, GameEvent


# ---------- Événements sur la page d'un match ----------
class GameEventInline(admin.TabularInline):
    model = GameEvent
    extra = 0
    fields = ["timestamp", "team", "player", "type", "subtype", "distance", "position", "goal_zone", "video_timestamp"]
    raw_id_fields = ["team", "player"]
    ordering = ["timestamp", "id"]


# ---------- Admin Match ----------
@admin.register(Match)
class MatchAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "date",
        "home_team",
        "home_score",
        "away_score",
        "away_team",
        "status",
    )
    list_filter = ("status", "home_team__season", "date")
    search_fields = ("home_team__name", "away_team__name", "home_team__club__name", "away_team__club__name")
    date_hierarchy = "date"
    raw_id_fields = ("home_team", "away_team")
    inlines = [GameEventInline]
    fieldsets = (
        (None, {"fields": ("date", "home_team", "away_team", "home_score", "away_score", "status")}),
        ("Live clock", {"fields": (
            "real_time_first_half_start", "real_time_first_half_end",
            "real_time_second_half_start", "real_time_second_half_end",
        )}),
        ("Video", {"fields": ("video_url", "first_half_video_start", "second_half_video_start")}),
        ("Locks", {"fields": ("home_events_locked", "away_events_locked")}),
    )


# ---------- Admin GameEvent ----------
@admin.register(GameEvent)
class GameEventAdmin(admin.ModelAdmin):
    ordering = ("-id",)
    list_display = ("id", "match", "team", "timestamp", "type", "subtype", "player", "zone", "goal_zone")
    list_filter = ("type", "subtype", "team")
    search_fields = ("player__name", "team__name")
    raw_id_fields = ("match", "team", "player", "active_goalkeeper")
    readonly_fields = ("zone", "created_at")

    # Permet /admin/matches/gameevent/add/?match=12&team=3&timestamp=440
    def get_changeform_initial_data(self, request):
        initial = super().get_changeform_initial_data(request)
        for key in ("match", "team", "timestamp"):
            value = request.GET.get(key)
            if value and value.isdigit():
                initial[key] = int(value)
        return initial
