# handballtrack/urls.py
from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse


def root_ping(request):
    return JsonResponse({
        "name": "HandballTrack API",
        "admin": "/admin/",
        "endpoints": [
            "/api/clubs/",
            "/api/seasons/",
            "/api/players/",
            "/api/teams/",
            "/api/matches/",
            "/api/game-events/",
            "/api/stats/",
        ],
    })


urlpatterns = [
    path("", root_ping, name="root"),
    path("admin/", admin.site.urls),

    # APIs
    path("api/stats/", include("stats.urls")),
    path("api/", include("clubs.urls")),
    path("api/", include("seasons.urls")),
    path("api/", include("players.urls")),
    path("api/", include("teams.urls")),
    path("api/", include("matches.urls")),
]
