# matches/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from . import views as api

app_name = "matches"

router = DefaultRouter()
router.register(r"matches",     api.MatchViewSet,     basename="match")
router.register(r"game-events", api.GameEventViewSet, basename="game-event")

urlpatterns = [
    path("", include(router.urls)),
]
