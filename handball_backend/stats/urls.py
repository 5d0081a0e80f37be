# stats/urls.py
from django.urls import path
from .views import (
    MatchStatisticsView, PlayerStatisticsView, StandingsView, DashboardView, InsightsView,
)

urlpatterns = [
    path('matches/<int:match_id>/', MatchStatisticsView.as_view(), name='stats-match'),
    path('players/', PlayerStatisticsView.as_view(), name='stats-players'),
    path('standings/', StandingsView.as_view(), name='stats-standings'),
    path('dashboard/', DashboardView.as_view(), name='stats-dashboard'),
    path('insights/weekly/', InsightsView.as_view(http_method_names=['get', 'head', 'options']), name='stats-insights-weekly'),
    path('insights/weekly/recompute/', InsightsView.as_view(http_method_names=['post', 'options']),
         name='stats-insights-recompute'),
]
