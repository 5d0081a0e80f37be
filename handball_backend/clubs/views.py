# clubs/views.py
from django.db.models import Count
from rest_framework import viewsets, filters

from .models import Club
from .serializers import ClubSerializer


class ClubViewSet(viewsets.ModelViewSet):
    """
    /api/clubs/            liste (?q= nom contient), création
    /api/clubs/{id}/       détail, mise à jour, suppression (supprime aussi ses équipes)
    """
    serializer_class = ClubSerializer
    filter_backends = [filters.OrderingFilter]
    ordering_fields = ["name", "id"]
    ordering = ["name"]

    def get_queryset(self):
        qs = Club.objects.annotate(teams_count=Count("teams"))
        q = self.request.query_params.get("q")
        if q:
            qs = qs.filter(name__icontains=q.strip())
        return qs
