# seasons/views.py
from django.utils import timezone
from rest_framework import viewsets
from .models import Season
from .serializers import SeasonSerializer


class SeasonViewSet(viewsets.ModelViewSet):
    """
    /api/seasons/
      - ?current=1 → saisons contenant la date du jour
    """
    queryset = Season.objects.all()
    serializer_class = SeasonSerializer

    def get_queryset(self):
        qs = super().get_queryset()
        current = str(self.request.query_params.get("current", "")).lower()
        if current in {"1", "true", "yes"}:
            today = timezone.localdate()
            qs = qs.filter(start_date__lte=today, end_date__gte=today)
        return qs
