from django.core.exceptions import ValidationError
from django.db import models


class Season(models.Model):
    name = models.CharField(max_length=60)  # ex. "2025-2026"
    start_date = models.DateField()
    end_date = models.DateField()

    class Meta:
        ordering = ['-start_date', 'id']

    def clean(self):
        super().clean()
        if self.start_date and self.end_date and self.end_date <= self.start_date:
            raise ValidationError("End date must be after start date")

    def __str__(self):
        return self.name
