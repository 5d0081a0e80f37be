from django.core.validators import MaxValueValidator
from django.db import models

HANDEDNESS = [("LEFT", "Left"), ("RIGHT", "Right")]

MAX_PLAYER_NUMBER = 99


class Player(models.Model):
    name = models.CharField(max_length=120)
    number = models.PositiveSmallIntegerField(validators=[MaxValueValidator(MAX_PLAYER_NUMBER)])
    handedness = models.CharField(max_length=5, choices=HANDEDNESS, default="RIGHT")
    is_goalkeeper = models.BooleanField(default=False)

    class Meta:
        ordering = ['name', 'id']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(number__lte=MAX_PLAYER_NUMBER),
                name='player_number_lte_99',
            ),
        ]

    def __str__(self):
        return f"#{self.number} {self.name}"
