from django.db import models
from django.core.exceptions import ValidationError
from teams.models import Team
from players.models import Player

from .clock import ClockMarkers
from .rules import derive_zone, is_goal

MATCH_STATUS = [
    ("PENDING", "Pending"),
    ("IN_PROGRESS", "In progress"),
    ("COMPLETED", "Completed"),
]

EVENT_TYPES = [
    ("Shot", "Shot"),
    ("Turnover", "Turnover"),
    ("Sanction", "Sanction"),
]

# Sous-types autorisés par type d'événement
EVENT_SUBTYPES = {
    "Shot": ("Goal", "Save", "Miss", "Post", "Block"),
    "Turnover": ("Pass", "Catch", "Dribble", "Steps", "Area", "Offensive Foul"),
    "Sanction": ("Foul", "Yellow", "2min", "Red", "Blue Card"),
}

SHOT_POSITIONS = [("LW", "Left wing"), ("LB", "Left back"), ("CB", "Centre back"),
                  ("RB", "Right back"), ("RW", "Right wing")]
NINE_METER_POSITIONS = {"LB", "CB", "RB"}

DISTANCES = [("6M", "6 m"), ("9M", "9 m"), ("7M", "7 m (penalty)")]

# Grille 3x3 de la cage, lue de gauche à droite et de haut en bas
GOAL_ZONES = [
    ("TL", "Top left"), ("TM", "Top middle"), ("TR", "Top right"),
    ("ML", "Middle left"), ("MM", "Middle"), ("MR", "Middle right"),
    ("BL", "Bottom left"), ("BM", "Bottom middle"), ("BR", "Bottom right"),
]


class Match(models.Model):
    date = models.DateTimeField()
    home_team = models.ForeignKey(
        Team, on_delete=models.CASCADE, related_name='home_matches'
    )
    away_team = models.ForeignKey(
        Team, on_delete=models.CASCADE, related_name='away_matches'
    )
    home_score = models.PositiveIntegerField(default=0)
    away_score = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=12, choices=MATCH_STATUS, default='PENDING')

    # Chrono "direct" : horodatages muraux (epoch ms) posés par les boutons de mi-temps
    real_time_first_half_start = models.BigIntegerField(null=True, blank=True)
    real_time_first_half_end = models.BigIntegerField(null=True, blank=True)
    real_time_second_half_start = models.BigIntegerField(null=True, blank=True)
    real_time_second_half_end = models.BigIntegerField(null=True, blank=True)

    # Calibration vidéo : offsets (s) du coup d'envoi de chaque mi-temps dans la vidéo
    video_url = models.URLField(max_length=500, null=True, blank=True)
    first_half_video_start = models.PositiveIntegerField(null=True, blank=True)
    second_half_video_start = models.PositiveIntegerField(null=True, blank=True)

    home_events_locked = models.BooleanField(default=False)
    away_events_locked = models.BooleanField(default=False)

    class Meta:
        ordering = ['-date', '-id']
        constraints = [
            # interdit home == away
            models.CheckConstraint(
                condition=~models.Q(home_team=models.F('away_team')),
                name='match_home_neq_away',
            ),
        ]

    def clean(self):
        super().clean()
        if self.home_team_id and self.away_team_id and self.home_team_id == self.away_team_id:
            raise ValidationError("Home and Away teams must be different")

    @property
    def is_finished(self):
        return self.status == "COMPLETED"

    @property
    def clock_markers(self):
        return ClockMarkers.from_match(self)

    def side_of(self, team_id):
        if team_id == self.home_team_id:
            return "home"
        if team_id == self.away_team_id:
            return "away"
        return None

    def __str__(self):
        return f"{self.home_team} vs {self.away_team}"


class GameEvent(models.Model):
    match = models.ForeignKey(Match, on_delete=models.CASCADE, related_name='events')
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name='events')
    player = models.ForeignKey(
        Player, on_delete=models.SET_NULL, null=True, blank=True, related_name='events'
    )
    # gardien adverse en place au moment du tir
    active_goalkeeper = models.ForeignKey(
        Player, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='goalkeeper_events',
    )

    type = models.CharField(max_length=10, choices=EVENT_TYPES)
    subtype = models.CharField(max_length=20, blank=True, default="")

    position = models.CharField(max_length=5, choices=SHOT_POSITIONS, null=True, blank=True)
    distance = models.CharField(max_length=3, choices=DISTANCES, null=True, blank=True)
    zone = models.CharField(max_length=8, null=True, blank=True, editable=False)
    goal_zone = models.CharField(max_length=2, choices=GOAL_ZONES, null=True, blank=True)
    sanction_type = models.CharField(max_length=20, null=True, blank=True)

    is_collective = models.BooleanField(default=False)
    has_opposition = models.BooleanField(default=False)
    is_counter_attack = models.BooleanField(default=False)

    timestamp = models.PositiveIntegerField()  # secondes depuis le coup d'envoi
    video_timestamp = models.PositiveIntegerField(null=True, blank=True)  # secondes dans la vidéo

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['timestamp', 'id']
        indexes = [
            models.Index(fields=['match', 'timestamp'], name='event_match_ts_idx'),
        ]

    def save(self, *args, **kwargs):
        # zone canonique toujours dérivée de position + distance
        self.zone = derive_zone(self.position, self.distance)
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and ({"position", "distance"} & set(update_fields)):
            kwargs["update_fields"] = set(update_fields) | {"zone"}
        super().save(*args, **kwargs)

    @property
    def is_goal(self):
        return is_goal(self.type, self.subtype)

    def __str__(self):
        label = self.subtype or self.type
        return f"{self.match_id} {self.timestamp}s {label}"
