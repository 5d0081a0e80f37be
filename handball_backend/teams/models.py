from django.db import models
from clubs.models import Club
from seasons.models import Season
from players.models import Player

# Poste sur le terrain (par équipe : un joueur peut changer de poste d'une saison à l'autre)
POSITION_UNSET = 0
POSITION_GOALKEEPER = 1

PLAYER_POSITIONS = [
    (POSITION_UNSET, "Unset"),
    (POSITION_GOALKEEPER, "Goalkeeper"),
    (2, "Left wing"),
    (3, "Left back"),
    (4, "Centre back"),
    (5, "Pivot"),
    (6, "Right back"),
    (7, "Right wing"),
]

POSITION_VALUES = {value for value, _ in PLAYER_POSITIONS}


def resolve_position(position=None, is_goalkeeper=False):
    if position is not None:
        return position
    return POSITION_GOALKEEPER if is_goalkeeper else POSITION_UNSET


class Team(models.Model):
    name = models.CharField(max_length=120)
    category = models.CharField(max_length=60, blank=True, default="")  # ex. "Senior M", "Juvenil F"
    club = models.ForeignKey(Club, on_delete=models.CASCADE, related_name='teams')
    season = models.ForeignKey(Season, on_delete=models.CASCADE, related_name='teams')
    is_my_team = models.BooleanField(default=False)

    players = models.ManyToManyField(
        Player, through='PlayerTeamSeason', related_name='teams', blank=True
    )

    class Meta:
        ordering = ['name', 'id']

    def __str__(self):
        return f"{self.club} - {self.name}" if self.club_id else self.name


class PlayerTeamSeason(models.Model):
    player = models.ForeignKey(Player, on_delete=models.CASCADE, related_name='memberships')
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name='memberships')
    role = models.CharField(max_length=40, default="Player")
    position = models.PositiveSmallIntegerField(choices=PLAYER_POSITIONS, default=POSITION_UNSET)

    class Meta:
        ordering = ['team', 'player__number', 'id']
        constraints = [
            models.UniqueConstraint(fields=['player', 'team'], name='uniq_player_team'),
        ]

    @property
    def is_goalkeeper(self):
        return self.position == POSITION_GOALKEEPER

    def __str__(self):
        return f"{self.player} @ {self.team}"
