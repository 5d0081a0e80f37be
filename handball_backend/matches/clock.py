# matches/clock.py
"""
Chronomètre de match : conversions entre les repères de mi-temps
(horloge murale en millisecondes, ou offsets vidéo en secondes) et le
temps de jeu écoulé en secondes.

Fonctions pures, sans accès base : les vues leur passent un ClockMarkers
construit depuis le Match.
"""
import math
import time
from dataclasses import dataclass
from typing import Optional

HALF_DURATION_SECONDS = 30 * 60  # une mi-temps de handball


@dataclass(frozen=True)
class ClockMarkers:
    real_time_first_half_start: Optional[int] = None   # epoch ms
    real_time_first_half_end: Optional[int] = None
    real_time_second_half_start: Optional[int] = None
    real_time_second_half_end: Optional[int] = None
    first_half_video_start: Optional[float] = None     # secondes dans la vidéo
    second_half_video_start: Optional[float] = None

    @classmethod
    def from_match(cls, match):
        return cls(
            real_time_first_half_start=match.real_time_first_half_start,
            real_time_first_half_end=match.real_time_first_half_end,
            real_time_second_half_start=match.real_time_second_half_start,
            real_time_second_half_end=match.real_time_second_half_end,
            first_half_video_start=match.first_half_video_start,
            second_half_video_start=match.second_half_video_start,
        )

    @property
    def has_live_start(self) -> bool:
        return self.real_time_first_half_start is not None

    @property
    def has_video_start(self) -> bool:
        return self.first_half_video_start is not None

    @property
    def second_half_started(self) -> bool:
        return self.real_time_second_half_start is not None or self.second_half_video_start is not None


@dataclass(frozen=True)
class ClockReading:
    time: Optional[int]
    should_tick: bool


def now_ms() -> int:
    return int(time.time() * 1000)


def _seconds_between(start_ms, end_ms) -> int:
    return max(0, math.floor((end_ms - start_ms) / 1000))


def first_half_duration(markers: ClockMarkers) -> Optional[int]:
    """
    Durée de la 1re mi-temps en secondes :
      fin 1MT enregistrée > début 2MT > repères vidéo > None
    """
    start = markers.real_time_first_half_start
    if start is not None and markers.real_time_first_half_end is not None:
        return _seconds_between(start, markers.real_time_first_half_end)
    if start is not None and markers.real_time_second_half_start is not None:
        return _seconds_between(start, markers.real_time_second_half_start)
    if markers.first_half_video_start is not None and markers.second_half_video_start is not None:
        return max(0, math.floor(markers.second_half_video_start - markers.first_half_video_start))
    return None


def live_elapsed_seconds(markers: ClockMarkers, now: Optional[int] = None) -> Optional[int]:
    """
    Temps de jeu écoulé (secondes) pour horodater un nouvel événement en direct.
    None si la 1re mi-temps n'a jamais démarré (chrono arrêté).
    """
    start = markers.real_time_first_half_start
    if start is None:
        return None
    if now is None:
        now = now_ms()

    second_start = markers.real_time_second_half_start
    if second_start is not None:
        offset = first_half_duration(markers) or 0
        end = markers.real_time_second_half_end
        if end is not None:
            now = min(now, end)
        return offset + _seconds_between(second_start, now)

    if markers.real_time_first_half_end is not None:
        return first_half_duration(markers)

    return _seconds_between(start, now)


def compute_clock_time(markers: ClockMarkers, now: Optional[int] = None,
                       team_locked: bool = True, timer_stopped: bool = False) -> ClockReading:
    """
    Valeur affichée par le chrono du tracker.
    `time=None` → laisser la valeur courante intacte.
    """
    if not team_locked:
        # équipe déverrouillée : le chrono repart de zéro
        return ClockReading(0, False)

    start = markers.real_time_first_half_start
    if start is None or timer_stopped:
        return ClockReading(None, False)
    if now is None:
        now = now_ms()

    duration = first_half_duration(markers)
    second_start = markers.real_time_second_half_start
    second_end = markers.real_time_second_half_end

    # mi-temps : on reste figé sur la durée de la 1re période
    if markers.real_time_first_half_end is not None and second_start is None:
        return ClockReading(duration or 0, False)

    # match terminé : somme des deux périodes
    if second_start is not None and second_end is not None:
        return ClockReading((duration or 0) + _seconds_between(second_start, second_end), False)

    if second_start is not None:
        return ClockReading((duration or 0) + _seconds_between(second_start, now), True)

    return ClockReading(_seconds_between(start, now), True)


def match_time_from_video(markers: ClockMarkers, video_time: float) -> int:
    """Position vidéo (s) → temps de match (s). 0 tant que la vidéo n'est pas calibrée."""
    first = markers.first_half_video_start
    if first is None:
        return 0

    second = markers.second_half_video_start
    if second is not None and video_time >= second:
        return HALF_DURATION_SECONDS + math.floor(video_time - second)

    return max(0, math.floor(video_time - first))


def video_time_from_match(markers: ClockMarkers, match_time: float) -> Optional[float]:
    """Inverse de match_time_from_video ; None si non calibré."""
    first = markers.first_half_video_start
    if first is None:
        return None

    second = markers.second_half_video_start
    if match_time >= HALF_DURATION_SECONDS and second is not None:
        return second + (match_time - HALF_DURATION_SECONDS)

    return first + match_time


def event_timestamps(markers: ClockMarkers, now: Optional[int] = None,
                     video_time: Optional[float] = None):
    """
    (timestamp, video_timestamp) à enregistrer sur un nouvel événement.
      - mode vidéo : position du lecteur (s, arrondie à l'entier inférieur)
        et temps de match dérivé des repères vidéo
      - mode direct : temps écoulé depuis les repères horloge, video_timestamp=None
    """
    if video_time is not None:
        video_seconds = max(0, math.floor(video_time))
        return match_time_from_video(markers, video_seconds), video_seconds

    return live_elapsed_seconds(markers, now), None
