# matches/rules.py
"""Règles métier appliquées à l'enregistrement des événements de match."""
from .clock import ClockMarkers, first_half_duration


class EventRuleError(Exception):
    """Événement refusé (équipe verrouillée, match non démarré, ...)."""


def derive_zone(position, distance):
    """'7M' → '7m' ; sinon '6m-LW', '9m-CB', ... ; None si incomplet."""
    if distance == "7M":
        return "7m"
    if not position or not distance:
        return None
    prefix = "6m" if distance == "6M" else "9m"
    return f"{prefix}-{position.upper()}"


def assert_team_in_match(match, team_id):
    if team_id not in (match.home_team_id, match.away_team_id):
        raise EventRuleError("Team does not play in this match")


def assert_team_unlocked(match, team_id):
    if team_id == match.home_team_id and match.home_events_locked:
        raise EventRuleError("Events are locked for this team")
    if team_id == match.away_team_id and match.away_events_locked:
        raise EventRuleError("Events are locked for this team")


def assert_match_started(match):
    markers = ClockMarkers.from_match(match)
    if not markers.has_live_start and not markers.has_video_start:
        raise EventRuleError("Match has not been started yet")


def first_half_boundary_seconds(match):
    return first_half_duration(ClockMarkers.from_match(match))


def assert_second_half_started_if_needed(boundary, timestamp, match):
    """Un événement au-delà de la 1re mi-temps exige que la 2e ait démarré."""
    if boundary is None or timestamp <= boundary:
        return
    if not ClockMarkers.from_match(match).second_half_started:
        raise EventRuleError("Second half has not started yet")


def is_goal(event_type, subtype):
    return event_type == "Shot" and subtype == "Goal"


def score_patch_for_goal(match, team_id, event_type, subtype, direction):
    """
    {"home_score": n} / {"away_score": n} si l'événement est un but, sinon None.
    direction = +1 (création) ou -1 (suppression) ; jamais sous zéro.
    """
    if not is_goal(event_type, subtype):
        return None
    if team_id == match.home_team_id:
        return {"home_score": max(0, match.home_score + direction)}
    if team_id == match.away_team_id:
        return {"away_score": max(0, match.away_score + direction)}
    return None
