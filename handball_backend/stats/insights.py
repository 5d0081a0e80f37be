# stats/insights.py
"""
Faits marquants de la semaine, calculés sur les événements des matchs joués
dans l'intervalle [start, end[ (par défaut : la semaine précédente, lundi 00:00).
"""
import datetime

from django.utils import timezone


def default_week_range(reference=None):
    """(lundi de la semaine précédente, lundi de la semaine courante)"""
    reference = timezone.localtime(reference or timezone.now())
    monday = (reference - datetime.timedelta(days=reference.weekday())).replace(
        hour=0, minute=0, second=0, microsecond=0
    )
    return monday - datetime.timedelta(days=7), monday


def _team_summary(team):
    return {
        "team_id": team.id,
        "team_name": team.name,
        "team_category": team.category,
        "club_name": team.club.name if team.club_id else team.name,
    }


def _side(event):
    """(équipe de l'événement, équipe adverse) ; None si l'équipe ne joue pas le match"""
    match = event.match
    if event.team_id == match.home_team_id:
        return match.home_team, match.away_team
    if event.team_id == match.away_team_id:
        return match.away_team, match.home_team
    return None


def _player_entry(storage, event, team):
    entry = storage.get(event.player_id)
    if entry is None:
        entry = {
            "player_id": event.player_id,
            "player_name": event.player.name if event.player else "Unknown Player",
            **_team_summary(team),
            "goals": 0,
        }
        storage[event.player_id] = entry
    return entry


def _team_entry(storage, team):
    entry = storage.get(team.id)
    if entry is None:
        entry = {**_team_summary(team), "count": 0}
        storage[team.id] = entry
    return entry


def _top(storage, key):
    if not storage:
        return None
    # à égalité, le premier rencontré l'emporte (max est stable)
    return max(storage.values(), key=lambda e: e[key])


def compute_weekly_insights(events):
    """
    events : GameEvent avec match (home_team/away_team + club) et player chargés.
    Fautes : comptées pour l'équipe adverse (celle qui les provoque).
    """
    events = list(events)
    scorers, individual, collective, fouls_drawn = {}, {}, {}, {}
    by_category = {}

    for event in events:
        sides = _side(event)
        if sides is None:
            continue
        team, opponent = sides

        if event.type == "Shot" and event.subtype == "Goal":
            if event.player_id:
                _player_entry(scorers, event, team)["goals"] += 1
                category = by_category.setdefault(team.category, {})
                _player_entry(category, event, team)["goals"] += 1
                if not event.is_collective:
                    _player_entry(individual, event, team)["goals"] += 1
            if event.is_collective:
                _team_entry(collective, team)["count"] += 1

        if event.type == "Sanction" and (event.sanction_type or event.subtype) == "Foul":
            _team_entry(fouls_drawn, opponent)["count"] += 1

    leaders = [
        dict(_top(players, "goals"), team_category=category)
        for category, players in by_category.items()
        if players
    ]
    leaders.sort(key=lambda e: e["team_category"])

    return {
        "total_events": len(events),
        "top_scorer_overall": _top(scorers, "goals"),
        "top_scorers_by_category": leaders,
        "top_individual_scorer": _top(individual, "goals"),
        "team_with_most_collective_goals": _top(collective, "count"),
        "team_with_most_fouls": _top(fouls_drawn, "count"),
    }
