# stats/engine.py
"""
Calcul des statistiques de handball à partir d'une liste d'événements.

Efficacité :
  - joueur de champ : buts / tirs tentés
  - gardien         : arrêts / tirs cadrés (arrêts + buts) ; ratés et poteaux exclus
"""
from collections import Counter, defaultdict

from matches.models import GOAL_ZONES

ZONES = ["6m-LW", "6m-LB", "6m-CB", "6m-RB", "6m-RW", "9m-LB", "9m-CB", "9m-RB", "7m"]


def _pct(num, den):
    return round(num * 100.0 / den, 1) if den else 0.0


def _get(event, name):
    if isinstance(event, dict):
        return event.get(name)
    return getattr(event, name, None)


def shot_summary(shots, goalkeeper_mode=False):
    counts = Counter(_get(e, "subtype") for e in shots)
    total = len(shots)
    goals, saves = counts["Goal"], counts["Save"]
    if goalkeeper_mode:
        efficiency = _pct(saves, saves + goals)
    else:
        efficiency = _pct(goals, total)
    return {
        "shots": total,
        "goals": goals,
        "saves": saves,
        "misses": counts["Miss"],
        "posts": counts["Post"],
        "blocks": counts["Block"],
        "efficiency": efficiency,
    }


def compute_statistics(events, goalkeeper_mode=False):
    """
    events : GameEvent ou dicts (type, subtype, zone, goal_zone, player_id, ...)
    """
    events = list(events)
    shots = [e for e in events if _get(e, "type") == "Shot"]
    turnovers = [e for e in events if _get(e, "type") == "Turnover"]
    sanctions = [e for e in events if _get(e, "type") == "Sanction"]

    out = shot_summary(shots, goalkeeper_mode)
    out["turnovers"] = len(turnovers)
    out["turnovers_by_type"] = dict(Counter(_get(e, "subtype") or "Unknown" for e in turnovers))
    out["sanctions"] = len(sanctions)
    out["sanctions_by_type"] = dict(
        Counter(_get(e, "sanction_type") or _get(e, "subtype") or "Unknown" for e in sanctions)
    )
    out["counter_attack_goals"] = sum(
        1 for e in shots if _get(e, "subtype") == "Goal" and _get(e, "is_counter_attack")
    )

    # répartition spatiale des tirs
    by_zone = defaultdict(list)
    for e in shots:
        zone = _get(e, "zone")
        if zone:
            by_zone[zone].append(e)
    out["zones"] = {
        zone: shot_summary(by_zone[zone], goalkeeper_mode)
        for zone in ZONES
        if by_zone.get(zone)
    }

    # pertes de balle par zone (seulement quand la zone est connue)
    out["turnover_zones"] = dict(Counter(_get(e, "zone") for e in turnovers if _get(e, "zone")))

    # où finissent les tirs cadrés (buts + arrêts)
    on_target = [e for e in shots if _get(e, "subtype") in ("Goal", "Save") and _get(e, "goal_zone")]
    goal_counts = Counter(_get(e, "goal_zone") for e in on_target if _get(e, "subtype") == "Goal")
    save_counts = Counter(_get(e, "goal_zone") for e in on_target if _get(e, "subtype") == "Save")
    out["goal_zones"] = {
        code: {"goals": goal_counts[code], "saves": save_counts[code]}
        for code, _ in GOAL_ZONES
        if goal_counts[code] or save_counts[code]
    }

    return out


def player_statistics(events, faced_shots=(), goalkeeper_ids=()):
    """
    Une ligne par joueur. Les gardiens (goalkeeper_ids) reçoivent en plus un
    bloc "goalkeeper" calculé sur les tirs adverses faced_shots où ils étaient
    en place (active_goalkeeper).
    """
    goalkeeper_ids = set(goalkeeper_ids)
    own = defaultdict(list)
    faced = defaultdict(list)
    for e in events:
        pid = _get(e, "player_id")
        if pid:
            own[pid].append(e)
    for e in faced_shots:
        gk = _get(e, "active_goalkeeper_id")
        if gk and _get(e, "type") == "Shot":
            faced[gk].append(e)

    rows = {}
    for pid in set(own) | set(faced):
        row = compute_statistics(own.get(pid, []))
        row["player_id"] = pid
        row["is_goalkeeper"] = pid in goalkeeper_ids or pid in faced
        if row["is_goalkeeper"]:
            row["goalkeeper"] = shot_summary(faced.get(pid, []), goalkeeper_mode=True)
        rows[pid] = row
    return rows
