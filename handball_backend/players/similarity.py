# players/similarity.py
"""
Détection de doublons de joueurs (import de feuilles de match / rosters).

Deux noms sont "proches" si :
  - l'un des deux n'est qu'un prénom et le premier mot est identique
    ("Max" vs "Max Herrainz"), ou
  - leur distance de Levenshtein (après normalisation) est <= threshold.
"""
import unicodedata

from .models import Player

DEFAULT_THRESHOLD = 3


def normalize_name(value: str) -> str:
    """minuscules, sans accents, espaces compactés"""
    s = unicodedata.normalize("NFD", (value or "").lower())
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    return " ".join(s.split())


def levenshtein(a: str, b: str) -> int:
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(
                previous[j] + 1,         # suppression
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current
    return previous[-1]


def names_similar(a: str, b: str, threshold: int = DEFAULT_THRESHOLD) -> bool:
    na, nb = normalize_name(a), normalize_name(b)
    if not na or not nb:
        return False

    wa, wb = na.split(" "), nb.split(" ")
    if wa[0] == wb[0] and (len(wa) == 1 or len(wb) == 1):
        return True

    return levenshtein(na, nb) <= threshold


def similarity_score(a: str, b: str) -> tuple:
    """(distance, similarity) avec similarity = 1 - distance / longueur max."""
    na, nb = normalize_name(a), normalize_name(b)
    distance = levenshtein(na, nb)
    max_len = max(len(na), len(nb))
    similarity = 1 - distance / max_len if max_len else 1.0
    return distance, similarity


def find_similar_players(name: str, threshold: int = DEFAULT_THRESHOLD, queryset=None):
    """
    Retourne les joueurs existants proches de `name`, triés par distance :
    [{id, name, number, handedness, is_goalkeeper, distance, similarity, teams: [...]}, ...]
    """
    if queryset is None:
        queryset = Player.objects.prefetch_related("memberships__team__club")

    out = []
    for player in queryset:
        if not names_similar(name, player.name, threshold):
            continue
        distance, similarity = similarity_score(name, player.name)
        out.append({
            "id": player.id,
            "name": player.name,
            "number": player.number,
            "handedness": player.handedness,
            "is_goalkeeper": player.is_goalkeeper,
            "distance": distance,
            "similarity": round(similarity, 4),
            "teams": [
                {
                    "id": m.team_id,
                    "name": m.team.name,
                    "club": m.team.club.name if m.team.club_id else None,
                    "category": m.team.category,
                    "position": m.position,
                }
                for m in player.memberships.all()
            ],
        })

    out.sort(key=lambda r: (r["distance"], r["name"].lower(), r["id"]))
    return out
