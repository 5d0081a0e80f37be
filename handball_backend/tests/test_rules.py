from types import SimpleNamespace

import pytest

from matches.rules import (
    EventRuleError,
    assert_match_started,
    assert_second_half_started_if_needed,
    assert_team_in_match,
    assert_team_unlocked,
    derive_zone,
    score_patch_for_goal,
)


def make_match(**overrides):
    fields = dict(
        home_team_id=1, away_team_id=2,
        home_score=0, away_score=0,
        home_events_locked=False, away_events_locked=False,
        real_time_first_half_start=None, real_time_first_half_end=None,
        real_time_second_half_start=None, real_time_second_half_end=None,
        first_half_video_start=None, second_half_video_start=None,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


@pytest.mark.parametrize("position,distance,expected", [
    ("LW", "6M", "6m-LW"),
    ("cb", "9M", "9m-CB"),
    ("RB", "7M", "7m"),
    (None, "7M", "7m"),
    (None, "6M", None),
    ("LB", None, None),
])
def test_derive_zone(position, distance, expected):
    assert derive_zone(position, distance) == expected


def test_team_must_play_in_match():
    match = make_match()
    assert_team_in_match(match, 2)
    with pytest.raises(EventRuleError):
        assert_team_in_match(match, 3)


def test_locked_team_rejected_other_side_allowed():
    match = make_match(home_events_locked=True)
    with pytest.raises(EventRuleError, match="locked"):
        assert_team_unlocked(match, 1)
    assert_team_unlocked(match, 2)


def test_match_started_by_live_or_video_marker():
    with pytest.raises(EventRuleError, match="not been started"):
        assert_match_started(make_match())
    assert_match_started(make_match(real_time_first_half_start=1_700_000_000_000))
    assert_match_started(make_match(first_half_video_start=0))


def test_second_half_required_after_first_half_boundary():
    match = make_match(real_time_first_half_start=1, real_time_first_half_end=1_800_001)
    assert_second_half_started_if_needed(1800, 1800, match)
    with pytest.raises(EventRuleError, match="Second half"):
        assert_second_half_started_if_needed(1800, 1801, match)

    match.real_time_second_half_start = 2_400_000
    assert_second_half_started_if_needed(1800, 1801, match)


def test_unknown_boundary_never_blocks():
    assert_second_half_started_if_needed(None, 5000, make_match())


def test_score_patch_only_for_goals():
    match = make_match(home_score=3, away_score=0)
    assert score_patch_for_goal(match, 1, "Shot", "Goal", +1) == {"home_score": 4}
    assert score_patch_for_goal(match, 2, "Shot", "Goal", -1) == {"away_score": 0}
    assert score_patch_for_goal(match, 1, "Shot", "Save", +1) is None
    assert score_patch_for_goal(match, 1, "Turnover", "Pass", +1) is None
    assert score_patch_for_goal(match, 9, "Shot", "Goal", +1) is None
