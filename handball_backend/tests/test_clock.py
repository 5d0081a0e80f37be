from matches.clock import (
    HALF_DURATION_SECONDS,
    ClockMarkers,
    compute_clock_time,
    event_timestamps,
    first_half_duration,
    live_elapsed_seconds,
    match_time_from_video,
    video_time_from_match,
)

T0 = 1_700_000_000_000  # epoch ms


def test_elapsed_is_none_before_kickoff():
    assert live_elapsed_seconds(ClockMarkers(), now=T0) is None


def test_elapsed_sixty_seconds_after_kickoff():
    markers = ClockMarkers(real_time_first_half_start=T0)
    assert live_elapsed_seconds(markers, now=T0 + 60_000) == 60


def test_elapsed_frozen_during_half_time():
    markers = ClockMarkers(
        real_time_first_half_start=T0,
        real_time_first_half_end=T0 + 1_800_000,
    )
    assert live_elapsed_seconds(markers, now=T0 + 2_500_000) == 1800


def test_elapsed_second_half_adds_first_half_duration():
    markers = ClockMarkers(
        real_time_first_half_start=T0,
        real_time_first_half_end=T0 + 1_805_000,
        real_time_second_half_start=T0 + 2_700_000,
    )
    assert live_elapsed_seconds(markers, now=T0 + 2_760_000) == 1805 + 60


def test_elapsed_capped_at_second_half_end():
    markers = ClockMarkers(
        real_time_first_half_start=T0,
        real_time_first_half_end=T0 + 1_800_000,
        real_time_second_half_start=T0 + 2_400_000,
        real_time_second_half_end=T0 + 4_200_000,
    )
    assert live_elapsed_seconds(markers, now=T0 + 9_000_000) == 3600


def test_first_half_duration_falls_back_to_second_half_start():
    markers = ClockMarkers(
        real_time_first_half_start=T0,
        real_time_second_half_start=T0 + 1_900_000,
    )
    assert first_half_duration(markers) == 1900


def test_first_half_duration_from_video_markers():
    markers = ClockMarkers(first_half_video_start=100, second_half_video_start=2050)
    assert first_half_duration(markers) == 1950
    assert first_half_duration(ClockMarkers(first_half_video_start=100)) is None


def test_clock_resets_when_team_unlocked():
    reading = compute_clock_time(ClockMarkers(real_time_first_half_start=T0), T0 + 5000, team_locked=False)
    assert reading.time == 0
    assert reading.should_tick is False


def test_clock_untouched_when_stopped_or_not_started():
    assert compute_clock_time(ClockMarkers(), T0).time is None
    stopped = compute_clock_time(ClockMarkers(real_time_first_half_start=T0), T0 + 5000, timer_stopped=True)
    assert stopped.time is None
    assert stopped.should_tick is False


def test_clock_ticks_during_first_half():
    reading = compute_clock_time(ClockMarkers(real_time_first_half_start=T0), T0 + 125_400)
    assert reading.time == 125
    assert reading.should_tick is True


def test_clock_after_full_time_is_sum_of_halves():
    markers = ClockMarkers(
        real_time_first_half_start=T0,
        real_time_first_half_end=T0 + 1_800_000,
        real_time_second_half_start=T0 + 2_400_000,
        real_time_second_half_end=T0 + 4_260_000,
    )
    reading = compute_clock_time(markers, T0 + 9_999_999)
    assert reading.time == 1800 + 1860
    assert reading.should_tick is False


def test_video_mapping_first_and_second_half():
    markers = ClockMarkers(first_half_video_start=100, second_half_video_start=2500)
    assert match_time_from_video(markers, 160) == 60
    assert match_time_from_video(markers, 50) == 0
    assert match_time_from_video(markers, 2560) == HALF_DURATION_SECONDS + 60
    assert video_time_from_match(markers, 60) == 160
    assert video_time_from_match(markers, HALF_DURATION_SECONDS + 60) == 2560


def test_video_mapping_without_calibration():
    assert match_time_from_video(ClockMarkers(), 300) == 0
    assert video_time_from_match(ClockMarkers(), 300) is None


def test_event_timestamps_video_mode_floors_player_position():
    markers = ClockMarkers(first_half_video_start=100)
    assert event_timestamps(markers, video_time=160.9) == (60, 160)


def test_event_timestamps_live_mode():
    markers = ClockMarkers(real_time_first_half_start=T0)
    assert event_timestamps(markers, now=T0 + 42_000) == (42, None)
