"""Tests for push-day streak calculation."""

from datetime import date, timedelta

import pytest

from devfolio.stats.models import StreakStats
from devfolio.stats.streak_calculator import (
    _get_consecutive_daily_streaks,
    calculate_streak_stats,
    get_push_days,
)


@pytest.fixture
def scenario_b_events(make_event):
    """Pushes on Jan 1, 2 and 4 with 2, 1 and 3 commits (newest first)."""
    return [
        make_event("PushEvent", "2024-01-04T09:00:00Z", 3),
        make_event("PushEvent", "2024-01-02T18:00:00Z", 1),
        make_event("PushEvent", "2024-01-01T08:00:00Z", 2),
    ]


def test_no_push_events_zero_streaks(make_event) -> None:
    """Test events without pushes yield zero streaks."""
    events = [make_event("WatchEvent", "2024-01-09T10:00:00Z")]

    assert calculate_streak_stats(events, today=date(2024, 1, 9)) == StreakStats()


def test_empty_events_zero_streaks() -> None:
    """Test empty input yields zero streaks."""
    stats = calculate_streak_stats([], today=date(2024, 1, 9))

    assert stats.current == 0
    assert stats.longest == 0
    assert stats.last_activity_date is None


def test_scenario_gap_breaks_run(scenario_b_events) -> None:
    """Test Jan 1-2 run is longest and a stale streak is not current."""
    stats = calculate_streak_stats(scenario_b_events, today=date(2024, 1, 10))

    assert stats.longest == 2
    assert stats.current == 0
    assert stats.last_activity_date == date(2024, 1, 4)


def test_current_streak_grace_period(scenario_b_events) -> None:
    """Test a push yesterday keeps the current streak alive."""
    stats = calculate_streak_stats(scenario_b_events, today=date(2024, 1, 5))

    assert stats.current == 1
    assert stats.longest == 2


def test_current_streak_chains_back(make_event) -> None:
    """Test the current streak counts back through consecutive days."""
    events = [
        make_event("PushEvent", f"2024-01-{day:02d}T12:00:00Z", 1) for day in (10, 9, 8, 6)
    ]

    stats = calculate_streak_stats(events, today=date(2024, 1, 10))

    assert stats.current == 3
    assert stats.longest == 3


def test_multiple_pushes_same_day_count_once(make_event) -> None:
    """Test several pushes on one day count as a single streak day."""
    events = [
        make_event("PushEvent", "2024-01-02T23:00:00Z", 1, event_id="a"),
        make_event("PushEvent", "2024-01-02T08:00:00Z", 1, event_id="b"),
        make_event("PushEvent", "2024-01-01T08:00:00Z", 1, event_id="c"),
    ]

    stats = calculate_streak_stats(events, today=date(2024, 1, 2))

    assert stats.longest == 2
    assert stats.current == 2


def test_get_push_days_distinct_descending(make_event) -> None:
    """Test push days are unique, sorted newest first and ignore other types."""
    events = [
        make_event("PushEvent", "2024-01-01T08:00:00Z", event_id="1"),
        make_event("PushEvent", "2024-01-03T08:00:00Z", event_id="2"),
        make_event("PushEvent", "2024-01-03T20:00:00Z", event_id="3"),
        make_event("IssuesEvent", "2024-01-05T08:00:00Z", event_id="4"),
    ]

    assert get_push_days(events) == [date(2024, 1, 3), date(2024, 1, 1)]


def test_push_day_uses_event_offset(make_event) -> None:
    """Test the push day follows the timestamp's own calendar day."""
    events = [make_event("PushEvent", "2024-01-01T23:30:00-05:00")]

    assert get_push_days(events) == [date(2024, 1, 1)]


def test_longest_run_in_the_middle() -> None:
    """Test the longest run is found when it is neither first nor last."""
    days = [
        date(2024, 3, 20),
        date(2024, 3, 10),
        date(2024, 3, 9),
        date(2024, 3, 8),
        date(2024, 3, 7),
        date(2024, 3, 1),
    ]

    current, longest = _get_consecutive_daily_streaks(days, today=date(2024, 3, 20))

    assert current == 1
    assert longest == 4


@pytest.mark.parametrize("offset", [0, 1, 2, 5, 40])
def test_longest_never_below_current(offset: int) -> None:
    """Test longest >= current for a range of reference dates."""
    start = date(2024, 2, 1)
    days = sorted(
        {start + timedelta(days=d) for d in (0, 1, 2, 3, 10, 11, 12, 13, 14, 20)},
        reverse=True,
    )
    today = days[0] + timedelta(days=offset)

    current, longest = _get_consecutive_daily_streaks(days, today)

    assert longest >= current
