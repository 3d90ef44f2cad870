"""Push-day streak calculation.

A streak is a run of consecutive calendar days with at least one push event.
Days come from the same day-key rule as the activity histograms, so a push
at 23:30+02:00 counts on its local calendar day.
"""

from collections.abc import Iterable
from datetime import UTC, date, datetime, timedelta

from devfolio.shared.models import PUSH_EVENT, Event
from devfolio.stats.bucketing import day_key
from devfolio.stats.models import StreakStats


def get_push_days(events: Iterable[Event]) -> list[date]:
    """Distinct push-event days, most recent first.

    Args:
        events: Normalized events in any order

    Returns:
        Sorted list of unique days with at least one push
    """
    days = {date.fromisoformat(day_key(e.created_at)) for e in events if e.type == PUSH_EVENT}
    return sorted(days, reverse=True)


def _get_consecutive_daily_streaks(activity_dates: list[date], today: date) -> tuple[int, int]:
    """Calculate current and longest consecutive daily streaks.

    Args:
        activity_dates: Unique activity dates in descending order
        today: Current date

    Returns:
        Tuple of (current_streak_days, longest_streak_days)
    """
    if not activity_dates:
        return 0, 0

    last_date = activity_dates[0]

    # Streak stays alive through yesterday (grace period)
    if last_date < today - timedelta(days=1):
        current_streak = 0
    else:
        current_streak = 1
        expected_date = last_date - timedelta(days=1)

        for activity_date in activity_dates[1:]:
            if activity_date == expected_date:
                current_streak += 1
                expected_date -= timedelta(days=1)
            else:
                break

    longest_streak = 0
    temp_streak = 1
    expected_date = activity_dates[0] - timedelta(days=1)

    for activity_date in activity_dates[1:]:
        if activity_date == expected_date:
            temp_streak += 1
        else:
            longest_streak = max(longest_streak, temp_streak)
            temp_streak = 1
        expected_date = activity_date - timedelta(days=1)

    longest_streak = max(longest_streak, temp_streak)

    return current_streak, longest_streak


def calculate_streak_stats(events: Iterable[Event], today: date | None = None) -> StreakStats:
    """Calculate current and longest push streaks.

    Args:
        events: Normalized events; only PushEvents are considered
        today: Reference date for the current streak (defaults to today in UTC)

    Returns:
        StreakStats, zeroed when there are no push events
    """
    push_days = get_push_days(events)
    if not push_days:
        return StreakStats()

    if today is None:
        today = datetime.now(UTC).date()

    current, longest = _get_consecutive_daily_streaks(push_days, today)
    return StreakStats(current=current, longest=longest, last_activity_date=push_days[0])
