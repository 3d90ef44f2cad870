"""Statistics calculator functions.

Each calculator is a pure function over normalized entities and produces a
single metric family. Empty inputs yield zeroed structures and missing
optional fields count as zero.
"""

import math
from collections.abc import Sequence
from datetime import UTC, datetime

from devfolio.shared.models import (
    ISSUES_EVENT,
    PULL_REQUEST_EVENT,
    PULL_REQUEST_REVIEW_EVENT,
    PUSH_EVENT,
    RELEASE_EVENT,
    Account,
    Event,
    Repository,
    ensure_utc,
)
from devfolio.stats.bucketing import bucket_keys
from devfolio.stats.models import (
    ActivityStats,
    ContributionStats,
    ImpactStats,
    LanguageStat,
    ProductivityStats,
    SocialStats,
    StatisticsSnapshot,
)
from devfolio.stats.streak_calculator import calculate_streak_stats

SECONDS_PER_DAY = 86_400
DAYS_PER_MONTH = 30


def calculate_language_stats(repos: Sequence[Repository]) -> dict[str, LanguageStat]:
    """Aggregate repository count, size and stars per primary language.

    Repositories without a language are skipped. Language names are used
    exactly as GitHub reports them.

    Args:
        repos: Normalized repositories

    Returns:
        Mapping of language name to LanguageStat, in first-seen order
    """
    totals: dict[str, dict[str, int]] = {}
    for repo in repos:
        if repo.language is None:
            continue
        entry = totals.setdefault(repo.language, {"count": 0, "size": 0, "stars": 0})
        entry["count"] += 1
        entry["size"] += repo.size
        entry["stars"] += repo.stargazers_count

    return {language: LanguageStat(**values) for language, values in totals.items()}


def _increment(histogram: dict[str, int], key: str) -> None:
    histogram[key] = histogram.get(key, 0) + 1


def calculate_activity_stats(events: Sequence[Event]) -> ActivityStats:
    """Build day/week/month/type histograms over all events.

    Args:
        events: Normalized events

    Returns:
        ActivityStats whose histograms each sum to len(events)
    """
    daily: dict[str, int] = {}
    weekly: dict[str, int] = {}
    monthly: dict[str, int] = {}
    by_type: dict[str, int] = {}

    for event in events:
        keys = bucket_keys(event.created_at)
        _increment(daily, keys.day)
        _increment(weekly, keys.week)
        _increment(monthly, keys.month)
        _increment(by_type, event.type)

    return ActivityStats(daily=daily, weekly=weekly, monthly=monthly, by_type=by_type)


def calculate_contribution_stats(events: Sequence[Event]) -> ContributionStats:
    """Count commits, pull requests, issues, reviews and releases.

    Push events add their commit count; the other tracked types add one per
    event. Any other event type contributes to none of the counters.
    """
    commits = 0
    pull_requests = 0
    issues = 0
    reviews = 0
    releases = 0

    for event in events:
        if event.type == PUSH_EVENT:
            commits += event.payload.commit_count
        elif event.type == PULL_REQUEST_EVENT:
            pull_requests += 1
        elif event.type == ISSUES_EVENT:
            issues += 1
        elif event.type == PULL_REQUEST_REVIEW_EVENT:
            reviews += 1
        elif event.type == RELEASE_EVENT:
            releases += 1

    return ContributionStats(
        commits=commits,
        pull_requests=pull_requests,
        issues=issues,
        reviews=reviews,
        releases=releases,
    )


def _elapsed_days(since: datetime, now: datetime) -> float:
    return (now - since).total_seconds() / SECONDS_PER_DAY


def calculate_productivity_stats(
    events: Sequence[Event],
    repos: Sequence[Repository],
    now: datetime | None = None,
) -> ProductivityStats:
    """Calculate commit and repository creation rates.

    commits_per_day divides pushed commits by the whole days since the
    oldest event; repos_per_month divides the repository count by the
    30-day months since the oldest repository was created. Both
    denominators are clamped to at least 1.

    Args:
        events: Normalized events
        repos: Normalized repositories
        now: Reference time (defaults to the current UTC time; naive values
            are taken as UTC)

    Returns:
        ProductivityStats (0.0 rates for empty inputs)
    """
    now = datetime.now(UTC) if now is None else ensure_utc(now)

    commits_per_day = 0.0
    if events:
        oldest_event = min(e.created_at for e in events)
        days = max(1, math.ceil(_elapsed_days(oldest_event, now)))
        commits = sum(e.payload.commit_count for e in events if e.type == PUSH_EVENT)
        commits_per_day = commits / days

    repos_per_month = 0.0
    if repos:
        oldest_repo = min(r.created_at for r in repos)
        months = max(1, math.ceil(_elapsed_days(oldest_repo, now) / DAYS_PER_MONTH))
        repos_per_month = len(repos) / months

    return ProductivityStats(commits_per_day=commits_per_day, repos_per_month=repos_per_month)


def calculate_social_stats(account: Account) -> SocialStats:
    """Copy the social counters from the account."""
    return SocialStats(
        followers=account.followers,
        following=account.following,
        public_repos=account.public_repos,
        public_gists=account.public_gists,
        hireable=account.hireable,
    )


def calculate_impact_stats(repos: Sequence[Repository]) -> ImpactStats:
    """Sum stars, forks and watchers and pick the top repositories.

    Ties for most starred/forked go to the first repository in input order.
    """
    total_stars = 0
    total_forks = 0
    total_watchers = 0
    most_starred: Repository | None = None
    most_forked: Repository | None = None

    for repo in repos:
        total_stars += repo.stargazers_count
        total_forks += repo.forks_count
        total_watchers += repo.watchers_count
        # Strict comparison keeps the first maximum
        if most_starred is None or repo.stargazers_count > most_starred.stargazers_count:
            most_starred = repo
        if most_forked is None or repo.forks_count > most_forked.forks_count:
            most_forked = repo

    average = total_stars / len(repos) if repos else 0.0

    return ImpactStats(
        total_stars=total_stars,
        total_forks=total_forks,
        total_watchers=total_watchers,
        most_starred_repo=most_starred,
        most_forked_repo=most_forked,
        average_stars_per_repo=average,
    )


def build_statistics_snapshot(
    account: Account,
    events: Sequence[Event],
    repos: Sequence[Repository],
    now: datetime | None = None,
) -> StatisticsSnapshot:
    """Run every calculator and assemble the snapshot.

    The snapshot depends only on the arguments, so repeated calls with the
    same inputs and reference time produce equal snapshots.

    Args:
        account: Normalized account
        events: Normalized events
        repos: Normalized repositories
        now: Reference time for streak and rate calculations; naive values
            are taken as UTC

    Returns:
        StatisticsSnapshot for the account
    """
    now = datetime.now(UTC) if now is None else ensure_utc(now)

    impact = calculate_impact_stats(repos)

    return StatisticsSnapshot(
        total_stars=impact.total_stars,
        total_forks=impact.total_forks,
        total_repos=len(repos),
        languages=calculate_language_stats(repos),
        activity=calculate_activity_stats(events),
        contributions=calculate_contribution_stats(events),
        streak=calculate_streak_stats(events, today=now.date()),
        productivity=calculate_productivity_stats(events, repos, now=now),
        social=calculate_social_stats(account),
        impact=impact,
    )
