"""Data models for profile statistics.

Every model serializes with camelCase aliases (``model_dump(by_alias=True)``)
so JSON consumers see ``totalStars``, ``commitsPerDay`` and so on.
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from devfolio.shared.models import Account, Event, Repository


class StatsModel(BaseModel):
    """Base for stats models: immutable, camelCase aliases."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class LanguageStat(StatsModel):
    """Aggregate for one primary language.

    Attributes:
        count: Number of repositories with this primary language
        size: Total size of those repositories in KB
        stars: Total stars of those repositories
    """

    count: int = Field(0, description="Repositories using the language")
    size: int = Field(0, description="Total size in KB")
    stars: int = Field(0, description="Total stars")


class ActivityStats(StatsModel):
    """Event histograms keyed by day, week, month and event type."""

    daily: dict[str, int] = Field(default_factory=dict, description="Events per day key")
    weekly: dict[str, int] = Field(default_factory=dict, description="Events per week key")
    monthly: dict[str, int] = Field(default_factory=dict, description="Events per month key")
    by_type: dict[str, int] = Field(default_factory=dict, description="Events per raw type")


class ContributionStats(StatsModel):
    """Contribution counters derived from events.

    Attributes:
        commits: Sum of push commit counts
        pull_requests: PullRequestEvent count
        issues: IssuesEvent count
        reviews: PullRequestReviewEvent count
        releases: ReleaseEvent count
    """

    commits: int = Field(0, description="Commits pushed")
    pull_requests: int = Field(0, description="Pull request events")
    issues: int = Field(0, description="Issue events")
    reviews: int = Field(0, description="Pull request review events")
    releases: int = Field(0, description="Release events")


class StreakStats(StatsModel):
    """Consecutive push-day streaks.

    Attributes:
        current: Length of the run ending today or yesterday, else 0
        longest: Longest run of consecutive push days
        last_activity_date: Most recent push day
    """

    current: int = Field(0, description="Current streak in days")
    longest: int = Field(0, description="Longest streak in days")
    last_activity_date: date | None = Field(None, description="Most recent push day")


class ProductivityStats(StatsModel):
    commits_per_day: float = Field(0.0, description="Pushed commits per day of event history")
    repos_per_month: float = Field(0.0, description="Repositories per month since the first one")


class SocialStats(StatsModel):
    followers: int = Field(0, description="Follower count")
    following: int = Field(0, description="Following count")
    public_repos: int = Field(0, description="Public repository count")
    public_gists: int = Field(0, description="Public gist count")
    hireable: bool = Field(False, description="Available for hire")


class ImpactStats(StatsModel):
    """Reach of the account's repositories.

    Attributes:
        total_stars: Sum of stars over the repository set
        total_forks: Sum of forks over the repository set
        total_watchers: Sum of watchers over the repository set
        most_starred_repo: First repository with the maximum star count
        most_forked_repo: First repository with the maximum fork count
        average_stars_per_repo: total_stars / repository count (0 when empty)
    """

    total_stars: int = Field(0, description="Total stars")
    total_forks: int = Field(0, description="Total forks")
    total_watchers: int = Field(0, description="Total watchers")
    most_starred_repo: Repository | None = Field(None, description="Most starred repository")
    most_forked_repo: Repository | None = Field(None, description="Most forked repository")
    average_stars_per_repo: float = Field(0.0, description="Average stars per repository")


class StatisticsSnapshot(StatsModel):
    """All derived statistics for one account at one point in time."""

    total_stars: int = Field(0, description="Total stars")
    total_forks: int = Field(0, description="Total forks")
    total_repos: int = Field(0, description="Repositories analyzed")
    languages: dict[str, LanguageStat] = Field(default_factory=dict)
    activity: ActivityStats = Field(default_factory=ActivityStats)
    contributions: ContributionStats = Field(default_factory=ContributionStats)
    streak: StreakStats = Field(default_factory=StreakStats)
    productivity: ProductivityStats = Field(default_factory=ProductivityStats)
    social: SocialStats = Field(default_factory=SocialStats)
    impact: ImpactStats = Field(default_factory=ImpactStats)


class ProfileStatistics(StatsModel):
    """Result of one profile aggregation.

    Carries the normalized events and repositories next to the snapshot
    because presentation code renders the raw sequences as well.
    """

    account: Account
    stats: StatisticsSnapshot
    events: tuple[Event, ...] = Field(default_factory=tuple)
    repositories: tuple[Repository, ...] = Field(default_factory=tuple)
