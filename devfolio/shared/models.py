"""Canonical entities for GitHub accounts, repositories and events."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Event types with dedicated handling in the calculators. Any other type
# string is kept as-is and only shows up in the by-type histogram.
PUSH_EVENT = "PushEvent"
PULL_REQUEST_EVENT = "PullRequestEvent"
ISSUES_EVENT = "IssuesEvent"
PULL_REQUEST_REVIEW_EVENT = "PullRequestReviewEvent"
RELEASE_EVENT = "ReleaseEvent"
WATCH_EVENT = "WatchEvent"
FORK_EVENT = "ForkEvent"
CREATE_EVENT = "CreateEvent"

KNOWN_EVENT_TYPES: frozenset[str] = frozenset(
    {
        PUSH_EVENT,
        PULL_REQUEST_EVENT,
        ISSUES_EVENT,
        PULL_REQUEST_REVIEW_EVENT,
        RELEASE_EVENT,
        WATCH_EVENT,
        FORK_EVENT,
        CREATE_EVENT,
    }
)


def ensure_utc(v: datetime) -> datetime:
    """Attach UTC to naive timestamps; aware timestamps are left untouched."""
    if v.tzinfo is None:
        return v.replace(tzinfo=UTC)
    return v


class Account(BaseModel):
    """Snapshot of a GitHub user profile.

    Attributes:
        login: GitHub username
        name: Display name
        avatar_url: Avatar image URL
        html_url: Profile URL
        bio: Profile bio
        location: Free-form location
        company: Company name
        blog: Blog/website URL
        public_repos: Number of public repositories
        public_gists: Number of public gists
        followers: Follower count
        following: Following count
        created_at: Account creation timestamp
        hireable: Whether the account is marked as available for hire
    """

    model_config = ConfigDict(frozen=True)

    login: str = Field(..., description="GitHub username")
    name: str | None = Field(None, description="Display name")
    avatar_url: str = Field("", description="Avatar image URL")
    html_url: str = Field("", description="Profile URL")
    bio: str | None = Field(None, description="Profile bio")
    location: str | None = Field(None, description="Location")
    company: str | None = Field(None, description="Company")
    blog: str | None = Field(None, description="Blog URL")
    public_repos: int = Field(0, ge=0, description="Public repository count")
    public_gists: int = Field(0, ge=0, description="Public gist count")
    followers: int = Field(0, ge=0, description="Follower count")
    following: int = Field(0, ge=0, description="Following count")
    created_at: datetime | None = Field(None, description="Account creation timestamp")
    hireable: bool = Field(False, description="Available for hire")

    @field_validator("created_at")
    @classmethod
    def ensure_timezone_aware(cls, v: datetime | None) -> datetime | None:
        """Ensure timestamp is timezone-aware, adding UTC if naive."""
        return ensure_utc(v) if v is not None else None


class License(BaseModel):
    """Repository license summary."""

    model_config = ConfigDict(frozen=True)

    key: str = Field("", description="License key (e.g. mit)")
    name: str = Field("", description="License display name")
    spdx_id: str | None = Field(None, description="SPDX identifier")


class Repository(BaseModel):
    """A GitHub repository owned by the analyzed account.

    Attributes:
        id: Numeric repository ID
        name: Repository name
        full_name: owner/name
        owner: Owner login
        language: Primary language, None when GitHub detected none
        size: Repository size in KB
        topics: Ordered topic list (may be empty)
        languages: Optional byte breakdown per language
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Repository ID")
    name: str = Field(..., description="Repository name")
    full_name: str = Field(..., description="Full repository name (owner/name)")
    owner: str = Field(..., description="Owner login")
    description: str | None = Field(None, description="Repository description")
    html_url: str = Field("", description="Repository URL")
    homepage: str | None = Field(None, description="Homepage URL")
    language: str | None = Field(None, description="Primary language")
    size: int = Field(0, ge=0, description="Size in KB")
    stargazers_count: int = Field(0, ge=0, description="Star count")
    forks_count: int = Field(0, ge=0, description="Fork count")
    watchers_count: int = Field(0, ge=0, description="Watcher count")
    open_issues_count: int = Field(0, ge=0, description="Open issue count")
    topics: tuple[str, ...] = Field(default_factory=tuple, description="Topics in API order")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime | None = Field(None, description="Last update timestamp")
    pushed_at: datetime | None = Field(None, description="Last push timestamp")
    fork: bool = Field(False, description="Whether the repository is a fork")
    archived: bool = Field(False, description="Whether the repository is archived")
    disabled: bool = Field(False, description="Whether the repository is disabled")
    license: License | None = Field(None, description="License summary")
    default_branch: str = Field("main", description="Default branch")
    languages: dict[str, int] = Field(default_factory=dict, description="Bytes per language")

    @field_validator("created_at", "updated_at", "pushed_at")
    @classmethod
    def ensure_timezone_aware(cls, v: datetime | None) -> datetime | None:
        """Ensure timestamps are timezone-aware, adding UTC if naive."""
        return ensure_utc(v) if v is not None else None


class EventRepo(BaseModel):
    """Repository reference carried by an event.

    The referenced repository need not be part of the account's repository list.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = Field(None, description="Repository ID")
    name: str = Field("", description="Full repository name (owner/name)")


class EventPayload(BaseModel):
    """Typed subset of an event payload.

    Only fields read by the calculators are kept; each one is optional and
    defaults when the raw payload does not carry it.
    """

    model_config = ConfigDict(frozen=True)

    commit_count: int = Field(0, ge=0, description="Commits in a push")
    action: str | None = Field(None, description="Action (opened, closed, published, ...)")
    ref: str | None = Field(None, description="Git ref for push/create events")
    ref_type: str | None = Field(None, description="Ref type for create events")


class Event(BaseModel):
    """A single public activity record.

    Attributes:
        id: Event ID
        type: Raw GitHub event type, e.g. "PushEvent" (unknown types kept verbatim)
        actor: Actor login
        repo: Target repository reference
        payload: Type-specific payload fields
        public: Whether the event is public
        created_at: Event creation timestamp
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Event ID")
    type: str = Field(..., description="Raw event type")
    actor: str = Field("", description="Actor login")
    repo: EventRepo = Field(default_factory=EventRepo, description="Target repository")
    payload: EventPayload = Field(default_factory=EventPayload, description="Payload fields")
    public: bool = Field(True, description="Whether the event is public")
    created_at: datetime = Field(..., description="Event timestamp")

    @field_validator("created_at")
    @classmethod
    def ensure_timezone_aware(cls, v: datetime) -> datetime:
        """Ensure timestamp is timezone-aware, adding UTC if naive."""
        return ensure_utc(v)

    @property
    def is_known_type(self) -> bool:
        return self.type in KNOWN_EVENT_TYPES
