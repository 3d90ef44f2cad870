"""Shared fixtures for stats tests."""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from devfolio.shared.models import Account, Event, EventPayload, Repository


def _event(
    event_type: str,
    created_at: str,
    commit_count: int = 0,
    event_id: str | None = None,
) -> Event:
    timestamp = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    return Event(
        id=event_id or f"{event_type}-{created_at}",
        type=event_type,
        actor="octocat",
        payload=EventPayload(commit_count=commit_count),
        created_at=timestamp,
    )


def _repo(
    repo_id: int,
    language: str | None = None,
    stars: int = 0,
    forks: int = 0,
    watchers: int = 0,
    size: int = 0,
    created_at: datetime | None = None,
    **extra: Any,
) -> Repository:
    return Repository(
        id=repo_id,
        name=f"repo-{repo_id}",
        full_name=f"octocat/repo-{repo_id}",
        owner="octocat",
        language=language,
        size=size,
        stargazers_count=stars,
        forks_count=forks,
        watchers_count=watchers,
        created_at=created_at or datetime(2023, 1, 1, tzinfo=UTC),
        **extra,
    )


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Factory for normalized events: make_event("PushEvent", "2024-01-01T10:00:00Z", 2)."""
    return _event


@pytest.fixture
def make_repo() -> Callable[..., Repository]:
    """Factory for normalized repositories: make_repo(1, "Python", stars=3)."""
    return _repo


@pytest.fixture
def account() -> Account:
    """Normalized account snapshot."""
    return Account(
        login="octocat",
        name="The Octocat",
        followers=120,
        following=7,
        public_repos=2,
        public_gists=1,
        hireable=True,
        created_at=datetime(2011, 1, 25, tzinfo=UTC),
    )


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for deterministic calculations."""
    return datetime(2024, 1, 10, 12, 0, tzinfo=UTC)
