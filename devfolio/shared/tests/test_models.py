"""Tests for canonical entity models."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from devfolio.shared.exceptions import GitHubAPIError
from devfolio.shared.models import KNOWN_EVENT_TYPES, Event, Repository


def test_event_naive_timestamp_gets_utc() -> None:
    """Test naive timestamps are made timezone-aware."""
    event = Event(id="1", type="PushEvent", created_at=datetime(2024, 1, 1, 12, 0))

    assert event.created_at.tzinfo == UTC
    assert event.payload.commit_count == 0
    assert event.repo.name == ""


def test_event_is_immutable() -> None:
    """Test events cannot be mutated after construction."""
    event = Event(id="1", type="PushEvent", created_at=datetime(2024, 1, 1, tzinfo=UTC))

    with pytest.raises(ValidationError):
        event.type = "WatchEvent"  # type: ignore[misc]


def test_known_event_types() -> None:
    assert "PullRequestReviewEvent" in KNOWN_EVENT_TYPES
    assert "GollumEvent" not in KNOWN_EVENT_TYPES


def test_repository_rejects_negative_counts() -> None:
    """Test counts must be non-negative."""
    with pytest.raises(ValidationError):
        Repository(
            id=1,
            name="r",
            full_name="o/r",
            owner="o",
            stargazers_count=-1,
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
        )


def test_github_api_error_message() -> None:
    """Test the error exposes status code and text."""
    error = GitHubAPIError(502, "Bad Gateway", "https://api.github.com/users/x")

    assert str(error) == "GitHub API error 502: Bad Gateway"
    assert error.status == 502
    assert error.url == "https://api.github.com/users/x"
