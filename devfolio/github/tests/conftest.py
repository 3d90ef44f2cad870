"""Shared test fixtures for GitHub fetch and normalization tests."""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from devfolio.core.config import Settings
from devfolio.github.client import GitHubClient


def _make_response(
    status: int,
    body: Any = None,
    reason: str = "",
    headers: dict[str, str] | None = None,
) -> MagicMock:
    """Build an async context manager mimicking ``session.get(...)``.

    Args:
        status: HTTP status code
        body: Value returned by ``await response.json()``
        reason: HTTP reason phrase
        headers: Response headers

    Returns:
        Mock usable in ``async with session.get(...) as response``
    """
    response = AsyncMock()
    response.status = status
    response.reason = reason
    response.headers = headers or {}
    response.json = AsyncMock(return_value=body)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=None)
    return context


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """Factory fixture for mocked ``session.get`` responses."""
    return _make_response


@pytest.fixture
def github_client(test_settings: Settings) -> GitHubClient:
    """Create a GitHub client with a mocked session.

    Returns:
        GitHubClient whose ``session.get`` is a MagicMock
    """
    client = GitHubClient("test_token_12345", settings=test_settings)
    client.session = AsyncMock()
    client.session.get = MagicMock()
    return client


@pytest.fixture
def sample_user() -> dict[str, Any]:
    """Sample /users/{login} response."""
    return {
        "login": "octocat",
        "id": 583231,
        "avatar_url": "https://avatars.githubusercontent.com/u/583231?v=4",
        "html_url": "https://github.com/octocat",
        "name": "The Octocat",
        "company": "@github",
        "blog": "https://github.blog",
        "location": "San Francisco",
        "email": None,
        "bio": None,
        "hireable": None,
        "public_repos": 8,
        "public_gists": 8,
        "followers": 9000,
        "following": 9,
        "created_at": "2011-01-25T18:44:36Z",
        "updated_at": "2024-01-22T12:13:57Z",
    }


@pytest.fixture
def sample_repo() -> dict[str, Any]:
    """Sample entry of /users/{login}/repos."""
    return {
        "id": 1296269,
        "name": "Hello-World",
        "full_name": "octocat/Hello-World",
        "owner": {"login": "octocat", "id": 583231},
        "html_url": "https://github.com/octocat/Hello-World",
        "description": "My first repository on GitHub!",
        "fork": False,
        "created_at": "2011-01-26T19:01:12Z",
        "updated_at": "2024-01-20T10:00:00Z",
        "pushed_at": "2024-01-19T08:30:00Z",
        "homepage": "",
        "size": 108,
        "stargazers_count": 80,
        "watchers_count": 80,
        "language": "TypeScript",
        "forks_count": 9,
        "open_issues_count": 2,
        "license": {"key": "mit", "name": "MIT License", "spdx_id": "MIT"},
        "topics": ["octocat", "api"],
        "archived": False,
        "disabled": False,
        "default_branch": "master",
    }


@pytest.fixture
def sample_push_event() -> dict[str, Any]:
    """Sample GitHub PushEvent."""
    return {
        "id": "12345678900",
        "type": "PushEvent",
        "actor": {"id": 583231, "login": "octocat"},
        "repo": {"id": 1296269, "name": "octocat/Hello-World"},
        "payload": {
            "ref": "refs/heads/main",
            "size": 2,
            "commits": [
                {"sha": "abc123", "message": "Fix parser"},
                {"sha": "def456", "message": "Add tests"},
            ],
        },
        "public": True,
        "created_at": "2024-01-09T12:00:00Z",
    }
