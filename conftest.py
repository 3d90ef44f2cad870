"""Shared pytest fixtures for devfolio tests."""

from collections.abc import Iterator

import pytest

from devfolio.core.config import Settings


@pytest.fixture
def test_settings() -> Settings:
    """Create Settings instance with test values.

    Returns:
        Settings instance that ignores the environment's token
    """
    return Settings(
        github_access_token=None,
        github_api_base_url="https://api.github.com",
        log_level="INFO",
    )


@pytest.fixture(autouse=True)
def reset_settings_cache(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Reset the global settings cache and token env around each test."""
    import devfolio.core.config

    monkeypatch.delenv("GITHUB_ACCESS_TOKEN", raising=False)
    devfolio.core.config._settings = None

    yield

    devfolio.core.config._settings = None


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Start each test from INFO-level JSON logging."""
    from devfolio.core.logging import setup_logging

    setup_logging(log_level="INFO")

    yield

    setup_logging(log_level="INFO")
