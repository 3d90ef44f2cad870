"""Profile statistics service: fetch, normalize, aggregate."""

import asyncio
import uuid
from datetime import UTC, datetime
from typing import Any

from devfolio.core.config import Settings, get_settings
from devfolio.core.logging import ensure_logging, get_logger, set_correlation_id
from devfolio.github.client import GitHubClient
from devfolio.github.normalizer import normalize_account, normalize_events, normalize_repositories
from devfolio.shared.exceptions import DevfolioError
from devfolio.shared.models import Repository
from devfolio.stats.calculator import build_statistics_snapshot
from devfolio.stats.models import ProfileStatistics

logger = get_logger(__name__)


async def fetch_profile_payloads(
    client: GitHubClient, username: str, settings: Settings
) -> tuple[dict[str, Any], list[dict[str, Any]], list[dict[str, Any]]]:
    """Fetch the raw account, events and repositories concurrently.

    The first failure cancels the fetches still in flight and is re-raised
    as-is, not wrapped in an ExceptionGroup.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            user_task = tg.create_task(client.fetch_user(username))
            events_task = tg.create_task(
                client.fetch_user_events(username, per_page=settings.events_per_page)
            )
            repos_task = tg.create_task(
                client.fetch_user_repos(username, per_page=settings.repos_per_page)
            )
    except ExceptionGroup as eg:
        failure = eg.exceptions[0]
    else:
        return user_task.result(), events_task.result(), repos_task.result()
    raise failure


async def attach_repo_languages(
    client: GitHubClient, repos: list[Repository]
) -> list[Repository]:
    """Fill in the per-language byte breakdown of each repository.

    Lookups run concurrently and a failed lookup leaves that repository
    with an empty breakdown.
    """
    breakdowns = await asyncio.gather(
        *(client.fetch_repo_languages(repo.full_name) for repo in repos)
    )
    return [
        repo.model_copy(update={"languages": languages})
        for repo, languages in zip(repos, breakdowns, strict=True)
    ]


async def get_profile_statistics(
    username: str,
    token: str | None = None,
    settings: Settings | None = None,
    now: datetime | None = None,
    include_languages: bool = False,
) -> ProfileStatistics:
    """Fetch a GitHub account and compute its statistics snapshot.

    The account, its events and its repositories are fetched concurrently.
    If any of the three requests fails the others are cancelled and the
    whole call fails; a partial snapshot is never returned. Logging is
    configured from settings.log_level and settings.log_format.

    Args:
        username: GitHub login to analyze
        token: Access token; falls back to settings.github_access_token,
            and to anonymous access when neither is set
        settings: Settings override (defaults to the global settings)
        now: Reference time for streaks and rates (defaults to now, UTC)
        include_languages: Also fetch each repository's language breakdown

    Returns:
        ProfileStatistics with the snapshot plus normalized events and repos

    Raises:
        GitHubAPIError: If any of the three fetches fails
        NormalizationError: If a record lacks a required identity field
    """
    if settings is None:
        settings = get_settings()
    ensure_logging(settings.log_level, settings.log_format)
    set_correlation_id(uuid.uuid4().hex[:12])
    logger.info(
        "profile.stats.started",
        username=username,
        authenticated=bool(token or settings.github_access_token),
    )

    try:
        async with GitHubClient(token or settings.github_access_token, settings) as client:
            raw_user, raw_events, raw_repos = await fetch_profile_payloads(
                client, username, settings
            )

            account = normalize_account(raw_user)
            events = normalize_events(raw_events)
            repos = normalize_repositories(raw_repos)

            if include_languages:
                repos = await attach_repo_languages(client, repos)
    except DevfolioError as e:
        logger.error("profile.stats.failed", username=username, error=str(e))
        raise

    snapshot = build_statistics_snapshot(account, events, repos, now=now or datetime.now(UTC))

    logger.info(
        "profile.stats.completed",
        username=username,
        events=len(events),
        repos=len(repos),
        commits=snapshot.contributions.commits,
    )

    return ProfileStatistics(
        account=account,
        stats=snapshot,
        events=tuple(events),
        repositories=tuple(repos),
    )
