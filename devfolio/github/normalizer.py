"""Map raw GitHub API payloads onto the canonical entity models."""

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from devfolio.core.logging import get_logger
from devfolio.shared.exceptions import NormalizationError
from devfolio.shared.models import (
    PUSH_EVENT,
    Account,
    Event,
    EventPayload,
    EventRepo,
    License,
    Repository,
)

logger = get_logger(__name__)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp as returned by GitHub.

    Args:
        value: Timestamp such as "2024-01-09T12:00:00Z"

    Returns:
        Timezone-aware datetime (UTC when the string carries no offset)

    Raises:
        NormalizationError: If the value is not an ISO-8601 string
    """
    try:
        timestamp = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, TypeError, ValueError) as e:
        raise NormalizationError(f"Invalid timestamp {value!r}") from e
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return timestamp


def _optional_timestamp(value: Any) -> datetime | None:
    if not value:
        return None
    return parse_timestamp(value)


def _require(raw: dict[str, Any], field: str, kind: str) -> Any:
    value = raw.get(field)
    if value is None or value == "":
        raise NormalizationError(f"{kind} record is missing required field '{field}'")
    return value


def _count(raw: dict[str, Any], field: str) -> int:
    return int(raw.get(field) or 0)


def normalize_account(raw: dict[str, Any]) -> Account:
    """Build an Account from a /users/{login} response.

    Raises:
        NormalizationError: If the payload has no login or a field cannot be
            converted
    """
    login = _require(raw, "login", "account")
    try:
        return Account(
            login=login,
            name=raw.get("name"),
            avatar_url=raw.get("avatar_url") or "",
            html_url=raw.get("html_url") or "",
            bio=raw.get("bio"),
            location=raw.get("location"),
            company=raw.get("company"),
            blog=raw.get("blog") or None,
            public_repos=_count(raw, "public_repos"),
            public_gists=_count(raw, "public_gists"),
            followers=_count(raw, "followers"),
            following=_count(raw, "following"),
            created_at=_optional_timestamp(raw.get("created_at")),
            hireable=bool(raw.get("hireable")),
        )
    except (ValidationError, ValueError, TypeError) as e:
        raise NormalizationError(f"Invalid account record {login}: {e}") from e


def _normalize_license(raw: Any) -> License | None:
    if not isinstance(raw, dict):
        return None
    return License(
        key=raw.get("key") or "",
        name=raw.get("name") or "",
        spdx_id=raw.get("spdx_id"),
    )


def normalize_repository(raw: dict[str, Any]) -> Repository:
    """Build a Repository from one entry of a repository listing.

    Missing optional fields default to empty/zero values; missing topics
    become an empty tuple and a missing language stays None.

    Raises:
        NormalizationError: If id, name or created_at is missing, or a field
            cannot be converted
    """
    repo_id = _require(raw, "id", "repository")
    name = _require(raw, "name", "repository")
    created_at = parse_timestamp(_require(raw, "created_at", "repository"))

    owner_data = raw.get("owner") or {}
    owner = owner_data.get("login") or ""
    full_name = raw.get("full_name") or (f"{owner}/{name}" if owner else name)
    if not owner and "/" in full_name:
        owner = full_name.split("/", 1)[0]

    try:
        return Repository(
            id=repo_id,
            name=name,
            full_name=full_name,
            owner=owner,
            description=raw.get("description"),
            html_url=raw.get("html_url") or "",
            homepage=raw.get("homepage") or None,
            language=raw.get("language") or None,
            size=_count(raw, "size"),
            stargazers_count=_count(raw, "stargazers_count"),
            forks_count=_count(raw, "forks_count"),
            watchers_count=_count(raw, "watchers_count"),
            open_issues_count=_count(raw, "open_issues_count"),
            topics=tuple(raw.get("topics") or ()),
            created_at=created_at,
            updated_at=_optional_timestamp(raw.get("updated_at")),
            pushed_at=_optional_timestamp(raw.get("pushed_at")),
            fork=bool(raw.get("fork")),
            archived=bool(raw.get("archived")),
            disabled=bool(raw.get("disabled")),
            license=_normalize_license(raw.get("license")),
            default_branch=raw.get("default_branch") or "main",
            languages=dict(raw.get("languages") or {}),
        )
    except (ValidationError, ValueError, TypeError) as e:
        raise NormalizationError(f"Invalid repository record {full_name}: {e}") from e


def _push_commit_count(payload: dict[str, Any]) -> int:
    """Commit count of a push: payload.size, else len(payload.commits), else 0."""
    size = payload.get("size")
    if size is not None:
        return int(size)
    commits = payload.get("commits")
    if isinstance(commits, list):
        return len(commits)
    return 0


def normalize_event(raw: dict[str, Any]) -> Event:
    """Build an Event from one entry of an event listing.

    Unrecognized event types are kept verbatim.

    Raises:
        NormalizationError: If id, type or created_at is missing, or the
            payload cannot be converted
    """
    event_id = str(_require(raw, "id", "event"))
    event_type = _require(raw, "type", "event")
    created_at = parse_timestamp(_require(raw, "created_at", "event"))

    payload = raw.get("payload") or {}
    actor = raw.get("actor") or {}
    repo = raw.get("repo") or {}

    try:
        event = Event(
            id=event_id,
            type=event_type,
            actor=actor.get("login") or "",
            repo=EventRepo(id=repo.get("id"), name=repo.get("name") or ""),
            payload=EventPayload(
                commit_count=_push_commit_count(payload) if event_type == PUSH_EVENT else 0,
                action=payload.get("action"),
                ref=payload.get("ref"),
                ref_type=payload.get("ref_type"),
            ),
            public=bool(raw.get("public", True)),
            created_at=created_at,
        )
    except (ValidationError, ValueError, TypeError, AttributeError) as e:
        raise NormalizationError(f"Invalid event record {event_id}: {e}") from e
    if not event.is_known_type:
        logger.debug("github.event.untyped", event_id=event_id, event_type=event_type)
    return event


def normalize_repositories(raw_repos: Iterable[dict[str, Any]]) -> list[Repository]:
    """Normalize a repository listing, keeping API order."""
    return [normalize_repository(raw) for raw in raw_repos]


def normalize_events(raw_events: Iterable[dict[str, Any]]) -> list[Event]:
    """Normalize an event listing, keeping API order (newest first)."""
    return [normalize_event(raw) for raw in raw_events]
