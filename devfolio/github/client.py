"""GitHub REST API client."""

from typing import Any

import aiohttp
from pydantic import BaseModel, Field

from devfolio.core.config import Settings, get_settings
from devfolio.core.logging import get_logger
from devfolio.shared.exceptions import GitHubAPIError

logger = get_logger(__name__)


class RateLimit(BaseModel):
    """Core REST rate limit for the current credentials."""

    limit: int = Field(0, description="Requests allowed per window")
    remaining: int = Field(0, description="Requests left in the window")
    reset: int = Field(0, description="Window reset (epoch seconds)")
    used: int = Field(0, description="Requests used in the window")


class GitHubClient:
    """Async GitHub REST client.

    Issues single-attempt GET requests against the configured API base and
    raises GitHubAPIError for any non-2xx response. Authentication is
    optional: without a token requests are anonymous and subject to the
    unauthenticated rate limit.

    Attributes:
        ACCEPT: Accept header declaring the REST API media type
        MAX_PER_PAGE: Largest page size the REST API honours
    """

    ACCEPT = "application/vnd.github.v3+json"
    MAX_PER_PAGE = 100

    def __init__(self, token: str | None = None, settings: Settings | None = None) -> None:
        """Initialize GitHub client.

        Args:
            token: GitHub personal access token, or None for anonymous access
            settings: Settings to read base URL, version and timeouts from
        """
        self.settings = settings or get_settings()
        self.token = token
        self.base_url = self.settings.github_api_base_url
        self.session: aiohttp.ClientSession | None = None

    @property
    def headers(self) -> dict[str, str]:
        """Headers sent with every request."""
        headers = {
            "Accept": self.ACCEPT,
            "X-GitHub-Api-Version": self.settings.github_api_version,
            "User-Agent": self.settings.github_user_agent,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def __aenter__(self) -> "GitHubClient":
        """Context manager entry: create aiohttp session.

        Returns:
            Self for use in async with statement
        """
        self.session = aiohttp.ClientSession(
            headers=self.headers,
            timeout=aiohttp.ClientTimeout(total=self.settings.request_timeout_seconds),
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Context manager exit: close aiohttp session."""
        if self.session:
            await self.session.close()

    async def get_json(
        self,
        path: str,
        per_page: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """GET an endpoint relative to the API base and return the parsed body.

        Args:
            path: Endpoint path, e.g. "/users/octocat"
            per_page: Page size, clamped to 1..MAX_PER_PAGE; sent as the
                per_page query parameter when given
            params: Extra query parameters

        Returns:
            Parsed JSON body

        Raises:
            GitHubAPIError: On non-2xx status or transport failure
        """
        if not self.session:
            raise GitHubAPIError(0, "Session not initialized", path)

        url = f"{self.base_url}/{path.lstrip('/')}"
        query: dict[str, Any] = dict(params or {})
        if per_page is not None:
            query["per_page"] = max(1, min(per_page, self.MAX_PER_PAGE))

        try:
            async with self.session.get(url, params=query or None) as response:
                if 200 <= response.status < 300:
                    return await response.json()

                status_text = response.reason or ""
                if response.status in (403, 429):
                    logger.warning(
                        "github.ratelimit",
                        remaining=response.headers.get("x-ratelimit-remaining"),
                        reset=response.headers.get("x-ratelimit-reset"),
                        status=response.status,
                        url=url,
                    )
                else:
                    logger.warning(
                        "github.api.request_failed",
                        status=response.status,
                        status_text=status_text,
                        url=url,
                    )
                raise GitHubAPIError(response.status, status_text, url)
        except aiohttp.ClientError as e:
            logger.warning("github.api.network_error", url=url, error=str(e))
            raise GitHubAPIError(0, f"Network error: {e}", url) from e
        except TimeoutError as e:
            logger.warning("github.api.timeout", url=url)
            raise GitHubAPIError(0, "Request timed out", url) from e

    async def fetch_user(self, username: str) -> dict[str, Any]:
        """Fetch the public profile of a user.

        Raises:
            GitHubAPIError: If the user does not exist or the request fails
        """
        data: dict[str, Any] = await self.get_json(f"/users/{username}")
        return data

    async def fetch_user_events(
        self, username: str, per_page: int | None = None
    ) -> list[dict[str, Any]]:
        """Fetch the most recent public events of a user (newest first).

        Args:
            username: GitHub username
            per_page: Page size (defaults to settings.events_per_page)
        """
        size = per_page if per_page is not None else self.settings.events_per_page
        data: list[dict[str, Any]] = await self.get_json(
            f"/users/{username}/events", per_page=size
        )
        return data

    async def fetch_user_repos(
        self, username: str, per_page: int | None = None
    ) -> list[dict[str, Any]]:
        """Fetch a user's repositories, most recently updated first.

        Args:
            username: GitHub username
            per_page: Page size (defaults to settings.repos_per_page)
        """
        size = per_page if per_page is not None else self.settings.repos_per_page
        data: list[dict[str, Any]] = await self.get_json(
            f"/users/{username}/repos", per_page=size, params={"sort": "updated"}
        )
        return data

    async def fetch_repo_languages(self, full_name: str) -> dict[str, int]:
        """Fetch the byte count per language for a repository.

        This lookup is optional enrichment, so failures degrade to an empty
        mapping instead of raising.

        Args:
            full_name: Repository name in owner/name form

        Returns:
            Mapping of language name to bytes of code, or {} on failure
        """
        try:
            data: dict[str, int] = await self.get_json(f"/repos/{full_name}/languages")
        except GitHubAPIError as e:
            logger.warning(
                "github.languages.unavailable",
                repo=full_name,
                status=e.status,
                error=e.status_text,
            )
            return {}
        return data

    async def fetch_rate_limit(self) -> RateLimit:
        """Fetch the core REST rate limit for the current credentials.

        Raises:
            GitHubAPIError: If the request fails
        """
        data: dict[str, Any] = await self.get_json("/rate_limit")
        core = data.get("resources", {}).get("core") or data.get("rate") or {}
        return RateLimit.model_validate(core)
