"""Custom exception hierarchy for devfolio-stats."""


class DevfolioError(Exception):
    """Base exception for all devfolio errors."""

    pass


class ConfigError(DevfolioError):
    """Raised when configuration validation fails."""

    pass


class GitHubAPIError(DevfolioError):
    """Raised when a GitHub API request fails.

    Attributes:
        status: HTTP status code (0 when the request never got a response)
        status_text: HTTP reason phrase or transport error message
        url: Requested URL
    """

    def __init__(self, status: int, status_text: str, url: str = "") -> None:
        self.status = status
        self.status_text = status_text
        self.url = url
        super().__init__(f"GitHub API error {status}: {status_text}")


class NormalizationError(DevfolioError):
    """Raised when a raw API record lacks a required identity field."""

    pass
