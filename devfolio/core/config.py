"""Configuration management using Pydantic Settings."""

from typing import ClassVar

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from devfolio.shared.exceptions import ConfigError

# Singleton instance
_settings: "Settings | None" = None


class Settings(BaseSettings):
    """Settings loaded from environment variables (or a .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # GitHub configuration
    github_access_token: str | None = None
    github_api_base_url: str = "https://api.github.com"
    github_api_version: str = "2022-11-28"
    github_user_agent: str = "devfolio-stats"

    # Page sizes for the listing endpoints
    events_per_page: int = 100
    repos_per_page: int = 100

    request_timeout_seconds: int = 30

    log_level: str = "INFO"
    log_format: str = "json"

    # Valid log levels
    VALID_LOG_LEVELS: ClassVar[set[str]] = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    VALID_LOG_FORMATS: ClassVar[set[str]] = {"json", "console"}

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        v_upper = v.upper()
        if v_upper not in cls.VALID_LOG_LEVELS:
            raise ConfigError(
                f"Invalid log level: {v}. Must be one of {', '.join(cls.VALID_LOG_LEVELS)}"
            )
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in cls.VALID_LOG_FORMATS:
            raise ConfigError(f"Invalid log format: {v}. Must be json or console")
        return v_lower

    @field_validator("events_per_page", "repos_per_page")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        """Validate page size is within GitHub's accepted range (1-100)."""
        if not 1 <= v <= 100:
            raise ConfigError(f"Page size must be between 1 and 100, got {v}")
        return v

    @field_validator("request_timeout_seconds")
    @classmethod
    def validate_request_timeout(cls, v: int) -> int:
        """Validate request timeout (1-300 seconds)."""
        if not 1 <= v <= 300:
            raise ConfigError(f"Request timeout must be between 1 and 300 seconds, got {v}")
        return v

    @field_validator("github_api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("github_access_token")
    @classmethod
    def blank_token_is_none(cls, v: str | None) -> str | None:
        """Treat an empty GITHUB_ACCESS_TOKEN as unset."""
        if v is None or not v.strip():
            return None
        return v.strip()


def get_settings() -> Settings:
    """Get or create the global Settings instance (cached singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
