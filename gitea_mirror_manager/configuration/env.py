"""Pydantic Settings model for application configuration."""

from functools import lru_cache

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from gitea_mirror_manager.configuration.exceptions import InvalidEnvironmentError


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        env_ignore_empty=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False
    DRY_RUN: bool = False
    SINGLE_RUN: bool = False
    DELAY: int = 3600
    CONCURRENCY: int = 4
    INCLUDE: str = "*"
    EXCLUDE: str = ""

    # GitHub (source) settings
    GITHUB_USERNAME: str | None = None
    GITHUB_TOKEN: str | None = None
    GITHUB_API_URL: str = "https://api.github.com"
    SKIP_FORKS: bool = False
    MIRROR_PRIVATE_REPOSITORIES: bool = False
    MIRROR_ISSUES: bool = False
    MIRROR_STARRED: bool = False
    MIRROR_ORGANIZATIONS: bool = False
    USE_SPECIFIC_USER: bool = False
    SINGLE_REPO: str | None = None
    INCLUDE_ORGS: str = ""
    EXCLUDE_ORGS: str = ""
    PRESERVE_ORG_STRUCTURE: bool = False
    SKIP_STARRED_ISSUES: bool = False

    # Gitea (target) settings
    GITEA_URL: str | None = None
    GITEA_TOKEN: str | None = None
    GITEA_ORGANIZATION: str | None = None
    GITEA_ORG_VISIBILITY: str = "public"
    GITEA_STARRED_ORGANIZATION: str = "github"


@lru_cache
def get_settings() -> Settings:
    """Load the settings from the environment and .env file once.

    Raises:
        InvalidEnvironmentError: If an environment variable cannot be parsed.
    """
    try:
        return Settings()
    except ValidationError as exc:
        raise InvalidEnvironmentError(exc) from exc
