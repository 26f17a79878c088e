"""Fixtures for unit tests."""

from types import SimpleNamespace
from typing import Any, Callable, Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from gitea_mirror_manager.configuration.models import GiteaConfig, GitHubConfig
from gitea_mirror_manager.gitea.abc import GiteaClientBase
from gitea_mirror_manager.github.abc import GitHubClientBase
from gitea_mirror_manager.mirror.models import MirrorTarget, Repository, RepositoryProvenance, TargetKind


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def mock_logger() -> MagicMock:
    """A logger collaborator that records every call."""
    return MagicMock()


@pytest.fixture
def github_data() -> Callable[..., SimpleNamespace]:
    """Factory for objects shaped like githubkit repository models."""

    def make(name: str, owner: str = "octocat", fork: bool = False, private: bool = False, clone_url: str | None = None) -> SimpleNamespace:
        return SimpleNamespace(
            name=name,
            clone_url=clone_url or f"https://github.com/{owner}/{name}.git",
            private=private,
            fork=fork,
            owner=SimpleNamespace(login=owner),
            full_name=f"{owner}/{name}",
            has_issues=True,
        )

    return make


@pytest.fixture
def make_repository() -> Callable[..., Repository]:
    """Factory for Repository instances."""

    def make(name: str = "project", owner: str = "octocat", **overrides: Any) -> Repository:
        values: dict[str, Any] = {
            "name": name,
            "clone_url": f"https://github.com/{owner}/{name}.git",
            "private": False,
            "fork": False,
            "owner": owner,
            "full_name": f"{owner}/{name}",
            "provenance": RepositoryProvenance.OWNED,
        }
        values.update(overrides)
        return Repository(**values)

    return make


@pytest.fixture
def github_scope() -> GitHubConfig:
    """GitHub configuration with a token and no optional discovery enabled."""
    return GitHubConfig(username="octocat", token="ghp_secret")


@pytest.fixture
def gitea_config() -> GiteaConfig:
    """Gitea configuration without a default organization."""
    return GiteaConfig(url="https://gitea.example.com", token="gitea_secret", starred_repos_org="github")


@pytest.fixture
def gitea_user() -> MirrorTarget:
    """The authenticated Gitea user."""
    return MirrorTarget(id=1, name="mirror-bot", kind=TargetKind.USER)


@pytest.fixture
def source_client() -> AsyncMock:
    """GitHub client whose listings are all empty unless a test sets them."""
    client = AsyncMock(spec=GitHubClientBase)
    client.list_user_repositories.return_value = []
    client.list_private_repositories.return_value = []
    client.list_starred_repositories.return_value = []
    client.list_organization_repositories.return_value = []
    client.list_authenticated_user_organizations.return_value = []
    client.list_user_organizations.return_value = []
    client.list_issues.return_value = []
    return client


@pytest.fixture
def gitea_client(gitea_user: MirrorTarget) -> AsyncMock:
    """Gitea client on which no repository or organization exists yet."""
    client = AsyncMock(spec=GiteaClientBase)
    client.get_authenticated_user.return_value = gitea_user
    client.get_organization.return_value = None
    client.create_organization.side_effect = lambda name, visibility: MirrorTarget(id=100, name=name, kind=TargetKind.ORGANIZATION)
    client.repository_exists.return_value = False
    client.migrate_repository.return_value = {}
    client.list_labels.return_value = []
    client.create_issue.return_value = {"number": 1, "state": "open"}
    return client
