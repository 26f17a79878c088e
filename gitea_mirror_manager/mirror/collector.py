"""Collects the GitHub repositories that are candidates for mirroring.

Every discovery mode is queried independently. A failing query is logged and
contributes no repositories, so one broken organization or a missing scope on
the token never aborts the whole run.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import structlog
from githubkit.exception import GitHubException

from gitea_mirror_manager.configuration.models import GitHubConfig
from gitea_mirror_manager.github.abc import GitHubClientBase
from gitea_mirror_manager.mirror.filters import filter_organization_names, without_duplicates, without_forks
from gitea_mirror_manager.mirror.models import Repository, RepositoryProvenance
from gitea_mirror_manager.mirror.types import MirrorLogger
from gitea_mirror_manager.utils.github import github_web_prefixes, split_repository_reference

default_logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OrganizationDiscoveryStrategy:
    """A named way of listing the organizations to mirror."""

    name: str
    list_organizations: Callable[[], Awaitable[list[Any]]]


def organization_discovery_strategies(source_client: GitHubClientBase, scope: GitHubConfig) -> list[OrganizationDiscoveryStrategy]:
    """Return the organization discovery strategies in the order they are tried."""
    memberships = OrganizationDiscoveryStrategy("authenticated user memberships", source_client.list_authenticated_user_organizations)
    public_memberships = OrganizationDiscoveryStrategy(
        f"public memberships of {scope.username}",
        lambda: source_client.list_user_organizations(scope.username),
    )
    if scope.use_specific_user:
        return [public_memberships, memberships]
    return [memberships, public_memberships]


async def discover_organizations(source_client: GitHubClientBase, scope: GitHubConfig, logger: MirrorLogger = default_logger) -> list[str]:
    """Return organization logins from the first strategy that succeeds with a non-empty result."""
    for strategy in organization_discovery_strategies(source_client, scope):
        try:
            organizations = await strategy.list_organizations()
        except GitHubException as exc:
            logger.warning("Organization discovery strategy failed", strategy=strategy.name, error=str(exc))
            continue
        logins = [org.login for org in organizations]
        if logins:
            logger.info("Discovered organizations", strategy=strategy.name, organizations=logins)
            return logins
        logger.info("Organization discovery strategy found no organizations", strategy=strategy.name)
    return []


async def fetch_repositories(
    source: str,
    fetch: Callable[[], Awaitable[list[Any]]],
    provenance: RepositoryProvenance,
    logger: MirrorLogger = default_logger,
) -> list[Repository]:
    """Run one discovery query, converting its results and swallowing query failures."""
    try:
        items = await fetch()
    except GitHubException as exc:
        logger.error("Failed to fetch repositories from GitHub", source=source, error=str(exc))
        return []
    repositories = [Repository.from_github(item, provenance) for item in items]
    logger.info("Fetched repositories from GitHub", source=source, count=len(repositories))
    return repositories


async def collect_single_repository(source_client: GitHubClientBase, scope: GitHubConfig, logger: MirrorLogger = default_logger) -> list[Repository]:
    """Fetch the one explicitly configured repository."""
    try:
        owner, name = split_repository_reference(scope.single_repo, github_web_prefixes(scope.api_url))
    except ValueError as exc:
        logger.error("Invalid single repository reference", single_repo=scope.single_repo, error=str(exc))
        return []
    try:
        data = await source_client.get_repository(owner, name)
    except GitHubException as exc:
        logger.error("Failed to fetch single repository from GitHub", repository=f"{owner}/{name}", error=str(exc))
        return []
    logger.info("Fetched single repository from GitHub", repository=f"{owner}/{name}")
    return [Repository.from_github(data, RepositoryProvenance.SINGLE)]


async def collect_organization_repositories(
    source_client: GitHubClientBase, scope: GitHubConfig, logger: MirrorLogger = default_logger
) -> list[Repository]:
    """List the repositories of every selected organization the user belongs to."""
    organizations = await discover_organizations(source_client, scope, logger)
    selected = filter_organization_names(organizations, scope.include_orgs, scope.exclude_orgs)
    logger.info("Selected organizations for mirroring", organizations=selected, skipped=len(organizations) - len(selected))

    async def fetch_for(org: str) -> list[Repository]:
        repositories = await fetch_repositories(
            f"organization {org}",
            lambda: source_client.list_organization_repositories(org),
            RepositoryProvenance.ORGANIZATION,
            logger,
        )
        if scope.preserve_org_structure:
            return [repository.tagged_with_organization(org) for repository in repositories]
        return repositories

    per_organization = await asyncio.gather(*(fetch_for(org) for org in selected))
    return [repository for repositories in per_organization for repository in repositories]


async def collect_repositories(source_client: GitHubClientBase, scope: GitHubConfig, logger: MirrorLogger = default_logger) -> list[Repository]:
    """Collect, de-duplicate and fork-filter the repositories to mirror.

    Sources are concatenated as owned, private, starred, organization; when a
    clone URL appears more than once the first occurrence wins.
    """
    if scope.single_repo:
        return await collect_single_repository(source_client, scope, logger)

    collected = await fetch_repositories(
        f"repositories of {scope.username}",
        lambda: source_client.list_user_repositories(scope.username),
        RepositoryProvenance.OWNED,
        logger,
    )
    if scope.private_repositories:
        collected += await fetch_repositories("private repositories", source_client.list_private_repositories, RepositoryProvenance.PRIVATE, logger)
    if scope.mirror_starred:
        collected += await fetch_repositories(
            f"repositories starred by {scope.username}",
            lambda: source_client.list_starred_repositories(scope.username),
            RepositoryProvenance.STARRED,
            logger,
        )
    if scope.mirror_organizations:
        collected += await collect_organization_repositories(source_client, scope, logger)

    repositories = without_duplicates(collected)
    if scope.skip_forks:
        repositories = without_forks(repositories)
    logger.info("Collected repositories from GitHub", collected=len(collected), unique=len(repositories))
    return repositories
