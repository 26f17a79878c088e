"""Decides which Gitea user or organization owns each mirror."""

import asyncio

import structlog

from gitea_mirror_manager.configuration.models import GiteaConfig
from gitea_mirror_manager.gitea.abc import GiteaClientBase
from gitea_mirror_manager.gitea.exceptions import GiteaConflictError, GiteaError
from gitea_mirror_manager.mirror.models import MirrorTarget, Repository, TargetKind
from gitea_mirror_manager.mirror.types import MirrorLogger

default_logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class TargetResolver:
    """Resolves mirror targets for one run, memoizing organizations by name.

    Concurrent callers asking for the same organization wait on a per-name
    lock, so an organization is looked up (and created) at most once.
    """

    def __init__(
        self,
        gitea_client: GiteaClientBase,
        user: MirrorTarget,
        gitea_config: GiteaConfig,
        dry_run: bool = False,
        logger: MirrorLogger = default_logger,
    ) -> None:
        """Initialize the resolver with the authenticated Gitea user as fallback target."""
        self.gitea_client = gitea_client
        self.user = user
        self.gitea_config = gitea_config
        self.dry_run = dry_run
        self.logger = logger
        self._organizations: dict[str, MirrorTarget] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def organization_for(self, repository: Repository) -> str | None:
        """Name of the organization a repository belongs in, or None for the user account."""
        if repository.organization:
            return repository.organization
        if repository.starred and self.gitea_config.starred_repos_org:
            return self.gitea_config.starred_repos_org
        return self.gitea_config.organization

    async def resolve(self, repository: Repository) -> MirrorTarget:
        """Return the target for a repository, falling back to the user if its organization is unavailable."""
        organization = self.organization_for(repository)
        if organization is None:
            return self.user
        try:
            return await self.resolve_organization(organization)
        except GiteaError as exc:
            self.logger.error(
                "Failed to resolve Gitea organization, falling back to user",
                organization=organization,
                repository=repository.full_name,
                fallback=self.user.name,
                error=str(exc),
            )
            return self.user

    async def resolve_organization(self, name: str) -> MirrorTarget:
        """Get or create an organization, at most once per run."""
        cached = self._organizations.get(name)
        if cached is not None:
            return cached
        lock = self._locks.setdefault(name, asyncio.Lock())
        async with lock:
            cached = self._organizations.get(name)
            if cached is not None:
                return cached
            target = await self._get_or_create_organization(name)
            self._organizations[name] = target
            return target

    async def _get_or_create_organization(self, name: str) -> MirrorTarget:
        target = await self.gitea_client.get_organization(name)
        if target is not None:
            return target

        visibility = self.gitea_config.visibility.value
        if self.dry_run:
            self.logger.info("DRY RUN: Would create Gitea organization", organization=name, visibility=visibility)
            return MirrorTarget(id=None, name=name, kind=TargetKind.ORGANIZATION)

        self.logger.info("Creating Gitea organization", organization=name, visibility=visibility)
        try:
            return await self.gitea_client.create_organization(name, visibility)
        except GiteaConflictError:
            self.logger.info("Gitea organization already exists", organization=name)
            target = await self.gitea_client.get_organization(name)
            if target is None:
                raise
            return target
