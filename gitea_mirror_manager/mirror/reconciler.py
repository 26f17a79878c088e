"""Brings a single repository into sync with its Gitea mirror."""

import structlog

from gitea_mirror_manager.gitea.abc import GiteaClientBase
from gitea_mirror_manager.gitea.exceptions import GiteaError
from gitea_mirror_manager.github.abc import GitHubClientBase
from gitea_mirror_manager.mirror.issues import mirror_issues
from gitea_mirror_manager.mirror.models import MirrorDecision, MirrorTarget, Repository
from gitea_mirror_manager.mirror.results import IssueMirrorResult, RepositoryMirrorResult
from gitea_mirror_manager.mirror.types import MirrorLogger

default_logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def star_mirror(repository: Repository, target: MirrorTarget, gitea_client: GiteaClientBase, logger: MirrorLogger) -> bool:
    """Star the mirror of a starred repository; failures are logged only."""
    try:
        await gitea_client.star_repository(target.name, repository.name)
    except GiteaError as exc:
        logger.error("Failed to star repository on Gitea", repository=repository.full_name, target=target.name, error=str(exc))
        return False
    logger.info("Starred repository on Gitea", repository=repository.full_name, target=target.name)
    return True


def should_mirror_issues(repository: Repository, mirror_issues_enabled: bool, dry_run: bool, skip_starred_issues: bool) -> bool:
    """Whether issues of a newly created mirror should be replicated."""
    if not mirror_issues_enabled or dry_run or not repository.has_issues:
        return False
    return not (repository.starred and skip_starred_issues)


async def reconcile_repository(
    repository: Repository,
    target: MirrorTarget,
    gitea_client: GiteaClientBase,
    source_client: GitHubClientBase,
    github_token: str | None,
    mirror_issues_enabled: bool = False,
    dry_run: bool = False,
    skip_starred_issues: bool = False,
    logger: MirrorLogger = default_logger,
) -> RepositoryMirrorResult:
    """Mirror a repository onto its target unless it is already there.

    Steps run strictly in order: existence check, migrate, star, issues. No
    exception escapes; a failure is logged and reported as FAILED.
    """
    try:
        return await _reconcile(repository, target, gitea_client, source_client, github_token, mirror_issues_enabled, dry_run, skip_starred_issues, logger)
    except Exception as exc:
        logger.error("Unexpected error while mirroring repository", repository=repository.full_name, target=target.name, error=str(exc), exc_info=True)
        return RepositoryMirrorResult(repository, target, MirrorDecision.FAILED)


async def _reconcile(
    repository: Repository,
    target: MirrorTarget,
    gitea_client: GiteaClientBase,
    source_client: GitHubClientBase,
    github_token: str | None,
    mirror_issues_enabled: bool,
    dry_run: bool,
    skip_starred_issues: bool,
    logger: MirrorLogger,
) -> RepositoryMirrorResult:
    # A placeholder organization only exists in a dry run, so nothing can live under it yet.
    if target.is_placeholder:
        exists = False
    else:
        try:
            exists = await gitea_client.repository_exists(target.name, repository.name)
        except GiteaError as exc:
            logger.error(
                "Could not determine whether repository is already mirrored; skipping for this run",
                repository=repository.full_name,
                target=target.name,
                error=str(exc),
            )
            return RepositoryMirrorResult(repository, target, MirrorDecision.FAILED)

    if exists:
        if not repository.starred:
            logger.info("Repository is already mirrored; doing nothing", repository=repository.full_name, target=target.name)
            return RepositoryMirrorResult(repository, target, MirrorDecision.ALREADY_MIRRORED)
        if dry_run:
            logger.info("DRY RUN: Would star already mirrored repository", repository=repository.full_name, target=target.name)
            return RepositoryMirrorResult(repository, target, MirrorDecision.DRY_RUN)
        starred = await star_mirror(repository, target, gitea_client, logger)
        return RepositoryMirrorResult(repository, target, MirrorDecision.STARRED if starred else MirrorDecision.ALREADY_MIRRORED)

    if dry_run:
        action = "mirror and star" if repository.starred else "mirror"
        logger.info(f"DRY RUN: Would {action} repository to Gitea", repository=repository.full_name, target=target.name, private=repository.private)
        return RepositoryMirrorResult(repository, target, MirrorDecision.DRY_RUN)

    if target.id is None:
        logger.error("Target has no Gitea identifier; cannot mirror", repository=repository.full_name, target=target.name)
        return RepositoryMirrorResult(repository, target, MirrorDecision.FAILED)

    logger.info("Mirroring repository to Gitea", repository=repository.full_name, target=target.name, private=repository.private)
    try:
        await gitea_client.migrate_repository(
            clone_addr=repository.clone_url,
            repo_name=repository.name,
            uid=target.id,
            private=repository.private,
            auth_token=github_token,
        )
    except GiteaError as exc:
        logger.error("Failed to mirror repository to Gitea", repository=repository.full_name, target=target.name, error=str(exc))
        return RepositoryMirrorResult(repository, target, MirrorDecision.FAILED)
    logger.info("Mirrored repository to Gitea", repository=repository.full_name, target=target.name)

    if repository.starred:
        await star_mirror(repository, target, gitea_client, logger)

    issues: IssueMirrorResult | None = None
    if should_mirror_issues(repository, mirror_issues_enabled, dry_run, skip_starred_issues):
        issues = await mirror_issues(repository, target, source_client, gitea_client, logger)

    return RepositoryMirrorResult(repository, target, MirrorDecision.MIRRORED, issues)
