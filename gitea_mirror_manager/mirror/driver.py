"""Orchestrates a mirror run: collect, filter, resolve targets, reconcile."""

import asyncio
import time
import uuid

import structlog

from gitea_mirror_manager.configuration.models import MirrorConfig
from gitea_mirror_manager.gitea.abc import GiteaClientBase
from gitea_mirror_manager.gitea.adapter import GiteaAdapter
from gitea_mirror_manager.github.abc import GitHubClientBase
from gitea_mirror_manager.github.adapter import GitHubKitAdapter
from gitea_mirror_manager.mirror.collector import collect_repositories
from gitea_mirror_manager.mirror.filters import filter_repositories
from gitea_mirror_manager.mirror.models import Repository
from gitea_mirror_manager.mirror.reconciler import reconcile_repository
from gitea_mirror_manager.mirror.results import MirrorRunResult, RepositoryMirrorResult
from gitea_mirror_manager.mirror.scheduler import run_with_concurrency_limit
from gitea_mirror_manager.mirror.targets import TargetResolver
from gitea_mirror_manager.mirror.types import MirrorLogger

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


async def mirror_repositories(
    config: MirrorConfig,
    source_client: GitHubClientBase,
    gitea_client: GiteaClientBase,
    run_logger: MirrorLogger,
) -> MirrorRunResult:
    """Run the mirroring pipeline against already-created clients."""
    collected = await collect_repositories(source_client, config.github, run_logger)
    repositories = filter_repositories(collected, config.include, config.exclude)
    run_logger.info(
        f"Found {len(repositories)} repositories on GitHub to mirror",
        collected=len(collected),
        filtered_out=len(collected) - len(repositories),
        include=config.include,
        exclude=config.exclude,
    )

    user = await gitea_client.get_authenticated_user()
    run_logger.info("Authenticated against Gitea", gitea_user=user.name, gitea_user_id=user.id)
    resolver = TargetResolver(gitea_client, user, config.gitea, dry_run=config.dry_run, logger=run_logger)

    async def mirror_one(repository: Repository) -> RepositoryMirrorResult:
        target = await resolver.resolve(repository)
        return await reconcile_repository(
            repository,
            target,
            gitea_client,
            source_client,
            github_token=config.github.token,
            mirror_issues_enabled=config.github.mirror_issues,
            dry_run=config.dry_run,
            skip_starred_issues=config.github.skip_starred_issues,
            logger=run_logger,
        )

    outcomes = await run_with_concurrency_limit(
        [lambda repository=repository: mirror_one(repository) for repository in repositories],
        limit=config.concurrency,
        logger=run_logger,
    )
    return MirrorRunResult([outcome for outcome in outcomes if outcome is not None], collected=len(collected))


async def run_mirror_workflow(config: MirrorConfig) -> MirrorRunResult:
    """Run a single mirror pass with freshly created GitHub and Gitea clients."""
    run_logger = logger.bind(run_id=uuid.uuid4().hex[:8], dry_run=config.dry_run)
    start_time = time.time()
    run_logger.info("Starting mirror run", github_username=config.github.username, gitea_url=config.gitea.url)

    source_client = await GitHubKitAdapter.create(github_token=config.github.token, github_api_url=config.github.api_url)
    async with await GiteaAdapter.create(gitea_url=config.gitea.url, gitea_token=config.gitea.token) as gitea_client:
        result = await mirror_repositories(config, source_client, gitea_client, run_logger)

    run_logger.info("Finished mirror run", duration=round(time.time() - start_time, 2), **result.counts())
    return result


async def run_mirror_schedule(config: MirrorConfig) -> None:
    """Run mirror passes forever, ``delay`` seconds apart, or once if ``single_run`` is set.

    A failed pass propagates in single-run mode; when repeating, it is logged
    and the next pass is attempted after the delay.
    """
    while True:
        if config.single_run:
            await run_mirror_workflow(config)
            return
        try:
            await run_mirror_workflow(config)
        except Exception as exc:
            logger.error("Mirror run failed", error=str(exc), error_type=type(exc).__name__, exc_info=True)
        logger.info("Waiting for next mirror run", delay=config.delay)
        await asyncio.sleep(config.delay)
