"""Replicates GitHub issues and their labels onto a freshly created mirror."""

import structlog
from githubkit.exception import GitHubException

from gitea_mirror_manager.gitea.abc import GiteaClientBase
from gitea_mirror_manager.gitea.exceptions import GiteaConflictError, GiteaError
from gitea_mirror_manager.github.abc import GitHubClientBase
from gitea_mirror_manager.mirror.models import Issue, MirrorTarget, Repository
from gitea_mirror_manager.mirror.results import IssueMirrorResult
from gitea_mirror_manager.mirror.types import MirrorLogger
from gitea_mirror_manager.utils.labels import DEFAULT_LABEL_COLOR

default_logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def attributed_body(issue: Issue) -> str:
    """Prefix the issue body with its original author and creation date."""
    created = f" on {issue.created_at.date().isoformat()}" if issue.created_at else ""
    header = f"*Originally created by @{issue.author_login}{created} (GitHub issue #{issue.number})*"
    if not issue.body:
        return header
    return f"{header}\n\n{issue.body}"


class LabelRegistry:
    """Label name to Gitea label id lookup for one mirrored repository."""

    def __init__(self, gitea_client: GiteaClientBase, target: MirrorTarget, repository: Repository, logger: MirrorLogger) -> None:
        """Initialize an empty registry; call ``load`` before use."""
        self.gitea_client = gitea_client
        self.owner = target.name
        self.repo = repository.name
        self.logger = logger
        self.ids: dict[str, int] = {}

    async def load(self) -> None:
        """Load the labels already present on the mirror (Gitea may copy none, some, or all)."""
        try:
            labels = await self.gitea_client.list_labels(self.owner, self.repo)
        except GiteaError as exc:
            self.logger.warning("Failed to list labels on Gitea", repository=f"{self.owner}/{self.repo}", error=str(exc))
            return
        self.ids = {label["name"]: label["id"] for label in labels}

    async def ensure(self, name: str) -> int | None:
        """Return the id of a label, creating it if needed; None if that fails."""
        if name in self.ids:
            return self.ids[name]
        try:
            label = await self.gitea_client.create_label(self.owner, self.repo, name, DEFAULT_LABEL_COLOR)
        except GiteaConflictError:
            await self.load()
            if name not in self.ids:
                self.logger.error("Label reported as existing but not found", repository=f"{self.owner}/{self.repo}", label=name)
            return self.ids.get(name)
        except GiteaError as exc:
            self.logger.error("Failed to create label on Gitea", repository=f"{self.owner}/{self.repo}", label=name, error=str(exc))
            return None
        self.ids[name] = label["id"]
        return label["id"]


async def mirror_issue(
    issue: Issue,
    target: MirrorTarget,
    repository: Repository,
    gitea_client: GiteaClientBase,
    labels: LabelRegistry,
    logger: MirrorLogger,
) -> bool:
    """Create one issue on the mirror, close it if needed, and attach its labels."""
    owner, repo = target.name, repository.name
    try:
        created = await gitea_client.create_issue(owner, repo, title=issue.title, body=attributed_body(issue), closed=issue.closed)
    except GiteaError as exc:
        logger.error("Failed to create issue on Gitea", repository=f"{owner}/{repo}", issue_number=issue.number, error=str(exc))
        return False
    number = created["number"]

    if issue.closed and created.get("state") != "closed":
        try:
            await gitea_client.close_issue(owner, repo, number)
        except GiteaError as exc:
            logger.error("Failed to close issue on Gitea", repository=f"{owner}/{repo}", issue_number=number, error=str(exc))

    label_ids = [label_id for label_id in [await labels.ensure(name) for name in issue.labels] if label_id is not None]
    if label_ids:
        try:
            await gitea_client.add_labels_to_issue(owner, repo, number, label_ids)
        except GiteaError as exc:
            logger.error("Failed to attach labels to issue on Gitea", repository=f"{owner}/{repo}", issue_number=number, error=str(exc))
    return True


async def mirror_issues(
    repository: Repository,
    target: MirrorTarget,
    source_client: GitHubClientBase,
    gitea_client: GiteaClientBase,
    logger: MirrorLogger = default_logger,
) -> IssueMirrorResult:
    """Replicate every GitHub issue of a repository, one at a time in source order."""
    try:
        github_issues = await source_client.list_issues(repository.owner, repository.name)
    except GitHubException as exc:
        logger.error("Failed to fetch issues from GitHub", repository=repository.full_name, error=str(exc))
        return IssueMirrorResult(total=0, created=0)

    issues = [Issue.from_github(github_issue) for github_issue in github_issues]
    logger.info("Mirroring issues", repository=repository.full_name, target=target.name, count=len(issues))
    labels = LabelRegistry(gitea_client, target, repository, logger)
    await labels.load()

    created = 0
    for issue in issues:
        if await mirror_issue(issue, target, repository, gitea_client, labels, logger):
            created += 1
    logger.info("Mirrored issues", repository=repository.full_name, target=target.name, created=created, failed=len(issues) - created)
    return IssueMirrorResult(total=len(issues), created=created)
