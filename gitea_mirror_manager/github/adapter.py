"""GitHub client adapter for the githubkit library."""

from typing import Any, Awaitable, Callable, Self

import structlog
from githubkit import Response
from githubkit.versions.latest.models import (
    FullRepository,
    Issue,
    MinimalRepository,
    OrganizationSimple,
    Repository,
)

from gitea_mirror_manager.utils.retry import retry_on_rate_limit

from .abc import GitHubClientBase
from .client import GitHubClient, get_github_client

logger = structlog.get_logger(__name__)


class GitHubKitAdapter(GitHubClientBase):
    """GitHub client adapter for the githubkit library."""

    def __init__(self, client: GitHubClient, per_page: int = 100) -> None:
        """Initialize the GitHub client adapter with an already-initialized client."""
        self.client = client
        self.per_page = per_page

    @classmethod
    async def create(cls, github_token: str | None = None, github_api_url: str = "https://api.github.com") -> Self:
        """Create a new GitHub client adapter.

        Args:
            github_token: Personal access token (optional for public repositories)
            github_api_url: GitHub API URL (defaults to https://api.github.com)

        Returns:
            Configured GitHubKitAdapter instance
        """
        logger.info("Creating client for GitHub instance", github_api_url=github_api_url, authenticated=bool(github_token))
        client = await get_github_client(github_token=github_token, github_api_url=github_api_url)
        return cls(client)

    async def _list_all_pages(self, list_method: Callable[..., Awaitable[Response[Any]]], **kwargs: Any) -> list[Any]:
        """Call a paginated list endpoint until a short or empty page is returned."""
        all_items: list[Any] = []
        page: int = 1
        while True:
            response = await list_method(per_page=self.per_page, page=page, **kwargs)
            items: list[Any] = response.parsed_data
            if not items:
                break
            all_items.extend(items)
            if len(items) < self.per_page:
                break
            page += 1
        return all_items

    # Repository listing
    @retry_on_rate_limit()
    async def list_user_repositories(self, username: str) -> list[MinimalRepository]:
        """List all repositories visible for a user, handling pagination."""
        return await self._list_all_pages(self.client.rest.repos.async_list_for_user, username=username)

    @retry_on_rate_limit()
    async def list_private_repositories(self) -> list[Repository]:
        """List private repositories owned by the authenticated user, handling pagination."""
        return await self._list_all_pages(
            self.client.rest.repos.async_list_for_authenticated_user,
            visibility="private",
            affiliation="owner",
        )

    @retry_on_rate_limit()
    async def list_starred_repositories(self, username: str) -> list[Repository]:
        """List repositories starred by a user, handling pagination."""
        return await self._list_all_pages(self.client.rest.activity.async_list_repos_starred_by_user, username=username)

    @retry_on_rate_limit()
    async def list_organization_repositories(self, org: str) -> list[MinimalRepository]:
        """List repositories of an organization, handling pagination."""
        return await self._list_all_pages(self.client.rest.repos.async_list_for_org, org=org)

    @retry_on_rate_limit()
    async def get_repository(self, owner: str, repo: str) -> FullRepository:
        """Get a single repository."""
        response: Response[FullRepository] = await self.client.rest.repos.async_get(owner=owner, repo=repo)
        return response.parsed_data

    # Organization listing
    @retry_on_rate_limit()
    async def list_authenticated_user_organizations(self) -> list[OrganizationSimple]:
        """List organizations the authenticated user belongs to, handling pagination."""
        return await self._list_all_pages(self.client.rest.orgs.async_list_for_authenticated_user)

    @retry_on_rate_limit()
    async def list_user_organizations(self, username: str) -> list[OrganizationSimple]:
        """List public organization memberships of a user, handling pagination."""
        return await self._list_all_pages(self.client.rest.orgs.async_list_for_user, username=username)

    # Issues
    @retry_on_rate_limit()
    async def list_issues(self, owner: str, repo: str) -> list[Issue]:
        """List all issues for a repository, oldest first, handling pagination.

        GitHub returns pull requests from this endpoint as well; they are dropped.
        """
        issues: list[Issue] = await self._list_all_pages(
            self.client.rest.issues.async_list_for_repo,
            owner=owner,
            repo=repo,
            state="all",
            sort="created",
            direction="asc",
        )
        return [issue for issue in issues if getattr(issue, "pull_request", None) is None]
