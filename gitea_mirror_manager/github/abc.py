"""Base ABC for the GitHub (source) client."""

from abc import ABC, abstractmethod
from typing import Any


class GitHubClientBase(ABC):
    """Read-only operations the mirroring workflow needs from GitHub."""

    # Repository listing
    @abstractmethod
    async def list_user_repositories(self, username: str) -> list[Any]:
        """List repositories visible for a user."""
        pass

    @abstractmethod
    async def list_private_repositories(self) -> list[Any]:
        """List private repositories owned by the authenticated user."""
        pass

    @abstractmethod
    async def list_starred_repositories(self, username: str) -> list[Any]:
        """List repositories starred by a user."""
        pass

    @abstractmethod
    async def list_organization_repositories(self, org: str) -> list[Any]:
        """List repositories of an organization."""
        pass

    @abstractmethod
    async def get_repository(self, owner: str, repo: str) -> Any:
        """Get a single repository."""
        pass

    # Organization listing
    @abstractmethod
    async def list_authenticated_user_organizations(self) -> list[Any]:
        """List organizations the authenticated user is a member of."""
        pass

    @abstractmethod
    async def list_user_organizations(self, username: str) -> list[Any]:
        """List public organization memberships of a user."""
        pass

    # Issues
    @abstractmethod
    async def list_issues(self, owner: str, repo: str) -> list[Any]:
        """List all issues (open and closed) of a repository."""
        pass
