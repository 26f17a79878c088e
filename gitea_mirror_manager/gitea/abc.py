"""Base ABC for the Gitea (target) client."""

from abc import ABC, abstractmethod
from typing import Any

from gitea_mirror_manager.mirror.models import MirrorTarget


class GiteaClientBase(ABC):
    """Operations the mirroring workflow performs against Gitea."""

    # Identity and organizations
    @abstractmethod
    async def get_authenticated_user(self) -> MirrorTarget:
        """Get the user owning the configured token."""
        pass

    @abstractmethod
    async def get_organization(self, name: str) -> MirrorTarget | None:
        """Get an organization, or None if it does not exist."""
        pass

    @abstractmethod
    async def create_organization(self, name: str, visibility: str) -> MirrorTarget:
        """Create an organization."""
        pass

    # Repositories
    @abstractmethod
    async def repository_exists(self, owner: str, repo: str) -> bool:
        """Probe whether a repository exists; raises if the probe itself fails."""
        pass

    @abstractmethod
    async def migrate_repository(
        self,
        clone_addr: str,
        repo_name: str,
        uid: int,
        private: bool,
        auth_token: str | None = None,
        mirror: bool = True,
    ) -> Any:
        """Create a pull mirror of a remote repository."""
        pass

    @abstractmethod
    async def star_repository(self, owner: str, repo: str) -> None:
        """Star a repository as the authenticated user."""
        pass

    # Issues and labels
    @abstractmethod
    async def create_issue(self, owner: str, repo: str, title: str, body: str, closed: bool = False) -> dict[str, Any]:
        """Create an issue."""
        pass

    @abstractmethod
    async def close_issue(self, owner: str, repo: str, issue_number: int) -> dict[str, Any]:
        """Close an issue."""
        pass

    @abstractmethod
    async def list_labels(self, owner: str, repo: str) -> list[dict[str, Any]]:
        """List labels of a repository."""
        pass

    @abstractmethod
    async def create_label(self, owner: str, repo: str, name: str, color: str) -> dict[str, Any]:
        """Create a label."""
        pass

    @abstractmethod
    async def add_labels_to_issue(self, owner: str, repo: str, issue_number: int, label_ids: list[int]) -> None:
        """Attach labels to an issue."""
        pass
