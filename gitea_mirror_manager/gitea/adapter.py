"""Gitea client adapter built on an httpx async client."""

from functools import wraps
from typing import Any, Awaitable, Callable, Self, TypeVar
from urllib.parse import quote

import httpx
import structlog

from gitea_mirror_manager.mirror.models import MirrorTarget, TargetKind

from .abc import GiteaClientBase
from .client import get_gitea_client
from .exceptions import GiteaConflictError, GiteaNotFoundError, GiteaRequestFailed

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def handle_gitea_422(func: F) -> F:
    """Decorator that turns a 422 Unprocessable Entity into a GiteaConflictError.

    Gitea reports an already existing organization or user name with 422.
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except GiteaRequestFailed as exc:
            if exc.status_code == 422:
                logger.info("Gitea 422 Unprocessable Entity", function=func.__name__, message=exc.message, url=exc.url)
                raise GiteaConflictError(exc.status_code, exc.message, exc.url) from exc
            raise

    return wrapper  # type: ignore


def _segment(value: str) -> str:
    return quote(value, safe="")


def _json(response: httpx.Response) -> Any:
    """Decode a successful response body, treating an unparseable body as a failed request."""
    try:
        return response.json()
    except ValueError as exc:
        raise GiteaRequestFailed(response.status_code, "Response body is not valid JSON", str(response.request.url)) from exc


def _field(data: Any, key: str, response: httpx.Response) -> Any:
    """Read a required field from a decoded response body."""
    if not isinstance(data, dict) or data.get(key) is None:
        raise GiteaRequestFailed(response.status_code, f"Response is missing '{key}'", str(response.request.url))
    return data[key]


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return response.reason_phrase


class GiteaAdapter(GiteaClientBase):
    """Gitea client adapter for the Gitea REST API (v1)."""

    def __init__(self, client: httpx.AsyncClient, page_size: int = 50) -> None:
        """Initialize the Gitea client adapter with an already-initialized client."""
        self.client = client
        self.page_size = page_size

    @classmethod
    async def create(cls, gitea_url: str, gitea_token: str, timeout: float = 60.0) -> Self:
        """Create a new Gitea client adapter.

        Args:
            gitea_url: Base URL of the Gitea instance (without /api/v1)
            gitea_token: Gitea access token
            timeout: Request timeout in seconds

        Returns:
            Configured GiteaAdapter instance
        """
        logger.info("Creating client for Gitea instance", gitea_url=gitea_url)
        return cls(get_gitea_client(gitea_url=gitea_url, gitea_token=gitea_token, timeout=timeout))

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request and raise a typed exception for error responses."""
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise GiteaRequestFailed(None, str(exc) or type(exc).__name__, path) from exc
        if response.status_code < 400:
            return response
        message = _error_message(response)
        url = str(response.request.url)
        if response.status_code == 404:
            raise GiteaNotFoundError(404, message, url)
        if response.status_code == 409:
            raise GiteaConflictError(409, message, url)
        raise GiteaRequestFailed(response.status_code, message, url)

    # Identity and organizations
    async def get_authenticated_user(self) -> MirrorTarget:
        """Get the user owning the configured token."""
        response = await self._request("GET", "/user")
        data = _json(response)
        return MirrorTarget(id=_field(data, "id", response), name=data.get("login") or _field(data, "username", response), kind=TargetKind.USER)

    async def get_organization(self, name: str) -> MirrorTarget | None:
        """Get an organization, or None if it does not exist."""
        try:
            response = await self._request("GET", f"/orgs/{_segment(name)}")
        except GiteaNotFoundError:
            return None
        data = _json(response)
        return MirrorTarget(id=_field(data, "id", response), name=data.get("username") or data.get("name") or name, kind=TargetKind.ORGANIZATION)

    @handle_gitea_422
    async def create_organization(self, name: str, visibility: str) -> MirrorTarget:
        """Create an organization with the given visibility."""
        response = await self._request("POST", "/orgs", json={"username": name, "visibility": visibility})
        data = _json(response)
        return MirrorTarget(id=_field(data, "id", response), name=data.get("username") or name, kind=TargetKind.ORGANIZATION)

    # Repositories
    async def repository_exists(self, owner: str, repo: str) -> bool:
        """Probe whether a repository exists.

        Only a 404 means "absent"; any other failure is raised so it is not
        mistaken for either outcome.
        """
        try:
            await self._request("GET", f"/repos/{_segment(owner)}/{_segment(repo)}")
        except GiteaNotFoundError:
            return False
        return True

    async def migrate_repository(
        self,
        clone_addr: str,
        repo_name: str,
        uid: int,
        private: bool,
        auth_token: str | None = None,
        mirror: bool = True,
    ) -> dict[str, Any]:
        """Create a pull mirror of a remote repository.

        The migration has happened once Gitea answers with a success status, so an
        unreadable response body is logged and an empty dict returned.
        """
        payload = {
            "auth_token": auth_token,
            "clone_addr": clone_addr,
            "mirror": mirror,
            "repo_name": repo_name,
            "uid": uid,
            "private": private,
        }
        response = await self._request("POST", "/repos/migrate", json=payload)
        try:
            return _json(response)
        except GiteaRequestFailed as exc:
            logger.warning("Could not read Gitea migration response", repo_name=repo_name, error=str(exc))
            return {}

    async def star_repository(self, owner: str, repo: str) -> None:
        """Star a repository as the authenticated user."""
        await self._request("PUT", f"/user/starred/{_segment(owner)}/{_segment(repo)}")

    # Issues and labels
    async def create_issue(self, owner: str, repo: str, title: str, body: str, closed: bool = False) -> dict[str, Any]:
        """Create an issue."""
        payload = {
            "title": title,
            "body": body,
            "state": "closed" if closed else "open",
            "closed": closed,
        }
        response = await self._request("POST", f"/repos/{_segment(owner)}/{_segment(repo)}/issues", json=payload)
        data = _json(response)
        _field(data, "number", response)
        return data

    async def close_issue(self, owner: str, repo: str, issue_number: int) -> dict[str, Any]:
        """Close an issue."""
        response = await self._request("PATCH", f"/repos/{_segment(owner)}/{_segment(repo)}/issues/{issue_number}", json={"state": "closed"})
        return _json(response)

    async def list_labels(self, owner: str, repo: str) -> list[dict[str, Any]]:
        """List all labels of a repository, handling pagination."""
        all_labels: list[dict[str, Any]] = []
        page: int = 1
        while True:
            response = await self._request(
                "GET",
                f"/repos/{_segment(owner)}/{_segment(repo)}/labels",
                params={"page": page, "limit": self.page_size},
            )
            labels = _json(response) or []
            if not isinstance(labels, list):
                raise GiteaRequestFailed(response.status_code, "Expected a list of labels", str(response.request.url))
            for label in labels:
                _field(label, "id", response)
                _field(label, "name", response)
            if not labels:
                break
            all_labels.extend(labels)
            if len(labels) < self.page_size:
                break
            page += 1
        return all_labels

    async def create_label(self, owner: str, repo: str, name: str, color: str) -> dict[str, Any]:
        """Create a label."""
        response = await self._request("POST", f"/repos/{_segment(owner)}/{_segment(repo)}/labels", json={"name": name, "color": color})
        data = _json(response)
        _field(data, "id", response)
        return data

    async def add_labels_to_issue(self, owner: str, repo: str, issue_number: int, label_ids: list[int]) -> None:
        """Attach labels to an issue."""
        if not label_ids:
            return
        await self._request("POST", f"/repos/{_segment(owner)}/{_segment(repo)}/issues/{issue_number}/labels", json={"labels": label_ids})
