"""Exceptions raised by the Gitea (target) client."""


class GiteaError(Exception):
    """Base exception for all Gitea client errors."""

    pass


class GiteaRequestFailed(GiteaError):
    """Raised when Gitea answers with an error status, or cannot be reached."""

    def __init__(self, status_code: int | None, message: str, url: str | None = None) -> None:
        """Initialize with the status code (None for transport errors), message and URL."""
        super().__init__(f"[{status_code if status_code is not None else 'connection error'}] {message}" + (f" ({url})" if url else ""))
        self.status_code = status_code
        self.message = message
        self.url = url


class GiteaNotFoundError(GiteaRequestFailed):
    """Raised when a resource does not exist (404)."""

    pass


class GiteaConflictError(GiteaRequestFailed):
    """Raised when a resource already exists (409, or 422 for organizations)."""

    pass
