"""Contains utility functions for GitHub interactions."""

from urllib.parse import urlparse

KNOWN_GITHUB_HOST_PREFIXES = ("https://github.com/", "http://github.com/", "git@github.com:", "github.com/")


def github_web_prefixes(github_api_url: str) -> tuple[str, ...]:
    """Return the repository URL prefixes for a GitHub (Enterprise) API URL.

    e.g., "https://ghe.example.com/api/v3" -> ("https://ghe.example.com/", "ghe.example.com/")
    """
    parsed = urlparse(github_api_url)
    host = parsed.netloc
    if not host or host == "api.github.com":
        return KNOWN_GITHUB_HOST_PREFIXES
    return (f"{parsed.scheme}://{host}/", f"{host}/") + KNOWN_GITHUB_HOST_PREFIXES


def split_repository_reference(reference: str | None, prefixes: tuple[str, ...] = KNOWN_GITHUB_HOST_PREFIXES) -> tuple[str, str]:
    """Splits a repository URL or 'owner/repo' reference into owner and repository.

    A known host prefix and a trailing '.git' suffix are removed first.

    Raises:
        ValueError: If the reference does not name exactly an owner and a repository.
    """
    if reference is None:
        raise ValueError("Repository reference is required.")
    repo = reference.strip()
    for prefix in prefixes:
        if repo.lower().startswith(prefix.lower()):
            repo = repo[len(prefix) :]
            break
    repo = repo.strip("/")
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Repository reference '{reference}' must be a URL or in the format 'owner/repo'.")
    owner, repository = parts
    return owner, repository
