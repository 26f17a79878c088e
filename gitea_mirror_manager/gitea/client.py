"""Sets up the authenticated httpx client for the Gitea API."""

import httpx

GITEA_API_PREFIX = "/api/v1"


def get_gitea_client(gitea_url: str, gitea_token: str, timeout: float = 60.0, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """Returns an httpx client whose base URL is the Gitea API root, authenticated with a token."""
    if not gitea_token:
        raise RuntimeError("Gitea authentication requires gitea_token in config.")
    return httpx.AsyncClient(
        base_url=gitea_url.rstrip("/") + GITEA_API_PREFIX,
        headers={
            "Authorization": f"token {gitea_token}",
            "Accept": "application/json",
        },
        timeout=timeout,
        transport=transport,
    )
