"""Sets up the githubkit client used to read from GitHub."""

from typing import TypeAlias

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy, UnauthAuthStrategy

GitHubClient: TypeAlias = GitHub[TokenAuthStrategy] | GitHub[UnauthAuthStrategy]


async def get_github_client(github_token: str | None, github_api_url: str) -> GitHubClient:
    """Returns a GitHub client, authenticated with a token if one is configured.

    Public repositories of a user can be listed anonymously; every other
    discovery mode requires a token, which configuration validation enforces.
    """
    if github_token:
        # Disable HTTP caching to always get fresh data
        return GitHub(auth=TokenAuthStrategy(github_token), base_url=github_api_url, http_cache=False)
    return GitHub(auth=UnauthAuthStrategy(), base_url=github_api_url, http_cache=False)
