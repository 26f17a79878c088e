"""Unit tests for the GitHubKitAdapter class and related GitHub operations."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from gitea_mirror_manager.github.adapter import GitHubKitAdapter


class DummyResponse:
    """A dummy response object to mock GitHub API responses."""

    def __init__(self, parsed_data: object) -> None:
        """Initialize the dummy response with its parsed data."""
        self.status_code: int = 200
        self.parsed_data = parsed_data


def pages(*page_items: list[object]) -> AsyncMock:
    """Return a list endpoint mock that answers successive pages."""
    return AsyncMock(side_effect=[DummyResponse(items) for items in page_items])


@pytest.mark.asyncio
async def test_list_user_repositories_paginates() -> None:
    """Test that pages are requested until a short page is returned."""
    adapter = GitHubKitAdapter(MagicMock(), per_page=2)
    adapter.client.rest.repos.async_list_for_user = pages(["a", "b"], ["c"])

    result = await adapter.list_user_repositories("octocat")

    assert result == ["a", "b", "c"]
    calls = adapter.client.rest.repos.async_list_for_user.await_args_list
    assert [call.kwargs for call in calls] == [
        {"per_page": 2, "page": 1, "username": "octocat"},
        {"per_page": 2, "page": 2, "username": "octocat"},
    ]


@pytest.mark.asyncio
async def test_pagination_stops_on_empty_page() -> None:
    """Test that an empty page after a full page ends the listing."""
    adapter = GitHubKitAdapter(MagicMock(), per_page=2)
    adapter.client.rest.activity.async_list_repos_starred_by_user = pages(["a", "b"], [])

    assert await adapter.list_starred_repositories("octocat") == ["a", "b"]


@pytest.mark.asyncio
async def test_list_private_repositories_filters_owned_private() -> None:
    """Test that only private repositories owned by the token's user are requested."""
    adapter = GitHubKitAdapter(MagicMock())
    adapter.client.rest.repos.async_list_for_authenticated_user = pages([])

    await adapter.list_private_repositories()

    kwargs = adapter.client.rest.repos.async_list_for_authenticated_user.await_args.kwargs
    assert kwargs["visibility"] == "private"
    assert kwargs["affiliation"] == "owner"


@pytest.mark.asyncio
async def test_list_organization_repositories() -> None:
    """Test listing the repositories of an organization."""
    adapter = GitHubKitAdapter(MagicMock())
    adapter.client.rest.repos.async_list_for_org = pages(["product"])

    assert await adapter.list_organization_repositories("acme") == ["product"]
    assert adapter.client.rest.repos.async_list_for_org.await_args.kwargs["org"] == "acme"


@pytest.mark.asyncio
async def test_get_repository() -> None:
    """Test fetching a single repository."""
    adapter = GitHubKitAdapter(MagicMock())
    repository = SimpleNamespace(name="widget")
    adapter.client.rest.repos.async_get = AsyncMock(return_value=DummyResponse(repository))

    assert await adapter.get_repository("acme", "widget") is repository
    adapter.client.rest.repos.async_get.assert_awaited_once_with(owner="acme", repo="widget")


@pytest.mark.asyncio
async def test_list_organizations() -> None:
    """Test both organization membership listings."""
    adapter = GitHubKitAdapter(MagicMock())
    adapter.client.rest.orgs.async_list_for_authenticated_user = pages([SimpleNamespace(login="acme")])
    adapter.client.rest.orgs.async_list_for_user = pages([SimpleNamespace(login="globex")])

    assert [org.login for org in await adapter.list_authenticated_user_organizations()] == ["acme"]
    assert [org.login for org in await adapter.list_user_organizations("octocat")] == ["globex"]


@pytest.mark.asyncio
async def test_list_issues_excludes_pull_requests() -> None:
    """Test that all issues are requested oldest first and pull requests are dropped."""
    adapter = GitHubKitAdapter(MagicMock())
    issue = SimpleNamespace(number=1, pull_request=None)
    pull_request = SimpleNamespace(number=2, pull_request=SimpleNamespace(url="https://api.github.com/repos/acme/widget/pulls/2"))
    adapter.client.rest.issues.async_list_for_repo = pages([issue, pull_request])

    assert await adapter.list_issues("acme", "widget") == [issue]
    kwargs = adapter.client.rest.issues.async_list_for_repo.await_args.kwargs
    assert (kwargs["state"], kwargs["sort"], kwargs["direction"]) == ("all", "created", "asc")


@pytest.mark.asyncio
async def test_list_errors_propagate() -> None:
    """Test that non rate limit errors are not retried."""
    adapter = GitHubKitAdapter(MagicMock())
    adapter.client.rest.repos.async_list_for_user = AsyncMock(side_effect=ValueError("boom"))

    with pytest.raises(ValueError):
        await adapter.list_user_repositories("octocat")
    adapter.client.rest.repos.async_list_for_user.assert_awaited_once()
