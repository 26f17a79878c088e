"""Unit tests for the utils.github module."""

import pytest

from gitea_mirror_manager.utils.github import KNOWN_GITHUB_HOST_PREFIXES, github_web_prefixes, split_repository_reference


@pytest.mark.parametrize(
    "reference, expected",
    [
        ("octocat/hello-world", ("octocat", "hello-world")),
        ("https://github.com/octocat/hello-world", ("octocat", "hello-world")),
        ("https://github.com/octocat/hello-world.git", ("octocat", "hello-world")),
        ("http://github.com/octocat/hello-world/", ("octocat", "hello-world")),
        ("git@github.com:octocat/hello-world.git", ("octocat", "hello-world")),
        ("github.com/octocat/hello-world", ("octocat", "hello-world")),
        ("  octocat/hello-world  ", ("octocat", "hello-world")),
    ],
)
def test_split_repository_reference_valid(reference: str, expected: tuple[str, str]) -> None:
    """Test that URLs and owner/repo references are split into owner and repository."""
    assert split_repository_reference(reference) == expected


@pytest.mark.parametrize("reference", [None, "", "octocat", "octocat/", "/hello-world", "a/b/c", "https://github.com/octocat"])
def test_split_repository_reference_invalid(reference: str | None) -> None:
    """Test that references without exactly an owner and a repository are rejected."""
    with pytest.raises(ValueError):
        split_repository_reference(reference)


def test_github_web_prefixes_public_github() -> None:
    """Test that github.com only knows its own prefixes."""
    assert github_web_prefixes("https://api.github.com") == KNOWN_GITHUB_HOST_PREFIXES


def test_github_web_prefixes_enterprise() -> None:
    """Test that an Enterprise host is recognised in repository URLs."""
    prefixes = github_web_prefixes("https://ghe.example.com/api/v3")

    assert prefixes[:2] == ("https://ghe.example.com/", "ghe.example.com/")
    assert split_repository_reference("https://ghe.example.com/team/tool.git", prefixes) == ("team", "tool")
