"""Filters applied to the collected repository list."""

from fnmatch import fnmatchcase
from typing import Iterable, Sequence

from gitea_mirror_manager.mirror.models import Repository


def matches(name: str, pattern: str) -> bool:
    """Case-sensitive shell-glob match (``*``, ``?``, ``[seq]``)."""
    return fnmatchcase(name, pattern)


def filter_repositories(repositories: Iterable[Repository], include: Sequence[str], exclude: Sequence[str]) -> list[Repository]:
    """Keep repositories whose name matches an include pattern and no exclude pattern.

    An empty include list keeps nothing.
    """
    return [
        repository
        for repository in repositories
        if any(matches(repository.name, pattern) for pattern in include) and not any(matches(repository.name, pattern) for pattern in exclude)
    ]


def without_duplicates(repositories: Iterable[Repository]) -> list[Repository]:
    """Drop repositories whose clone URL was already seen, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[Repository] = []
    for repository in repositories:
        if repository.clone_url in seen:
            continue
        seen.add(repository.clone_url)
        unique.append(repository)
    return unique


def without_forks(repositories: Iterable[Repository]) -> list[Repository]:
    """Drop forked repositories."""
    return [repository for repository in repositories if not repository.fork]


def filter_organization_names(organizations: Iterable[str], include: Sequence[str], exclude: Sequence[str]) -> list[str]:
    """Apply case-insensitive organization include/exclude lists.

    A non-empty include list is the sole allow-list; the exclude list then
    removes from whatever remains.
    """
    included = {name.lower() for name in include}
    excluded = {name.lower() for name in exclude}
    return [org for org in organizations if (not included or org.lower() in included) and org.lower() not in excluded]
