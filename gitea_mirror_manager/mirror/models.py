"""Data models shared by the mirroring components."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Literal, Self

from gitea_mirror_manager.utils.labels import extract_label_names


class RepositoryProvenance(str, Enum):
    """How a repository was discovered on GitHub."""

    OWNED = "owned"
    PRIVATE = "private"
    STARRED = "starred"
    ORGANIZATION = "organization"
    SINGLE = "single"


class TargetKind(str, Enum):
    """Kind of Gitea namespace that owns a mirror."""

    USER = "user"
    ORGANIZATION = "organization"


class MirrorDecision(str, Enum):
    """Outcome of reconciling a single repository."""

    MIRRORED = "mirrored"
    ALREADY_MIRRORED = "already_mirrored"
    STARRED = "starred"
    DRY_RUN = "dry_run"
    FAILED = "failed"


@dataclass(frozen=True)
class Repository:
    """A GitHub repository that is a candidate for mirroring.

    Instances are never mutated; use ``tagged_with_organization`` or
    ``dataclasses.replace`` to derive a tagged copy.
    """

    name: str
    clone_url: str
    private: bool
    fork: bool
    owner: str
    full_name: str
    has_issues: bool = True
    provenance: RepositoryProvenance = RepositoryProvenance.OWNED
    organization: str | None = None
    starred: bool = False

    @classmethod
    def from_github(cls, data: Any, provenance: RepositoryProvenance) -> Self:
        """Build a repository from a githubkit repository model (or anything shaped like one)."""
        owner = getattr(data, "owner", None)
        owner_login = getattr(owner, "login", None) or ""
        return cls(
            name=data.name,
            clone_url=data.clone_url,
            private=bool(data.private),
            fork=bool(data.fork),
            owner=owner_login,
            full_name=getattr(data, "full_name", None) or f"{owner_login}/{data.name}",
            has_issues=bool(getattr(data, "has_issues", True)),
            provenance=provenance,
            starred=provenance == RepositoryProvenance.STARRED,
        )

    def tagged_with_organization(self, organization: str) -> Self:
        """Return a copy that remembers the GitHub organization it was discovered under."""
        return replace(self, organization=organization)


@dataclass(frozen=True)
class MirrorTarget:
    """A Gitea user or organization that owns mirrored repositories."""

    id: int | None
    name: str
    kind: TargetKind

    @property
    def is_placeholder(self) -> bool:
        """True for an organization that would only be created outside of a dry run."""
        return self.id is None


@dataclass(frozen=True)
class Issue:
    """A GitHub issue to be replicated onto a mirror."""

    title: str
    body: str
    state: Literal["open", "closed"]
    number: int
    author_login: str
    created_at: datetime | None = None
    labels: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_github(cls, data: Any) -> Self:
        """Build an issue from a githubkit issue model."""
        user = getattr(data, "user", None)
        return cls(
            title=data.title,
            body=getattr(data, "body", None) or "",
            state="closed" if data.state == "closed" else "open",
            number=data.number,
            author_login=getattr(user, "login", None) or "ghost",
            created_at=getattr(data, "created_at", None),
            labels=tuple(sorted(extract_label_names(getattr(data, "labels", None) or []))),
        )

    @property
    def closed(self) -> bool:
        """Whether the issue is closed on GitHub."""
        return self.state == "closed"
