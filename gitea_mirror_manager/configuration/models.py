"""Reconciled configuration handed to the mirroring workflow."""

from dataclasses import dataclass, field
from enum import Enum


class GiteaVisibility(str, Enum):
    """Enum for the visibility of organizations created on Gitea."""

    PUBLIC = "public"
    PRIVATE = "private"
    LIMITED = "limited"


@dataclass
class GitHubConfig:
    """Source-side scope: which GitHub repositories to consider."""

    username: str
    token: str | None
    api_url: str = "https://api.github.com"
    skip_forks: bool = False
    private_repositories: bool = False
    mirror_issues: bool = False
    mirror_starred: bool = False
    mirror_organizations: bool = False
    use_specific_user: bool = False
    single_repo: str | None = None
    include_orgs: list[str] = field(default_factory=list)
    exclude_orgs: list[str] = field(default_factory=list)
    preserve_org_structure: bool = False
    skip_starred_issues: bool = False


@dataclass
class GiteaConfig:
    """Target-side connection and placement settings."""

    url: str
    token: str
    organization: str | None = None
    visibility: GiteaVisibility = GiteaVisibility.PUBLIC
    starred_repos_org: str | None = "github"


@dataclass
class MirrorConfig:
    """Configuration class for the mirror command."""

    github: GitHubConfig
    gitea: GiteaConfig
    dry_run: bool = False
    include: list[str] = field(default_factory=lambda: ["*"])
    exclude: list[str] = field(default_factory=list)
    delay: int = 3600
    single_run: bool = False
    concurrency: int = 4
    debug: bool = False
