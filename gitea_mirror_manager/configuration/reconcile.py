"""Reconcile mirror configuration between CLI arguments and environment variables."""

from gitea_mirror_manager.configuration.env import get_settings
from gitea_mirror_manager.configuration.exceptions import (
    GitHubTokenRequiredError,
    InvalidConfigurationValueError,
    RequiredConfigurationElementError,
)
from gitea_mirror_manager.configuration.models import GiteaConfig, GiteaVisibility, GitHubConfig, MirrorConfig


def split_comma_separated(value: str | None) -> list[str]:
    """Split a comma-separated setting into stripped, non-empty entries."""
    if not value:
        return []
    return [entry.strip() for entry in value.split(",") if entry.strip()]


async def validate_github_token_configuration(github_config: GitHubConfig) -> None:
    """Validates that every enabled feature needing a GitHub token has one.

    Args:
        github_config (GitHubConfig): The reconciled GitHub configuration.

    Raises:
        GitHubTokenRequiredError: If a token-dependent feature is enabled without a token.
    """
    if github_config.token:
        return

    if github_config.private_repositories:
        raise GitHubTokenRequiredError(["mirroring private repositories"])

    features: list[str] = []
    if github_config.mirror_issues:
        features.append("mirroring issues")
    if github_config.mirror_starred:
        features.append("mirroring starred repositories")
    if github_config.mirror_organizations:
        features.append("mirroring organizations")
    if github_config.single_repo:
        features.append("mirroring a single repo")
    if features:
        raise GitHubTokenRequiredError(features)


async def reconcile_gitea_visibility(value: str) -> GiteaVisibility:
    """Parse the organization visibility setting."""
    try:
        return GiteaVisibility(value.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(v.value for v in GiteaVisibility)
        raise InvalidConfigurationValueError("GITEA_ORG_VISIBILITY", value, f"must be one of {allowed}") from exc


async def reconcile_mirror_configuration(
    cli_debug: bool = False,
    cli_dry_run: bool = False,
    cli_single_run: bool = False,
    cli_delay: int | None = None,
    cli_concurrency: int | None = None,
    cli_include: str | None = None,
    cli_exclude: str | None = None,
    cli_github_username: str | None = None,
    cli_github_token: str | None = None,
    cli_github_api_url: str | None = None,
    cli_skip_forks: bool = False,
    cli_mirror_private_repositories: bool = False,
    cli_mirror_issues: bool = False,
    cli_mirror_starred: bool = False,
    cli_mirror_organizations: bool = False,
    cli_use_specific_user: bool = False,
    cli_single_repo: str | None = None,
    cli_include_orgs: str | None = None,
    cli_exclude_orgs: str | None = None,
    cli_preserve_org_structure: bool = False,
    cli_skip_starred_issues: bool = False,
    cli_gitea_url: str | None = None,
    cli_gitea_token: str | None = None,
    cli_gitea_organization: str | None = None,
    cli_gitea_org_visibility: str | None = None,
    cli_gitea_starred_organization: str | None = None,
) -> MirrorConfig:
    """Reconciles the mirror configuration.

    Command line values take precedence over environment variables. Boolean
    toggles are enabled if either source enables them.

    Raises:
        RequiredConfigurationElementError: If the GitHub username, Gitea URL or Gitea token is missing.
        GitHubTokenRequiredError: If a feature requiring a GitHub token is enabled without one.
        InvalidEnvironmentError: If an environment variable cannot be parsed.
        InvalidConfigurationValueError: If a value cannot be used (visibility, delay, concurrency).
    """
    settings = get_settings()
    github_username = cli_github_username or settings.GITHUB_USERNAME
    if not github_username:
        raise RequiredConfigurationElementError(name="GitHub username", cli_name="github_username", env_name="GITHUB_USERNAME")

    gitea_url = cli_gitea_url or settings.GITEA_URL
    if not gitea_url:
        raise RequiredConfigurationElementError(name="Gitea URL", cli_name="gitea_url", env_name="GITEA_URL")

    gitea_token = cli_gitea_token or settings.GITEA_TOKEN
    if not gitea_token:
        raise RequiredConfigurationElementError(name="Gitea token", cli_name="gitea_token", env_name="GITEA_TOKEN")

    delay = cli_delay if cli_delay is not None else settings.DELAY
    if delay < 0:
        raise InvalidConfigurationValueError("DELAY", delay, "must not be negative")

    concurrency = cli_concurrency if cli_concurrency is not None else settings.CONCURRENCY
    if concurrency < 1:
        raise InvalidConfigurationValueError("CONCURRENCY", concurrency, "must be at least 1")

    github_config = GitHubConfig(
        username=github_username,
        token=cli_github_token or settings.GITHUB_TOKEN,
        api_url=cli_github_api_url or settings.GITHUB_API_URL,
        skip_forks=cli_skip_forks or settings.SKIP_FORKS,
        private_repositories=cli_mirror_private_repositories or settings.MIRROR_PRIVATE_REPOSITORIES,
        mirror_issues=cli_mirror_issues or settings.MIRROR_ISSUES,
        mirror_starred=cli_mirror_starred or settings.MIRROR_STARRED,
        mirror_organizations=cli_mirror_organizations or settings.MIRROR_ORGANIZATIONS,
        use_specific_user=cli_use_specific_user or settings.USE_SPECIFIC_USER,
        single_repo=cli_single_repo or settings.SINGLE_REPO or None,
        include_orgs=split_comma_separated(cli_include_orgs or settings.INCLUDE_ORGS),
        exclude_orgs=split_comma_separated(cli_exclude_orgs or settings.EXCLUDE_ORGS),
        preserve_org_structure=cli_preserve_org_structure or settings.PRESERVE_ORG_STRUCTURE,
        skip_starred_issues=cli_skip_starred_issues or settings.SKIP_STARRED_ISSUES,
    )
    await validate_github_token_configuration(github_config)

    gitea_config = GiteaConfig(
        url=gitea_url.rstrip("/"),
        token=gitea_token,
        organization=cli_gitea_organization or settings.GITEA_ORGANIZATION or None,
        visibility=await reconcile_gitea_visibility(cli_gitea_org_visibility or settings.GITEA_ORG_VISIBILITY),
        starred_repos_org=cli_gitea_starred_organization or settings.GITEA_STARRED_ORGANIZATION or None,
    )

    # An empty include list would match nothing, so fall back to matching all.
    include = split_comma_separated(cli_include if cli_include is not None else settings.INCLUDE) or ["*"]
    exclude = split_comma_separated(cli_exclude if cli_exclude is not None else settings.EXCLUDE)

    return MirrorConfig(
        github=github_config,
        gitea=gitea_config,
        dry_run=cli_dry_run or settings.DRY_RUN,
        include=include,
        exclude=exclude,
        delay=delay,
        single_run=cli_single_run or settings.SINGLE_RUN,
        concurrency=concurrency,
        debug=cli_debug or settings.DEBUG,
    )
