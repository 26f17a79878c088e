"""Synchronous driver for configuration reconciliation for the CLI entry point."""

import asyncio

from gitea_mirror_manager.configuration import reconcile
from gitea_mirror_manager.configuration.models import MirrorConfig


def get_mirror_config(
    debug: bool = False,
    dry_run: bool = False,
    single_run: bool = False,
    delay: int | None = None,
    concurrency: int | None = None,
    include: str | None = None,
    exclude: str | None = None,
    github_username: str | None = None,
    github_token: str | None = None,
    github_api_url: str | None = None,
    skip_forks: bool = False,
    mirror_private_repositories: bool = False,
    mirror_issues: bool = False,
    mirror_starred: bool = False,
    mirror_organizations: bool = False,
    use_specific_user: bool = False,
    single_repo: str | None = None,
    include_orgs: str | None = None,
    exclude_orgs: str | None = None,
    preserve_org_structure: bool = False,
    skip_starred_issues: bool = False,
    gitea_url: str | None = None,
    gitea_token: str | None = None,
    gitea_organization: str | None = None,
    gitea_org_visibility: str | None = None,
    gitea_starred_organization: str | None = None,
) -> MirrorConfig:
    """Synchronously get the reconciled mirror configuration."""
    return asyncio.run(
        reconcile.reconcile_mirror_configuration(
            cli_debug=debug,
            cli_dry_run=dry_run,
            cli_single_run=single_run,
            cli_delay=delay,
            cli_concurrency=concurrency,
            cli_include=include,
            cli_exclude=exclude,
            cli_github_username=github_username,
            cli_github_token=github_token,
            cli_github_api_url=github_api_url,
            cli_skip_forks=skip_forks,
            cli_mirror_private_repositories=mirror_private_repositories,
            cli_mirror_issues=mirror_issues,
            cli_mirror_starred=mirror_starred,
            cli_mirror_organizations=mirror_organizations,
            cli_use_specific_user=use_specific_user,
            cli_single_repo=single_repo,
            cli_include_orgs=include_orgs,
            cli_exclude_orgs=exclude_orgs,
            cli_preserve_org_structure=preserve_org_structure,
            cli_skip_starred_issues=skip_starred_issues,
            cli_gitea_url=gitea_url,
            cli_gitea_token=gitea_token,
            cli_gitea_organization=gitea_organization,
            cli_gitea_org_visibility=gitea_org_visibility,
            cli_gitea_starred_organization=gitea_starred_organization,
        )
    )
