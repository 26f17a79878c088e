"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
from dataclasses import asdict

import structlog
import typer
from dotenv import load_dotenv
from typer import Option
from typing_extensions import Annotated

from gitea_mirror_manager.configuration.driver import get_mirror_config
from gitea_mirror_manager.configuration.exceptions import ConfigurationError
from gitea_mirror_manager.mirror.driver import run_mirror_schedule
from gitea_mirror_manager.utils.logging import configure_logging

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False, help="Mirror GitHub repositories to Gitea.")

logger = structlog.get_logger(__name__)


@typer_app.command(name="mirror")
def mirror_cli(
    github_username: Annotated[str | None, Option(help="GitHub user whose repositories are mirrored. [env: GITHUB_USERNAME]")] = None,
    github_token: Annotated[str | None, Option(help="GitHub token. [env: GITHUB_TOKEN]")] = None,
    github_api_url: Annotated[str | None, Option(help="GitHub API URL. [env: GITHUB_API_URL]")] = None,
    gitea_url: Annotated[str | None, Option(help="Gitea base URL. [env: GITEA_URL]")] = None,
    gitea_token: Annotated[str | None, Option(help="Gitea access token. [env: GITEA_TOKEN]")] = None,
    gitea_organization: Annotated[str | None, Option(help="Gitea organization receiving mirrors. [env: GITEA_ORGANIZATION]")] = None,
    gitea_org_visibility: Annotated[
        str | None, Option(help="Visibility of created organizations: public, private or limited. [env: GITEA_ORG_VISIBILITY]")
    ] = None,
    gitea_starred_organization: Annotated[
        str | None, Option(help="Gitea organization receiving starred repositories. [env: GITEA_STARRED_ORGANIZATION]")
    ] = None,
    skip_forks: Annotated[bool, Option("--skip-forks", help="Do not mirror forks. [env: SKIP_FORKS]")] = False,
    mirror_private_repositories: Annotated[
        bool, Option("--mirror-private-repositories", help="Also mirror private repositories. [env: MIRROR_PRIVATE_REPOSITORIES]")
    ] = False,
    mirror_issues: Annotated[bool, Option("--mirror-issues", help="Copy issues onto new mirrors. [env: MIRROR_ISSUES]")] = False,
    mirror_starred: Annotated[bool, Option("--mirror-starred", help="Also mirror starred repositories. [env: MIRROR_STARRED]")] = False,
    mirror_organizations: Annotated[
        bool, Option("--mirror-organizations", help="Also mirror repositories of your organizations. [env: MIRROR_ORGANIZATIONS]")
    ] = False,
    use_specific_user: Annotated[
        bool, Option("--use-specific-user", help="Discover organizations of the given user first. [env: USE_SPECIFIC_USER]")
    ] = False,
    single_repo: Annotated[str | None, Option(help="Mirror only this repository (URL or owner/name). [env: SINGLE_REPO]")] = None,
    include_orgs: Annotated[str | None, Option(help="Comma-separated organizations to include. [env: INCLUDE_ORGS]")] = None,
    exclude_orgs: Annotated[str | None, Option(help="Comma-separated organizations to exclude. [env: EXCLUDE_ORGS]")] = None,
    preserve_org_structure: Annotated[
        bool, Option("--preserve-org-structure", help="Create one Gitea organization per GitHub organization. [env: PRESERVE_ORG_STRUCTURE]")
    ] = False,
    skip_starred_issues: Annotated[
        bool, Option("--skip-starred-issues", help="Do not copy issues of starred repositories. [env: SKIP_STARRED_ISSUES]")
    ] = False,
    include: Annotated[str | None, Option(help="Comma-separated name globs to include. [env: INCLUDE]")] = None,
    exclude: Annotated[str | None, Option(help="Comma-separated name globs to exclude. [env: EXCLUDE]")] = None,
    dry_run: Annotated[bool, Option("--dry-run", help="Log what would be done without changing Gitea. [env: DRY_RUN]")] = False,
    single_run: Annotated[bool, Option("--single-run", help="Run once instead of repeating. [env: SINGLE_RUN]")] = False,
    delay: Annotated[int | None, Option(help="Seconds between runs. [env: DELAY]")] = None,
    concurrency: Annotated[int | None, Option(help="Repositories mirrored in parallel. [env: CONCURRENCY]")] = None,
    debug: Annotated[bool, Option("--debug", help="Enable debug logging. [env: DEBUG]")] = False,
) -> None:
    """Mirror GitHub repositories (and optionally issues) to Gitea."""
    try:
        config = get_mirror_config(
            debug=debug,
            dry_run=dry_run,
            single_run=single_run,
            delay=delay,
            concurrency=concurrency,
            include=include,
            exclude=exclude,
            github_username=github_username,
            github_token=github_token,
            github_api_url=github_api_url,
            skip_forks=skip_forks,
            mirror_private_repositories=mirror_private_repositories,
            mirror_issues=mirror_issues,
            mirror_starred=mirror_starred,
            mirror_organizations=mirror_organizations,
            use_specific_user=use_specific_user,
            single_repo=single_repo,
            include_orgs=include_orgs,
            exclude_orgs=exclude_orgs,
            preserve_org_structure=preserve_org_structure,
            skip_starred_issues=skip_starred_issues,
            gitea_url=gitea_url,
            gitea_token=gitea_token,
            gitea_organization=gitea_organization,
            gitea_org_visibility=gitea_org_visibility,
            gitea_starred_organization=gitea_starred_organization,
        )
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    configure_logging(debug=config.debug)
    logger.info("Applied configuration", config=asdict(config))

    asyncio.run(run_mirror_schedule(config))


@typer_app.callback()
def main() -> None:
    """Mirror GitHub repositories to Gitea."""


if __name__ == "__main__":
    typer_app()
