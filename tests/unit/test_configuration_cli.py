"""Unit tests for the Typer command line interface."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from gitea_mirror_manager.configuration.cli import typer_app
from gitea_mirror_manager.configuration.env import get_settings
from gitea_mirror_manager.configuration.exceptions import GitHubTokenRequiredError
from gitea_mirror_manager.configuration.models import GiteaConfig, GitHubConfig, MirrorConfig

runner = CliRunner()


def test_mirror_command_runs_schedule() -> None:
    """Test that the mirror command reconciles configuration and starts the schedule."""
    config = MirrorConfig(
        github=GitHubConfig(username="octocat", token=None),
        gitea=GiteaConfig(url="https://gitea.example.com", token="gitea_secret"),
        single_run=True,
    )
    with (
        patch("gitea_mirror_manager.configuration.cli.get_mirror_config", return_value=config) as mock_get_config,
        patch("gitea_mirror_manager.configuration.cli.configure_logging") as mock_configure_logging,
        patch("gitea_mirror_manager.configuration.cli.run_mirror_schedule", new=AsyncMock()) as mock_schedule,
    ):
        result = runner.invoke(
            typer_app,
            ["mirror", "--github-username", "octocat", "--gitea-url", "https://gitea.example.com", "--skip-forks", "--dry-run", "--delay", "60"],
        )

    assert result.exit_code == 0, result.output
    kwargs = mock_get_config.call_args.kwargs
    assert kwargs["github_username"] == "octocat"
    assert kwargs["skip_forks"] is True
    assert kwargs["dry_run"] is True
    assert kwargs["delay"] == 60
    assert kwargs["mirror_issues"] is False
    mock_configure_logging.assert_called_once_with(debug=False)
    mock_schedule.assert_awaited_once_with(config)


def test_mirror_command_reports_configuration_errors() -> None:
    """Test that invalid configuration exits with status 1 before any run."""
    with (
        patch("gitea_mirror_manager.configuration.cli.get_mirror_config", side_effect=GitHubTokenRequiredError(["mirroring issues"])),
        patch("gitea_mirror_manager.configuration.cli.run_mirror_schedule", new=AsyncMock()) as mock_schedule,
    ):
        result = runner.invoke(typer_app, ["mirror", "--mirror-issues"])

    assert result.exit_code == 1
    assert "requires setting GITHUB_TOKEN" in result.output
    mock_schedule.assert_not_awaited()


def test_mirror_command_reports_unparseable_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that a malformed environment variable exits with status 1 and names the variable."""
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    try:
        with patch("gitea_mirror_manager.configuration.cli.run_mirror_schedule", new=AsyncMock()) as mock_schedule:
            result = runner.invoke(typer_app, ["mirror"], env={"DELAY": "abc"})
    finally:
        get_settings.cache_clear()

    assert result.exit_code == 1
    assert "DELAY" in result.output
    mock_schedule.assert_not_awaited()
