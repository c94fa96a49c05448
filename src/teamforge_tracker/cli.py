"""CLI entry point for teamforge-tracker."""

from __future__ import annotations

import sys
from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import Any, TypeVar

import click

from teamforge_tracker.config import ConfigError, find_config, load_config
from teamforge_tracker.logging import describe_remote_error, setup_logging
from teamforge_tracker.provider import (
    REMOTE_ERRORS,
    CollabNetTrackerProvider,
    TrackerCategory,
    TrackerError,
)

F = TypeVar("F", bound=Callable[..., Any])


def _load_provider(config_path: Path | None) -> CollabNetTrackerProvider:
    if config_path is None:
        config_path = find_config()
    return CollabNetTrackerProvider.from_config(load_config(config_path))


def provider_command(func: F) -> F:
    """Add --config/--verbose and pass a configured provider as the first argument.

    Configuration, tracker and TeamForge request errors are reported on stderr
    with exit status 1.
    """

    @click.option(
        "-c",
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Path to teamforge.yaml (auto-detected if not specified)",
    )
    @click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
    @wraps(func)
    def wrapper(config_path: Path | None, verbose: bool, **kwargs: Any) -> Any:
        setup_logging(verbose)
        try:
            provider = _load_provider(config_path)
        except ConfigError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

        try:
            return func(provider, **kwargs)
        except TrackerError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        except REMOTE_ERRORS as e:
            click.echo(f"Error: TeamForge request failed: {describe_remote_error(e)}", err=True)
            sys.exit(1)
        finally:
            provider.close()

    return wrapper  # type: ignore[return-value]


@click.group()
@click.version_option(package_name="teamforge-tracker")
def main() -> None:
    """Manage CollabNet TeamForge tracker issues."""


@main.command()
@provider_command
def validate(provider: CollabNetTrackerProvider) -> None:
    """Check that TeamForge accepts the configured credentials."""
    provider.validate_connection()
    click.echo(f"Connected to {provider.base_url} as {provider.username}")


@main.command()
@click.argument("release")
@provider_command
def issues(provider: CollabNetTrackerProvider, release: str) -> None:
    """List the tracker's issues for RELEASE."""
    found = provider.get_issues(release)
    if not found:
        click.echo(f"No issues found for release {release}")
        return

    for issue in found:
        state = "closed" if provider.is_issue_closed(issue) else "open"
        click.echo(f"{issue.id}\t{issue.status}\t[{state}]\t{issue.title}")
        click.echo(f"\t{provider.get_issue_url(issue)}")


def _echo_category(category: TrackerCategory, depth: int = 0) -> None:
    click.echo(f"{'  ' * depth}{category.id}\t{category.name}")
    for child in category.subcategories:
        _echo_category(child, depth + 1)


@main.command()
@provider_command
def categories(provider: CollabNetTrackerProvider) -> None:
    """List projects and their trackers."""
    for category in provider.get_categories():
        _echo_category(category)


@main.command()
@provider_command
def statuses(provider: CollabNetTrackerProvider) -> None:
    """List the statuses defined on the configured tracker."""
    for status in provider.get_statuses():
        click.echo(f"{status.name}\t{status.status_class or ''}")


@main.command()
@click.argument("issue_id")
@click.argument("text")
@provider_command
def append(provider: CollabNetTrackerProvider, issue_id: str, text: str) -> None:
    """Append TEXT to the description of ISSUE_ID."""
    provider.append_issue_description(issue_id, text)
    click.echo(f"Updated description of {issue_id}")


@main.command("set-status")
@click.argument("issue_id")
@click.argument("status")
@provider_command
def set_status(provider: CollabNetTrackerProvider, issue_id: str, status: str) -> None:
    """Change the status of ISSUE_ID to STATUS."""
    provider.change_issue_status(issue_id, status)
    click.echo(f"Changed status of {issue_id} to {status}")


@main.command()
@click.argument("issue_id")
@provider_command
def close(provider: CollabNetTrackerProvider, issue_id: str) -> None:
    """Close ISSUE_ID."""
    provider.close_issue(issue_id)
    click.echo(f"Closed {issue_id}")


@main.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to teamforge.yaml (auto-detected if not specified)",
)
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("--port", default=8000, show_default=True, type=int, help="Port to listen on")
@click.option(
    "--log-dir",
    default="logs",
    show_default=True,
    envvar="TEAMFORGE_LOG_DIR",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the rotating server log",
)
@click.option("-v", "--verbose", is_flag=True, help="Log at DEBUG, including SOAP envelopes")
def serve(
    config_path: Path | None, host: str, port: int, log_dir: Path, verbose: bool
) -> None:
    """Run the REST API."""
    import uvicorn  # noqa: PLC0415

    from teamforge_tracker.api import create_app  # noqa: PLC0415

    setup_logging(verbose, log_dir=log_dir, default_level="INFO")
    try:
        provider = _load_provider(config_path)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    uvicorn.run(create_app(tracker=provider), host=host, port=port)


if __name__ == "__main__":
    main()
