"""
Command line interface for the conventional_changelog tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``changelog`` command. It locates the Git
repository, loads the settings, works out the commit range and the next
version, writes the changelog and optionally commits and tags the
release.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click

from conventional_changelog import __version__
from conventional_changelog.config.loader import ConfigError, load_configuration
from conventional_changelog.generator import ChangelogGenerator
from conventional_changelog.render.changelog_file import ChangelogFileError
from conventional_changelog.versioning import resolve_version
from conventional_changelog.vcs.git_client import GitClient, GitError

# Create a module-level logger. Attach a null handler and disable
# propagation to avoid logging errors when the root logger's stream is
# closed (such as during unit tests).
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_NO_REPO = 3
EXIT_CONFIG_ERROR = 4
EXIT_VCS_FAILURE = 5
EXIT_FILE_ERROR = 6

DATE_FORMAT = "%Y-%m-%d"


# ---------------------------------------------------------------------------
# Status display utilities
# ---------------------------------------------------------------------------

def print_info(message: str, indent: int = 0):
    """Print an info message."""
    prefix = "  " * indent
    click.echo(f"{prefix}ℹ {message}", err=False)


def print_success(message: str, indent: int = 0):
    """Print a success message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✓ {message}", err=False)


def print_warning(message: str, indent: int = 0):
    """Print a warning message."""
    prefix = "  " * indent
    click.echo(f"{prefix}⚠ {message}", err=False)


def print_error(message: str, indent: int = 0):
    """Print an error message."""
    prefix = "  " * indent
    click.echo(f"{prefix}✗ {message}", err=True)


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

@dataclass
class ReleasePlan:
    """What to read from Git and how to label the new release."""

    version: str
    previous_version: str
    revision_range: Optional[str]
    since: Optional[date]
    before: Optional[date]
    release_date: date


def plan_release(
    client: GitClient,
    first_release: bool = False,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
    major: bool = False,
    minor: bool = False,
    patch: bool = False,
    version: Optional[str] = None,
    today: Optional[date] = None,
) -> ReleasePlan:
    """Work out the commit range and version of the release.

    Parameters
    ----------
    client : GitClient
        Client of the repository being released.
    first_release : bool
        Use the whole history; the version defaults to 1.0.0.
    from_date, to_date : date, optional
        Replace the tag based range with a date range. ``to_date`` is
        also used as the release date.
    major, minor, patch : bool
        Requested bump of the last tag.
    version : str, optional
        Explicit version, wins over any bump.

    Raises
    ------
    GitError
        If the repository cannot be queried.
    """
    first_commit = client.get_first_commit()

    if first_release:
        previous = first_commit
        revision_range = None
        next_version = resolve_version(None, override=version)
    else:
        last_tag = client.get_last_tag()
        if last_tag:
            previous = last_tag
            revision_range = f"{last_tag}..HEAD"
        else:
            logger.debug("No tag found; using the whole history")
            previous = first_commit
            revision_range = None
        next_version = resolve_version(last_tag, major, minor, patch, override=version)

    if from_date or to_date:
        revision_range = None

    return ReleasePlan(
        version=next_version,
        previous_version=previous,
        revision_range=revision_range,
        since=from_date,
        before=to_date,
        release_date=to_date or today or date.today(),
    )


def _as_date(value: Optional[datetime]) -> Optional[date]:
    return value.date() if value is not None else None


@click.command()
@click.argument(
    "path",
    required=False,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("-c", "--commit", "auto_commit", is_flag=True, help="Commit the new release once the changelog is generated.")
@click.option("--first-release", is_flag=True, help="Run at first release (without --ver the version is 1.0.0).")
@click.option("--from-date", type=click.DateTime(formats=[DATE_FORMAT]), help="Get commits from the given date [YYYY-MM-DD].")
@click.option("--to-date", type=click.DateTime(formats=[DATE_FORMAT]), help="Get commits up to the given date [YYYY-MM-DD].")
@click.option("--major", is_flag=True, help="Major release (important changes).")
@click.option("--minor", is_flag=True, help="Minor release (add functionality).")
@click.option("-p", "--patch", is_flag=True, help="Patch release (bug fixes) [default].")
@click.option("--ver", "new_version", help="Define the next release version (semver).")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="changelog")
def main(
    path: Optional[Path],
    auto_commit: bool,
    first_release: bool,
    from_date: Optional[datetime],
    to_date: Optional[datetime],
    major: bool,
    minor: bool,
    patch: bool,
    new_version: Optional[str],
    verbose: bool,
) -> None:
    """Generate a changelog from conventional commit messages.

    Reads the commits since the last tag (or in the given date range),
    groups them by type and scope and prepends a new release section to
    the changelog in PATH (default: current directory).
    """
    # Use force=True to ensure handlers are reconfigured on subsequent
    # invocations (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    ctx = click.get_current_context(silent=True)

    try:
        root = path if path is not None else Path.cwd()

        repo_root = GitClient.find_repo_root(root)
        if repo_root is None:
            print_error(f"No Git repository found at {root} or its parent directories.")
            raise click.exceptions.Exit(EXIT_NO_REPO)
        logger.debug("Repository root: %s", repo_root)

        try:
            config = load_configuration(repo_root)
        except ConfigError as exc:
            print_error(f"Configuration error: {exc}")
            raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

        client = GitClient(repo_root)
        try:
            plan = plan_release(
                client,
                first_release=first_release,
                from_date=_as_date(from_date),
                to_date=_as_date(to_date),
                major=major,
                minor=minor,
                patch=patch,
                version=new_version,
            )
            commits = client.get_commits(plan.revision_range, since=plan.since, before=plan.before)
            url = client.get_remote_url()
        except GitError as exc:
            print_error(f"Git error: {exc}")
            raise click.exceptions.Exit(EXIT_VCS_FAILURE)

        print_info(f"Release {plan.version} (previous: {plan.previous_version})")
        print_info(f"Found {len(commits)} commit{'s' if len(commits) != 1 else ''}", indent=1)

        generator = ChangelogGenerator(config)
        grouped = generator.group(commits, url)
        if grouped.is_empty():
            print_warning("No commits matched the changelog types.", indent=1)
        section = generator.render(grouped, plan.version, plan.previous_version, url, plan.release_date)

        changelog_path = root / config.path
        try:
            generator.update_file(changelog_path, section)
        except ChangelogFileError as exc:
            print_error(f"Changelog error: {exc}")
            raise click.exceptions.Exit(EXIT_FILE_ERROR)
        print_success(f"Changelog generated to: {changelog_path}")

        if auto_commit:
            try:
                client.stage_files([str(changelog_path.resolve())])
                client.commit(f"chore(release): {plan.version}")
                client.tag(f"v{plan.version}")
            except GitError as exc:
                print_error(f"Failed to commit the release: {exc}")
                raise click.exceptions.Exit(EXIT_VCS_FAILURE)
            print_success(f"Committed new version with tag: v{plan.version}")

        raise click.exceptions.Exit(EXIT_SUCCESS)

    except click.exceptions.Exit:
        # Click uses its own Exit exception; re-raise to let Click handle it
        raise
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        ctx.exit(EXIT_GENERIC_ERROR)
