"""
Changelog generation pipeline.

The :class:`ChangelogGenerator` ties the pieces together: commits read
from Git are classified against the configured types, grouped and
deduplicated, rendered as a Markdown release section and finally merged
into the changelog file. Git access stays with the caller so the
pipeline can be exercised with plain :class:`RawCommit` lists.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Iterable

from conventional_changelog.config.configuration import Configuration
from conventional_changelog.grouping.commit_classifier import classify_commits
from conventional_changelog.grouping.group_model import GroupedChangelog
from conventional_changelog.grouping.grouper import group_commits
from conventional_changelog.render.changelog_file import read_changelog, write_changelog
from conventional_changelog.render.markdown import merge_changelog, render_section
from conventional_changelog.vcs.git_client import RawCommit


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class ChangelogGenerator:
    """Build release sections and prepend them to a changelog file."""

    def __init__(self, config: Configuration) -> None:
        self.config = config

    def group(self, commits: Iterable[RawCommit], url: str = "") -> GroupedChangelog:
        commits = list(commits)
        classified = classify_commits(commits, self.config)
        logger.debug("Classified %d of %d commit(s)", len(classified), len(commits))
        return group_commits(classified, self.config, url)

    def render(
        self,
        grouped: GroupedChangelog,
        version: str,
        previous_version: str,
        url: str,
        release_date: date,
    ) -> str:
        return render_section(grouped, self.config, version, previous_version, url, release_date)

    def generate_section(
        self,
        commits: Iterable[RawCommit],
        version: str,
        previous_version: str,
        url: str,
        release_date: date,
    ) -> str:
        """Return the Markdown section for ``version``."""
        return self.render(self.group(commits, url), version, previous_version, url, release_date)

    def update_file(self, path: Path, section: str) -> str:
        """Prepend ``section`` to the changelog at ``path`` and return the new content.

        The file is read completely before anything is written; a failure
        at either step raises :class:`ChangelogFileError` and leaves the
        file untouched.
        """
        content = merge_changelog(read_changelog(path), section, self.config)
        write_changelog(path, content)
        logger.info("Changelog generated to: %s", path)
        return content
