"""
Git client implementation for conventional_changelog.

This module wraps the Git operations the changelog generator needs:
reading commits in a range, locating tags and the first commit, building
web links from the remote, and committing/tagging a release. All
subprocess calls go through :meth:`GitClient._run` so that unit tests can
mock them easily.
"""

from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


# Unit and record separators keep multi-line bodies intact in ``git log``.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = f"--format=%H{_FIELD_SEP}%s{_FIELD_SEP}%b{_RECORD_SEP}"

_SCP_REMOTE = re.compile(r"^(?:[\w.-]+@)?(?P<host>[\w.-]+):(?P<path>(?!/).+)$")


@dataclass(frozen=True)
class RawCommit:
    """A commit as read from the repository."""

    sha: str
    head: str  # first line of the message
    body: str = ""


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


def web_url_from_remote(remote: str) -> str:
    """Convert a remote URL into the web URL of the repository.

    ``git@github.com:owner/repo.git`` and
    ``ssh://git@github.com/owner/repo.git`` both become
    ``https://github.com/owner/repo``.
    """
    url = remote.strip()
    if not url:
        return ""
    match = _SCP_REMOTE.match(url)
    if match and "://" not in url:
        url = f"https://{match.group('host')}/{match.group('path')}"
    elif url.startswith(("ssh://", "git://")):
        url = "https://" + url.split("://", 1)[1]
        # drop credentials and explicit ports
        url = re.sub(r"^https://[^@/]+@", "https://", url)
        url = re.sub(r"^(https://[^/:]+):\d+", r"\1", url)
    else:
        url = re.sub(r"^(https?://)[^@/]+@", r"\1", url)
    if url.endswith(".git"):
        url = url[: -len(".git")]
    return url.rstrip("/")


class GitClient:
    """Client for reading history from, and tagging, a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` directory is found or the filesystem
        root is reached.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                # reached filesystem root
                return None
            current = current.parent

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command exits with a non-zero status when ``check`` is True,
            or if git cannot be executed at all.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",  # Replace invalid characters instead of failing
            )
        except OSError as e:
            logger.error("Unable to execute git: %s", e)
            raise GitError(f"Unable to execute git: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def get_commits(
        self,
        revision_range: Optional[str] = None,
        since: Optional[date] = None,
        before: Optional[date] = None,
    ) -> List[RawCommit]:
        """Return the commits of ``revision_range`` (default ``HEAD``), newest first.

        Parameters
        ----------
        revision_range : str, optional
            A revision range such as ``v1.0.0..HEAD``.
        since, before : date, optional
            Restrict the log to commits after / before the given dates.

        Raises
        ------
        GitError
            If the log command fails.
        """
        args = ["log", _LOG_FORMAT]
        if since is not None:
            args.append(f"--since={since.isoformat()}")
        if before is not None:
            args.append(f"--before={before.isoformat()}")
        args.append(revision_range or "HEAD")

        result = self._run(args, check=True)
        commits = []
        for record in result.stdout.split(_RECORD_SEP):
            record = record.strip("\n")
            if not record.strip():
                continue
            parts = record.split(_FIELD_SEP)
            if len(parts) < 2:
                continue
            sha = parts[0].strip()
            head = parts[1].strip()
            body = parts[2].strip() if len(parts) > 2 else ""
            if not sha:
                continue
            commits.append(RawCommit(sha=sha, head=head, body=body))
        logger.debug("Read %d commit(s) from %s", len(commits), revision_range or "HEAD")
        return commits

    def get_first_commit(self) -> str:
        """Return the hash of the root commit of HEAD."""
        result = self._run(["rev-list", "--max-parents=0", "HEAD"], check=True)
        roots = result.stdout.split()
        if not roots:
            raise GitError("Repository has no commits")
        # several roots are possible after merging unrelated histories
        return roots[-1]

    def get_last_tag(self) -> Optional[str]:
        """Return the most recent tag reachable from HEAD, or None."""
        result = self._run(["describe", "--tags", "--abbrev=0"], check=False)
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def get_commit_date(self, sha: str) -> Optional[date]:
        """Return the committer date of ``sha``, or None if it cannot be read."""
        result = self._run(["log", "-1", "--format=%cd", "--date=short", sha], check=False)
        value = result.stdout.strip()
        if result.returncode != 0 or not value:
            return None
        try:
            return date.fromisoformat(value)
        except ValueError:
            logger.debug("Unexpected commit date %r for %s", value, sha)
            return None

    def get_remote_url(self, remote: str = "origin") -> str:
        """Return the web URL of ``remote``, or an empty string if not set."""
        result = self._run(["config", "--get", f"remote.{remote}.url"], check=False)
        if result.returncode != 0:
            return ""
        return web_url_from_remote(result.stdout)

    # ------------------------------------------------------------------
    # Release
    # ------------------------------------------------------------------
    def stage_files(self, files: List[str]) -> None:
        """Stage the given files for commit."""
        for file in files:
            self._run(["add", "--", file], check=True)

    def commit(self, message: str) -> None:
        """Create a commit with the given message.

        If the commit fails, a GitError is raised.
        """
        self._run(["commit", "-m", message], check=True)

    def tag(self, name: str) -> None:
        """Create a lightweight tag on HEAD."""
        self._run(["tag", name], check=True)
