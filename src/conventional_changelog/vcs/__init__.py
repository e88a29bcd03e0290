"""
Version control system (VCS) integration.

The changelog is built from Git history; :class:`GitClient` exposes the
commands needed to read commits, tags and the remote URL, and to commit
and tag a release.
"""

from .git_client import GitClient, GitError, RawCommit  # noqa: F401
