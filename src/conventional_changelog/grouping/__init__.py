"""
Classification and grouping of commits.

:mod:`conventional_changelog.grouping.commit_classifier` matches commit
heads against the configured types and
:mod:`conventional_changelog.grouping.grouper` deduplicates and orders the
results. The data models live in
:mod:`conventional_changelog.grouping.group_model`.
"""

from .commit_classifier import classify_commit, classify_commits, classify_head  # noqa: F401
from .group_model import ChangeEntry, ClassifiedCommit, CommitRef, GroupedChangelog  # noqa: F401
from .grouper import group_commits  # noqa: F401
