"""
Grouping and deduplication of classified commits.

Commits are bucketed by type, then context, then the dedup key of their
description. Commits sharing a key are merged into one
:class:`ChangeEntry` listing all of their hashes.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from conventional_changelog.config.configuration import Configuration
from conventional_changelog.grouping.group_model import (
    ChangeEntry,
    ClassifiedCommit,
    CommitRef,
    ContextBuckets,
    GroupedChangelog,
)
from conventional_changelog.grouping.text_pipeline import dedup_key


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


def _context_sort_key(context: Optional[str]):
    # unscoped changes come before any named context
    return (context is not None, context or "")


def _sorted_buckets(buckets: ContextBuckets) -> ContextBuckets:
    ordered: ContextBuckets = {}
    for context in sorted(buckets, key=_context_sort_key):
        entries = buckets[context]
        ordered[context] = {key: entries[key] for key in sorted(entries)}
    return ordered


def group_commits(
    commits: Iterable[ClassifiedCommit],
    config: Configuration,
    url: str = "",
) -> GroupedChangelog:
    """Group classified commits into a :class:`GroupedChangelog`.

    Parameters
    ----------
    commits : Iterable[ClassifiedCommit]
        Output of the classifier.
    config : Configuration
        Its type table decides the sections and their order.
    url : str
        Web URL of the repository, used for the commit links.

    Notes
    -----
    The description of the last commit seen for a key is the one shown.
    Commits of a type missing from the table are skipped.
    """
    sections: Dict[str, ContextBuckets] = {code: {} for code in config.type_codes()}

    for item in commits:
        buckets = sections.get(item.type_code)
        if buckets is None:
            logger.debug("Skipping commit %s of unknown type %s", item.commit.sha, item.type_code)
            continue
        key = dedup_key(item.description)
        entries = buckets.setdefault(item.context, {})
        entry = entries.get(key)
        if entry is None:
            entry = entries[key] = ChangeEntry(description=item.description)
        else:
            entry.description = item.description
        entry.refs[item.commit.sha] = CommitRef.from_sha(item.commit.sha, url)

    return GroupedChangelog(
        sections={code: _sorted_buckets(buckets) for code, buckets in sections.items()}
    )
