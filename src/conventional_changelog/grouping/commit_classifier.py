"""
Classification of commit heads into changelog types.

A commit head such as ``feat(parser)!: add scoped imports`` is matched
against the ordered type table of a :class:`Configuration`. The first
type whose code prefixes the head wins, so the table order settles
ambiguous prefixes. Breaking changes (``!`` marker or a
``BREAKING CHANGE:`` footer) always land in the breaking changes section
when it is configured, because it comes first in the table.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from conventional_changelog.config.configuration import BREAKING_CHANGES, Configuration
from conventional_changelog.grouping.group_model import Classification, ClassifiedCommit
from conventional_changelog.grouping.text_pipeline import (
    clean,
    clean_description,
    humanize_context,
    split_scope,
    strip_type_prefix,
)
from conventional_changelog.vcs.git_client import RawCommit


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


_CONVENTIONAL_HEAD = re.compile(r"^(?P<code>[a-z][\w-]*)(?:\(.*?\))?(?P<bang>!)?:\s", re.IGNORECASE)
_BREAKING_FOOTER = re.compile(r"^BREAKING[ -]CHANGE:", re.MULTILINE)


def _type_pattern(code: str) -> "re.Pattern[str]":
    return re.compile(rf"^{re.escape(code)}(?:\(.*?\))?!?:?\s", re.IGNORECASE)


def _match_breaking(head: str, body: str) -> Optional[str]:
    """Return the prefix to strip if the commit is a breaking change."""
    match = _CONVENTIONAL_HEAD.match(head)
    if match and match.group("bang"):
        return match.group("code")
    if _BREAKING_FOOTER.search(body):
        return match.group("code") if match else ""
    return None


def classify_head(head: str, config: Configuration, body: str = "") -> Optional[Classification]:
    """Classify a commit head against the configured types.

    Parameters
    ----------
    head : str
        First line of the commit message.
    config : Configuration
        Provides the ordered type table and the ignore patterns.
    body : str, optional
        Remaining lines of the message, inspected for a breaking change footer.

    Returns
    -------
    Optional[Classification]
        None when the head is ignored or matches no type.
    """
    head = clean(head)
    if config.is_ignored(head):
        logger.debug("Ignoring commit: %s", head)
        return None

    for definition in config.types:
        if definition.code == BREAKING_CHANGES:
            prefix = _match_breaking(head, body)
            if prefix is None:
                continue
        elif _type_pattern(definition.code).match(head):
            prefix = definition.code
        else:
            continue

        remainder = strip_type_prefix(head, prefix) if prefix else head
        scope, text = split_scope(remainder)
        return Classification(
            type_code=definition.code,
            context=(humanize_context(scope) or None) if scope else None,
            description=clean_description(text),
        )

    logger.debug("No changelog type for commit: %s", head)
    return None


def classify_commit(commit: RawCommit, config: Configuration) -> Optional[ClassifiedCommit]:
    result = classify_head(commit.head, config, commit.body)
    if result is None:
        return None
    return ClassifiedCommit(
        commit=commit,
        type_code=result.type_code,
        context=result.context,
        description=result.description,
    )


def classify_commits(commits: Iterable[RawCommit], config: Configuration) -> List[ClassifiedCommit]:
    """Classify ``commits``, dropping the ones without a matching type."""
    classified = []
    for commit in commits:
        entry = classify_commit(commit, config)
        if entry is not None:
            classified.append(entry)
    return classified
