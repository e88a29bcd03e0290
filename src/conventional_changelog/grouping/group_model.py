"""
Data models for classified and grouped commits.

A :class:`ClassifiedCommit` is a commit that matched one of the
configured types. The grouping engine collects them into a
:class:`GroupedChangelog`: type code, then context, then one
:class:`ChangeEntry` per deduplicated description.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from conventional_changelog.vcs.git_client import RawCommit


SHORT_SHA_LENGTH = 6


@dataclass(frozen=True)
class Classification:
    """Result of parsing a commit head against the type table."""

    type_code: str
    context: Optional[str]
    description: str


@dataclass(frozen=True)
class ClassifiedCommit:
    """A commit that matched a configured type.

    Attributes
    ----------
    commit : RawCommit
        The commit the entry was read from.
    type_code : str
        Matching type code (``feat``, ``breaking_changes``, ...).
    context : Optional[str]
        Human readable scope, or None for unscoped commits.
    description : str
        Cleaned first line with type and scope removed.
    """

    commit: RawCommit
    type_code: str
    context: Optional[str]
    description: str


@dataclass(frozen=True)
class CommitRef:
    """Link target for one commit listed under a changelog line."""

    sha: str
    short: str
    url: str

    @classmethod
    def from_sha(cls, sha: str, url: str) -> "CommitRef":
        return cls(sha=sha, short=sha[:SHORT_SHA_LENGTH], url=url)


@dataclass
class ChangeEntry:
    """One rendered changelog line and the commits it stands for."""

    description: str
    refs: Dict[str, CommitRef] = field(default_factory=dict)

    def sorted_refs(self) -> List[CommitRef]:
        return [self.refs[sha] for sha in sorted(self.refs)]


# context -> dedup key -> entry
ContextBuckets = Dict[Optional[str], Dict[str, ChangeEntry]]


@dataclass
class GroupedChangelog:
    """Changes grouped by type code, context and dedup key.

    Every configured type has a section, possibly empty. Section order is
    the type table order.
    """

    sections: Dict[str, ContextBuckets] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not any(self.sections.values())

    def contexts(self, type_code: str) -> Iterator[Tuple[Optional[str], List[ChangeEntry]]]:
        """Yield ``(context, entries)`` pairs of one type in stored order."""
        for context, entries in self.sections.get(type_code, {}).items():
            yield context, list(entries.values())
