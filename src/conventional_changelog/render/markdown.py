"""
Markdown rendering of a grouped changelog.

A release section looks like::

    ## [1.2.0](https://host/repo/compare/v1.1.0...v1.2.0) (2024-05-01)


    ### Features


    ##### Parser

    * Add scoped imports ([1a2b3c](https://host/repo/commit/1a2b3c...))

    ---

The changelog file is the fixed header followed by the release sections,
newest first.
"""

from __future__ import annotations

import re
from datetime import date
from typing import List

from conventional_changelog.config.configuration import Configuration
from conventional_changelog.grouping.group_model import ChangeEntry, GroupedChangelog


def render_version_heading(version: str, previous_version: str, url: str, release_date: date) -> str:
    return f"## [{version}]({url}/compare/{previous_version}...v{version}) ({release_date.isoformat()})\n\n"


def render_entry(entry: ChangeEntry) -> str:
    """Render one bullet, with links to every commit it stands for."""
    links = [f"[{ref.short}]({ref.url}/commit/{ref.sha})" for ref in entry.sorted_refs()]
    if not links:
        return f"* {entry.description}\n"
    return f"* {entry.description} ({', '.join(links)})\n"


def render_changes(grouped: GroupedChangelog, config: Configuration) -> str:
    """Render every non-empty type of ``grouped`` in type table order."""
    parts: List[str] = []
    for definition in config.types:
        if not grouped.sections.get(definition.code):
            continue
        parts.append(f"\n### {definition.label}\n\n")
        for context, entries in grouped.contexts(definition.code):
            if context:
                parts.append(f"\n##### {context}\n\n")
            parts.extend(render_entry(entry) for entry in entries)
    parts.append("\n---\n\n")
    return "".join(parts)


def render_section(
    grouped: GroupedChangelog,
    config: Configuration,
    version: str,
    previous_version: str,
    url: str,
    release_date: date,
) -> str:
    """Render the Markdown section of one release."""
    return render_version_heading(version, previous_version, url, release_date) + render_changes(grouped, config)


def build_header(config: Configuration) -> str:
    return f"# {config.header_title}\n{config.header_description}\n\n\n"


def strip_header(content: str, header: str) -> str:
    """Remove a leading copy of ``header`` from ``content``.

    Leading whitespace is ignored on both sides and the comparison is
    case-insensitive.
    """
    content = content.lstrip()
    return re.sub(rf"^{re.escape(header.lstrip())}", "", content, count=1, flags=re.IGNORECASE)


def merge_changelog(existing: str, section: str, config: Configuration) -> str:
    """Return the new file content: header, ``section``, then older releases."""
    header = build_header(config)
    return header + section + strip_header(existing, header)
