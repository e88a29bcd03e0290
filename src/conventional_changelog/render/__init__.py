"""
Markdown output.

:mod:`conventional_changelog.render.markdown` renders release sections
and merges them into the changelog; :mod:`conventional_changelog.render.changelog_file`
reads and writes the file itself.
"""

from .changelog_file import ChangelogFileError, read_changelog, write_changelog  # noqa: F401
from .markdown import build_header, merge_changelog, render_section, strip_header  # noqa: F401
