"""
Reading and writing the changelog file.

The new content is written to a temporary file next to the target and
moved over it, so an interrupted run leaves the previous changelog in
place.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


class ChangelogFileError(Exception):
    """Raised when the changelog file cannot be read or written."""

    pass


def read_changelog(path: Path) -> str:
    """Return the content of ``path``, or an empty string if it does not exist."""
    path = Path(path)
    if not path.exists():
        return ""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to read changelog %s: %s", path, exc)
        raise ChangelogFileError(f"Unable to read {path}: {exc}") from exc


def write_changelog(path: Path, content: str) -> None:
    """Replace ``path`` with ``content``.

    Raises
    ------
    ChangelogFileError
        If the directory does not exist or is not writable.
    """
    path = Path(path)
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_path = tmp.name
            tmp.write(content)
        if path.exists():
            os.chmod(tmp_path, path.stat().st_mode & 0o777)
        os.replace(tmp_path, path)
    except OSError as exc:
        logger.error("Failed to write changelog %s: %s", path, exc)
        if tmp_path and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise ChangelogFileError(f"Unable to write {path}: {exc}") from exc
    logger.debug("Wrote %d characters to %s", len(content), path)
