import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from conventional_changelog.render.changelog_file import (
    ChangelogFileError,
    read_changelog,
    write_changelog,
)


class TestChangelogFile(unittest.TestCase):
    def test_read_missing_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(read_changelog(Path(tmp) / "CHANGELOG.md"), "")

    def test_write_then_read(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "CHANGELOG.md"
            write_changelog(path, "# Changelog\n⚠ unicode\n")
            self.assertEqual(read_changelog(path), "# Changelog\n⚠ unicode\n")
            write_changelog(path, "replaced\n")
            self.assertEqual(read_changelog(path), "replaced\n")
            # no temporary files left behind
            self.assertEqual(os.listdir(tmp), ["CHANGELOG.md"])

    def test_write_to_missing_directory_fails(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "missing" / "CHANGELOG.md"
            with self.assertRaises(ChangelogFileError):
                write_changelog(path, "content")
            self.assertFalse(path.exists())

    def test_failed_replace_keeps_previous_content(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "CHANGELOG.md"
            path.write_text("old\n", encoding="utf-8")
            with patch("conventional_changelog.render.changelog_file.os.replace", side_effect=OSError("disk full")):
                with self.assertRaises(ChangelogFileError):
                    write_changelog(path, "new\n")
            self.assertEqual(path.read_text(encoding="utf-8"), "old\n")
            self.assertEqual(os.listdir(tmp), ["CHANGELOG.md"])

    def test_read_error_is_wrapped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "CHANGELOG.md"
            path.write_text("x", encoding="utf-8")
            with patch("pathlib.Path.read_text", side_effect=OSError("denied")):
                with self.assertRaises(ChangelogFileError):
                    read_changelog(path)


if __name__ == "__main__":
    unittest.main()
