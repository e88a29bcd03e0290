import unittest
from datetime import date

from conventional_changelog.config.configuration import Configuration
from conventional_changelog.grouping.commit_classifier import classify_commits
from conventional_changelog.grouping.group_model import ChangeEntry
from conventional_changelog.grouping.grouper import group_commits
from conventional_changelog.render.markdown import (
    build_header,
    merge_changelog,
    render_entry,
    render_section,
    strip_header,
)
from conventional_changelog.vcs.git_client import RawCommit


URL = "https://github.com/acme/widgets"
RELEASE_DATE = date(2024, 5, 1)


def _section(heads, config=None, version="1.1.0", previous="v1.0.0"):
    config = config or Configuration()
    commits = [RawCommit(sha=sha, head=head) for sha, head in heads]
    grouped = group_commits(classify_commits(commits, config), config, URL)
    return render_section(grouped, config, version, previous, URL, RELEASE_DATE)


class TestRenderSection(unittest.TestCase):
    def test_full_section(self) -> None:
        section = _section([
            ("bbbbbb222222", "fix: handle empty input"),
            ("aaaaaa111111", "feat(parser): add support for scoped imports"),
            ("cccccc333333", "feat: add cli"),
        ])
        expected = (
            "## [1.1.0](https://github.com/acme/widgets/compare/v1.0.0...v1.1.0) (2024-05-01)\n\n"
            "\n### Features\n\n"
            "* Add cli ([cccccc](https://github.com/acme/widgets/commit/cccccc333333))\n"
            "\n##### Parser\n\n"
            "* Add support for scoped imports ([aaaaaa](https://github.com/acme/widgets/commit/aaaaaa111111))\n"
            "\n### Bug Fixes\n\n"
            "* Handle empty input ([bbbbbb](https://github.com/acme/widgets/commit/bbbbbb222222))\n"
            "\n---\n\n"
        )
        self.assertEqual(section, expected)

    def test_breaking_changes_rendered_first(self) -> None:
        section = _section([("a1", "fix: small"), ("b2", "feat!: drop old api")])
        self.assertLess(section.index("⚠ BREAKING CHANGES"), section.index("Bug Fixes"))
        self.assertNotIn("### Features", section)

    def test_empty_types_have_no_heading(self) -> None:
        section = _section([("a1", "fix: small")])
        self.assertNotIn("### Features", section)
        self.assertNotIn("Performance Improvements", section)
        self.assertIn("### Bug Fixes", section)

    def test_no_commits_renders_heading_and_separator(self) -> None:
        section = _section([])
        self.assertEqual(
            section,
            "## [1.1.0](https://github.com/acme/widgets/compare/v1.0.0...v1.1.0) (2024-05-01)\n\n\n---\n\n",
        )

    def test_duplicates_render_as_one_bullet(self) -> None:
        section = _section([("ffff99", "fix: Handle timeouts!"), ("0000aa", "fix: handle timeouts")])
        bullets = [line for line in section.splitlines() if line.startswith("* ")]
        self.assertEqual(
            bullets,
            [
                "* Handle timeouts ([0000aa](https://github.com/acme/widgets/commit/0000aa), "
                "[ffff99](https://github.com/acme/widgets/commit/ffff99))"
            ],
        )

    def test_entry_without_refs(self) -> None:
        self.assertEqual(render_entry(ChangeEntry(description="Lonely")), "* Lonely\n")

    def test_rendering_is_deterministic(self) -> None:
        heads = [("b2", "feat(b): two"), ("a1", "feat(a): one"), ("c3", "fix: three")]
        self.assertEqual(_section(heads), _section(list(reversed(heads))))


class TestMerge(unittest.TestCase):
    def setUp(self) -> None:
        self.config = Configuration()
        self.header = build_header(self.config)

    def test_header(self) -> None:
        self.assertEqual(
            self.header,
            "# Changelog\nAll notable changes to this project will be documented in this file.\n\n\n",
        )

    def test_strip_header(self) -> None:
        old = "## [1.0.0](x) (2024-01-01)\n\n* A\n\n---\n\n"
        self.assertEqual(strip_header(self.header + old, self.header), old)
        self.assertEqual(strip_header("\n\n" + self.header.upper() + old, self.header), old)
        self.assertEqual(strip_header(old, self.header), old)

    def test_merge_into_empty_file(self) -> None:
        self.assertEqual(merge_changelog("", "SECTION\n", self.config), self.header + "SECTION\n")

    def test_merge_keeps_old_sections_below(self) -> None:
        old_section = "## [1.0.0](u/compare/abc...v1.0.0) (2024-01-01)\n\n\n### Features\n\n* Old\n\n---\n\n"
        existing = self.header + old_section
        merged = merge_changelog(existing, "## [1.1.0] new\n\n---\n\n", self.config)
        self.assertEqual(merged.count("# Changelog"), 1)
        self.assertTrue(merged.startswith(self.header + "## [1.1.0] new"))
        self.assertTrue(merged.endswith(old_section))

    def test_custom_header(self) -> None:
        config = Configuration.from_settings({"header_title": "History", "header_description": "Releases."})
        merged = merge_changelog("# History\nReleases.\n\n\nOLD", "NEW", config)
        self.assertEqual(merged, "# History\nReleases.\n\n\nNEWOLD")


if __name__ == "__main__":
    unittest.main()
