import unittest

from conventional_changelog.versioning import bump_version, parse_version, resolve_version


class TestBumpVersion(unittest.TestCase):
    def test_bump_levels(self) -> None:
        self.assertEqual(bump_version("1.2.3", major=True), "2.0.0")
        self.assertEqual(bump_version("1.2.3", minor=True), "1.3.0")
        self.assertEqual(bump_version("1.2.3", patch=True), "1.2.4")

    def test_priority(self) -> None:
        self.assertEqual(bump_version("1.2.3", major=True, minor=True, patch=True), "2.0.0")
        self.assertEqual(bump_version("1.2.3", minor=True, patch=True), "1.3.0")

    def test_patch_is_default(self) -> None:
        self.assertEqual(bump_version("1.2.3"), "1.2.4")

    def test_tag_prefix_and_suffix(self) -> None:
        self.assertEqual(bump_version("v1.2.3", minor=True), "1.3.0")
        self.assertEqual(bump_version("v2.0.0-rc.1", patch=True), "2.0.1")
        self.assertEqual(bump_version("v3.1", patch=True), "3.1.1")

    def test_missing_previous(self) -> None:
        self.assertEqual(bump_version(None), "1.0.0")
        self.assertEqual(bump_version("", major=True), "1.0.0")
        self.assertEqual(bump_version("release-candidate", minor=True), "1.0.0")

    def test_parse_version(self) -> None:
        self.assertEqual(parse_version("v10.20.30"), (10, 20, 30))
        self.assertIsNone(parse_version("abc"))


class TestResolveVersion(unittest.TestCase):
    def test_override_wins(self) -> None:
        self.assertEqual(resolve_version("1.2.3", major=True, override="5.0.0"), "5.0.0")
        self.assertEqual(resolve_version(None, override="v0.9.0"), "0.9.0")

    def test_blank_override_is_ignored(self) -> None:
        self.assertEqual(resolve_version("1.2.3", minor=True, override="  "), "1.3.0")

    def test_nothing_given(self) -> None:
        self.assertEqual(resolve_version(None), "1.0.0")


if __name__ == "__main__":
    unittest.main()
