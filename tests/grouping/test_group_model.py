import unittest

from conventional_changelog.grouping.group_model import ChangeEntry, CommitRef, GroupedChangelog


class TestGroupModel(unittest.TestCase):
    def test_commit_ref_short_hash(self) -> None:
        ref = CommitRef.from_sha("0123456789abcdef", "https://example.com/repo")
        self.assertEqual(ref.short, "012345")
        self.assertEqual(ref.sha, "0123456789abcdef")

    def test_change_entry_sorted_refs(self) -> None:
        entry = ChangeEntry(description="Add feature")
        for sha in ["c3", "a1", "b2"]:
            entry.refs[sha] = CommitRef.from_sha(sha, "")
        self.assertEqual([r.sha for r in entry.sorted_refs()], ["a1", "b2", "c3"])

    def test_grouped_changelog_contexts(self) -> None:
        entry = ChangeEntry(description="X")
        grouped = GroupedChangelog(sections={"feat": {None: {"x": entry}}, "fix": {}})
        self.assertFalse(grouped.is_empty())
        self.assertEqual(list(grouped.contexts("feat")), [(None, [entry])])
        self.assertEqual(list(grouped.contexts("missing")), [])


if __name__ == "__main__":
    unittest.main()
