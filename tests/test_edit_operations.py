import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from obsidian_diff_edit import DiffEditError, ErrorKind, RollbackStore, VaultMetadata
from obsidian_diff_edit.core.edit_operations import (
    diff_edit_file,
    read_file,
    rollback_edit_file,
    snippet_edit_file,
    upsert_file,
)

PLAN = "# Plan\n\n## Tasks\n- [ ] Draft outline\n- [ ] Review budget\n"

DRAFT_DONE_DIFF = (
    "--- Projects/Plan.md\n"
    "+++ Projects/Plan.md\n"
    "@@ -3,3 +3,3 @@\n"
    " ## Tasks\n"
    "-- [ ] Draft outline\n"
    "+- [x] Draft outline\n"
    " - [ ] Review budget\n"
)


class EditOperationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = TemporaryDirectory()
        self.vault_path = Path(self.tmpdir.name).resolve()
        self.vault = VaultMetadata(
            name="test",
            path=self.vault_path,
            description="test vault",
        )
        self.store = RollbackStore()

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def _write_file(self, path: str, content: str) -> Path:
        file_path = self.vault_path / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(content.encode("utf-8"))
        return file_path

    def _read_file(self, path: str) -> str:
        return (self.vault_path / path).read_bytes().decode("utf-8")

    # Reads

    def test_read_file_returns_raw_content(self) -> None:
        self._write_file("Projects/Plan.md", PLAN)
        result = read_file(self.vault, "Projects//Plan.md")
        self.assertEqual(result["path"], "Projects/Plan.md")
        self.assertEqual(result["content"], PLAN)

    def test_read_missing_file_reports_file_not_found(self) -> None:
        with self.assertRaises(DiffEditError) as ctx:
            read_file(self.vault, "missing.md")
        self.assertIs(ctx.exception.kind, ErrorKind.FILE_NOT_FOUND)
        self.assertIn("missing.md", str(ctx.exception))

    def test_read_folder_reports_path_is_folder(self) -> None:
        (self.vault_path / "Projects").mkdir()
        with self.assertRaises(DiffEditError) as ctx:
            read_file(self.vault, "Projects")
        self.assertIs(ctx.exception.kind, ErrorKind.PATH_IS_FOLDER)

    def test_path_outside_vault_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            read_file(self.vault, "../outside.md")

    # Diff edits

    def test_diff_edit_writes_file_and_returns_applied_diff(self) -> None:
        self._write_file("Projects/Plan.md", PLAN)
        result = diff_edit_file(self.vault, "Projects/Plan.md", DRAFT_DONE_DIFF, self.store)

        self.assertEqual(result["status"], "edited")
        self.assertIn("+- [x] Draft outline", result["diff"].splitlines())
        self.assertEqual(
            self._read_file("Projects/Plan.md"),
            PLAN.replace("- [ ] Draft", "- [x] Draft"),
        )
        self.assertEqual(self.store.peek("Projects/Plan.md").content, PLAN)

    def test_failed_diff_leaves_file_and_store_untouched(self) -> None:
        self._write_file("Projects/Plan.md", PLAN)
        bad_diff = "--- Projects/Plan.md\n+++ Projects/Plan.md\n@@ @@\n-not here\n+x\n"

        with self.assertRaises(DiffEditError) as ctx:
            diff_edit_file(self.vault, "Projects/Plan.md", bad_diff, self.store)

        self.assertIs(ctx.exception.kind, ErrorKind.HUNK_APPLY_ERROR)
        self.assertEqual(self._read_file("Projects/Plan.md"), PLAN)
        self.assertIsNone(self.store.peek("Projects/Plan.md"))

    def test_diff_for_other_file_is_rejected(self) -> None:
        self._write_file("Projects/Plan.md", PLAN)
        with self.assertRaises(DiffEditError) as ctx:
            diff_edit_file(self.vault, "Other.md", DRAFT_DONE_DIFF, self.store)
        self.assertIs(ctx.exception.kind, ErrorKind.FILE_NOT_FOUND)

        self._write_file("Other.md", PLAN)
        with self.assertRaises(DiffEditError) as ctx:
            diff_edit_file(self.vault, "Other.md", DRAFT_DONE_DIFF, self.store)
        self.assertIs(ctx.exception.kind, ErrorKind.PATH_MISMATCH)

    def test_diff_edit_preserves_crlf_line_endings(self) -> None:
        self._write_file("crlf.md", "A\r\nB\r\nC\r\n")
        diff_edit_file(self.vault, "crlf.md", "--- crlf.md\n+++ crlf.md\n@@ @@\n A\n-B\n+X\n C\n", self.store)
        self.assertEqual(self._read_file("crlf.md"), "A\r\nX\r\nC\r\n")

    def test_diff_edit_in_folder_named_a(self) -> None:
        self._write_file("a/notes.md", "x\n")
        diff = "--- a/a/notes.md\n+++ b/a/notes.md\n@@ @@\n-x\n+y\n"

        result = diff_edit_file(self.vault, "a/notes.md", diff, self.store)

        self.assertEqual(result["status"], "edited")
        self.assertEqual(self._read_file("a/notes.md"), "y\n")
        self.assertTrue(result["diff"].startswith("--- a/notes.md\n+++ a/notes.md\n"))

    # Snippet edits

    def test_snippet_edit_rewrites_region(self) -> None:
        self._write_file("Projects/Plan.md", PLAN)
        snippet = "## Tasks\n- [ ] Draft outline\n- [x] Review budget\n"

        result = snippet_edit_file(self.vault, "Projects/Plan.md", snippet, self.store)

        self.assertEqual(result["status"], "edited")
        self.assertEqual(
            self._read_file("Projects/Plan.md"),
            PLAN.replace("- [ ] Review", "- [x] Review"),
        )
        self.assertEqual(self.store.peek("Projects/Plan.md").reason, "snippet-edit")

    # Upserts

    def test_upsert_creates_file_and_parent_folders(self) -> None:
        result = upsert_file(self.vault, "Inbox/Today.md", "- call the bank", self.store)
        self.assertEqual(result["status"], "created")
        self.assertEqual(self._read_file("Inbox/Today.md"), "- call the bank")
        self.assertIsNone(self.store.peek("Inbox/Today.md"))

    def test_upsert_appends_with_separator(self) -> None:
        self._write_file("Inbox.md", "- first")
        result = upsert_file(self.vault, "Inbox.md", "- second", self.store)
        self.assertEqual(result["status"], "appended")
        self.assertEqual(self._read_file("Inbox.md"), "- first\n- second")

    def test_upsert_appends_without_doubling_newline(self) -> None:
        self._write_file("Inbox.md", "- first\n")
        upsert_file(self.vault, "Inbox.md", "- second\n", self.store)
        self.assertEqual(self._read_file("Inbox.md"), "- first\n- second\n")

    def test_upsert_appends_to_empty_file_with_separator(self) -> None:
        self._write_file("Inbox.md", "")
        result = upsert_file(self.vault, "Inbox.md", "- first", self.store)
        self.assertEqual(result["status"], "appended")
        self.assertEqual(self._read_file("Inbox.md"), "\n- first")

    # Rollback

    def test_rollback_restores_pre_edit_content_once(self) -> None:
        self._write_file("Projects/Plan.md", PLAN)
        diff_edit_file(self.vault, "Projects/Plan.md", DRAFT_DONE_DIFF, self.store)

        result = rollback_edit_file(self.vault, "Projects/Plan.md", self.store)
        self.assertEqual(result["status"], "rolled_back")
        self.assertEqual(result["reason"], "diff-edit")
        self.assertEqual(self._read_file("Projects/Plan.md"), PLAN)

        with self.assertRaises(DiffEditError) as ctx:
            rollback_edit_file(self.vault, "Projects/Plan.md", self.store)
        self.assertIs(ctx.exception.kind, ErrorKind.NO_ROLLBACK_AVAILABLE)

    def test_rollback_undoes_only_the_latest_edit(self) -> None:
        self._write_file("Projects/Plan.md", PLAN)
        diff_edit_file(self.vault, "Projects/Plan.md", DRAFT_DONE_DIFF, self.store)
        after_first = self._read_file("Projects/Plan.md")
        upsert_file(self.vault, "Projects/Plan.md", "- [ ] Book room\n", self.store)

        rollback_edit_file(self.vault, "Projects/Plan.md", self.store)
        self.assertEqual(self._read_file("Projects/Plan.md"), after_first)

    def test_rollback_rejects_non_markdown_files(self) -> None:
        self._write_file("data.csv", "a,b\n")
        with self.assertRaises(ValueError):
            rollback_edit_file(self.vault, "data.csv", self.store)

    def test_rollback_without_edit_fails(self) -> None:
        self._write_file("Projects/Plan.md", PLAN)
        with self.assertRaises(DiffEditError) as ctx:
            rollback_edit_file(self.vault, "Projects/Plan.md", self.store)
        self.assertIs(ctx.exception.kind, ErrorKind.NO_ROLLBACK_AVAILABLE)


if __name__ == "__main__":
    unittest.main()
