"""Directory reader ordering, classification, and error mapping."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from marcos.errors import LOAD_NOT_A_DIRECTORY, LOAD_NOT_FOUND, LOAD_PERMISSION_DENIED, DirectoryLoadFailed
from marcos.fs import KIND_DIRECTORY, KIND_FILE, KIND_OTHER, DirectoryReader, Entry


class DirectoryReaderTests(unittest.TestCase):
    def test_directories_first_then_case_insensitive_names(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "beta").mkdir()
            (root / "Alpha").mkdir()
            (root / "zeta.txt").write_text("z", encoding="utf-8")
            (root / "Readme.md").write_text("r", encoding="utf-8")
            (root / "apple.py").write_text("a", encoding="utf-8")

            entries = DirectoryReader().list(root)

        self.assertEqual(
            [(entry.name, entry.kind) for entry in entries],
            [
                ("Alpha", KIND_DIRECTORY),
                ("beta", KIND_DIRECTORY),
                ("apple.py", KIND_FILE),
                ("Readme.md", KIND_FILE),
                ("zeta.txt", KIND_FILE),
            ],
        )
        self.assertTrue(all(entry.path.parent == root for entry in entries))

    def test_hidden_entries_follow_show_hidden(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".secret").write_text("s", encoding="utf-8")
            (root / "visible").write_text("v", encoding="utf-8")

            hidden = DirectoryReader(show_hidden=False).list(root)
            shown = DirectoryReader(show_hidden=True).list(root)

        self.assertEqual([entry.name for entry in hidden], ["visible"])
        self.assertEqual([entry.name for entry in shown], [".secret", "visible"])

    def test_symlinks_are_classified_by_target(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "real").mkdir()
            os.symlink(root / "real", root / "link")
            os.symlink(root / "nowhere", root / "dangling")

            kinds = {entry.name: entry.kind for entry in DirectoryReader().list(root)}

        self.assertEqual(kinds["link"], KIND_DIRECTORY)
        self.assertEqual(kinds["dangling"], KIND_OTHER)

    def test_missing_directory_reports_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "gone"
            with self.assertRaises(DirectoryLoadFailed) as ctx:
                DirectoryReader().list(missing)

        self.assertEqual(ctx.exception.reason, LOAD_NOT_FOUND)
        self.assertEqual(ctx.exception.path, missing)
        self.assertIsInstance(ctx.exception.cause, FileNotFoundError)

    def test_file_path_reports_not_a_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "plain.txt"
            target.write_text("x", encoding="utf-8")
            with self.assertRaises(DirectoryLoadFailed) as ctx:
                DirectoryReader().list(target)

        self.assertEqual(ctx.exception.reason, LOAD_NOT_A_DIRECTORY)

    @unittest.skipIf(os.geteuid() == 0, "root ignores directory permissions")
    def test_unreadable_directory_reports_permission_denied(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            locked = Path(tmp) / "locked"
            locked.mkdir()
            locked.chmod(0)
            try:
                with self.assertRaises(DirectoryLoadFailed) as ctx:
                    DirectoryReader().list(locked)
            finally:
                locked.chmod(0o700)

        self.assertEqual(ctx.exception.reason, LOAD_PERMISSION_DENIED)
        self.assertIn("permission denied", str(ctx.exception))


class EntryTests(unittest.TestCase):
    def test_name_and_label(self) -> None:
        self.assertEqual(Entry(Path("/srv/www"), KIND_DIRECTORY).label(), "www/")
        self.assertEqual(Entry(Path("/srv/a.txt"), KIND_FILE).label(), "a.txt")
        self.assertEqual(Entry(Path("/"), KIND_DIRECTORY).name, "")


if __name__ == "__main__":
    unittest.main()
