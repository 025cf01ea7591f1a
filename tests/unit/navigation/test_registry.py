"""Tab registry bookkeeping: ids, focus, and the never-empty rule."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from marcos.errors import DirectoryLoadFailed, DuplicateTabId, LastTabError, TabNotFound
from marcos.fs import DirectoryReader
from marcos.registry import TabRegistry


class TabRegistryTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        (self.root / "one").mkdir()
        (self.root / "two").mkdir()
        self.registry = TabRegistry(DirectoryReader())

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_first_tab_receives_focus(self) -> None:
        tab = self.registry.add("1", self.root)
        self.registry.add("2", self.root / "one")

        self.assertIs(self.registry.focused(), tab)
        self.assertEqual(self.registry.focused_id, "1")
        self.assertEqual(self.registry.ids(), ["1", "2"])
        self.assertIn("2", self.registry)
        self.assertEqual(len(self.registry), 2)

    def test_duplicate_id_is_rejected(self) -> None:
        self.registry.add("1", self.root)
        with self.assertRaises(DuplicateTabId):
            self.registry.add("1", self.root / "one")
        self.assertEqual(self.registry.get("1").current_path, self.root)

    def test_add_propagates_load_failure_without_registering(self) -> None:
        self.registry.add("1", self.root)
        with self.assertRaises(DirectoryLoadFailed):
            self.registry.add("2", self.root / "missing")
        self.assertEqual(self.registry.ids(), ["1"])

    def test_focus_unknown_tab_raises(self) -> None:
        self.registry.add("1", self.root)
        with self.assertRaises(TabNotFound):
            self.registry.focus("7")
        self.assertEqual(self.registry.focused_id, "1")

    def test_remove_last_tab_is_refused(self) -> None:
        self.registry.add("1", self.root)
        with self.assertRaises(LastTabError):
            self.registry.remove("1")
        self.assertEqual(self.registry.focused().id, "1")

    def test_remove_unknown_tab_raises(self) -> None:
        self.registry.add("1", self.root)
        self.registry.add("2", self.root)
        with self.assertRaises(TabNotFound):
            self.registry.remove("3")

    def test_removing_focused_tab_moves_focus_left(self) -> None:
        for tab_id in ("1", "2", "3"):
            self.registry.add(tab_id, self.root)
        self.registry.focus("2")

        self.registry.remove("2")

        self.assertEqual(self.registry.ids(), ["1", "3"])
        self.assertEqual(self.registry.focused_id, "1")

    def test_removing_first_focused_tab_focuses_new_first(self) -> None:
        self.registry.add("1", self.root)
        self.registry.add("2", self.root)

        self.registry.remove("1")

        self.assertEqual(self.registry.focused_id, "2")

    def test_removing_unfocused_tab_keeps_focus(self) -> None:
        self.registry.add("1", self.root)
        self.registry.add("2", self.root)

        self.registry.remove("2")

        self.assertEqual(self.registry.focused_id, "1")

    def test_focus_relative_wraps_around(self) -> None:
        for tab_id in ("1", "2", "3"):
            self.registry.add(tab_id, self.root)

        self.assertEqual(self.registry.focus_relative(-1), "3")
        self.assertEqual(self.registry.focus_relative(1), "1")
        self.assertEqual(self.registry.focus_relative(2), "3")

    def test_next_free_id_fills_gaps(self) -> None:
        self.assertEqual(self.registry.next_free_id(), "1")
        self.registry.add("1", self.root)
        self.registry.add("3", self.root)
        self.assertEqual(self.registry.next_free_id(), "2")

    def test_tabs_do_not_share_views(self) -> None:
        first = self.registry.add("1", self.root)
        second = self.registry.add("2", self.root)

        first.move_selection(1)

        self.assertEqual(first.current_view.selected_index, 1)
        self.assertEqual(second.current_view.selected_index, 0)


if __name__ == "__main__":
    unittest.main()
