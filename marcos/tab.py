"""Tab model: parent/current views plus the preview target.

A tab is identified by the directory it browses (``current_view.path``).
``enter`` and ``go_back`` are the only operations that change that directory;
each loads at most one new listing and reuses the other from the previous
state. A failed load leaves the tab exactly as it was and re-raises
``DirectoryLoadFailed`` for the session to report.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .fs import DirectoryReader, Entry
from .view import View

logger = logging.getLogger(__name__)


def parent_directory(path: Path) -> Path | None:
    """Return the parent of ``path``, or ``None`` at a filesystem root."""
    parent = path.parent
    if parent == path:
        return None
    return parent


class Tab:
    """One browsing session over the filesystem tree."""

    def __init__(
        self,
        tab_id: str,
        current_view: View,
        parent_view: View | None,
        reader: DirectoryReader,
    ) -> None:
        self.id = tab_id
        self.reader = reader
        self.current_view = current_view
        self.parent_view = parent_view
        self.preview_target: Entry | None = None
        self._sync_preview()

    @classmethod
    def open(cls, tab_id: str, initial_path: Path, reader: DirectoryReader) -> Tab:
        """Load views for a new tab at ``initial_path``."""
        current_view = View.load(Path(initial_path), reader)
        parent_view = _load_parent_view(current_view.path, reader)
        logger.debug("opened tab %s at %s", tab_id, current_view.path)
        return cls(tab_id, current_view, parent_view, reader)

    @property
    def current_path(self) -> Path:
        return self.current_view.path

    @property
    def parent_highlight(self) -> int | None:
        """Row of the current directory in the parent pane.

        ``None`` when there is no parent or the parent listing no longer shows
        the current directory, e.g. a dot-directory once hidden files are off.
        """
        if self.parent_view is None:
            return None
        return self.parent_view.index_of(self.current_view.path)

    def _sync_preview(self) -> None:
        self.preview_target = self.current_view.selected_entry()

    def move_selection(self, delta: int) -> bool:
        """Move the current-pane cursor; never touches the filesystem."""
        moved = self.current_view.move_selection(delta)
        self._sync_preview()
        return moved

    def enter(self) -> bool:
        """Descend into the selected directory.

        Returns ``False`` without changing anything when the preview target is
        missing or not a directory.
        """
        target = self.preview_target
        if target is None or not target.is_dir:
            return False

        new_current = View.load(target.path, self.reader)

        self.parent_view = self.current_view
        self.current_view = new_current
        self._sync_preview()
        logger.debug("tab %s entered %s", self.id, new_current.path)
        return True

    def go_back(self) -> bool:
        """Ascend to the parent directory; no-op at a filesystem root."""
        if self.parent_view is None:
            return False

        new_current = self.parent_view
        new_parent = _load_parent_view(new_current.path, self.reader)

        self.current_view = new_current
        self.parent_view = new_parent
        self._sync_preview()
        logger.debug("tab %s went back to %s", self.id, new_current.path)
        return True

    def refresh(self) -> None:
        """Re-read both listings at their current paths.

        The selected path is kept when it still exists; otherwise the cursor
        falls back to the first row.
        """
        previous = self.current_view.selected_entry()
        new_current = View.load(self.current_view.path, self.reader)
        if previous is not None:
            new_current.select_path(previous.path)
        new_parent = _load_parent_view(new_current.path, self.reader)

        self.current_view = new_current
        self.parent_view = new_parent
        self._sync_preview()

    def snapshot(self) -> tuple:
        """Comparable value capturing all navigation state."""
        parent = self.parent_view
        return (
            self.id,
            None if parent is None else (parent.path, parent.entries, parent.selected_index),
            (self.current_view.path, self.current_view.entries, self.current_view.selected_index),
            self.preview_target,
        )

    def __repr__(self) -> str:
        return f"Tab(id={self.id!r}, path={str(self.current_view.path)!r})"


def _load_parent_view(path: Path, reader: DirectoryReader) -> View | None:
    parent = parent_directory(path)
    if parent is None:
        return None
    view = View.load(parent, reader)
    view.select_path(path)
    return view


__all__ = ["Tab", "parent_directory"]
