"""Directory listing snapshot with a selection cursor."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .fs import DirectoryReader, Entry


@dataclass
class View:
    """One directory listing at a point in time.

    ``entries`` is never mutated after construction; reloading produces a new
    ``View``. ``selected_index`` is ``None`` exactly when ``entries`` is empty.
    """

    path: Path
    entries: tuple[Entry, ...]
    selected_index: int | None = None

    def __post_init__(self) -> None:
        self.entries = tuple(self.entries)
        if not self.entries:
            self.selected_index = None
        elif self.selected_index is None:
            self.selected_index = 0
        else:
            self.selected_index = max(0, min(self.selected_index, len(self.entries) - 1))

    @classmethod
    def load(cls, path: Path, reader: DirectoryReader) -> View:
        """Read ``path`` through ``reader``; raises ``DirectoryLoadFailed``.

        Relative paths are anchored at the working directory so parent lookups
        and entry comparisons always see absolute paths.
        """
        path = Path(os.path.abspath(path))
        return cls(path=path, entries=tuple(reader.list(path)))

    def __len__(self) -> int:
        return len(self.entries)

    def move_selection(self, delta: int) -> bool:
        """Move the cursor by ``delta`` rows, clamped to the listing.

        Returns whether the selection changed.
        """
        if self.selected_index is None:
            return False
        target = max(0, min(self.selected_index + delta, len(self.entries) - 1))
        if target == self.selected_index:
            return False
        self.selected_index = target
        return True

    def selected_entry(self) -> Entry | None:
        if self.selected_index is None:
            return None
        return self.entries[self.selected_index]

    def index_of(self, path: Path) -> int | None:
        for idx, entry in enumerate(self.entries):
            if entry.path == path:
                return idx
        return None

    def select_path(self, path: Path) -> bool:
        """Point the cursor at ``path`` when it is listed here."""
        idx = self.index_of(path)
        if idx is None:
            return False
        self.selected_index = idx
        return True

    def labels(self) -> list[str]:
        return [entry.label() for entry in self.entries]
