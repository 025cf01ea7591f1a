"""Ordered collection of open tabs with a single focused tab."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from .errors import DuplicateTabId, LastTabError, TabNotFound
from .fs import DirectoryReader
from .tab import Tab

logger = logging.getLogger(__name__)


class TabRegistry:
    """Owns every ``Tab`` of a session, keyed by id in tab-bar order."""

    def __init__(self, reader: DirectoryReader) -> None:
        self.reader = reader
        self._tabs: dict[str, Tab] = {}
        self._focused_id: str | None = None

    def __len__(self) -> int:
        return len(self._tabs)

    def __contains__(self, tab_id: object) -> bool:
        return tab_id in self._tabs

    def __iter__(self) -> Iterator[Tab]:
        return iter(list(self._tabs.values()))

    @property
    def focused_id(self) -> str | None:
        return self._focused_id

    def ids(self) -> list[str]:
        return list(self._tabs)

    def get(self, tab_id: str) -> Tab:
        try:
            return self._tabs[tab_id]
        except KeyError:
            raise TabNotFound(tab_id) from None

    def add(self, tab_id: str, initial_path: Path) -> Tab:
        """Open a tab at ``initial_path``; the first tab receives focus.

        Raises ``DuplicateTabId`` before touching the filesystem, and lets
        ``DirectoryLoadFailed`` through when the tab cannot be opened.
        """
        if tab_id in self._tabs:
            raise DuplicateTabId(tab_id)
        tab = Tab.open(tab_id, initial_path, self.reader)
        self._tabs[tab_id] = tab
        if self._focused_id is None:
            self._focused_id = tab_id
        logger.info("added tab %s at %s", tab_id, tab.current_path)
        return tab

    def remove(self, tab_id: str) -> None:
        """Close ``tab_id``; refuses to close the last remaining tab."""
        if tab_id not in self._tabs:
            raise TabNotFound(tab_id)
        if len(self._tabs) == 1:
            raise LastTabError(tab_id)

        ids = self.ids()
        position = ids.index(tab_id)
        del self._tabs[tab_id]
        if self._focused_id == tab_id:
            remaining = self.ids()
            self._focused_id = remaining[max(0, position - 1)]
        logger.info("removed tab %s", tab_id)

    def focus(self, tab_id: str) -> None:
        if tab_id not in self._tabs:
            raise TabNotFound(tab_id)
        self._focused_id = tab_id

    def focus_relative(self, step: int) -> str:
        """Move focus ``step`` places along the tab bar, wrapping at the ends."""
        ids = self.ids()
        position = ids.index(self.focused().id)
        self._focused_id = ids[(position + step) % len(ids)]
        return self._focused_id

    def focused(self) -> Tab:
        if self._focused_id is None:
            raise TabNotFound("<none>")
        return self._tabs[self._focused_id]

    def next_free_id(self) -> str:
        """Smallest positive integer id not in use."""
        candidate = 1
        while str(candidate) in self._tabs:
            candidate += 1
        return str(candidate)


__all__ = ["TabRegistry"]
