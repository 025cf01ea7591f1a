"""Session: composition root of the interactive browser.

Owns the tab registry, the input router, the UI mode, the status line and the
command box. Each key is fully processed (classify, mutate, redraw) before the
next one is read; navigation errors are reported on the status line and never
escape ``handle_key``.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from pathlib import Path

from ..errors import DirectoryLoadFailed, LastTabError, MarcosError
from ..fs import DirectoryReader
from ..highlight import DEFAULT_STYLE
from ..input import (
    BACK,
    CLOSE_TAB,
    COMMAND_INPUT,
    ENTER,
    MODE_COMMAND,
    MODE_NORMAL,
    MOVE_DOWN,
    MOVE_UP,
    NEW_TAB,
    NEXT_TAB,
    PREV_TAB,
    QUIT,
    REFRESH,
    SWITCH_TAB,
    TOGGLE_COMMAND_MODE,
    TOGGLE_HIDDEN,
    Command,
    InputRouter,
)
from ..preview import build_preview
from ..registry import TabRegistry
from ..render import CommandBox, ListWidget, RenderPayload, TextWidget
from ..view import View
from .terminal import TerminalController

logger = logging.getLogger(__name__)

INITIAL_TAB_ID = "1"
# Tab bar, pane titles and status line surround the preview body.
CHROME_ROWS = 4


def _default_preview_rows() -> int:
    return max(1, shutil.get_terminal_size((80, 24)).lines - CHROME_ROWS)


def _path_title(path: Path) -> str:
    return path.name or str(path)


def _list_widget(view: View, highlighted: int | None) -> ListWidget:
    return ListWidget(
        title=_path_title(view.path),
        labels=tuple(view.labels()),
        kinds=tuple(entry.kind for entry in view.entries),
        highlighted=highlighted,
        message="" if view.entries else "<empty>",
    )


class Session:
    """One interactive browsing session with explicit start/run/shutdown."""

    def __init__(
        self,
        registry: TabRegistry,
        *,
        key_source: Callable[[], str],
        draw: Callable[[RenderPayload], None],
        router: InputRouter | None = None,
        terminal: TerminalController | None = None,
        preview_rows: Callable[[], int] = _default_preview_rows,
        syntax_style: str = DEFAULT_STYLE,
        no_color: bool = False,
        on_toggle_hidden: Callable[[bool], None] | None = None,
    ) -> None:
        if len(registry) == 0:
            raise ValueError("a session needs at least one open tab")
        self.registry = registry
        self.router = router if router is not None else InputRouter()
        self.terminal = terminal
        self.key_source = key_source
        self.draw = draw
        self.preview_rows = preview_rows
        self.syntax_style = syntax_style
        self.no_color = no_color
        self.on_toggle_hidden = on_toggle_hidden
        self.mode = MODE_NORMAL
        self.status = ""
        self.status_is_error = False
        self.command_text = ""

    @classmethod
    def create(cls, initial_path: Path, reader: DirectoryReader, **kwargs) -> Session:
        """Build a session with one tab open at ``initial_path``.

        Raises ``DirectoryLoadFailed`` when the initial tab cannot be opened.
        """
        registry = TabRegistry(reader)
        registry.add(INITIAL_TAB_ID, initial_path)
        return cls(registry, **kwargs)

    @property
    def reader(self) -> DirectoryReader:
        return self.registry.reader

    # Lifecycle.

    def start(self) -> None:
        """Take over the terminal; safe to call once per session."""
        if self.terminal is not None:
            self.terminal.enable_tui_mode()
        logger.info("session started at %s", self.registry.focused().current_path)

    def run(self) -> None:
        """Draw, then process keys until quit or end of input."""
        self.redraw()
        while True:
            key = self.key_source()
            if key == "":
                logger.info("input closed, ending session")
                break
            if not self.handle_key(key):
                break

    def shutdown(self) -> None:
        """Release the terminal; idempotent."""
        if self.terminal is not None:
            self.terminal.disable_tui_mode()
        logger.info("session shut down")

    # Event handling.

    def handle_key(self, key: str) -> bool:
        """Process one key token; returns ``False`` when the session must end."""
        command = self.router.classify(key, self.mode)
        self.set_status("")
        keep_running = self.apply(command)
        if keep_running:
            self.redraw()
        return keep_running

    def set_status(self, text: str, *, error: bool = False) -> None:
        self.status = text
        self.status_is_error = error and bool(text)

    def _report(self, exc: MarcosError) -> None:
        logger.warning("%s", exc)
        self.set_status(str(exc), error=True)

    def apply(self, command: Command) -> bool:
        """Apply one command to the focused tab or the session."""
        kind = command.kind
        tab = self.registry.focused()
        try:
            if kind == MOVE_DOWN:
                tab.move_selection(1)
            elif kind == MOVE_UP:
                tab.move_selection(-1)
            elif kind == ENTER:
                tab.enter()
            elif kind == BACK:
                tab.go_back()
            elif kind == REFRESH:
                tab.refresh()
            elif kind == SWITCH_TAB:
                assert command.tab_id is not None
                self.registry.focus(command.tab_id)
            elif kind == NEXT_TAB:
                self.registry.focus_relative(1)
            elif kind == PREV_TAB:
                self.registry.focus_relative(-1)
            elif kind == NEW_TAB:
                new_tab = self.registry.add(self.registry.next_free_id(), tab.current_path)
                self.registry.focus(new_tab.id)
            elif kind == CLOSE_TAB:
                self.registry.remove(tab.id)
            elif kind == TOGGLE_HIDDEN:
                self._toggle_hidden()
            elif kind == TOGGLE_COMMAND_MODE:
                self._toggle_command_mode(command)
            elif kind == COMMAND_INPUT:
                self._edit_command_box(command.text)
            elif kind == QUIT:
                return False
            else:
                logger.debug("unhandled key %r", command.text)
        except LastTabError:
            logger.info("closed last tab %s", tab.id)
            return False
        except MarcosError as exc:
            self._report(exc)
        return True

    def _toggle_hidden(self) -> None:
        reader = self.reader
        reader.show_hidden = not reader.show_hidden
        if self.on_toggle_hidden is not None:
            self.on_toggle_hidden(reader.show_hidden)
        failures: list[DirectoryLoadFailed] = []
        for tab in self.registry:
            try:
                tab.refresh()
            except DirectoryLoadFailed as exc:
                failures.append(exc)
        if failures:
            self._report(failures[0])
        else:
            self.set_status("showing hidden files" if reader.show_hidden else "hiding hidden files")

    def _toggle_command_mode(self, command: Command) -> None:
        if self.mode == MODE_NORMAL:
            self.mode = MODE_COMMAND
            self.command_text = ""
            return
        text = self.command_text.strip()
        if command.submitted and text:
            logger.info("command submitted: %r", text)
            self.set_status(f"not a command: {text}", error=True)
        self.mode = MODE_NORMAL
        self.command_text = ""

    def _edit_command_box(self, key: str) -> None:
        if key == "BACKSPACE":
            self.command_text = self.command_text[:-1]
        elif key == "CTRL_U":
            self.command_text = ""
        elif len(key) == 1 and key.isprintable():
            self.command_text += key

    # Rendering.

    def build_payload(self) -> RenderPayload:
        """Describe the focused tab, tab bar, status and command box."""
        tab = self.registry.focused()
        focused_id = self.registry.focused_id
        tabs = tuple((tab_id, tab_id == focused_id) for tab_id in self.registry.ids())
        parent = None if tab.parent_view is None else _list_widget(tab.parent_view, tab.parent_highlight)
        target = tab.preview_target
        preview = TextWidget(
            title="" if target is None else target.name,
            text=build_preview(
                target,
                tab.reader,
                max_lines=self.preview_rows(),
                style=self.syntax_style,
                no_color=self.no_color,
            ),
        )
        return RenderPayload(
            tabs=tabs,
            parent=parent,
            current=_list_widget(tab.current_view, tab.current_view.selected_index),
            preview=preview,
            status=self.status or self._position_status(),
            status_is_error=self.status_is_error,
            command_box=CommandBox(visible=self.mode == MODE_COMMAND, content=self.command_text),
        )

    def _position_status(self) -> str:
        view = self.registry.focused().current_view
        if view.selected_index is None:
            return f"{view.path} (empty)"
        return f"{view.path} ({view.selected_index + 1}/{len(view)})"

    def redraw(self) -> None:
        self.draw(self.build_payload())
