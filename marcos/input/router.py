"""Mode-aware classification of key tokens into navigation commands.

The router is pure: it never touches tabs or the terminal. The session applies
whatever ``Command`` comes back.
"""

from __future__ import annotations

from dataclasses import dataclass

from .keymap import Keymap

MODE_NORMAL = "normal"
MODE_COMMAND = "command"
UI_MODES = frozenset({MODE_NORMAL, MODE_COMMAND})

MOVE_UP = "move_up"
MOVE_DOWN = "move_down"
ENTER = "enter"
BACK = "back"
TOGGLE_COMMAND_MODE = "toggle_command_mode"
QUIT = "quit"
SWITCH_TAB = "switch_tab"
NEW_TAB = "new_tab"
CLOSE_TAB = "close_tab"
NEXT_TAB = "next_tab"
PREV_TAB = "prev_tab"
REFRESH = "refresh"
TOGGLE_HIDDEN = "toggle_hidden"
COMMAND_INPUT = "command_input"
UNHANDLED = "unhandled"

COMMAND_KINDS = frozenset(
    {
        MOVE_UP,
        MOVE_DOWN,
        ENTER,
        BACK,
        TOGGLE_COMMAND_MODE,
        QUIT,
        SWITCH_TAB,
        NEW_TAB,
        CLOSE_TAB,
        NEXT_TAB,
        PREV_TAB,
        REFRESH,
        TOGGLE_HIDDEN,
        COMMAND_INPUT,
        UNHANDLED,
    }
)


@dataclass(frozen=True)
class Command:
    """One classified key press.

    ``tab_id`` is set for ``switch_tab``; ``text`` carries the raw key for
    ``command_input``; ``submitted`` marks a command-box submit as opposed to
    a cancel.
    """

    kind: str
    tab_id: str | None = None
    text: str = ""
    submitted: bool = False

    def __post_init__(self) -> None:
        if self.kind not in COMMAND_KINDS:
            raise ValueError(f"unknown command kind: {self.kind!r}")


def _fixed(kind: str):
    command = Command(kind)
    return lambda _key: command


def _switch_tab(key: str) -> Command:
    return Command(SWITCH_TAB, tab_id=key)


def _normalize_enter(key: str) -> str:
    if key in {"ENTER_CR", "ENTER_LF"}:
        return "ENTER"
    return key


class InputRouter:
    """Key tables for normal and command mode."""

    ENTER_KEYS = ("l", "RIGHT", "ENTER")
    BACK_KEYS = ("h", "LEFT", "BACKSPACE")
    CANCEL_KEY = "ESC"
    SUBMIT_KEY = "ENTER"

    def __init__(self) -> None:
        self._normal: Keymap[Command] = (
            Keymap(_normalize_enter)
            .bind(("j", "DOWN"), _fixed(MOVE_DOWN))
            .bind(("k", "UP"), _fixed(MOVE_UP))
            .bind(self.ENTER_KEYS, _fixed(ENTER))
            .bind(self.BACK_KEYS, _fixed(BACK))
            .bind(("q",), _fixed(QUIT))
            .bind((":",), _fixed(TOGGLE_COMMAND_MODE))
            .bind(tuple(str(digit) for digit in range(1, 10)), _switch_tab)
            .bind(("t",), _fixed(NEW_TAB))
            .bind(("x",), _fixed(CLOSE_TAB))
            .bind(("TAB",), _fixed(NEXT_TAB))
            .bind(("SHIFT_TAB",), _fixed(PREV_TAB))
            .bind(("r", "CTRL_R"), _fixed(REFRESH))
            .bind((".",), _fixed(TOGGLE_HIDDEN))
        )
        self._command: Keymap[Command] = (
            Keymap(_normalize_enter)
            .bind((self.CANCEL_KEY,), _fixed(TOGGLE_COMMAND_MODE))
            .bind((self.SUBMIT_KEY,), lambda _key: Command(TOGGLE_COMMAND_MODE, submitted=True))
        )

    def classify(self, key: str, mode: str) -> Command:
        """Map ``key`` pressed in ``mode`` to a command."""
        if mode == MODE_COMMAND:
            command = self._command.lookup(key)
            if command is None:
                return Command(COMMAND_INPUT, text=key)
            return command
        if mode != MODE_NORMAL:
            raise ValueError(f"unknown UI mode: {mode!r}")
        command = self._normal.lookup(key)
        if command is None:
            return Command(UNHANDLED, text=key)
        return command
