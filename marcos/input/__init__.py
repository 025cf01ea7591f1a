"""Input-layer public API for key decoding and command classification.

Exports are split between low-level terminal decoding (``read_key``) and the
mode-aware ``InputRouter`` used by the session loop.
"""

from .keymap import Keymap
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key
from .router import (
    BACK,
    CLOSE_TAB,
    COMMAND_INPUT,
    COMMAND_KINDS,
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
    UI_MODES,
    UNHANDLED,
    Command,
    InputRouter,
)

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "Keymap",
    "Command",
    "InputRouter",
    "COMMAND_KINDS",
    "UI_MODES",
    "MODE_NORMAL",
    "MODE_COMMAND",
    "MOVE_UP",
    "MOVE_DOWN",
    "ENTER",
    "BACK",
    "TOGGLE_COMMAND_MODE",
    "QUIT",
    "SWITCH_TAB",
    "NEW_TAB",
    "CLOSE_TAB",
    "NEXT_TAB",
    "PREV_TAB",
    "REFRESH",
    "TOGGLE_HIDDEN",
    "COMMAND_INPUT",
    "UNHANDLED",
]
