"""Remembered user preferences.

One JSON object in the platform config directory holds the hidden-file
toggle, the UI theme and the preview syntax style. A broken or missing file
never stops marcos; it just means defaults.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import TypeVar

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "marcos"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

SHOW_HIDDEN_KEY = "show_hidden"
THEME_KEY = "theme"
SYNTAX_STYLE_KEY = "syntax_style"

T = TypeVar("T")


def ensure_config_dir() -> Path:
    directory = CONFIG_PATH.parent
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("cannot create config directory %s: %s", directory, exc)
    return directory


def load_config() -> dict[str, object]:
    """Stored preferences, or ``{}`` when there is nothing usable on disk."""
    try:
        raw = CONFIG_PATH.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        logger.warning("cannot read config %s: %s", CONFIG_PATH, exc)
        return {}
    try:
        data = json.loads(raw)
    except ValueError as exc:
        logger.warning("ignoring malformed config %s: %s", CONFIG_PATH, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level is not an object", CONFIG_PATH)
        return {}
    return data


def save_config(data: dict[str, object]) -> None:
    """Write ``data`` through a temporary file so readers never see half a file.

    Write failures are logged; browsing carries on without persistence.
    """
    scratch = CONFIG_PATH.with_name(CONFIG_PATH.name + ".tmp")
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        scratch.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
        os.replace(scratch, CONFIG_PATH)
    except OSError as exc:
        logger.warning("cannot write config %s: %s", CONFIG_PATH, exc)


def _get(key: str, kind: type[T]) -> T | None:
    value = load_config().get(key)
    return value if isinstance(value, kind) else None


def _put(key: str, value: object) -> None:
    data = load_config()
    data[key] = value
    save_config(data)


def _get_name(key: str) -> str | None:
    value = _get(key, str)
    if value is None:
        return None
    return value.strip() or None


def _put_name(key: str, name: str) -> None:
    name = name.strip()
    if name:
        _put(key, name)


def load_show_hidden() -> bool:
    """Hidden-file toggle; anything but a JSON boolean reads as ``False``."""
    return _get(SHOW_HIDDEN_KEY, bool) or False


def save_show_hidden(show_hidden: bool) -> None:
    _put(SHOW_HIDDEN_KEY, bool(show_hidden))


def load_theme_name() -> str | None:
    return _get_name(THEME_KEY)


def save_theme_name(theme_name: str) -> None:
    _put_name(THEME_KEY, theme_name)


def load_syntax_style() -> str | None:
    return _get_name(SYNTAX_STYLE_KEY)


def save_syntax_style(style: str) -> None:
    _put_name(SYNTAX_STYLE_KEY, style)
