"""Color palettes for the pane chrome.

A theme only styles marcos itself: panes, tab bar, status and command line.
File previews are colored by the separate Pygments style setting.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    pane_title: str
    entry_dir: str
    entry_file: str
    entry_other: str
    tab_active: str
    tab_inactive: str
    status: str
    status_error: str
    command_prompt: str
    preview_note: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    pane_title="\033[1;38;5;81m",
    entry_dir="\033[1;34m",
    entry_file="\033[38;5;252m",
    entry_other="\033[38;5;214m",
    tab_active="\033[1;7;38;5;81m",
    tab_inactive="\033[2;38;5;250m",
    status="\033[7m",
    status_error="\033[1;37;41m",
    command_prompt="\033[1;38;5;229m",
    preview_note="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    pane_title="\033[1;38;5;45m",
    entry_dir="\033[1;38;5;45m",
    entry_file="\033[38;5;252m",
    entry_other="\033[38;5;215m",
    tab_active="\033[1;7;38;5;39m",
    tab_inactive="\033[2;38;5;110m",
    status="\033[7;38;5;31m",
    status_error="\033[1;38;5;231;48;5;124m",
    command_prompt="\033[1;38;5;153m",
    preview_note="\033[2;38;5;110m",
)

# Reverse video is kept so the selection stays visible without color.
PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="\033[7m",
    reset="\033[0m",
    pane_title="",
    entry_dir="",
    entry_file="",
    entry_other="",
    tab_active="\033[7m",
    tab_inactive="",
    status="\033[7m",
    status_error="\033[7m",
    command_prompt="",
    preview_note="",
)

THEMES: Mapping[str, UITheme] = MappingProxyType({theme.name: theme for theme in (DEFAULT_THEME, OCEAN_THEME)})


def available_theme_names() -> tuple[str, ...]:
    return tuple(sorted(THEMES))


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Pick the palette for ``name``.

    ``no_color`` always wins and yields the plain theme. Unknown names log a
    warning and use the default palette.
    """
    if no_color:
        return PLAIN_THEME
    if not name:
        return DEFAULT_THEME
    key = name.strip().lower()
    theme = THEMES.get(key)
    if theme is None:
        logger.warning("unknown theme %r, using %s", name, DEFAULT_THEME.name)
        return DEFAULT_THEME
    return theme


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "THEMES",
    "available_theme_names",
    "resolve_theme",
]
