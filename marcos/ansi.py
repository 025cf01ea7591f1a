"""Measuring and fitting styled text to fixed-width pane columns.

Escape sequences occupy no cells, tabs advance to the next 8-column stop, and
East Asian wide characters take two cells.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
RESET = "\033[0m"


def char_display_width(ch: str, col: int) -> int:
    """Cells taken by ``ch`` when drawn at visual column ``col``."""
    if ch == "\t":
        return TAB_STOP - col % TAB_STOP
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def _segments(text: str) -> Iterator[tuple[bool, str]]:
    """Yield ``(is_escape, chunk)``; plain chunks are single characters."""
    pos = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        yield from ((False, ch) for ch in text[pos : match.start()])
        yield True, match.group(0)
        pos = match.end()
    yield from ((False, ch) for ch in text[pos:])


def display_width(text: str) -> int:
    col = 0
    for is_escape, chunk in _segments(text):
        if not is_escape:
            col += char_display_width(chunk, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Cut ``text`` after ``max_cols`` cells.

    Escapes up to the cut are kept; tabs become spaces. A wide character that
    would straddle the edge is dropped.
    """
    pieces: list[str] = []
    col = 0
    for is_escape, chunk in _segments(text):
        if is_escape:
            pieces.append(chunk)
            continue
        cells = char_display_width(chunk, col)
        if col + cells > max_cols:
            break
        pieces.append(" " * cells if chunk == "\t" else chunk)
        col += cells
    return "".join(pieces)


def fit_ansi_line(text: str, width: int) -> str:
    """Clip or right-pad ``text`` to exactly ``width`` cells.

    Styled text is terminated with a reset so the padding stays unstyled.
    """
    if width <= 0:
        return ""
    clipped = clip_ansi_line(text, width)
    padding = " " * (width - display_width(clipped))
    return f"{clipped}{RESET}{padding}" if "\x1b" in clipped else clipped + padding
