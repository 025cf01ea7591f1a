"""Source loading, sanitization, and syntax highlighting for file previews.

Pygments is imported on first use so startup and directory browsing stay
fast. Control bytes are neutralized before anything reaches the terminal.
"""

from __future__ import annotations

import codecs
import logging
import re
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_INLINE_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def read_text(path: Path, max_bytes: int | None = None) -> str:
    """Decode a file head as UTF-8, or latin-1 when that fails.

    A UTF-8 byte-order mark is skipped. ``max_bytes`` bounds
    how much of the file is read; a multi-byte character cut at that boundary
    is dropped rather than forcing the latin-1 fallback.
    """
    with path.open("rb") as handle:
        raw = handle.read() if max_bytes is None else handle.read(max_bytes)
    truncated = max_bytes is not None and len(raw) >= max_bytes
    try:
        return codecs.getincrementaldecoder("utf-8-sig")().decode(raw, final=not truncated)
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def _escape_control(match: re.Match[str]) -> str:
    return f"\\x{ord(match.group(0)):02x}"


def sanitize_terminal_text(source: str) -> str:
    """Show control characters as ``\\xNN`` so they cannot drive the terminal.

    Newlines, carriage returns and tabs pass through untouched.
    """
    return _CONTROL_RE.sub(_escape_control, source)


def sanitize_inline_text(text: str) -> str:
    """Escape every control character, line breaks and tabs included.

    For text that must stay on one terminal row, such as file names.
    """
    return _INLINE_CONTROL_RE.sub(_escape_control, text)


@lru_cache(maxsize=None)
def normalize_style(style: str) -> str:
    """Return ``style`` when Pygments knows it, otherwise the default style."""
    from pygments.styles import get_style_by_name
    from pygments.util import ClassNotFound

    try:
        get_style_by_name(style)
    except ClassNotFound:
        logger.warning("unknown syntax style %r, using %s", style, DEFAULT_STYLE)
        return DEFAULT_STYLE
    return style


@lru_cache(maxsize=None)
def _formatter_for_style(style: str):
    """Return cached Pygments 256-color terminal formatter for style name."""
    from pygments.formatters import Terminal256Formatter

    return Terminal256Formatter(style=normalize_style(style))


def colorize_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Highlight ``source`` with the lexer matching ``path``'s file name.

    Falls back to the plain-text lexer when no lexer claims the file.
    """
    from pygments import highlight
    from pygments.lexers import TextLexer, get_lexer_for_filename
    from pygments.util import ClassNotFound

    try:
        lexer = get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(source, lexer, _formatter_for_style(style))


__all__ = [
    "DEFAULT_STYLE",
    "read_text",
    "sanitize_terminal_text",
    "sanitize_inline_text",
    "normalize_style",
    "colorize_source",
]
