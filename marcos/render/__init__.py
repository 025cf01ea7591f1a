"""Rendering engine for the three-pane Miller-column view.

Turns a ``RenderPayload`` into fully composed ANSI frames. Layout is computed
from the terminal size on every frame; nothing here mutates session state.
File names, titles and status text are escaped here before they reach the
terminal; preview bodies arrive already sanitized.
"""

from __future__ import annotations

import os
import shutil
import sys

from ..ansi import fit_ansi_line
from ..fs import KIND_DIRECTORY, KIND_FILE
from ..highlight import sanitize_inline_text
from ..ui_theme import DEFAULT_THEME, UITheme
from .widgets import (
    CommandBox,
    ContainerWidget,
    ListWidget,
    RenderPayload,
    TextWidget,
    Widget,
)

PARENT_MAX_WIDTH = 30
CURRENT_MAX_WIDTH = 40
DIVIDER = "│"


def pane_widths(width: int, count: int = 3) -> list[int]:
    """Split ``width`` columns into ``count`` panes plus dividers.

    The parent and current panes are capped so the preview gets whatever is
    left, mirroring the classic Miller-column proportions.
    """
    usable = max(count, width - (count - 1))
    if count != 3:
        base = usable // count
        widths = [base] * count
        widths[-1] += usable - base * count
        return widths
    parent = max(1, min(PARENT_MAX_WIDTH, usable // 5))
    current = max(1, min(CURRENT_MAX_WIDTH, usable // 3))
    preview = max(1, usable - parent - current)
    return [parent, current, preview]


def list_window_start(highlighted: int | None, count: int, rows: int) -> int:
    """First visible row that keeps ``highlighted`` roughly centered."""
    if highlighted is None or count <= rows:
        return 0
    return max(0, min(highlighted - rows // 2, count - rows))


def selected_with_ansi(text: str, theme: UITheme) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text or not theme.reverse:
        return text

    # Keep reverse video active even when the text contains internal resets.
    return theme.reverse + text.replace("\033[0m", f"\033[0m{theme.reverse}") + theme.reset


def _entry_color(kind: str, theme: UITheme) -> str:
    if kind == KIND_DIRECTORY:
        return theme.entry_dir
    if kind == KIND_FILE:
        return theme.entry_file
    return theme.entry_other


def _title_row(title: str, width: int, theme: UITheme) -> str:
    if not title:
        return " " * width
    title = sanitize_inline_text(title)
    if theme.pane_title:
        title = f"{theme.pane_title}{title}{theme.reset}"
    return fit_ansi_line(title, width)


def _list_rows(widget: ListWidget, width: int, rows: int, theme: UITheme) -> list[str]:
    out = [_title_row(widget.title, width, theme)]
    body_rows = max(0, rows - 1)
    if not widget.labels:
        note = sanitize_inline_text(widget.message)
        if note and theme.preview_note:
            note = f"{theme.preview_note}{note}{theme.reset}"
        out.append(fit_ansi_line(note, width) if note else " " * width)
        out.extend(" " * width for _ in range(body_rows - 1))
        return out[:rows]

    start = list_window_start(widget.highlighted, len(widget.labels), body_rows)
    for row in range(body_rows):
        idx = start + row
        if idx >= len(widget.labels):
            out.append(" " * width)
            continue
        kind = widget.kinds[idx] if idx < len(widget.kinds) else ""
        color = _entry_color(kind, theme)
        label = f" {sanitize_inline_text(widget.labels[idx])}"
        if color:
            label = f"{color}{label}{theme.reset}"
        text = fit_ansi_line(label, width)
        if idx == widget.highlighted:
            text = selected_with_ansi(text, theme)
        out.append(text)
    return out


def _text_rows(widget: TextWidget, width: int, rows: int, theme: UITheme) -> list[str]:
    out = [_title_row(widget.title, width, theme)]
    lines = widget.text.split("\n") if widget.text else []
    for row in range(max(0, rows - 1)):
        if row < len(lines):
            out.append(fit_ansi_line(lines[row].rstrip("\r"), width))
        else:
            out.append(" " * width)
    return out


def widget_rows(widget: Widget, width: int, rows: int, theme: UITheme) -> list[str]:
    """Render ``widget`` into exactly ``rows`` strings of ``width`` columns."""
    if isinstance(widget, ListWidget):
        return _list_rows(widget, width, rows, theme)
    if isinstance(widget, TextWidget):
        return _text_rows(widget, width, rows, theme)
    if isinstance(widget, ContainerWidget):
        return _container_rows(widget, width, rows, theme)
    raise TypeError(f"cannot render {type(widget).__name__}")


def _container_rows(widget: ContainerWidget, width: int, rows: int, theme: UITheme) -> list[str]:
    if not widget.children:
        return [" " * width for _ in range(rows)]
    widths = pane_widths(width, len(widget.children))
    columns = [
        widget_rows(child, child_width, rows, theme)
        for child, child_width in zip(widget.children, widths)
    ]
    divider = f"{theme.divider}{DIVIDER}{theme.reset}" if theme.divider else DIVIDER
    return [divider.join(column[row] for column in columns) for row in range(rows)]


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def _tab_bar(tabs: tuple[tuple[str, bool], ...], width: int, theme: UITheme) -> str:
    parts: list[str] = []
    for tab_id, focused in tabs:
        label = f" {sanitize_inline_text(tab_id)} "
        style = theme.tab_active if focused else theme.tab_inactive
        parts.append(f"{style}{label}{theme.reset}" if style else (f"[{tab_id}]" if focused else label))
    return fit_ansi_line("".join(parts), width)


def _command_row(box: CommandBox, width: int, theme: UITheme) -> str:
    prompt = f"{theme.command_prompt}:{theme.reset}" if theme.command_prompt else ":"
    return fit_ansi_line(f"{prompt}{sanitize_inline_text(box.content)}_", width)


def frame_lines(payload: RenderPayload, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> list[str]:
    """Compose the frame as one string per terminal row."""
    width = max(1, width)
    height = max(3, height)
    command_rows = 1 if payload.command_box.visible else 0
    pane_rows = max(1, height - 2 - command_rows)

    lines = [_tab_bar(payload.tabs, width, theme)]
    lines.extend(widget_rows(payload.panes(), width, pane_rows, theme))

    status = build_status_line(sanitize_inline_text(payload.status), width, right_text="q quit  : command")
    style = theme.status_error if payload.status_is_error else theme.status
    lines.append(f"{style}{status}{theme.reset}" if style else status)
    if command_rows:
        lines.append(_command_row(payload.command_box, width, theme))
    return lines


def render_frame(payload: RenderPayload, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> str:
    """Full-screen ANSI frame: home cursor, clear, then every row."""
    return "\033[H\033[J" + "\r\n".join(frame_lines(payload, width, height, theme))


def draw_payload(payload: RenderPayload, theme: UITheme = DEFAULT_THEME) -> None:
    """Write one frame for the current terminal size to stdout."""
    term = shutil.get_terminal_size((80, 24))
    frame = render_frame(payload, term.columns, term.lines, theme)
    os.write(sys.stdout.fileno(), frame.encode("utf-8", errors="replace"))


__all__ = [
    "CommandBox",
    "ContainerWidget",
    "ListWidget",
    "RenderPayload",
    "TextWidget",
    "Widget",
    "build_status_line",
    "draw_payload",
    "frame_lines",
    "list_window_start",
    "pane_widths",
    "render_frame",
    "widget_rows",
]
