"""Preview-pane text for the entry selected in the current view.

Directories are listed lazily, only when their preview is drawn. Listings are
cached per directory mtime so moving the cursor back and forth stays cheap.
"""

from __future__ import annotations

from collections import OrderedDict
from pathlib import Path

from .errors import DirectoryLoadFailed
from .fs import KIND_FILE, DirectoryReader, Entry
from .highlight import DEFAULT_STYLE, colorize_source, read_text, sanitize_terminal_text

BINARY_SNIFF_BYTES = 4_096
PREVIEW_MAX_BYTES = 64_000
COLORIZE_MAX_FILE_BYTES = 256_000
DIR_PREVIEW_CACHE_MAX = 128
_DIR_PREVIEW_CACHE: OrderedDict[tuple[str, bool, int], tuple[str, ...]] = OrderedDict()


def _cache_key_for_directory(path: Path, show_hidden: bool) -> tuple[str, bool, int] | None:
    try:
        mtime_ns = path.stat().st_mtime_ns
    except OSError:
        return None
    return (str(path), show_hidden, int(mtime_ns))


def clear_directory_preview_cache() -> None:
    _DIR_PREVIEW_CACHE.clear()


def directory_preview_labels(path: Path, reader: DirectoryReader) -> tuple[str, ...]:
    """Child labels of ``path``; raises ``DirectoryLoadFailed``."""
    cache_key = _cache_key_for_directory(path, reader.show_hidden)
    if cache_key is not None:
        cached = _DIR_PREVIEW_CACHE.get(cache_key)
        if cached is not None:
            _DIR_PREVIEW_CACHE.move_to_end(cache_key)
            return cached

    labels = tuple(entry.label() for entry in reader.list(path))
    if cache_key is not None:
        _DIR_PREVIEW_CACHE[cache_key] = labels
        _DIR_PREVIEW_CACHE.move_to_end(cache_key)
        while len(_DIR_PREVIEW_CACHE) > DIR_PREVIEW_CACHE_MAX:
            _DIR_PREVIEW_CACHE.popitem(last=False)
    return labels


def _directory_preview(path: Path, reader: DirectoryReader, max_lines: int) -> str:
    try:
        labels = directory_preview_labels(path, reader)
    except DirectoryLoadFailed as exc:
        return f"<error: {exc}>"
    if not labels:
        return "<empty directory>"
    if len(labels) > max_lines:
        hidden = len(labels) - max_lines + 1
        return "\n".join(labels[: max_lines - 1] + (f"... {hidden} more",))
    return "\n".join(labels)


def _file_preview(path: Path, max_lines: int, style: str, no_color: bool) -> str:
    try:
        file_size = path.stat().st_size
        with path.open("rb") as handle:
            sample = handle.read(BINARY_SNIFF_BYTES)
    except OSError as exc:
        return f"<error reading file: {exc}>"
    if b"\x00" in sample:
        return f"<binary file: {file_size} bytes>"

    try:
        source = read_text(path, max_bytes=PREVIEW_MAX_BYTES)
    except OSError as exc:
        return f"<error reading file: {exc}>"
    head = "".join(source.splitlines(keepends=True)[:max_lines])
    head = sanitize_terminal_text(head)
    if no_color or file_size > COLORIZE_MAX_FILE_BYTES or not head.strip():
        return head.rstrip("\n")
    return colorize_source(head, path, style).rstrip("\n")


def build_preview(
    entry: Entry | None,
    reader: DirectoryReader,
    max_lines: int,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> str:
    """Text for the preview pane, at most ``max_lines`` lines long."""
    if entry is None:
        return ""
    max_lines = max(1, max_lines)
    if entry.is_dir:
        return _directory_preview(entry.path, reader, max_lines)
    if entry.kind == KIND_FILE:
        return _file_preview(entry.path, max_lines, style, no_color)
    return "<special file>"


__all__ = [
    "build_preview",
    "directory_preview_labels",
    "clear_directory_preview_cache",
]
