"""Filesystem entries and the directory reader backing every view."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .errors import DirectoryLoadFailed

logger = logging.getLogger(__name__)

KIND_DIRECTORY = "directory"
KIND_FILE = "file"
KIND_OTHER = "other"


@dataclass(frozen=True)
class Entry:
    """One filesystem object observed while listing a directory."""

    path: Path
    kind: str

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def is_dir(self) -> bool:
        return self.kind == KIND_DIRECTORY

    def label(self) -> str:
        """Pane label: directories get a trailing slash."""
        if self.kind == KIND_DIRECTORY:
            return f"{self.name}/"
        return self.name


def _classify(child: os.DirEntry) -> str:
    # Symlinks count as whatever they point at; dangling links are "other".
    try:
        if child.is_dir():
            return KIND_DIRECTORY
        if child.is_file():
            return KIND_FILE
    except OSError:
        pass
    return KIND_OTHER


class DirectoryReader:
    """List directory children in display order.

    Directories come first, then everything else, each group sorted by
    case-insensitive name. Dotfiles are skipped unless ``show_hidden`` is set.
    """

    def __init__(self, show_hidden: bool = False) -> None:
        self.show_hidden = show_hidden

    def list(self, directory: Path) -> list[Entry]:
        """Return entries of ``directory`` or raise ``DirectoryLoadFailed``."""
        directory = Path(os.path.abspath(directory))

        entries: list[Entry] = []
        try:
            with os.scandir(directory) as children:
                for child in children:
                    if not self.show_hidden and child.name.startswith("."):
                        continue
                    entries.append(Entry(path=directory / child.name, kind=_classify(child)))
        except OSError as exc:
            logger.debug("listing %s failed: %s", directory, exc)
            raise DirectoryLoadFailed.from_os_error(directory, exc) from exc

        entries.sort(key=lambda entry: (not entry.is_dir, entry.name.lower(), entry.name))
        return entries


__all__ = [
    "KIND_DIRECTORY",
    "KIND_FILE",
    "KIND_OTHER",
    "Entry",
    "DirectoryReader",
]
