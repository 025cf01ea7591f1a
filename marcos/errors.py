"""Exception types raised by the navigation core.

Everything derives from ``MarcosError`` so the session loop can recover from
any navigation failure with a single handler.
"""

from __future__ import annotations

from pathlib import Path

LOAD_NOT_FOUND = "not_found"
LOAD_PERMISSION_DENIED = "permission_denied"
LOAD_NOT_A_DIRECTORY = "not_a_directory"
LOAD_OTHER = "other"

_REASON_LABELS = {
    LOAD_NOT_FOUND: "no such directory",
    LOAD_PERMISSION_DENIED: "permission denied",
    LOAD_NOT_A_DIRECTORY: "not a directory",
    LOAD_OTHER: "cannot read directory",
}


class MarcosError(Exception):
    """Base class for recoverable and fatal marcos errors."""


class InvalidStartPath(MarcosError):
    """Startup path does not name an accessible directory."""

    def __init__(self, raw: str, resolved: Path | None = None) -> None:
        self.raw = raw
        self.resolved = resolved
        super().__init__(f"Incorrect path or inaccessible directory: {raw}")


class DirectoryLoadFailed(MarcosError):
    """A directory listing could not be read."""

    def __init__(self, path: Path, reason: str, cause: BaseException | None = None) -> None:
        self.path = path
        self.reason = reason
        self.cause = cause
        super().__init__(f"{path}: {_REASON_LABELS.get(reason, reason)}")

    @classmethod
    def from_os_error(cls, path: Path, exc: OSError) -> DirectoryLoadFailed:
        """Classify an ``OSError`` raised while listing ``path``."""
        if isinstance(exc, FileNotFoundError):
            reason = LOAD_NOT_FOUND
        elif isinstance(exc, PermissionError):
            reason = LOAD_PERMISSION_DENIED
        elif isinstance(exc, NotADirectoryError):
            reason = LOAD_NOT_A_DIRECTORY
        else:
            reason = LOAD_OTHER
        return cls(path, reason, exc)


class DuplicateTabId(MarcosError):
    def __init__(self, tab_id: str) -> None:
        self.tab_id = tab_id
        super().__init__(f"tab {tab_id!r} already exists")


class TabNotFound(MarcosError):
    def __init__(self, tab_id: str) -> None:
        self.tab_id = tab_id
        super().__init__(f"no tab named {tab_id!r}")


class LastTabError(MarcosError):
    """Removing the tab would leave the registry empty."""

    def __init__(self, tab_id: str) -> None:
        self.tab_id = tab_id
        super().__init__(f"tab {tab_id!r} is the last open tab")


__all__ = [
    "LOAD_NOT_FOUND",
    "LOAD_PERMISSION_DENIED",
    "LOAD_NOT_A_DIRECTORY",
    "LOAD_OTHER",
    "MarcosError",
    "InvalidStartPath",
    "DirectoryLoadFailed",
    "DuplicateTabId",
    "TabNotFound",
    "LastTabError",
]
