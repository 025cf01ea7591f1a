"""Terminal control helpers for the browsing session.

Owns raw-mode lifecycle and alternate-screen switching. Restoring is
idempotent so shutdown paths can call it unconditionally.
"""

from __future__ import annotations

import os
import termios
import tty


class TerminalController:
    """Manage terminal mode transitions for one session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        if self._active:
            return
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")
        self._active = True

    def disable_tui_mode(self) -> None:
        """Restore the saved tty attributes and the main screen buffer."""
        if not self._active:
            return
        # Show cursor and restore the main screen buffer.
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        self._active = False
