"""Interactive runtime: terminal control and the session event loop."""

from .session import INITIAL_TAB_ID, Session
from .terminal import TerminalController

__all__ = ["INITIAL_TAB_ID", "Session", "TerminalController"]
