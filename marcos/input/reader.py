"""Decoding raw terminal bytes into key tokens.

Bytes come from the tty file descriptor one at a time via select and read.
Handles ESC-sequence timing and the handful of control keys marcos binds.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
# An LF this close behind a CR belongs to the same Enter press.
CRLF_PAIR_TIMEOUT_MS = 5
_PENDING_BYTES: list[bytes] = []

_CONTROL_TOKENS = {
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x12": "CTRL_R",
    b"\x15": "CTRL_U",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}

_CSI_FINAL_TOKENS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
    b"Z": "SHIFT_TAB",
}


_TILDE_TOKENS = {b"3": "DELETE", b"5": "PAGE_UP", b"6": "PAGE_DOWN"}
_MAX_TILDE_PARAM = 8


def _next_byte(fd: int, timeout_ms: int | None) -> bytes | None:
    """One byte from ``fd``; ``None`` on EOF or when ``timeout_ms`` elapses."""
    if timeout_ms is not None:
        ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
    return os.read(fd, 1) or None


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_char(fd: int, lead: bytes) -> str:
    raw = lead
    while len(raw) < _utf8_length(lead[0]):
        more = _next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if more is None:
            break
        raw += more
    return raw.decode("utf-8", errors="replace")


def _decode_csi(fd: int) -> str:
    """Decode what follows ``ESC [`` or ``ESC O``."""
    final = _next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if final is None:
        return "ESC"
    token = _CSI_FINAL_TOKENS.get(final)
    if token is not None or not final.isdigit():
        return token or "ESC"
    param = final
    while len(param) <= _MAX_TILDE_PARAM:
        more = _next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if more is None:
            return "ESC"
        if more == b"~":
            return _TILDE_TOKENS.get(param, "ESC")
        param += more
    return "ESC"


def _drop_paired_lf(fd: int) -> None:
    if _PENDING_BYTES:
        if _PENDING_BYTES[0] == b"\n":
            _PENDING_BYTES.pop(0)
        return
    follower = _next_byte(fd, CRLF_PAIR_TIMEOUT_MS)
    if follower is not None and follower != b"\n":
        _PENDING_BYTES.append(follower)


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Block for one key token; returns ``""`` on timeout or EOF."""
    lead = _PENDING_BYTES.pop(0) if _PENDING_BYTES else _next_byte(fd, timeout_ms)
    if lead is None:
        return ""
    if lead == b"\r":
        _drop_paired_lf(fd)
    token = _CONTROL_TOKENS.get(lead)
    if token is not None:
        return token
    if lead != b"\x1b":
        return _decode_char(fd, lead)

    follower = _next_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if follower is None:
        return "ESC"
    if follower not in (b"[", b"O"):
        # A lone ESC followed by an ordinary key: keep the key for next call.
        _PENDING_BYTES.append(follower)
        return "ESC"
    return _decode_csi(fd)
