from __future__ import annotations

import errno
import fcntl
import logging
import os
import re
import struct
import termios
from contextlib import AbstractContextManager
from typing import Callable

from .constants import (
    ANSI_CLEAR_SCREEN,
    ANSI_CURSOR_HOME,
    CSI_SIMPLE_MAP,
    CSI_TILDE_MAP,
    ESC,
    KEY_WAKE,
    SS3_SIMPLE_MAP,
)

logger = logging.getLogger(__name__)


def _read_byte_once(fd: int) -> int | None:
    """Read one byte, or None if the read timed out."""
    try:
        data = os.read(fd, 1)
    except (InterruptedError, BlockingIOError):
        return None
    if not data:
        return None
    return data[0]


def _read_byte_blocking(fd: int, wake: Callable[[], bool] | None = None) -> int | None:
    """Wait for a byte; give up with None once ``wake`` reports true."""
    while True:
        c = _read_byte_once(fd)
        if c is not None:
            return c
        if wake is not None and wake():
            return None


def read_key(fd: int, wake: Callable[[], bool] | None = None) -> int:
    """Decode the next key press from ``fd``.

    Plain bytes come back as their value (127 is BACKSPACE). Escape
    sequences map to the key codes in ``constants``; anything incomplete
    or unknown decodes to ESC. While idle, ``wake`` is polled after each
    read timeout and KEY_WAKE is returned as soon as it is true.
    """
    c = _read_byte_blocking(fd, wake)
    if c is None:
        return KEY_WAKE
    if c != ESC:
        return c

    seq0 = _read_byte_once(fd)
    if seq0 is None:
        return ESC
    seq1 = _read_byte_once(fd)
    if seq1 is None:
        return ESC

    if seq0 == ord("["):
        if ord("0") <= seq1 <= ord("9"):
            seq2 = _read_byte_once(fd)
            if seq2 is None or seq2 != ord("~"):
                return ESC
            return CSI_TILDE_MAP.get(seq1, ESC)
        return CSI_SIMPLE_MAP.get(seq1, ESC)
    if seq0 == ord("O"):
        return SS3_SIMPLE_MAP.get(seq1, ESC)
    return ESC


CURSOR_REPORT = re.compile(rb"\x1b\[(\d+);(\d+)R")


def get_cursor_position(ifd: int, ofd: int) -> tuple[int, int]:
    """Ask the terminal where the cursor is; returns 1-based (row, col)."""
    os.write(ofd, b"\x1b[6n")

    reply = bytearray()
    while len(reply) < 31 and not reply.endswith(b"R"):
        c = _read_byte_once(ifd)
        if c is None:
            break
        reply.append(c)

    match = CURSOR_REPORT.fullmatch(bytes(reply))
    if match is None:
        raise OSError(errno.EIO, "invalid cursor position response")
    return int(match.group(1)), int(match.group(2))


def get_window_size(ifd: int, ofd: int) -> tuple[int, int]:
    try:
        packed = fcntl.ioctl(ofd, termios.TIOCGWINSZ, struct.pack("HHHH", 0, 0, 0, 0))
        rows, cols, _, _ = struct.unpack("HHHH", packed)
        if cols:
            return rows, cols
    except OSError:
        logger.debug("TIOCGWINSZ failed, falling back to cursor query")

    os.write(ofd, b"\x1b[999C\x1b[999B")
    return get_cursor_position(ifd, ofd)


def clear_screen(fd: int) -> None:
    os.write(fd, (ANSI_CLEAR_SCREEN + ANSI_CURSOR_HOME).encode())


def _raw_attributes(attrs: list) -> list:
    iflag, oflag, cflag, lflag, ispeed, ospeed, cc = attrs
    cc = list(cc)
    cc[termios.VMIN] = 0
    cc[termios.VTIME] = 1
    return [
        iflag & ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON),
        oflag & ~termios.OPOST,
        cflag | termios.CS8,
        lflag & ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG),
        ispeed,
        ospeed,
        cc,
    ]


class RawMode(AbstractContextManager["RawMode"]):
    """Put a tty into raw mode for the duration of a ``with`` block.

    Reads on the fd return after at most a tenth of a second, with or
    without data. termios failures surface as OSError so callers handle
    them with every other fatal terminal error.
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._orig: list | None = None

    def __enter__(self) -> "RawMode":
        if not os.isatty(self.fd):
            raise OSError(errno.ENOTTY, "stdin is not a tty")
        try:
            orig = termios.tcgetattr(self.fd)
        except termios.error as exc:
            raise OSError(exc.args[0], "Unable to get terminal attributes") from exc
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, _raw_attributes(orig))
        except termios.error as exc:
            raise OSError(exc.args[0], "Unable to enter raw mode") from exc
        self._orig = orig
        logger.debug("raw mode on fd %d", self.fd)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        orig, self._orig = self._orig, None
        if orig is None:
            return
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, orig)
        except termios.error as err:
            raise OSError(err.args[0], "Unable to restore terminal attributes") from err
