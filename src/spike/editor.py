from __future__ import annotations

import argparse
import errno
import logging
import os
import signal
import sys
import time
from typing import Callable

from . import __version__
from .actions import del_char, insert_char, insert_newline
from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    CTRL_F,
    CTRL_H,
    CTRL_L,
    CTRL_Q,
    CTRL_S,
    DEL_KEY,
    END_KEY,
    ENTER,
    ESC,
    HOME_KEY,
    KEY_WAKE,
    PAGE_DOWN,
    PAGE_UP,
    SPIKE_QUERY_LEN,
    SPIKE_QUIT_TIMES,
)
from .fileio import load_lines, write_file
from .search import find
from .state import EditorState
from .terminal import RawMode, clear_screen, get_window_size, read_key
from .ui import refresh_screen
from .viewport import move_cursor, move_end, move_home, page_move, scroll

logger = logging.getLogger(__name__)

PromptCallback = Callable[[str, int], None]


class QuitEditor(Exception):
    pass


class Editor:
    """Owns the editing session and the main loop.

    The terminal fds are injected so the loop can be driven from pipes;
    ``screen_size`` skips the terminal query when given.
    """

    def __init__(
        self,
        stdin_fd: int,
        stdout_fd: int,
        screen_size: tuple[int, int] | None = None,
    ) -> None:
        self.state = EditorState()
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.quit_times = SPIKE_QUIT_TIMES
        self.resized = False
        self.update_window_size(screen_size)

    def update_window_size(self, screen_size: tuple[int, int] | None = None) -> None:
        if screen_size is None:
            try:
                screen_size = get_window_size(self.stdin_fd, self.stdout_fd)
            except OSError as exc:
                raise OSError(exc.errno, "Unable to query screen size") from exc
        rows, cols = screen_size
        self.state.screenrows = max(1, rows - 2)
        self.state.screencols = max(1, cols)
        logger.debug("screen size %dx%d", rows, cols)

    def handle_sigwinch(self, _signum: int, _frame) -> None:
        self.resized = True

    def set_status_message(self, fmt: str, *args: object) -> None:
        self.state.status.text = fmt % args if args else fmt
        self.state.status.time = time.time()

    def open_file(self, filename: str) -> None:
        try:
            lines = load_lines(filename)
        except OSError as exc:
            raise OSError(exc.errno, f"Opening file failed: {filename}") from exc
        self.state.doc.load(lines, filename)

    def save(self) -> bool:
        doc = self.state.doc
        filename = doc.filename
        if not filename:
            filename = self.prompt("Save as: %s (ESC to cancel)")
            if filename is None:
                self.set_status_message("Save aborted")
                return False

        data = doc.rows_to_bytes()
        try:
            written = write_file(filename, data)
        except OSError as exc:
            reason = os.strerror(exc.errno) if exc.errno else str(exc)
            logger.warning("save to %s failed: %s", filename, reason)
            self.set_status_message("Can't save! I/O error: %s", reason)
            return False

        doc.filename = filename
        doc.dirty = 0
        logger.info("wrote %d bytes to %s", written, filename)
        self.set_status_message("%d bytes written to disk", written)
        return True

    def refresh_screen(self) -> None:
        if self.resized:
            self.resized = False
            self.update_window_size()
        scroll(self.state)
        refresh_screen(self.state, self.stdout_fd)

    def read_key(self) -> int:
        return read_key(self.stdin_fd, lambda: self.resized)

    def prompt(self, template: str, callback: PromptCallback | None = None) -> str | None:
        """Read a line in the message bar.

        Returns the entered text on Enter, or None on Escape. ``callback``
        sees the buffer and the key after every key press.
        """
        buf = ""
        while True:
            self.set_status_message(template, buf)
            self.refresh_screen()

            c = self.read_key()
            if c == KEY_WAKE:
                continue
            if c in (DEL_KEY, CTRL_H, BACKSPACE):
                buf = buf[:-1]
            elif c == ESC:
                self.set_status_message("")
                if callback is not None:
                    callback(buf, c)
                return None
            elif c == ENTER:
                if buf:
                    self.set_status_message("")
                    if callback is not None:
                        callback(buf, c)
                    return buf
            elif 32 <= c < 127 and len(buf) < SPIKE_QUERY_LEN:
                buf += chr(c)

            if callback is not None:
                callback(buf, c)

    def confirm_quit(self) -> bool:
        if self.state.doc.dirty and self.quit_times > 0:
            self.set_status_message(
                "WARNING!!! File has unsaved changes. Press Ctrl-Q %d more times to quit.",
                self.quit_times,
            )
            self.quit_times -= 1
            return False
        return True

    def process_keypress(self) -> None:
        c = self.read_key()
        if c == KEY_WAKE:
            return
        state = self.state

        if c == CTRL_Q:
            if self.confirm_quit():
                raise QuitEditor
            return

        if c == ENTER:
            insert_newline(state)
        elif c == CTRL_S:
            self.save()
        elif c == CTRL_F:
            find(self)
        elif c in (BACKSPACE, CTRL_H, DEL_KEY):
            if c == DEL_KEY:
                move_cursor(state, ARROW_RIGHT)
            del_char(state)
        elif c == HOME_KEY:
            move_home(state)
        elif c == END_KEY:
            move_end(state)
        elif c in (PAGE_UP, PAGE_DOWN):
            page_move(state, c)
        elif c in (ARROW_UP, ARROW_DOWN, ARROW_LEFT, ARROW_RIGHT):
            move_cursor(state, c)
        elif c in (CTRL_L, ESC):
            pass
        elif c < 256:
            insert_char(state, chr(c))

        self.quit_times = SPIKE_QUIT_TIMES


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="spike", description="A small terminal text editor.")
    parser.add_argument("filename", nargs="?", help="file to edit")
    parser.add_argument("--log-file", metavar="PATH", help="write debug logging to PATH")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def run(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    try:
        with RawMode(stdin_fd):
            editor = Editor(stdin_fd, stdout_fd)
            if args.filename:
                editor.open_file(args.filename)
            signal.signal(signal.SIGWINCH, editor.handle_sigwinch)
            editor.set_status_message("HELP: Ctrl-S = save | Ctrl-Q = quit | Ctrl-F = find")
            while True:
                editor.refresh_screen()
                editor.process_keypress()
    except QuitEditor:
        clear_screen(stdout_fd)
        return 0
    except OSError as exc:
        logger.exception("fatal error")
        if exc.errno != errno.ENOTTY:
            clear_screen(stdout_fd)
        message = exc.strerror or str(exc)
        if exc.errno and message != os.strerror(exc.errno):
            message = f"{message}: {os.strerror(exc.errno)}"
        print(f"spike: {message}", file=sys.stderr)
        return 1
