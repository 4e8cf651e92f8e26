from __future__ import annotations

import os
import time

from .constants import (
    ANSI_CLEAR_LINE,
    ANSI_CURSOR_HOME,
    ANSI_DEFAULT_FG,
    ANSI_HIDE_CURSOR,
    ANSI_INVERT_ON,
    ANSI_RESET,
    ANSI_SHOW_CURSOR,
    FILLER,
    HL_NORMAL,
    SPIKE_VERSION,
)
from .models import Row
from .rows import syntax_to_color
from .state import EditorState


def draw_welcome(state: EditorState, ab: list[str]) -> None:
    welcome = f"Spike editor -- version {SPIKE_VERSION}"
    if len(welcome) > state.screencols:
        welcome = welcome[: state.screencols]
    padding = (state.screencols - len(welcome)) // 2
    if padding >= len(FILLER):
        ab.append(FILLER)
        padding -= len(FILLER)
    if padding > 0:
        ab.append(" " * padding)
    ab.append(welcome)


def draw_row(state: EditorState, row: Row, ab: list[str]) -> None:
    text = row.render[state.coloff : state.coloff + state.screencols]
    hl = row.hl[state.coloff : state.coloff + state.screencols]
    current_color = -1
    for ch, h in zip(text, hl):
        if ord(ch) < 32 or ord(ch) == 127:
            sym = chr(ord("@") + ord(ch)) if ord(ch) <= 26 else "?"
            ab.append(ANSI_INVERT_ON)
            ab.append(sym)
            ab.append(ANSI_RESET)
            if current_color != -1:
                ab.append(f"\x1b[{current_color}m")
        elif h == HL_NORMAL:
            if current_color != -1:
                ab.append(ANSI_DEFAULT_FG)
                current_color = -1
            ab.append(ch)
        else:
            color = syntax_to_color(h)
            if color != current_color:
                ab.append(f"\x1b[{color}m")
                current_color = color
            ab.append(ch)
    ab.append(ANSI_DEFAULT_FG)


def draw_rows(state: EditorState, ab: list[str]) -> None:
    for y in range(state.screenrows):
        filerow = state.rowoff + y
        if filerow < state.numrows:
            draw_row(state, state.doc.rows[filerow], ab)
        elif state.numrows == 0 and y == state.screenrows // 3:
            draw_welcome(state, ab)
        else:
            ab.append(FILLER)
        ab.append(ANSI_CLEAR_LINE)
        ab.append("\r\n")


def status_right(state: EditorState) -> str:
    if state.numrows:
        percent = min(100, (state.cy + 1) * 100 // state.numrows)
    else:
        percent = 0
    return f"{state.cy + 1}/{state.numrows} {percent}%"


def draw_status_bar(state: EditorState, ab: list[str]) -> None:
    doc = state.doc
    filename = doc.filename if doc.filename else "[No Name]"
    modified = " (modified)" if doc.dirty else ""
    status = f"{filename:.20} - {doc.numrows} lines{modified}"[: state.screencols]
    rstatus = status_right(state)

    ab.append(ANSI_INVERT_ON)
    ab.append(status)
    fill = len(status)
    while fill < state.screencols:
        if state.screencols - fill == len(rstatus):
            ab.append(rstatus)
            break
        ab.append(" ")
        fill += 1
    ab.append(ANSI_RESET)
    ab.append("\r\n")


def draw_message_bar(state: EditorState, ab: list[str], now: float) -> None:
    ab.append(ANSI_CLEAR_LINE)
    if state.status.visible(now):
        ab.append(state.status.text[: state.screencols])


def build_frame(state: EditorState, now: float | None = None) -> bytes:
    """Compose one full screen update.

    Expects ``viewport.scroll`` to have run for this frame.
    """
    if now is None:
        now = time.time()
    ab: list[str] = [ANSI_HIDE_CURSOR, ANSI_CURSOR_HOME]
    draw_rows(state, ab)
    draw_status_bar(state, ab)
    draw_message_bar(state, ab, now)
    ab.append(f"\x1b[{state.cy - state.rowoff + 1};{state.rx - state.coloff + 1}H")
    ab.append(ANSI_SHOW_CURSOR)
    return "".join(ab).encode("latin-1", errors="replace")


def refresh_screen(state: EditorState, fd: int) -> None:
    os.write(fd, build_frame(state))
