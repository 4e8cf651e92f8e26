from __future__ import annotations

from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    PAGE_UP,
)
from .rows import cx_to_rx
from .state import EditorState


def row_len(state: EditorState) -> int:
    row = state.current_row()
    return row.size if row is not None else 0


def move_cursor(state: EditorState, key: int) -> None:
    row = state.current_row()

    if key == ARROW_LEFT:
        if state.cx != 0:
            state.cx -= 1
        elif state.cy > 0:
            state.cy -= 1
            state.cx = state.doc.rows[state.cy].size
    elif key == ARROW_RIGHT:
        if row is not None and state.cx < row.size:
            state.cx += 1
        elif row is not None and state.cx == row.size:
            state.cy += 1
            state.cx = 0
    elif key == ARROW_UP:
        if state.cy != 0:
            state.cy -= 1
    elif key == ARROW_DOWN:
        if state.cy < state.numrows:
            state.cy += 1

    state.cx = min(state.cx, row_len(state))


def move_home(state: EditorState) -> None:
    state.cx = 0


def move_end(state: EditorState) -> None:
    row = state.current_row()
    if row is not None:
        state.cx = row.size


def page_move(state: EditorState, key: int) -> None:
    if key == PAGE_UP:
        state.cy = state.rowoff
    else:
        state.cy = min(state.rowoff + state.screenrows - 1, state.numrows)

    direction = ARROW_UP if key == PAGE_UP else ARROW_DOWN
    for _ in range(state.screenrows):
        move_cursor(state, direction)


def scroll(state: EditorState) -> None:
    row = state.current_row()
    state.rx = cx_to_rx(row, state.cx) if row is not None else 0

    if state.cy < state.rowoff:
        state.rowoff = state.cy
    if state.cy >= state.rowoff + state.screenrows:
        state.rowoff = state.cy - state.screenrows + 1
    if state.rx < state.coloff:
        state.coloff = state.rx
    if state.rx >= state.coloff + state.screencols:
        state.coloff = state.rx - state.screencols + 1
