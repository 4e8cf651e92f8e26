from __future__ import annotations

from .state import EditorState


def insert_char(state: EditorState, c: str) -> None:
    doc = state.doc
    if state.cy == doc.numrows:
        doc.insert_row(doc.numrows, "")
    doc.row_insert_char(doc.rows[state.cy], state.cx, c)
    state.cx += 1


def insert_newline(state: EditorState) -> None:
    doc = state.doc
    row = state.current_row()
    if state.cx == 0 or row is None:
        doc.insert_row(state.cy, "")
    else:
        doc.insert_row(state.cy + 1, row.chars[state.cx :])
        doc.row_truncate(row, state.cx)
    state.cy += 1
    state.cx = 0


def del_char(state: EditorState) -> None:
    doc = state.doc
    row = state.current_row()
    if row is None:
        return
    if state.cx == 0 and state.cy == 0:
        return

    if state.cx > 0:
        doc.row_del_char(row, state.cx - 1)
        state.cx -= 1
    else:
        prev = doc.rows[state.cy - 1]
        state.cx = prev.size
        doc.row_append_string(prev, row.chars)
        doc.del_row(state.cy)
        state.cy -= 1
