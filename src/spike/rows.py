from __future__ import annotations

from .constants import HL_MATCH, HL_NORMAL, HL_NUMBER, SPIKE_TAB_STOP
from .models import Row


def _advance(rx: int, ch: str) -> int:
    if ch == "\t":
        rx += (SPIKE_TAB_STOP - 1) - (rx % SPIKE_TAB_STOP)
    return rx + 1


def update_render(row: Row) -> None:
    out: list[str] = []
    rx = 0
    for ch in row.chars:
        next_rx = _advance(rx, ch)
        out.append(" " * (next_rx - rx) if ch == "\t" else ch)
        rx = next_rx
    row.render = "".join(out)


def update_syntax(row: Row) -> None:
    row.hl = [HL_NUMBER if "0" <= ch <= "9" else HL_NORMAL for ch in row.render]


def update_row(row: Row) -> None:
    update_render(row)
    update_syntax(row)


def cx_to_rx(row: Row, cx: int) -> int:
    rx = 0
    for ch in row.chars[:cx]:
        rx = _advance(rx, ch)
    return rx


def rx_to_cx(row: Row, rx: int) -> int:
    """Map a render column back to a logical column.

    Every render column covered by an expanded tab maps to that tab's own
    logical column. Columns past the end clamp to ``row.size``.
    """
    cur_rx = 0
    for cx, ch in enumerate(row.chars):
        cur_rx = _advance(cur_rx, ch)
        if cur_rx > rx:
            return cx
    return row.size


def syntax_to_color(hl: int) -> int:
    if hl == HL_NUMBER:
        return 31
    if hl == HL_MATCH:
        return 34
    return 37
