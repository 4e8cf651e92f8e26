from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    ENTER,
    ESC,
    HL_MATCH,
)
from .rows import rx_to_cx
from .state import EditorState

if TYPE_CHECKING:
    from .editor import Editor

logger = logging.getLogger(__name__)


@dataclass
class SavedHighlight:
    line: int
    offset: int
    hl: list[int]


class SearchController:
    """Incremental search callback, run by the prompt after every key.

    Arrow keys step to the next (Right/Down) or previous (Left/Up) match,
    wrapping around the document. Any other key restarts the scan from
    the top. The match is painted with HL_MATCH and the overwritten
    highlight is put back before the next scan.
    """

    def __init__(self, state: EditorState) -> None:
        self.state = state
        self.last_match = -1
        self.direction = 1
        self.saved_hl: SavedHighlight | None = None

    def restore_highlight(self) -> None:
        saved = self.saved_hl
        if saved is None:
            return
        row = self.state.doc.row(saved.line)
        if row is not None:
            row.hl[saved.offset : saved.offset + len(saved.hl)] = saved.hl
        self.saved_hl = None

    def __call__(self, query: str, key: int) -> None:
        self.restore_highlight()

        if key in (ENTER, ESC):
            self.last_match = -1
            self.direction = 1
            return
        if key in (ARROW_RIGHT, ARROW_DOWN):
            self.direction = 1
        elif key in (ARROW_LEFT, ARROW_UP):
            self.direction = -1
        else:
            self.last_match = -1
            self.direction = 1

        if self.last_match == -1:
            self.direction = 1
        if not query:
            return

        match = self.find_next(query)
        if match is None:
            return
        self.jump_to(query, *match)

    def find_next(self, query: str) -> tuple[int, int] | None:
        numrows = self.state.numrows
        current = self.last_match
        for _ in range(numrows):
            current += self.direction
            if current == -1:
                current = numrows - 1
            elif current == numrows:
                current = 0
            offset = self.state.doc.rows[current].render.find(query)
            if offset != -1:
                return current, offset
        return None

    def jump_to(self, query: str, line: int, offset: int) -> None:
        state = self.state
        row = state.doc.rows[line]
        end = offset + len(query)

        self.last_match = line
        self.saved_hl = SavedHighlight(line, offset, row.hl[offset:end])
        row.hl[offset:end] = [HL_MATCH] * (end - offset)

        state.cy = line
        state.cx = rx_to_cx(row, offset)
        # Past the end so the next scroll puts the match on the top line.
        state.rowoff = state.numrows


def find(editor: Editor) -> None:
    state = editor.state
    saved = state.snapshot()
    controller = SearchController(state)

    query = editor.prompt("Search: %s (Use ESC/Arrows/Enter)", controller)
    if query is None:
        state.restore(saved)
        logger.debug("search cancelled")
    else:
        logger.debug("search committed: %r at line %d", query, state.cy + 1)
