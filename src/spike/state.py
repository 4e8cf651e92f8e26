from __future__ import annotations

from dataclasses import dataclass, field

from .document import Document
from .models import Row, StatusMessage


@dataclass
class SearchSnapshot:
    cx: int
    cy: int
    coloff: int
    rowoff: int


@dataclass
class EditorState:
    """Everything one editing session mutates.

    ``cx``/``cy`` are document coordinates; ``cy == doc.numrows`` is the
    virtual line past the end. ``rx`` is recomputed by ``viewport.scroll``.
    """

    doc: Document = field(default_factory=Document)
    cx: int = 0
    cy: int = 0
    rx: int = 0
    rowoff: int = 0
    coloff: int = 0
    screenrows: int = 0
    screencols: int = 0
    status: StatusMessage = field(default_factory=StatusMessage)

    @property
    def numrows(self) -> int:
        return self.doc.numrows

    def current_row(self) -> Row | None:
        return self.doc.row(self.cy)

    def snapshot(self) -> SearchSnapshot:
        return SearchSnapshot(self.cx, self.cy, self.coloff, self.rowoff)

    def restore(self, saved: SearchSnapshot) -> None:
        self.cx = saved.cx
        self.cy = saved.cy
        self.coloff = saved.coloff
        self.rowoff = saved.rowoff
