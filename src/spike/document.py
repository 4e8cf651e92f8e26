from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .models import Row
from .rows import update_row

logger = logging.getLogger(__name__)


@dataclass
class Document:
    """Ordered rows of one open file plus its dirty counter.

    Every mutating operation bumps ``dirty``. Out-of-range indices are
    ignored rather than raised.
    """

    rows: list[Row] = field(default_factory=list)
    dirty: int = 0
    filename: str | None = None

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def row(self, at: int) -> Row | None:
        if 0 <= at < self.numrows:
            return self.rows[at]
        return None

    def insert_row(self, at: int, s: str) -> None:
        if at < 0 or at > self.numrows:
            return
        row = Row(chars=s)
        update_row(row)
        self.rows.insert(at, row)
        self.dirty += 1

    def del_row(self, at: int) -> None:
        if at < 0 or at >= self.numrows:
            return
        del self.rows[at]
        self.dirty += 1

    def row_insert_char(self, row: Row, at: int, c: str) -> None:
        at = min(max(at, 0), row.size)
        row.chars = row.chars[:at] + c + row.chars[at:]
        update_row(row)
        self.dirty += 1

    def row_append_string(self, row: Row, s: str) -> None:
        row.chars += s
        update_row(row)
        self.dirty += 1

    def row_del_char(self, row: Row, at: int) -> None:
        if at < 0 or at >= row.size:
            return
        row.chars = row.chars[:at] + row.chars[at + 1 :]
        update_row(row)
        self.dirty += 1

    def row_truncate(self, row: Row, at: int) -> None:
        if at < 0 or at >= row.size:
            return
        row.chars = row.chars[:at]
        update_row(row)
        self.dirty += 1

    def rows_to_string(self) -> str:
        return "".join(f"{row.chars}\n" for row in self.rows)

    def rows_to_bytes(self) -> bytes:
        # Rows hold one character per file byte.
        return self.rows_to_string().encode("latin-1")

    def load(self, lines: list[str], filename: str | None = None) -> None:
        self.rows = []
        for line in lines:
            self.insert_row(self.numrows, line)
        self.filename = filename
        self.dirty = 0
        logger.debug("loaded %d rows from %s", self.numrows, filename)
