from __future__ import annotations

from dataclasses import dataclass, field

from .constants import STATUS_TIMEOUT


@dataclass(slots=True)
class Row:
    """One line of text.

    ``chars`` is authoritative. ``render`` and ``hl`` are derived from it by
    ``rows.update_row`` and always have the same length.
    """

    chars: str
    render: str = ""
    hl: list[int] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def rsize(self) -> int:
        return len(self.render)


@dataclass(slots=True)
class StatusMessage:
    text: str = ""
    time: float = 0.0

    def visible(self, now: float) -> bool:
        return bool(self.text) and now - self.time < STATUS_TIMEOUT
