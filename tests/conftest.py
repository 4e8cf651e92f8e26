from __future__ import annotations

import os

import pytest

from spike.document import Document
from spike.editor import Editor
from spike.state import EditorState


def make_state(lines: list[str] | None = None, rows: int = 10, cols: int = 40) -> EditorState:
    doc = Document()
    doc.load(list(lines or []), None)
    return EditorState(doc=doc, screenrows=rows, screencols=cols)


def key_fd(data: bytes) -> int:
    """Return a read fd that yields ``data`` and then EOF."""
    r, w = os.pipe()
    os.write(w, data)
    os.close(w)
    return r


@pytest.fixture
def screen_fd(tmp_path):
    fd = os.open(tmp_path / "screen.out", os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
    yield fd
    os.close(fd)


@pytest.fixture
def make_editor(screen_fd):
    opened: list[int] = []

    def factory(keys: bytes = b"", lines: list[str] | None = None, filename: str | None = None) -> Editor:
        fd = key_fd(keys)
        opened.append(fd)
        editor = Editor(fd, screen_fd, screen_size=(12, 40))
        editor.state.doc.load(list(lines or []), filename)
        return editor

    yield factory
    for fd in opened:
        os.close(fd)
