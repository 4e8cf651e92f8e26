"""Tests for key decoding and terminal queries."""

import copy
import errno
import os
import termios

import pytest
from conftest import key_fd

from spike.constants import (
    ARROW_DOWN,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    BACKSPACE,
    DEL_KEY,
    END_KEY,
    ESC,
    HOME_KEY,
    KEY_WAKE,
    PAGE_DOWN,
    PAGE_UP,
)
from spike.terminal import RawMode, get_cursor_position, read_key


def decode(data: bytes) -> int:
    fd = key_fd(data)
    try:
        return read_key(fd)
    finally:
        os.close(fd)


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"x", ord("x")),
        (b"\r", 13),
        (b"\t", 9),
        (b"\x7f", BACKSPACE),
        (b"\xe9", 0xE9),
        (b"\x1b[A", ARROW_UP),
        (b"\x1b[B", ARROW_DOWN),
        (b"\x1b[C", ARROW_RIGHT),
        (b"\x1b[D", ARROW_LEFT),
        (b"\x1b[H", HOME_KEY),
        (b"\x1b[F", END_KEY),
        (b"\x1bOH", HOME_KEY),
        (b"\x1bOF", END_KEY),
        (b"\x1b[1~", HOME_KEY),
        (b"\x1b[7~", HOME_KEY),
        (b"\x1b[4~", END_KEY),
        (b"\x1b[8~", END_KEY),
        (b"\x1b[3~", DEL_KEY),
        (b"\x1b[5~", PAGE_UP),
        (b"\x1b[6~", PAGE_DOWN),
    ],
)
def test_read_key(data, expected):
    assert decode(data) == expected


@pytest.mark.parametrize(
    "data",
    [b"\x1b", b"\x1b[", b"\x1b[Z", b"\x1b[9~", b"\x1b[2X", b"\x1b[5", b"\x1bOZ", b"\x1bxy"],
)
def test_incomplete_or_unknown_sequences_decode_to_escape(data):
    assert decode(data) == ESC


def test_keys_are_read_one_at_a_time():
    fd = key_fd(b"a\x1b[Bb")
    try:
        assert [read_key(fd) for _ in range(3)] == [ord("a"), ARROW_DOWN, ord("b")]
    finally:
        os.close(fd)


def test_read_error_propagates():
    r, w = os.pipe()
    os.close(w)
    os.close(r)
    with pytest.raises(OSError):
        read_key(r)


class TestCursorPosition:
    def test_parses_report(self, screen_fd):
        fd = key_fd(b"\x1b[24;80R")
        try:
            assert get_cursor_position(fd, screen_fd) == (24, 80)
        finally:
            os.close(fd)

    def test_bad_report_raises(self, screen_fd):
        fd = key_fd(b"garbage")
        try:
            with pytest.raises(OSError):
                get_cursor_position(fd, screen_fd)
        finally:
            os.close(fd)


def test_raw_mode_requires_tty():
    fd = key_fd(b"")
    try:
        with pytest.raises(OSError) as excinfo:
            with RawMode(fd):
                pass
        assert excinfo.value.errno == errno.ENOTTY
    finally:
        os.close(fd)


class TestWake:
    def test_idle_read_returns_wake_key(self):
        fd = key_fd(b"")
        try:
            assert read_key(fd, lambda: True) == KEY_WAKE
        finally:
            os.close(fd)

    def test_pending_input_wins_over_wake(self):
        fd = key_fd(b"\x1b[A")
        try:
            assert read_key(fd, lambda: True) == ARROW_UP
        finally:
            os.close(fd)


FAKE_ATTRS = [0, 0, 0, 0, 38400, 38400, [0] * 32]


class TestRawModeErrors:
    def test_attribute_query_failure_is_oserror(self, monkeypatch):
        def fail(fd):
            raise termios.error(errno.EIO, "Input/output error")

        monkeypatch.setattr("spike.terminal.os.isatty", lambda fd: True)
        monkeypatch.setattr(termios, "tcgetattr", fail)
        with pytest.raises(OSError) as excinfo:
            with RawMode(0):
                pass
        assert excinfo.value.errno == errno.EIO
        assert excinfo.value.strerror == "Unable to get terminal attributes"

    def test_restore_failure_is_oserror(self, monkeypatch):
        calls = []

        def set_attrs(fd, when, attrs):
            calls.append(attrs)
            if len(calls) > 1:
                raise termios.error(errno.EIO, "Input/output error")

        monkeypatch.setattr("spike.terminal.os.isatty", lambda fd: True)
        monkeypatch.setattr(termios, "tcgetattr", lambda fd: copy.deepcopy(FAKE_ATTRS))
        monkeypatch.setattr(termios, "tcsetattr", set_attrs)
        with pytest.raises(OSError) as excinfo:
            with RawMode(0):
                pass
        assert excinfo.value.strerror == "Unable to restore terminal attributes"
        raw, restored = calls
        assert raw[6][termios.VMIN] == 0
        assert raw[6][termios.VTIME] == 1
        assert restored == FAKE_ATTRS
