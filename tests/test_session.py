"""End-to-end sessions driven through a pseudo-terminal."""

from __future__ import annotations

import fcntl
import os
import pty
import select
import signal
import struct
import sys
import termios
import time
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

pytestmark = pytest.mark.skipif(not hasattr(pty, "fork"), reason="needs a pty")


def read_ready(fd: int, sink: bytearray, duration_s: float) -> None:
    end = time.time() + duration_s
    while time.time() < end:
        readable, _, _ = select.select([fd], [], [], 0.02)
        if fd not in readable:
            continue
        try:
            data = os.read(fd, 65536)
        except OSError:
            break
        if not data:
            break
        sink.extend(data)


def run_session(args: list[str], keys: list[bytes], timeout_s: float = 10.0) -> tuple[int | None, bytes]:
    pid, fd = pty.fork()
    if pid == 0:
        fcntl.ioctl(0, termios.TIOCSWINSZ, struct.pack("HHHH", 24, 80, 0, 0))
        env = dict(os.environ, PYTHONPATH=str(ROOT / "src"))
        os.execvpe(sys.executable, [sys.executable, "-m", "spike", *args], env)

    transcript = bytearray()
    status: int | None = None
    try:
        deadline = time.time() + timeout_s
        while b"\x1b[?25h" not in transcript and time.time() < deadline:
            read_ready(fd, transcript, 0.05)
        for key in keys:
            os.write(fd, key)
            read_ready(fd, transcript, 0.2)

        deadline = time.time() + timeout_s
        while time.time() < deadline:
            read_ready(fd, transcript, 0.05)
            wpid, wstatus = os.waitpid(pid, os.WNOHANG)
            if wpid == pid:
                status = wstatus
                break

        if status is None:
            os.kill(pid, signal.SIGKILL)
            os.waitpid(pid, 0)
    finally:
        os.close(fd)
    return status, bytes(transcript)


def test_edit_save_and_quit(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_bytes(b"hello\r\nworld\n")

    status, transcript = run_session(
        [str(path)],
        [b"X", b"\x1b[B", b"\x1b[F", b"!", b"\x13", b"\x11"],
    )

    assert status is not None and os.WIFEXITED(status)
    assert os.WEXITSTATUS(status) == 0
    assert path.read_bytes() == b"Xhello\nworld!\n"
    assert b"bytes written to disk" in transcript


def test_unsaved_changes_need_confirmation(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_bytes(b"keep\n")

    status, transcript = run_session([str(path)], [b"Z"] + [b"\x11"] * 4)

    assert status is not None and os.WEXITSTATUS(status) == 0
    assert b"WARNING!!!" in transcript
    assert path.read_bytes() == b"keep\n"
