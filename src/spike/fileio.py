from __future__ import annotations

import errno
import os


def load_lines(filename: str) -> list[str]:
    """Read ``filename`` as rows with trailing CR/LF stripped.

    Bytes are decoded as latin-1 so every file byte stays one character.
    A missing file loads as no rows.
    """
    lines: list[str] = []
    try:
        with open(filename, "rb") as f:
            for line in f:
                while line and line[-1] in (0x0A, 0x0D):
                    line = line[:-1]
                lines.append(line.decode("latin-1"))
    except FileNotFoundError:
        return []
    return lines


def write_file(filename: str, data: bytes) -> int:
    """Overwrite ``filename`` with exactly ``data``; return bytes written."""
    fd = os.open(filename, os.O_RDWR | os.O_CREAT, 0o644)
    try:
        os.ftruncate(fd, len(data))
        written = 0
        while written < len(data):
            n = os.write(fd, data[written:])
            if n <= 0:
                raise OSError(errno.EIO, "short write")
            written += n
    finally:
        os.close(fd)
    return written
