"""Reading and writing document files.

Files are handled as bytes. Saving writes in place: the file is created if
missing and truncated to exactly the length of the new content.
"""

import logging
import os

logger = logging.getLogger(__name__)

FILE_MODE = 0o644


def split_lines(data: bytes) -> list[bytes]:
    """Split file content on newlines, trimming trailing CR/LF from each line.

    A final newline terminates the last line rather than starting a new one.
    """
    if not data:
        return []
    pieces = data.split(b"\n")
    if data.endswith(b"\n"):
        pieces.pop()
    return [piece.rstrip(b"\r\n") for piece in pieces]


def load_lines(path: str) -> list[bytes]:
    """Read ``path`` and return its lines.

    Raises:
        OSError: the file could not be opened or read.
    """
    with open(path, 'rb') as f:
        data = f.read()
    lines = split_lines(data)
    logger.debug(f"Loaded {len(lines)} lines from {path}")
    return lines


def save_bytes(path: str, data: bytes) -> int:
    """Write ``data`` to ``path`` and return the number of bytes written.

    Raises:
        OSError: the file could not be opened, truncated or fully written.
    """
    fd = os.open(path, os.O_RDWR | os.O_CREAT, FILE_MODE)
    try:
        os.ftruncate(fd, len(data))
        view = memoryview(data)
        written = 0
        while written < len(data):
            n = os.write(fd, view[written:])
            if n == 0:
                raise OSError(f"short write to {path}")
            written += n
    finally:
        os.close(fd)
    logger.debug(f"Wrote {written} bytes to {path}")
    return written
