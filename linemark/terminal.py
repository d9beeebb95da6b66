"""Terminal interface: raw mode, byte input and frame output.

Blessed supplies the capability strings and the window size; termios puts
the input side into raw mode for the duration of a ``with`` block.
"""

import errno
import logging
import os
import select
import termios
from typing import Optional

import blessed

from .constants import EditorConstants

logger = logging.getLogger(__name__)

STDIN_FD = 0
STDOUT_FD = 1


class TerminalError(Exception):
    """Fatal terminal failure: mode get/set or input read."""


class RawMode:
    """Context manager holding the terminal in raw mode.

    The mode saved on entry is restored on exit, whether the block returns
    normally or raises.
    """

    def __init__(self, fd: int = STDIN_FD, read_timeout: float = EditorConstants.READ_TIMEOUT):
        self.fd = fd
        self.read_timeout = read_timeout
        self._saved: Optional[list] = None

    def __enter__(self) -> "RawMode":
        try:
            self._saved = termios.tcgetattr(self.fd)
        except (termios.error, OSError) as e:
            raise TerminalError(f"tcgetattr: {e}") from e

        raw = list(self._saved)
        raw[0] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK
                    | termios.ISTRIP | termios.IXON)
        raw[1] &= ~termios.OPOST
        raw[2] |= termios.CS8
        raw[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        cc = list(raw[6])
        cc[termios.VMIN] = 0
        cc[termios.VTIME] = max(1, int(self.read_timeout * 10))
        raw[6] = cc
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw)
        except (termios.error, OSError) as e:
            self._saved = None
            raise TerminalError(f"tcsetattr: {e}") from e
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        saved, self._saved = self._saved, None
        if saved is None:
            return
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, saved)
        except (termios.error, OSError) as e:
            if exc is None:
                raise TerminalError(f"tcsetattr: {e}") from e
            # Keep the original failure; this one is secondary.
            logger.error(f"Could not restore terminal mode: {e}")

    @property
    def active(self) -> bool:
        return self._saved is not None


class TerminalInterface:
    """Handles terminal I/O: raw mode, single-byte reads and frame writes."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None,
                 input_fd: int = STDIN_FD, output_fd: int = STDOUT_FD):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.input_fd = input_fd
        self.output_fd = output_fd

    def raw_mode(self, read_timeout: float = EditorConstants.READ_TIMEOUT) -> RawMode:
        return RawMode(self.input_fd, read_timeout)

    def read_byte(self, timeout: Optional[float] = None) -> Optional[int]:
        """Read one input byte.

        Args:
            timeout: Seconds to wait (None blocks until a byte arrives)

        Returns:
            The byte value, or None if nothing arrived in time.

        Raises:
            TerminalError: the read failed for a reason other than a timeout,
                or the input reached end of file.
        """
        try:
            ready, _, _ = select.select([self.input_fd], [], [], timeout)
            if not ready:
                return None
            data = os.read(self.input_fd, 1)
        except OSError as e:
            if e.errno in (errno.EAGAIN, errno.EINTR):
                return None
            raise TerminalError(f"read: {e}") from e
        if not data:
            # Readable with nothing to read means the input was closed
            raise TerminalError("read: end of input")
        return data[0]

    def write(self, data: bytes) -> None:
        """Write ``data`` to the output, retrying short writes."""
        view = memoryview(data)
        while view:
            n = os.write(self.output_fd, view)
            view = view[n:]

    def clear_screen(self) -> None:
        """Clear the whole screen and home the cursor."""
        self.write((self.term.clear + self.term.home).encode())

    @property
    def width(self) -> int:
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self) -> int:
        """Terminal height in rows."""
        return self.term.height
