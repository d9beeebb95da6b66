from dataclasses import dataclass
from typing import Iterable, Optional

from .constants import EditorConstants
from .render import expand_tabs, render_column


@dataclass
class CursorPosition:
    """Cursor location in raw coordinates.

    ``line_index`` may equal the document's line count, which is the
    virtual line just past the last real line.
    """
    line_index: int = 0
    column: int = 0
    render_column: int = 0


class Line:
    """One row of the document: raw bytes plus their cached rendering."""

    __slots__ = ("raw", "rendered", "tab_stop")

    def __init__(self, content: bytes = b"", tab_stop: int = EditorConstants.TAB_STOP):
        self.raw = bytearray(content)
        self.tab_stop = tab_stop
        self.rendered = b""
        self.update()

    def update(self) -> None:
        """Rebuild the rendered form from ``raw``."""
        self.rendered = expand_tabs(self.raw, self.tab_stop)

    def render_column(self, raw_column: int) -> int:
        return render_column(self.raw, raw_column, self.tab_stop)

    def __len__(self) -> int:
        return len(self.raw)

    def __repr__(self) -> str:
        return f"Line({bytes(self.raw)!r})"


class Document:
    """Ordered lines of text and every mutation performed on them.

    Out-of-range indices are clamped or ignored rather than raised, so
    callers doing cursor arithmetic never need error handling. Every
    mutation refreshes the affected line's rendering before returning and
    marks the document dirty.
    """

    def __init__(self, lines: Optional[Iterable[bytes]] = None,
                 tab_stop: int = EditorConstants.TAB_STOP):
        self.tab_stop = tab_stop
        self.lines: list[Line] = []
        self.dirty = False
        if lines is not None:
            self.load_lines(lines)

    def load_lines(self, lines: Iterable[bytes]) -> None:
        """Replace the content with ``lines`` and mark the document clean."""
        self.lines = []
        for content in lines:
            self.insert_line(len(self.lines), content)
        self.dirty = False

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index: int) -> Line:
        return self.lines[index]

    def line_length(self, index: int) -> int:
        """Length of line ``index``, 0 for the virtual past-end line."""
        if 0 <= index < len(self.lines):
            return len(self.lines[index].raw)
        return 0

    def contents(self) -> list[bytes]:
        return [bytes(line.raw) for line in self.lines]

    def insert_line(self, at: int, content: bytes = b"") -> None:
        if at < 0 or at > len(self.lines):
            return
        self.lines.insert(at, Line(content, self.tab_stop))
        self.dirty = True

    def delete_line(self, at: int) -> None:
        if at < 0 or at >= len(self.lines):
            return
        del self.lines[at]
        self.dirty = True

    def insert_char(self, index: int, column: int, byte: int) -> None:
        if index < 0 or index >= len(self.lines):
            return
        line = self.lines[index]
        if column < 0 or column > len(line.raw):
            column = len(line.raw)
        line.raw.insert(column, byte)
        line.update()
        self.dirty = True

    def delete_char(self, index: int, column: int) -> None:
        if index < 0 or index >= len(self.lines):
            return
        line = self.lines[index]
        if column < 0 or column >= len(line.raw):
            return
        del line.raw[column]
        line.update()
        self.dirty = True

    def append_bytes(self, index: int, data: bytes) -> None:
        if index < 0 or index >= len(self.lines):
            return
        line = self.lines[index]
        line.raw.extend(data)
        line.update()
        self.dirty = True

    def join_with_next(self, index: int) -> None:
        """Append line ``index + 1`` onto line ``index`` and remove it."""
        if index < 0 or index + 1 >= len(self.lines):
            return
        self.append_bytes(index, self.lines[index + 1].raw)
        self.delete_line(index + 1)

    def split_at(self, index: int, column: int) -> None:
        """Move ``raw[column:]`` of line ``index`` onto a new following line."""
        if index < 0 or index >= len(self.lines):
            return
        line = self.lines[index]
        column = max(0, min(column, len(line.raw)))
        self.insert_line(index + 1, bytes(line.raw[column:]))
        del line.raw[column:]
        line.update()
        self.dirty = True

    def serialize(self) -> bytes:
        """Every line's raw bytes, each followed by a newline."""
        return b"".join(bytes(line.raw) + b"\n" for line in self.lines)
