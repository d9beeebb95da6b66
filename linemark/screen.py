"""Frame composition: session state to one buffer of terminal output."""

from typing import Optional

import blessed

from .constants import EditorConstants
from .session import Session


class ScreenCompositor:
    """Builds a complete frame as bytes using the terminal's capabilities.

    The caller writes the result in one go; nothing is sent piecemeal.
    """

    def __init__(self, term: blessed.Terminal, version: str = "",
                 message_timeout: float = EditorConstants.MESSAGE_TIMEOUT):
        self.term = term
        self.version = version
        self.message_timeout = message_timeout

    def _seq(self, capability: str) -> bytes:
        return str(capability).encode()

    def compose(self, session: Session, now: Optional[float] = None) -> bytes:
        term = self.term
        viewport = session.viewport
        cursor = session.cursor

        out = bytearray()
        out += self._seq(term.hide_cursor)
        out += self._seq(term.home)
        self._draw_rows(out, session)
        self._draw_status_bar(out, session)
        self._draw_message_bar(out, session, now)
        out += self._seq(term.move_yx(cursor.line_index - viewport.row_offset,
                                      cursor.render_column - viewport.col_offset))
        out += self._seq(term.normal_cursor)
        return bytes(out)

    def welcome_line(self, screen_cols: int) -> bytes:
        """Centered banner shown on an empty document."""
        welcome = EditorConstants.WELCOME_MESSAGE.format(self.version).encode()
        welcome = welcome[:screen_cols]
        padding = (screen_cols - len(welcome)) // 2
        if not padding:
            return welcome
        return b"~" + b" " * (padding - 1) + welcome

    def _draw_rows(self, out: bytearray, session: Session) -> None:
        doc = session.document
        viewport = session.viewport
        clear_eol = self._seq(self.term.clear_eol)
        for y in range(viewport.screen_rows):
            file_row = y + viewport.row_offset
            if file_row >= doc.line_count:
                if doc.line_count == 0 and y == viewport.screen_rows // 2:
                    out += self.welcome_line(viewport.screen_cols)
                else:
                    out += b"~"
            else:
                rendered = doc[file_row].rendered
                out += rendered[viewport.col_offset:viewport.col_offset + viewport.screen_cols]
            out += clear_eol
            out += b"\r\n"

    def status_text(self, session: Session, width: int) -> bytes:
        """Status bar content padded to ``width``, without styling."""
        name = session.filename or EditorConstants.NO_NAME
        name = name[:EditorConstants.STATUS_FILENAME_WIDTH]
        left = f"{name} - {session.document.line_count} lines"
        if session.dirty:
            left += " (modified)"
        right = f"{session.cursor.line_index + 1}/{session.document.line_count}"

        left = left[:width]
        if len(left) + len(right) <= width:
            text = left + " " * (width - len(left) - len(right)) + right
        else:
            text = left.ljust(width)
        return text.encode(errors="surrogateescape")

    def _draw_status_bar(self, out: bytearray, session: Session) -> None:
        out += self._seq(self.term.reverse)
        out += self.status_text(session, session.viewport.screen_cols)
        out += self._seq(self.term.normal)
        out += b"\r\n"

    def _draw_message_bar(self, out: bytearray, session: Session, now: Optional[float]) -> None:
        out += self._seq(self.term.clear_eol)
        message = session.visible_status_message(self.message_timeout, now)
        if message:
            out += message.encode(errors="surrogateescape")[:session.viewport.screen_cols]
