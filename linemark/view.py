from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .session import Session


@dataclass
class Viewport:
    """Top-left visible document coordinate and the size of the text area."""
    row_offset: int = 0
    col_offset: int = 0
    screen_rows: int = 0
    screen_cols: int = 0


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class CursorController:
    """Keeps the cursor inside the document and the viewport on the cursor."""

    def __init__(self, session: "Session"):
        self.session = session

    @property
    def _document(self):
        return self.session.document

    @property
    def _cursor(self):
        return self.session.cursor

    def move(self, direction: Direction) -> None:
        """Move one step as an arrow key would."""
        doc = self._document
        cursor = self._cursor
        on_line = cursor.line_index < doc.line_count

        if direction == Direction.LEFT:
            if cursor.column > 0:
                cursor.column -= 1
            elif cursor.line_index > 0:
                cursor.line_index -= 1
                cursor.column = doc.line_length(cursor.line_index)
        elif direction == Direction.RIGHT:
            if on_line and cursor.column < doc.line_length(cursor.line_index):
                cursor.column += 1
            elif cursor.line_index < doc.line_count - 1:
                cursor.line_index += 1
                cursor.column = 0
        elif direction == Direction.UP:
            if cursor.line_index > 0:
                cursor.line_index -= 1
        elif direction == Direction.DOWN:
            if cursor.line_index < doc.line_count - 1:
                cursor.line_index += 1

        # Destination line may be shorter
        cursor.column = min(cursor.column, doc.line_length(cursor.line_index))

    def move_home(self) -> None:
        self._cursor.column = 0

    def move_end(self) -> None:
        cursor = self._cursor
        if cursor.line_index < self._document.line_count:
            cursor.column = self._document.line_length(cursor.line_index)

    def page_up(self) -> None:
        viewport = self.session.viewport
        self._cursor.line_index = viewport.row_offset
        for _ in range(viewport.screen_rows):
            self.move(Direction.UP)

    def page_down(self) -> None:
        viewport = self.session.viewport
        bottom = viewport.row_offset + viewport.screen_rows - 1
        self._cursor.line_index = max(0, min(bottom, self._document.line_count - 1))
        for _ in range(viewport.screen_rows):
            self.move(Direction.DOWN)

    def scroll(self) -> None:
        """Refresh the cursor's render column and bring it into view."""
        doc = self._document
        cursor = self._cursor
        viewport = self.session.viewport

        cursor.render_column = 0
        if cursor.line_index < doc.line_count:
            cursor.render_column = doc[cursor.line_index].render_column(cursor.column)

        if cursor.line_index < viewport.row_offset:
            viewport.row_offset = cursor.line_index
        if cursor.line_index >= viewport.row_offset + viewport.screen_rows:
            viewport.row_offset = cursor.line_index - viewport.screen_rows + 1
        if cursor.render_column < viewport.col_offset:
            viewport.col_offset = cursor.render_column
        if cursor.render_column >= viewport.col_offset + viewport.screen_cols:
            viewport.col_offset = cursor.render_column - viewport.screen_cols + 1
