"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType
from .view import Direction

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    # Whether running this command leaves the quit countdown untouched
    keeps_quit_countdown = False

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command
        """


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor, key_event):
        self._move(editor.cursor_controller, key_event)

    @abstractmethod
    def _move(self, controller, key_event):
        """Perform the movement."""


class ArrowCommand(MovementCommand):
    def __init__(self, direction: Direction):
        self.direction = direction

    def _move(self, controller, key_event):
        controller.move(self.direction)


class HomeCommand(MovementCommand):
    def _move(self, controller, key_event):
        controller.move_home()


class EndCommand(MovementCommand):
    def _move(self, controller, key_event):
        controller.move_end()


class PageUpCommand(MovementCommand):
    def _move(self, controller, key_event):
        controller.page_up()


class PageDownCommand(MovementCommand):
    def _move(self, controller, key_event):
        controller.page_down()


class EditCommand(EditorCommand):
    """Base class for commands that change the document at the cursor."""

    def execute(self, editor, key_event):
        self._edit(editor.session, key_event)

    @abstractmethod
    def _edit(self, session, key_event):
        """Perform the edit."""


class InsertTextCommand(EditCommand):
    def _edit(self, session, key_event):
        code = key_event.code
        # Tab is the only control byte inserted as text
        if code is None or (code < 0x20 and code != 0x09) or code == 0x7f:
            return
        doc = session.document
        cursor = session.cursor
        if cursor.line_index == doc.line_count:
            doc.insert_line(doc.line_count, b"")
        doc.insert_char(cursor.line_index, cursor.column, code)
        cursor.column += 1


class InsertNewlineCommand(EditCommand):
    def _edit(self, session, key_event):
        doc = session.document
        cursor = session.cursor
        if cursor.column == 0:
            doc.insert_line(cursor.line_index, b"")
        else:
            doc.split_at(cursor.line_index, cursor.column)
        cursor.line_index += 1
        cursor.column = 0


class BackspaceCommand(EditCommand):
    def _edit(self, session, key_event):
        delete_before_cursor(session)


class DeleteCommand(EditorCommand):
    """Delete the byte under the cursor: step right, then backspace."""

    def execute(self, editor, key_event):
        editor.cursor_controller.move(Direction.RIGHT)
        delete_before_cursor(editor.session)


def delete_before_cursor(session) -> None:
    doc = session.document
    cursor = session.cursor
    if cursor.line_index >= doc.line_count:
        return
    if cursor.line_index == 0 and cursor.column == 0:
        return
    if cursor.column > 0:
        doc.delete_char(cursor.line_index, cursor.column - 1)
        cursor.column -= 1
    else:
        previous = cursor.line_index - 1
        cursor.column = doc.line_length(previous)
        doc.join_with_next(previous)
        cursor.line_index = previous


class NoOpCommand(EditorCommand):
    def execute(self, editor, key_event):
        pass


class SystemCommand(EditorCommand):
    """Base class for system commands like save and quit."""

    def execute(self, editor, key_event):
        self._execute_system(editor, key_event)

    @abstractmethod
    def _execute_system(self, editor: 'Editor', key_event: 'KeyEvent'):
        """Perform the system action."""


class QuitCommand(SystemCommand):
    keeps_quit_countdown = True

    def _execute_system(self, editor, key_event):
        editor.request_quit()


class SaveCommand(SystemCommand):
    def _execute_system(self, editor, key_event):
        editor.handle_save()


class CommandRegistry:
    """Registry for mapping key combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._insert_text = InsertTextCommand()
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        # Movement commands
        self.register((KeyType.SPECIAL, 'left'), ArrowCommand(Direction.LEFT))
        self.register((KeyType.SPECIAL, 'right'), ArrowCommand(Direction.RIGHT))
        self.register((KeyType.SPECIAL, 'up'), ArrowCommand(Direction.UP))
        self.register((KeyType.SPECIAL, 'down'), ArrowCommand(Direction.DOWN))
        self.register((KeyType.SPECIAL, 'home'), HomeCommand())
        self.register((KeyType.SPECIAL, 'end'), EndCommand())
        self.register((KeyType.SPECIAL, 'page_up'), PageUpCommand())
        self.register((KeyType.SPECIAL, 'page_down'), PageDownCommand())

        # Editing commands
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())
        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.CTRL, 'h'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'delete'), DeleteCommand())

        # Redraw and escape do nothing beyond the next frame
        self.register((KeyType.CTRL, 'l'), NoOpCommand())
        self.register((KeyType.SPECIAL, 'escape'), NoOpCommand())

        # System commands
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 's'), SaveCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_event: 'KeyEvent') -> Optional[EditorCommand]:
        """Get the command for a key event, None if the key does nothing."""
        command = self._commands.get((key_event.key_type, key_event.value))
        if command is None and key_event.key_type == KeyType.REGULAR:
            return self._insert_text
        return command
