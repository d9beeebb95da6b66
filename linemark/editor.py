"""Main editor controller."""

import logging
from typing import Optional

from .commands import CommandRegistry
from .constants import EditorConstants
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .model import Document
from .persistence import load_lines, save_bytes
from .screen import ScreenCompositor
from .session import Session
from .settings import EditorSettings
from .terminal import TerminalInterface
from .version import get_version
from .view import CursorController

logger = logging.getLogger(__name__)


class Editor:
    """Main text editor application controller."""

    def __init__(self, terminal: Optional[TerminalInterface] = None,
                 settings: Optional[EditorSettings] = None):
        """Initialize the editor components."""
        self.settings = settings or EditorSettings()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal, self.settings.read_timeout)
        self.session = Session(document=Document(tab_stop=self.settings.tab_stop))
        self.cursor_controller = CursorController(self.session)
        self.compositor = ScreenCompositor(self.terminal.term, get_version(),
                                           self.settings.message_timeout)
        self.command_registry = CommandRegistry()
        self.running = False
        self.quit_times = self.settings.quit_times
        self.prompt_mode = None  # None or 'save_as'
        self.prompt_input = ""
        self.session.set_status_message(EditorConstants.HELP_MESSAGE)

    @property
    def document(self) -> Document:
        return self.session.document

    def run(self):
        """Run the main editor loop until quit.

        Raises:
            TerminalError: raw mode could not be set or input could not be read.
        """
        with self.terminal.raw_mode(self.settings.read_timeout):
            self.running = True
            try:
                while self.running:
                    self.refresh_screen()
                    key_event = self.keyboard.get_key_event(timeout=self.settings.read_timeout)
                    if key_event:
                        self.process_key(key_event)
            finally:
                self.running = False
                self.terminal.clear_screen()

    def update_screen_size(self):
        viewport = self.session.viewport
        viewport.screen_rows = max(1, self.terminal.height - EditorConstants.RESERVED_ROWS)
        viewport.screen_cols = max(1, self.terminal.width)

    def refresh_screen(self):
        """Draw the current state as one frame."""
        self.update_screen_size()
        self.cursor_controller.scroll()
        self.terminal.write(self.compositor.compose(self.session))

    def process_key(self, key_event: KeyEvent):
        """Handle one decoded key.

        Args:
            key_event: KeyEvent object with decoded key information
        """
        if self.prompt_mode == 'save_as':
            # Prompt keys, Ctrl-Q included, never count towards quitting
            self._handle_save_as_prompt(key_event)
            self.quit_times = self.settings.quit_times
            return

        command = self.command_registry.get_command(key_event)
        if command is not None:
            command.execute(self, key_event)
        if command is None or not command.keeps_quit_countdown:
            self.quit_times = self.settings.quit_times

    def request_quit(self):
        """Quit now, or count down when there are unsaved changes."""
        if self.document.dirty and self.quit_times > 0:
            self.session.set_status_message(
                EditorConstants.QUIT_WARNING_MESSAGE.format(self.quit_times))
            self.quit_times -= 1
            return
        self.running = False

    def load_file(self, filename: str):
        """Load a file into the editor.

        A missing file starts an empty document that will be saved under
        ``filename``.

        Raises:
            OSError: the file exists but could not be read.
        """
        self.session.filename = filename
        try:
            lines = load_lines(filename)
        except FileNotFoundError:
            logger.info(f"{filename} does not exist, starting a new file")
            lines = []
        self.document.load_lines(lines)

    def save_file(self, filename: str) -> bool:
        """Write the document to ``filename``.

        Returns:
            True if save succeeded, False otherwise
        """
        data = self.document.serialize()
        try:
            written = save_bytes(filename, data)
        except OSError as e:
            logger.warning(f"Could not save {filename}: {e}")
            self.session.set_status_message(
                EditorConstants.SAVE_ERROR_MESSAGE.format(e.strerror or e))
            return False
        self.session.filename = filename
        self.document.dirty = False
        self.session.set_status_message(EditorConstants.SAVED_MESSAGE.format(written))
        return True

    def handle_save(self):
        """Handle Ctrl-S save command."""
        if self.session.filename:
            self.save_file(self.session.filename)
        else:
            self.prompt_mode = 'save_as'
            self.prompt_input = ""
            self._show_prompt()

    def _show_prompt(self):
        self.session.set_status_message(
            EditorConstants.SAVE_AS_PROMPT.format(self.prompt_input))

    def _handle_save_as_prompt(self, key_event: KeyEvent):
        """Handle keypress during the save-as prompt."""
        if key_event.key_type == KeyType.SPECIAL and key_event.value == 'escape':
            self.prompt_mode = None
            self.prompt_input = ""
            self.session.set_status_message(EditorConstants.SAVE_ABORTED_MESSAGE)
        elif key_event.key_type == KeyType.SPECIAL and key_event.value == 'enter':
            if self.prompt_input:
                filename = self.prompt_input
                self.prompt_mode = None
                self.prompt_input = ""
                self.save_file(filename)
        elif ((key_event.key_type == KeyType.SPECIAL and key_event.value in ('backspace', 'delete'))
              or (key_event.key_type == KeyType.CTRL and key_event.value == 'h')):
            self.prompt_input = self.prompt_input[:-1]
            self._show_prompt()
        elif key_event.key_type == KeyType.REGULAR and key_event.code is not None:
            if 0x20 <= key_event.code < 0x7f:
                self.prompt_input += key_event.value
                self._show_prompt()
