"""Constants and configuration defaults for the linemark editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Rendering
    TAB_STOP = 8  # Tabs expand to the next multiple of this column

    # Quitting with unsaved changes
    QUIT_TIMES = 3  # Extra Ctrl-Q presses required when the document is dirty

    # Status messages
    MESSAGE_TIMEOUT = 5  # Seconds a status message stays on the message bar
    HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit"
    QUIT_WARNING_MESSAGE = (
        "WARNING!!! File has unsaved changes. Press Ctrl-Q {} more times to quit."
    )
    SAVED_MESSAGE = "{} bytes written to disk"
    SAVE_ERROR_MESSAGE = "Can't save! I/O error: {}"
    SAVE_AS_PROMPT = "Save as: {} (ESC to cancel)"
    SAVE_ABORTED_MESSAGE = "Save aborted"

    # Keyboard timing
    READ_TIMEOUT = 0.1  # Seconds to wait for a byte (first byte and escape continuations)

    # Screen layout
    RESERVED_ROWS = 2  # Status bar + message bar
    STATUS_FILENAME_WIDTH = 20  # Filename characters shown in the status bar
    NO_NAME = "[No Name]"
    WELCOME_MESSAGE = "Linemark editor -- version {}"
