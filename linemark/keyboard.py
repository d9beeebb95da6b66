"""Keyboard input decoding from raw terminal bytes."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import EditorConstants

ESC = 0x1b


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"  # A byte to insert
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a decoded keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: bytes  # The bytes that produced this event
    code: Optional[int] = None  # Byte value for REGULAR and CTRL keys


ESCAPE_EVENT_VALUE = 'escape'

# Digit of an ESC [ <digit> ~ sequence
TILDE_KEYS = {
    ord('1'): 'home',
    ord('3'): 'delete',
    ord('4'): 'end',
    ord('5'): 'page_up',
    ord('6'): 'page_down',
    ord('7'): 'home',
    ord('8'): 'home',
}

# Final byte of an ESC [ <letter> sequence
CSI_KEYS = {
    ord('A'): 'up',
    ord('B'): 'down',
    ord('C'): 'right',
    ord('D'): 'left',
    ord('H'): 'home',
    ord('F'): 'end',
}

# Final byte of an ESC O <letter> sequence
SS3_KEYS = {
    ord('H'): 'home',
    ord('F'): 'end',
}


def _special(value: str, raw: bytes) -> KeyEvent:
    return KeyEvent(key_type=KeyType.SPECIAL, value=value, raw=raw)


def _escape(raw: bytes) -> KeyEvent:
    return _special(ESCAPE_EVENT_VALUE, raw)


def parse_byte(byte: int) -> KeyEvent:
    """Classify a single non-escape byte."""
    raw = bytes([byte])
    if byte in (0x0d, 0x0a):  # Enter, Ctrl-J
        return _special('enter', raw)
    if byte == 0x7f:
        return _special('backspace', raw)
    if 1 <= byte <= 26 and byte != 0x09:  # Ctrl-A .. Ctrl-Z, Tab is text
        return KeyEvent(key_type=KeyType.CTRL, value=chr(ord('a') + byte - 1),
                        raw=raw, code=byte)
    return KeyEvent(key_type=KeyType.REGULAR, value=chr(byte), raw=raw, code=byte)


class KeyboardHandler:
    """Decodes one key per call from a terminal's byte stream.

    Escape sequences are read a byte at a time; any continuation byte that
    does not arrive within ``sequence_timeout`` turns the sequence into a
    plain ``escape`` key, so a partial sequence never blocks.
    """

    def __init__(self, terminal_interface, sequence_timeout: float = EditorConstants.READ_TIMEOUT):
        """Initialize with a terminal interface providing ``read_byte``."""
        self.terminal = terminal_interface
        self.sequence_timeout = sequence_timeout

    def _next(self) -> Optional[int]:
        return self.terminal.read_byte(self.sequence_timeout)

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Read and decode the next key.

        Returns None if no byte arrives within ``timeout``. Read failures
        propagate as ``TerminalError``.
        """
        byte = self.terminal.read_byte(timeout)
        if byte is None:
            return None
        if byte != ESC:
            return parse_byte(byte)
        return self._parse_escape()

    def _parse_escape(self) -> KeyEvent:
        raw = bytearray([ESC])

        first = self._next()
        if first is None:
            return _escape(bytes(raw))
        raw.append(first)

        if first == ord('['):
            second = self._next()
            if second is None:
                return _escape(bytes(raw))
            raw.append(second)
            if ord('0') <= second <= ord('9'):
                third = self._next()
                if third is None:
                    return _escape(bytes(raw))
                raw.append(third)
                if third == ord('~') and second in TILDE_KEYS:
                    return _special(TILDE_KEYS[second], bytes(raw))
                return _escape(bytes(raw))
            if second in CSI_KEYS:
                return _special(CSI_KEYS[second], bytes(raw))
            return _escape(bytes(raw))

        if first == ord('O'):
            second = self._next()
            if second is None:
                return _escape(bytes(raw))
            raw.append(second)
            if second in SS3_KEYS:
                return _special(SS3_KEYS[second], bytes(raw))
            return _escape(bytes(raw))

        return _escape(bytes(raw))
