"""Tab expansion shared by line rendering and cursor mapping.

Both functions walk the same raw bytes with the same rule, so a raw column
projected with :func:`render_column` always lands on the cell where
:func:`expand_tabs` placed that byte.
"""

from .constants import EditorConstants

TAB = 0x09


def expand_tabs(raw: bytes, tab_stop: int = EditorConstants.TAB_STOP) -> bytes:
    """Return ``raw`` with every tab replaced by spaces up to the next tab stop.

    A tab always produces at least one space. All other bytes are copied
    unchanged.
    """
    if TAB not in raw:
        return bytes(raw)
    out = bytearray()
    for byte in raw:
        if byte == TAB:
            out.append(0x20)
            while len(out) % tab_stop != 0:
                out.append(0x20)
        else:
            out.append(byte)
    return bytes(out)


def render_column(raw: bytes, raw_column: int, tab_stop: int = EditorConstants.TAB_STOP) -> int:
    """Map a raw byte column to its column in the tab-expanded rendering."""
    rx = 0
    for byte in raw[:max(0, raw_column)]:
        if byte == TAB:
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1
    return rx
