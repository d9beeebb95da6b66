#!/usr/bin/env python3
"""Linemark - a small terminal text editor.

Usage:
    python main.py [filename]

Controls:
    Arrow keys, Home/End, PageUp/PageDown: Navigate
    Ctrl-S: Save file
    Ctrl-Q: Quit (press repeatedly to discard unsaved changes)
    Type to insert text
    Backspace/Delete: Delete character
    Enter: Split line
"""

import sys
from linemark.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
