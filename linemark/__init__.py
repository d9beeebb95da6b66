"""Linemark - a small terminal text editor."""

import logging

from .model import Document, Line, CursorPosition
from .render import expand_tabs, render_column

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Document',
    'Line',
    'CursorPosition',
    'expand_tabs',
    'render_column',
]
