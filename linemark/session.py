"""Session state for one editing run.

Everything the dispatcher and the compositor read or change lives on a
single ``Session`` owned by the editor; there is no module-level state.
"""

import time
from dataclasses import dataclass, field
from typing import Optional

from .model import CursorPosition, Document
from .view import Viewport


@dataclass
class Session:
    document: Document = field(default_factory=Document)
    cursor: CursorPosition = field(default_factory=CursorPosition)
    viewport: Viewport = field(default_factory=Viewport)
    filename: Optional[str] = None
    status_message: str = ""
    status_time: float = 0.0

    @property
    def dirty(self) -> bool:
        return self.document.dirty

    def set_status_message(self, message: str, now: Optional[float] = None) -> None:
        self.status_message = message
        self.status_time = time.time() if now is None else now

    def visible_status_message(self, timeout: float, now: Optional[float] = None) -> str:
        """The status message, or '' once ``timeout`` seconds have passed."""
        if not self.status_message:
            return ""
        now = time.time() if now is None else now
        if now - self.status_time < timeout:
            return self.status_message
        return ""
