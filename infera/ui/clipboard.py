"""Clipboard access for code-block copy buttons."""

import logging
from typing import Protocol

from nicegui import ui

logger = logging.getLogger(__name__)

COPY_CONFIRMATION_SECONDS = 2.0


class Clipboard(Protocol):
    def copy(self, text: str) -> bool: ...


class BrowserClipboard:
    """Writes to the clipboard of the browser tab the current page runs in."""

    def copy(self, text: str) -> bool:
        try:
            ui.clipboard.write(text)
        except Exception as e:
            logger.error(f"Failed to copy text: {e}")
            return False
        return True
