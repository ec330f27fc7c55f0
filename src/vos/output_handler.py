"""
Output Handler Module
Copies transcription to the system clipboard.
"""

import logging

import pyperclip

from vos.exceptions import OutputError

logger = logging.getLogger(__name__)


class OutputHandler:
    """Delivers transcribed text to the clipboard."""

    def copy_to_clipboard(self, text: str) -> None:
        """
        Copy text to system clipboard.

        Args:
            text: Text to copy to clipboard

        Raises:
            OutputError: If clipboard operation fails
        """
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise OutputError(f"Failed to copy to clipboard: {e}") from e

    def deliver(self, text: str) -> None:
        """Hand the transcript to the user. Fire-and-forget beyond OutputError."""
        self.copy_to_clipboard(text)
        logger.debug(f"Delivered {len(text)} characters to clipboard")


def get_clipboard_content() -> str:
    """
    Get current clipboard content.

    Returns:
        Current clipboard text content

    Raises:
        OutputError: If clipboard read fails
    """
    try:
        return pyperclip.paste()
    except pyperclip.PyperclipException as e:
        raise OutputError(f"Failed to read clipboard: {e}") from e
