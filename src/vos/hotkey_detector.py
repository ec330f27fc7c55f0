"""
Hotkey Detector Module
Listens for the global toggle hotkey using pynput.
Press once to start recording, press again to stop and transcribe.
"""

import logging
from typing import Callable, Optional

from pynput import keyboard

from vos.exceptions import HotkeyDetectorError

logger = logging.getLogger(__name__)


def describe_hotkey(hotkey: str) -> str:
    """
    Human-readable form of a pynput hotkey string.

    "<cmd>+<shift>+r" -> "Cmd+Shift+R"
    """
    parts = []
    for part in hotkey.split("+"):
        part = part.strip().strip("<>")
        parts.append(part.capitalize() if len(part) > 1 else part.upper())
    return "+".join(parts)


class HotkeyDetector:
    """Detects the toggle hotkey via pynput GlobalHotKeys."""

    def __init__(self, hotkey: str, on_trigger: Callable[[], None]):
        """
        Initialize hotkey detector.

        Args:
            hotkey: Hotkey in pynput syntax, e.g. "<ctrl>+<shift>+r"
            on_trigger: Called each time the hotkey is pressed

        Raises:
            HotkeyDetectorError: If the hotkey string cannot be parsed.
        """
        try:
            keyboard.HotKey.parse(hotkey)
        except ValueError as e:
            raise HotkeyDetectorError(f"Invalid hotkey '{hotkey}': {e}") from e

        self.hotkey = hotkey
        self.on_trigger = on_trigger
        self._listener: Optional[keyboard.GlobalHotKeys] = None

    def _handle_hotkey(self) -> None:
        logger.debug(f"Hotkey {self.hotkey} pressed")
        try:
            self.on_trigger()
        except Exception:
            # An exception here would stop the pynput listener thread
            logger.exception("Unhandled error in hotkey callback")

    def get_hotkey_description(self) -> str:
        """Get human-readable description of the hotkey."""
        return describe_hotkey(self.hotkey)

    def start(self) -> None:
        """
        Start listening for the hotkey.

        Raises:
            HotkeyDetectorError: If the listener cannot be started.
        """
        if self._listener is not None:
            return
        try:
            self._listener = keyboard.GlobalHotKeys({self.hotkey: self._handle_hotkey})
            self._listener.start()
        except Exception as e:
            self._listener = None
            raise HotkeyDetectorError(
                f"Failed to start hotkey listener: {e}\n"
                "On macOS: Grant Accessibility permission in System Settings.\n"
                "On Linux: Ensure you are running an X11 session."
            ) from e
        logger.info(f"Hotkey detector started ({self.get_hotkey_description()})")

    def stop(self) -> None:
        """Stop listening and clean up."""
        if self._listener is None:
            return
        self._listener.stop()
        self._listener = None

    @property
    def is_running(self) -> bool:
        return self._listener is not None
