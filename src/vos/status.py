"""
Status Surface

The pipeline reports progress through show(message, state) and hide().
ConsoleStatus is the terminal implementation used by the entry point.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum

logger = logging.getLogger(__name__)


class StatusState(Enum):
    """What the status surface is currently reporting."""
    RECORDING = "recording"
    TRANSCRIBING = "transcribing"
    SUCCESS = "success"
    ERROR = "error"


class StatusSurface(ABC):
    """Abstract status indicator."""

    @abstractmethod
    def show(self, message: str, state: StatusState) -> None:
        """Display a message in the given state, replacing any current one."""
        pass

    @abstractmethod
    def hide(self) -> None:
        """Remove the current message."""
        pass


class ConsoleStatus(StatusSurface):
    """Prints status changes to the terminal."""

    TAGS = {
        StatusState.RECORDING: "Recording",
        StatusState.TRANSCRIBING: "Transcribing",
        StatusState.SUCCESS: "Output",
        StatusState.ERROR: "Error",
    }

    def __init__(self):
        self._visible = False

    def show(self, message: str, state: StatusState) -> None:
        self._visible = True
        print(f"[{self.TAGS[state]}] {message}")
        if state is StatusState.ERROR:
            logger.warning(message)
        else:
            logger.debug(f"Status {state.value}: {message}")

    def hide(self) -> None:
        self._visible = False

    @property
    def is_visible(self) -> bool:
        """Whether a message is currently shown."""
        return self._visible
