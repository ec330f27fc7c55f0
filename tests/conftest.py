"""
Pytest configuration and fixtures for vos tests.

IMPORTANT: This file sets up mocks for native audio/input modules BEFORE any
test imports happen, so the suite runs on headless machines without
PortAudio or an X display.
"""

import logging
import sys
from functools import lru_cache
from unittest.mock import MagicMock, Mock

import numpy as np


def _setup_global_mocks():
    """
    Set up mocks for modules that cannot load in the test environment.

    - sounddevice raises OSError at import when the PortAudio library is missing
    - pynput raises ImportError at import when no display server is available
    """
    try:
        import sounddevice  # noqa: F401
    except OSError:
        mock_sd = MagicMock()
        mock_sd.PortAudioError = type("PortAudioError", (Exception,), {})
        sys.modules['sounddevice'] = mock_sd

    try:
        from pynput import keyboard  # noqa: F401
    except Exception:
        mock_keyboard = MagicMock()
        mock_pynput = MagicMock()
        mock_pynput.keyboard = mock_keyboard
        sys.modules['pynput'] = mock_pynput
        sys.modules['pynput.keyboard'] = mock_keyboard


# Run mocks setup immediately when conftest is loaded
_setup_global_mocks()


import pytest

from vos.audio_recorder import AudioArtifact, AudioRecorder
from vos.credential_store import CredentialStore
from vos.output_handler import OutputHandler
from vos.pipeline import PipelineController
from vos.status import StatusSurface
from vos.transcriber import TranscriptionClient
from vos.upload_encoder import UploadEncoder


VALID_KEY = "sk-proj-" + "a" * 40


# =============================================================================
# LOGGING PROTECTION
# =============================================================================

@pytest.fixture(autouse=True)
def _protect_logging_handlers():
    """
    Protect logging handlers from being corrupted by mocks.

    MagicMock can replace handler attributes like 'level', which makes the
    logging module fail when it compares levels.
    """
    def _fix_handler_levels():
        for handler in logging.root.handlers[:]:
            if not isinstance(handler.level, int):
                handler.level = logging.NOTSET
        for name in list(logging.Logger.manager.loggerDict.keys()):
            logger = logging.getLogger(name)
            for handler in logger.handlers[:]:
                if not isinstance(handler.level, int):
                    handler.level = logging.NOTSET

    _fix_handler_levels()
    yield
    _fix_handler_levels()


# =============================================================================
# TEST DOUBLES
# =============================================================================

class InMemorySettings:
    """Dict-backed settings store."""

    def __init__(self, initial=None):
        self.values = dict(initial or {})

    def get(self, key):
        return self.values.get(key)

    def set(self, key, value):
        self.values[key] = value

    def delete(self, key):
        self.values.pop(key, None)


class RecordingStatus(StatusSurface):
    """Status surface that records every call."""

    def __init__(self):
        self.events = []

    def show(self, message, state):
        self.events.append(("show", message, state))

    def hide(self):
        self.events.append(("hide",))

    @property
    def shown(self):
        return [(e[1], e[2]) for e in self.events if e[0] == "show"]


class ManualTimer:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True

    def is_alive(self):
        return not (self.cancelled or self.fired)


class ManualScheduler:
    """Collects scheduled callbacks; tests fire them explicitly."""

    def __init__(self):
        self.timers = []

    def __call__(self, delay, callback):
        timer = ManualTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self):
        return [t for t in self.timers if t.is_alive()]

    def run_pending(self):
        for timer in self.pending:
            timer.fired = True
            timer.callback()


def run_inline(target, *args):
    target(*args)


def make_response(content: bytes, status_code: int = 200):
    response = Mock()
    response.content = content
    response.status_code = status_code
    return response


# =============================================================================
# CACHED TEST DATA GENERATION
# =============================================================================

@lru_cache(maxsize=16)
def create_test_samples(duration_sec: float = 1.0, sample_rate: int = 44100) -> np.ndarray:
    """
    Create an int16 mono sine wave shaped like sounddevice input chunks.

    Args:
        duration_sec: Duration of audio in seconds.
        sample_rate: Sample rate in Hz.

    Returns:
        Array of shape (samples, 1).
    """
    t = np.linspace(0, duration_sec, int(sample_rate * duration_sec))
    audio = (np.sin(2 * np.pi * 440 * t) * 16000).astype(np.int16)
    return audio.reshape(-1, 1)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def settings():
    return InMemorySettings()


@pytest.fixture
def credentials(settings):
    return CredentialStore(settings)


@pytest.fixture
def status():
    return RecordingStatus()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def artifact_factory(tmp_path):
    """Create finished recordings on disk."""
    def _make(content: bytes = b"fake flac bytes", name: str = "recording.flac") -> AudioArtifact:
        path = tmp_path / name
        path.write_bytes(content)
        return AudioArtifact(str(path), duration=1.0)
    return _make


@pytest.fixture
def http_session():
    """requests.Session stand-in returning a successful transcript."""
    session = Mock()
    session.post.return_value = make_response(b'{"text": "hello"}')
    return session


@pytest.fixture
def recorder(artifact_factory):
    recorder = Mock(spec=AudioRecorder)
    recorder.stop.return_value = artifact_factory()
    return recorder


@pytest.fixture
def output():
    return Mock(spec=OutputHandler)


@pytest.fixture
def pipeline(credentials, recorder, http_session, output, status, scheduler):
    """Controller wired to test doubles, running the upload stage inline."""
    return PipelineController(
        credentials=credentials,
        recorder=recorder,
        encoder=UploadEncoder(url="https://example.test/v1/audio/transcriptions"),
        client=TranscriptionClient(timeout=5, session=http_session),
        output=output,
        status=status,
        run_async=run_inline,
        schedule=scheduler,
    )


# =============================================================================
# HARDWARE DETECTION FIXTURES
# =============================================================================

@pytest.fixture(scope="session")
def has_microphone() -> bool:
    """Check if a microphone is available."""
    try:
        import sounddevice as sd
        devices = sd.query_devices()
        input_devices = [d for d in devices if d['max_input_channels'] > 0]
        return len(input_devices) > 0
    except Exception:
        return False


@pytest.fixture(autouse=True)
def _auto_skip_by_marker(request, has_microphone):
    """Automatically skip tests based on markers."""
    if request.node.get_closest_marker("requires_microphone") and not has_microphone:
        pytest.skip("No microphone available")
