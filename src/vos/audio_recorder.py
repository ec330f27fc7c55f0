"""
Audio Recorder Module
Captures audio from microphone and finalizes it into a temporary FLAC file.
"""

import logging
import os
import tempfile
import time
from collections import deque
from dataclasses import dataclass
from typing import Optional

import numpy as np
import sounddevice as sd
import soundfile as sf

from vos.exceptions import (
    AudioRecordingError,
    CaptureError,
    DeviceUnavailableError,
    NotRecordingError,
)

logger = logging.getLogger(__name__)

# Container written for upload; also used for the multipart filename and content type
AUDIO_EXTENSION = "flac"


class AudioArtifact:
    """
    A finished recording on disk.

    Used as a context manager, the file is removed when the block exits,
    whatever the outcome of the block.
    """

    def __init__(self, path: str, extension: str = AUDIO_EXTENSION, duration: float = 0.0):
        self.path = path
        self.extension = extension
        self.duration = duration

    @property
    def exists(self) -> bool:
        return os.path.exists(self.path)

    def read_bytes(self) -> bytes:
        with open(self.path, "rb") as f:
            return f.read()

    def delete(self) -> None:
        """Remove the file. Missing files are ignored."""
        try:
            os.unlink(self.path)
            logger.debug(f"Deleted audio artifact {self.path}")
        except FileNotFoundError:
            pass

    def __enter__(self) -> "AudioArtifact":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.delete()

    def __repr__(self) -> str:
        return f"AudioArtifact(path={self.path!r}, duration={self.duration:.1f})"


@dataclass
class CaptureSession:
    """One open recording."""
    started_at: float
    stream: sd.InputStream


class AudioRecorder:
    """Records audio from microphone into a temporary file."""

    def __init__(self, sample_rate: int = 44100, channels: int = 1,
                 temp_dir: Optional[str] = None):
        """
        Initialize audio recorder.

        Args:
            sample_rate: Sample rate in Hz (default 44100)
            channels: Number of audio channels (default 1 for mono)
            temp_dir: Directory for recordings (default: system temp dir)
        """
        self.sample_rate = sample_rate
        self.channels = channels
        self.temp_dir = temp_dir
        self.buffer: deque = deque()
        self._session: Optional[CaptureSession] = None

    def _audio_callback(self, indata: np.ndarray, frames: int,
                        time_info, status) -> None:
        """Callback for audio stream - appends chunks to buffer."""
        if status:
            logger.debug(f"Audio callback status: {status}")
        self.buffer.append(indata.copy())

    def start(self) -> None:
        """
        Begin capturing audio from default input device.

        Raises:
            DeviceUnavailableError: If the device cannot be opened or access is denied.
            AudioRecordingError: If a recording is already in progress.
        """
        if self._session is not None:
            raise AudioRecordingError("Recording already in progress")

        self.buffer.clear()
        stream = None
        try:
            stream = sd.InputStream(
                samplerate=self.sample_rate,
                channels=self.channels,
                dtype='int16',
                callback=self._audio_callback
            )
            stream.start()
        except (sd.PortAudioError, OSError) as e:
            if stream is not None:
                stream.close()
            logger.error(f"Could not open input device: {e}")
            raise DeviceUnavailableError(f"Failed to start recording: {e}") from e

        self._session = CaptureSession(started_at=time.monotonic(), stream=stream)
        logger.debug(f"Capture started (sample_rate={self.sample_rate}, channels={self.channels})")

    def stop(self) -> AudioArtifact:
        """
        Stop recording and write the captured audio to a temporary file.

        The input stream is closed on every path, including failures.

        Returns:
            AudioArtifact pointing at the finished FLAC file.

        Raises:
            NotRecordingError: If no recording is in progress.
            CaptureError: If the stream fails to stop or nothing was captured.
            AudioRecordingError: If the file cannot be written.
        """
        session = self._session
        if session is None:
            raise NotRecordingError()
        self._session = None

        try:
            session.stream.stop()
        except (sd.PortAudioError, OSError) as e:
            raise CaptureError(f"Failed to stop recording: {e}") from e
        finally:
            session.stream.close()

        elapsed = time.monotonic() - session.started_at
        logger.debug(f"Capture stopped after {elapsed:.1f}s")

        if not self.buffer:
            raise CaptureError("No audio recorded")

        audio_data = np.concatenate(list(self.buffer))
        duration = self.get_duration()
        self.buffer.clear()

        path = None
        try:
            fd, path = tempfile.mkstemp(
                prefix="recording_", suffix=f".{AUDIO_EXTENSION}", dir=self.temp_dir
            )
            os.close(fd)
            sf.write(path, audio_data, self.sample_rate, format="FLAC", subtype="PCM_16")
        except (RuntimeError, OSError) as e:
            if path is not None and os.path.exists(path):
                os.unlink(path)
            raise AudioRecordingError(f"Failed to write recording: {e}") from e

        return AudioArtifact(path, duration=duration)

    def get_duration(self) -> float:
        """Return current recording duration in seconds."""
        if not self.buffer:
            return 0.0
        total_samples = sum(chunk.shape[0] for chunk in self.buffer)
        return total_samples / self.sample_rate

    @property
    def is_active(self) -> bool:
        """Whether recording is currently active."""
        return self._session is not None
