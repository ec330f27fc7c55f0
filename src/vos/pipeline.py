"""
Pipeline Controller

Sequences one capture-transcribe-deliver run at a time:

    IDLE -> RECORDING -> STOPPING -> TRANSCRIBING -> DELIVERING -> IDLE

with ERROR_DISPLAY reachable from any active state. Every failure shows
exactly one error on the status surface and returns to IDLE after a fixed
display interval. There is no retry.

The only external event is the trigger. A trigger while the pipeline is
past RECORDING is dropped, never queued.
"""

import logging
import threading
from enum import Enum, auto
from typing import Callable, List, Optional

from vos.audio_recorder import AudioArtifact
from vos.exceptions import (
    AudioRecordingError,
    CredentialMissingError,
    OutputError,
    VosError,
)
from vos.status import StatusState

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "Please configure API key in Settings"


class PipelineState(Enum):
    """Pipeline state machine states."""
    IDLE = auto()
    RECORDING = auto()
    STOPPING = auto()
    TRANSCRIBING = auto()
    DELIVERING = auto()
    ERROR_DISPLAY = auto()


def start_thread(target: Callable, *args) -> None:
    """Run target on a daemon worker thread."""
    threading.Thread(target=target, args=args, daemon=True, name="vos-transcribe").start()


def start_timer(delay: float, callback: Callable[[], None]) -> threading.Timer:
    """Run callback once after delay seconds on a daemon timer thread."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class PipelineController:
    """Owns the pipeline state and drives all components through it."""

    def __init__(
        self,
        credentials,
        recorder,
        encoder,
        client,
        output,
        status,
        error_display_seconds: float = 2.0,
        success_display_seconds: float = 1.5,
        missing_key_display_seconds: float = 2.5,
        run_async: Callable = start_thread,
        schedule: Callable = start_timer,
    ):
        """
        Initialize the controller.

        Args:
            credentials: CredentialStore
            recorder: AudioRecorder
            encoder: UploadEncoder
            client: TranscriptionClient
            output: OutputHandler (clipboard sink)
            status: StatusSurface
            error_display_seconds: How long errors stay on screen before IDLE
            success_display_seconds: How long the success message stays on screen
            missing_key_display_seconds: Display time for the missing-key error
            run_async: Runs the upload stage off the trigger thread
            schedule: schedule(delay, callback) -> timer with cancel() and is_alive()
        """
        self.credentials = credentials
        self.recorder = recorder
        self.encoder = encoder
        self.client = client
        self.output = output
        self.status = status
        self.error_display_seconds = error_display_seconds
        self.success_display_seconds = success_display_seconds
        self.missing_key_display_seconds = missing_key_display_seconds
        self._run_async = run_async
        self._schedule = schedule

        self._lock = threading.RLock()
        self._state = PipelineState.IDLE
        self._status_generation = 0
        self._timers: List = []

    @property
    def state(self) -> PipelineState:
        """Current pipeline state."""
        return self._state

    def handle_trigger(self) -> None:
        """Called on each hotkey press - start or stop recording."""
        artifact = None
        with self._lock:
            if self._state is PipelineState.IDLE:
                self._start_recording()
            elif self._state is PipelineState.RECORDING:
                artifact = self._stop_recording()
            else:
                logger.debug(f"Trigger ignored in state {self._state.name}")
                return

        if artifact is not None:
            self._run_async(self._transcribe, artifact)

    def shutdown(self) -> None:
        """Abandon any recording, cancel pending timers and return to IDLE."""
        with self._lock:
            for timer in self._timers:
                timer.cancel()
            self._timers.clear()

            if self._state is PipelineState.RECORDING:
                try:
                    self.recorder.stop().delete()
                except AudioRecordingError as e:
                    logger.warning(f"Discarding recording on shutdown failed: {e}")

            if self._state is not PipelineState.TRANSCRIBING:
                self._set_state(PipelineState.IDLE)
            self.status.hide()

    # State transitions. All of these expect self._lock to be held.

    def _set_state(self, state: PipelineState) -> None:
        logger.debug(f"State: {self._state.name} -> {state.name}")
        self._state = state

    def _show(self, message: str, state: StatusState) -> int:
        self._status_generation += 1
        self.status.show(message, state)
        return self._status_generation

    def _after(self, delay: float, callback: Callable[[], None]) -> None:
        self._timers = [t for t in self._timers if t.is_alive()]
        self._timers.append(self._schedule(delay, callback))

    def _start_recording(self) -> None:
        if self.credentials.get() is None:
            self._fail(CredentialMissingError(MISSING_KEY_MESSAGE),
                       self.missing_key_display_seconds)
            return

        try:
            self.recorder.start()
        except AudioRecordingError as e:
            self._fail(e)
            return
        except Exception as e:
            logger.exception("Unexpected error starting capture")
            self._fail(VosError(f"Unexpected error: {e}"))
            return

        self._set_state(PipelineState.RECORDING)
        self._show("Recording...", StatusState.RECORDING)
        logger.info("Recording started")

    def _stop_recording(self) -> Optional[AudioArtifact]:
        self._set_state(PipelineState.STOPPING)
        try:
            artifact = self.recorder.stop()
        except AudioRecordingError as e:
            self._fail(e)
            return None
        except Exception as e:
            logger.exception("Unexpected error stopping capture")
            self._fail(VosError(f"Unexpected error: {e}"))
            return None

        logger.info(f"Recording stopped. Duration: {artifact.duration:.1f}s")
        self._set_state(PipelineState.TRANSCRIBING)
        self._show("Transcribing...", StatusState.TRANSCRIBING)
        return artifact

    def _deliver(self, text: str) -> None:
        self._set_state(PipelineState.DELIVERING)
        try:
            self.output.deliver(text)
        except OutputError as e:
            self._fail(e)
            return

        logger.debug(f"Transcription: {text}")
        generation = self._show("Copied!", StatusState.SUCCESS)
        self._after(self.success_display_seconds, lambda: self._hide_if_current(generation))
        self._set_state(PipelineState.IDLE)

    def _fail(self, error: Exception, display_seconds: Optional[float] = None) -> None:
        logger.error(f"Pipeline failed during {self._state.name}: {error}")
        self._set_state(PipelineState.ERROR_DISPLAY)
        generation = self._show(f"Error: {error}", StatusState.ERROR)
        if display_seconds is None:
            display_seconds = self.error_display_seconds
        self._after(display_seconds, lambda: self._finish_error(generation))

    # Timer and worker callbacks. These take the lock themselves.

    def _hide_if_current(self, generation: int) -> None:
        with self._lock:
            if self._status_generation == generation:
                self.status.hide()

    def _finish_error(self, generation: int) -> None:
        with self._lock:
            if self._status_generation == generation:
                self.status.hide()
            if self._state is PipelineState.ERROR_DISPLAY:
                self._set_state(PipelineState.IDLE)

    def _request_transcript(self, artifact: AudioArtifact) -> str:
        credential = self.credentials.get()
        if credential is None:
            raise CredentialMissingError()
        request = self.encoder.encode(credential, artifact)
        return self.client.transcribe(request)

    def _transcribe(self, artifact: AudioArtifact) -> None:
        """Upload stage: one request, then deliver or fail. The artifact is always deleted."""
        try:
            with artifact:
                text = self._request_transcript(artifact)
        except VosError as e:
            with self._lock:
                self._fail(e)
            return
        except Exception as e:
            logger.exception("Unexpected error during transcription")
            with self._lock:
                self._fail(VosError(f"Unexpected error: {e}"))
            return

        with self._lock:
            self._deliver(text)
