"""
vos - Speech-to-Text

Press a global hotkey to record, press it again to transcribe the
recording with the OpenAI transcription API and copy the text to the
clipboard.
"""

from vos.audio_recorder import AudioArtifact, AudioRecorder
from vos.config import Config
from vos.credential_store import CredentialStore
from vos.exceptions import (
    VosError,
    ConfigurationError,
    StorageError,
    CredentialError,
    CredentialMissingError,
    EmptyCredentialError,
    InvalidCredentialFormatError,
    AudioRecordingError,
    CaptureError,
    DeviceUnavailableError,
    NotRecordingError,
    EncodeError,
    ArtifactReadError,
    TranscriptionError,
    NetworkError,
    ApiError,
    InvalidResponseError,
    OutputError,
    HotkeyDetectorError,
)
from vos.output_handler import OutputHandler, get_clipboard_content
from vos.pipeline import PipelineController, PipelineState
from vos.settings_store import JsonSettingsStore
from vos.status import ConsoleStatus, StatusState, StatusSurface
from vos.transcriber import TranscriptionClient
from vos.upload_encoder import UploadEncoder, UploadRequest

__version__ = "0.1.0"

__all__ = [
    "AudioArtifact",
    "AudioRecorder",
    "Config",
    "CredentialStore",
    "VosError",
    "ConfigurationError",
    "StorageError",
    "CredentialError",
    "CredentialMissingError",
    "EmptyCredentialError",
    "InvalidCredentialFormatError",
    "AudioRecordingError",
    "CaptureError",
    "DeviceUnavailableError",
    "NotRecordingError",
    "EncodeError",
    "ArtifactReadError",
    "TranscriptionError",
    "NetworkError",
    "ApiError",
    "InvalidResponseError",
    "OutputError",
    "HotkeyDetectorError",
    "OutputHandler",
    "get_clipboard_content",
    "PipelineController",
    "PipelineState",
    "JsonSettingsStore",
    "ConsoleStatus",
    "StatusState",
    "StatusSurface",
    "TranscriptionClient",
    "UploadEncoder",
    "UploadRequest",
]
