"""
Custom Exceptions for vos.

This module defines the exception hierarchy used throughout the application.
Every failure of a pipeline run is one of these, and its str() is the
human-readable message shown on the status surface.
"""


class VosError(Exception):
    """Base exception for all vos errors."""
    pass


class ConfigurationError(VosError):
    """Error in application configuration."""
    pass


class StorageError(VosError):
    """Error related to settings storage operations."""
    pass


# Credential errors

class CredentialError(VosError):
    """Error related to the provider API key."""
    pass


class CredentialMissingError(CredentialError):
    """No API key is configured."""

    def __init__(self, message: str = "No API key configured. Please add one in Settings."):
        super().__init__(message)


class EmptyCredentialError(CredentialError):
    """API key is empty after trimming whitespace."""

    def __init__(self, message: str = "Cannot save empty API key"):
        super().__init__(message)


class InvalidCredentialFormatError(CredentialError):
    """API key does not match the provider's expected format."""
    pass


# Capture errors

class AudioRecordingError(VosError):
    """Error recording audio from microphone."""
    pass


class CaptureError(AudioRecordingError):
    """Error in the capture session lifecycle."""
    pass


class DeviceUnavailableError(CaptureError):
    """Input device could not be opened or access was denied."""

    def __init__(self, message: str = "Failed to start recording"):
        super().__init__(message)


class NotRecordingError(CaptureError):
    """Stop was requested without an active capture session."""

    def __init__(self, message: str = "No recording in progress"):
        super().__init__(message)


# Upload encoding errors

class EncodeError(VosError):
    """Error building the upload request."""
    pass


class ArtifactReadError(EncodeError):
    """Recorded audio could not be read in full."""
    pass


# Transcription errors

class TranscriptionError(VosError):
    """Error transcribing audio via API."""
    pass


class NetworkError(TranscriptionError):
    """Transport-level failure talking to the provider."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Network error: {cause}")


class ApiError(TranscriptionError):
    """Provider returned a structured error."""

    def __init__(self, message: str):
        self.api_message = message
        super().__init__(f"API error: {message}")


class InvalidResponseError(TranscriptionError):
    """Provider response could not be interpreted."""

    def __init__(self, message: str = "Invalid API response"):
        super().__init__(message)


# Surfaces

class OutputError(VosError):
    """Error outputting text to clipboard."""
    pass


class HotkeyDetectorError(VosError):
    """Error when hotkey detector fails to initialize or start."""
    pass
