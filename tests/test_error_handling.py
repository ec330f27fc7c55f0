"""
Test suite for the exception hierarchy.

Every pipeline failure is a VosError subclass with a readable message.
"""

import unittest

from vos.exceptions import (
    ApiError,
    ArtifactReadError,
    AudioRecordingError,
    CaptureError,
    ConfigurationError,
    CredentialError,
    CredentialMissingError,
    DeviceUnavailableError,
    EmptyCredentialError,
    EncodeError,
    HotkeyDetectorError,
    InvalidCredentialFormatError,
    InvalidResponseError,
    NetworkError,
    NotRecordingError,
    OutputError,
    StorageError,
    TranscriptionError,
    VosError,
)


class TestHierarchy(unittest.TestCase):

    def test_all_derive_from_vos_error(self):
        for exc in (ConfigurationError, StorageError, CredentialError, AudioRecordingError,
                    EncodeError, TranscriptionError, OutputError, HotkeyDetectorError):
            with self.subTest(exc=exc.__name__):
                self.assertTrue(issubclass(exc, VosError))

    def test_credential_errors(self):
        for exc in (CredentialMissingError, EmptyCredentialError, InvalidCredentialFormatError):
            with self.subTest(exc=exc.__name__):
                self.assertTrue(issubclass(exc, CredentialError))

    def test_capture_errors(self):
        self.assertTrue(issubclass(DeviceUnavailableError, CaptureError))
        self.assertTrue(issubclass(NotRecordingError, CaptureError))
        self.assertTrue(issubclass(CaptureError, AudioRecordingError))

    def test_encode_errors(self):
        self.assertTrue(issubclass(ArtifactReadError, EncodeError))

    def test_transcription_errors(self):
        for exc in (NetworkError, ApiError, InvalidResponseError):
            with self.subTest(exc=exc.__name__):
                self.assertTrue(issubclass(exc, TranscriptionError))


class TestMessages(unittest.TestCase):

    def test_default_messages(self):
        self.assertEqual(str(NotRecordingError()), "No recording in progress")
        self.assertEqual(str(DeviceUnavailableError()), "Failed to start recording")
        self.assertEqual(str(InvalidResponseError()), "Invalid API response")
        self.assertEqual(str(EmptyCredentialError()), "Cannot save empty API key")
        self.assertIn("No API key configured", str(CredentialMissingError()))

    def test_api_error_message(self):
        error = ApiError("rate limited")
        self.assertEqual(str(error), "API error: rate limited")
        self.assertEqual(error.api_message, "rate limited")

    def test_network_error_wraps_cause(self):
        cause = ConnectionError("connection refused")
        error = NetworkError(cause)
        self.assertIs(error.cause, cause)
        self.assertEqual(str(error), "Network error: connection refused")

    def test_custom_message_overrides_default(self):
        self.assertEqual(str(DeviceUnavailableError("Microphone access denied")),
                         "Microphone access denied")
