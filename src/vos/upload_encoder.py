"""
Upload Encoder Module
Builds the multipart/form-data request for the transcription endpoint.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Dict, Optional

from vos.audio_recorder import AudioArtifact
from vos.config import DEFAULT_API_URL, DEFAULT_MODEL
from vos.credential_store import preview
from vos.exceptions import ArtifactReadError, InvalidCredentialFormatError

logger = logging.getLogger(__name__)

CREDENTIAL_PREFIX = "sk-"
CREDENTIAL_MIN_LENGTH = 20


@dataclass
class UploadRequest:
    """An encoded transcription request, built fresh for each attempt."""
    url: str
    credential: str
    boundary: str
    body: bytes

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.credential}",
            "Content-Type": f"multipart/form-data; boundary={self.boundary}",
        }

    def __repr__(self) -> str:
        return (
            f"UploadRequest(url={self.url!r}, credential={preview(self.credential)!r}, "
            f"boundary={self.boundary!r}, body=<{len(self.body)} bytes>)"
        )


def validate_credential_format(credential: str) -> None:
    """
    Check the API key looks like a provider key.

    Raises:
        InvalidCredentialFormatError: On a wrong prefix or a key that is too short.
    """
    if not credential.startswith(CREDENTIAL_PREFIX):
        raise InvalidCredentialFormatError(
            f"Invalid API key format (must start with '{CREDENTIAL_PREFIX}')"
        )
    if len(credential) < CREDENTIAL_MIN_LENGTH:
        raise InvalidCredentialFormatError(
            f"API key seems too short (minimum {CREDENTIAL_MIN_LENGTH} characters)"
        )


def new_boundary() -> str:
    """Random multipart boundary, unique per request."""
    return f"Boundary-{str(uuid.uuid4()).upper()}"


def build_multipart_body(boundary: str, model: str, audio: bytes, extension: str) -> bytes:
    """
    Encode the model field and the audio file as multipart/form-data.

    Args:
        boundary: Boundary token (without the leading dashes)
        model: Transcription model identifier
        audio: Complete audio file contents
        extension: Audio extension, used for the filename and content type

    Returns:
        The request body.
    """
    delimiter = f"--{boundary}\r\n".encode("utf-8")
    parts = [
        delimiter,
        b'Content-Disposition: form-data; name="model"\r\n\r\n',
        f"{model}\r\n".encode("utf-8"),
        delimiter,
        f'Content-Disposition: form-data; name="file"; filename="audio.{extension}"\r\n'.encode("utf-8"),
        f"Content-Type: audio/{extension}\r\n\r\n".encode("utf-8"),
        audio,
        b"\r\n",
        f"--{boundary}--\r\n".encode("utf-8"),
    ]
    return b"".join(parts)


class UploadEncoder:
    """Turns a credential and a recording into an UploadRequest."""

    def __init__(self, url: str = DEFAULT_API_URL, model: str = DEFAULT_MODEL):
        self.url = url
        self.model = model

    def encode(self, credential: str, artifact: AudioArtifact,
               boundary: Optional[str] = None) -> UploadRequest:
        """
        Build the upload request.

        The credential is validated before the artifact is touched, so a bad
        key never results in a request.

        Args:
            credential: Provider API key
            artifact: Finished recording
            boundary: Fixed boundary (tests); random if None

        Returns:
            UploadRequest ready for TranscriptionClient.transcribe().

        Raises:
            InvalidCredentialFormatError: If the key fails the format check.
            ArtifactReadError: If the recording cannot be read in full.
        """
        validate_credential_format(credential)

        try:
            audio = artifact.read_bytes()
        except OSError as e:
            raise ArtifactReadError(f"Failed to read recording {artifact.path}: {e}") from e

        boundary = boundary or new_boundary()
        body = build_multipart_body(boundary, self.model, audio, artifact.extension)
        logger.debug(
            f"Encoded upload: key={preview(credential)}, audio={len(audio)} bytes, "
            f"body={len(body)} bytes"
        )
        return UploadRequest(url=self.url, credential=credential, boundary=boundary, body=body)
