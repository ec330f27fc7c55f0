"""
Transcriber Module
Sends an encoded upload to the transcription API and returns the text.
"""

import json
import logging
from typing import Optional

import requests

from vos.exceptions import ApiError, InvalidResponseError, NetworkError
from vos.upload_encoder import UploadRequest

logger = logging.getLogger(__name__)


def parse_response(content: bytes) -> str:
    """
    Extract the transcript from a response body.

    Args:
        content: Raw response body

    Returns:
        The value of the "text" field.

    Raises:
        ApiError: If the body carries an error.message instead.
        InvalidResponseError: If the body is neither.
    """
    try:
        payload = json.loads(content)
    except ValueError as e:
        raise InvalidResponseError() from e

    if not isinstance(payload, dict):
        raise InvalidResponseError()

    text = payload.get("text")
    if isinstance(text, str):
        return text

    error = payload.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        raise ApiError(error["message"])

    raise InvalidResponseError()


class TranscriptionClient:
    """Posts audio to the transcription API. Makes exactly one attempt."""

    def __init__(self, timeout: float = 60.0, session: Optional[requests.Session] = None):
        """
        Initialize transcription client.

        Args:
            timeout: Request timeout in seconds.
            session: requests session to reuse (a new one if None).
        """
        self.timeout = timeout
        self.session = session or requests.Session()

    def transcribe(self, request: UploadRequest) -> str:
        """
        Transcribe audio to text.

        Args:
            request: Encoded upload from UploadEncoder

        Returns:
            Transcribed text string.

        Raises:
            NetworkError: If the request could not be completed.
            ApiError: If the API reported an error.
            InvalidResponseError: If the response could not be parsed.
        """
        logger.info(f"Sending {len(request.body)} bytes to {request.url}")
        try:
            response = self.session.post(
                request.url,
                data=request.body,
                headers=request.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Transcription request failed: {e}")
            raise NetworkError(e) from e

        logger.debug(f"Transcription response: HTTP {response.status_code}")
        return parse_response(response.content)
