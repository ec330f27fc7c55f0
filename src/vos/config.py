"""
Configuration Module
Loads and validates settings from environment variables.
"""

import os
import sys
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv


DEFAULT_API_URL = "https://api.openai.com/v1/audio/transcriptions"
DEFAULT_MODEL = "gpt-4o-transcribe"
DEFAULT_SETTINGS_PATH = "~/.config/vos/settings.json"

# Sample rates the capture device is commonly able to open
COMMON_SAMPLE_RATES = [8000, 16000, 22050, 44100, 48000]


def default_hotkey() -> str:
    """Platform default toggle hotkey in pynput GlobalHotKeys syntax."""
    if sys.platform == "darwin":
        return "<cmd>+<shift>+r"
    return "<ctrl>+<shift>+r"


@dataclass
class Config:
    """Application configuration from environment variables."""

    # Provider
    api_url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    request_timeout: float = 60.0

    # Capture
    sample_rate: int = 44100

    # Trigger
    hotkey: str = field(default_factory=default_hotkey)

    # Settings persistence
    settings_path: str = field(default_factory=lambda: os.path.expanduser(DEFAULT_SETTINGS_PATH))

    # Status display windows (seconds)
    error_display_seconds: float = 2.0
    success_display_seconds: float = 1.5
    missing_key_display_seconds: float = 2.5

    debug: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """
        Load configuration from environment variables.

        Environment Variables:
            VOS_API_URL: Optional. Transcription endpoint (default: OpenAI audio transcriptions).
            VOS_MODEL: Optional. Transcription model (default: gpt-4o-transcribe).
            VOS_REQUEST_TIMEOUT: Optional. HTTP timeout in seconds (default: 60).
            VOS_SAMPLE_RATE: Optional. Capture sample rate in Hz (default: 44100).
            VOS_HOTKEY: Optional. Toggle hotkey, e.g. "<ctrl>+<alt>+r" (platform default if not set).
            VOS_SETTINGS_PATH: Optional. Settings file (default: ~/.config/vos/settings.json).
            VOS_ERROR_DISPLAY_SECONDS: Optional. Error message display time (default: 2.0).
            VOS_SUCCESS_DISPLAY_SECONDS: Optional. Success message display time (default: 1.5).
            VOS_MISSING_KEY_DISPLAY_SECONDS: Optional. Missing key message display time (default: 2.5).
            VOS_DEBUG: Optional. Enable debug logging (default: false).

        Returns:
            Config instance with loaded values.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        load_dotenv()

        def parse_bool(value: str, default: bool) -> bool:
            if not value:
                return default
            return value.lower() in ("true", "1", "yes")

        def parse_number(name: str, default: str, kind=float):
            raw = os.environ.get(name, default)
            try:
                return kind(raw)
            except ValueError:
                raise ValueError(f"{name} must be a number. Got: {raw}")

        return cls(
            api_url=os.environ.get("VOS_API_URL", DEFAULT_API_URL),
            model=os.environ.get("VOS_MODEL", DEFAULT_MODEL),
            request_timeout=parse_number("VOS_REQUEST_TIMEOUT", "60"),
            sample_rate=parse_number("VOS_SAMPLE_RATE", "44100", int),
            hotkey=os.environ.get("VOS_HOTKEY") or default_hotkey(),
            settings_path=os.path.expanduser(
                os.environ.get("VOS_SETTINGS_PATH", DEFAULT_SETTINGS_PATH)
            ),
            error_display_seconds=parse_number("VOS_ERROR_DISPLAY_SECONDS", "2.0"),
            success_display_seconds=parse_number("VOS_SUCCESS_DISPLAY_SECONDS", "1.5"),
            missing_key_display_seconds=parse_number("VOS_MISSING_KEY_DISPLAY_SECONDS", "2.5"),
            debug=parse_bool(os.environ.get("VOS_DEBUG", ""), False),
        )

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of warning messages (empty if no warnings).

        Raises:
            ValueError: If configuration values are invalid.
        """
        warnings = []

        if not self.api_url.startswith(("http://", "https://")):
            raise ValueError(f"VOS_API_URL must be an http(s) URL. Got: {self.api_url}")

        if self.api_url.startswith("http://"):
            warnings.append("VOS_API_URL uses plain http; the API key will be sent unencrypted")

        if not self.model.strip():
            raise ValueError("VOS_MODEL must not be empty")

        if self.request_timeout <= 0:
            raise ValueError("VOS_REQUEST_TIMEOUT must be positive")

        if self.sample_rate <= 0:
            raise ValueError("VOS_SAMPLE_RATE must be positive")

        if self.sample_rate not in COMMON_SAMPLE_RATES:
            warnings.append(
                f"Unusual sample rate {self.sample_rate}. "
                f"Common values are: {COMMON_SAMPLE_RATES}"
            )

        if not self.hotkey.strip():
            raise ValueError("VOS_HOTKEY must not be empty")

        for name in ("error_display_seconds", "success_display_seconds",
                     "missing_key_display_seconds"):
            if getattr(self, name) < 0:
                raise ValueError(f"VOS_{name.upper()} must be non-negative")

        return warnings
