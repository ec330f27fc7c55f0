"""
Credential Store Module
Holds the provider API key in the settings store.

Whitespace and newlines are trimmed on both save and read, so a value that
was corrupted out-of-band (e.g. a hand-edited settings file) still comes
back clean. Format checks are left to the upload encoder.
"""

import logging
from typing import Optional

from vos.exceptions import EmptyCredentialError

logger = logging.getLogger(__name__)

API_KEY_SETTING = "vos_api_key"


def preview(credential: str) -> str:
    """Masked form of a credential that is safe to log."""
    if len(credential) <= 12:
        return "*" * len(credential)
    return f"{credential[:7]}...{credential[-4:]}"


class CredentialStore:
    """Saves, reads and deletes the API key."""

    def __init__(self, settings):
        """
        Initialize credential store.

        Args:
            settings: Object with get(key), set(key, value) and delete(key).
        """
        self._settings = settings

    def save(self, raw: str) -> None:
        """
        Save API key with automatic trimming.

        Raises:
            EmptyCredentialError: If nothing is left after trimming.
            StorageError: If the settings store cannot be written.
        """
        trimmed = raw.strip()
        if not trimmed:
            logger.warning("Cannot save empty API key")
            raise EmptyCredentialError()

        self._settings.set(API_KEY_SETTING, trimmed)
        logger.info(f"API key saved (length: {len(trimmed)})")

    def get(self) -> Optional[str]:
        """Return the trimmed API key, or None if none is configured."""
        stored = self._settings.get(API_KEY_SETTING)
        if stored is None:
            logger.debug("No API key configured")
            return None

        trimmed = stored.strip()
        if not trimmed:
            logger.debug("API key is empty after trimming")
            return None

        return trimmed

    def has_credential(self) -> bool:
        """Check if an API key is configured."""
        return self.get() is not None

    def delete(self) -> None:
        """Delete stored API key."""
        self._settings.delete(API_KEY_SETTING)
        logger.info("API key deleted")
