"""
Settings Store Module
Persists string settings as a JSON object on disk.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from vos.exceptions import StorageError

logger = logging.getLogger(__name__)


class JsonSettingsStore:
    """Key-value store for string settings backed by a JSON file."""

    def __init__(self, path: str):
        """
        Initialize settings store.

        Args:
            path: Location of the JSON settings file. Created on first write.
        """
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read settings file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {self.path}: not a JSON object")
            return {}
        return data

    def _write(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".settings-")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2)
                os.chmod(tmp_path, 0o600)
                os.replace(tmp_path, self.path)
            except BaseException:
                os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write settings to {self.path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if absent or not a string."""
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """
        Store a value, replacing any previous one.

        Raises:
            StorageError: If the settings file cannot be written.
        """
        data = self._load()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        """Remove a value. Removing a missing key is a no-op."""
        data = self._load()
        if key not in data:
            return
        del data[key]
        self._write(data)
