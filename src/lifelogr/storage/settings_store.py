"""User-scoped persistent settings.

The two user settings (repository path and push-by-default) live in
~/.lifelogr/settings.json. Every read goes back to disk so that a value
written by one invocation is visible to the next.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from lifelogr.models.config import parse_flag

logger = logging.getLogger(__name__)

REPOSITORY_PATH_KEY = "repository_path"
PUSH_BY_DEFAULT_KEY = "push_by_default"


class SettingsStore:
    """Reads and writes the user settings file."""

    def __init__(self, state_dir: Optional[Path] = None):
        """Initialize the settings store.

        Args:
            state_dir: Directory holding settings.json. Defaults to ~/.lifelogr/
        """
        if state_dir is None:
            state_dir = Path.home() / ".lifelogr"

        self.state_dir = Path(state_dir)
        self.settings_file = self.state_dir / "settings.json"

    def _read(self) -> Dict[str, Any]:
        if not self.settings_file.exists():
            return {}

        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read settings file {self.settings_file} ({e}), ignoring it")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Settings file {self.settings_file} does not hold an object, ignoring it")
            return {}
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        """Write settings using a temporary file and rename."""
        self.state_dir.mkdir(parents=True, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(
            dir=self.state_dir, prefix=".settings_", suffix=".json.tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)

            os.replace(temp_path, self.settings_file)
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

    def _set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)
        logger.debug(f"Stored {key}={value!r} in {self.settings_file}")

    def get_repository_path(self) -> Optional[Path]:
        """Get the stored repository path, or None if unset."""
        value = self._read().get(REPOSITORY_PATH_KEY)
        if not value:
            return None
        return Path(value)

    def set_repository_path(self, path: Path) -> None:
        """Store the repository path."""
        self._set(REPOSITORY_PATH_KEY, str(path))

    def get_push_by_default(self) -> bool:
        """Get the push-by-default flag (False if unset or unparsable)."""
        return parse_flag(self._read().get(PUSH_BY_DEFAULT_KEY))

    def set_push_by_default(self, value: bool) -> None:
        """Store the push-by-default flag."""
        self._set(PUSH_BY_DEFAULT_KEY, bool(value))

    def as_dict(self) -> Dict[str, Any]:
        """Return the stored values that are set, keyed by Settings field name."""
        data = self._read()
        return {
            key: data[key]
            for key in (REPOSITORY_PATH_KEY, PUSH_BY_DEFAULT_KEY)
            if data.get(key) is not None
        }
