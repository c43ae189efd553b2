"""
Options — JSON-file key/value settings store.

Mirrors the editor extension's settings file (~/.hackerlog.config.json).
Values are re-read on every lookup so edits made by the editor or by the
CLI are picked up without a restart.
"""

import json
from enum import Enum
from pathlib import Path

from .config import log as default_log, config_file, log_file
from .validators import validate_editor_key, validate_proxy


class Settings(str, Enum):
    STATUS_BAR_ICON = "statusBarIcon"
    EDITOR_KEY = "editorKey"
    PROXY = "proxy"
    DEBUG = "debug"


_VALIDATORS = {
    Settings.EDITOR_KEY: validate_editor_key,
    Settings.PROXY: validate_proxy,
}


class Options:
    def __init__(self, path=None, logger=None, log_path=None):
        self._path = Path(path) if path else config_file()
        self._log_path = Path(log_path) if log_path else log_file()
        self._log = logger or default_log

    @property
    def config_file(self) -> Path:
        return self._path

    @property
    def log_file(self) -> Path:
        return self._log_path

    def load(self) -> dict:
        """Whole settings dict; {} when the file is missing or unreadable."""
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            self._log.warning("Could not read %s: %s", self._path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get_setting(self, key):
        """String value, or None. Hand-edited non-string values other than booleans read as unset."""
        key = Settings(key)
        value = self.load().get(key.value)
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        self._log.warning("Ignoring non-string %s in %s", key.value, self._path)
        return None

    def get_bool(self, key, default=False) -> bool:
        value = self.get_setting(key)
        if value is None:
            return default
        return value.strip().lower() == "true"

    def set_setting(self, key, value):
        """
        Validate and persist one setting.
        Returns None on success, or the rejection message (nothing written).
        """
        key = Settings(key)
        validator = _VALIDATORS.get(key)
        if validator is not None:
            error = validator(value)
            if error:
                self._log.warning("Rejected %s: %s", key.value, error)
                return error
            value = (value or "").strip()

        content = self.load()
        content[key.value] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding="utf-8") as f:
                json.dump(content, f, indent=4)
        except OSError as e:
            self._log.error("Could not write to %s: %s", self._path, e)
            return f"could not write to {self._path}"
        self._log.debug("Setting %s saved to %s", key.value, self._path)
        return None
