"""Hierarchical line editor settings with JSON persistence.

Three-level precedence: global < project < CLI overrides.
"""

from __future__ import annotations

import json
import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any

from pi.lineedit.keybindings import KeybindingsConfig, KeybindingsManager
from pi.lineedit.render import DEFAULT_SEPARATOR

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".pi"
SETTINGS_FILE_NAME = "lineedit.json"

DEFAULT_CAPACITY = 256
DEFAULT_HISTORY_LIMIT = 100


def _settings_defaults() -> dict[str, Any]:
    """Default settings values."""
    return {
        "capacity": None,
        "separator": None,
        "historyLimit": None,
        "keybindings": None,
    }


# --- Deep merge ---


def deep_merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    For nested dicts, merge recursively. For primitives and arrays,
    override value wins completely.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


# --- SettingsManager ---


class SettingsManager:
    """Manages line editor settings loaded from JSON files.

    Use factory methods (create, in_memory) instead of calling constructor directly.
    """

    def __init__(
        self,
        *,
        settings_path: str | None,
        project_settings_path: str | None,
        initial_settings: dict[str, Any],
        persist: bool = True,
        load_error: Exception | None = None,
    ) -> None:
        self._settings_path = settings_path
        self._project_settings_path = project_settings_path
        self._global_settings = dict(initial_settings)
        self._persist = persist
        self._load_error = load_error

        project = self._load_project_settings()
        self._settings = deep_merge_settings(self._global_settings, project)

    # --- Factory methods ---

    @classmethod
    def create(cls, cwd: str, config_dir: str | None = None) -> SettingsManager:
        """Create a settings manager backed by the global and project files."""
        cdir = config_dir or _default_config_dir()
        settings_path = os.path.join(cdir, SETTINGS_FILE_NAME)
        project_settings_path = os.path.join(cwd, CONFIG_DIR_NAME, SETTINGS_FILE_NAME)

        settings, error = _load_from_file(settings_path)
        if error is not None:
            logger.warning("ignoring unreadable settings file %s: %s", settings_path, error)
        return cls(
            settings_path=settings_path,
            project_settings_path=project_settings_path,
            initial_settings=settings,
            persist=True,
            load_error=error,
        )

    @classmethod
    def in_memory(cls, settings: dict[str, Any] | None = None) -> SettingsManager:
        """Create an in-memory settings manager for testing."""
        return cls(
            settings_path=None,
            project_settings_path=None,
            initial_settings=settings or {},
            persist=False,
        )

    # --- Core operations ---

    def reload(self) -> None:
        """Reload all settings from disk."""
        if self._settings_path:
            self._global_settings, self._load_error = _load_from_file(self._settings_path)
        project = self._load_project_settings()
        self._settings = deep_merge_settings(self._global_settings, project)

    def apply_overrides(self, overrides: dict[str, Any]) -> None:
        """Apply CLI-level overrides on top of merged settings."""
        self._settings = deep_merge_settings(self._settings, overrides)

    def get_global_settings(self) -> dict[str, Any]:
        return deepcopy(self._global_settings)

    @property
    def settings(self) -> dict[str, Any]:
        """Current merged settings (read-only view)."""
        return self._settings

    @property
    def load_error(self) -> Exception | None:
        return self._load_error

    # --- Getters ---

    def get_capacity(self) -> int:
        value = self._settings.get("capacity")
        if value is None:
            return DEFAULT_CAPACITY
        if not isinstance(value, int) or isinstance(value, bool) or value < 3:
            logger.warning("invalid capacity %r, using %d", value, DEFAULT_CAPACITY)
            return DEFAULT_CAPACITY
        return value

    def get_separator(self) -> str:
        value = self._settings.get("separator")
        return DEFAULT_SEPARATOR if value is None else str(value)

    def get_history_limit(self) -> int:
        value = self._settings.get("historyLimit")
        if value is None:
            return DEFAULT_HISTORY_LIMIT
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            logger.warning("invalid historyLimit %r, using %d", value, DEFAULT_HISTORY_LIMIT)
            return DEFAULT_HISTORY_LIMIT
        return value

    def get_keybindings(self) -> KeybindingsConfig:
        return dict(self._settings.get("keybindings") or {})

    def create_keybindings(self) -> KeybindingsManager:
        return KeybindingsManager(self.get_keybindings())

    # --- Setters ---

    def set_capacity(self, capacity: int) -> None:
        self._set("capacity", capacity)

    def set_separator(self, separator: str) -> None:
        self._set("separator", separator)

    def set_history_limit(self, limit: int) -> None:
        self._set("historyLimit", limit)

    def set_keybindings(self, keybindings: KeybindingsConfig) -> None:
        self._set("keybindings", dict(keybindings))

    def _set(self, field_name: str, value: Any) -> None:
        self._global_settings[field_name] = value
        self._save()

    # --- Persistence ---

    def _save(self) -> None:
        """Write global settings to disk, then re-merge."""
        if self._persist and self._settings_path:
            # Don't overwrite corrupted files
            if self._load_error:
                logger.warning("not saving over unreadable settings file %s", self._settings_path)
            else:
                data = {k: v for k, v in self._global_settings.items() if v is not None}
                os.makedirs(os.path.dirname(self._settings_path), exist_ok=True)
                Path(self._settings_path).write_text(
                    json.dumps(data, indent=2, ensure_ascii=False) + "\n",
                    encoding="utf-8",
                )

        project = self._load_project_settings()
        self._settings = deep_merge_settings(self._global_settings, project)

    def _load_project_settings(self) -> dict[str, Any]:
        """Load project-level settings from disk."""
        if not self._project_settings_path:
            return {}
        settings, error = _load_from_file(self._project_settings_path)
        if error is not None:
            logger.warning(
                "ignoring unreadable settings file %s: %s", self._project_settings_path, error
            )
        return settings


def _load_from_file(path: str) -> tuple[dict[str, Any], Exception | None]:
    """Load settings from a JSON file. Returns (settings, error)."""
    if not os.path.exists(path):
        return {}, None
    try:
        content = Path(path).read_text(encoding="utf-8")
        settings = json.loads(content)
    except (OSError, json.JSONDecodeError) as e:
        return {}, e
    if not isinstance(settings, dict):
        return {}, ValueError(f"{path}: expected a JSON object")
    return deep_merge_settings(_settings_defaults(), settings), None


def _default_config_dir() -> str:
    """Default configuration directory (~/.pi)."""
    return os.path.join(os.path.expanduser("~"), ".pi")
