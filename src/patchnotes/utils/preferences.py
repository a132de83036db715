"""User preferences persistence for the patch notes generator.

Stores and retrieves settings (translation API key, output folder, source
language, request timing) from a JSON file in the user's home directory.
Defaults are provided for all settings, and the API key and project id can
be overridden through environment variables.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

PREFERENCES_ENV_VAR = "PATCHNOTES_PREFERENCES"
API_KEY_ENV_VAR = "GOOGLE_TRANSLATE_API_KEY"
PROJECT_ID_ENV_VAR = "GOOGLE_CLOUD_PROJECT"

_DEFAULT_PREFERENCES_PATH = Path.home() / ".patchnotes_generator.json"

# Default API keys (empty strings, user must configure)
DEFAULT_API_KEYS: Dict[str, str] = {
    "google_translate_api_key": "",
    "google_project_id": "",
}

DEFAULT_PREFERENCES: Dict[str, Any] = {
    "output_dir": "Assets/Resources/UpdateLogs",
    "source_language": "ko-KR",
    "request_timeout": 30,
    "delay_between_targets": 0.12,
    "log_file": "",
    "api_keys": DEFAULT_API_KEYS,
}


def get_preferences_path() -> Path:
    """Return the preferences file location, honoring the env override."""
    override = os.environ.get(PREFERENCES_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return _DEFAULT_PREFERENCES_PATH


def get_api_keys(preferences: Dict[str, Any]) -> Dict[str, str]:
    """Retrieve API keys from preferences with defaults and env overrides.

    ``GOOGLE_TRANSLATE_API_KEY`` and ``GOOGLE_CLOUD_PROJECT`` take precedence
    over stored values when set to a non-empty string.

    Args:
        preferences: The loaded preferences dictionary.

    Returns:
        A dictionary mapping API key names to their values.
    """
    stored = preferences.get("api_keys", {})
    if not isinstance(stored, dict):
        stored = {}
    result = DEFAULT_API_KEYS.copy()
    result.update({k: str(v) for k, v in stored.items() if v is not None})

    env_key = os.environ.get(API_KEY_ENV_VAR, "").strip()
    if env_key:
        result["google_translate_api_key"] = env_key
    env_project = os.environ.get(PROJECT_ID_ENV_VAR, "").strip()
    if env_project:
        result["google_project_id"] = env_project
    return result


def load_preferences(path: Optional[Path] = None) -> Dict[str, Any]:
    """Return stored user preferences, merged with defaults.

    Missing keys are filled in from DEFAULT_PREFERENCES to ensure
    all expected settings exist.

    Args:
        path: Preferences file to read; defaults to ``get_preferences_path()``.

    Returns:
        A dictionary containing all preference keys with their current values.
    """
    defaults = DEFAULT_PREFERENCES.copy()
    defaults["api_keys"] = DEFAULT_API_KEYS.copy()

    preferences_path = path or get_preferences_path()
    if not preferences_path.exists():
        return defaults

    try:
        raw = preferences_path.read_text(encoding="utf-8")
        data = json.loads(raw)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return defaults

    if not isinstance(data, dict):
        return defaults

    # Merge stored data with defaults (stored values take precedence)
    result = defaults.copy()
    for key, value in data.items():
        if key == "api_keys" and isinstance(value, dict):
            result["api_keys"] = {**DEFAULT_API_KEYS, **value}
        else:
            result[key] = value

    return result


def save_preferences(preferences: Dict[str, Any], path: Optional[Path] = None) -> None:
    """Persist user preferences to disk.

    Args:
        preferences: The complete preferences dictionary to save.
        path: Preferences file to write; defaults to ``get_preferences_path()``.
    """
    preferences_path = path or get_preferences_path()
    try:
        preferences_path.parent.mkdir(parents=True, exist_ok=True)
        serialized = json.dumps(preferences, indent=2, sort_keys=True, ensure_ascii=False)
        preferences_path.write_text(serialized, encoding="utf-8")
    except OSError:
        pass


def get_float(preferences: Dict[str, Any], key: str) -> float:
    """Read a numeric preference, falling back to its default when ill-typed."""
    value = preferences.get(key, DEFAULT_PREFERENCES.get(key))
    try:
        return float(value)
    except (TypeError, ValueError):
        return float(DEFAULT_PREFERENCES[key])


def mask_secret(value: str) -> str:
    """Return a display-safe version of an API key."""
    if not value:
        return "(not set)"
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}{'*' * (len(value) - 8)}{value[-4:]}"


__all__ = [
    "API_KEY_ENV_VAR",
    "DEFAULT_API_KEYS",
    "DEFAULT_PREFERENCES",
    "PREFERENCES_ENV_VAR",
    "PROJECT_ID_ENV_VAR",
    "get_api_keys",
    "get_float",
    "get_preferences_path",
    "load_preferences",
    "mask_secret",
    "save_preferences",
]
