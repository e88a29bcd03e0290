"""
Settings loader for conventional_changelog.

Projects may customise the changelog with a JSON file named
``.changelog.json`` at the repository root. The file is optional; when it
is missing the built-in defaults are used. When it exists but is
malformed, or holds values of the wrong type, a :class:`ConfigError` is
raised.

Example::

    {
        "path": "CHANGELOG.md",
        "types": ["feat", "fix", "perf"],
        "preset": {"feat": {"label": "New Stuff"}},
        "ignore_types": ["chore"],
        "ignore_patterns": ["/^wip/i", "[skip changelog]"]
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .configuration import ConfigError, Configuration


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


SETTINGS_FILE_NAME = ".changelog.json"

_STRING_KEYS = ("path", "header_title", "header_description")
_STRING_LIST_KEYS = ("types", "ignore_types", "ignore_patterns")


def _validate_settings(data: Any) -> None:
    """Check the types of the known keys in ``data``."""
    if not Configuration.validate(data):
        raise ConfigError(f"{SETTINGS_FILE_NAME} must contain a JSON object")

    for key in _STRING_KEYS:
        if key in data and not isinstance(data[key], str):
            raise ConfigError(f"'{key}' must be a string")

    for key in _STRING_LIST_KEYS:
        if key in data:
            value = data[key]
            if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                raise ConfigError(f"'{key}' must be a list of strings")

    if "preset" in data:
        preset = data["preset"]
        if not isinstance(preset, dict):
            raise ConfigError("'preset' must be an object")
        for code, entry in preset.items():
            if not isinstance(entry, dict):
                raise ConfigError(f"'preset.{code}' must be an object")
            for field_name in ("label", "description"):
                if field_name in entry and not isinstance(entry[field_name], str):
                    raise ConfigError(f"'preset.{code}.{field_name}' must be a string")


def load_settings(repo_root: Path) -> Dict[str, Any]:
    """Read the changelog settings stored in ``repo_root``.

    Returns an empty dictionary when no settings file exists.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not valid JSON, or has invalid values.
    """
    settings_path = Path(repo_root) / SETTINGS_FILE_NAME
    if not settings_path.exists():
        logger.debug("No settings file at %s; using defaults", settings_path)
        return {}

    try:
        content = settings_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse settings file: %s", exc)
        raise ConfigError(f"Invalid JSON in {settings_path.name}: {exc}") from exc

    _validate_settings(data)
    logger.debug("Loaded changelog settings from: %s", settings_path)
    return data


def load_configuration(repo_root: Path) -> Configuration:
    """Return the effective :class:`Configuration` for ``repo_root``."""
    return Configuration.from_settings(load_settings(repo_root))
