"""
Configuration loader for git_semver.

A repository may carry a JSON configuration file named
``.git-semver.json`` in its root directory. It provides defaults for the
command line options::

    {
        "format": "x.y.z-p",
        "prefix": "v",
        "meta": "build42"
    }

All keys are optional. If the file is absent an empty configuration is
returned. If it is malformed, contains unknown keys, or has values of the
wrong type, a :class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from git_semver.version.errors import InvalidFormatPattern
from git_semver.version.formatter import parse_pattern


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings in environments
# where logging is not configured. Propagation stays enabled so that
# messages appear once the CLI configures the root logger.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONFIG_FILENAME = ".git-semver.json"

# Keys accepted in the configuration file; all values are strings
ALLOWED_KEYS = ("format", "prefix", "meta")


class ConfigError(Exception):
    """Raised when the configuration file is malformed or invalid."""

    pass


def load_config(repo_root: Path) -> Dict[str, Any]:
    """Load the git-semver configuration of the repository at ``repo_root``.

    Args:
        repo_root: Root directory of the repository.

    Returns:
        A dictionary with any of the keys:
        - format (str): Default format pattern
        - prefix (str): Prefix override
        - meta (str): Build metadata override

    Raises:
        ConfigError: If the configuration file is malformed or invalid.
    """
    config_path = Path(repo_root) / CONFIG_FILENAME

    if not config_path.exists():
        logger.debug("No configuration file at '%s'; using defaults", config_path)
        return {}

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a JSON object")

    unknown = sorted(key for key in data if key not in ALLOWED_KEYS)
    if unknown:
        logger.error("Configuration file has unknown keys: %s", unknown)
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    for key in ALLOWED_KEYS:
        if key in data and not isinstance(data[key], str):
            raise ConfigError(f"'{key}' must be a string")

    if "format" in data:
        try:
            parse_pattern(data["format"])
        except InvalidFormatPattern as exc:
            raise ConfigError(f"'format' is not a valid format pattern: {exc}") from exc

    logger.debug("Loaded configuration from: %s", config_path)
    logger.debug("Configuration data: %s", data)
    return data
