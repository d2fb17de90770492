"""
Configuration loading for git_semver.

Provides a loader for the optional ``.git-semver.json`` file located in
the repository root. See :mod:`git_semver.config.loader` for
implementation details.
"""

from .loader import CONFIG_FILENAME, ConfigError, load_config  # noqa: F401
