"""
Top-level package for git_semver.

This package derives semantic versions from Git tags. The command line
entry point lives in ``git_semver.cli``; the engine in
``git_semver.version``.
"""

__all__ = ["__version__", "__base_version__"]

# Version used when the source tree is not inside a Git checkout
__base_version__ = "0.1.0"

from git_semver._version import generate_version  # noqa: E402

__version__ = generate_version(__base_version__)
