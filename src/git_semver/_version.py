"""
Dynamic version generation for git_semver.

The package versions itself with its own engine: the checkout that holds
the source tree is described and formatted without build metadata, e.g.
``v0.3.1-dev.4``. Outside a checkout the base version is used.
"""

import logging
from pathlib import Path
from typing import Optional

from git_semver.vcs.git_client import GitClient, GitError
from git_semver.version import NO_META_FORMAT, VersionError, new_from_repo


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def generate_version(base_version: str, repo_path: Optional[Path] = None) -> str:
    """
    Generate the version string of the checkout at ``repo_path``.

    Args:
        base_version: Version returned when no version can be derived.
        repo_path: Path inside the repository. If None, uses the source
            checkout this package was loaded from (``src/`` layout), if any.

    Returns:
        The derived version in ``x.y.z-p`` format, or ``base_version``.
    """
    if repo_path is None:
        repo_path = Path(__file__).resolve().parents[2]
        if not GitClient.is_repo(repo_path):
            return base_version
    try:
        return new_from_repo(repo_path).format(NO_META_FORMAT)
    except (GitError, VersionError) as exc:
        logger.debug("Falling back to base version %s: %s", base_version, exc)
        return base_version
