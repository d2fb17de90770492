"""
Version control system (VCS) integration.

This package contains the Git client used to describe the HEAD commit
of a repository: its nearest tag, its hash and the number of commits
since that tag.
"""

from .git_client import (  # noqa: F401
    GitClient,
    GitError,
    HeadNotFoundError,
    RepoHead,
    RepoOpenError,
    describe,
)
