"""
Git client implementation for git_semver.

This module answers the one question the version engine asks of a
repository: which tag is nearest to HEAD, what is HEAD's commit hash and
how many commits lie between the two. It shells out to the ``git``
executable; all subprocess calls go through :meth:`GitClient._run` so that
unit tests can mock them easily.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union


logger = logging.getLogger(__name__)
# Attach a null handler to avoid "No handler" warnings when the root logger
# is not configured. Messages propagate once the CLI configures logging.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class RepoHead:
    """Result of describing the HEAD commit of a repository."""

    last_tag: str
    hash: str
    commits_since_tag: int


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


class RepoOpenError(GitError):
    """Raised when a path is not inside a Git repository."""

    def __init__(self, path: Union[str, Path], reason: str = "not a git repository") -> None:
        self.path = str(path)
        super().__init__(f"failed to open repository at {self.path}: {reason}")


class HeadNotFoundError(GitError):
    """Raised when the repository has no commits yet."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = str(path)
        super().__init__(f"repository at {self.path} has no commits (HEAD not found)")


class GitClient:
    """Client for reading tag and commit information from a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------
    @staticmethod
    def is_repo(path: Path) -> bool:
        """Return True if the given path is the root of a Git repository."""
        return (path / ".git").exists()

    @staticmethod
    def find_repo_root(start: Path) -> Optional[Path]:
        """Find the root of the Git repository starting from ``start``.

        Walk upwards until a ``.git`` entry is found or the filesystem
        root is reached. ``.git`` may be a file for worktrees and
        submodules.
        """
        current = start.resolve()
        while True:
            if (current / ".git").exists():
                return current
            if current.parent == current:
                # reached filesystem root
                return None
            current = current.parent

    @classmethod
    def open(cls, path: Union[str, Path]) -> "GitClient":
        """Return a client for the repository containing ``path``.

        Raises
        ------
        RepoOpenError
            If ``path`` does not exist or is not inside a repository.
        """
        start = Path(path)
        if not start.exists():
            raise RepoOpenError(path, "path does not exist")
        root = cls.find_repo_root(start if start.is_dir() else start.parent)
        if root is None:
            raise RepoOpenError(path)
        logger.debug("Using repository root: %s", root)
        return cls(root)

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        RepoOpenError
            If the ``git`` executable cannot be found or started.
        GitError
            If the command exits with a non-zero status when ``check`` is True.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        # Untranslated git messages regardless of the user's locale
        env = dict(os.environ, LC_ALL="C", LANGUAGE="C")
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding='utf-8',
                errors='replace',  # Replace invalid characters instead of failing
            )
        except FileNotFoundError as e:
            logger.error("Git executable not found: %s", e)
            raise RepoOpenError(self.repo_root, "git executable not found") from e
        except OSError as e:
            logger.error("Failed to run git: %s", e)
            raise RepoOpenError(self.repo_root, f"failed to run git: {e}") from e

        if check and result.returncode != 0:
            logger.error(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            raise GitError(result.stderr.strip() or result.stdout.strip())
        return result

    # ------------------------------------------------------------------
    # Describe
    # ------------------------------------------------------------------
    def get_head_hash(self) -> str:
        """Return the full hash of the HEAD commit.

        Raises
        ------
        HeadNotFoundError
            If the repository has no commits.
        """
        result = self._run(["rev-parse", "--verify", "--quiet", "HEAD"], check=False)
        head = result.stdout.strip()
        if result.returncode != 0 or not head:
            raise HeadNotFoundError(self.repo_root)
        return head

    def get_last_tag(self) -> str:
        """Return the name of the nearest tag reachable from HEAD.

        Returns an empty string if no tag is reachable.

        Raises
        ------
        GitError
            If ``git describe`` fails although a tag is reachable.
        """
        result = self._run(["describe", "--tags", "--abbrev=0"], check=False)
        if result.returncode == 0:
            return result.stdout.strip()
        # git describe fails without a reachable tag; ask git directly
        # instead of interpreting its error message
        merged = self._run(["tag", "--merged", "HEAD"], check=True)
        if not merged.stdout.strip():
            logger.debug("No tag reachable from HEAD")
            return ""
        stderr = result.stderr.strip()
        logger.error("git describe failed: %s", stderr)
        raise GitError(stderr or result.stdout.strip())

    def count_commits_since(self, tag: str) -> int:
        """Count commits after ``tag`` up to and including HEAD.

        With an empty ``tag`` every commit reachable from HEAD is counted.
        """
        revision = f"refs/tags/{tag}..HEAD" if tag else "HEAD"
        result = self._run(["rev-list", "--count", revision], check=True)
        output = result.stdout.strip()
        try:
            return int(output)
        except ValueError as e:
            raise GitError(f"unexpected output from git rev-list: {output!r}") from e

    def describe(self) -> RepoHead:
        """Describe HEAD relative to its nearest tag."""
        head = self.get_head_hash()
        tag = self.get_last_tag()
        commits = self.count_commits_since(tag)
        logger.debug("Described HEAD %s: tag=%r commits=%d", head, tag, commits)
        return RepoHead(last_tag=tag, hash=head, commits_since_tag=commits)


def describe(path: Union[str, Path]) -> RepoHead:
    """Describe the HEAD commit of the repository containing ``path``.

    Raises
    ------
    RepoOpenError
        If ``path`` is not inside a Git repository.
    HeadNotFoundError
        If the repository has no commits.
    GitError
        If any other git command fails.
    """
    return GitClient.open(path).describe()
