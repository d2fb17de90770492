import os
import shutil
import subprocess
from pathlib import Path

import pytest


class ScratchRepo:
    """Throwaway Git repository driven through the real ``git`` binary."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self._count = 0

    def git(self, *args: str) -> str:
        env = dict(os.environ)
        env.update(
            GIT_AUTHOR_NAME="Test",
            GIT_AUTHOR_EMAIL="test@example.com",
            GIT_COMMITTER_NAME="Test",
            GIT_COMMITTER_EMAIL="test@example.com",
            GIT_CONFIG_NOSYSTEM="1",
            HOME=str(self.root),
        )
        result = subprocess.run(
            ["git", "-c", "commit.gpgsign=false", "-c", "tag.gpgsign=false", *args],
            cwd=self.root,
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            check=True,
        )
        return result.stdout.strip()

    def commit(self) -> str:
        self._count += 1
        (self.root / "file.txt").write_text(f"change {self._count}\n")
        self.git("add", "file.txt")
        self.git("commit", "-q", "-m", f"commit {self._count}")
        return self.git("rev-parse", "HEAD")

    def tag(self, name: str) -> None:
        self.git("tag", name)


@pytest.fixture
def git_repo(tmp_path: Path) -> ScratchRepo:
    """Provide an initialised, empty Git repository.

    Tests using this fixture are skipped when ``git`` is not installed.
    """
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    root = tmp_path / "repo"
    root.mkdir()
    repo = ScratchRepo(root)
    repo.git("init", "-q")
    return repo
