#!/usr/bin/env python
"""
Thin wrapper script to invoke the git_semver CLI.

Running ``python git-semver.py`` is equivalent to running the
``git-semver`` console script installed via ``pyproject.toml``.
"""

from git_semver.cli import main


if __name__ == "__main__":
    main(prog_name="git-semver")
