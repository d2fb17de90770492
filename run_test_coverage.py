"""
Run the unit tests and report line coverage using Python's built-in tracing.

The tests under ``tests`` are run through pytest while ``sys.settrace``
records which lines of ``src/git_semver`` execute. Coverage is the number
of executed lines over the number of countable lines, where a countable
line is not blank, not a comment, not inside a docstring and not marked
``# pragma: no cover``.

To use this script, run:

    python run_test_coverage.py

No coverage plugin is required.
"""

import sys
from pathlib import Path
from types import FrameType
from typing import Dict, Set

import pytest


ROOT = Path(__file__).parent
SOURCE_ROOT = ROOT / "src" / "git_semver"

# Files relative to ``src/git_semver`` left out of the denominator
EXCLUDE_FILES = {
    "__init__.py",
}


def collect_executed_lines(source_root: Path) -> Dict[str, Set[int]]:
    """Run the test suite and collect executed lines below ``source_root``.

    Exits with the pytest status code if any test fails.
    """
    executed: Dict[str, Set[int]] = {}
    source_prefix = str(source_root.resolve())

    def tracer(frame: FrameType, event: str, arg):
        filename = frame.f_code.co_filename
        if event == "line" and filename.startswith(source_prefix):
            executed.setdefault(filename, set()).add(frame.f_lineno)
        return tracer

    sys.settrace(tracer)
    try:
        status = pytest.main([str(ROOT / "tests"), "-q", "-p", "no:cacheprovider"])
    finally:
        sys.settrace(None)
    if status != 0:
        sys.exit(int(status))
    print(f"Collected executed lines for {len(executed)} source file(s)")
    return executed


def countable_lines(path: Path) -> Set[int]:
    """Return the line numbers of ``path`` that count towards coverage."""
    lines: Set[int] = set()
    inside_docstring = False
    with path.open("r", encoding="utf-8", errors="ignore") as f:
        for lineno, line in enumerate(f, start=1):
            stripped = line.strip()
            quotes = stripped.count('"""') + stripped.count("'''")
            if quotes:
                # a one-line docstring opens and closes on the same line
                if quotes % 2:
                    inside_docstring = not inside_docstring
                continue
            if inside_docstring or not stripped or stripped.startswith("#"):
                continue
            if "# pragma: no cover" in line:
                continue
            lines.add(lineno)
    return lines


def calculate_coverage(executed: Dict[str, Set[int]], source_root: Path) -> float:
    """Print per-file coverage and return the overall ratio between 0 and 1."""
    total_lines = 0
    covered_lines = 0
    for path in sorted(source_root.resolve().rglob("*.py")):
        rel_path = path.relative_to(source_root.resolve()).as_posix()
        if rel_path in EXCLUDE_FILES:
            continue
        countable = countable_lines(path)
        covered = countable & executed.get(str(path), set())
        total_lines += len(countable)
        covered_lines += len(covered)
        pct = (len(covered) / len(countable) * 100) if countable else 100.0
        print(f"File: {rel_path:40} Lines: {len(countable):4} Covered: {len(covered):4} ({pct:5.1f}%)")
    if total_lines == 0:
        return 1.0
    return covered_lines / total_lines


def main() -> None:
    sys.path.insert(0, str(ROOT / "src"))
    executed = collect_executed_lines(SOURCE_ROOT)
    coverage = calculate_coverage(executed, SOURCE_ROOT)
    print(f"Coverage: {coverage * 100:.2f}%")


if __name__ == "__main__":
    main()
