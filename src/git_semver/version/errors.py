"""
Exceptions raised while building or formatting a version.
"""

from __future__ import annotations


class VersionError(Exception):
    """Base class for errors raised by the version engine."""

    pass


class InvalidTagFormat(VersionError):
    """Raised when a tag name does not hold an ``X.Y.Z`` version."""

    def __init__(self, tag: str, component: str, detail: str) -> None:
        self.tag = tag
        self.component = component
        super().__init__(f"invalid version tag {tag!r}: {detail}")


class InvalidCommitHash(VersionError):
    """Raised when a commit hash is too short to derive build metadata from."""

    def __init__(self, commit_hash: str, length: int) -> None:
        self.hash = commit_hash
        super().__init__(
            f"commit hash {commit_hash!r} is shorter than {length} characters"
        )


class InvalidFormatPattern(VersionError):
    """Raised when a format pattern does not follow the ``x.y.z-p-r+m`` grammar."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"invalid format: {pattern!r}")


class InvalidPreReleaseForReleaseCandidate(VersionError):
    """Raised when a pre-release cannot be read as ``<label>.<number>``."""

    def __init__(self, pre_release: str) -> None:
        self.pre_release = pre_release
        super().__init__(
            f"pre-release {pre_release!r} does not match the release-candidate "
            "format (rc.1, other.1)"
        )
