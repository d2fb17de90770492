"""
Semantic version model built from a described repository HEAD.

A :class:`Version` is derived from the nearest tag and the number of
commits on top of it. If HEAD is not tagged, formatting adds a
``dev.<n>`` pre-release and the commit hash as build metadata
(e.g. ``1.2.4-dev.3+fcf2c8f1``) and bumps the patch level. A tag that
already has a pre-release identifier keeps its patch level. The common
but non-SemVer ``v`` prefix is detected automatically.
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

from git_semver.vcs.git_client import RepoHead, describe

from .errors import InvalidCommitHash, InvalidTagFormat, VersionError
from .formatter import FULL_FORMAT, format_version


# Prefix that is recognized and stripped by the parser
DEFAULT_PREFIX = "v"

# Number of hash characters used as build metadata
HASH_LENGTH = 8

_COMPONENT_NAMES = ("major", "minor", "patch")
_DIGITS_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Version:
    """Parsed components of a described repository HEAD.

    Attributes
    ----------
    prefix : str
        ``"v"`` if the tag carried it, otherwise empty.
    major, minor, patch : int
        Numeric version components of the tag (all zero without a tag).
    pre_release : str
        Pre-release identifier of the tag, e.g. ``rc.1``. Read-only; it is
        only set by :func:`build`.
    meta : str
        Build metadata: the tag's own ``+`` segment, or the abbreviated
        commit hash when HEAD is not tagged.
    commits : int
        Number of commits since the tag.
    """

    prefix: str = ""
    major: int = 0
    minor: int = 0
    patch: int = 0
    _pre_release: str = ""
    meta: str = ""
    commits: int = 0

    @property
    def pre_release(self) -> str:
        return self._pre_release

    def with_meta(self, meta: str) -> "Version":
        """Return a copy of this version with different build metadata."""
        return dataclasses.replace(self, meta=meta)

    def with_prefix(self, prefix: str) -> "Version":
        """Return a copy of this version with a different prefix."""
        return dataclasses.replace(self, prefix=prefix)

    def format(self, pattern: str) -> str:
        """Render this version; see :func:`~git_semver.version.formatter.format_version`."""
        return format_version(self, pattern)

    def __str__(self) -> str:
        try:
            return self.format(FULL_FORMAT)
        except VersionError:
            return ""


def _split_numbers(tag: str, core: str) -> Tuple[int, int, int]:
    parts = core.split(".")
    if len(parts) != 3:
        raise InvalidTagFormat(
            tag,
            "components",
            f"git version tag must contain 3 components: X.Y.Z: got {core!r}",
        )
    numbers = []
    for name, part in zip(_COMPONENT_NAMES, parts):
        if not _DIGITS_RE.fullmatch(part):
            raise InvalidTagFormat(tag, name, f"failed to parse {name} version {part!r}")
        numbers.append(int(part))
    return numbers[0], numbers[1], numbers[2]


def build(head: RepoHead) -> Version:
    """Build a :class:`Version` from a described repository HEAD.

    Raises
    ------
    InvalidTagFormat
        If the tag is not empty and does not hold an ``X.Y.Z`` version.
    InvalidCommitHash
        If metadata must come from a hash shorter than eight characters.
    """
    prefix = DEFAULT_PREFIX if head.last_tag.startswith(DEFAULT_PREFIX) else ""
    body = head.last_tag[len(prefix):]

    meta = ""
    if "+" in body:
        body, _, meta = body.partition("+")
    elif head.commits_since_tag > 0:
        if len(head.hash) < HASH_LENGTH:
            raise InvalidCommitHash(head.hash, HASH_LENGTH)
        meta = head.hash[:HASH_LENGTH]

    core, _, pre_release = body.partition("-")

    if core == "":
        # no tag at all
        return Version(
            prefix=prefix,
            _pre_release=pre_release,
            meta=meta,
            commits=head.commits_since_tag,
        )

    major, minor, patch = _split_numbers(head.last_tag, core)
    return Version(
        prefix=prefix,
        major=major,
        minor=minor,
        patch=patch,
        _pre_release=pre_release,
        meta=meta,
        commits=head.commits_since_tag,
    )


def new_from_repo(path: Union[str, Path]) -> Version:
    """Calculate the semantic version of the HEAD commit of the repo at ``path``."""
    return build(describe(path))
