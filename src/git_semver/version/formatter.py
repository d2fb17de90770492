"""
Rendering of :class:`~git_semver.version.model.Version` values.

A format pattern selects which parts of a version to print. It is built
from the following tokens, which must appear in this order:

* ``x`` -> major version (required, always first)
* ``.y`` -> minor version
* ``.z`` -> patch version
* ``-p`` -> pre-release
* ``-r`` -> release candidate
* ``+m`` -> build metadata

E.g. ``x.y.z-p+m`` or ``x.y``.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, List, Tuple

from .errors import InvalidFormatPattern, InvalidPreReleaseForReleaseCandidate

if TYPE_CHECKING:
    from .model import Version


# Predefined format strings to be used with format_version
FULL_FORMAT = "x.y.z-p+m"
NO_META_FORMAT = "x.y.z-p"
NO_PRE_FORMAT = "x.y.z"
NO_PATCH_FORMAT = "x.y"
NO_MINOR_FORMAT = "x"
RELEASE_CANDIDATE_FORMAT = "x.y.z-r"

# (name, separator, letter) in the only order the grammar accepts
_TOKENS: Tuple[Tuple[str, str, str], ...] = (
    ("major", "", "x"),
    ("minor", ".", "y"),
    ("patch", ".", "z"),
    ("pre", "-", "p"),
    ("release_candidate", "-", "r"),
    ("meta", "+", "m"),
)

_RELEASE_CANDIDATE_RE = re.compile(r"([a-z]+)\.([0-9]+)")


def parse_pattern(pattern: str) -> List[str]:
    """Return the token names requested by ``pattern``, in rendering order.

    The pattern is scanned left to right against the fixed token table.
    Each step may only move forward in the table, so tokens can be
    skipped but never repeated or reordered.

    Raises
    ------
    InvalidFormatPattern
        If the whole pattern cannot be consumed.
    """
    if not pattern.startswith("x"):
        raise InvalidFormatPattern(pattern)
    names: List[str] = []
    pos = 0
    next_token = 0
    while pos < len(pattern):
        for index in range(next_token, len(_TOKENS)):
            name, separator, letter = _TOKENS[index]
            text = separator + letter
            if pattern.startswith(text, pos):
                names.append(name)
                pos += len(text)
                next_token = index + 1
                break
        else:
            raise InvalidFormatPattern(pattern)
    return names


def render_patch(patch: int, pre_release: str, commits: int) -> int:
    """Return the patch number to print.

    Untagged commits on top of a plain ``X.Y.Z`` tag are work towards the
    next patch release, so the patch is bumped. A tag that already carries
    a pre-release keeps its patch number.
    """
    if commits > 0 and not pre_release:
        return patch + 1
    return patch


def render_pre_release(pre_release: str, commits: int) -> str:
    """Format the pre-release depending on the number of commits since the tag.

    If ``commits`` is zero the tag's own pre-release is returned unchanged.
    Otherwise ``dev.<commits>`` is appended to it.
    """
    if commits == 0:
        return pre_release
    if not pre_release:
        return f"dev.{commits}"
    return f"{pre_release}.dev.{commits}"


def render_release_candidate(pre_release: str, commits: int) -> str:
    """Format the release candidate for ``pre_release``.

    An untagged pre-release ``<label>.<n>`` becomes ``<label>.<n+1>``; a
    version without pre-release starts at ``rc.1``.

    Raises
    ------
    InvalidPreReleaseForReleaseCandidate
        If ``pre_release`` is not of the form ``<label>.<n>``.
    """
    if not pre_release:
        return "rc.1"
    match = _RELEASE_CANDIDATE_RE.fullmatch(pre_release)
    if match is None:
        raise InvalidPreReleaseForReleaseCandidate(pre_release)
    label, number = match.group(1), int(match.group(2))
    if commits > 0:
        number += 1
    return f"{label}.{number}"


def _append(body: str, text: str, separator: str) -> str:
    if text and body:
        return body + separator + text
    return body + text


def format_version(version: "Version", pattern: str) -> str:
    """Return the parts of ``version`` selected by ``pattern`` as a string.

    The version's prefix is prepended without a separator. Parts that
    render empty are skipped together with their separator.

    Raises
    ------
    InvalidFormatPattern
        If ``pattern`` is malformed.
    InvalidPreReleaseForReleaseCandidate
        If ``pattern`` requests a release candidate that cannot be derived.
    """
    separators = {name: separator for name, separator, _ in _TOKENS}
    body = ""
    for name in parse_pattern(pattern):
        if name == "major":
            text = str(version.major)
        elif name == "minor":
            text = str(version.minor)
        elif name == "patch":
            text = str(render_patch(version.patch, version.pre_release, version.commits))
        elif name == "pre":
            text = render_pre_release(version.pre_release, version.commits)
        elif name == "release_candidate":
            text = render_release_candidate(version.pre_release, version.commits)
        else:
            text = version.meta
        body = _append(body, text, separators[name])
    return version.prefix + body
