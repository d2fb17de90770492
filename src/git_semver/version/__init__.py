"""
Version derivation and formatting.

:func:`build` turns a described repository HEAD into a
:class:`Version`; :func:`format_version` renders it according to a format
pattern such as :data:`FULL_FORMAT`.
"""

from .errors import (  # noqa: F401
    InvalidCommitHash,
    InvalidFormatPattern,
    InvalidPreReleaseForReleaseCandidate,
    InvalidTagFormat,
    VersionError,
)
from .formatter import (  # noqa: F401
    FULL_FORMAT,
    NO_META_FORMAT,
    NO_MINOR_FORMAT,
    NO_PATCH_FORMAT,
    NO_PRE_FORMAT,
    RELEASE_CANDIDATE_FORMAT,
    format_version,
    parse_pattern,
    render_patch,
    render_pre_release,
    render_release_candidate,
)
from .model import DEFAULT_PREFIX, Version, build, new_from_repo  # noqa: F401
