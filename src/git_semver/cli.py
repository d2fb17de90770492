"""
Command line interface for the git_semver tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``git-semver`` command. It describes the
repository, loads the optional repository configuration, builds the
version, applies overrides and prints the formatted version on stdout.
Any failure is reported on stderr with exit code 1.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click

from git_semver import __version__
from git_semver.config.loader import ConfigError, load_config
from git_semver.vcs.git_client import GitClient, GitError
from git_semver.version import (
    FULL_FORMAT,
    NO_META_FORMAT,
    NO_MINOR_FORMAT,
    NO_PATCH_FORMAT,
    NO_PRE_FORMAT,
    RELEASE_CANDIDATE_FORMAT,
    Version,
    VersionError,
    build,
)

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def print_error(message: str) -> None:
    """Print an error message on stderr."""
    click.echo(f"error: {message}", err=True)


def select_format(
    format_pattern: Optional[str],
    no_minor: bool = False,
    no_patch: bool = False,
    no_pre: bool = False,
    no_hash: bool = False,
    no_meta: bool = False,
    release_candidate: bool = False,
    config: Optional[Dict[str, Any]] = None,
) -> str:
    """Pick the format pattern from the command line flags.

    An explicit pattern wins, then the first set flag in the order
    no-minor, no-patch, no-pre, no-hash/no-meta, release-candidate, then
    the configured pattern and finally the full format.
    """
    if format_pattern:
        return format_pattern
    if no_minor:
        return NO_MINOR_FORMAT
    if no_patch:
        return NO_PATCH_FORMAT
    if no_pre:
        return NO_PRE_FORMAT
    if no_hash or no_meta:
        return NO_META_FORMAT
    if release_candidate:
        return RELEASE_CANDIDATE_FORMAT
    if config and config.get("format"):
        return config["format"]
    return FULL_FORMAT


def apply_overrides(
    version: Version,
    prefix: Optional[str],
    meta: Optional[str],
    config: Optional[Dict[str, Any]] = None,
) -> Version:
    """Return ``version`` with prefix and metadata overrides applied.

    Non-empty command line values take precedence over the configuration.
    """
    config = config or {}
    meta = meta or config.get("meta")
    prefix = prefix or config.get("prefix")
    if meta:
        version = version.with_meta(meta)
    if prefix:
        version = version.with_prefix(prefix)
    return version


@click.command()
@click.argument("repo", required=False, type=click.Path(path_type=Path))
@click.option("--prefix", default="", help="Prefix of the version string, e.g. v (default: none).")
@click.option("--format", "format_pattern", default="", help="Format string, e.g. x.y.z-p+m.")
@click.option("--no-hash", is_flag=True, help="Exclude the commit hash.")
@click.option("--no-meta", is_flag=True, help="Exclude build metadata.")
@click.option("--set-meta", default="", help="Set build metadata (default: none).")
@click.option("--no-pre", is_flag=True, help="Exclude the pre-release version.")
@click.option("--no-patch", is_flag=True, help="Exclude the patch version.")
@click.option("--no-minor", is_flag=True, help="Exclude the minor version.")
@click.option("--release-candidate", is_flag=True, help="Add a release candidate.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output on stderr.")
@click.version_option(version=__version__, prog_name="git-semver")
def main(
    repo: Optional[Path],
    prefix: str,
    format_pattern: str,
    no_hash: bool,
    no_meta: bool,
    set_meta: str,
    no_pre: bool,
    no_patch: bool,
    no_minor: bool,
    release_candidate: bool,
    verbose: bool,
) -> None:
    """Print a semantic version for HEAD of REPO (default: current directory).

    The version is derived from the nearest tag. Commits on top of it add
    a dev.<n> pre-release and the commit hash, e.g. 1.2.4-dev.3+fcf2c8f1.
    """
    # Configure logging. Use force=True to ensure handlers are reconfigured
    # on subsequent invocations (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    repo_path = repo if repo is not None else Path.cwd()
    logger.debug("Describing repository at %s", repo_path)

    try:
        client = GitClient.open(repo_path)
        config = load_config(client.repo_root)
        version = build(client.describe())
        version = apply_overrides(version, prefix, set_meta, config)
        pattern = select_format(
            format_pattern,
            no_minor=no_minor,
            no_patch=no_patch,
            no_pre=no_pre,
            no_hash=no_hash,
            no_meta=no_meta,
            release_candidate=release_candidate,
            config=config,
        )
        logger.debug("Formatting %r with pattern %s", version, pattern)
        output = version.format(pattern)
    except (GitError, ConfigError, VersionError) as exc:
        print_error(str(exc))
        raise click.exceptions.Exit(EXIT_FAILURE)
    except Exception as exc:
        logging.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        raise click.exceptions.Exit(EXIT_FAILURE)

    click.echo(output)
