"""Tests for building versions from a described HEAD."""

import dataclasses
import unittest
from dataclasses import FrozenInstanceError
from unittest.mock import patch

from git_semver.vcs.git_client import RepoHead
from git_semver.version import (
    InvalidCommitHash,
    InvalidTagFormat,
    Version,
    build,
    new_from_repo,
)

HASH = "fcf2c8f1e4a95b0d3c7a1e2b6d8f0a9c4e5b7d1f"


class TestBuild(unittest.TestCase):
    """Test construction of Version values."""

    def test_no_tag_yields_zero_version(self):
        v = build(RepoHead(last_tag="", hash=HASH, commits_since_tag=4))
        self.assertEqual((v.major, v.minor, v.patch), (0, 0, 0))
        self.assertEqual(v.prefix, "")
        self.assertEqual(v.commits, 4)
        self.assertEqual(v.meta, "fcf2c8f1")

    def test_prefixed_tag_on_head(self):
        v = build(RepoHead(last_tag="v1.2.3", hash=HASH, commits_since_tag=0))
        self.assertEqual(v, Version(prefix="v", major=1, minor=2, patch=3))
        self.assertEqual(v.meta, "")

    def test_hash_metadata_after_tag(self):
        v = build(RepoHead(last_tag="1.0.0", hash="abcdef1234567890", commits_since_tag=5))
        self.assertEqual(v.meta, "abcdef12")
        self.assertEqual(v.prefix, "")
        self.assertEqual(v.commits, 5)

    def test_explicit_metadata_wins_over_hash(self):
        on_tag = build(RepoHead(last_tag="1.0.0+build7", hash=HASH, commits_since_tag=0))
        self.assertEqual(on_tag.meta, "build7")
        after_tag = build(RepoHead(last_tag="1.0.0+build7", hash=HASH, commits_since_tag=3))
        self.assertEqual(after_tag.meta, "build7")

    def test_pre_release_is_parsed(self):
        v = build(RepoHead(last_tag="v2.0.0-rc.1", hash=HASH, commits_since_tag=0))
        self.assertEqual((v.major, v.minor, v.patch), (2, 0, 0))
        self.assertEqual(v.pre_release, "rc.1")

    def test_splits_on_first_separator(self):
        v = build(RepoHead(last_tag="1.2.3-beta-2+meta+more", hash=HASH, commits_since_tag=0))
        self.assertEqual(v.pre_release, "beta-2")
        self.assertEqual(v.meta, "meta+more")

    def test_pre_release_and_meta_together(self):
        v = build(RepoHead(last_tag="v3.4.5-alpha.2+ci.9", hash=HASH, commits_since_tag=0))
        self.assertEqual(v.pre_release, "alpha.2")
        self.assertEqual(v.meta, "ci.9")

    def test_two_components_is_an_error(self):
        with self.assertRaises(InvalidTagFormat) as ctx:
            build(RepoHead(last_tag="v1.2", hash=HASH, commits_since_tag=0))
        self.assertEqual(ctx.exception.component, "components")
        self.assertEqual(ctx.exception.tag, "v1.2")
        self.assertIn("1.2", str(ctx.exception))

    def test_four_components_is_an_error(self):
        with self.assertRaises(InvalidTagFormat):
            build(RepoHead(last_tag="1.2.3.4", hash=HASH, commits_since_tag=0))

    def test_non_numeric_component_is_named(self):
        with self.assertRaises(InvalidTagFormat) as ctx:
            build(RepoHead(last_tag="1.x.3", hash=HASH, commits_since_tag=0))
        self.assertEqual(ctx.exception.component, "minor")
        self.assertIn("'x'", str(ctx.exception))

    def test_empty_component_is_an_error(self):
        with self.assertRaises(InvalidTagFormat) as ctx:
            build(RepoHead(last_tag="1..3", hash=HASH, commits_since_tag=0))
        self.assertEqual(ctx.exception.component, "minor")

    def test_non_version_tag_is_an_error(self):
        with self.assertRaises(InvalidTagFormat) as ctx:
            build(RepoHead(last_tag="release", hash=HASH, commits_since_tag=0))
        self.assertEqual(ctx.exception.component, "components")

    def test_short_hash_is_an_error(self):
        with self.assertRaises(InvalidCommitHash) as ctx:
            build(RepoHead(last_tag="1.0.0", hash="abc", commits_since_tag=1))
        self.assertEqual(ctx.exception.hash, "abc")

    def test_short_hash_is_ignored_on_tag(self):
        v = build(RepoHead(last_tag="1.0.0", hash="abc", commits_since_tag=0))
        self.assertEqual(v.meta, "")


class TestOverrides(unittest.TestCase):
    """Test that overrides return new values."""

    def setUp(self):
        self.version = build(RepoHead(last_tag="1.0.0", hash=HASH, commits_since_tag=2))

    def test_with_meta_returns_copy(self):
        changed = self.version.with_meta("build42")
        self.assertEqual(changed.meta, "build42")
        self.assertEqual(self.version.meta, "fcf2c8f1")

    def test_with_prefix_returns_copy(self):
        changed = self.version.with_prefix("release-")
        self.assertEqual(changed.format("x.y.z"), "release-1.0.1")
        self.assertEqual(self.version.prefix, "")

    def test_version_is_frozen(self):
        with self.assertRaises(FrozenInstanceError):
            self.version.meta = "other"  # type: ignore[misc]

    def test_pre_release_is_read_only(self):
        v = build(RepoHead(last_tag="1.0.0-rc.1", hash=HASH, commits_since_tag=0))
        self.assertEqual(v.pre_release, "rc.1")
        with self.assertRaises(AttributeError):
            v.pre_release = "beta.1"  # type: ignore[misc]
        with self.assertRaises(TypeError):
            Version(major=1, pre_release="beta.1")  # type: ignore[call-arg]
        with self.assertRaises(TypeError):
            dataclasses.replace(v, pre_release="beta.1")
        self.assertEqual(v.with_meta("ci").pre_release, "rc.1")

    def test_str_uses_full_format(self):
        self.assertEqual(str(self.version), "1.0.1-dev.2+fcf2c8f1")

    def test_str_is_empty_when_rendering_fails(self):
        v = build(RepoHead(last_tag="1.0.0-beta", hash=HASH, commits_since_tag=0))
        with patch("git_semver.version.model.FULL_FORMAT", "x-r"):
            self.assertEqual(str(v), "")


class TestNewFromRepo(unittest.TestCase):
    @patch("git_semver.version.model.describe")
    def test_describes_then_builds(self, mock_describe):
        mock_describe.return_value = RepoHead(last_tag="v0.4.0", hash=HASH, commits_since_tag=0)
        v = new_from_repo("/repo")
        mock_describe.assert_called_once_with("/repo")
        self.assertEqual(v.format("x.y.z-p+m"), "v0.4.0")


if __name__ == "__main__":
    unittest.main()
