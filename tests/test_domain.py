"""Tests for the domain layer."""

import pytest
from dataclasses import FrozenInstanceError

from gitmeta.domain import (
    GitMetadata,
    normalize_remote_url,
    Target,
    Command,
    parse_reference,
)


class TestNormalizeRemoteURL:
    """Tests for remote URL canonicalization."""

    @pytest.mark.parametrize("url,expected", [
        ("https://user@github.com/org/repo.git", "github.com/org/repo"),
        ("git@github.com:org/repo.git", "github.com/org/repo"),
        ("ssh://github.com/org/repo", "github.com/org/repo"),
        ("https://github.com/org/repo", "github.com/org/repo"),
        ("git://example.com/path/to/repo.git", "example.com/path/to/repo"),
        ("ssh://git@gitlab.com/group/sub/project.git", "gitlab.com/group/sub/project"),
        ("user@host.com:path/to.git", "host.com/path/to"),
    ])
    def test_known_forms(self, url, expected):
        assert normalize_remote_url(url) == expected

    @pytest.mark.parametrize("url", [
        "github.com/org/repo",
        "example.com/a/b/c",
        "host/path",
    ])
    def test_idempotent_on_canonical_input(self, url):
        assert normalize_remote_url(url) == url
        assert normalize_remote_url(normalize_remote_url(url)) == url

    def test_only_first_colon_replaced(self):
        """A port after the host turns into a path segment, later colons stay."""
        assert normalize_remote_url("ssh://git@host:2222/org/repo:x.git") == "host/2222/org/repo:x"

    def test_only_trailing_git_suffix_stripped(self):
        assert normalize_remote_url("https://github.com/org/repo.github.io") == "github.com/org/repo.github.io"
        assert normalize_remote_url("https://github.com/org/repo.git.git") == "github.com/org/repo.git"

    def test_empty_and_malformed_pass_through(self):
        assert normalize_remote_url("") == ""
        assert normalize_remote_url("not a url") == "not a url"


class TestGitMetadata:
    """Tests for GitMetadata domain object."""

    @pytest.fixture
    def metadata(self):
        return GitMetadata(
            base_dir="/home/user/repo",
            rel_dir="services/api",
            remote_url="git@github.com:org/repo.git",
            git_url="github.com/org/repo",
            hash="abc123def456",
            short_hash="abc123de",
            branch=("main",),
            tags=("v1.0",),
            timestamp="1700000000",
        )

    def test_immutable(self, metadata):
        with pytest.raises(FrozenInstanceError):
            metadata.hash = "other"

    def test_clone_keeps_location_fields(self, metadata):
        clone = metadata.clone()
        assert clone.base_dir == metadata.base_dir
        assert clone.rel_dir == metadata.rel_dir
        assert clone.git_url == metadata.git_url
        assert clone.hash == metadata.hash
        assert clone.branch == metadata.branch

    def test_clone_drops_provenance_fields(self, metadata):
        clone = metadata.clone()
        assert clone.remote_url == ""
        assert clone.tags == ()
        assert clone.timestamp == ""
        assert clone.short_hash == ""

    def test_clone_is_new_object(self, metadata):
        assert metadata.clone() is not metadata

    def test_missing_fields(self, metadata):
        assert metadata.missing_fields() == ()
        partial = GitMetadata(base_dir="/r", rel_dir=".", hash="abc")
        assert partial.missing_fields() == ("remote_url", "short_hash", "branch")

    def test_to_dict(self, metadata):
        d = metadata.to_dict()
        assert d['git_url'] == "github.com/org/repo"
        assert d['branch'] == ["main"]
        assert d['tags'] == ["v1.0"]
        assert d['timestamp'] == "1700000000"

    def test_to_jsonl(self, metadata):
        import json
        assert json.loads(metadata.to_jsonl()) == metadata.to_dict()


class TestReference:
    """Tests for the Target and Command reference variants."""

    def test_str_local_internal(self):
        assert str(Target(name="build")) == "+build"
        assert str(Target(name="build", local_path=".")) == "+build"

    def test_str_local_external(self):
        assert str(Target(name="test", local_path="./lib")) == "./lib+test"

    def test_str_remote(self):
        ref = Target(name="build", git_url="github.com/org/repo", tag="v1.0")
        assert str(ref) == "github.com/org/repo:v1.0+build"
        assert str(Target(name="build", git_url="github.com/org/repo")) == "github.com/org/repo+build"

    def test_str_import_ref(self):
        assert str(Command(name="LINT", import_ref="lib")) == "lib+LINT"

    def test_with_remote_keeps_variant(self):
        cmd = Command(name="RUN", local_path="./x", import_ref="alias")
        moved = cmd.with_remote(git_url="host/repo", tag="main", local_path="./x")
        assert isinstance(moved, Command)
        assert moved.name == "RUN"
        assert moved.import_ref == "alias"
        assert cmd.git_url == ""

    def test_to_dict(self):
        d = Target(name="build", git_url="host/repo", tag="main").to_dict()
        assert d['kind'] == "target"
        assert d['reference'] == "host/repo:main+build"


class TestParseReference:
    """Tests for parsing reference strings."""

    def test_local_internal(self):
        ref = parse_reference("+build")
        assert isinstance(ref, Target)
        assert ref.name == "build"
        assert ref.local_path == "."

    def test_local_external(self):
        ref = parse_reference("./lib/sub+test")
        assert ref.local_path == "./lib/sub"
        assert ref.git_url == ""

    def test_remote_with_tag(self):
        ref = parse_reference("github.com/org/repo:v1.0+build")
        assert ref.git_url == "github.com/org/repo"
        assert ref.tag == "v1.0"

    def test_remote_without_tag(self):
        ref = parse_reference("github.com/org/repo/sub+build")
        assert ref.git_url == "github.com/org/repo/sub"
        assert ref.tag == ""

    def test_plus_in_selector(self):
        ref = parse_reference("github.com/org/repo:v1.0+meta+build")
        assert ref.name == "build"
        assert ref.tag == "v1.0+meta"

    def test_name_is_after_last_plus(self):
        ref = parse_reference("./lib+c+test")
        assert ref.local_path == "./lib+c"
        assert ref.name == "test"

    def test_selector_with_slash_stays_in_url(self):
        ref = parse_reference("github.com/org/repo:release/1.0+build")
        assert ref.git_url == "github.com/org/repo:release/1.0"
        assert ref.tag == ""

    def test_import_ref(self):
        ref = parse_reference("lib+build")
        assert ref.import_ref == "lib"

    def test_command_kind(self):
        ref = parse_reference("+RUN_TESTS", kind="command")
        assert isinstance(ref, Command)

    @pytest.mark.parametrize("text", ["build", "github.com/org/repo", "./lib+"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_reference(text)

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            parse_reference("+build", kind="artifact")

    @pytest.mark.parametrize("text", [
        "+build",
        "./lib+test",
        "github.com/org/repo:v1.0+build",
        "lib+build",
    ])
    def test_str_matches_input(self, text):
        assert str(parse_reference(text)) == text
