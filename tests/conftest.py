"""Shared fixtures for gitmeta tests."""

import subprocess
from unittest.mock import MagicMock

import pytest

from gitmeta.infra import GitClient


def run_git(cwd, *args):
    """Run git with a fixed identity and no signing, return stdout."""
    cmd = [
        "git",
        "-c", "user.name=Test User",
        "-c", "user.email=test@example.com",
        "-c", "commit.gpgsign=false",
        "-c", "tag.gpgsign=false",
    ] + list(args)
    result = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True, check=True)
    return result.stdout.strip()


@pytest.fixture
def git_repo(tmp_path):
    """A real repository on branch main with one commit and no remote."""
    repo = tmp_path / "repo"
    repo.mkdir()
    run_git(repo, "init", "-q")
    run_git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    (repo / "sub" / "dir").mkdir(parents=True)
    (repo / "sub" / "dir" / "file.txt").write_text("hello\n")
    run_git(repo, "add", ".")
    run_git(repo, "commit", "-q", "-m", "initial")
    return repo.resolve()


@pytest.fixture
def stub_git(tmp_path):
    """A GitClient stub describing a fully detectable repository at tmp_path."""
    client = MagicMock(spec=GitClient)
    client.has_git_binary.return_value = True
    client.is_git_repo.return_value = True
    client.repository_root.return_value = str(tmp_path.resolve())
    client.remote_url.return_value = "git@github.com:org/repo.git"
    client.commit_hash.return_value = "0123456789abcdef0123456789abcdef01234567"
    client.short_commit_hash.return_value = "01234567"
    client.current_branches.return_value = ["main"]
    client.tags_at_head.return_value = []
    client.commit_timestamp.return_value = "1700000000"
    return client


@pytest.fixture
def git():
    """Helper for running git commands in test repositories."""
    return run_git
