"""
Git metadata domain object for gitmeta.

GitMetadata describes where a directory lives in version control: the
repository root, the directory's path within it, the remote it came from and
the revision it is checked out at. It's immutable and serializable for JSONL
output.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple


def normalize_remote_url(remote_url: str) -> str:
    """
    Convert a git remote URL to its canonical ``host/path`` form.

    Handles ``scheme://[user@]host/path[.git]`` as well as the SSH shorthand
    ``[user@]host:path[.git]``. Already canonical input is returned as is.

    Examples:
        >>> normalize_remote_url("https://user@github.com/org/repo.git")
        'github.com/org/repo'
        >>> normalize_remote_url("git@github.com:org/repo.git")
        'github.com/org/repo'
    """
    s = remote_url

    # Remove transport
    _, sep, rest = s.partition("://")
    if sep:
        s = rest

    # Remove user
    _, sep, rest = s.partition("@")
    if sep:
        s = rest

    s = s.replace(":", "/", 1)
    if s.endswith(".git"):
        s = s[:-len(".git")]
    return s


@dataclass(frozen=True)
class GitMetadata:
    """
    Immutable collection of git information about a directory.

    All fields are immutable. Paths use forward slashes regardless of
    platform. ``rel_dir`` is "." when the directory is the repository root.

    Example:
        meta, err = MetadataService().assemble("path/to/dir")
        print(meta.git_url, meta.rel_dir, meta.hash)
    """

    base_dir: str = ""
    rel_dir: str = ""
    remote_url: str = ""
    git_url: str = ""
    hash: str = ""
    short_hash: str = ""
    branch: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()
    timestamp: str = ""

    def clone(self) -> 'GitMetadata':
        """
        Create a reduced copy carrying only location-identifying fields.

        The copy keeps base dir, rel dir, canonical URL, hash and branch.
        Remote URL, short hash, tags and timestamp are left empty.
        """
        return GitMetadata(
            base_dir=self.base_dir,
            rel_dir=self.rel_dir,
            git_url=self.git_url,
            hash=self.hash,
            branch=self.branch,
        )

    def missing_fields(self) -> Tuple[str, ...]:
        """Names of the optional fields that came back empty."""
        candidates = {
            'remote_url': self.remote_url,
            'hash': self.hash,
            'short_hash': self.short_hash,
            'branch': self.branch,
        }
        return tuple(name for name, value in candidates.items() if not value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'base_dir': self.base_dir,
            'rel_dir': self.rel_dir,
            'remote_url': self.remote_url,
            'git_url': self.git_url,
            'hash': self.hash,
            'short_hash': self.short_hash,
            'branch': list(self.branch),
            'tags': list(self.tags),
            'timestamp': self.timestamp,
        }

    def to_jsonl(self) -> str:
        """Convert to single-line JSON for streaming output."""
        import json
        return json.dumps(self.to_dict(), ensure_ascii=False)

    def __str__(self) -> str:
        location = self.git_url or self.base_dir
        return f"{location} ({self.rel_dir}@{self.short_hash or self.hash or 'unknown'})"
