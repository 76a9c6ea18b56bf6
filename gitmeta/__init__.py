"""
gitmeta - Git metadata detection and reference pinning.

gitmeta finds out where a directory lives in version control (repository
root, path inside it, origin remote, checked out revision) and uses that to
pin build references to a reproducible remote location.

Quick Start:
    import gitmeta

    # Detect metadata for a directory
    meta, err = gitmeta.get_metadata("services/api")
    if err:
        print(f"partial metadata: {err}")
    print(meta.git_url, meta.rel_dir, meta.hash)

    # Canonical form of a remote URL
    gitmeta.normalize_remote_url("git@github.com:org/repo.git")
    # -> "github.com/org/repo"

    # Pin a reference to the detected revision
    ref = gitmeta.Target(name="build", local_path=".")
    pinned = gitmeta.reference_with_git_meta(ref, meta)
    print(pinned)  # github.com/org/repo/services/api:main+build

Domain Objects:
    GitMetadata - Git information about a directory
    Target, Command - Reference variants

Services:
    MetadataService - Metadata assembly over an injectable GitClient
"""

__version__ = "0.1.0"

# Domain objects
from .domain import (
    GitMetadata,
    Reference,
    Target,
    Command,
    normalize_remote_url,
    parse_reference,
)

# Services
from .services import (
    MetadataService,
    get_metadata,
    reference_with_git_meta,
)

# Infrastructure
from .infra import GitClient

# Errors
from .exit_codes import (
    GitMetaError,
    DetectionError,
    NoGitBinaryError,
    NotAGitDirError,
    CouldNotDetectRemoteError,
    CouldNotDetectHashError,
    CouldNotDetectShortHashError,
    CouldNotDetectBranchError,
    NonRelativePathError,
)

# Configuration
from .config import load_config, save_config

__all__ = [
    # Version
    "__version__",
    # Domain objects
    "GitMetadata",
    "Reference",
    "Target",
    "Command",
    "normalize_remote_url",
    "parse_reference",
    # Services
    "MetadataService",
    "get_metadata",
    "reference_with_git_meta",
    # Infrastructure
    "GitClient",
    # Errors
    "GitMetaError",
    "DetectionError",
    "NoGitBinaryError",
    "NotAGitDirError",
    "CouldNotDetectRemoteError",
    "CouldNotDetectHashError",
    "CouldNotDetectShortHashError",
    "CouldNotDetectBranchError",
    "NonRelativePathError",
    # Configuration
    "load_config",
    "save_config",
]
