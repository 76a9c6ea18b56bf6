"""
Reference rewriting for gitmeta.

Pins a reference to the repository, subdirectory and revision described by a
GitMetadata record.
"""

import posixpath
from typing import Optional

from ..domain import GitMetadata, Reference, REFERENCE_TYPES


def select_revision(metadata: GitMetadata) -> str:
    """Pick the revision selector: first tag, else first branch, else the hash."""
    if metadata.tags:
        return metadata.tags[0]
    if metadata.branch:
        return metadata.branch[0]
    return metadata.hash


def reference_with_git_meta(reference: Reference, metadata: Optional[GitMetadata]) -> Reference:
    """
    Apply git metadata to a reference.

    The result points at the metadata's canonical URL joined with its
    relative directory. An explicit tag already on the reference is kept;
    otherwise the selector comes from select_revision(). Name, local path and
    import ref are copied unchanged. The input is never modified.

    Args:
        reference: Target or Command to rewrite
        metadata: Git metadata for the directory the reference lives in

    Returns:
        A new reference of the same variant, or the input itself when the
        metadata has no remote

    Raises:
        TypeError: If reference is not one of the known variants
    """
    if metadata is None or not metadata.git_url:
        return reference

    if type(reference) not in REFERENCE_TYPES:
        raise TypeError(f"not supported for this type: {type(reference).__name__}")

    git_url = metadata.git_url
    if metadata.rel_dir:
        git_url = posixpath.normpath(posixpath.join(git_url, metadata.rel_dir))

    tag = reference.tag or select_revision(metadata)

    return reference.with_remote(git_url=git_url, tag=tag, local_path=reference.local_path)
