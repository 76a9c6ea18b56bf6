"""
Domain layer for gitmeta.

Contains pure domain objects with no I/O or side effects:
- GitMetadata: Where a directory lives in version control
- Reference: A named unit (Target or Command) bound to a location
- normalize_remote_url: Canonical host/path form of a remote URL

These objects are immutable and provide serialization methods for
JSONL output.
"""

from .metadata import GitMetadata, normalize_remote_url
from .reference import Reference, Target, Command, REFERENCE_TYPES, parse_reference

__all__ = [
    'GitMetadata',
    'normalize_remote_url',
    'Reference',
    'Target',
    'Command',
    'REFERENCE_TYPES',
    'parse_reference',
]
