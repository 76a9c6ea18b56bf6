"""
Service layer for gitmeta.

Services contain the business logic, built on the domain objects and
infrastructure clients:
- MetadataService: Assemble GitMetadata for a directory
- reference_with_git_meta: Pin a reference to a repository revision
"""

from .metadata_service import MetadataService, get_metadata, relative_dir
from .reference_service import reference_with_git_meta, select_revision

__all__ = [
    'MetadataService',
    'get_metadata',
    'relative_dir',
    'reference_with_git_meta',
    'select_revision',
]
