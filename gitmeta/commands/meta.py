"""
Handles the 'meta' command for displaying git metadata of a directory.

This command follows our design principles:
- Default output is JSONL streaming
- --verbose/-v for progress output
- --quiet/-q to suppress JSON output
- Thin CLI layer that connects core logic to output
"""

import click

from ..cli_utils import standard_command, add_common_options
from ..config import load_config
from ..exit_codes import PartialSuccessError
from ..render import render_metadata_table
from ..services import MetadataService


@click.command(name='meta')
@click.argument('directory', default='.', type=click.Path(exists=True, file_okay=False))
@click.option('--strict', is_flag=True, help='Exit with an error if any field could not be detected')
@click.option('--clone', 'reduced', is_flag=True, help='Only output location-identifying fields')
@click.option('--table', is_flag=True, help='Display as formatted table')
@add_common_options('verbose', 'quiet', 'format')
@standard_command
def meta_handler(directory, strict, reduced, table, progress, **kwargs):
    """Show git metadata for DIRECTORY (default: current directory).

    \b
    Detects the repository root, the directory's path inside it, the
    origin remote (raw and canonical), the checked out hash, branch and
    tags, and the commit timestamp.

    Fields that cannot be detected are left empty and reported on stderr.
    Use --strict to turn missing fields into a non-zero exit code.

    Examples:

    \b
        gitmeta meta                    # Current directory
        gitmeta meta src/app --table    # Pretty table
        gitmeta meta . --strict         # Fail on missing remote/hash/branch
        gitmeta meta . -f yaml          # YAML output
    """
    progress(f"Detecting git metadata for {directory}...")
    metadata, error = MetadataService(config=load_config()).assemble(directory)
    missing = list(metadata.missing_fields())
    if error is not None:
        progress.warning(str(error))
    if reduced:
        metadata = metadata.clone()

    if table:
        render_metadata_table(metadata)
        if strict and error is not None:
            raise PartialSuccessError(f"Incomplete git metadata: {error}", missing=missing)
        return None

    return _records(metadata, error, strict, missing)


def _records(metadata, error, strict, missing):
    yield metadata.to_dict()
    if strict and error is not None:
        raise PartialSuccessError(f"Incomplete git metadata: {error}", missing=missing)
