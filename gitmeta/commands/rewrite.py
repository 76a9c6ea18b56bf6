"""
Handles the 'rewrite' command for pinning a reference to a git revision.
"""

import click

from ..cli_utils import standard_command, add_common_options
from ..config import load_config
from ..domain import parse_reference
from ..services import MetadataService, reference_with_git_meta


@click.command(name='rewrite')
@click.argument('reference')
@click.option('-d', '--dir', 'directory', default='.', type=click.Path(exists=True, file_okay=False),
              help='Directory whose git metadata is applied (default: current directory)')
@click.option('--command', 'as_command', is_flag=True, help='Treat REFERENCE as a command instead of a target')
@add_common_options('verbose', 'quiet', 'format')
@standard_command
def rewrite_handler(reference, directory, as_command, progress, **kwargs):
    """Rewrite REFERENCE to point at the repository revision of --dir.

    \b
    The reference keeps its name and local path. Its remote location
    becomes the canonical origin URL joined with the directory's path in
    the repository, pinned to an explicit tag if REFERENCE has one, else
    the first tag at HEAD, else the branch, else the commit hash.

    Examples:

    \b
        gitmeta rewrite +build                  # Target in the current directory
        gitmeta rewrite ./lib+test -d services  # Local target, metadata of services/
        gitmeta rewrite +RUN_TESTS --command    # A command instead of a target
    """
    try:
        ref = parse_reference(reference, 'command' if as_command else 'target')
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='REFERENCE')

    metadata, error = MetadataService(config=load_config()).assemble(directory)
    if error is not None:
        progress.warning(str(error))

    rewritten = reference_with_git_meta(ref, metadata)
    if rewritten is ref:
        progress.warning("No remote detected, reference left unchanged")

    return {
        'reference': str(ref),
        'rewritten': str(rewritten),
        'kind': rewritten.kind,
        'name': rewritten.name,
        'git_url': rewritten.git_url,
        'tag': rewritten.tag,
    }
