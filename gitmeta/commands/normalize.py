"""
Handles the 'normalize' command for canonicalizing git remote URLs.
"""

import click

from ..cli_utils import standard_command, add_common_options
from ..domain import normalize_remote_url


@click.command(name='normalize')
@click.argument('urls', nargs=-1, required=True)
@add_common_options('quiet', 'format')
@standard_command
def normalize_handler(urls, progress, **kwargs):
    """Print the canonical host/path form of each remote URL.

    Examples:

    \b
        gitmeta normalize git@github.com:org/repo.git
        gitmeta normalize https://user@host.com/path/to.git ssh://host/x
    """
    for url in urls:
        yield {'url': url, 'git_url': normalize_remote_url(url)}
