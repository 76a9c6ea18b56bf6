#!/usr/bin/env python3

import logging

import click

from gitmeta import __version__
from gitmeta.config import load_config, configure_logging
from gitmeta.commands.meta import meta_handler
from gitmeta.commands.normalize import normalize_handler
from gitmeta.commands.rewrite import rewrite_handler
from gitmeta.commands.config import config_cmd


@click.group()
@click.version_option(version=__version__, prog_name="gitmeta")
@click.option('--debug', is_flag=True, help='Enable debug logging')
def cli(debug):
    """gitmeta - Git metadata detection and reference pinning.

    Detects where a directory lives in version control and rewrites
    build references so they point at a specific repository revision.
    """
    configure_logging(load_config())
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)


cli.add_command(meta_handler, name='meta')
cli.add_command(normalize_handler, name='normalize')
cli.add_command(rewrite_handler, name='rewrite')
cli.add_command(config_cmd)


def main():
    cli()


if __name__ == "__main__":
    main()
