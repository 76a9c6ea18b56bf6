"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import sys
import click
from functools import wraps
from typing import Generator
from .config import load_config
from .progress import get_progress
from .exit_codes import (
    SUCCESS, INTERRUPTED,
    get_exit_code_for_exception, CommandError
)
from .format_utils import FORMATS, format_output, get_format_from_env


def standard_command(func):
    """
    Decorator that provides standard CLI behavior:
    - Progress reporting on stderr
    - Formatted data output on stdout (JSONL by default)
    - --quiet/-q to suppress data output
    - Consistent error handling with exit codes

    The command returns a generator, list or dict of records, or None if it
    handled its own output. A CommandError raised by a generator after some
    records were produced still sets the exit code, but only after those
    records are printed, whatever the format.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        verbose = kwargs.get('verbose', False)
        quiet = kwargs.get('quiet', False)
        default_format = load_config().get('output', {}).get('format', 'jsonl')
        output_format = kwargs.get('format') or get_format_from_env(default_format)

        progress = get_progress(enabled=verbose or None)
        kwargs['progress'] = progress

        try:
            result = func(*args, **kwargs)

            if result is None:
                pass
            elif quiet:
                # Consume the generator so errors raised while producing records still surface
                if isinstance(result, Generator):
                    for _ in result:
                        pass
            else:
                if isinstance(result, dict):
                    result = [result]
                deferred = None
                if output_format != 'jsonl':
                    # Buffered formats: print what was produced before a failure
                    records = []
                    try:
                        for record in result:
                            records.append(record)
                    except CommandError as e:
                        deferred = e
                    result = records
                for line in format_output(result, output_format):
                    print(line, flush=True)
                if deferred is not None:
                    raise deferred

            sys.exit(SUCCESS)

        except KeyboardInterrupt:
            progress.error("Interrupted by user")
            sys.exit(INTERRUPTED)
        except click.ClickException:
            raise
        except CommandError as e:
            progress.error(str(e))
            if not quiet:
                error_obj = {
                    "error": str(e),
                    "type": type(e).__name__,
                    "exit_code": e.exit_code
                }
                if hasattr(e, 'missing'):
                    error_obj['missing'] = e.missing
                print(json.dumps(error_obj, ensure_ascii=False), flush=True)
            sys.exit(e.exit_code)
        except (OSError, ValueError, TypeError) as e:
            progress.error(f"Command failed: {e}")
            if not quiet:
                error_obj = {
                    "error": str(e),
                    "type": type(e).__name__
                }
                print(json.dumps(error_obj, ensure_ascii=False), flush=True)
            sys.exit(get_exit_code_for_exception(e))

    return wrapper


# Standard options that many commands share
common_options = {
    'verbose': click.option('-v', '--verbose', is_flag=True,
                            help='Force progress output even when piped'),
    'quiet': click.option('-q', '--quiet', is_flag=True,
                          help='Suppress data output, show only progress'),
    'format': click.option('-f', '--format',
                           type=click.Choice(list(FORMATS)),
                           help='Output format (default: jsonl, or from GITMETA_FORMAT env)'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('verbose', 'quiet')
        def my_command(verbose, quiet):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator
