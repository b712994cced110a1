"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import logging
import sys
import click
from functools import wraps
from typing import Any, Dict, Optional

from .config import load_config, get_mirror_root
from .exit_codes import (
    SUCCESS, INTERRUPTED,
    get_exit_code_for_exception, CommandError, ConfigError
)
from .format_utils import format_output, get_format_from_env, FORMATS
from .infra import GitClient
from .services import RepositoryMirror

logger = logging.getLogger("repomirror")


def standard_command(func):
    """
    Decorator that provides standard CLI behavior:
    - Log messages on stderr, clean data on stdout
    - --verbose raises the log level to DEBUG
    - --quiet suppresses data output
    - Errors become a JSON object on stdout plus a specific exit code
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        verbose = kwargs.get('verbose', False)
        quiet = kwargs.get('quiet', False)
        output_format = kwargs.get('format') or get_format_from_env('jsonl')

        if verbose:
            logger.setLevel(logging.DEBUG)

        try:
            result = func(*args, **kwargs)

            if quiet or result is None:
                # Command handled its own output (or none is wanted)
                pass
            elif isinstance(result, str):
                click.echo(result, nl=not result.endswith('\n'))
            else:
                if isinstance(result, dict):
                    result = [result]
                for line in format_output(result, output_format):
                    click.echo(line)

            sys.exit(SUCCESS)

        except KeyboardInterrupt:
            logger.error("Interrupted by user")
            sys.exit(INTERRUPTED)
        except click.ClickException:
            raise
        except CommandError as e:
            logger.error(str(e))
            if not quiet:
                click.echo(json.dumps({
                    "error": str(e),
                    "type": type(e).__name__,
                    "exit_code": e.exit_code
                }, ensure_ascii=False))
            sys.exit(e.exit_code)
        except Exception as e:
            logger.error(f"Command failed: {e}")
            if not quiet:
                click.echo(json.dumps({
                    "error": str(e),
                    "type": type(e).__name__
                }, ensure_ascii=False))
            sys.exit(get_exit_code_for_exception(e))

    return wrapper


def build_mirror(org: str, repo: str, branch: str,
                 root: Optional[str] = None,
                 host: Optional[str] = None,
                 protocol: Optional[str] = None,
                 config: Optional[Dict[str, Any]] = None) -> RepositoryMirror:
    """
    Create a RepositoryMirror from CLI values, falling back to config.

    Raises:
        InvalidArgument: If any value contains a disallowed character
        ConfigError: If git.timeout is not a number
    """
    if config is None:
        config = load_config()
    mirror_config = config.get('mirror', {})
    git_config = config.get('git', {})

    if root is None:
        root = get_mirror_root(config)

    timeout = git_config.get('timeout')
    if timeout is not None:
        try:
            timeout = float(timeout)
        except (TypeError, ValueError):
            raise ConfigError(f"git.timeout must be a number of seconds, got {timeout!r}")

    return RepositoryMirror(
        org=org,
        repo=repo,
        branch=branch,
        local_directory=root,
        host=host or mirror_config.get('host', 'github.com'),
        protocol=protocol or mirror_config.get('protocol', 'SSH'),
        git_client=GitClient(
            executable=git_config.get('executable') or 'git',
            timeout=timeout,
        ),
    )


def mirror_arguments(func):
    """Add ORG REPO BRANCH arguments and --root/--host/--protocol options."""
    options = [
        click.argument('org'),
        click.argument('repo'),
        click.argument('branch'),
        click.option('--root', default=None,
                     help='Local root directory (default: mirror.root from config)'),
        click.option('--host', default=None,
                     help='Git host (default: mirror.host from config)'),
        click.option('--protocol', default=None,
                     help='SSH or HTTPS (default: mirror.protocol from config)'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


# Standard options that many commands share
common_options = {
    'verbose': click.option('-v', '--verbose', is_flag=True,
                            help='Show debug logging, including git commands'),
    'quiet': click.option('-q', '--quiet', is_flag=True,
                          help='Suppress data output'),
    'format': click.option('-f', '--format',
                           type=click.Choice(list(FORMATS)),
                           help='Output format (default: jsonl, or from REPOMIRROR_FORMAT env)'),
    'table': click.option('--table', is_flag=True,
                          help='Display as a formatted table'),
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
