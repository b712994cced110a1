#!/usr/bin/env python3

import click

from repomirror.config import load_config, configure_logging
from repomirror.commands.sync import sync_handler
from repomirror.commands.files import ls_handler, cat_handler, hash_handler, path_handler
from repomirror.commands.config import config_cmd


@click.group()
@click.version_option(package_name='repomirror')
def cli():
    """repomirror - Local mirrors of single git branches.

    Keeps {root}/{org}/{repo}/{branch} in step with the remote branch
    and reads files from it with git-compatible blob hashes.
    """
    configure_logging(load_config())


cli.add_command(sync_handler, name='sync')
cli.add_command(ls_handler, name='ls')
cli.add_command(cat_handler, name='cat')
cli.add_command(hash_handler, name='hash')
cli.add_command(path_handler, name='path')
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
