"""
Handles the 'sync' command: clone or refresh one mirrored branch.

Default output is one JSON record describing what happened;
--table prints a one-line summary instead.
"""

import click

from ..cli_utils import standard_command, add_common_options, mirror_arguments, build_mirror
from ..render import render_sync_result


@click.command(name='sync')
@mirror_arguments
@add_common_options('verbose', 'quiet', 'format', 'table')
@standard_command
def sync_handler(org, repo, branch, root, host, protocol, table, **kwargs):
    """Clone BRANCH of ORG/REPO, or reset it to the remote tip.

    \b
    Creates {root}/{org}/{repo}/{branch} on first use. Afterwards the
    working copy is hard-reset only when origin has new commits;
    local modifications are discarded.

    Examples:

    \b
        repomirror sync octo docs main
        repomirror sync octo docs main --protocol HTTPS --host git.example.org
        repomirror sync octo docs main --root /srv/mirrors --table
    """
    mirror = build_mirror(org, repo, branch, root=root, host=host, protocol=protocol)
    result = mirror.synchronize().to_dict()

    if table:
        render_sync_result(result)
        return None
    return result
