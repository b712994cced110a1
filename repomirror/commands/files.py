"""
Handles the file commands: 'ls', 'cat', 'hash' and 'path'.

These only read the local working copy; run 'sync' first to refresh it.
"""

import os
from typing import Any, Dict

import click

from ..cli_utils import standard_command, add_common_options, mirror_arguments, build_mirror
from ..render import render_files_table


def _file_record(mirror, obj, details: bool = False) -> Dict[str, Any]:
    record = obj.to_dict()
    record['local_path'] = mirror.to_local_path(obj.path)
    if details:
        record['sha'] = obj.sha()
        record['size_mib'] = obj.size()
    return record


@click.command(name='ls')
@mirror_arguments
@click.argument('subpath', required=False)
@click.option('-r', '--recursive', is_flag=True, help='Walk the whole subtree')
@click.option('--dirs', 'include_directories', is_flag=True,
              help='With --recursive, list directories too')
@click.option('--sha', 'details', is_flag=True, help='Include blob sha and size')
@add_common_options('verbose', 'quiet', 'format', 'table')
@standard_command
def ls_handler(org, repo, branch, root, host, protocol, subpath, recursive,
               include_directories, details, table, **kwargs):
    """List files in a mirrored branch.

    SUBPATH: Folder relative to the mirror root (default: the root)

    \b
    Without --recursive only the files directly inside SUBPATH are
    listed, skipping folders and .zip archives.

    Examples:

    \b
        repomirror ls octo docs main
        repomirror ls octo docs main guides --sha --table
        repomirror ls octo docs main -r --dirs
    """
    mirror = build_mirror(org, repo, branch, root=root, host=host, protocol=protocol)
    if recursive:
        objects = mirror.list_all_files(subpath, include_directories=include_directories)
    else:
        objects = mirror.list_files(subpath)

    # Directories have no content to hash
    records = [
        _file_record(mirror, obj, details=details and not (include_directories and os.path.isdir(obj.path)))
        for obj in objects
    ]

    if table:
        render_files_table(records, title=f"{org}/{repo}@{branch}")
        return None
    return records


@click.command(name='cat')
@mirror_arguments
@click.argument('file_path')
@click.option('-n', '--lines', 'max_lines', type=click.IntRange(min=0), default=None,
              help='Only print the first N lines')
@add_common_options('verbose')
@standard_command
def cat_handler(org, repo, branch, root, host, protocol, file_path, max_lines, **kwargs):
    """Print a file from a mirrored branch.

    FILE_PATH: Path relative to the mirror root

    Content is written as raw bytes, so binary files come out unchanged.
    """
    mirror = build_mirror(org, repo, branch, root=root, host=host, protocol=protocol)
    click.echo(mirror.file_object(file_path).read_bytes(max_lines), nl=False)
    return None


@click.command(name='hash')
@mirror_arguments
@click.argument('file_path')
@add_common_options('verbose', 'quiet', 'format', 'table')
@standard_command
def hash_handler(org, repo, branch, root, host, protocol, file_path, table, **kwargs):
    """Show the git blob sha and size of a file.

    FILE_PATH: Path relative to the mirror root

    The sha matches `git hash-object FILE_PATH`.
    """
    mirror = build_mirror(org, repo, branch, root=root, host=host, protocol=protocol)
    record = _file_record(mirror, mirror.file_object(file_path), details=True)

    if table:
        render_files_table([record])
        return None
    return record


@click.command(name='path')
@mirror_arguments
@add_common_options('verbose')
@standard_command
def path_handler(org, repo, branch, root, host, protocol, **kwargs):
    """Print the local directory a branch is mirrored to."""
    mirror = build_mirror(org, repo, branch, root=root, host=host, protocol=protocol)
    return mirror.path
