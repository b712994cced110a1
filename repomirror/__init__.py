"""
repomirror - Local mirrors of single git branches.

repomirror keeps a working copy of one remote branch under a local root
and exposes the files in it with git-compatible content hashes.

Quick Start:
    import repomirror

    mirror = repomirror.RepositoryMirror(
        org="octo",
        repo="docs",
        branch="main",
        local_directory="/srv/mirrors",
    )

    # Clone on first use, hard-reset when origin has moved on
    mirror.synchronize()

    # Files directly in a folder (no directories, no .zip)
    for obj in mirror.list_files("guides"):
        print(obj.name, obj.sha())

    # Whole subtree, optionally with directories
    for obj in mirror.list_all_files(include_directories=True):
        print(mirror.to_local_path(obj.path))

    # Other hosts and HTTPS
    mirror = repomirror.RepositoryMirror(
        org="team", repo="app", branch="release",
        local_directory="/srv/mirrors",
        host="git.example.org", protocol="HTTPS",
    )

Errors:
    InvalidArgument - an identity value has characters outside [A-Za-z0-9-_./#]
    InvalidProtocol - protocol is neither SSH nor HTTPS (raised when cloning)
    NotFound - clone/update/reset failed, or a file could not be read
"""

__version__ = "0.3.0"

from .domain import RepositoryIdentity, FileObject, validate_identity, GITHUB_HOST, SSH, HTTPS
from .services import RepositoryMirror, SyncResult
from .infra import GitClient, GitResult
from .exit_codes import MirrorError, InvalidArgument, InvalidProtocol, NotFound
from .config import load_config, save_config

__all__ = [
    "__version__",
    "RepositoryMirror",
    "SyncResult",
    "RepositoryIdentity",
    "FileObject",
    "validate_identity",
    "GITHUB_HOST",
    "SSH",
    "HTTPS",
    "GitClient",
    "GitResult",
    "MirrorError",
    "InvalidArgument",
    "InvalidProtocol",
    "NotFound",
    "load_config",
    "save_config",
]
