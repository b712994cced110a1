"""
Repository identity for repomirror.

A RepositoryIdentity names one branch of one remote repository and the
local root it is mirrored under. Paths and the remote URL are pure
functions of the identity.
"""

import re
from dataclasses import dataclass
from functools import cached_property
from typing import Dict, Any

from ..exit_codes import InvalidArgument, InvalidProtocol

GITHUB_HOST = "github.com"

SSH = "SSH"
HTTPS = "HTTPS"
PROTOCOLS = (SSH, HTTPS)

_ALLOWED = re.compile(r'[A-Za-z0-9\-_./#]+')


def validate_identity(*values: str) -> None:
    """
    Reject any value containing characters outside [A-Za-z0-9-_./#].

    Raises:
        InvalidArgument: On the first offending value
    """
    for value in values:
        if not isinstance(value, str) or not _ALLOWED.fullmatch(value):
            raise InvalidArgument(f"Invalid argument: {value!r}")


@dataclass(frozen=True)
class RepositoryIdentity:
    """Identity of a single mirrored branch."""
    org: str
    repo: str
    branch: str
    local_directory: str
    host: str = GITHUB_HOST
    protocol: str = SSH

    def __post_init__(self):
        validate_identity(
            self.org, self.repo, self.branch, self.local_directory,
            self.host, self.protocol,
        )
        # "/tmp/" and "/tmp" lay out the same tree
        root = self.local_directory.rstrip('/') or '/'
        object.__setattr__(self, 'local_directory', root)

    @cached_property
    def org_repo(self) -> str:
        return f"{self.org}/{self.repo}"

    @cached_property
    def repo_path(self) -> str:
        """Parent directory a fresh clone is staged in."""
        return _join(self.local_directory, self.org_repo)

    @cached_property
    def path(self) -> str:
        """Root of the working copy for this branch."""
        return _join(self.local_directory, f"{self.org_repo}/{self.branch}")

    @property
    def remote_url(self) -> str:
        """
        Clone URL for the configured protocol.

        Raises:
            InvalidProtocol: If protocol is neither SSH nor HTTPS
        """
        protocol = self.protocol.upper()
        if protocol == SSH:
            return f"git@{self.host}:{self.org_repo}.git"
        if protocol == HTTPS:
            return f"https://{self.host}/{self.org_repo}.git"
        raise InvalidProtocol(f"Invalid protocol: {self.protocol} (expected one of {', '.join(PROTOCOLS)})")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'host': self.host,
            'org': self.org,
            'repo': self.repo,
            'branch': self.branch,
            'protocol': self.protocol,
            'local_directory': self.local_directory,
            'path': self.path,
        }


def _join(root: str, rest: str) -> str:
    if root == '/':
        return f"/{rest}"
    return f"{root}/{rest}"
