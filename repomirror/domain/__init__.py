"""
Domain layer for repomirror.

Contains the value objects the mirror works with:
- RepositoryIdentity: Which branch of which remote, mirrored where
- FileObject: Handle on a file inside a mirror

Identities are immutable; file objects only cache their own content.
"""

from .identity import (
    RepositoryIdentity,
    validate_identity,
    GITHUB_HOST,
    SSH,
    HTTPS,
    PROTOCOLS,
)
from .file_object import FileObject

__all__ = [
    'RepositoryIdentity',
    'validate_identity',
    'GITHUB_HOST',
    'SSH',
    'HTTPS',
    'PROTOCOLS',
    'FileObject',
]
