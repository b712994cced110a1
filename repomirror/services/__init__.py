"""
Service layer for repomirror.

Contains the logic that orchestrates domain objects and infrastructure:
- RepositoryMirror: Clone/refresh a branch and list the files in it

Services are the primary API for commands to use.
"""

from .mirror_service import RepositoryMirror, SyncResult, CLONED, RESET, UNCHANGED

__all__ = [
    'RepositoryMirror',
    'SyncResult',
    'CLONED',
    'RESET',
    'UNCHANGED',
]
