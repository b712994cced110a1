"""
File objects for repomirror.

A FileObject is a handle on one path inside a mirror. Content is loaded
lazily and kept for the lifetime of the instance; it goes stale if the
file changes on disk afterwards.
"""

import hashlib
import os
from itertools import islice
from typing import Optional, Dict, Any

from ..exit_codes import InvalidArgument, NotFound

MEBIBYTE = 2 ** 20


class FileObject:
    """
    Handle on a file inside a mirrored working copy.

    Example:
        obj = FileObject("/srv/mirrors/org/repo/main/README.md")
        obj.name          # "README.md"
        obj.read(10)      # first ten lines
        obj.sha()         # same id as `git hash-object README.md`
    """

    def __init__(self, path: str):
        self.path = path
        self._contents: Optional[bytes] = None

    def __repr__(self) -> str:
        return f"FileObject({self.path!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, FileObject):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    @property
    def name(self) -> str:
        """Everything after the last '/', or the whole path."""
        index = self.path.rfind('/')
        return self.path[index + 1:] if index >= 0 else self.path

    def read(self, max_lines: Optional[int] = None) -> str:
        """
        Read the file as text.

        Args:
            max_lines: Return only the first N lines (line endings kept).
                These are read from disk on every call.

        Raises:
            NotFound: If the file cannot be read for any reason
            InvalidArgument: If max_lines is negative
        """
        return self._decode(self.read_bytes(max_lines))

    def read_bytes(self, max_lines: Optional[int] = None) -> bytes:
        """Raw file content; the full content is loaded once."""
        if max_lines is None:
            return self._load()
        if max_lines < 0:
            raise InvalidArgument(f"max_lines must be zero or more, got {max_lines}")

        try:
            with open(self.path, 'rb') as f:
                return b''.join(islice(f, max_lines))
        except OSError as e:
            raise NotFound(f"Could not read {self.path}: {e.strerror or e}") from e

    def size(self) -> float:
        """Size on disk in MiB, not cached."""
        try:
            return os.path.getsize(self.path) / MEBIBYTE
        except OSError as e:
            raise NotFound(f"Could not stat {self.path}: {e.strerror or e}") from e

    def sha(self) -> str:
        """
        Git blob id of the content.

        Git hashes "blob <length>\\0<content>" with SHA-1, so this equals
        the id `git hash-object` assigns to the same bytes.
        """
        contents = self._load()
        header = f"blob {len(contents)}\0".encode('ascii')
        return hashlib.sha1(header + contents).hexdigest()

    content_hash = sha

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': self.path,
            'name': self.name,
        }

    def _load(self) -> bytes:
        if self._contents is None:
            try:
                with open(self.path, 'rb') as f:
                    self._contents = f.read()
            except OSError as e:
                raise NotFound(f"Could not read {self.path}: {e.strerror or e}") from e
        return self._contents

    @staticmethod
    def _decode(data: bytes) -> str:
        return data.decode('utf-8', errors='surrogateescape')
