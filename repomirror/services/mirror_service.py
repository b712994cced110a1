"""
Mirror service for repomirror.

Keeps a local working copy of one remote branch up to date and hands out
FileObjects for the files inside it.

Layout:
    {root}/{org}/{repo}/           clone staging parent
    {root}/{org}/{repo}/{branch}/  working copy

Concurrency:
    Every git call blocks the caller and nothing is locked. Only one
    caller may synchronize a given mirror path at a time.
"""

from dataclasses import dataclass
from typing import Dict, Any, Iterator, List, Optional
import logging
import os

from ..domain import FileObject, RepositoryIdentity, GITHUB_HOST, SSH, validate_identity
from ..exit_codes import NotFound
from ..infra import GitClient, GitResult

logger = logging.getLogger(__name__)

CLONED = "cloned"
RESET = "reset"
UNCHANGED = "unchanged"

EXCLUDED_EXTENSIONS = {'.zip'}


@dataclass(frozen=True)
class SyncResult:
    """What synchronize() did to the working copy."""
    action: str
    path: str

    def to_dict(self) -> Dict[str, Any]:
        return {'action': self.action, 'path': self.path}


class RepositoryMirror:
    """
    Local mirror of a single remote branch.

    Example:
        mirror = RepositoryMirror(
            org="octo", repo="docs", branch="main",
            local_directory="/srv/mirrors",
        )
        mirror.synchronize()
        for obj in mirror.list_files("guides"):
            print(obj.name, obj.sha())
    """

    def __init__(
        self,
        org: str,
        repo: str,
        branch: str,
        local_directory: str,
        host: str = GITHUB_HOST,
        protocol: str = SSH,
        git_client: Optional[GitClient] = None
    ):
        """
        Initialize RepositoryMirror.

        Args:
            org: Organization or user owning the repository
            repo: Repository name
            branch: Branch to mirror
            local_directory: Root directory holding all mirrors
            host: Git host (default: github.com)
            protocol: SSH or HTTPS, only checked when a clone is needed
            git_client: Git client instance (creates default if None)

        Raises:
            InvalidArgument: If any value contains a disallowed character
        """
        self.identity = RepositoryIdentity(
            org=org,
            repo=repo,
            branch=branch,
            local_directory=local_directory,
            host=host,
            protocol=protocol,
        )
        self.git = git_client or GitClient()

    @classmethod
    def from_identity(
        cls,
        identity: RepositoryIdentity,
        git_client: Optional[GitClient] = None
    ) -> "RepositoryMirror":
        return cls(
            org=identity.org,
            repo=identity.repo,
            branch=identity.branch,
            local_directory=identity.local_directory,
            host=identity.host,
            protocol=identity.protocol,
            git_client=git_client,
        )

    validate_identity = staticmethod(validate_identity)

    @property
    def branch(self) -> str:
        return self.identity.branch

    @property
    def path(self) -> str:
        """Working copy root: {root}/{org}/{repo}/{branch}."""
        return self.identity.path

    @property
    def repo_path(self) -> str:
        return self.identity.repo_path

    def synchronize(self) -> SyncResult:
        """
        Make the working copy match the tip of the remote branch.

        Clones when the working copy is missing, hard-resets it when the
        remote has moved on, and otherwise leaves it alone. Local changes
        are discarded by a reset.

        Raises:
            InvalidProtocol: If a clone is needed and the protocol is unknown
            NotFound: If cloning, updating or resetting fails
        """
        if not os.path.isdir(self.path):
            self._clone()
            return SyncResult(CLONED, self.path)

        if self.is_remote_ahead():
            self._reset_to_remote()
            return SyncResult(RESET, self.path)

        logger.debug(f"{self.path} is up to date")
        return SyncResult(UNCHANGED, self.path)

    get = synchronize

    def is_remote_ahead(self) -> bool:
        """
        Check whether origin/<branch> differs from the local HEAD.

        Raises:
            NotFound: If either commit id cannot be read
        """
        head = self._check(self.git.head_commit(self.path), "read HEAD of")
        remote = self._check(self.git.remote_commit(self.path, self.branch), "update remote of")
        return head.last_line != remote.last_line

    new_commit_on_remote = is_remote_ahead

    def file_object(self, file_path: str) -> FileObject:
        """
        FileObject for a path in the mirror. Existence is not checked.

        Leading slashes are dropped, so the result stays under the mirror root.
        """
        return FileObject(os.path.join(self.path, file_path.lstrip('/')))

    def list_files(self, file_path: Optional[str] = None) -> List[FileObject]:
        """
        Files directly inside the mirror root or a folder within it.

        Directories, hidden entries and .zip archives are skipped. Results
        come in directory order, which is not sorted.
        """
        base = self._base_path(file_path)
        if not os.path.isdir(base):
            return []

        files = []
        with os.scandir(base) as entries:
            for entry in entries:
                if entry.name.startswith('.') or entry.is_dir():
                    continue
                if os.path.splitext(entry.name)[1] in EXCLUDED_EXTENSIONS:
                    continue
                files.append(FileObject(os.path.join(base, entry.name)))
        return files

    file_objects = list_files

    def list_all_files(
        self,
        file_path: Optional[str] = None,
        include_directories: bool = False
    ) -> List[FileObject]:
        """
        Every file below the mirror root or a folder within it.

        Args:
            file_path: Folder relative to the mirror root
            include_directories: Also return the folders themselves

        Returns:
            FileObjects in name order, each folder followed by its contents
        """
        base = self._base_path(file_path)
        return [
            FileObject(path)
            for path, is_dir in self._walk(base)
            if include_directories or not is_dir
        ]

    all_file_objects = list_all_files

    def to_local_path(self, file_path: str) -> str:
        """Strip the mirror root from a path; relative paths come back unchanged."""
        return file_path.replace(f"{self.path}/", "")

    local_path = to_local_path

    def _base_path(self, file_path: Optional[str]) -> str:
        if file_path is None:
            return self.path
        return os.path.join(self.path, file_path.lstrip('/')).rstrip('/')

    def _walk(self, base: str) -> Iterator[tuple]:
        try:
            with os.scandir(base) as it:
                entries = sorted(it, key=lambda e: e.name)
        except (FileNotFoundError, NotADirectoryError):
            return

        for entry in entries:
            if entry.name.startswith('.'):
                continue
            path = os.path.join(base, entry.name)
            if entry.is_dir(follow_symlinks=False):
                yield path, True
                yield from self._walk(path)
            else:
                yield path, entry.is_dir()

    def _clone(self) -> None:
        url = self.identity.remote_url
        os.makedirs(self.repo_path, exist_ok=True)

        logger.info(f"Cloning {url} ({self.branch}) into {self.path}")
        result = self.git.clone(url, self.branch, self.branch, cwd=self.repo_path)
        self._check(result, "clone")

    def _reset_to_remote(self) -> None:
        logger.info(f"Resetting {self.path} to origin/{self.branch}")
        self._check(self.git.reset_to_remote(self.path, self.branch), "reset")

    def _check(self, result: GitResult, action: str) -> GitResult:
        if not result.ok:
            logger.error(f"Failed to {action} {self.identity.org_repo}/{self.branch}: exit {result.exit_code}")
            raise NotFound(result.output)
        return result
