"""
Shared fixtures: fabricated mirror directories and a fake git client.
"""

import os
from pathlib import Path

import pytest

from repomirror.infra import GitClient, GitResult
from repomirror.services import RepositoryMirror

MEBIBYTE = 2 ** 20


class FakeGitClient(GitClient):
    """
    GitClient that records calls instead of running git.

    Set head/remote/clone_result/reset_result to control outcomes.
    """

    def __init__(self):
        super().__init__()
        self.calls = []
        self.head = GitResult(0, "abc123\n")
        self.remote = GitResult(0, "Fetching origin\nabc123\n")
        self.clone_result = GitResult(0, "", "Cloning into 'main'...\n")
        self.reset_result = GitResult(0, "HEAD is now at def456\n")

    def _run(self, args, cwd):
        raise AssertionError(f"unexpected git call: {args} in {cwd}")

    def head_commit(self, path):
        self.calls.append(('head_commit', path))
        return self.head

    def remote_commit(self, path, branch):
        self.calls.append(('remote_commit', path, branch))
        return self.remote

    def clone(self, url, branch, destination, cwd):
        self.calls.append(('clone', url, branch, destination, cwd))
        return self.clone_result

    def reset_to_remote(self, path, branch):
        self.calls.append(('reset_to_remote', path, branch))
        return self.reset_result

    def count(self, name):
        return sum(1 for call in self.calls if call[0] == name)


@pytest.fixture
def fake_git():
    return FakeGitClient()


@pytest.fixture
def local_directory(tmp_path):
    """Root directory mirrors are created under."""
    return str(tmp_path / "repos")


@pytest.fixture
def repo_args(local_directory):
    return {
        'org': 'cool_org',
        'repo': 'awesome_repo',
        'branch': 'brunch-1',
        'local_directory': local_directory,
    }


def create_file(path, size=None):
    """Create an empty file, or one of `size` MiB of random bytes."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'wb') as f:
        for _ in range(int(size or 0)):
            f.write(os.urandom(MEBIBYTE))
    return path


@pytest.fixture
def create_git_repository():
    """Lay out a mirror directory with the given files, without git."""
    def _create(org, repo, branch, local_directory, file_paths=(), size=None):
        mirror = RepositoryMirror(org=org, repo=repo, branch=branch, local_directory=local_directory)
        Path(mirror.path).mkdir(parents=True, exist_ok=True)
        for file_path in file_paths:
            create_file(os.path.join(mirror.path, file_path), size)
        return mirror.path
    return _create


@pytest.fixture
def write_local_git_file():
    """Write text into a file of a mirror (with a trailing newline, like puts)."""
    def _write(org, repo, branch, local_directory, file_path, file_contents):
        mirror = RepositoryMirror(org=org, repo=repo, branch=branch, local_directory=local_directory)
        path = Path(mirror.path) / file_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if not file_contents.endswith('\n'):
            file_contents += '\n'
        path.write_bytes(file_contents.encode('utf-8'))
        return str(path)
    return _write
