"""Tests for FileObject."""

import hashlib
import os

import pytest

from repomirror.domain import FileObject
from repomirror.exit_codes import InvalidArgument, NotFound, NOT_FOUND

PETER = "lessons on why Peter rocks\ntickle bunnies\ntopple monger\nfarkle and fun\n"
PETER_BLOB_SHA = "93ae8cb68d694caf6795af8f3e640e960e2658ad"
EMPTY_BLOB_SHA = "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"
HELLO_BLOB_SHA = "3b18e512dba79e4c8300dd08aeb37f8e728b8dad"


@pytest.fixture
def file_path(repo_args, local_directory):
    return os.path.join(local_directory, "cool_org/awesome_repo/brunch-1/file1.md")


class TestAttributes:
    """Tests for path and name."""

    def test_keeps_path(self):
        path = "/Path/To/App/AppName/repositories/RepoOrg/RepoName/RepoBranch/FilePath"
        assert FileObject(path).path == path

    def test_requires_path(self):
        with pytest.raises(TypeError):
            FileObject()

    def test_name_is_last_segment(self, file_path):
        assert FileObject(file_path).name == "file1.md"

    def test_name_without_separator(self):
        assert FileObject("README").name == "README"

    def test_name_of_trailing_slash_is_empty(self):
        assert FileObject("folder/").name == ""

    def test_equality_by_path(self):
        assert FileObject("/a/b") == FileObject("/a/b")
        assert FileObject("/a/b") != FileObject("/a/c")
        assert len({FileObject("/a/b"), FileObject("/a/b")}) == 1


class TestRead:
    """Tests for read()."""

    def test_missing_file_raises_not_found(self, file_path):
        with pytest.raises(NotFound) as exc_info:
            FileObject(file_path).read()
        assert exc_info.value.exit_code == NOT_FOUND

    def test_missing_file_with_lines_raises_not_found(self, file_path):
        with pytest.raises(NotFound):
            FileObject(file_path).read(2)

    def test_reading_directory_raises_not_found(self, tmp_path):
        with pytest.raises(NotFound):
            FileObject(str(tmp_path)).read()

    def test_returns_contents(self, repo_args, create_git_repository, write_local_git_file, file_path):
        create_git_repository(**repo_args, file_paths=["file1.md"])
        write_local_git_file(**repo_args, file_path="file1.md", file_contents="lessons on why Jordan rocks")

        assert FileObject(file_path).read() == "lessons on why Jordan rocks\n"

    def test_max_lines(self, repo_args, write_local_git_file, file_path):
        write_local_git_file(
            **repo_args, file_path="file1.md",
            file_contents="lessons on why Jordan rocks\ntickle bunnies\ntopple monger\nfarkle and fart\n",
        )

        assert FileObject(file_path).read(2) == "lessons on why Jordan rocks\ntickle bunnies\n"

    def test_max_lines_beyond_end_returns_everything(self, repo_args, write_local_git_file, file_path):
        write_local_git_file(**repo_args, file_path="file1.md", file_contents="line 1\nline 2\nline 3\nline 4\n")

        assert FileObject(file_path).read(10) == "line 1\nline 2\nline 3\nline 4\n"

    def test_full_read_is_memoized(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("first\n")
        obj = FileObject(str(path))

        assert obj.read() == "first\n"
        path.write_text("second\n")
        assert obj.read() == "first\n"

    def test_memoized_read_survives_deletion(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("kept\n")
        obj = FileObject(str(path))
        obj.read()

        path.unlink()
        assert obj.read() == "kept\n"

    def test_max_lines_reads_disk_each_time(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("one\ntwo\n")
        obj = FileObject(str(path))

        assert obj.read() == "one\ntwo\n"
        path.write_text("three\nfour\n")
        assert obj.read(1) == "three\n"
        # The full-content cache is untouched by limited reads
        assert obj.read() == "one\ntwo\n"

    def test_negative_max_lines_rejected(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("one\ntwo\n")
        obj = FileObject(str(path))

        with pytest.raises(InvalidArgument):
            obj.read(-1)
        with pytest.raises(InvalidArgument):
            obj.read_bytes(-1)

    def test_zero_max_lines_is_empty(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("one\n")

        assert FileObject(str(path)).read(0) == ""

    def test_read_bytes_max_lines(self, tmp_path):
        path = tmp_path / "blob.bin"
        path.write_bytes(b"\xff\xfe\n\x00\x01\n")

        assert FileObject(str(path)).read_bytes(1) == b"\xff\xfe\n"

    def test_new_instance_sees_changes(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("old\n")
        FileObject(str(path)).read()
        path.write_text("new\n")

        assert FileObject(str(path)).read() == "new\n"

    def test_binary_content(self, tmp_path):
        path = tmp_path / "blob.bin"
        data = bytes(range(256))
        path.write_bytes(data)
        obj = FileObject(str(path))

        assert obj.read_bytes() == data
        assert obj.read().encode('utf-8', errors='surrogateescape') == data


class TestSha:
    """Tests for the git blob hash."""

    def test_matches_git_blob_id(self, repo_args, create_git_repository, write_local_git_file, file_path):
        create_git_repository(**repo_args, file_paths=["file1.md"])
        write_local_git_file(**repo_args, file_path="file1.md", file_contents=PETER)

        obj = FileObject(file_path)
        expected = hashlib.sha1(("blob 71\0" + PETER).encode()).hexdigest()
        regular = hashlib.sha1(PETER.encode()).hexdigest()

        assert obj.sha() == expected
        assert obj.sha() == PETER_BLOB_SHA
        assert obj.sha() != regular

    def test_content_hash_is_sha(self, tmp_path):
        path = tmp_path / "hello.txt"
        path.write_bytes(b"hello world\n")
        obj = FileObject(str(path))

        assert obj.content_hash() == obj.sha() == HELLO_BLOB_SHA

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty"
        path.write_bytes(b"")

        assert FileObject(str(path)).sha() == EMPTY_BLOB_SHA

    def test_length_counts_bytes_not_characters(self, tmp_path):
        path = tmp_path / "utf8.txt"
        data = "héllo\n".encode('utf-8')
        path.write_bytes(data)

        expected = hashlib.sha1(b"blob 7\0" + data).hexdigest()
        assert FileObject(str(path)).sha() == expected

    def test_missing_file_raises_not_found(self, file_path):
        with pytest.raises(NotFound):
            FileObject(file_path).sha()


class TestSize:
    """Tests for size()."""

    def test_size_in_mebibytes(self, repo_args, create_git_repository, file_path):
        create_git_repository(**repo_args, file_paths=["file1.md"], size=5)

        assert FileObject(file_path).size() == 5.0

    def test_fractional_size(self, tmp_path):
        path = tmp_path / "half"
        path.write_bytes(b"\0" * (2 ** 19))

        assert FileObject(str(path)).size() == 0.5

    def test_size_is_not_cached(self, tmp_path):
        path = tmp_path / "grows"
        path.write_bytes(b"")
        obj = FileObject(str(path))
        assert obj.size() == 0.0

        path.write_bytes(b"\0" * (2 ** 20))
        assert obj.size() == 1.0

    def test_missing_file_raises_not_found(self, file_path):
        with pytest.raises(NotFound):
            FileObject(file_path).size()
