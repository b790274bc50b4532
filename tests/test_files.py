"""Tests for reading and appending env files."""

import os
import sys
from pathlib import Path

import pytest

from envload.exceptions import (
    EnvFileNotFoundError,
    EnvFilePermissionError,
    EnvFileTooLargeError,
    EnvFileWriteError,
    FileAccessError,
)
from envload.files import append_env_pair, read_env_file


class TestReadEnvFile:
    """Tests for read_env_file."""

    def test_read_bytes(self, tmp_path: Path) -> None:
        """The whole file is returned as bytes."""
        path = tmp_path / ".env"
        path.write_bytes(b"FOO=bar\n")
        assert read_env_file(path) == b"FOO=bar\n"

    def test_read_with_string_path(self, tmp_path: Path) -> None:
        """Paths may be given as strings."""
        path = tmp_path / ".env"
        path.write_bytes(b"FOO=bar")
        assert read_env_file(str(path)) == b"FOO=bar"

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file raises EnvFileNotFoundError."""
        with pytest.raises(EnvFileNotFoundError) as exc_info:
            read_env_file(tmp_path / "nope.env")
        assert isinstance(exc_info.value, FileAccessError)
        assert exc_info.value.file_path == str(tmp_path / "nope.env")

    def test_directory_is_not_readable(self, tmp_path: Path) -> None:
        """Reading a directory is a file access error."""
        with pytest.raises(FileAccessError):
            read_env_file(tmp_path)

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permission bits are not enforced",
    )
    def test_unreadable_file(self, tmp_path: Path) -> None:
        """A file without read permission raises EnvFilePermissionError."""
        path = tmp_path / ".env"
        path.write_text("FOO=bar")
        path.chmod(0)
        try:
            with pytest.raises(EnvFilePermissionError):
                read_env_file(path)
        finally:
            path.chmod(0o600)

    def test_size_limit_exact(self, tmp_path: Path) -> None:
        """A file exactly at the limit is accepted."""
        path = tmp_path / ".env"
        path.write_bytes(b"A=12345")
        assert read_env_file(path, max_bytes=7) == b"A=12345"

    def test_size_limit_exceeded(self, tmp_path: Path) -> None:
        """A file over the limit is refused."""
        path = tmp_path / ".env"
        path.write_bytes(b"A=123456")
        with pytest.raises(EnvFileTooLargeError) as exc_info:
            read_env_file(path, max_bytes=7)
        assert exc_info.value.context["limit"] == 7
        assert exc_info.value.context["size"] == 8
        assert "8 bytes" in str(exc_info.value)


class TestAppendEnvPair:
    """Tests for append_env_pair."""

    def test_append_to_empty_file(self, tmp_path: Path) -> None:
        """An empty file gets exactly one line."""
        path = tmp_path / ".env"
        path.write_text("")
        append_env_pair(path, "KEY", "VALUE")
        assert path.read_bytes() == b"KEY=VALUE\n"

    def test_append_creates_file(self, tmp_path: Path) -> None:
        """A missing file is created."""
        path = tmp_path / ".env"
        append_env_pair(path, "KEY", "VALUE")
        assert path.read_bytes() == b"KEY=VALUE\n"

    def test_append_after_newline(self, tmp_path: Path) -> None:
        """No extra separator when the file ends with a newline."""
        path = tmp_path / ".env"
        path.write_bytes(b"A=1\n")
        append_env_pair(path, "B", "2")
        assert path.read_bytes() == b"A=1\nB=2\n"

    def test_append_without_trailing_newline(self, tmp_path: Path) -> None:
        """A newline is inserted when the file does not end with one."""
        path = tmp_path / ".env"
        path.write_bytes(b"A=1")
        append_env_pair(path, "B", "2")
        append_env_pair(path, "C", "3")
        assert path.read_bytes() == b"A=1\nB=2\nC=3\n"

    def test_append_utf8(self, tmp_path: Path) -> None:
        """Values are written as UTF-8."""
        path = tmp_path / ".env"
        append_env_pair(path, "GREETING", "héllo")
        assert path.read_text(encoding="utf-8") == "GREETING=héllo\n"

    def test_append_into_missing_directory(self, tmp_path: Path) -> None:
        """Write failures raise EnvFileWriteError."""
        with pytest.raises(EnvFileWriteError):
            append_env_pair(tmp_path / "missing" / ".env", "A", "1")
