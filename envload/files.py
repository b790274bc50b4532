"""Reading and appending .env files.

The loader reads a whole file before parsing begins and never keeps a
handle open across the parse.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .exceptions import (
    EnvFileNotFoundError,
    EnvFilePermissionError,
    EnvFileTooLargeError,
    EnvFileWriteError,
    FileAccessError,
    record_error,
)

logger = logging.getLogger(__name__)


def read_env_file(path: str | Path, *, max_bytes: int | None = None) -> bytes:
    """Read the raw bytes of an env file.

    Args:
        path: Path to the env file
        max_bytes: Refuse files larger than this many bytes (None: no limit)

    Returns:
        The file content

    Raises:
        EnvFileNotFoundError: If the file does not exist.
        EnvFilePermissionError: If the file cannot be read.
        EnvFileTooLargeError: If the file is larger than max_bytes.
        FileAccessError: For any other read failure.
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            if max_bytes is None:
                return f.read()
            # One byte past the limit is enough to detect an oversized file
            data = f.read(max_bytes + 1)
            size = f.seek(0, 2) if len(data) > max_bytes else len(data)
    except FileNotFoundError as e:
        raise EnvFileNotFoundError(str(path), cause=e) from e
    except PermissionError as e:
        logger.error("Permission denied reading %s", path)
        record_error(e)
        raise EnvFilePermissionError(file_path=str(path), cause=e) from e
    except OSError as e:
        logger.error("Failed to read env file %s: %s", path, e)
        record_error(e)
        raise FileAccessError(file_path=str(path), cause=e) from e

    if len(data) > max_bytes:
        error = EnvFileTooLargeError(
            f"Env file is {size} bytes, larger than {max_bytes}",
            file_path=str(path),
            size=size,
            limit=max_bytes,
        )
        logger.error("%s", error)
        record_error(error)
        raise error
    return data


def append_env_pair(path: str | Path, key: str, value: str) -> None:
    """Append ``KEY=VALUE`` as a new line of an env file.

    The file is created if it does not exist. When the file is not empty
    and does not end with a newline, one is written first.

    Raises:
        EnvFileWriteError: If the file cannot be read or written.
    """
    path = Path(path)
    try:
        with open(path, "ab+") as f:
            f.seek(0, 2)
            prefix = b""
            if f.tell() > 0:
                f.seek(-1, 2)
                if f.read(1) != b"\n":
                    prefix = b"\n"
            f.write(prefix + f"{key}={value}\n".encode("utf-8"))
    except OSError as e:
        logger.error("Failed to append to env file %s: %s", path, e)
        record_error(e)
        raise EnvFileWriteError(
            f"Failed to append {key} to env file",
            file_path=str(path),
            cause=e,
        ) from e
    logger.debug("Appended %s to %s", key, path)
