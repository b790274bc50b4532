"""Process environment abstraction layer.

This module defines the protocol the loader uses to read and change the
process environment, so parsing and resolution stay free of side effects
and tests can substitute an in-memory implementation
(see :mod:`envload.testing`).
"""

from __future__ import annotations

import logging
import os
from typing import Protocol, runtime_checkable

from .exceptions import SetEnvError, UnsetEnvError, record_error

logger = logging.getLogger(__name__)


@runtime_checkable
class EnvironmentProvider(Protocol):
    """Protocol for access to a process environment."""

    def snapshot(self) -> dict[str, str]:
        """Return a copy of every variable currently set."""
        ...

    def set(self, key: str, value: str) -> None:
        """Set *key* to *value*.

        Raises:
            SetEnvError: If the platform rejects the variable.
        """
        ...

    def unset(self, key: str) -> None:
        """Remove *key*. Removing an unset variable is not an error.

        Raises:
            UnsetEnvError: If the platform rejects the name.
        """
        ...


class OsEnvironment:
    """EnvironmentProvider backed by :data:`os.environ`.

    ``os.environ`` forwards changes to ``putenv``/``unsetenv`` on POSIX and
    to the environment block on Windows.
    """

    def snapshot(self) -> dict[str, str]:
        return dict(os.environ)

    def set(self, key: str, value: str) -> None:
        try:
            os.environ[key] = value
        except (OSError, ValueError) as e:
            logger.error("Failed to set %s: %s", key, e)
            record_error(e)
            raise SetEnvError(key=key, cause=e) from e

    def unset(self, key: str) -> None:
        try:
            os.environ.pop(key, None)
        except (OSError, ValueError) as e:
            logger.error("Failed to unset %s: %s", key, e)
            record_error(e)
            raise UnsetEnvError(key=key, cause=e) from e
