"""Custom exception hierarchy for envload.

This module provides a structured exception hierarchy that enables:
- Consistent error handling across the loader and its collaborators
- Rich error context for debugging
- Error categorization for different handling strategies
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


class EnvloadError(Exception):
    """Base exception for all envload errors.

    Attributes:
        message: Human-readable error description.
        context: Additional context for debugging.
        timestamp: When the error occurred.
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        self.timestamp = datetime.now()
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# File Access Errors
# =============================================================================


class FileAccessError(EnvloadError):
    """Base class for errors reading an env file."""

    def __init__(
        self,
        message: str = "Failed to read env file",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        self.file_path = file_path
        super().__init__(message, context=ctx, cause=cause)


class EnvFileNotFoundError(FileAccessError):
    """Raised when the env file does not exist."""

    def __init__(
        self,
        file_path: str,
        *,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            f"Expected: '{file_path}', but no env file detected",
            file_path=file_path,
            context=context,
            cause=cause,
        )


class EnvFilePermissionError(FileAccessError):
    """Raised when the env file exists but cannot be read."""

    def __init__(
        self,
        message: str = "Permission denied reading env file",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, file_path=file_path, context=context, cause=cause)


class EnvFileTooLargeError(FileAccessError):
    """Raised when the env file exceeds the configured size guard."""

    def __init__(
        self,
        message: str = "Env file exceeds size limit",
        *,
        file_path: str | None = None,
        size: int | None = None,
        limit: int | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if size is not None:
            ctx["size"] = size
        if limit is not None:
            ctx["limit"] = limit
        super().__init__(message, file_path=file_path, context=ctx, cause=cause)


class EnvFileWriteError(EnvloadError):
    """Raised when appending to an env file fails."""

    def __init__(
        self,
        message: str = "Failed to write env file",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Parsing Errors
# =============================================================================


class EnvParseError(EnvloadError):
    """Raised when env content cannot be parsed at all."""

    def __init__(
        self,
        message: str = "Failed to parse env content",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class MalformedLineError(EnvloadError):
    """A line with a key but no ``=``. Reported, never raised by the parser."""

    def __init__(
        self,
        key: str,
        *,
        line_number: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if line_number is not None:
            ctx["line_number"] = line_number
        self.key = key
        self.line_number = line_number
        super().__init__(f"No value for key: {key}", context=ctx)


# =============================================================================
# Lookup Errors
# =============================================================================


class MissingKeyError(EnvloadError):
    """Raised when a variable is not present in the environment mapping."""

    def __init__(
        self,
        key: str,
        *,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx["key"] = key
        self.key = key
        super().__init__(f"Environment variable not found: {key}", context=ctx)


# =============================================================================
# Process Environment Errors
# =============================================================================


class OsEnvironmentError(EnvloadError):
    """Base class for failures changing the process environment."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if key is not None:
            ctx["key"] = key
        super().__init__(message, context=ctx, cause=cause)


class SetEnvError(OsEnvironmentError):
    """Raised when a process environment variable cannot be set."""

    def __init__(
        self,
        message: str = "Failed to set environment variable",
        *,
        key: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, key=key, context=context, cause=cause)


class UnsetEnvError(OsEnvironmentError):
    """Raised when a process environment variable cannot be removed."""

    def __init__(
        self,
        message: str = "Failed to unset environment variable",
        *,
        key: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, key=key, context=context, cause=cause)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(EnvloadError):
    """Base class for configuration-related errors."""

    pass


class ConfigLoadError(ConfigError):
    """Raised when a settings file fails to load."""

    def __init__(
        self,
        message: str = "Failed to load configuration",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigValidationError(ConfigError):
    """Raised when settings do not match the expected schema."""

    def __init__(
        self,
        message: str = "Configuration validation failed",
        *,
        field: str | None = None,
        value: Any = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if field:
            ctx["field"] = field
        if value is not None:
            ctx["value"] = str(value)[:100]  # Truncate long values
        super().__init__(message, context=ctx, cause=cause)


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""

    def __init__(
        self,
        message: str = "Failed to save configuration",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Error Registry for Categorization
# =============================================================================


@dataclass
class ErrorStats:
    """Track error statistics for monitoring."""

    total_count: int = 0
    by_type: dict[str, int] = field(default_factory=dict)
    recent_errors: list[tuple[datetime, str, str]] = field(default_factory=list)
    max_recent: int = 100

    def record(self, error: Exception) -> None:
        """Record an error occurrence."""
        self.total_count += 1
        type_name = type(error).__name__
        self.by_type[type_name] = self.by_type.get(type_name, 0) + 1

        self.recent_errors.append((datetime.now(), type_name, str(error)[:200]))
        if len(self.recent_errors) > self.max_recent:
            self.recent_errors.pop(0)

    def reset(self) -> None:
        """Forget all recorded errors."""
        self.total_count = 0
        self.by_type.clear()
        self.recent_errors.clear()


# Global error stats tracker
error_stats = ErrorStats()


def record_error(error: Exception) -> None:
    """Record an error to global stats."""
    error_stats.record(error)
