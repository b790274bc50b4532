"""Core dataclasses for loader settings and parse results.

Settings are designed for JSON serialization using dacite.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

import dacite

from .exceptions import MalformedLineError

DEFAULT_ENV_FILENAME = ".env"


# =============================================================================
# Settings
# =============================================================================


@dataclass
class EnvSettings:
    """Defaults applied by Env.load when a call does not override them."""

    filename: str = DEFAULT_ENV_FILENAME  # File read when load() gets no name
    silent: bool = True  # Suppress the missing-file error
    set_in_process: bool = False  # Apply loaded pairs to the process environment
    include_ambient: bool = False  # Seed new Env instances with the process environment
    max_file_size: int | None = None  # Size guard in bytes, None for unlimited


# =============================================================================
# Parse Results
# =============================================================================


@dataclass
class ParseResult:
    """Outcome of parsing one buffer of env content."""

    entries: dict[str, str] = field(default_factory=dict)
    needs_interpolation: bool = False
    malformed: list[MalformedLineError] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)


# =============================================================================
# Serialization Helpers
# =============================================================================


def settings_to_dict(settings: EnvSettings) -> dict:
    """Convert settings to a dictionary for JSON serialization."""
    return asdict(settings)


def settings_from_dict(data: dict) -> EnvSettings:
    """Load settings from a dictionary (parsed JSON).

    Raises:
        dacite.DaciteError: If the data does not match the schema.
    """
    return dacite.from_dict(
        data_class=EnvSettings,
        data=data,
        config=dacite.Config(strict=True),
    )
