"""Environment variable management backed by .env files.

Example:
    class AppKeys(Enum):
        OPENAI_API_KEY = auto()
        AWS_ACCESS_KEY_ID = auto()

    env = Env(keys=AppKeys)
    env.load(".env.local")  # or env.load() for .env

    openai_key = env.key(AppKeys.OPENAI_API_KEY)
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Generic, TextIO, TypeVar

from .exceptions import EnvFileNotFoundError, MissingKeyError, record_error
from .files import append_env_pair, read_env_file
from .models import EnvSettings, ParseResult
from .parser import LineParser
from .ports import EnvironmentProvider, OsEnvironment
from .resolver import InterpolationResolver

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Enum)

EMPTY_EXPORT_MESSAGE = "No environment variables set"


class Env(Generic[K]):
    """A key-value store of environment variables loaded from .env files.

    Attributes:
        filename: File used by load() and append_to_file() when none is given.
        items: The resolved variables, by name.
        include_ambient: Whether items was seeded with the process environment.
    """

    def __init__(
        self,
        *,
        keys: type[K] | None = None,
        include_ambient: bool | None = None,
        provider: EnvironmentProvider | None = None,
        settings: EnvSettings | None = None,
    ) -> None:
        """Create an environment, optionally seeded from the process.

        Args:
            keys: Enum whose member names are the known variable names.
            include_ambient: Copy the current process environment into items.
                Defaults to settings.include_ambient.
            provider: Access to the process environment (os.environ by default).
            settings: Loader defaults.

        Raises:
            TypeError: If keys is not an Enum subclass.
        """
        if keys is not None and not (isinstance(keys, type) and issubclass(keys, Enum)):
            raise TypeError(f"keys must be an Enum subclass, got {keys!r}")

        self.settings = settings or EnvSettings()
        self.provider: EnvironmentProvider = provider or OsEnvironment()
        self.keys = keys
        self.filename = self.settings.filename
        self.include_ambient = (
            self.settings.include_ambient if include_ambient is None else include_ambient
        )
        self.items: dict[str, str] = (
            self.provider.snapshot() if self.include_ambient else {}
        )
        self._parser = LineParser()
        self._resolver = InterpolationResolver()

    @classmethod
    def create(
        cls,
        include_ambient: bool = False,
        *,
        keys: type[K] | None = None,
        provider: EnvironmentProvider | None = None,
    ) -> Env[K]:
        """Create an environment; seed it with the process environment if asked."""
        return cls(keys=keys, include_ambient=include_ambient, provider=provider)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(
        self,
        filename: str | Path | None = None,
        *,
        set_in_process: bool | None = None,
        silent: bool | None = None,
    ) -> int:
        """Load variables from an env file.

        Reads the file, parses and resolves its contents into items and,
        when requested, applies every item to the process environment.

        Args:
            filename: File to read (defaults to settings.filename).
            set_in_process: Also set the variables in the process environment.
            silent: Treat a missing file as empty instead of raising.

        Returns:
            Number of entries read from the file.

        Raises:
            EnvFileNotFoundError: If the file is missing and silent is False.
            FileAccessError: If the file exists but cannot be read.
            EnvParseError: If the file content cannot be decoded.
            SetEnvError: If a variable cannot be set in the process.
        """
        if set_in_process is None:
            set_in_process = self.settings.set_in_process
        if silent is None:
            silent = self.settings.silent

        self.filename = str(filename) if filename is not None else self.settings.filename

        try:
            content = read_env_file(self.filename, max_bytes=self.settings.max_file_size)
        except EnvFileNotFoundError as e:
            if silent:
                logger.debug("No env file at %s, nothing loaded", self.filename)
                return 0
            logger.warning("Expected: '%s', but no env file detected", self.filename)
            record_error(e)
            raise

        result = self.parse(content, source=self.filename)

        if set_in_process:
            for k, v in self.items.items():
                self.set_process_env(k, v)
            logger.debug("Applied %d variables to the process", len(self.items))

        logger.info("Loaded %d variables from %s", len(result), self.filename)
        return len(result)

    def parse(self, content: bytes | str, *, source: str | None = None) -> ParseResult:
        """Parse env content into items and resolve its references.

        Args:
            content: Raw content of an env file.
            source: Optional file name, used in diagnostics.

        Returns:
            The ParseResult of this pass (values before interpolation).

        Raises:
            EnvParseError: If bytes content cannot be decoded.
        """
        result = self._parser.parse(content, source=source)
        self.items.update(result.entries)
        if result.needs_interpolation:
            ambient = None if self.include_ambient else self.provider.snapshot()
            self._resolver.resolve(result, self.items, ambient)
        return result

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get(self, name: str) -> str:
        """Return the value of variable *name*.

        Raises:
            MissingKeyError: If the variable is not set.
        """
        try:
            return self.items[name]
        except KeyError:
            raise MissingKeyError(name) from None

    def find(self, name: str, default: str | None = None) -> str | None:
        """Return the value of variable *name*, or *default* if not set."""
        return self.items.get(name, default)

    def key(self, member: K) -> str:
        """Return the value of the variable named by an enum member.

        Raises:
            TypeError: If member does not belong to the configured keys enum.
            MissingKeyError: If the variable is not set.
        """
        return self.get(self._key_name(member))

    def find_key(self, member: K, default: str | None = None) -> str | None:
        """Return the value named by an enum member, or *default* if not set."""
        return self.find(self._key_name(member), default)

    def _key_name(self, member: K) -> str:
        if self.keys is None or not isinstance(member, self.keys):
            raise TypeError(f"{member!r} is not a member of {self.keys!r}")
        return member.name

    # -------------------------------------------------------------------------
    # Process environment
    # -------------------------------------------------------------------------

    def set_process_env(self, key: str, value: str | None) -> None:
        """Set a variable in the process environment, or unset it if value is None.

        Raises:
            SetEnvError: If the variable cannot be set.
            UnsetEnvError: If the variable cannot be removed.
        """
        if value is None:
            self.provider.unset(key)
        else:
            self.provider.set(key, value)

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def to_dict(self, include_ambient: bool = False) -> dict[str, str]:
        """Return a copy of the variables, optionally over the process environment."""
        if not include_ambient:
            return dict(self.items)
        merged = self.provider.snapshot()
        merged.update(self.items)
        return merged

    def export_all(self, include_ambient: bool = False) -> list[str]:
        """Return every variable as a ``KEY=VALUE`` string.

        Args:
            include_ambient: Include the process environment; loaded
                variables win over process ones of the same name.
        """
        return [f"{k}={v}" for k, v in self.to_dict(include_ambient).items()]

    def write_all(self, stream: TextIO, include_ambient: bool = False) -> None:
        """Write every variable to *stream*, one ``KEY=VALUE`` per line."""
        lines = self.export_all(include_ambient)
        if not lines:
            stream.write(f"{EMPTY_EXPORT_MESSAGE}\n")
            return
        for line in lines:
            stream.write(f"{line}\n")

    def append_to_file(
        self,
        key: str,
        value: str,
        filename: str | Path | None = None,
    ) -> None:
        """Append ``KEY=VALUE`` to an env file (the loaded one by default).

        Raises:
            EnvFileWriteError: If the file cannot be written.
        """
        append_env_pair(filename if filename is not None else self.filename, key, value)

    def __contains__(self, name: object) -> bool:
        return name in self.items

    def __len__(self) -> int:
        return len(self.items)


def load_env(
    filename: str | Path | None = None,
    *,
    keys: type[K] | None = None,
    include_ambient: bool | None = None,
    set_in_process: bool | None = None,
    silent: bool | None = None,
    settings: EnvSettings | None = None,
) -> Env[K]:
    """Convenience function to create an Env and load a file into it.

    Returns:
        The loaded Env
    """
    env: Env[K] = Env(keys=keys, include_ambient=include_ambient, settings=settings)
    env.load(filename, set_in_process=set_in_process, silent=silent)
    return env
