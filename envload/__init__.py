"""Load KEY=VALUE configuration from .env files.

Public API Usage:
    from enum import Enum, auto
    from envload import Env

    class AppKeys(Enum):
        DATABASE_URL = auto()
        API_KEY = auto()

    env = Env(keys=AppKeys)
    env.load(".env", set_in_process=True)
    url = env.key(AppKeys.DATABASE_URL)
    token = env.find("OPTIONAL_TOKEN")

    # One-shot loading
    from envload import load_env

    env = load_env(".env.local", silent=False)
"""

__version__ = "0.1.0"

from envload.env import Env, load_env
from envload.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
    ConfigValidationError,
    EnvFileNotFoundError,
    EnvFilePermissionError,
    EnvFileTooLargeError,
    EnvFileWriteError,
    EnvloadError,
    EnvParseError,
    FileAccessError,
    MalformedLineError,
    MissingKeyError,
    OsEnvironmentError,
    SetEnvError,
    UnsetEnvError,
)
from envload.models import EnvSettings, ParseResult
from envload.parser import LineParser, parse_env
from envload.ports import EnvironmentProvider, OsEnvironment
from envload.resolver import InterpolationResolver

__all__ = [
    "__version__",
    # Main API
    "Env",
    "load_env",
    "EnvSettings",
    "ParseResult",
    # Core engine
    "LineParser",
    "InterpolationResolver",
    "parse_env",
    # Process environment
    "EnvironmentProvider",
    "OsEnvironment",
    # Exceptions
    "EnvloadError",
    "FileAccessError",
    "EnvFileNotFoundError",
    "EnvFilePermissionError",
    "EnvFileTooLargeError",
    "EnvFileWriteError",
    "EnvParseError",
    "MalformedLineError",
    "MissingKeyError",
    "OsEnvironmentError",
    "SetEnvError",
    "UnsetEnvError",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "ConfigSaveError",
]
