""".env content parsing.

Turns raw .env text into key/value entries. Supports:
- KEY=value format, split at the first ``=``
- Full-line comments (lines starting with #)
- One layer of matching single or double quotes
- Space and tab trimming around keys and values

Values that start with ``$`` are flagged for the interpolation pass
in :mod:`envload.resolver`.
"""

from __future__ import annotations

import logging

from .exceptions import EnvParseError, MalformedLineError, record_error
from .models import ParseResult

logger = logging.getLogger(__name__)

BLANKS = " \t"
QUOTES = ('"', "'")
REFERENCE_PREFIX = "$"


def strip_quotes(value: str) -> str:
    """Remove one layer of matching surrounding quotes.

    Args:
        value: Trimmed value string (may be quoted)

    Returns:
        Value with a single pair of surrounding quotes removed
    """
    if len(value) >= 2 and value[0] in QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def decode_content(content: bytes | str, *, source: str | None = None) -> str:
    """Return *content* as text, decoding bytes as UTF-8.

    Raises:
        EnvParseError: If the bytes are not valid UTF-8.
    """
    if isinstance(content, str):
        return content
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.error("Env content is not valid UTF-8: %s", e)
        record_error(e)
        raise EnvParseError(
            "Env content is not valid UTF-8",
            file_path=source,
            context={"position": e.start},
            cause=e,
        ) from e


class LineParser:
    """Parses .env content line by line.

    The parser is stateless; every call to :meth:`parse` returns a fresh
    :class:`ParseResult`.
    """

    def parse(self, content: bytes | str, *, source: str | None = None) -> ParseResult:
        """Parse .env file content.

        Args:
            content: Raw content of a .env file
            source: Optional file name, used in diagnostics

        Returns:
            ParseResult holding the entries in file order, whether any value
            needs interpolation, and the lines that had no ``=``

        Raises:
            EnvParseError: If bytes content cannot be decoded.
        """
        text = decode_content(content, source=source)
        result = ParseResult()

        for line_number, line in enumerate(text.split("\n"), start=1):
            # CRLF files: the \r belongs to the line terminator, not the value
            if line.endswith("\r"):
                line = line[:-1]

            if not line or line.startswith("#"):
                continue

            key, sep, value = line.partition("=")
            key = key.strip(BLANKS)

            if not sep:
                malformed = MalformedLineError(key, line_number=line_number)
                logger.warning("No value for key: %s (line %d)", key, line_number)
                result.malformed.append(malformed)
                continue

            value = strip_quotes(value.strip(BLANKS))
            if value.startswith(REFERENCE_PREFIX):
                result.needs_interpolation = True

            result.entries[key] = value

        logger.debug(
            "Parsed %d entries from %s", len(result.entries), source or "<string>"
        )
        return result


def parse_env(content: bytes | str) -> dict[str, str]:
    """Convenience function to parse .env content without interpolation.

    Args:
        content: Raw content of a .env file

    Returns:
        Dictionary of entries with quotes stripped and references left as-is
    """
    return LineParser().parse(content).entries
