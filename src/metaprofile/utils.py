# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Utility functions for metadata parsing."""

import logging
import re
import sys
from datetime import date, datetime, time

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Formats tried by parse_date, most specific first
ALL_DATE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%d %H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%a, %d %b %Y %H:%M:%S %z",
    "%a, %d %b %Y %H:%M:%S",
    "%Y-%m-%d",
    "%Y.%m.%d",
    "%d.%m.%Y",
    "%Y/%m/%d",
)

_WHITESPACE = re.compile(r"\s+")
_DATE_SEPARATORS = re.compile(r"[,._#/]")
_ISO_DATE_PREFIX = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})")
_YEAR_ONLY = re.compile(r"^\d{4}$")
_COMPACT_TZ = re.compile(r"([+-]\d{2})(\d{2})$")
_NAMED_EMAIL = re.compile(r"^(.*?)\s*<\s*([^<>\s]+@[^<>\s]+)\s*>$")
_BARE_EMAIL = re.compile(r"^[^@\s<>]+@[^@\s<>]+$")


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configures logging for metaprofile.

    Args:
        verbose: If True, DEBUG level is used.
        quiet: If True, only ERROR and higher are output.
            Takes precedence over verbose.

    Returns:
        Configured logger for metaprofile.
    """
    # Determine log level (quiet takes precedence)
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    package_logger = logging.getLogger("metaprofile")
    package_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    package_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)

    logger.debug("Logging configured with level: %s", logging.getLevelName(level))
    return package_logger


def trim_to_none(text: str | None) -> str | None:
    """Strips surrounding whitespace, mapping blank strings to None."""
    if text is None:
        return None
    text = text.strip()
    return text or None


def calendar_date(text: str | None) -> date | None:
    """Parses a loosely formatted calendar date.

    All whitespace is removed and the separators ``, . _ # /`` are
    replaced with dashes before parsing. Accepted forms are
    ``YYYY-MM-DD`` (trailing content such as a time is ignored),
    ``YYYY-MM`` and a bare ``YYYY`` which maps to January 1st.

    Args:
        text: The date text.

    Returns:
        The parsed date, or None for blank input.

    Raises:
        ValueError: If the text cannot be parsed as a date.
    """
    if text is None:
        return None
    value = _DATE_SEPARATORS.sub("-", _WHITESPACE.sub("", text))
    if not value:
        return None

    match = _ISO_DATE_PREFIX.match(value)
    if match:
        year, month, day = (int(part) for part in match.groups())
        return date(year, month, day)

    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError:
        pass

    if _YEAR_ONLY.match(value):
        return date(int(value), 1, 1)

    raise ValueError(f"Unparsable calendar date: {text!r}")


def schema_datetime(text: str | None) -> datetime | None:
    """Parses an XML Schema dateTime, falling back to a calendar date.

    Args:
        text: The date-time text, e.g. ``2002-10-23T18:13:51.235+01:00``.

    Returns:
        The parsed datetime, or None for blank input.

    Raises:
        ValueError: If the text is neither a dateTime nor a calendar date.
    """
    value = trim_to_none(text)
    if value is None:
        return None

    normalized = value
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    if "T" in normalized:
        normalized = _COMPACT_TZ.sub(r"\1:\2", normalized)

    try:
        return datetime.fromisoformat(normalized)
    except ValueError:
        pass

    day = calendar_date(value)
    return datetime.combine(day, time()) if day else None


def parse_date(text: str | None) -> datetime | None:
    """Parses a date using all known date formats.

    Args:
        text: The date text.

    Returns:
        The first successful parse, or None if no format matches.
    """
    value = trim_to_none(text)
    if value is None:
        return None
    for fmt in ALL_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    try:
        return schema_datetime(value)
    except ValueError:
        logger.debug("No date format matches %r", value)
        return None


def parse_any_date(text: str | None) -> date | None:
    """Strict variant of parse_date returning a calendar date.

    Raises:
        ValueError: If non-blank text matches no known format.
    """
    if trim_to_none(text) is None:
        return None
    parsed = parse_date(text)
    if parsed is None:
        raise ValueError(f"Unparsable date: {text!r}")
    return parsed.date()


def parse_int(text: str | None) -> int | None:
    """Parses an integer, returning None for blank input."""
    value = trim_to_none(text)
    return None if value is None else int(value)


def parse_float(text: str | None) -> float | None:
    """Parses a floating point number, returning None for blank input."""
    value = trim_to_none(text)
    return None if value is None else float(value)


def parse_email(text: str | None) -> tuple[str | None, str | None]:
    """Splits a ``Name <email>`` string.

    Args:
        text: A contact string such as ``Ward Appeltans <ward@vliz.be>``.

    Returns:
        A ``(name, email)`` tuple. A bare address yields ``(None, email)``
        and anything else ``(text, None)``.
    """
    value = trim_to_none(text)
    if value is None:
        return None, None
    match = _NAMED_EMAIL.match(value)
    if match:
        return trim_to_none(match.group(1)), match.group(2)
    if _BARE_EMAIL.match(value):
        return None, value
    return value, None
