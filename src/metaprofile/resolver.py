# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Resolution of metadata documents of unknown dialect.

A document is read into memory once and bound with each candidate rule
table in priority order. The first result carrying any content wins;
candidates that fail to parse are skipped.
"""

import logging
from collections.abc import Iterable
from typing import BinaryIO

from .binding import RuleTable, SoftFieldError, bind
from .dialects import CANDIDATES, TABLES
from .exceptions import HardParseError, NoSuitableParserError, UnreadableStreamError
from .model import BasicMetadata, DublinCoreDocument, Eml, has_content
from .sniffer import Dialect, detect

logger = logging.getLogger(__name__)


def read_source(source: bytes | BinaryIO) -> bytes:
    """Buffers a document fully in memory.

    Raises:
        UnreadableStreamError: If reading the stream fails.
    """
    if isinstance(source, bytes | bytearray):
        return bytes(source)
    try:
        return source.read()
    except OSError as e:
        raise UnreadableStreamError(f"Can't read input stream: {e}") from e


def resolve(
    source: bytes | BinaryIO,
    candidates: Iterable[tuple[Dialect, RuleTable]] = CANDIDATES,
) -> BasicMetadata:
    """Binds a document with the first candidate table yielding content.

    Args:
        source: The document as bytes or a binary stream.
        candidates: ``(dialect, table)`` pairs in priority order.

    Returns:
        The bound document, an :class:`Eml` or a
        :class:`DublinCoreDocument` for the default candidates.

    Raises:
        NoSuitableParserError: If no candidate produced a document with
            content.
        UnreadableStreamError: If the stream cannot be read.
    """
    data = read_source(source)

    for dialect, table in candidates:
        try:
            document = bind(data, table)
        except HardParseError as e:
            logger.debug("Candidate %s rejected: %s", dialect.value, e)
            continue
        if has_content(document):
            logger.debug("Resolved document as %s", dialect.value)
            return document
        logger.debug("Candidate %s produced no content", dialect.value)

    raise NoSuitableParserError("Can't find suitable metadata parser")


def parse(
    source: bytes | BinaryIO,
    errors: list[SoftFieldError] | None = None,
) -> Eml | DublinCoreDocument:
    """Detects the dialect of a document and binds it with its table.

    Args:
        source: The document as bytes or a binary stream.
        errors: Optional list receiving skipped field values.

    Returns:
        The bound document.

    Raises:
        NoRecognizedDialectError: If the dialect cannot be detected.
        HardParseError: If the document is not well-formed.
    """
    data = read_source(source)
    return bind(data, TABLES[detect(data)], errors)
