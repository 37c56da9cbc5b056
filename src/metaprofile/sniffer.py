# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Detection of the metadata dialect of an XML document."""

import logging
from enum import Enum
from functools import partial
from io import BytesIO
from typing import BinaryIO

from lxml import etree

from .binding import READ_CHUNK_SIZE, split_tag
from .exceptions import NoRecognizedDialectError

logger = logging.getLogger(__name__)

DC_TERMS_NAMESPACE = "http://purl.org/dc/terms/"

_NO_DIALECT_MESSAGE = (
    "No parser found for this metadata document. Only EML or DC supported"
)


class Dialect(Enum):
    """Supported metadata dialects."""

    EML = "EML"
    DC = "DC"


class _DialectFound(Exception):
    """Raised by the scanner to stop parsing once EML is recognized."""


class _DialectScanner:
    """Parser target tracking element local names only."""

    def __init__(self) -> None:
        self.path: list[str] = []
        self.dialect: Dialect | None = None

    def start(self, tag: str, attrib: dict[str, str]) -> None:
        namespace, name = split_tag(tag)
        if len(self.path) == 1 and self.path[0] == "eml" and name == "dataset":
            self.dialect = Dialect.EML
            raise _DialectFound
        if self.dialect is None and namespace == DC_TERMS_NAMESPACE:
            self.dialect = Dialect.DC
        self.path.append(name)

    def end(self, tag: str) -> None:
        name = split_tag(tag)[1]
        popped = self.path.pop() if self.path else None
        if popped != name:
            logger.warning(
                "Closing tag %s does not match open element %s", name, popped
            )

    def close(self) -> Dialect | None:
        return self.dialect


def detect(stream: BinaryIO | bytes | bytearray) -> Dialect:
    """Detects whether a document is EML or Dublin Core.

    The document is scanned in a single streaming pass. An ``eml/dataset``
    element path classifies it as EML and ends the scan; any element in
    the Dublin Core terms namespace classifies it as DC unless EML is
    found later.

    Args:
        stream: Binary stream or bytes holding one XML document.

    Returns:
        The detected dialect.

    Raises:
        NoRecognizedDialectError: If neither dialect matches, or the
            document cannot be read or is not well-formed.
    """
    if isinstance(stream, bytes | bytearray):
        stream = BytesIO(stream)
    scanner = _DialectScanner()
    parser = etree.XMLParser(target=scanner, resolve_entities=False, no_network=True)

    try:
        for chunk in iter(partial(stream.read, READ_CHUNK_SIZE), b""):
            parser.feed(chunk)
        parser.close()
    except _DialectFound:
        pass
    except (etree.LxmlError, OSError) as e:
        logger.warning("Failed to scan metadata document: %s", e)
        raise NoRecognizedDialectError(_NO_DIALECT_MESSAGE) from e

    if scanner.dialect is None:
        raise NoRecognizedDialectError(_NO_DIALECT_MESSAGE)
    logger.debug("Detected %s document", scanner.dialect.value)
    return scanner.dialect
