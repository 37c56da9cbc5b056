# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""metaprofile - Read and write EML and Dublin Core dataset metadata."""

from importlib.metadata import PackageNotFoundError, version

from .binding import SoftFieldError, bind
from .exceptions import (
    HardParseError,
    MetadataError,
    NoRecognizedDialectError,
    NoSuitableParserError,
    SchemaValidationError,
    StackUnderflowError,
    TemplateRenderError,
    UnreadableStreamError,
)
from .licenses import License
from .markup import to_display_markup, to_storage_markup
from .model import BasicMetadata, DublinCoreDocument, Eml
from .resolver import parse, resolve
from .sniffer import Dialect, detect
from .writer import write, write_dublin_core, write_eml

try:
    __version__ = version("metaprofile")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "__version__",
    "detect",
    "bind",
    "parse",
    "resolve",
    "write",
    "write_eml",
    "write_dublin_core",
    "to_display_markup",
    "to_storage_markup",
    "Dialect",
    "BasicMetadata",
    "Eml",
    "DublinCoreDocument",
    "License",
    "SoftFieldError",
    "MetadataError",
    "UnreadableStreamError",
    "NoRecognizedDialectError",
    "HardParseError",
    "StackUnderflowError",
    "NoSuitableParserError",
    "TemplateRenderError",
    "SchemaValidationError",
]
