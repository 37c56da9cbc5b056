# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Custom exceptions for metaprofile."""


class MetadataError(Exception):
    """Base exception for all metaprofile errors."""


class UnreadableStreamError(MetadataError):
    """The input stream could not be read."""


class NoRecognizedDialectError(MetadataError):
    """The document is neither EML nor Dublin Core."""


class HardParseError(MetadataError):
    """The document is not well-formed XML and binding was aborted."""


class StackUnderflowError(HardParseError):
    """A pop-and-link rule fired without a pushed object to pop."""


class NoSuitableParserError(MetadataError):
    """No candidate binding produced a document with content."""


class TemplateRenderError(MetadataError):
    """A document could not be rendered to XML."""


class SchemaValidationError(MetadataError):
    """An XML schema could not be loaded."""
