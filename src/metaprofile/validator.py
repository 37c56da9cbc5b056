# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""XML Schema validation of written metadata documents.

Schemas are loaded from local files only; network access and entity
resolution are disabled for both schemas and documents.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from lxml import etree

from .exceptions import SchemaValidationError

logger = logging.getLogger(__name__)

_SECURE_XML_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)


@dataclass
class ValidationReport:
    """Outcome of validating one document against a schema.

    Attributes:
        valid: True if the document is well-formed and schema-valid.
        errors: One message per problem, with line numbers where known.
    """

    valid: bool
    errors: list[str] = field(default_factory=list)


def load_schema(schema: Path | str) -> etree.XMLSchema:
    """Loads an XML Schema from a local file.

    Raises:
        SchemaValidationError: If the file is missing or not a valid XSD.
    """
    try:
        schema_doc = etree.parse(str(schema), _SECURE_XML_PARSER)
        return etree.XMLSchema(schema_doc)
    except OSError as e:
        raise SchemaValidationError(f"Cannot read schema {schema}: {e}") from e
    except (etree.XMLSyntaxError, etree.XMLSchemaParseError) as e:
        raise SchemaValidationError(f"Invalid schema {schema}: {e}") from e


def validate_xml(
    xml_text: str | bytes, schema: Path | str | etree.XMLSchema
) -> ValidationReport:
    """Validates an XML document against an XML Schema.

    Args:
        xml_text: The document to check.
        schema: Path to an XSD file, or an already loaded schema.

    Returns:
        A report; a document that is not well-formed is reported invalid.

    Raises:
        SchemaValidationError: If the schema cannot be loaded.
    """
    if not isinstance(schema, etree.XMLSchema):
        schema = load_schema(schema)
    if isinstance(xml_text, str):
        xml_text = xml_text.encode("utf-8")

    try:
        document = etree.fromstring(xml_text, _SECURE_XML_PARSER)
    except etree.XMLSyntaxError as e:
        logger.debug("Document is not well-formed: %s", e)
        return ValidationReport(valid=False, errors=[f"Not well-formed: {e}"])

    try:
        if schema.validate(document):
            return ValidationReport(valid=True)
    except etree.XMLSchemaValidateError as e:
        # Raised for unresolved entity references
        logger.debug("Schema validation aborted: %s", e)
        return ValidationReport(valid=False, errors=[f"Cannot validate: {e}"])

    errors = [f"line {error.line}: {error.message}" for error in schema.error_log]
    logger.debug("Schema validation found %d error(s)", len(errors))
    return ValidationReport(valid=False, errors=errors)
