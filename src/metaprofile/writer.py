# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Serialization of document models back to XML.

Documents are rendered through Jinja2 templates shipped in
``metaprofile/resources/templates``. Markup fields of EML documents are
converted to DocBook on the way out, so that binding the output again
yields an equal document.
"""

import logging
from types import MappingProxyType
from typing import Any

from jinja2 import Environment, PackageLoader, TemplateError, select_autoescape

from .exceptions import TemplateRenderError
from .markup import to_storage_markup
from .model.dublin_core import DublinCoreDocument
from .model.eml import Eml
from .sniffer import Dialect

logger = logging.getLogger(__name__)

EML_PROFILE_VERSION = "1.3"

TEMPLATE_NAMES = MappingProxyType(
    {
        Dialect.EML: "eml.xml.j2",
        Dialect.DC: "dc.xml.j2",
    }
)

_environment = Environment(
    loader=PackageLoader("metaprofile", "resources/templates"),
    autoescape=select_autoescape(["xml", "xml.j2"]),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)
_environment.filters["docbook"] = to_storage_markup


def render(template_name: str, document: Any, **variables: Any) -> str:
    """Renders a document through one of the bundled templates.

    Args:
        template_name: Template file name, e.g. ``"eml.xml.j2"``.
        document: The document made available as ``document``.
        **variables: Further template variables.

    Returns:
        The rendered XML text.

    Raises:
        TemplateRenderError: If the template is missing or fails to render.
    """
    try:
        template = _environment.get_template(template_name)
        return template.render(document=document, **variables)
    except TemplateError as e:
        raise TemplateRenderError(f"Failed to render {template_name}: {e}") from e


def write_eml(eml: Eml, *, omit_xml_declaration: bool = False) -> str:
    """Serializes an EML document following the GBIF metadata profile."""
    logger.debug("Writing EML document %s", eml.package_id)
    return render(
        TEMPLATE_NAMES[Dialect.EML],
        eml,
        omit_xml_declaration=omit_xml_declaration,
        profile_version=EML_PROFILE_VERSION,
    )


def write_dublin_core(
    document: DublinCoreDocument, *, omit_xml_declaration: bool = False
) -> str:
    """Serializes a Dublin Core document as a flat record."""
    return render(
        TEMPLATE_NAMES[Dialect.DC],
        document,
        omit_xml_declaration=omit_xml_declaration,
    )


def write(document: Eml | DublinCoreDocument, **options: Any) -> str:
    """Serializes a document with the writer matching its type.

    Raises:
        TypeError: If the document is neither EML nor Dublin Core.
    """
    if isinstance(document, Eml):
        return write_eml(document, **options)
    if isinstance(document, DublinCoreDocument):
        return write_dublin_core(document, **options)
    raise TypeError(f"Cannot serialize {type(document).__name__}")
