# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Rule table binding Dublin Core records onto :class:`DublinCoreDocument`.

Paths are relative to the document element, so any wrapper element
(``metadata``, ``oai_dc:dc``, ...) is accepted. Records wrapped in an
RDF ``Description`` element are bound as well.
"""

from ..binding import CallMethod, Rule, RuleTable, SetProperty
from ..model.dublin_core import DublinCoreDocument
from ..sniffer import DC_TERMS_NAMESPACE
from ..utils import parse_any_date

DC_ELEMENTS_NAMESPACE = "http://purl.org/dc/elements/1.1/"

DC_NAMESPACES = frozenset({DC_ELEMENTS_NAMESPACE, DC_TERMS_NAMESPACE})
NO_NAMESPACE = frozenset({""})

# Element containers the DC elements may appear in
_CONTAINERS = ("", "Description/")

# DC element -> document property receiving its text
_PROPERTIES = {
    "title": "title",
    "bibliographicCitation": "citation",
    "language": "language",
    "source": "homepage",
}

# DC element -> document method receiving its text
_METHODS = {
    "description": DublinCoreDocument.add_description,
    "abstract": DublinCoreDocument.add_description,
    "subject": DublinCoreDocument.add_subject,
    "coverage": DublinCoreDocument.add_subject,
    "spatial": DublinCoreDocument.add_subject,
    "temporal": DublinCoreDocument.add_subject,
    "relation": DublinCoreDocument.set_relation,
    "identifier": DublinCoreDocument.add_identifier,
    "rights": DublinCoreDocument.set_rights,
    "license": DublinCoreDocument.set_license,
    "creator": DublinCoreDocument.set_creator,
    "publisher": DublinCoreDocument.set_publisher,
}

# Non-standard homepage elements written by some providers
_UNQUALIFIED_HOMEPAGES = ("onlineUrl", "homepage")


def _record_rules(container: str) -> tuple[Rule, ...]:
    rules: list[Rule] = [
        SetProperty(container + name, prop, namespaces=DC_NAMESPACES)
        for name, prop in _PROPERTIES.items()
    ]
    rules.extend(
        CallMethod(container + name, method, namespaces=DC_NAMESPACES)
        for name, method in _METHODS.items()
    )
    rules.append(
        SetProperty(
            container + "created", "published", parse_any_date, namespaces=DC_NAMESPACES
        )
    )
    rules.extend(
        SetProperty(container + name, "homepage", namespaces=NO_NAMESPACE)
        for name in _UNQUALIFIED_HOMEPAGES
    )
    return tuple(rules)


DC_RULES = RuleTable(
    name="dublin-core",
    root_factory=DublinCoreDocument,
    rules=tuple(rule for container in _CONTAINERS for rule in _record_rules(container)),
    relative=True,
)
