# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Path rule descriptors and rule tables.

A rule table is an immutable, ordered list of rules, each bound to an
exact element path such as ``eml/dataset/creator/individualName/surName``.
Tables are built once at import time and shared between threads.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import cached_property
from types import MappingProxyType
from typing import Any

# A property name (assigned with setattr) or a function taking the target
# object followed by the values.
Target = str | Callable[..., Any]
Converter = Callable[[str], Any]

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


def apply_target(target: Target, obj: Any, *values: Any) -> None:
    """Assigns a property or calls a function on obj."""
    if isinstance(target, str):
        setattr(obj, target, values[0])
    else:
        target(obj, *values)


def attribute_value(attrib: Mapping[str, str], name: str) -> str | None:
    """Looks up an attribute by local name; ``xml:`` prefixes are honoured."""
    if name.startswith("xml:"):
        return attrib.get(f"{{{XML_NAMESPACE}}}{name[4:]}")
    if name in attrib:
        return attrib[name]
    suffix = "}" + name
    for key, value in attrib.items():
        if key.endswith(suffix):
            return value
    return None


@dataclass(frozen=True)
class Rule:
    """Base rule bound to an exact element path.

    Attributes:
        path: Slash-joined local names from the document element (or, for
            relative tables, from below it).
        namespaces: If given, the element's namespace URI must be one of
            these. The empty string stands for "no namespace".
        required_attribute: If given, the element must carry it.
    """

    path: str
    namespaces: frozenset[str] | None = field(default=None, kw_only=True)
    required_attribute: str | None = field(default=None, kw_only=True)

    def accepts(self, namespace: str, attrib: Mapping[str, str]) -> bool:
        if self.namespaces is not None and namespace not in self.namespaces:
            return False
        if self.required_attribute is not None:
            return attribute_value(attrib, self.required_attribute) is not None
        return True


@dataclass(frozen=True)
class ObjectCreate(Rule):
    """Pushes a new object when the element starts."""

    factory: Callable[[], Any]


@dataclass(frozen=True)
class SetProperty(Rule):
    """Assigns the converted element text to a property of the stack top."""

    name: str
    converter: Converter = str


@dataclass(frozen=True)
class SetAttributeProperty(Rule):
    """Assigns a converted attribute value to a property of the stack top."""

    name: str
    attribute: str
    converter: Converter = str


@dataclass(frozen=True)
class CallMethod(Rule):
    """Calls a function with the stack top and the element text.

    With ``attribute`` set, the attribute value (read at element start)
    is passed as an extra argument, None if the attribute is missing.
    """

    method: Callable[..., Any]
    attribute: str | None = None
    converter: Converter = str


@dataclass(frozen=True)
class SetNext(Rule):
    """Pops the stack top at element end and links it to the new top."""

    link: Target


@dataclass(frozen=True)
class CaptureMarkup(Rule):
    """Captures the inner XML of a free-text element.

    The element's children are serialized instead of flattened to text,
    so nested markup survives. With ``display`` set the DocBook content
    is converted to display markup before it reaches the target.
    """

    target: Target
    display: bool = True


@dataclass(frozen=True)
class SoftFieldError:
    """A field value that could not be converted and was skipped."""

    path: str
    target: str
    value: str
    reason: str


def target_name(target: Target) -> str:
    if isinstance(target, str):
        return target
    return getattr(target, "__qualname__", repr(target))


@dataclass(frozen=True)
class RuleTable:
    """Immutable set of rules describing one metadata dialect.

    Attributes:
        name: Name used in log messages.
        root_factory: Creates the pre-seeded root object of a bind.
        rules: Rules in declaration order.
        relative: Whether paths start below the document element, so any
            root element name is accepted.
    """

    name: str
    root_factory: Callable[[], Any]
    rules: tuple[Rule, ...]
    relative: bool = False

    @cached_property
    def _index(self) -> Mapping[str, tuple[Rule, ...]]:
        index: dict[str, list[Rule]] = {}
        for rule in self.rules:
            index.setdefault(rule.path, []).append(rule)
        return MappingProxyType({path: tuple(rules) for path, rules in index.items()})

    @property
    def paths(self) -> frozenset[str]:
        return frozenset(self._index)

    def match(
        self, path: str, namespace: str, attrib: Mapping[str, str]
    ) -> tuple[Rule, ...]:
        """Returns the rules applying to an element, in declaration order."""
        candidates = self._index.get(path, ())
        return tuple(rule for rule in candidates if rule.accepts(namespace, attrib))
