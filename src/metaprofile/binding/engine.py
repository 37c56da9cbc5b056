# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Rule-driven binding of XML documents onto object graphs.

The binder is an lxml parser target: the parser streams start, data and
end events into it and the rules of a :class:`RuleTable` decide what to
do with them. Objects under construction live on a stack that is owned
by a single bind call, so concurrent binds never share state.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import partial
from typing import Any, BinaryIO

from lxml import etree

from ..exceptions import HardParseError, StackUnderflowError, UnreadableStreamError
from ..markup import to_display_markup, unwrap_element
from .rules import (
    XML_NAMESPACE,
    CallMethod,
    CaptureMarkup,
    ObjectCreate,
    Rule,
    RuleTable,
    SetAttributeProperty,
    SetNext,
    SetProperty,
    SoftFieldError,
    apply_target,
    attribute_value,
    target_name,
)

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 64 * 1024

_PREFORMATTED_ELEMENT = "literalLayout"


def split_tag(tag: str) -> tuple[str, str]:
    """Splits a Clark-notation tag into ``(namespace, local_name)``."""
    if tag.startswith("{"):
        namespace, _, local = tag[1:].partition("}")
        return namespace, local
    return "", tag


@dataclass
class _Frame:
    """Per-element state between its start and end events."""

    path: str
    rules: tuple[Rule, ...]
    text: list[str] = field(default_factory=list)
    # Attribute values buffered at start, keyed by rule position
    params: dict[int, str | None] = field(default_factory=dict)


class _MarkupCapture:
    """Rebuilds the subtree of a free-text element for serialization.

    Element names lose their namespace. Whitespace-only text between
    tags is dropped, except inside ``literalLayout``.
    """

    def __init__(self, tag: str, attrib: Mapping[str, str]) -> None:
        self._builder = etree.TreeBuilder()
        self._pending: list[str] = []
        self._preformatted = 0
        self.depth = 0
        self.start(tag, attrib)

    def start(self, tag: str, attrib: Mapping[str, str]) -> None:
        self._flush()
        name = split_tag(tag)[1]
        if name == _PREFORMATTED_ELEMENT:
            self._preformatted += 1
        self._builder.start(name, {_attribute_key(k): v for k, v in attrib.items()})
        self.depth += 1

    def data(self, data: str) -> None:
        self._pending.append(data)

    def end(self, tag: str) -> None:
        self._flush()
        name = split_tag(tag)[1]
        self._builder.end(name)
        if name == _PREFORMATTED_ELEMENT:
            self._preformatted -= 1
        self.depth -= 1

    @property
    def done(self) -> bool:
        return self.depth == 0

    def serialize(self) -> str:
        """Returns the trimmed inner XML of the captured element."""
        element = self._builder.close()
        return unwrap_element(etree.tostring(element, encoding="unicode"))

    def _flush(self) -> None:
        text = "".join(self._pending)
        self._pending.clear()
        if text and (self._preformatted or text.strip()):
            self._builder.data(text)


def _attribute_key(key: str) -> str:
    namespace, local = split_tag(key)
    return key if namespace == XML_NAMESPACE else local


class Binder:
    """lxml parser target applying a rule table to parse events.

    Args:
        table: The dialect rule table.
        errors: Optional list receiving soft field errors.
    """

    def __init__(
        self, table: RuleTable, errors: list[SoftFieldError] | None = None
    ) -> None:
        self.table = table
        self.root = table.root_factory()
        self.stack: list[Any] = [self.root]
        self.errors = errors if errors is not None else []
        self._names: list[str] = []
        self._frames: list[_Frame] = []
        self._capture: _MarkupCapture | None = None

    # Parser target interface

    def start(self, tag: str, attrib: Mapping[str, str]) -> None:
        if self._capture is not None:
            self._capture.start(tag, attrib)
            return

        namespace, name = split_tag(tag)
        self._names.append(name)
        path = self._current_path()
        rules = self.table.match(path, namespace, attrib) if path else ()
        frame = _Frame(path, rules)
        self._frames.append(frame)

        for rule in rules:
            if isinstance(rule, ObjectCreate):
                self.stack.append(rule.factory())

        for index, rule in enumerate(rules):
            if isinstance(rule, SetAttributeProperty):
                raw = attribute_value(attrib, rule.attribute)
                if raw is not None:
                    self._assign(frame, rule.name, rule.converter, raw)
            elif isinstance(rule, CallMethod) and rule.attribute is not None:
                frame.params[index] = attribute_value(attrib, rule.attribute)
            elif isinstance(rule, CaptureMarkup):
                self._capture = _MarkupCapture(tag, attrib)

    def data(self, data: str) -> None:
        if self._capture is not None:
            self._capture.data(data)
        elif self._frames:
            self._frames[-1].text.append(data)

    def end(self, tag: str) -> None:
        markup = None
        if self._capture is not None:
            self._capture.end(tag)
            if not self._capture.done:
                return
            markup = self._capture.serialize()
            self._capture = None

        frame = self._frames.pop()
        text = "".join(frame.text).strip()

        for index, rule in enumerate(frame.rules):
            if isinstance(rule, SetProperty):
                self._assign(frame, rule.name, rule.converter, text)
            elif isinstance(rule, CallMethod):
                value = self._convert(frame, rule.method, rule.converter, text)
                if isinstance(value, SoftFieldError):
                    continue
                if rule.attribute is None:
                    rule.method(self.stack[-1], value)
                else:
                    rule.method(self.stack[-1], value, frame.params.get(index))
            elif isinstance(rule, CaptureMarkup) and markup is not None:
                value = to_display_markup(markup) if rule.display else markup
                apply_target(rule.target, self.stack[-1], value)

        for rule in frame.rules:
            if isinstance(rule, SetNext):
                self._pop_and_link(frame, rule)

        self._names.pop()

    def close(self) -> Any:
        if len(self.stack) > 1:
            logger.warning(
                "%s: %d object(s) were never linked to a parent",
                self.table.name,
                len(self.stack) - 1,
            )
        return self.root

    # Actions

    def _current_path(self) -> str:
        names = self._names[1:] if self.table.relative else self._names
        return "/".join(names)

    def _convert(
        self, frame: _Frame, target: Any, converter: Any, raw: str
    ) -> Any | SoftFieldError:
        """Converts a raw value, reifying failures as SoftFieldError."""
        try:
            return converter(raw)
        except (ValueError, TypeError) as e:
            error = SoftFieldError(
                path=frame.path, target=target_name(target), value=raw, reason=str(e)
            )
            logger.warning(
                "%s: ignoring invalid value %r at %s: %s",
                self.table.name,
                raw,
                frame.path,
                e,
            )
            self.errors.append(error)
            return error

    def _assign(self, frame: _Frame, name: str, converter: Any, raw: str) -> None:
        value = self._convert(frame, name, converter, raw)
        if not isinstance(value, SoftFieldError):
            setattr(self.stack[-1], name, value)

    def _pop_and_link(self, frame: _Frame, rule: SetNext) -> None:
        if len(self.stack) < 2:
            raise StackUnderflowError(
                f"{self.table.name}: nothing to link at {frame.path}"
            )
        child = self.stack.pop()
        apply_target(rule.link, self.stack[-1], child)


def bind(
    source: bytes | BinaryIO,
    table: RuleTable,
    errors: list[SoftFieldError] | None = None,
) -> Any:
    """Binds an XML document using a rule table.

    Args:
        source: The document as bytes or a binary stream.
        table: The dialect rule table.
        errors: Optional list receiving the fields that were skipped
            because their value could not be converted.

    Returns:
        The root object of the table, populated from the document.

    Raises:
        HardParseError: If the document is not well-formed XML, or a
            rule table links an object that was never created.
        UnreadableStreamError: If reading the stream fails.
    """
    binder = Binder(table, errors)
    parser = etree.XMLParser(target=binder, resolve_entities=False, no_network=True)
    fed = False

    try:
        if isinstance(source, bytes | bytearray):
            if source:
                parser.feed(bytes(source))
                fed = True
        else:
            for chunk in iter(partial(source.read, READ_CHUNK_SIZE), b""):
                parser.feed(chunk)
                fed = True
        if not fed:
            raise HardParseError("Empty document")
        return parser.close()
    except etree.LxmlError as e:
        raise HardParseError(f"{table.name}: malformed XML: {e}") from e
    except OSError as e:
        raise UnreadableStreamError(f"Can't read input stream: {e}") from e
