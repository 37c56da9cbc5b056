# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Flat Dublin Core document model."""

import re
from dataclasses import dataclass, field
from datetime import date

from ..licenses import License
from ..utils import parse_email, trim_to_none

_LINE_BREAK = re.compile(r"\r?\n")


@dataclass
class DublinCoreDocument:
    """Metadata bound from a Dublin Core (elements or terms) record."""

    title: str | None = None
    description: list[str] = field(default_factory=list)
    subject: str | None = None
    identifiers: list[str] = field(default_factory=list)
    rights: str | None = None
    license: License | None = None
    citation: str | None = None
    language: str | None = None
    published: date | None = None
    homepage: str | None = None
    creator_name: str | None = None
    creator_email: str | None = None
    publisher_name: str | None = None
    publisher_email: str | None = None

    def add_description(self, text: str) -> None:
        """Appends each non-blank line of text as a paragraph."""
        for line in _LINE_BREAK.split(text):
            line = line.strip()
            if line:
                self.description.append(line)

    def add_subject(self, subject: str) -> None:
        """Appends to the subject, joining values with ``"; "``."""
        subject = trim_to_none(subject)
        if subject is None:
            return
        self.subject = subject if self.subject is None else f"{self.subject}; {subject}"

    def add_identifier(self, identifier: str) -> None:
        if identifier:
            self.identifiers.append(identifier)

    def set_relation(self, relation: str) -> None:
        """A relation only serves as homepage if none is known yet."""
        if self.homepage is None:
            self.homepage = trim_to_none(relation)

    def set_rights(self, rights: str) -> None:
        """Stores the rights statement; it also names the license unless a
        dedicated license element did."""
        self.rights = trim_to_none(rights)
        if self.license is None or not self.license.is_concrete:
            self.license = License.from_text(self.rights) or self.license

    def set_license(self, text: str) -> None:
        found = License.from_text(text)
        if found is not None and (self.license is None or found.is_concrete):
            self.license = found

    def set_creator(self, text: str) -> None:
        self.creator_name, self.creator_email = parse_email(text)

    def set_publisher(self, text: str) -> None:
        self.publisher_name, self.publisher_email = parse_email(text)

    @property
    def identifier(self) -> str | None:
        return self.identifiers[0] if self.identifiers else None

    @property
    def source_id(self) -> str | None:
        return self.identifier
