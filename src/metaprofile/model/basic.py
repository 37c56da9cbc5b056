# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Capabilities shared by all bound metadata documents."""

from datetime import date
from typing import Protocol, runtime_checkable


@runtime_checkable
class BasicMetadata(Protocol):
    """Minimal view every dialect's document offers."""

    @property
    def title(self) -> str | None: ...

    @property
    def description(self) -> list[str]: ...

    @property
    def subject(self) -> str | None: ...

    @property
    def rights(self) -> str | None: ...

    @property
    def homepage(self) -> str | None: ...

    @property
    def creator_name(self) -> str | None: ...

    @property
    def creator_email(self) -> str | None: ...

    @property
    def publisher_name(self) -> str | None: ...

    @property
    def publisher_email(self) -> str | None: ...

    @property
    def published(self) -> date | None: ...

    @property
    def identifier(self) -> str | None: ...

    @property
    def source_id(self) -> str | None: ...


def has_content(document: BasicMetadata) -> bool:
    """Checks whether a bound document carries any usable metadata.

    Args:
        document: The bound document.

    Returns:
        True if at least one of title, description, subject, source
        identifier, homepage or published date is present.
    """
    return (
        document.title is not None
        or bool(document.description)
        or document.subject is not None
        or document.source_id is not None
        or document.homepage is not None
        or document.published is not None
    )
