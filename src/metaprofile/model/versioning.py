# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Versioned document identifiers (packageId handling)."""

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Trailing version suffix of a packageId, e.g. "/v7.41" or "/v3"
PACKAGE_ID_PATTERN = re.compile(r"/v([0-9]+(\.\d+)?)$")


@dataclass(frozen=True, order=True)
class Version:
    """A ``major.minor`` document version."""

    major: int = 1
    minor: int = 0

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parses a decimal version string.

        A value without a fractional part (``"3"``) does not keep the
        integer as major version; it yields the default version 1.0.

        Args:
            text: Version text such as ``"7.41"``.

        Returns:
            The parsed version.

        Raises:
            ValueError: If either part is not an integer.
        """
        value = text.strip()
        if value.find(".") > 0:
            major, minor = value.split(".", 1)
            return cls(int(major), int(minor))
        return DEFAULT_VERSION

    def next_major(self) -> "Version":
        """Version after a major change; minor resets to 0."""
        return Version(self.major + 1, 0)

    def next_minor(self) -> "Version":
        """Version after a minor change; major is kept."""
        return Version(self.major, self.minor + 1)


DEFAULT_VERSION = Version(1, 0)


def parse_package_id(package_id: str) -> tuple[str, Version | None]:
    """Splits a packageId into guid and version.

    Args:
        package_id: Identifier such as ``"abc/v7.41"``.

    Returns:
        ``(guid, version)``; version is None when there is no suffix.
    """
    match = PACKAGE_ID_PATTERN.search(package_id)
    if match is None:
        return package_id, None
    return package_id[: match.start()], Version.parse(match.group(1))


def format_package_id(guid: str, version: Version) -> str:
    """Joins guid and version into a packageId."""
    return f"{guid}/v{version}"


@dataclass
class VersionedDocument:
    """Base for documents identified by a guid and a major.minor version."""

    guid: str | None = None
    version: Version = DEFAULT_VERSION
    previous_version: Version = DEFAULT_VERSION

    @property
    def package_id(self) -> str | None:
        """The ``guid/v{major}.{minor}`` identifier, None without a guid."""
        if self.guid is None:
            return None
        return format_package_id(self.guid, self.version)

    @package_id.setter
    def package_id(self, value: str | None) -> None:
        if value is None:
            self.guid = None
            return
        guid, version = parse_package_id(value.strip())
        if version is not None:
            self.set_version(version)
        self.guid = guid

    @property
    def major_version(self) -> int:
        return self.version.major

    @property
    def minor_version(self) -> int:
        return self.version.minor

    def set_version(self, version: Version | str) -> None:
        """Sets the current version, remembering the one it replaces.

        Args:
            version: A Version or a decimal string such as ``"2.1"``.
        """
        if isinstance(version, str):
            version = Version.parse(version)
        self.previous_version = self.version
        self.version = version
        logger.debug("Version changed %s -> %s", self.previous_version, version)

    def bump_major_version(self) -> Version:
        """Moves to the next major version and returns it."""
        self.set_version(self.version.next_major())
        return self.version

    def bump_minor_version(self) -> Version:
        """Moves to the next minor version and returns it."""
        self.set_version(self.version.next_minor())
        return self.version

    def next_version_after_major_change(self) -> Version:
        return self.version.next_major()

    def next_version_after_minor_change(self) -> Version:
        return self.version.next_minor()
