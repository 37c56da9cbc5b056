# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Tests for model/versioning.py."""

import pytest

from metaprofile.model.versioning import (
    DEFAULT_VERSION,
    Version,
    VersionedDocument,
    format_package_id,
    parse_package_id,
)


class TestVersion:
    """Tests for Version."""

    def test_parse(self) -> None:
        assert Version.parse("7.41") == Version(7, 41)

    def test_parse_without_fraction_is_default(self) -> None:
        """An integer version string yields 1.0."""
        assert Version.parse("3") == DEFAULT_VERSION

    def test_parse_invalid(self) -> None:
        with pytest.raises(ValueError):
            Version.parse("a.b")

    def test_str(self) -> None:
        assert str(Version(2, 10)) == "2.10"

    def test_next(self) -> None:
        """Major changes reset minor, minor changes keep major."""
        version = Version(7, 41)

        assert version.next_major() == Version(8, 0)
        assert version.next_minor() == Version(7, 42)

    def test_ordering(self) -> None:
        assert Version(1, 9) < Version(1, 10) < Version(2, 0)


class TestPackageId:
    """Tests for parse_package_id and format_package_id."""

    def test_parse(self) -> None:
        assert parse_package_id("abc/v7.41") == ("abc", Version(7, 41))

    def test_parse_without_suffix(self) -> None:
        guid = "619a4b95-1a82-4006-be6a-7dbe3c9b33c5"

        assert parse_package_id(guid) == (guid, None)

    def test_parse_integer_suffix(self) -> None:
        """A suffix without minor part is stripped and yields 1.0."""
        assert parse_package_id("abc/v3") == ("abc", DEFAULT_VERSION)

    def test_format(self) -> None:
        assert format_package_id("abc", Version(2, 1)) == "abc/v2.1"


class TestVersionedDocument:
    """Tests for VersionedDocument."""

    def test_package_id_round_trip(self) -> None:
        """Setting a packageId splits guid and version."""
        doc = VersionedDocument()

        doc.package_id = "abc/v7.41"

        assert doc.guid == "abc"
        assert doc.major_version == 7
        assert doc.minor_version == 41
        assert doc.package_id == "abc/v7.41"

    def test_package_id_without_version(self) -> None:
        """A bare guid keeps the default version."""
        doc = VersionedDocument()

        doc.package_id = "abc"

        assert doc.guid == "abc"
        assert doc.version == DEFAULT_VERSION
        assert doc.package_id == "abc/v1.0"

    def test_no_guid(self) -> None:
        assert VersionedDocument().package_id is None

    def test_set_version_remembers_previous(self) -> None:
        doc = VersionedDocument(guid="abc")

        doc.set_version("2.3")
        doc.set_version(Version(3, 0))

        assert doc.version == Version(3, 0)
        assert doc.previous_version == Version(2, 3)

    def test_bump(self) -> None:
        doc = VersionedDocument(guid="abc", version=Version(1, 4))

        assert doc.next_version_after_minor_change() == Version(1, 5)
        assert doc.next_version_after_major_change() == Version(2, 0)
        assert doc.version == Version(1, 4)

        assert doc.bump_minor_version() == Version(1, 5)
        assert doc.bump_major_version() == Version(2, 0)
        assert doc.previous_version == Version(1, 5)
