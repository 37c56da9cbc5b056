# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Unit tests for validator.py."""

from pathlib import Path

import pytest

from metaprofile.exceptions import SchemaValidationError
from metaprofile.model import DublinCoreDocument, Eml
from metaprofile.validator import ValidationReport, load_schema, validate_xml
from metaprofile.writer import write_dublin_core, write_eml


class TestLoadSchema:
    """Tests for load_schema."""

    def test_load(self, schema_path: Path) -> None:
        schema = load_schema(schema_path)

        assert schema is not None

    def test_missing_file(self, tmp_dir: Path) -> None:
        """A missing schema raises SchemaValidationError."""
        with pytest.raises(SchemaValidationError):
            load_schema(tmp_dir / "missing.xsd")

    def test_not_a_schema(self, tmp_dir: Path) -> None:
        """A well-formed file that is no XSD raises SchemaValidationError."""
        path = tmp_dir / "bogus.xsd"
        path.write_text("<notaschema/>", encoding="utf-8")

        with pytest.raises(SchemaValidationError):
            load_schema(path)

    def test_malformed_schema(self, tmp_dir: Path) -> None:
        path = tmp_dir / "broken.xsd"
        path.write_text("<xs:schema", encoding="utf-8")

        with pytest.raises(SchemaValidationError):
            load_schema(path)


class TestValidateXml:
    """Tests for validate_xml."""

    def test_valid_dublin_core(
        self, dc: DublinCoreDocument, schema_path: Path
    ) -> None:
        """Written Dublin Core records satisfy the record schema."""
        report = validate_xml(write_dublin_core(dc), schema_path)

        assert report == ValidationReport(valid=True)

    def test_loaded_schema(self, dc: DublinCoreDocument, schema_path: Path) -> None:
        """A loaded schema can be reused."""
        schema = load_schema(schema_path)

        assert validate_xml(write_dublin_core(dc).encode("utf-8"), schema).valid

    def test_wrong_root(self, schema_path: Path) -> None:
        """Schema errors carry line numbers."""
        report = validate_xml(write_eml(Eml(title="x")), schema_path)

        assert not report.valid
        assert report.errors
        assert report.errors[0].startswith("line ")

    def test_not_well_formed(self, schema_path: Path) -> None:
        report = validate_xml("<metadata>", schema_path)

        assert not report.valid
        assert report.errors[0].startswith("Not well-formed")

    def test_entities_not_resolved(self, schema_path: Path, tmp_dir: Path) -> None:
        """External entities are never expanded into the document."""
        secret = tmp_dir / "secret.txt"
        secret.write_text("secret", encoding="utf-8")
        xml = (
            f'<!DOCTYPE metadata [<!ENTITY x SYSTEM "file://{secret}">]>'
            '<metadata xmlns:dc="http://purl.org/dc/elements/1.1/">'
            "<dc:title>&x;</dc:title></metadata>"
        )

        report = validate_xml(xml, schema_path)

        assert not report.valid
        assert "secret" not in " ".join(report.errors)

    def test_unresolved_entity_reported(self, schema_path: Path) -> None:
        """An entity that cannot be expanded is reported, not raised."""
        xml = (
            '<!DOCTYPE metadata [<!ENTITY x SYSTEM "file:///etc/hostname">]>'
            "<metadata>&x;</metadata>"
        )

        report = validate_xml(xml, schema_path)

        assert report.valid is False
        assert len(report.errors) == 1
