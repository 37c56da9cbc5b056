# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Tests for writer.py."""

from datetime import date

import pytest
from lxml import etree

from metaprofile.binding import bind
from metaprofile.dialects import DC_RULES, EML_RULES
from metaprofile.exceptions import TemplateRenderError
from metaprofile.model import DublinCoreDocument, Eml
from metaprofile.writer import (
    EML_PROFILE_VERSION,
    render,
    write,
    write_dublin_core,
    write_eml,
)


class TestWriteEml:
    """Tests for write_eml()."""

    def test_round_trip(self, eml: Eml) -> None:
        """Binding the written document yields an equal document."""
        xml = write_eml(eml)

        assert bind(xml.encode("utf-8"), EML_RULES) == eml

    def test_well_formed(self, eml: Eml) -> None:
        root = etree.fromstring(write_eml(eml).encode("utf-8"))

        assert etree.QName(root).localname == "eml"
        assert root.get("packageId") == "619a4b95-1a82-4006-be6a-7dbe3c9b33c5/v7.41"

    def test_profile_schema_location(self, eml: Eml) -> None:
        assert f"eml-gbif-profile/{EML_PROFILE_VERSION}/eml.xsd" in write_eml(eml)

    def test_markup_written_as_docbook(self, eml: Eml) -> None:
        xml = write_eml(eml)

        assert "<emphasis>Tanzania</emphasis>" in xml
        assert "<section><title>Background</title>" in xml
        assert "<b>" not in xml

    def test_xml_declaration(self, eml: Eml) -> None:
        assert write_eml(eml).startswith("<?xml")
        assert write_eml(eml, omit_xml_declaration=True).startswith("<eml:eml")

    def test_text_escaped(self) -> None:
        eml = Eml(title="Fish & <Chips>")

        xml = write_eml(eml)

        assert "Fish &amp; &lt;Chips&gt;" in xml
        assert bind(xml.encode("utf-8"), EML_RULES).title == "Fish & <Chips>"

    def test_new_document(self) -> None:
        """A document created in code round-trips as well."""
        eml = Eml(title="New", pub_date=date(2020, 5, 17), language="de")
        eml.set_version("2.3")
        eml.guid = "abc"
        eml.set_subject("birds, insects")
        eml.set_intellectual_rights("CC-BY-4.0")

        again = bind(write_eml(eml).encode("utf-8"), EML_RULES)

        assert again.package_id == "abc/v2.3"
        assert again.keywords == ["birds", "insects"]
        assert again.intellectual_rights == eml.intellectual_rights
        assert again.pub_date == date(2020, 5, 17)


class TestWriteDublinCore:
    """Tests for write_dublin_core()."""

    def test_round_trip(self, dc: DublinCoreDocument) -> None:
        xml = write_dublin_core(dc)

        assert bind(xml.encode("utf-8"), DC_RULES) == dc

    def test_one_subject_element_per_keyword(self, dc: DublinCoreDocument) -> None:
        xml = write_dublin_core(dc)

        assert xml.count("<dc:subject>") == 3

    def test_creator_with_email(self, dc: DublinCoreDocument) -> None:
        xml = write_dublin_core(dc)
        expected = "Ward Appeltans &lt;ward.appeltans@vliz.be&gt;"

        assert f"<dc:creator>{expected}</dc:creator>" in xml

    def test_empty_document(self) -> None:
        xml = write_dublin_core(DublinCoreDocument(), omit_xml_declaration=True)
        root = etree.fromstring(xml.encode("utf-8"))

        assert root.tag == "metadata"
        assert len(root) == 0


class TestDispatch:
    """Tests for write() and render()."""

    def test_write_eml(self, eml: Eml) -> None:
        assert write(eml) == write_eml(eml)

    def test_write_dublin_core(self, dc: DublinCoreDocument) -> None:
        assert write(dc, omit_xml_declaration=True) == write_dublin_core(
            dc, omit_xml_declaration=True
        )

    def test_write_unknown_type(self) -> None:
        with pytest.raises(TypeError):
            write("not a document")

    def test_missing_template(self) -> None:
        with pytest.raises(TemplateRenderError, match="missing.xml.j2"):
            render("missing.xml.j2", Eml())
