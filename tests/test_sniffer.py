# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Tests for sniffer.py."""

from io import BytesIO
from pathlib import Path

import pytest

from metaprofile.exceptions import NoRecognizedDialectError
from metaprofile.sniffer import Dialect, detect


class TestDetect:
    """Tests for detect()."""

    def test_eml(self, eml_path: Path) -> None:
        with open(eml_path, "rb") as f:
            assert detect(f) is Dialect.EML

    def test_eml_without_namespace(self) -> None:
        """Only local names count."""
        assert detect(b"<eml><dataset/></eml>") is Dialect.EML

    def test_bytearray(self, dc_path: Path) -> None:
        assert detect(bytearray(dc_path.read_bytes())) is Dialect.DC

    def test_unrelated_bytearray(self) -> None:
        with pytest.raises(NoRecognizedDialectError):
            detect(bytearray(b"<root/>"))

    def test_eml_stops_early(self) -> None:
        """Content after eml/dataset is never parsed."""
        data = b"<eml><dataset><title>x</title></dataset><broken></eml>"

        assert detect(data) is Dialect.EML

    def test_eml_wins_over_dc_terms(self) -> None:
        """EML found after a DC terms element still means EML."""
        data = (
            b'<eml xmlns:dcterms="http://purl.org/dc/terms/">'
            b"<dcterms:created>2010</dcterms:created><dataset/></eml>"
        )

        assert detect(data) is Dialect.EML

    def test_dataset_must_be_child_of_eml(self) -> None:
        data = b"<eml><additionalMetadata><dataset/></additionalMetadata></eml>"

        with pytest.raises(NoRecognizedDialectError):
            detect(data)

    def test_dc(self, dc_path: Path) -> None:
        assert detect(dc_path.read_bytes()) is Dialect.DC

    def test_dc_rdf(self, dc_rdf_path: Path) -> None:
        assert detect(BytesIO(dc_rdf_path.read_bytes())) is Dialect.DC

    def test_dc_elements_only_not_detected(self, dc_elements_only_path: Path) -> None:
        """Dublin Core is recognized by the terms namespace only."""
        with pytest.raises(NoRecognizedDialectError):
            detect(dc_elements_only_path.read_bytes())

    def test_unrelated_xml(self) -> None:
        with pytest.raises(NoRecognizedDialectError):
            detect(b"<html><body>Hello</body></html>")

    def test_malformed_xml(self, dc_broken_path: Path) -> None:
        """Well-formedness errors surface as no recognized dialect."""
        with pytest.raises(NoRecognizedDialectError):
            detect(dc_broken_path.read_bytes())

    def test_not_xml(self) -> None:
        with pytest.raises(NoRecognizedDialectError):
            detect(b"PK\x03\x04 zip archive")

    def test_unreadable_stream(self) -> None:
        class FailingStream:
            def read(self, size: int = -1) -> bytes:
                raise OSError("device not ready")

        with pytest.raises(NoRecognizedDialectError):
            detect(FailingStream())

    def test_error_message(self) -> None:
        with pytest.raises(NoRecognizedDialectError, match="Only EML or DC"):
            detect(b"<root/>")
