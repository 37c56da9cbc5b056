# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Pytest fixtures for the metaprofile test suite."""

from pathlib import Path

import pytest

from metaprofile.binding import bind
from metaprofile.dialects import DC_RULES, EML_RULES
from metaprofile.model import DublinCoreDocument, Eml

RESOURCES = Path(__file__).parent / "resources"


def resource(name: str) -> Path:
    """Path of a file in tests/resources."""
    return RESOURCES / name


# -- Fixtures --


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Temporary directory for tests.

    Args:
        tmp_path: Pytest-provided temporary directory.

    Returns:
        Path to the temporary directory.
    """
    return tmp_path


@pytest.fixture
def eml_path() -> Path:
    """GBIF profile EML document using every supported element."""
    return resource("eml_sample.xml")


@pytest.fixture
def eml_bytes(eml_path: Path) -> bytes:
    return eml_path.read_bytes()


@pytest.fixture
def eml(eml_bytes: bytes) -> Eml:
    """The sample EML document, bound."""
    return bind(eml_bytes, EML_RULES)


@pytest.fixture
def minimal_eml_path() -> Path:
    """EML 2.1.1 document with a title, a creator and a rights acronym."""
    return resource("eml_minimal.xml")


@pytest.fixture
def dc_path() -> Path:
    """Flat Dublin Core record mixing elements and terms."""
    return resource("dc_sample.xml")


@pytest.fixture
def dc_bytes(dc_path: Path) -> bytes:
    return dc_path.read_bytes()


@pytest.fixture
def dc(dc_bytes: bytes) -> DublinCoreDocument:
    """The sample Dublin Core record, bound."""
    return bind(dc_bytes, DC_RULES)


@pytest.fixture
def dc_rdf_path() -> Path:
    """Dublin Core record wrapped in an RDF Description."""
    return resource("dc_rdf.xml")


@pytest.fixture
def dc_elements_only_path() -> Path:
    """OAI Dublin Core record without any DC terms element."""
    return resource("dc_elements_only.xml")


@pytest.fixture
def dc_broken_path() -> Path:
    """Dublin Core record that is not well-formed."""
    return resource("dc_broken.xml")


@pytest.fixture
def schema_path() -> Path:
    """XML Schema accepting a ``metadata`` element with foreign children."""
    return resource("metadata.xsd")
