# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Tests for licenses.py."""

import pytest

from metaprofile.licenses import LICENSE_STATEMENTS, License, expand_license_shorthand


class TestLicenseFromText:
    """Tests for License.from_text()."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("CC-BY-4.0", License.CC_BY_4_0),
            ("cc-by-nc-4.0", License.CC_BY_NC_4_0),
            ("CC0-1.0", License.CC0_1_0),
            ("CC0_1_0", License.CC0_1_0),
            ("UNSPECIFIED", License.UNSPECIFIED),
        ],
    )
    def test_acronym(self, text: str, expected: License) -> None:
        """Acronyms and member names are matched case-insensitively."""
        assert License.from_text(text) is expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("http://creativecommons.org/licenses/by/4.0/legalcode", License.CC_BY_4_0),
            ("https://creativecommons.org/licenses/by-nc/4.0/", License.CC_BY_NC_4_0),
            ("http://www.creativecommons.org/publicdomain/zero/1.0", License.CC0_1_0),
        ],
    )
    def test_url(self, text: str, expected: License) -> None:
        """Scheme, www prefix and legalcode suffix do not matter."""
        assert License.from_text(text) is expected

    def test_url_in_sentence(self) -> None:
        """A legal code URL inside a rights statement is found."""
        text = (
            "This work is licensed under a Creative Commons Attribution "
            "(CC-BY) 4.0 License http://creativecommons.org/licenses/by/4.0/legalcode."
        )

        assert License.from_text(text) is License.CC_BY_4_0

    def test_acronym_in_sentence(self) -> None:
        """A license acronym inside a sentence is found."""
        assert License.from_text("Released as CC-BY-NC-4.0 data") is (
            License.CC_BY_NC_4_0
        )

    def test_unsupported(self) -> None:
        """Unrecognized text yields UNSUPPORTED."""
        assert License.from_text("All rights reserved") is License.UNSUPPORTED

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_blank(self, text: str | None) -> None:
        """Blank text yields None."""
        assert License.from_text(text) is None


class TestLicenseProperties:
    """Tests for License properties."""

    def test_concrete_license(self) -> None:
        """Concrete licenses carry URL and title."""
        lic = License.CC_BY_4_0

        assert lic.is_concrete
        assert lic.url == "http://creativecommons.org/licenses/by/4.0/legalcode"
        assert "CC-BY" in lic.title

    def test_placeholders(self) -> None:
        """Placeholders have neither URL nor title."""
        for lic in (License.UNSPECIFIED, License.UNSUPPORTED):
            assert not lic.is_concrete
            assert lic.url is None
            assert lic.title is None


class TestExpandLicenseShorthand:
    """Tests for expand_license_shorthand()."""

    @pytest.mark.parametrize("lic", [License.CC0_1_0, License.CC_BY_4_0])
    def test_expands_acronym(self, lic: License) -> None:
        """Known acronyms expand to the DocBook statement."""
        result = expand_license_shorthand(f"  {lic.value.lower()} ")

        assert result == LICENSE_STATEMENTS[lic]
        assert f'<ulink url="{lic.url}">' in result

    def test_other_text_unchanged(self) -> None:
        """Anything but a bare acronym is returned as is."""
        text = "Licensed under CC-BY-4.0"

        assert expand_license_shorthand(text) == text

    def test_none(self) -> None:
        """None passes through."""
        assert expand_license_shorthand(None) is None
