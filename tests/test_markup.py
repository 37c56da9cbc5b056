# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Tests for markup.py."""

import pytest

from metaprofile.markup import (
    escape_once,
    paragraphs,
    replace_each,
    to_display_markup,
    to_plain_text,
    to_storage_markup,
    unwrap_element,
)


class TestToStorageMarkup:
    """Tests for the display to DocBook direction."""

    def test_paragraph_and_bold(self) -> None:
        """<p> and <b> map to <para> and <emphasis>."""
        result = to_storage_markup("<p>Hello <b>world</b></p>")

        assert result == "<para>Hello <emphasis>world</emphasis></para>"

    def test_anchor(self) -> None:
        """Anchors become ulink elements with a citetitle."""
        result = to_storage_markup('<a href="http://www.gbif.org">GBIF</a>')

        assert result == (
            '<ulink url="http://www.gbif.org"><citetitle>GBIF</citetitle></ulink>'
        )

    def test_unordered_list(self) -> None:
        """Lists are wrapped in a para, list items contain a para."""
        result = to_storage_markup("<ul><li>one</li><li>two</li></ul>")

        assert result == (
            "<para><itemizedlist>"
            "<listitem><para>one</para></listitem>"
            "<listitem><para>two</para></listitem>"
            "</itemizedlist></para>"
        )

    def test_em_is_emphasis(self) -> None:
        """<em> is accepted as an alias of <b>."""
        assert to_storage_markup("<em>x</em>") == "<emphasis>x</emphasis>"

    def test_unknown_tag_is_escaped(self) -> None:
        """Tags outside the vocabulary are kept as text."""
        result = to_storage_markup("<p>a <script>x</script></p>")

        assert result == "<para>a &lt;script&gt;x&lt;/script&gt;</para>"

    def test_unclosed_tag_is_escaped(self) -> None:
        """An opening tag without closing tag is kept as text."""
        assert to_storage_markup("<p>open") == "&lt;p&gt;open"

    def test_stray_closing_tag_is_escaped(self) -> None:
        """A closing tag without opening tag is kept as text."""
        assert to_storage_markup("text</b>") == "text&lt;/b&gt;"

    def test_crossed_tags(self) -> None:
        """Crossed tags keep the balanced pair and escape the rest."""
        result = to_storage_markup("<b><p>x</b></p>")

        assert result == "&lt;b&gt;<para>x&lt;/b&gt;</para>"

    def test_entities_not_double_escaped(self) -> None:
        """Existing entities survive, bare ampersands are escaped."""
        result = to_storage_markup("Fish &amp; Chips & more")

        assert result == "Fish &amp; Chips &amp; more"

    def test_none(self) -> None:
        """None passes through."""
        assert to_storage_markup(None) is None


class TestToDisplayMarkup:
    """Tests for the DocBook to display direction."""

    def test_para_and_emphasis(self) -> None:
        """<para> and <emphasis> map to <p> and <b>."""
        result = to_display_markup(
            "<para>Specimens from <emphasis>Tanzania</emphasis>.</para>"
        )

        assert result == "<p>Specimens from <b>Tanzania</b>.</p>"

    def test_ulink_with_citetitle(self) -> None:
        """ulink/citetitle pairs become anchors."""
        result = to_display_markup(
            '<ulink url="http://x.org"> <citetitle>X</citetitle> </ulink>'
        )

        assert result == '<a href="http://x.org">X</a>'

    def test_bare_ulink(self) -> None:
        """A ulink without citetitle becomes an anchor too."""
        result = to_display_markup('<ulink url="http://x.org">X</ulink>')

        assert result == '<a href="http://x.org">X</a>'

    def test_bare_list_elements(self) -> None:
        """Lists not wrapped in a para are converted as well."""
        result = to_display_markup(
            "<itemizedlist><listitem>a</listitem></itemizedlist>"
        )

        assert result == "<ul><li>a</li></ul>"

    def test_every_heading_level_reads_back_as_h1(self) -> None:
        """All heading levels share the DocBook title element."""
        storage = to_storage_markup("<h3>Methods</h3>")

        assert storage == "<title>Methods</title>"
        assert to_display_markup(storage) == "<h1>Methods</h1>"

    def test_none(self) -> None:
        """None passes through."""
        assert to_display_markup(None) is None


class TestRoundTrip:
    """Display markup within the canonical subset survives a round trip."""

    @pytest.mark.parametrize(
        "text",
        [
            "<p>Hello <b>world</b></p>",
            "<div><h1>Title</h1><p>Body</p></div>",
            "<ol><li>first</li></ol><ul><li>one</li><li>two</li></ul>",
            "H<sub>2</sub>O and x<sup>2</sup>",
            "<pre>  keep   spaces  </pre>",
            'See <a href="http://www.gbif.org/dataset?q=a&amp;b">GBIF</a>.',
        ],
    )
    def test_round_trip(self, text: str) -> None:
        """display -> DocBook -> display is the identity."""
        assert to_display_markup(to_storage_markup(text)) == text


class TestEscapeOnce:
    """Tests for escape_once()."""

    def test_escapes_markup_characters(self) -> None:
        """<, > and & are escaped."""
        assert escape_once("a < b & c > d") == "a &lt; b &amp; c &gt; d"

    def test_idempotent(self) -> None:
        """Escaping twice equals escaping once."""
        text = "a < b & c &amp; d &quot;e&quot;"

        once = escape_once(text)

        assert escape_once(once) == once
        assert once == "a &lt; b &amp; c &amp; d &quot;e&quot;"

    def test_unknown_entity_is_escaped(self) -> None:
        """Only the XML entities are passed through."""
        assert escape_once("&nbsp;") == "&amp;nbsp;"


class TestReplaceEach:
    """Tests for replace_each()."""

    def test_first_listed_wins(self) -> None:
        """At one position the earliest listed search string is used."""
        result = replace_each("abc", (("ab", "X"), ("a", "Y"), ("bc", "Z")))

        assert result == "Xc"

    def test_replacements_not_rescanned(self) -> None:
        """Replaced text is not searched again."""
        assert replace_each("ab", (("a", "b"), ("b", "a"))) == "ba"


class TestHelpers:
    """Tests for unwrap_element(), to_plain_text() and paragraphs()."""

    def test_unwrap_element(self) -> None:
        """The outer element is removed and content trimmed."""
        result = unwrap_element("<abstract>\n <para>x</para>\n</abstract>")

        assert result == "<para>x</para>"

    def test_unwrap_element_with_attributes(self) -> None:
        """Attributes on the outer element are dropped along with it."""
        result = unwrap_element('<para xml:lang="en">text</para>')

        assert result == "text"

    def test_unwrap_empty_element(self) -> None:
        """A self-closing element has no content."""
        assert unwrap_element("<abstract/>") == ""

    def test_plain_text(self) -> None:
        """Tags are removed, whitespace collapsed and entities decoded."""
        result = to_plain_text("<p>Hello   <b>big</b>\n world &amp; co</p>")

        assert result == "Hello big world & co"

    def test_plain_text_keeps_preformatted(self) -> None:
        """Whitespace inside <pre> is preserved."""
        assert to_plain_text("<pre>a  b</pre>") == "a  b"

    def test_paragraphs(self) -> None:
        """Empty paragraphs are skipped."""
        result = paragraphs("<p>one</p><p> </p><p>two <b>2</b></p>")

        assert result == ["one", "two 2"]

    def test_paragraphs_without_p(self) -> None:
        """Text without paragraphs is one paragraph."""
        assert paragraphs("just text") == ["just text"]

    def test_paragraphs_empty(self) -> None:
        """None yields no paragraphs."""
        assert paragraphs(None) == []
