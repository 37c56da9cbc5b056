# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Conversion between display markup and DocBook markup.

Long-form text fields (abstracts, rights statements, method descriptions)
are held in memory as a small HTML subset and written into EML documents
as DocBook. This module converts between the two vocabularies:

    <div>         <section>
    <h1>..<h5>    <title>
    <ul>          <para><itemizedlist>
    <ol>          <para><orderedlist>
    <li>          <listitem><para>
    <p>           <para>
    <b>           <emphasis>
    <sub>/<sup>   <subscript>/<superscript>
    <pre>         <literalLayout>
    <a href=U>T   <ulink url=U><citetitle>T</citetitle></ulink>

Both directions are pure string functions and never raise on malformed
input: tags outside the vocabulary, and tags left unbalanced, are kept
as escaped text.
"""

import html
import re

# Entities that escape_once passes through untouched
ESCAPED_ENTITIES = ("&amp;", "&lt;", "&gt;", "&quot;", "&apos;")
_MAX_ENTITY_LENGTH = max(len(entity) for entity in ESCAPED_ENTITIES)

# HTML tag name -> (DocBook opening, DocBook closing)
HTML_TO_DOCBOOK = {
    "div": ("<section>", "</section>"),
    "h1": ("<title>", "</title>"),
    "h2": ("<title>", "</title>"),
    "h3": ("<title>", "</title>"),
    "h4": ("<title>", "</title>"),
    "h5": ("<title>", "</title>"),
    "ul": ("<para><itemizedlist>", "</itemizedlist></para>"),
    "ol": ("<para><orderedlist>", "</orderedlist></para>"),
    "li": ("<listitem><para>", "</para></listitem>"),
    "p": ("<para>", "</para>"),
    "b": ("<emphasis>", "</emphasis>"),
    "em": ("<emphasis>", "</emphasis>"),
    "sub": ("<subscript>", "</subscript>"),
    "sup": ("<superscript>", "</superscript>"),
    "pre": ("<literalLayout>", "</literalLayout>"),
}

# Ordered: at each position the first listed search string wins, so the
# combined list wrappers must precede their single-tag forms.
DOCBOOK_TO_HTML = (
    ("<section>", "<div>"),
    ("</section>", "</div>"),
    ("<title>", "<h1>"),
    ("</title>", "</h1>"),
    ("<para><itemizedlist>", "<ul>"),
    ("</itemizedlist></para>", "</ul>"),
    ("<para><orderedlist>", "<ol>"),
    ("</orderedlist></para>", "</ol>"),
    ("<listitem><para>", "<li>"),
    ("</para></listitem>", "</li>"),
    ("<itemizedlist>", "<ul>"),
    ("</itemizedlist>", "</ul>"),
    ("<orderedlist>", "<ol>"),
    ("</orderedlist>", "</ol>"),
    ("<listitem>", "<li>"),
    ("</listitem>", "</li>"),
    ("<para>", "<p>"),
    ("</para>", "</p>"),
    ("<emphasis>", "<b>"),
    ("</emphasis>", "</b>"),
    ("<subscript>", "<sub>"),
    ("</subscript>", "</sub>"),
    ("<superscript>", "<sup>"),
    ("</superscript>", "</sup>"),
    ("<literalLayout>", "<pre>"),
    ("</literalLayout>", "</pre>"),
)

_TAG = re.compile(r"<[^<>]*>")
_HTML_TAG = re.compile(r"^<(/?)([a-zA-Z][a-zA-Z0-9]*)\s*>$")
_HTML_ANCHOR = re.compile(r'^<a\s+href\s*=\s*"([^"]*)"[^>]*>$', re.IGNORECASE)
_ULINK_CITETITLE = re.compile(
    r'<ulink\s+url="(.*?)"\s*>\s*<citetitle>(.*?)</citetitle>\s*</ulink>', re.DOTALL
)
_ULINK = re.compile(r'<ulink\s+url="(.*?)"\s*>(.*?)</ulink>', re.DOTALL)
_OUTER_ELEMENT = re.compile(r"^\s*<([\w:.-]+)(?:\s[^>]*)?>(.*)</\1\s*>\s*$", re.DOTALL)
_EMPTY_ELEMENT = re.compile(r"^\s*<[\w:.-]+(?:\s[^>]*)?/>\s*$")
_PARAGRAPH = re.compile(r"<p>(.*?)</p>", re.DOTALL)
_PREFORMATTED = re.compile(r"(<pre>.*?</pre>)", re.DOTALL)
_WHITESPACE = re.compile(r"\s+")


def replace_each(text: str, replacements: tuple[tuple[str, str], ...]) -> str:
    """Replaces all search strings in a single left-to-right pass.

    At each position the earliest listed search string that matches
    wins. Replaced text is never searched again.

    Args:
        text: Input text.
        replacements: Ordered ``(search, replacement)`` pairs.

    Returns:
        The text with all replacements applied.
    """
    lookup: dict[str, str] = {}
    for search, replacement in replacements:
        lookup.setdefault(search, replacement)
    pattern = "|".join(re.escape(search) for search, _ in replacements)
    return re.sub(pattern, lambda match: lookup[match.group(0)], text)


def escape_once(text: str) -> str:
    """Escapes ``&``, ``<`` and ``>`` without double-escaping entities.

    Args:
        text: Raw or partially escaped text.

    Returns:
        Escaped text; ``escape_once(escape_once(x)) == escape_once(x)``.
    """
    out: list[str] = []
    i = 0
    length = len(text)
    while i < length:
        char = text[i]
        if char == "&":
            window = text[i : i + _MAX_ENTITY_LENGTH]
            entity = next((e for e in ESCAPED_ENTITIES if window.startswith(e)), None)
            if entity:
                out.append(entity)
                i += len(entity)
                continue
            out.append("&amp;")
        elif char == "<":
            out.append("&lt;")
        elif char == ">":
            out.append("&gt;")
        else:
            out.append(char)
        i += 1
    return "".join(out)


def _storage_tags(token: str) -> tuple[str, bool, str] | None:
    """Maps an HTML tag token to ``(name, closing, docbook)``.

    Returns:
        None if the tag is not part of the vocabulary.
    """
    anchor = _HTML_ANCHOR.match(token)
    if anchor:
        url = escape_once(anchor.group(1))
        return "a", False, f'<ulink url="{url}"><citetitle>'

    match = _HTML_TAG.match(token)
    if match is None:
        return None
    closing = match.group(1) == "/"
    name = match.group(2).lower()
    if name == "a" and closing:
        return "a", True, "</citetitle></ulink>"
    if name not in HTML_TO_DOCBOOK:
        return None
    opening, closing_tag = HTML_TO_DOCBOOK[name]
    return name, closing, closing_tag if closing else opening


def to_storage_markup(text: str | None) -> str | None:
    """Converts display markup (HTML subset) to DocBook markup.

    Args:
        text: HTML subset text.

    Returns:
        DocBook text, or None if text is None.
    """
    if text is None:
        return None

    output: list[str] = []
    # (tag name, index into output, original token)
    open_tags: list[tuple[str, int, str]] = []
    position = 0

    for match in _TAG.finditer(text):
        output.append(escape_once(text[position : match.start()]))
        position = match.end()
        token = match.group(0)

        converted = _storage_tags(token)
        if converted is None:
            output.append(escape_once(token))
            continue

        name, closing, docbook = converted
        if not closing:
            open_tags.append((name, len(output), token))
            output.append(docbook)
        elif open_tags and open_tags[-1][0] == name:
            open_tags.pop()
            output.append(docbook)
        else:
            output.append(escape_once(token))

    output.append(escape_once(text[position:]))

    # Unbalanced opening tags fall back to text
    for _name, index, token in open_tags:
        output[index] = escape_once(token)

    return "".join(output)


def to_display_markup(text: str | None) -> str | None:
    """Converts DocBook markup to display markup (HTML subset).

    Args:
        text: DocBook text, typically the inner XML of a free-text element.

    Returns:
        HTML subset text, or None if text is None.
    """
    if text is None:
        return None
    result = links_to_display(text)
    result = _ULINK.sub(r'<a href="\1">\2</a>', result)
    return replace_each(result, DOCBOOK_TO_HTML)


def links_to_display(text: str) -> str:
    """Converts ``ulink``/``citetitle`` links to anchors, leaving other tags."""
    return _ULINK_CITETITLE.sub(r'<a href="\1">\2</a>', text)


def unwrap_element(xml: str) -> str:
    """Strips the outer element tags from a serialized XML element.

    Args:
        xml: Serialized element, e.g. ``<abstract><para>x</para></abstract>``.

    Returns:
        The trimmed inner content, e.g. ``<para>x</para>``.
    """
    if _EMPTY_ELEMENT.match(xml):
        return ""
    match = _OUTER_ELEMENT.match(xml)
    if match is None:
        return xml.strip()
    return match.group(2).strip()


def to_plain_text(text: str | None) -> str | None:
    """Strips markup and entities from display markup.

    Whitespace is collapsed everywhere except inside ``<pre>`` blocks.
    """
    if text is None:
        return None
    parts = []
    for part in _PREFORMATTED.split(text):
        stripped = _TAG.sub("", part)
        if not part.startswith("<pre>"):
            stripped = _WHITESPACE.sub(" ", stripped)
        parts.append(html.unescape(stripped))
    return "".join(parts).strip()


def paragraphs(text: str | None) -> list[str]:
    """Splits display markup into non-empty plain-text paragraphs."""
    if not text:
        return []
    blocks = _PARAGRAPH.findall(text) or [text]
    result = []
    for block in blocks:
        plain = to_plain_text(block)
        if plain:
            result.append(plain)
    return result
