# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Dataset licenses and license shorthand expansion."""

import logging
import re
from enum import Enum

logger = logging.getLogger(__name__)

_URL_IN_TEXT = re.compile(r"https?://[^\s\"'<>]+", re.IGNORECASE)
_URL_PREFIX = re.compile(r"^(?:https?://)?(?:www\.)?", re.IGNORECASE)


class License(Enum):
    """Licenses supported for dataset publication."""

    CC0_1_0 = "CC0-1.0"
    CC_BY_4_0 = "CC-BY-4.0"
    CC_BY_NC_4_0 = "CC-BY-NC-4.0"
    UNSPECIFIED = "UNSPECIFIED"
    UNSUPPORTED = "UNSUPPORTED"

    @property
    def url(self) -> str | None:
        """Legal code URL, None for the placeholder values."""
        return _LICENSE_URLS.get(self)

    @property
    def title(self) -> str | None:
        """Human readable license title."""
        return _LICENSE_TITLES.get(self)

    @property
    def is_concrete(self) -> bool:
        """Whether this is an actual license rather than a placeholder."""
        return self in _LICENSE_URLS

    @classmethod
    def from_text(cls, text: str | None) -> "License | None":
        """Finds the license referenced by an acronym, URL or sentence.

        Args:
            text: License acronym (``CC-BY-4.0``), legal code URL, or a
                rights statement containing such a URL.

        Returns:
            The matching license, ``UNSUPPORTED`` for unrecognized
            non-blank text, or None for blank text.
        """
        if text is None or not text.strip():
            return None
        value = text.strip()

        by_acronym = _BY_ACRONYM.get(value.upper())
        if by_acronym is None:
            by_acronym = cls.__members__.get(value.upper())
        if by_acronym is not None:
            return by_acronym

        by_url = _BY_URL.get(_normalize_url(value))
        if by_url is not None:
            return by_url

        for url in _URL_IN_TEXT.findall(value):
            found = _BY_URL.get(_normalize_url(url.rstrip(".,;)")))
            if found is not None:
                return found

        # Acronyms embedded in a sentence, longest first
        upper = value.upper()
        for acronym in sorted(_BY_ACRONYM, key=len, reverse=True):
            if re.search(rf"(?<![\w-]){re.escape(acronym)}(?![\w-])", upper):
                return _BY_ACRONYM[acronym]

        logger.debug("Unsupported license text: %r", value)
        return cls.UNSUPPORTED


_LICENSE_URLS = {
    License.CC0_1_0: "http://creativecommons.org/publicdomain/zero/1.0/legalcode",
    License.CC_BY_4_0: "http://creativecommons.org/licenses/by/4.0/legalcode",
    License.CC_BY_NC_4_0: "http://creativecommons.org/licenses/by-nc/4.0/legalcode",
}

_LICENSE_TITLES = {
    License.CC0_1_0: "Public Domain (CC0 1.0)",
    License.CC_BY_4_0: "Creative Commons Attribution (CC-BY) 4.0 License",
    License.CC_BY_NC_4_0: (
        "Creative Commons Attribution Non Commercial (CC-BY-NC) 4.0 License"
    ),
}

# Full rights statements in DocBook form, keyed by license
LICENSE_STATEMENTS = {
    License.CC0_1_0: (
        "To the extent possible under law, the publisher has waived all rights "
        "to these data and has dedicated them to the "
        f'<ulink url="{_LICENSE_URLS[License.CC0_1_0]}">'
        f"<citetitle>{_LICENSE_TITLES[License.CC0_1_0]}</citetitle></ulink>. "
        "Users may copy, modify, distribute and use the work, including for "
        "commercial purposes, without restriction."
    ),
    License.CC_BY_4_0: (
        "This work is licensed under a "
        f'<ulink url="{_LICENSE_URLS[License.CC_BY_4_0]}">'
        f"<citetitle>{_LICENSE_TITLES[License.CC_BY_4_0]}</citetitle></ulink>."
    ),
    License.CC_BY_NC_4_0: (
        "This work is licensed under a "
        f'<ulink url="{_LICENSE_URLS[License.CC_BY_NC_4_0]}">'
        f"<citetitle>{_LICENSE_TITLES[License.CC_BY_NC_4_0]}</citetitle></ulink>."
    ),
}


def _normalize_url(url: str) -> str:
    """Reduces a license URL to a scheme- and suffix-free key."""
    value = _URL_PREFIX.sub("", url.strip().lower()).rstrip("/")
    if value.endswith("/legalcode"):
        value = value[: -len("/legalcode")]
    return value.rstrip("/")


_BY_ACRONYM = {lic.value: lic for lic in License if lic.is_concrete}
_BY_URL = {_normalize_url(url): lic for lic, url in _LICENSE_URLS.items()}


def expand_license_shorthand(text: str | None) -> str | None:
    """Expands a license acronym to its full DocBook rights statement.

    Args:
        text: Rights text, possibly a bare acronym such as ``cc-by-4.0``.

    Returns:
        The canonical statement for a known acronym, otherwise the input
        unchanged.
    """
    if text is None:
        return None
    lic = _BY_ACRONYM.get(text.strip().upper())
    if lic is None:
        return text
    return LICENSE_STATEMENTS[lic]
