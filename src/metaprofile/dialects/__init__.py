# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Rule tables of the supported metadata dialects."""

from collections.abc import Mapping
from types import MappingProxyType

from ..binding import RuleTable
from ..sniffer import Dialect
from .dublin_core import DC_RULES
from .eml import EML_RULES

# Candidate bindings in resolution priority order, richest first
CANDIDATES: tuple[tuple[Dialect, RuleTable], ...] = (
    (Dialect.EML, EML_RULES),
    (Dialect.DC, DC_RULES),
)

TABLES: Mapping[Dialect, RuleTable] = MappingProxyType(dict(CANDIDATES))

__all__ = ["CANDIDATES", "TABLES", "DC_RULES", "EML_RULES"]
