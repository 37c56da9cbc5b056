# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Bound document models for the supported metadata dialects."""

from .basic import BasicMetadata, has_content
from .dublin_core import DublinCoreDocument
from .eml import (
    Address,
    Agent,
    BibliographicCitationSet,
    BoundingBox,
    Citation,
    Collection,
    Eml,
    GeospatialCoverage,
    JgtiCuratorialUnit,
    JgtiCuratorialUnitType,
    KeywordSet,
    MaintenanceUpdateFrequency,
    PhysicalData,
    Project,
    ProjectAward,
    StudyAreaDescription,
    StudyAreaDescriptor,
    TaxonKeyword,
    TaxonomicCoverage,
    TemporalCoverage,
    TemporalCoverageType,
    UserId,
)
from .versioning import DEFAULT_VERSION, Version, VersionedDocument

__all__ = [
    "BasicMetadata",
    "has_content",
    "DublinCoreDocument",
    "Eml",
    "Address",
    "Agent",
    "BibliographicCitationSet",
    "BoundingBox",
    "Citation",
    "Collection",
    "GeospatialCoverage",
    "JgtiCuratorialUnit",
    "JgtiCuratorialUnitType",
    "KeywordSet",
    "MaintenanceUpdateFrequency",
    "PhysicalData",
    "Project",
    "ProjectAward",
    "StudyAreaDescription",
    "StudyAreaDescriptor",
    "TaxonKeyword",
    "TaxonomicCoverage",
    "TemporalCoverage",
    "TemporalCoverageType",
    "UserId",
    "DEFAULT_VERSION",
    "Version",
    "VersionedDocument",
]
