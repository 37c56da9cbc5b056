# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Rule table binding EML (GBIF profile) documents onto :class:`Eml`."""

from ..binding import (
    CallMethod,
    CaptureMarkup,
    ObjectCreate,
    Rule,
    RuleTable,
    SetAttributeProperty,
    SetNext,
    SetProperty,
)
from ..binding.rules import Target
from ..model.eml import (
    Address,
    Agent,
    BibliographicCitationSet,
    BoundingBox,
    Collection,
    Eml,
    GeospatialCoverage,
    JgtiCuratorialUnit,
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
    UserId,
)
from ..utils import calendar_date, parse_float, parse_int, schema_datetime

DATASET = "eml/dataset"
GBIF = "eml/additionalMetadata/metadata/gbif"


def _agent_rules(prefix: str, link: Target) -> tuple[Rule, ...]:
    """Rules for an agent element (creator, contact, personnel, ...)."""
    address = f"{prefix}/address"
    user_id = f"{prefix}/userId"
    return (
        ObjectCreate(prefix, Agent),
        SetProperty(f"{prefix}/individualName/givenName", "first_name"),
        SetProperty(f"{prefix}/individualName/surName", "last_name"),
        SetProperty(f"{prefix}/organizationName", "organisation"),
        CallMethod(f"{prefix}/positionName", Agent.add_position),
        CallMethod(f"{prefix}/phone", Agent.add_phone),
        CallMethod(f"{prefix}/electronicMailAddress", Agent.add_email),
        CallMethod(f"{prefix}/onlineUrl", Agent.add_homepage),
        SetProperty(f"{prefix}/role", "role"),
        ObjectCreate(address, Address),
        SetProperty(f"{address}/city", "city"),
        SetProperty(f"{address}/administrativeArea", "province"),
        SetProperty(f"{address}/postalCode", "postal_code"),
        SetProperty(f"{address}/country", "country"),
        CallMethod(f"{address}/deliveryPoint", Address.add_delivery_point),
        SetNext(address, "address"),
        ObjectCreate(user_id, UserId),
        SetAttributeProperty(user_id, "directory", "directory"),
        SetProperty(user_id, "identifier"),
        SetNext(user_id, Agent.add_user_id),
        SetNext(prefix, link),
    )


def _dataset_rules() -> tuple[Rule, ...]:
    return (
        SetAttributeProperty("eml", "metadata_language", "xml:lang"),
        SetAttributeProperty("eml", "package_id", "packageId"),
        CallMethod(f"{DATASET}/alternateIdentifier", Eml.add_alternate_identifier),
        CallMethod(f"{DATASET}/title", Eml.set_title, attribute="xml:lang"),
        SetProperty(f"{DATASET}/shortName", "short_name"),
        SetProperty(f"{DATASET}/language", "language"),
        SetProperty(f"{DATASET}/pubDate", "pub_date", calendar_date),
        SetAttributeProperty(f"{DATASET}/publisher", "publisher_id", "id"),
        SetProperty(
            f"{DATASET}/publisher/organizationName", "publisher_organization_name"
        ),
        # Free-text fields keep their DocBook structure
        CaptureMarkup(f"{DATASET}/abstract", "abstract"),
        CaptureMarkup(f"{DATASET}/introduction", "introduction"),
        CaptureMarkup(f"{DATASET}/gettingStarted", "getting_started"),
        CaptureMarkup(f"{DATASET}/acknowledgements", "acknowledgements"),
        CaptureMarkup(f"{DATASET}/purpose", "purpose"),
        CaptureMarkup(
            f"{DATASET}/intellectualRights/para",
            Eml.set_intellectual_rights,
            display=False,
        ),
        CaptureMarkup(
            f"{DATASET}/methods/methodStep/description", Eml.add_method_step
        ),
        SetProperty(f"{DATASET}/additionalInfo/para", "additional_info"),
        SetProperty(
            f"{DATASET}/methods/sampling/studyExtent/description/para", "study_extent"
        ),
        SetProperty(
            f"{DATASET}/methods/sampling/samplingDescription/para", "sample_description"
        ),
        SetProperty(
            f"{DATASET}/methods/qualityControl/description/para", "quality_control"
        ),
        CallMethod(
            f"{DATASET}/distribution/online/url",
            Eml.set_distribution,
            attribute="function",
        ),
        SetProperty(
            f"{DATASET}/maintenance/description/para", "update_frequency_description"
        ),
        SetProperty(
            f"{DATASET}/maintenance/maintenanceUpdateFrequency",
            "update_frequency",
            MaintenanceUpdateFrequency.from_identifier,
        ),
    )


def _agents_rules() -> tuple[Rule, ...]:
    return (
        *_agent_rules(f"{DATASET}/creator", Eml.add_creator),
        *_agent_rules(f"{DATASET}/metadataProvider", Eml.add_metadata_provider),
        *_agent_rules(f"{DATASET}/contact", Eml.add_contact),
        *_agent_rules(f"{DATASET}/associatedParty", Eml.add_associated_party),
    )


def _coverage_rules() -> tuple[Rule, ...]:
    keyword_set = f"{DATASET}/keywordSet"
    geographic = f"{DATASET}/coverage/geographicCoverage"
    bbox = f"{geographic}/boundingCoordinates"
    temporal = f"{DATASET}/coverage/temporalCoverage"
    dates = f"{temporal}/rangeOfDates"
    taxonomic = f"{DATASET}/coverage/taxonomicCoverage"
    taxon = f"{taxonomic}/taxonomicClassification"
    return (
        ObjectCreate(keyword_set, KeywordSet),
        CallMethod(f"{keyword_set}/keyword", KeywordSet.add),
        SetProperty(f"{keyword_set}/keywordThesaurus", "keyword_thesaurus"),
        SetNext(keyword_set, Eml.add_keyword_set),
        ObjectCreate(geographic, GeospatialCoverage),
        SetProperty(f"{geographic}/geographicDescription", "description"),
        ObjectCreate(bbox, BoundingBox),
        SetProperty(f"{bbox}/westBoundingCoordinate", "min_x", parse_float),
        SetProperty(f"{bbox}/eastBoundingCoordinate", "max_x", parse_float),
        SetProperty(f"{bbox}/northBoundingCoordinate", "max_y", parse_float),
        SetProperty(f"{bbox}/southBoundingCoordinate", "min_y", parse_float),
        SetNext(bbox, "bounding_coordinates"),
        SetNext(geographic, Eml.add_geospatial_coverage),
        ObjectCreate(temporal, TemporalCoverage),
        CallMethod(
            f"{temporal}/singleDateTime/calendarDate",
            TemporalCoverage.set_single_date,
            converter=calendar_date,
        ),
        SetProperty(f"{dates}/beginDate/calendarDate", "start_date", calendar_date),
        SetProperty(f"{dates}/endDate/calendarDate", "end_date", calendar_date),
        SetNext(temporal, Eml.add_temporal_coverage),
        ObjectCreate(taxonomic, TaxonomicCoverage),
        SetProperty(f"{taxonomic}/generalTaxonomicCoverage", "description"),
        ObjectCreate(taxon, TaxonKeyword),
        SetProperty(f"{taxon}/taxonRankName", "rank"),
        SetProperty(f"{taxon}/taxonRankValue", "scientific_name"),
        SetProperty(f"{taxon}/commonName", "common_name"),
        SetNext(taxon, TaxonomicCoverage.add_taxon_keyword),
        SetNext(taxonomic, Eml.add_taxonomic_coverage),
    )


def _project_rules() -> tuple[Rule, ...]:
    project = f"{DATASET}/project"
    award = f"{project}/award"
    related = f"{project}/relatedProject"
    study_area = f"{project}/studyAreaDescription"
    descriptor = f"{study_area}/descriptor"
    return (
        ObjectCreate(project, Project),
        SetAttributeProperty(project, "identifier", "id"),
        SetProperty(f"{project}/title", "title"),
        *_agent_rules(f"{project}/personnel", Project.add_personnel),
        SetProperty(f"{project}/abstract/para", "description"),
        SetProperty(f"{project}/funding/para", "funding"),
        ObjectCreate(award, ProjectAward),
        SetProperty(f"{award}/funderName", "funder_name"),
        CallMethod(f"{award}/funderIdentifier", ProjectAward.add_funder_identifier),
        SetProperty(f"{award}/awardNumber", "award_number"),
        SetProperty(f"{award}/title", "title"),
        SetProperty(f"{award}/awardUrl", "award_url"),
        SetNext(award, Project.add_award),
        ObjectCreate(related, Project),
        SetAttributeProperty(related, "identifier", "id"),
        SetProperty(f"{related}/title", "title"),
        SetProperty(f"{related}/abstract/para", "description"),
        *_agent_rules(f"{related}/personnel", Project.add_personnel),
        SetNext(related, Project.add_related_project),
        ObjectCreate(study_area, StudyAreaDescription),
        SetAttributeProperty(
            descriptor, "name", "name", StudyAreaDescriptor.from_string
        ),
        SetAttributeProperty(
            descriptor, "citable_classification_system", "citableClassificationSystem"
        ),
        SetProperty(f"{descriptor}/descriptorValue", "descriptor_value"),
        SetNext(study_area, "study_area_description"),
        SetProperty(
            f"{project}/designDescription/description/para", "design_description"
        ),
        SetNext(project, "project"),
    )


def _gbif_rules() -> tuple[Rule, ...]:
    bibliography = f"{GBIF}/bibliography"
    physical = f"{GBIF}/physical"
    collection = f"{GBIF}/collection"
    jgti = f"{GBIF}/jgtiCuratorialUnit"
    living = f"{GBIF}/livingTimePeriod"
    formation = f"{GBIF}/formationPeriod"
    return (
        SetProperty(f"{GBIF}/dateStamp", "date_stamp", schema_datetime),
        SetProperty(f"{GBIF}/hierarchyLevel", "hierarchy_level"),
        CallMethod(f"{GBIF}/citation", Eml.set_citation, attribute="identifier"),
        SetProperty(f"{GBIF}/resourceLogoUrl", "logo_url"),
        CallMethod(
            f"{GBIF}/specimenPreservationMethod", Eml.add_specimen_preservation_method
        ),
        ObjectCreate(bibliography, BibliographicCitationSet),
        CallMethod(
            f"{bibliography}/citation",
            BibliographicCitationSet.add,
            attribute="identifier",
        ),
        SetNext(bibliography, "bibliographic_citation_set"),
        ObjectCreate(living, TemporalCoverage),
        SetProperty(living, "living_time_period"),
        SetNext(living, Eml.add_temporal_coverage),
        ObjectCreate(formation, TemporalCoverage),
        SetProperty(formation, "formation_period"),
        SetNext(formation, Eml.add_temporal_coverage),
        ObjectCreate(physical, PhysicalData),
        SetProperty(f"{physical}/objectName", "name"),
        SetProperty(f"{physical}/characterEncoding", "charset"),
        SetProperty(
            f"{physical}/dataFormat/externallyDefinedFormat/formatName", "format"
        ),
        SetProperty(
            f"{physical}/dataFormat/externallyDefinedFormat/formatVersion",
            "format_version",
        ),
        SetProperty(f"{physical}/distribution/online/url", "distribution_url"),
        SetNext(physical, Eml.add_physical_data),
        ObjectCreate(collection, Collection),
        SetProperty(f"{collection}/parentCollectionIdentifier", "parent_collection_id"),
        SetProperty(f"{collection}/collectionIdentifier", "collection_id"),
        SetProperty(f"{collection}/collectionName", "collection_name"),
        SetNext(collection, Eml.add_collection),
        ObjectCreate(jgti, JgtiCuratorialUnit),
        SetProperty(f"{jgti}/jgtiUnitType", "unit_type"),
        SetProperty(f"{jgti}/jgtiUnitRange/beginRange", "range_start", parse_int),
        SetProperty(f"{jgti}/jgtiUnitRange/endRange", "range_end", parse_int),
        SetProperty(f"{jgti}/jgtiUnits", "range_mean", parse_int),
        SetAttributeProperty(
            f"{jgti}/jgtiUnits", "uncertainty_measure", "uncertaintyMeasure", parse_int
        ),
        SetNext(jgti, Eml.add_jgti_curatorial_unit),
    )


EML_RULES = RuleTable(
    name="eml",
    root_factory=Eml,
    rules=(
        *_dataset_rules(),
        *_agents_rules(),
        *_coverage_rules(),
        *_project_rules(),
        *_gbif_rules(),
    ),
)
