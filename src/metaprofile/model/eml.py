# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""EML dataset document model.

The classes here are plain data holders filled in by the EML rule table.
Free-text fields (abstract, introduction, method steps, rights, ...) hold
display markup; use :func:`metaprofile.markup.to_storage_markup` to get
their DocBook form.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from lxml import etree, html

from ..licenses import License, expand_license_shorthand
from ..markup import paragraphs, to_display_markup, to_storage_markup
from ..utils import trim_to_none
from .versioning import VersionedDocument

logger = logging.getLogger(__name__)

ENGLISH_LANGUAGE_CODES = frozenset({"en", "eng"})
DEFAULT_ASSOCIATED_PARTY_ROLE = "AssociatedParty"
DEFAULT_PERSONNEL_ROLE = "pointOfContact"

_SUBJECT_SEPARATORS = (";", "|", ",")


def _first_link(markup: str | None) -> html.HtmlElement | None:
    """Returns the first anchor element in an HTML fragment."""
    if not markup:
        return None
    try:
        fragment = html.fragment_fromstring(markup, create_parent=True)
    except etree.ParserError as e:
        logger.debug("Cannot parse rights markup: %s", e)
        return None
    return next(fragment.iter("a"), None)


class MaintenanceUpdateFrequency(Enum):
    """Maintenance update frequencies, valued by their EML identifier."""

    ANNUALLY = "annually"
    AS_NEEDED = "asNeeded"
    BIANNUALLY = "biannually"
    CONTINUALLY = "continually"
    DAILY = "daily"
    IRREGULAR = "irregular"
    MONTHLY = "monthly"
    NOT_PLANNED = "notPlanned"
    WEEKLY = "weekly"
    # Spelling as in the EML schema
    UNKNOWN = "unkown"
    OTHER_MAINTENANCE_PERIOD = "otherMaintenancePeriod"

    @property
    def period_in_days(self) -> int | None:
        """Days between updates, None when there is no fixed period."""
        return _UPDATE_PERIODS.get(self)

    @classmethod
    def from_identifier(
        cls, identifier: str | None
    ) -> "MaintenanceUpdateFrequency | None":
        """Case-insensitive lookup by EML identifier.

        Returns:
            The frequency, or None if the identifier is unknown.
        """
        if identifier is None:
            return None
        key = identifier.strip().lower()
        if key == "unknown":
            return cls.UNKNOWN
        for frequency in cls:
            if frequency.value.lower() == key:
                return frequency
        logger.debug("Unknown maintenance update frequency: %r", identifier)
        return None


_UPDATE_PERIODS = {
    MaintenanceUpdateFrequency.ANNUALLY: 365,
    MaintenanceUpdateFrequency.BIANNUALLY: 182,
    MaintenanceUpdateFrequency.MONTHLY: 30,
    MaintenanceUpdateFrequency.WEEKLY: 7,
    MaintenanceUpdateFrequency.DAILY: 1,
}


class TemporalCoverageType(Enum):
    """Kinds of temporal coverage, derived from the populated fields."""

    SINGLE_DATE = "singleDate"
    DATE_RANGE = "dateRange"
    FORMATION_PERIOD = "formationPeriod"
    LIVING_TIME_PERIOD = "livingTimePeriod"


class StudyAreaDescriptor(Enum):
    """Study area descriptor names."""

    GENERIC = "generic"
    ELEVATION = "elevation"
    CLIMATE = "climate"
    SUBSTRATE = "substrate"
    STAND_HISTORY = "stand.history"
    SPECIES = "species"
    TREATMENT = "treatment"

    @classmethod
    def from_string(cls, name: str | None) -> "StudyAreaDescriptor":
        """Case-insensitive lookup, defaulting to GENERIC."""
        if name:
            key = name.strip().lower()
            for descriptor in cls:
                if descriptor.value == key:
                    return descriptor
        return cls.GENERIC


class JgtiCuratorialUnitType(Enum):
    """How a JGTI curatorial unit count is expressed."""

    COUNT_RANGE = "countRange"
    COUNT_WITH_UNCERTAINTY = "countWithUncertainty"


@dataclass
class Address:
    """Postal address of an agent."""

    delivery_points: list[str] = field(default_factory=list)
    city: str | None = None
    province: str | None = None
    postal_code: str | None = None
    country: str | None = None

    def add_delivery_point(self, point: str) -> None:
        if point:
            self.delivery_points.append(point)

    @property
    def formatted(self) -> str:
        """Single line representation, empty parts omitted."""
        parts = [
            *self.delivery_points,
            self.postal_code,
            self.city,
            self.province,
            self.country,
        ]
        return ", ".join(part for part in parts if part)


@dataclass
class UserId:
    """Identifier of an agent within a directory, e.g. an ORCID."""

    directory: str | None = None
    identifier: str | None = None


@dataclass
class Agent:
    """A person or organisation in some role on the dataset."""

    first_name: str | None = None
    last_name: str | None = None
    organisation: str | None = None
    positions: list[str] = field(default_factory=list)
    phones: list[str] = field(default_factory=list)
    emails: list[str] = field(default_factory=list)
    homepages: list[str] = field(default_factory=list)
    role: str | None = None
    address: Address | None = None
    user_ids: list[UserId] = field(default_factory=list)

    def add_position(self, position: str) -> None:
        if position:
            self.positions.append(position)

    def add_phone(self, phone: str) -> None:
        if phone:
            self.phones.append(phone)

    def add_email(self, email: str) -> None:
        if email:
            self.emails.append(email)

    def add_homepage(self, homepage: str) -> None:
        if homepage:
            self.homepages.append(homepage)

    def add_user_id(self, user_id: UserId) -> None:
        self.user_ids.append(user_id)

    @property
    def full_name(self) -> str | None:
        """``first last``, or None when both are missing."""
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name.strip() or None

    @property
    def display_name(self) -> str | None:
        """Full name, falling back to the organisation."""
        return self.full_name or self.organisation

    @property
    def email(self) -> str | None:
        return self.emails[0] if self.emails else None

    @property
    def is_empty(self) -> bool:
        """True if the agent carries no identifying information."""
        return not (
            self.first_name
            or self.last_name
            or self.organisation
            or self.positions
            or self.emails
            or self.phones
            or self.homepages
            or self.user_ids
            or (self.address is not None and self.address.formatted)
        )


@dataclass
class KeywordSet:
    """Keywords, optionally drawn from a thesaurus."""

    keywords: list[str] = field(default_factory=list)
    keyword_thesaurus: str | None = None

    def add(self, keyword: str) -> None:
        if keyword:
            self.keywords.append(keyword)


@dataclass
class BoundingBox:
    """Geographic bounding box in decimal degrees."""

    min_x: float | None = None
    max_x: float | None = None
    min_y: float | None = None
    max_y: float | None = None


@dataclass
class GeospatialCoverage:
    description: str | None = None
    bounding_coordinates: BoundingBox | None = None


@dataclass
class TemporalCoverage:
    """A single date, a date range, or a named geological/living period."""

    start_date: date | None = None
    end_date: date | None = None
    living_time_period: str | None = None
    formation_period: str | None = None

    def set_single_date(self, value: date | None) -> None:
        self.start_date = value
        self.end_date = value

    @property
    def type(self) -> TemporalCoverageType | None:
        if self.formation_period:
            return TemporalCoverageType.FORMATION_PERIOD
        if self.living_time_period:
            return TemporalCoverageType.LIVING_TIME_PERIOD
        if self.start_date is not None and self.end_date is not None:
            if self.start_date == self.end_date:
                return TemporalCoverageType.SINGLE_DATE
            return TemporalCoverageType.DATE_RANGE
        if self.start_date is not None:
            return TemporalCoverageType.SINGLE_DATE
        return None

    def correct_date_order(self) -> None:
        """Swaps start and end date if they are reversed."""
        if (
            self.start_date is not None
            and self.end_date is not None
            and self.start_date > self.end_date
        ):
            self.start_date, self.end_date = self.end_date, self.start_date


@dataclass
class TaxonKeyword:
    scientific_name: str | None = None
    rank: str | None = None
    common_name: str | None = None


@dataclass
class TaxonomicCoverage:
    """A taxonomic coverage with its list of taxa."""

    description: str | None = None
    taxon_keywords: list[TaxonKeyword] = field(default_factory=list)

    def add_taxon_keyword(self, keyword: TaxonKeyword) -> None:
        self.taxon_keywords.append(keyword)

    def add_taxon_keywords(self, names: str) -> None:
        """Adds taxa from a delimited list of scientific names.

        The delimiter is a line break if present, else ``|``, else ``;``.
        """
        if "\n" in names:
            delimiter = "\n"
        elif "|" in names:
            delimiter = "|"
        else:
            delimiter = ";"
        for name in names.split(delimiter):
            name = name.strip()
            if name:
                self.taxon_keywords.append(TaxonKeyword(scientific_name=name))


@dataclass
class StudyAreaDescription:
    name: StudyAreaDescriptor = StudyAreaDescriptor.GENERIC
    citable_classification_system: str = "false"
    descriptor_value: str | None = None


@dataclass
class ProjectAward:
    funder_name: str | None = None
    funder_identifiers: list[str] = field(default_factory=list)
    award_number: str | None = None
    title: str | None = None
    award_url: str | None = None

    def add_funder_identifier(self, identifier: str) -> None:
        if identifier:
            self.funder_identifiers.append(identifier)


@dataclass
class Project:
    """Research project the dataset was produced in."""

    identifier: str | None = None
    title: str | None = None
    personnel: list[Agent] = field(default_factory=list)
    description: str | None = None
    funding: str | None = None
    study_area_description: StudyAreaDescription | None = None
    design_description: str | None = None
    awards: list[ProjectAward] = field(default_factory=list)
    related_projects: list["Project"] = field(default_factory=list)

    def add_personnel(self, agent: Agent) -> None:
        if agent.role is None:
            agent.role = DEFAULT_PERSONNEL_ROLE
        self.personnel.append(agent)

    def add_award(self, award: ProjectAward) -> None:
        self.awards.append(award)

    def add_related_project(self, project: "Project") -> None:
        self.related_projects.append(project)


@dataclass
class PhysicalData:
    """An external resource distributing (part of) the dataset."""

    name: str | None = None
    charset: str | None = None
    format: str | None = None
    format_version: str | None = None
    distribution_url: str | None = None


@dataclass
class Collection:
    parent_collection_id: str | None = None
    collection_id: str | None = None
    collection_name: str | None = None


@dataclass
class JgtiCuratorialUnit:
    """Count of curatorial units, either a range or a mean with uncertainty."""

    unit_type: str | None = None
    range_start: int | None = None
    range_end: int | None = None
    range_mean: int | None = None
    uncertainty_measure: int | None = None

    @property
    def type(self) -> JgtiCuratorialUnitType:
        if self.uncertainty_measure is not None:
            return JgtiCuratorialUnitType.COUNT_WITH_UNCERTAINTY
        return JgtiCuratorialUnitType.COUNT_RANGE


@dataclass
class Citation:
    citation: str | None = None
    identifier: str | None = None


@dataclass
class BibliographicCitationSet:
    bibliographic_citations: list[Citation] = field(default_factory=list)

    def add(self, citation: str, identifier: str | None = None) -> None:
        if citation:
            self.bibliographic_citations.append(Citation(citation, identifier))


@dataclass
class Eml(VersionedDocument):
    """An EML (GBIF profile) dataset description."""

    metadata_language: str | None = None
    title: str | None = None
    title_language: str | None = None
    short_name: str | None = None
    language: str | None = None
    alternate_identifiers: list[str] = field(default_factory=list)

    # Display markup fields
    abstract: str | None = None
    introduction: str | None = None
    getting_started: str | None = None
    acknowledgements: str | None = None
    purpose: str | None = None
    intellectual_rights: str | None = None
    method_steps: list[str] = field(default_factory=list)

    additional_info: str | None = None
    study_extent: str | None = None
    sample_description: str | None = None
    quality_control: str | None = None
    distribution_url: str | None = None
    distribution_download_url: str | None = None
    update_frequency: MaintenanceUpdateFrequency | None = None
    update_frequency_description: str | None = None
    citation: Citation | None = None
    specimen_preservation_methods: list[str] = field(default_factory=list)
    logo_url: str | None = None
    hierarchy_level: str | None = None
    date_stamp: datetime | None = None
    pub_date: date | None = None
    bibliographic_citation_set: BibliographicCitationSet | None = None
    publisher_id: str | None = None
    publisher_organization_name: str | None = None

    creators: list[Agent] = field(default_factory=list)
    metadata_providers: list[Agent] = field(default_factory=list)
    contacts: list[Agent] = field(default_factory=list)
    associated_parties: list[Agent] = field(default_factory=list)

    keyword_sets: list[KeywordSet] = field(default_factory=list)
    geospatial_coverages: list[GeospatialCoverage] = field(default_factory=list)
    temporal_coverages: list[TemporalCoverage] = field(default_factory=list)
    taxonomic_coverages: list[TaxonomicCoverage] = field(default_factory=list)
    project: Project | None = None
    physical_data: list[PhysicalData] = field(default_factory=list)
    collections: list[Collection] = field(default_factory=list)
    jgti_curatorial_units: list[JgtiCuratorialUnit] = field(default_factory=list)

    def set_title(self, title: str, language: str | None = None) -> None:
        """Sets the title; an English title replaces any other language.

        Args:
            title: The title text.
            language: The ``xml:lang`` of the title element, if any.
        """
        is_english = language is not None and language.lower() in ENGLISH_LANGUAGE_CODES
        current_is_english = (
            self.title_language is not None
            and self.title_language.lower() in ENGLISH_LANGUAGE_CODES
        )
        if self.title is None or (is_english and not current_is_english):
            self.title = title
            self.title_language = language

    def add_alternate_identifier(self, identifier: str) -> None:
        if identifier:
            self.alternate_identifiers.append(identifier)

    def add_method_step(self, step: str) -> None:
        if step:
            self.method_steps.append(step)

    def add_specimen_preservation_method(self, method: str) -> None:
        if method:
            self.specimen_preservation_methods.append(method)

    def set_distribution(self, url: str, function: str | None = None) -> None:
        """Routes an online distribution URL by its ``function`` attribute.

        ``download`` URLs become the download URL, anything else (usually
        ``information``) the dataset homepage.
        """
        if function is not None and function.strip().lower() == "download":
            self.distribution_download_url = url
        else:
            self.distribution_url = url

    def set_citation(self, text: str, identifier: str | None = None) -> None:
        self.citation = Citation(trim_to_none(text), trim_to_none(identifier))

    def set_intellectual_rights(self, text: str | None) -> None:
        """Stores a rights statement given as DocBook, markup or acronym.

        License acronyms such as ``CC-BY-4.0`` are expanded to the full
        statement first.
        """
        if text is None or not text.strip():
            self.intellectual_rights = None
            return
        expanded = expand_license_shorthand(text.strip())
        self.intellectual_rights = to_display_markup(expanded)

    @property
    def intellectual_rights_xml(self) -> str | None:
        """The rights statement as DocBook markup."""
        return to_storage_markup(self.intellectual_rights)

    @property
    def license_url(self) -> str | None:
        """Target of the first link in the rights statement."""
        link = _first_link(self.intellectual_rights)
        return trim_to_none(link.get("href")) if link is not None else None

    @property
    def license_title(self) -> str | None:
        """Text of the first link in the rights statement."""
        link = _first_link(self.intellectual_rights)
        return trim_to_none(link.text_content()) if link is not None else None

    @property
    def license(self) -> License | None:
        return License.from_text(self.license_url or self.intellectual_rights)

    # Agents

    def add_creator(self, agent: Agent) -> None:
        self.creators.append(agent)

    def add_metadata_provider(self, agent: Agent) -> None:
        self.metadata_providers.append(agent)

    def add_contact(self, agent: Agent) -> None:
        self.contacts.append(agent)

    def add_associated_party(self, agent: Agent) -> None:
        if agent.role is None:
            agent.role = DEFAULT_ASSOCIATED_PARTY_ROLE
        self.associated_parties.append(agent)

    # Coverages and keywords

    def add_keyword_set(self, keyword_set: KeywordSet) -> None:
        self.keyword_sets.append(keyword_set)

    def add_geospatial_coverage(self, coverage: GeospatialCoverage) -> None:
        self.geospatial_coverages.append(coverage)

    def add_temporal_coverage(self, coverage: TemporalCoverage) -> None:
        coverage.correct_date_order()
        self.temporal_coverages.append(coverage)

    def add_taxonomic_coverage(self, coverage: TaxonomicCoverage) -> None:
        self.taxonomic_coverages.append(coverage)

    def add_physical_data(self, physical: PhysicalData) -> None:
        self.physical_data.append(physical)

    def add_collection(self, collection: Collection) -> None:
        self.collections.append(collection)

    def add_jgti_curatorial_unit(self, unit: JgtiCuratorialUnit) -> None:
        self.jgti_curatorial_units.append(unit)

    @property
    def keywords(self) -> list[str]:
        return [kw for keyword_set in self.keyword_sets for kw in keyword_set.keywords]

    def set_subject(self, subject: str | None) -> None:
        """Replaces all keyword sets by one set parsed from a delimited string.

        The separator is whichever of ``;``, ``|`` and ``,`` occurs most,
        ties resolved in that order.
        """
        self.keyword_sets = []
        if not subject or not subject.strip():
            return
        counts = {sep: subject.count(sep) for sep in _SUBJECT_SEPARATORS}
        separator = max(_SUBJECT_SEPARATORS, key=lambda sep: counts[sep])
        keyword_set = KeywordSet()
        for keyword in subject.split(separator):
            keyword_set.add(keyword.strip())
        self.add_keyword_set(keyword_set)

    # Basic metadata view

    @property
    def subject(self) -> str | None:
        """All keywords joined by ``"; "``."""
        keywords = self.keywords
        return "; ".join(keywords) if keywords else None

    @property
    def description(self) -> list[str]:
        """Plain-text paragraphs of the abstract."""
        return paragraphs(self.abstract)

    @property
    def rights(self) -> str | None:
        return self.intellectual_rights

    @property
    def homepage(self) -> str | None:
        return self.distribution_url

    @property
    def published(self) -> date | None:
        return self.pub_date

    @property
    def identifier(self) -> str | None:
        return self.guid

    @property
    def source_id(self) -> str | None:
        return self.alternate_identifiers[0] if self.alternate_identifiers else None

    @property
    def resource_creator(self) -> Agent | None:
        """First creator, else first contact."""
        if self.creators:
            return self.creators[0]
        return self.contacts[0] if self.contacts else None

    @property
    def resource_publisher(self) -> Agent | None:
        """First metadata provider, else first contact."""
        if self.metadata_providers:
            return self.metadata_providers[0]
        return self.contacts[0] if self.contacts else None

    @property
    def creator_name(self) -> str | None:
        agent = self.resource_creator
        return agent.display_name if agent else None

    @property
    def creator_email(self) -> str | None:
        agent = self.resource_creator
        return agent.email if agent else None

    @property
    def publisher_name(self) -> str | None:
        agent = self.resource_publisher
        return agent.display_name if agent else None

    @property
    def publisher_email(self) -> str | None:
        agent = self.resource_publisher
        return agent.email if agent else None
