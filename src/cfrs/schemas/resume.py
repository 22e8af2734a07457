"""Pydantic view of the canonical résumé document (CFRS)."""

from __future__ import annotations

import json
from importlib import resources
from typing import Any, Mapping, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

SCHEMA_URI = "https://cloudflowresume.dev/schemas/cfrs-v1.0.0.json"
SCHEMA_RESOURCE = "cfrs-v1.0.0.schema.json"
EXTENSION_PREFIX = "x_"


class _Record(BaseModel):
    """Known fields plus an opaque bag of additional named values."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any, info: ValidationInfo) -> Any:
        # YAML and JSON hand over bare numbers (years, phone numbers) for text fields.
        if not _accepts_text(cls.model_fields[info.field_name].annotation):
            return value
        if isinstance(value, list):
            return [_as_text(item) for item in value]
        return _as_text(value)

    def extensions(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


def _accepts_text(annotation: Any) -> bool:
    return annotation is str or any(_accepts_text(arg) for arg in get_args(annotation))


def _as_text(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class Location(_Record):
    address: str | None = None
    postalCode: str | None = None
    city: str | None = None
    countryCode: str | None = None
    region: str | None = None


class Profile(_Record):
    network: str | None = None
    username: str | None = None
    url: str | None = None


class Basics(_Record):
    """Identity and contact block; only ``name`` is mandatory."""

    name: str
    label: str | None = None
    image: str | None = None
    email: str | None = None
    phone: str | None = None
    url: str | None = None
    summary: str | None = None
    location: Location | None = None
    profiles: list[Profile] | None = None
    x_cfrs_pronouns: str | None = None
    x_cfrs_locale: str | None = None
    x_cfrs_variants: dict[str, Any] | None = None


class WorkEntry(_Record):
    name: str | None = None
    position: str | None = None
    url: str | None = None
    startDate: str | None = None
    endDate: str | None = None
    summary: str | None = None
    highlights: list[str] | None = None
    x_cfrs_keywords: list[str] | None = None
    x_cfrs_employment_type: str | None = None
    x_cfrs_remote_eligible: bool | None = None


class VolunteerEntry(_Record):
    organization: str | None = None
    position: str | None = None
    url: str | None = None
    startDate: str | None = None
    endDate: str | None = None
    summary: str | None = None
    highlights: list[str] | None = None


class EducationEntry(_Record):
    institution: str | None = None
    url: str | None = None
    area: str | None = None
    studyType: str | None = None
    startDate: str | None = None
    endDate: str | None = None
    score: str | None = None
    courses: list[str] | None = None
    x_cfrs_academic_honors: list[str] | None = None


class Award(_Record):
    title: str | None = None
    date: str | None = None
    awarder: str | None = None
    summary: str | None = None


class Certificate(_Record):
    name: str | None = None
    date: str | None = None
    issuer: str | None = None
    url: str | None = None
    x_cfrs_expiry_date: str | None = None
    x_cfrs_credential_id: str | None = None


class Publication(_Record):
    name: str | None = None
    publisher: str | None = None
    releaseDate: str | None = None
    url: str | None = None
    summary: str | None = None
    x_cfrs_co_authors: list[str] | None = None
    x_cfrs_citation_count: int | None = None


class Skill(_Record):
    name: str | None = None
    level: str | None = None
    keywords: list[str] | None = None
    x_cfrs_years_of_experience: float | None = None
    x_cfrs_skill_category: str | None = None


class Language(_Record):
    language: str | None = None
    fluency: str | None = None
    x_cfrs_cefr_level: str | None = None


class Interest(_Record):
    name: str | None = None
    keywords: list[str] | None = None


class Reference(_Record):
    name: str | None = None
    reference: str | None = None
    x_cfrs_contact_email: str | None = None
    x_cfrs_contact_phone: str | None = None


class Project(_Record):
    name: str | None = None
    description: str | None = None
    highlights: list[str] | None = None
    keywords: list[str] | None = None
    startDate: str | None = None
    endDate: str | None = None
    url: str | None = None
    roles: list[str] | None = None
    entity: str | None = None
    type: str | None = None
    x_cfrs_featured: bool | None = None


class CustomSection(_Record):
    """Section the canonical schema does not model; items stay opaque."""

    sectionTitle: str
    sectionType: str
    items: list[dict[str, Any]] = Field(default_factory=list)


class CanonicalResume(_Record):
    """Typed view over a canonical document.

    The document itself travels through the pipeline as a plain mapping so
    that schema-invalid values survive import and reach the validator. This
    model is built from it whenever typed access is needed, and dumps back
    to the same mapping.
    """

    schema_ref: str = Field(default=SCHEMA_URI, alias="$schema")
    basics: Basics
    work: list[WorkEntry] | None = None
    volunteer: list[VolunteerEntry] | None = None
    education: list[EducationEntry] | None = None
    awards: list[Award] | None = None
    certificates: list[Certificate] | None = None
    publications: list[Publication] | None = None
    skills: list[Skill] | None = None
    languages: list[Language] | None = None
    interests: list[Interest] | None = None
    references: list[Reference] | None = None
    projects: list[Project] | None = None
    x_cfrs_custom_sections: list[CustomSection] | None = None

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "CanonicalResume":
        return cls.model_validate(dict(document))

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


def top_level_fields() -> frozenset[str]:
    """Return the top-level keys the canonical model knows about."""
    return frozenset(
        field.alias or name for name, field in CanonicalResume.model_fields.items()
    )


def is_extension_field(key: str) -> bool:
    return key.startswith(EXTENSION_PREFIX)


def has_name(document: Any) -> bool:
    """Check the ``basics.name`` invariant without running the full schema."""
    if not isinstance(document, Mapping):
        return False
    basics = document.get("basics")
    if not isinstance(basics, Mapping):
        return False
    name = basics.get("name")
    return isinstance(name, str) and bool(name.strip())


def merge_updates(document: Mapping[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow-merge top-level fields into a copy of ``document``."""
    merged = dict(document)
    merged.update(updates)
    return merged


def load_schema_document() -> dict[str, Any]:
    """Load the bundled CFRS JSON-Schema document."""
    source = resources.files(__package__).joinpath(SCHEMA_RESOURCE)
    with source.open("r", encoding="utf-8") as handle:
        return json.load(handle)
