"""Canonical résumé model, bundled schema contract and app configuration."""

from __future__ import annotations

from .resume import (
    EXTENSION_PREFIX,
    SCHEMA_URI,
    Award,
    Basics,
    CanonicalResume,
    Certificate,
    CustomSection,
    EducationEntry,
    Interest,
    Language,
    Location,
    Profile,
    Project,
    Publication,
    Reference,
    Skill,
    VolunteerEntry,
    WorkEntry,
    has_name,
    is_extension_field,
    load_schema_document,
    merge_updates,
    top_level_fields,
)

__all__ = [
    "EXTENSION_PREFIX",
    "SCHEMA_URI",
    "Award",
    "Basics",
    "CanonicalResume",
    "Certificate",
    "CustomSection",
    "EducationEntry",
    "Interest",
    "Language",
    "Location",
    "Profile",
    "Project",
    "Publication",
    "Reference",
    "Skill",
    "VolunteerEntry",
    "WorkEntry",
    "has_name",
    "is_extension_field",
    "load_schema_document",
    "merge_updates",
    "top_level_fields",
]
