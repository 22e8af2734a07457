"""Schema compilation and document validation."""

from __future__ import annotations

from .formats import (
    DATE_FORMAT,
    FormatPredicate,
    FormatRegistry,
    default_formats,
    is_email,
    is_resume_date,
    is_uri,
    pattern_predicate,
)
from .validator import (
    CompiledValidator,
    ValidationError,
    ValidationReport,
    compile_schema,
    default_validator,
    is_valid_resume,
    validate_resume,
)

__all__ = [
    "DATE_FORMAT",
    "CompiledValidator",
    "FormatPredicate",
    "FormatRegistry",
    "ValidationError",
    "ValidationReport",
    "compile_schema",
    "default_formats",
    "default_validator",
    "is_email",
    "is_resume_date",
    "is_uri",
    "is_valid_resume",
    "pattern_predicate",
    "validate_resume",
]
