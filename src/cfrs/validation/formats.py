"""String-format predicates keyed by the format names used in the schema."""

from __future__ import annotations

import re
from typing import Callable, Iterator, Mapping
from urllib.parse import urlsplit

import pendulum

FormatPredicate = Callable[[str], bool]

DATE_FORMAT = "cfrs-date"

FULL_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
YEAR_MONTH_RE = re.compile(r"([0-9]{4})-([0-9]{2})")
EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


def is_resume_date(value: str) -> bool:
    """Accept ``YYYY-MM-DD`` or ``YYYY-MM`` naming a real calendar date."""
    match = FULL_DATE_RE.fullmatch(value)
    if match:
        year, month, day = (int(part) for part in match.groups())
    else:
        match = YEAR_MONTH_RE.fullmatch(value)
        if not match:
            return False
        year, month = (int(part) for part in match.groups())
        day = 1
    try:
        pendulum.date(year, month, day)
    except ValueError:
        return False
    return True


def is_uri(value: str) -> bool:
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if not parts.scheme or not SCHEME_RE.match(parts.scheme):
        return False
    if any(ch.isspace() for ch in value):
        return False
    return bool(parts.netloc or parts.path)


def is_email(value: str) -> bool:
    return bool(EMAIL_RE.fullmatch(value))


def pattern_predicate(pattern: str) -> FormatPredicate:
    """Build a predicate from a regular expression (used for configured formats)."""
    compiled = re.compile(pattern)

    def _check(value: str) -> bool:
        return bool(compiled.search(value))

    return _check


class FormatRegistry(Mapping[str, FormatPredicate]):
    """Mapping from schema format name to a pure predicate."""

    def __init__(self, predicates: Mapping[str, FormatPredicate] | None = None):
        self._predicates: dict[str, FormatPredicate] = dict(predicates or {})

    def register(self, name: str, predicate: FormatPredicate) -> "FormatRegistry":
        """Return a new registry with ``name`` bound to ``predicate``."""
        updated = dict(self._predicates)
        updated[name] = predicate
        return FormatRegistry(updated)

    def __getitem__(self, name: str) -> FormatPredicate:
        return self._predicates[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._predicates)

    def __len__(self) -> int:
        return len(self._predicates)


def default_formats() -> FormatRegistry:
    return FormatRegistry(
        {
            DATE_FORMAT: is_resume_date,
            "uri": is_uri,
            "email": is_email,
        }
    )


__all__ = [
    "DATE_FORMAT",
    "FormatPredicate",
    "FormatRegistry",
    "default_formats",
    "is_email",
    "is_resume_date",
    "is_uri",
    "pattern_predicate",
]
