"""Exception hierarchy for the import/export pipeline.

Schema diagnostics are not exceptions; see ``cfrs.validation``.
"""

from __future__ import annotations


class CFRSError(ValueError):
    """Base class for hard pipeline failures."""


class ParseError(CFRSError):
    """Input text is not well-formed in its claimed format."""

    def __init__(self, fmt: str, detail: str):
        super().__init__(f"Invalid {fmt}: {detail}")
        self.format = fmt
        self.detail = detail


class PreconditionViolation(CFRSError):
    """Parsed input lacks a field the importer cannot do without."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class RenderError(CFRSError):
    """An exporter received a document it cannot represent."""


class UnsupportedFormatError(CFRSError):
    """No importer or exporter is registered for the requested format."""


class SchemaCompileError(CFRSError):
    """A schema document cannot be turned into a validator."""


__all__ = [
    "CFRSError",
    "ParseError",
    "PreconditionViolation",
    "RenderError",
    "SchemaCompileError",
    "UnsupportedFormatError",
]
