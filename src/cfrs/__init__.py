"""Normalize, validate and export résumés in the CloudFlow Resume Schema."""

from __future__ import annotations

__version__ = "1.0.0"

__all__ = ["__version__"]
