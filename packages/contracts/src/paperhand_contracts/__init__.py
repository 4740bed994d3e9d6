"""Paperhand Contracts - Pure Pydantic schemas.

Version: 1.0.0

This package contains ONLY Pydantic schemas with no business logic.
Dependencies: pydantic only (no OpenTelemetry, no logging).
"""

from paperhand_contracts.models import (
    # Bibliography
    BibliographyRequest,
    BibliographyResult,
    SourceItem,
    # Citations
    CitationMapping,
    CitationResult,
    InjectionRequest,
    InjectionResult,
    ReferenceStripResult,
    # Normalization
    NormalizationStats,
    NormalizedText,
    NormalizeOptions,
    NormalizeRequest,
    Page,
)

__version__ = "1.0.0"

__all__ = [
    # Normalization
    "NormalizeOptions",
    "NormalizeRequest",
    "NormalizationStats",
    "NormalizedText",
    "Page",
    # Citations
    "CitationMapping",
    "CitationResult",
    "InjectionRequest",
    "InjectionResult",
    "ReferenceStripResult",
    # Bibliography
    "SourceItem",
    "BibliographyRequest",
    "BibliographyResult",
]
