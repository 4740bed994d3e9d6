"""Output formatters for CLI results.

Provides two output formats:
- json: Machine-parseable JSON using the snake_case field names of the models
- report: Human-readable markdown for citation extraction results
"""

import json
from enum import Enum

from pydantic import BaseModel

from paperhand_contracts import BibliographyResult, CitationResult
from paperhand_text import format_citation_report


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    report = "report"


def format_json(model: BaseModel) -> str:
    """Format a result model as indented JSON.

    Computed fields (``citation_count``, ``size_reduction``, ...) are included.

    Args:
        model: Any paperhand result model

    Returns:
        JSON string
    """
    return json.dumps(model.model_dump(mode="json"), indent=2, ensure_ascii=False)


def format_citation_result(result: CitationResult, fmt: OutputFormat) -> str:
    """Format a citation extraction result as JSON or a markdown report."""
    if fmt == OutputFormat.report:
        return format_citation_report(result).rstrip("\n")
    return format_json(result)


def format_bibliography_text(result: BibliographyResult) -> str:
    """Format an ordered bibliography as a numbered plain-text list.

    Warnings are appended as a trailing section so they are not lost when the
    list is pasted somewhere.
    """
    if not result.formatted:
        lines = ["No sources."]
    else:
        lines = [f"[{i}] {entry}" for i, entry in enumerate(result.formatted, 1)]

    if result.warnings:
        lines.append("")
        lines.append("Warnings:")
        lines.extend(f"  - {w}" for w in result.warnings)

    return "\n".join(lines)
