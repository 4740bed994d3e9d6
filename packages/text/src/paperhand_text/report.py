"""Markdown rendering of a citation extraction result."""

from paperhand_contracts import CitationResult


def format_citation_report(result: CitationResult) -> str:
    """Render extracted citations, references, counts and mappings as markdown.

    Args:
        result: Citation extraction result

    Returns:
        Markdown report
    """
    lines = ["## Extracted in-text citations", ""]
    lines.extend(result.in_text_citations)

    lines.extend(["", "## Full references", ""])
    for reference in result.full_references:
        lines.extend([reference, ""])

    lines.extend(
        [
            "## Statistics",
            "",
            f"- In-text citations: {result.citation_count}",
            f"- Full references: {result.reference_count}",
            f"- Citation mappings: {len(result.citation_mappings)}",
        ]
    )

    if result.citation_mappings:
        lines.extend(["", "## Citation mappings", ""])
        for i, mapping in enumerate(result.citation_mappings, 1):
            lines.extend(
                [
                    f"### Mapping {i} (ID: {mapping.sentence_id})",
                    f"**Original:** {mapping.original_sentence}",
                    f"**Citations:** {', '.join(mapping.citations)}",
                    f"**Keywords:** {', '.join(mapping.keywords)}",
                    f"**Concepts:** {', '.join(mapping.concepts)}",
                    "",
                ]
            )

    return "\n".join(lines).rstrip() + "\n"
