"""Find in-text citations and reference-list entries, and bind citations to sentences."""

from typing import Optional

from paperhand_common import get_logger, instrument_function
from paperhand_contracts import CitationMapping, CitationResult, ReferenceStripResult

from paperhand_text.citation_patterns import (
    DEFAULT_CITATION_PATTERNS,
    CitationPattern,
    find_reference_section,
    is_heading_line,
    is_valid_reference,
)
from paperhand_text.fingerprint import FingerprintExtractor
from paperhand_text.sentences import generate_sentence_id, split_into_sentences

logger = get_logger(__name__)


def extract_in_text_citations(
    text: str, patterns: tuple[CitationPattern, ...] = DEFAULT_CITATION_PATTERNS
) -> tuple[list[str], dict[str, list[str]]]:
    """Run every pattern category over the text.

    Returns:
        Tuple of (deduplicated sorted citations, raw matches per category)
    """
    by_pattern: dict[str, list[str]] = {}
    found: set[str] = set()
    for pattern in patterns:
        matches = pattern.find_all(text)
        by_pattern[pattern.name] = matches
        found.update(m.strip() for m in matches)
    found.discard("")
    return sorted(found), by_pattern


def extract_full_references(text: str) -> list[str]:
    """Collect reference-list lines, in source order.

    Scans from the reference heading onward, or the whole document when no
    heading exists.
    """
    lines = text.split("\n")
    start = find_reference_section(lines)
    if start is None:
        logger.debug("reference_section_not_found")
        start = 0

    references = []
    for line in lines[start:]:
        trimmed = line.strip()
        if not trimmed or is_heading_line(trimmed):
            continue
        if is_valid_reference(trimmed):
            references.append(trimmed)
    return references


def main_text(text: str) -> str:
    """Text before the reference heading, or the whole text."""
    lines = text.split("\n")
    start = find_reference_section(lines)
    if start is None:
        return text
    return "\n".join(lines[:start])


def _occurrences(haystack: str, needle: str) -> list[tuple[int, int]]:
    spans = []
    pos = haystack.find(needle)
    while pos != -1:
        spans.append((pos, pos + len(needle)))
        pos = haystack.find(needle, pos + 1)
    return spans


def find_citations_in_sentence(sentence: str, citations: list[str]) -> list[str]:
    """Citations contained in a sentence, in order of first appearance.

    A citation whose every occurrence lies inside a longer citation of the
    same sentence is not reported on its own: "2020" inside
    "(Smith et al., 2020)" or "1" inside "[1]".

    Example:
        >>> find_citations_in_sentence("Shown before [2] and [1].", ["1", "2", "[1]", "[2]"])
        ['[2]', '[1]']
    """
    spans = {c: _occurrences(sentence, c) for c in citations if c}
    spans = {c: s for c, s in spans.items() if s}

    def _enclosed(citation: str, span: tuple[int, int]) -> bool:
        start, end = span
        return any(
            len(other) > len(citation) and o_start <= start and end <= o_end
            for other, other_spans in spans.items()
            for o_start, o_end in other_spans
        )

    kept = [
        c for c, occ in spans.items() if not all(_enclosed(c, span) for span in occ)
    ]
    return sorted(kept, key=lambda c: (spans[c][0][0], -len(c)))


def create_citation_mappings(
    text: str,
    citations: list[str],
    fingerprints: Optional[FingerprintExtractor] = None,
) -> list[CitationMapping]:
    """Bind citations to the sentences of the main text that contain them."""
    fingerprints = fingerprints or FingerprintExtractor()
    mappings = []
    for index, sentence in enumerate(split_into_sentences(main_text(text))):
        found = find_citations_in_sentence(sentence, citations)
        if not found:
            continue
        fp = fingerprints.fingerprint(sentence)
        mappings.append(
            CitationMapping(
                original_sentence=sentence.strip(),
                citations=found,
                keywords=fp.keywords,
                concepts=fp.concepts,
                sentence_id=generate_sentence_id(sentence, index),
            )
        )
    return mappings


@instrument_function("extract_citations")
def extract_citations(
    text: str,
    patterns: tuple[CitationPattern, ...] = DEFAULT_CITATION_PATTERNS,
    fingerprints: Optional[FingerprintExtractor] = None,
) -> CitationResult:
    """Extract in-text citations, full references and sentence mappings.

    Args:
        text: Normalized full text of a paper
        patterns: Citation pattern categories (extend to support new formats)
        fingerprints: Fingerprint extractor for the mappings

    Returns:
        CitationResult

    Example:
        >>> result = extract_citations("Curcumin reduces inflammation [1].")
        >>> result.citation_mappings[0].citations
        ['[1]']
    """
    logger.info("citation_extraction_started", text_length=len(text))

    citations, by_pattern = extract_in_text_citations(text, patterns)
    references = extract_full_references(text)
    mappings = create_citation_mappings(text, citations, fingerprints)

    logger.info(
        "citation_extraction_completed",
        in_text_citations=len(citations),
        full_references=len(references),
        mappings=len(mappings),
    )

    return CitationResult(
        in_text_citations=citations,
        full_references=references,
        citation_patterns=by_pattern,
        citation_mappings=mappings,
    )


@instrument_function("remove_references_section")
def remove_references_section(text: str) -> ReferenceStripResult:
    """Cut the reference list and everything after it.

    In-text citations stay intact. Text without a reference heading is
    returned unchanged.
    """
    lines = text.split("\n")
    start = find_reference_section(lines)
    if start is None:
        logger.info("reference_section_not_found", text_length=len(text))
        return ReferenceStripResult(
            cleaned_text=text, size_before=len(text), size_after=len(text)
        )

    cleaned = "\n".join(lines[:start]).strip()
    result = ReferenceStripResult(
        cleaned_text=cleaned, size_before=len(text), size_after=len(cleaned)
    )
    logger.info(
        "reference_section_removed",
        original_lines=len(lines),
        removed_lines=len(lines) - start,
        reduction_percent=result.reduction_percent,
    )
    return result
