"""Scientific text core for the paperhand system.

This package provides:
- Normalization of PDF extraction output into clean full text
- In-text citation and reference-list detection
- Sentence-to-citation mappings with keyword/concept fingerprints
- Citation re-attachment for rewritten text
- Bibliography ordering for answers with [n] citations
"""

__version__ = "1.0.0"

from paperhand_text.citation_patterns import (
    DEFAULT_CITATION_PATTERNS,
    CitationPattern,
    contains_citation,
    find_reference_section,
)

from paperhand_text.normalizer import (
    collect_all_strings,
    normalize_extract,
)

from paperhand_text.sentences import (
    generate_sentence_id,
    split_into_sentences,
)

from paperhand_text.fingerprint import (
    Fingerprint,
    FingerprintExtractor,
    load_concept_aliases,
)

from paperhand_text.citation_extractor import (
    extract_citations,
    remove_references_section,
)

from paperhand_text.injector import (
    count_injected_citations,
    inject_citations,
    inject_citations_with_stats,
)

from paperhand_text.bibliography import (
    build_bibliography,
    format_bibliography,
    format_reference,
    parse_citation_order,
)

from paperhand_text.report import format_citation_report

__all__ = [
    # Patterns
    "CitationPattern",
    "DEFAULT_CITATION_PATTERNS",
    "contains_citation",
    "find_reference_section",
    # Normalizer
    "normalize_extract",
    "collect_all_strings",
    # Sentences and fingerprints
    "split_into_sentences",
    "generate_sentence_id",
    "Fingerprint",
    "FingerprintExtractor",
    "load_concept_aliases",
    # Citations
    "extract_citations",
    "remove_references_section",
    "inject_citations",
    "inject_citations_with_stats",
    "count_injected_citations",
    # Bibliography
    "parse_citation_order",
    "build_bibliography",
    "format_reference",
    "format_bibliography",
    # Report
    "format_citation_report",
]
