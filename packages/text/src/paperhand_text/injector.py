"""Re-attach citations from the original text to a rewritten text.

Each rewritten sentence is fingerprinted and scored against every mapping
from the original text:

    score = 0.3 * keyword_overlap + 0.7 * concept_overlap

where each overlap is ``matches / max(len(a), len(b))``. The best mapping
scoring strictly above 0.6 donates up to three citations. On equal scores
the earlier mapping wins.
"""

from typing import Optional

from paperhand_common import get_logger, instrument_function
from paperhand_contracts import CitationMapping, InjectionResult

from paperhand_text.citation_patterns import INJECTED_CITATION_PATTERNS
from paperhand_text.fingerprint import Fingerprint, FingerprintExtractor
from paperhand_text.sentences import split_into_sentences

logger = get_logger(__name__)

INJECTION_THRESHOLD = 0.6
MAX_INJECTED_CITATIONS = 3
KEYWORD_WEIGHT = 0.3
CONCEPT_WEIGHT = 0.7


def _overlap_ratio(a: list[str], b: list[str]) -> float:
    denominator = max(len(a), len(b))
    if denominator == 0:
        return 0.0
    return len(set(a) & set(b)) / denominator


def calculate_similarity_score(fingerprint: Fingerprint, mapping: CitationMapping) -> float:
    """Weighted keyword/concept overlap between a sentence and a mapping.

    Example:
        >>> fp = Fingerprint(keywords=[], concepts=["curcumin"])
        >>> m = CitationMapping(original_sentence="...", concepts=["curcumin"])
        >>> calculate_similarity_score(fp, m)
        0.7
    """
    if not mapping.keywords and not mapping.concepts:
        return 0.0
    return KEYWORD_WEIGHT * _overlap_ratio(
        fingerprint.keywords, mapping.keywords
    ) + CONCEPT_WEIGHT * _overlap_ratio(fingerprint.concepts, mapping.concepts)


def find_best_mapping(
    fingerprint: Fingerprint,
    mappings: list[CitationMapping],
    threshold: float = INJECTION_THRESHOLD,
) -> Optional[CitationMapping]:
    """Highest-scoring mapping above the threshold; first wins on ties."""
    best: Optional[CitationMapping] = None
    best_score = 0.0
    for mapping in mappings:
        score = calculate_similarity_score(fingerprint, mapping)
        if score > best_score and score > threshold:
            best, best_score = mapping, score
    return best


def add_citations_to_sentence(sentence: str, citations: list[str]) -> str:
    """Append citations before the final period.

    Example:
        >>> add_citations_to_sentence("Turmeric helps.", ["[1]", "[2]"])
        'Turmeric helps [1], [2].'
    """
    if not citations:
        return sentence
    clean = sentence.strip()
    if clean.endswith("."):
        clean = clean[:-1]
    return f"{clean} {', '.join(citations)}."


def count_injected_citations(text: str) -> int:
    """Count citation-shaped markers in a text (diagnostics only)."""
    return sum(len(p.findall(text)) for p in INJECTED_CITATION_PATTERNS)


def _inject(
    simplified_text: str,
    mappings: list[CitationMapping],
    fingerprints: Optional[FingerprintExtractor],
) -> tuple[str, int]:
    if not mappings:
        logger.warning("no_citation_mappings", text_length=len(simplified_text))
        return simplified_text, 0

    fingerprints = fingerprints or FingerprintExtractor()
    sentences = split_into_sentences(simplified_text)

    enhanced = []
    injected = 0
    for sentence in sentences:
        best = find_best_mapping(fingerprints.fingerprint(sentence), mappings)
        if best is None or not best.citations:
            enhanced.append(sentence)
            continue
        citations = best.citations[:MAX_INJECTED_CITATIONS]
        enhanced.append(add_citations_to_sentence(sentence, citations))
        injected += 1
        logger.debug(
            "citation_injected",
            sentence_preview=sentence[:50],
            sentence_id=best.sentence_id,
            citations=citations,
        )

    result = " ".join(enhanced)
    logger.info(
        "citation_injection_completed",
        sentences_processed=len(sentences),
        injected_sentences=injected,
        citations_in_output=count_injected_citations(result),
    )
    return result, injected


@instrument_function("inject_citations")
def inject_citations(
    simplified_text: str,
    mappings: list[CitationMapping],
    fingerprints: Optional[FingerprintExtractor] = None,
) -> str:
    """Insert citations into a rewritten text.

    Args:
        simplified_text: Rewritten text without citations
        mappings: Mappings extracted from the original text
        fingerprints: Extractor used for the rewritten sentences; pass one
            with concept aliases when the rewrite is in another language

    Returns:
        Text with citations appended to matching sentences. Sentences are
        rejoined with single spaces. An empty mapping list returns the input
        unchanged.
    """
    text, _ = _inject(simplified_text, mappings, fingerprints)
    return text


def inject_citations_with_stats(
    simplified_text: str,
    mappings: list[CitationMapping],
    fingerprints: Optional[FingerprintExtractor] = None,
) -> InjectionResult:
    """Like inject_citations, but also report lengths and injected sentences."""
    text, injected = _inject(simplified_text, mappings, fingerprints)
    return InjectionResult(
        enhanced_text=text,
        original_length=len(simplified_text),
        enhanced_length=len(text),
        injected_sentences=injected,
    )
