"""Order and render the reference list of an answer with [n] citations.

Sources are listed in the order their numbers are first cited; sources
provided but never cited follow in ascending order.
"""

import re

from paperhand_common import get_logger
from paperhand_contracts import BibliographyResult, SourceItem

logger = get_logger(__name__)

_NUMBERED_CITATION = re.compile(r"\[(\d+)\]")


def parse_citation_order(answer_text: str) -> list[int]:
    """Distinct positive [n] numbers in order of first occurrence.

    Example:
        >>> parse_citation_order("A [2], b [1], c [2] and [0].")
        [2, 1]
    """
    order: list[int] = []
    for match in _NUMBERED_CITATION.finditer(answer_text):
        number = int(match.group(1))
        if number > 0 and number not in order:
            order.append(number)
    return order


def _gap_warnings(numbers: list[int]) -> list[str]:
    """One warning per run of missing numbers in 1..max(numbers).

    Example:
        >>> _gap_warnings([1, 3, 7])
        ['source number 2 missing', 'source numbers 4-6 missing']
    """
    warnings = []
    previous = 0
    for n in numbers:
        if n > previous + 1:
            first, last = previous + 1, n - 1
            if first == last:
                warnings.append(f"source number {first} missing")
            else:
                warnings.append(f"source numbers {first}-{last} missing")
        previous = max(previous, n)
    return warnings


def build_bibliography(
    answer_text: str, sources: list[SourceItem]
) -> tuple[list[SourceItem], list[str]]:
    """Order sources by first citation.

    Args:
        answer_text: Answer text containing [n] citations
        sources: Numbered source catalog

    Returns:
        Tuple of (ordered sources, warnings). Warnings cover duplicate source
        numbers, runs of missing numbers in 1..max(number) and citations
        without a source.
    """
    if not sources:
        return [], ["no sources provided"]

    warnings: list[str] = []
    by_number: dict[int, SourceItem] = {}
    for source in sources:
        if source.number in by_number:
            warnings.append(f"duplicate source number {source.number}, using the last one")
        by_number[source.number] = source

    numbers = sorted(by_number)
    warnings.extend(_gap_warnings(numbers))

    order = parse_citation_order(answer_text)
    ordered: list[SourceItem] = []
    for n in order:
        if n in by_number:
            ordered.append(by_number[n])
        else:
            warnings.append(f"citation [{n}] has no matching source")

    cited = set(order)
    ordered.extend(by_number[n] for n in numbers if n not in cited)
    return ordered, warnings


def format_reference(source: SourceItem) -> str:
    """Render one source as ``Authors (Year). Title. Journal. doi:... pmid:...``.

    Example:
        >>> format_reference(SourceItem(number=1, title="Curcumin review", year=2020))
        'Unknown Authors (2020). Curcumin review.'
    """
    authors = ", ".join(source.authors) or "Unknown Authors"
    year = str(source.year) if source.year > 0 else "n.d."
    title = source.title or "Untitled"

    identifiers = []
    if source.doi:
        identifiers.append(f"doi:{source.doi}")
    if source.pmid:
        identifiers.append(f"pmid:{source.pmid}")
    tail = f" {' '.join(identifiers)}" if identifiers else ""

    if source.journal:
        return f"{authors} ({year}). {title}. {source.journal}.{tail}"
    return f"{authors} ({year}). {title}.{tail}"


def format_bibliography(answer_text: str, sources: list[SourceItem]) -> BibliographyResult:
    """Order sources by citation and render each one.

    Example:
        >>> sources = [SourceItem(number=1, title="A"), SourceItem(number=2, title="B")]
        >>> format_bibliography("See [2].", sources).formatted
        ['Unknown Authors (n.d.). B.', 'Unknown Authors (n.d.). A.']
    """
    ordered, warnings = build_bibliography(answer_text, sources)
    if warnings:
        logger.warning("bibliography_warnings", warnings=warnings)

    logger.info(
        "bibliography_formatted",
        sources=len(sources),
        ordered=len(ordered),
        warnings=len(warnings),
    )
    return BibliographyResult(
        ordered_sources=ordered,
        formatted=[format_reference(s) for s in ordered],
        warnings=warnings,
    )
