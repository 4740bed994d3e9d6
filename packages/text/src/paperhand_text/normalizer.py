"""Normalize heterogeneous PDF extraction output into clean full text.

The extract is any nested JSON value. When it exposes a non-empty ``pages``
list, each page is cleaned on its own and header/footer lines are detected
across pages; otherwise all leaf strings are merged and a repeated-line
fallback stands in for header/footer detection.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Optional

from paperhand_common import NoTextExtractedError, get_logger, instrument_function
from paperhand_contracts import NormalizationStats, NormalizedText, NormalizeOptions, Page

from paperhand_text import cleaning
from paperhand_text.citation_patterns import contains_citation

logger = get_logger(__name__)

EDGE_LINES = 3


@dataclass
class _Tally:
    """Counters and warnings accumulated over one normalization call."""

    stats: NormalizationStats = field(default_factory=NormalizationStats)
    warnings: list[str] = field(default_factory=list)

    def protect(self, stage: str, count: int = 1) -> None:
        self.stats.protected_lines += count
        self.warnings.extend(
            [f"{stage} line retained due to detected citation pattern"] * count
        )


def collect_all_strings(value: Any) -> list[str]:
    """Collect trimmed non-empty leaf strings.

    Dicts are walked in sorted key order and lists in order; numbers,
    booleans and nulls are ignored.

    Example:
        >>> collect_all_strings({"b": [" x ", 1], "a": {"c": "y"}})
        ['y', 'x']
    """
    acc: list[str] = []

    def _walk(node: Any) -> None:
        if isinstance(node, str):
            trimmed = node.strip()
            if trimmed:
                acc.append(trimmed)
        elif isinstance(node, list):
            for item in node:
                _walk(item)
        elif isinstance(node, dict):
            for key in sorted(node):
                _walk(node[key])

    _walk(value)
    return acc


def collect_per_page_texts(extract: Any) -> Optional[list[str]]:
    """Return one joined text per page, or None when there is no pages list.

    Leaf strings inside a page are sorted before joining so that the result
    does not depend on key order.
    """
    if not isinstance(extract, dict):
        return None
    pages = extract.get("pages")
    if not isinstance(pages, list) or not pages:
        return None
    return ["\n".join(sorted(collect_all_strings(page))) for page in pages]


def _first_non_empty(lines: list[str], n: int) -> list[str]:
    out: list[str] = []
    for line in lines:
        trimmed = line.strip()
        if trimmed:
            out.append(trimmed)
            if len(out) == n:
                break
    return out


def _last_non_empty(lines: list[str], n: int) -> list[str]:
    return list(reversed(_first_non_empty(list(reversed(lines)), n)))


def detect_header_footer_lines(page_texts: list[str]) -> tuple[Counter, Counter]:
    """Count the first and last non-blank lines of every page.

    Returns:
        Tuple of (header counts, footer counts) keyed by trimmed line
    """
    headers: Counter = Counter()
    footers: Counter = Counter()
    for text in page_texts:
        lines = cleaning.split_lines(text)
        headers.update(_first_non_empty(lines, EDGE_LINES))
        footers.update(_last_non_empty(lines, EDGE_LINES))
    return headers, footers


def required_repeats(threshold: float, page_count: int) -> int:
    """Occurrences a line needs to count as header/footer.

    This is ``ceil(threshold * page_count)`` raised to at least two, so a
    single-page document never loses its first and last lines.
    """
    return max(2, math.ceil(threshold * page_count))


def _remove_headers_footers(
    text: str,
    header_counts: Counter,
    footer_counts: Counter,
    min_repeats: int,
    tally: _Tally,
) -> str:
    lines = cleaning.split_lines(text)
    header_set = {
        line
        for line in _first_non_empty(lines, EDGE_LINES)
        if header_counts[line] >= min_repeats or cleaning.is_likely_page_number(line)
    }
    footer_set = {
        line
        for line in _last_non_empty(lines, EDGE_LINES)
        if footer_counts[line] >= min_repeats or cleaning.is_likely_page_number(line)
    }

    kept: list[str] = []
    for line in lines:
        trimmed = line.strip()
        if trimmed in header_set:
            if contains_citation(trimmed):
                tally.protect("header")
            else:
                tally.stats.headers_removed += 1
                continue
        elif trimmed in footer_set:
            if contains_citation(trimmed):
                tally.protect("footer")
            else:
                tally.stats.footers_removed += 1
                continue
        kept.append(line)
    return "\n".join(kept)


def _prepare(text: str, options: NormalizeOptions, tally: _Tally) -> str:
    if options.normalize_unicode:
        text = cleaning.normalize_unicode_and_ligatures(text)
    if options.fix_hyphenation:
        text, fixes = cleaning.fix_hyphenation(text)
        tally.stats.hyphen_fixes += fixes
    return text


def _strip(text: str, options: NormalizeOptions, tally: _Tally) -> str:
    """Run the pattern-based stripping steps and the final whitespace pass."""
    stats = tally.stats

    text, removed, protected = cleaning.drop_artifact_lines(
        text, options.min_artifact_line_len
    )
    stats.dropped_lines += removed
    tally.protect("artifact", protected)

    if options.strip_publisher_boilerplate:
        text, removed, protected = cleaning.strip_publisher_boilerplate(
            text, options.publisher_hint
        )
        stats.removed_boilerplate += removed
        tally.protect("boilerplate", protected)

    if options.strip_front_matter:
        text, removed, protected = cleaning.strip_front_matter(text)
        stats.removed_boilerplate += removed
        tally.protect("front matter", protected)

    if options.strip_correspondence_emails:
        text, removed, protected = cleaning.strip_correspondence_emails(text)
        stats.removed_boilerplate += removed
        tally.protect("correspondence", protected)

    if options.strip_figures_and_tables:
        text, removed, protected = cleaning.strip_figures_and_tables(text)
        stats.removed_captions += removed
        tally.protect("caption", protected)

    if options.collapse_whitespace:
        text = cleaning.collapse_whitespace(text)
    return text.strip()


def _normalize_pages(
    page_texts: list[str], options: NormalizeOptions, tally: _Tally
) -> list[Page]:
    prepared = [_prepare(text, options, tally) for text in page_texts]

    header_counts: Counter = Counter()
    footer_counts: Counter = Counter()
    if options.header_footer_detection:
        header_counts, footer_counts = detect_header_footer_lines(prepared)
    min_repeats = required_repeats(options.header_footer_threshold, len(prepared))

    pages = []
    for index, text in enumerate(prepared):
        if options.header_footer_detection:
            text = _remove_headers_footers(
                text, header_counts, footer_counts, min_repeats, tally
            )
        pages.append(Page(index=index, text=_strip(text, options, tally)))
    return pages


def _normalize_whole(extract: Any, options: NormalizeOptions, tally: _Tally) -> str:
    text = "\n\n".join(sorted(collect_all_strings(extract))).strip()
    text = _prepare(text, options, tally)

    if options.header_footer_detection:
        text, removed, protected = cleaning.drop_repeated_lines(text)
        tally.stats.removed_boilerplate += removed
        tally.protect("repeated", protected)

    return _strip(text, options, tally)


@instrument_function("normalize_extract")
def normalize_extract(
    extract: Any, options: Optional[NormalizeOptions] = None
) -> NormalizedText:
    """Turn an extraction structure into one clean full text.

    Args:
        extract: Nested dict/list/str structure from a PDF extractor
        options: Normalizer switches (defaults when omitted)

    Returns:
        NormalizedText with full text, per-page text (paged input only),
        counters and warnings

    Raises:
        NoTextExtractedError: If nothing survives cleaning

    Example:
        >>> result = normalize_extract({"pages": [{"text": "Hello world."}]})
        >>> result.full_text
        'Hello world.'
    """
    options = options or NormalizeOptions()
    tally = _Tally()

    hint = options.publisher_hint.strip()
    if hint and not cleaning.is_known_publisher(hint):
        tally.warnings.append(
            f"unknown publisher hint '{hint}', using generic boilerplate patterns"
        )

    page_texts = collect_per_page_texts(extract)
    pages: Optional[list[Page]] = None
    if page_texts is not None:
        pages = _normalize_pages(page_texts, options, tally)
        separator = "\n\n" if options.keep_page_breaks else "\n"
        full_text = separator.join(p.text for p in pages if p.text).strip()
        tally.stats.num_pages = len(pages)
    else:
        full_text = _normalize_whole(extract, options, tally)

    if not full_text.strip():
        logger.warning(
            "normalization_empty",
            paged=pages is not None,
            num_pages=tally.stats.num_pages,
        )
        raise NoTextExtractedError()

    tally.stats.num_words = cleaning.count_words(full_text)
    tally.stats.num_chars = len(full_text)

    logger.info(
        "normalization_completed",
        paged=pages is not None,
        num_pages=tally.stats.num_pages,
        num_words=tally.stats.num_words,
        hyphen_fixes=tally.stats.hyphen_fixes,
        headers_removed=tally.stats.headers_removed,
        footers_removed=tally.stats.footers_removed,
        protected_lines=tally.stats.protected_lines,
        warnings=len(tally.warnings),
    )

    return NormalizedText(
        full_text=full_text,
        pages=pages,
        stats=tally.stats,
        warnings=tally.warnings,
    )
