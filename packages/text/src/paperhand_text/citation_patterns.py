"""Citation and reference-list pattern tables.

Every table in this module is built once at import time and never mutated.
Pattern categories overlap on purpose (``numeric_brackets`` and
``footnote_markers`` both see ``[12]``); callers take the union and
deduplicate. New formats are supported by passing an extended tuple of
``CitationPattern`` to the extractor rather than by editing these tables.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class CitationPattern:
    """A named in-text citation matcher.

    ``protective`` patterns are precise enough to shield a line from the
    normalizer's stripping steps. The catch-all footnote scan is not: it would
    shield every line containing a digit, page numbers included.
    """

    name: str
    regex: re.Pattern
    protective: bool = True

    def find_all(self, text: str) -> list[str]:
        return [m.group(0) for m in self.regex.finditer(text)]


_AUTHORS = r"[A-Z][a-zA-Z\s&,]+"
_NUMERIC_GROUP = r"\d{1,3}(?:[-–,\s]*\d{1,3}){0,4}"

DEFAULT_CITATION_PATTERNS: tuple[CitationPattern, ...] = (
    # Author-year styles
    CitationPattern(
        "author_year",
        re.compile(rf"\({_AUTHORS}\s+et\s+al\.?,?\s*\d{{4}}[a-z]?\)"),
    ),
    CitationPattern(
        "author_year_simple",
        re.compile(rf"\({_AUTHORS},?\s*\d{{4}}[a-z]?\)"),
    ),
    CitationPattern(
        "author_year_pages",
        re.compile(
            rf"\({_AUTHORS}\s+et\s+al\.?,?\s*\d{{4}}[a-z]?,?\s*pp?\.\s*\d+[-–]?\d*\)"
        ),
    ),
    # Numeric styles
    CitationPattern("numeric_brackets", re.compile(rf"\[{_NUMERIC_GROUP}\]")),
    CitationPattern(
        "numeric_parens_after_word",
        re.compile(rf"(?<=\w)\s*\({_NUMERIC_GROUP}\)"),
    ),
    CitationPattern(
        "vancouver_after_sentence",
        re.compile(r"[.!?]\s*\d{1,3}(?:,\s*\d{1,3}){0,4}\s+[A-Z]"),
    ),
    # Superscript styles
    CitationPattern("superscript_unicode", re.compile(r"[¹²³⁴⁵⁶⁷⁸⁹⁰]+")),
    CitationPattern("superscript_text", re.compile(r"\^[\d,\s-]+\^")),
    CitationPattern("superscript_markup", re.compile(r"<sup>[\d,\s-]+</sup>")),
    # Mixed and compound
    CitationPattern(
        "multiple_authors",
        re.compile(
            rf"\({_AUTHORS}\s+et\s+al\.?\s*[;,]\s*\d{{4}}[a-z]?"
            rf"(?:\s*[;,]\s*{_AUTHORS}\s+et\s+al\.?\s*[;,]\s*\d{{4}}[a-z]?)*\)"
        ),
    ),
    CitationPattern("doi_citations", re.compile(r"doi:\s*10\.\d+[^\s]*")),
    CitationPattern(
        "footnote_markers",
        re.compile(r"[¹²³⁴⁵⁶⁷⁸⁹⁰]+|\d+"),
        protective=False,
    ),
)


def contains_citation(
    line: str, patterns: Iterable[CitationPattern] = DEFAULT_CITATION_PATTERNS
) -> bool:
    """Check whether a line carries a citation marker.

    This is the predicate the normalizer uses to protect lines from removal.

    Example:
        >>> contains_citation("as shown previously (Smith et al., 2020)")
        True
        >>> contains_citation("Page 12")
        False
    """
    return any(p.protective and p.regex.search(line) for p in patterns)


# Counted when reporting how many markers an injected text carries.
INJECTED_CITATION_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(rf"\({_AUTHORS}\s+et\s+al\.?,?\s*\d{{4}}[a-z]?\)"),
    re.compile(rf"\({_AUTHORS},?\s*\d{{4}}[a-z]?\)"),
    re.compile(r"\[\d+(?:[-–,\s]*\d+)*\]"),
    re.compile(r"\(\d+(?:[-–,\s]*\d+)*\)"),
    re.compile(r"doi:\s*10\.\d+[^\s]*"),
)


# ---------------------------------------------------------------------------
# Reference section detection
# ---------------------------------------------------------------------------

REFERENCE_SECTION_NAMES: tuple[str, ...] = (
    "References",
    "Bibliography",
    "Literature",
    "Citations",
    "Works Cited",
    "Literaturverzeichnis",
    "Literatur",
    "Quellen",
    "Sources",
)

# (section name, heading variants) in vocabulary order
REFERENCE_HEADING_PATTERNS: tuple[tuple[str, tuple[re.Pattern, ...]], ...] = tuple(
    (
        name,
        (
            re.compile(rf"^\s*{re.escape(name)}\s*$", re.IGNORECASE),
            re.compile(rf"^##?\s*{re.escape(name)}\s*$", re.IGNORECASE),
            re.compile(rf"^[0-9]+\.?\s*{re.escape(name)}\s*$", re.IGNORECASE),
        ),
    )
    for name in REFERENCE_SECTION_NAMES
)

_HEADING_LINE_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"^#{1,6}\s+.*$"),
    # "2. Methods", "3.1 Study design"; numbered references carry sentence
    # punctuation and do not match
    re.compile(r"^\d+(?:\.\d+)*\.?\s*[A-Z][^.;:()\[\]]{0,80}$"),
    re.compile(r"^[A-Z\s]+$"),
    re.compile(
        r"^(?:" + "|".join(re.escape(n) for n in REFERENCE_SECTION_NAMES) + r")\s*$"
    ),
)

REFERENCE_SHAPE_PATTERNS: tuple[re.Pattern, ...] = (
    # Author (Year) / Author. Year
    re.compile(r"[A-Z][a-zA-Z\s,&]+\s*\(\d{4}[a-z]?\)"),
    re.compile(r"[A-Z][a-zA-Z\s,&]+\.\s*\d{4}[a-z]?"),
    # Journal, volume and pages
    re.compile(r"\.\s+[A-Z][a-zA-Z\s&]+,\s*\d+"),
    re.compile(r"\d+\(\d+\):\s*\d+[-–]\d+"),
    re.compile(r"vol\.\s*\d+"),
    # Identifiers
    re.compile(r"doi:\s*10\.\d+[^\s]*"),
    re.compile(r"pmid:\s*\d+"),
    re.compile(r"isbn:\s*[\d-]+"),
    re.compile(r"arxiv:\s*[\d.v]+"),
    # Links
    re.compile(r"https?://[^\s]+"),
    re.compile(r"www\.[^\s]+"),
    # Publishing info
    re.compile(r"pp?\.\s*\d+[-–]\d+"),
    re.compile(r"[Pp]ublished|[Pp]ress|[Pp]rint"),
    re.compile(r"ed\.|editor|edited"),
    # Numbered list markers
    re.compile(r"^\d+\.\s+[A-Z]"),
    re.compile(r"^\[\d+\]\s+[A-Z]"),
)

MIN_REFERENCE_LENGTH = 15


def find_reference_section(lines: list[str]) -> Optional[int]:
    """Locate the reference-list heading.

    The first vocabulary term with any matching heading variant wins; among
    that term's matches the earliest line is returned.

    Args:
        lines: Document lines

    Returns:
        Index of the heading line, or None when the document has none
    """
    for _name, variants in REFERENCE_HEADING_PATTERNS:
        for i, line in enumerate(lines):
            stripped = line.strip()
            if any(v.match(stripped) for v in variants):
                return i
    return None


def is_heading_line(line: str) -> bool:
    """Classify a trimmed line as a section heading."""
    return any(p.match(line) for p in _HEADING_LINE_PATTERNS)


def is_valid_reference(line: str) -> bool:
    """Check whether a trimmed line looks like a bibliography entry."""
    if len(line) < MIN_REFERENCE_LENGTH:
        return False
    return any(p.search(line) for p in REFERENCE_SHAPE_PATTERNS)
