"""Line-level cleaning steps used by the normalizer.

Every stripping step returns ``(text, removed, protected)``: the cleaned text,
the number of lines removed and the number of lines that matched a stripping
rule but were kept because they carry a citation.
"""

import re
from collections import Counter
from typing import Iterable

import ftfy

from paperhand_text.citation_patterns import contains_citation

# ftfy expands U+FB00-FB06 only.
VOWEL_LIGATURES: dict[str, str] = {
    "œ": "oe",
    "æ": "ae",
}

_VOWEL_LIGATURE_TABLE = str.maketrans(VOWEL_LIGATURES)

_TEXT_FIXER = ftfy.TextFixerConfig(
    unescape_html=False,
    uncurl_quotes=False,
    fix_character_width=False,
    fix_line_breaks=False,
    fix_latin_ligatures=True,
    normalization="NFC",
    explain=False,
)

_HYPHENATION = re.compile(r"([^\W_])-\r?\n[ \t]*([^\W\d_])")
_HORIZONTAL_SPACE = re.compile("[\t\f\v\u00a0]+")
_MULTI_SPACE = re.compile(r" {2,}")
_MULTI_NEWLINE = re.compile(r"\n{3,}")
_PAGE_NUMBER = re.compile(r"^(?:[Pp]age\s*)?\d+(?:\s*/\s*\d+)?$")

REPEATED_LINE_THRESHOLD = 3
REPEATED_LINE_MAX_LEN = 120

BOILERPLATE_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"^(?:©|copyright|all rights reserved)", re.IGNORECASE),
    re.compile(
        r"^this (?:article|manuscript) (?:is|was) (?:an open access|distributed|published)",
        re.IGNORECASE,
    ),
    re.compile(r"^(?:creative commons|cc-?by)", re.IGNORECASE),
    re.compile(r"^permission to reproduce", re.IGNORECASE),
    re.compile(r"^rights? and permissions", re.IGNORECASE),
    # Typesetting tool banners
    re.compile(r"^(?:dvips|miktex|ghostscript)", re.IGNORECASE),
    re.compile(r"acrobat\s+distiller", re.IGNORECASE),
    re.compile(r"arbortext\s+advanced\s+print\s+publisher", re.IGNORECASE),
    # Portal furniture
    re.compile(r"\bfrontiersin\.org\b", re.IGNORECASE),
    re.compile(r"^frontiers\b", re.IGNORECASE),
    re.compile(r"^open\s+access\b", re.IGNORECASE),
    re.compile(r"^edited\s+by\b", re.IGNORECASE),
    re.compile(r"^reviewed\s+by\b", re.IGNORECASE),
    re.compile(r"^publisher'?s\s+note\b", re.IGNORECASE),
)

PUBLISHER_PATTERNS: dict[str, tuple[re.Pattern, ...]] = {
    "springer": (re.compile(r"^springer", re.IGNORECASE),),
    "elsevier": (re.compile(r"^elsevier", re.IGNORECASE),),
    "wiley": (re.compile(r"^wiley", re.IGNORECASE),),
    "nature": (re.compile(r"^nature (?:research|publishing)", re.IGNORECASE),),
    "frontiers": (
        re.compile(r"^frontiers", re.IGNORECASE),
        re.compile(r"\bfrontiersin\.org\b", re.IGNORECASE),
        re.compile(r"^type\s+review\b", re.IGNORECASE),
        re.compile(r"^citation\b", re.IGNORECASE),
    ),
}

_INTRODUCTION = re.compile(r"^\s*(?:\d+\s+)?introduction\s*$", re.IGNORECASE)

FRONT_MATTER_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"^keywords?\s*:", re.IGNORECASE),
    re.compile(r"^abbreviations?\s*:", re.IGNORECASE),
    re.compile(r"^received\s*:", re.IGNORECASE),
    re.compile(r"^accepted\s*:", re.IGNORECASE),
    re.compile(r"^published\s*:", re.IGNORECASE),
    re.compile(r"^author\s+contributions?\s*:", re.IGNORECASE),
    re.compile(r"^funding\s*:", re.IGNORECASE),
    re.compile(r"^conflicts? of interest\s*:", re.IGNORECASE),
    re.compile(r"^open\s+access\b", re.IGNORECASE),
    re.compile(r"^edited\s+by\b", re.IGNORECASE),
    re.compile(r"^reviewed\s+by\b", re.IGNORECASE),
    re.compile(r"^type\s+review\b", re.IGNORECASE),
    re.compile(r"^publisher'?s\s+note\b", re.IGNORECASE),
)

_EMAIL = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
_CORRESPONDENCE_LEAD = re.compile(
    r"^(?:correspondence|corresponding author|contact)\b", re.IGNORECASE
)

CAPTION_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(
        r"^(?:figure|fig\.|table|supplementary\s+(?:figure|table))\s*\d+(?:\s+.*|\s*[:.\-].*)?$",
        re.IGNORECASE,
    ),
    re.compile(r"^caption\s*[:.\-]?", re.IGNORECASE),
)


def split_lines(text: str) -> list[str]:
    return text.replace("\r\n", "\n").split("\n")


def normalize_unicode_and_ligatures(text: str) -> str:
    """Repair mojibake, expand typographic ligatures and apply NFC normalization.

    Quotes, character widths and line breaks are left alone.

    Example:
        >>> normalize_unicode_and_ligatures("ﬁnal eﬀect")
        'final effect'
    """
    return ftfy.fix_text(text, _TEXT_FIXER).translate(_VOWEL_LIGATURE_TABLE)


def fix_hyphenation(text: str) -> tuple[str, int]:
    """Join words hyphenated across a line break.

    Only joins when the continuation starts with a lowercase letter, so
    "anti-\\nInflammatory" (a real compound broken at a line end) is kept.

    Returns:
        Tuple of (fixed text, number of joins)
    """
    fixes = 0

    def _join(match: re.Match) -> str:
        nonlocal fixes
        if not match.group(2).islower():
            return match.group(0)
        fixes += 1
        return match.group(1) + match.group(2)

    return _HYPHENATION.sub(_join, text), fixes


def collapse_whitespace(text: str) -> str:
    """Fold horizontal whitespace, right-trim lines, cap blank-line runs.

    Applying this twice gives the same result as applying it once.
    """
    text = text.replace("\r\n", "\n")
    text = _HORIZONTAL_SPACE.sub(" ", text)
    text = _MULTI_SPACE.sub(" ", text)
    text = "\n".join(line.rstrip() for line in text.split("\n"))
    text = _MULTI_NEWLINE.sub("\n\n", text)
    return text.strip()


def count_visible_chars(line: str) -> int:
    return sum(1 for ch in line if not ch.isspace())


def is_likely_page_number(line: str) -> bool:
    """Check for bare page numbers such as "12", "Page 3" or "4/17"."""
    trimmed = line.strip()
    return bool(trimmed) and bool(_PAGE_NUMBER.match(trimmed))


def count_words(text: str) -> int:
    return len(text.split())


def _filter_lines(
    lines: list[str], patterns: Iterable[re.Pattern]
) -> tuple[list[str], int, int]:
    patterns = tuple(patterns)
    kept: list[str] = []
    removed = 0
    protected = 0
    for line in lines:
        trimmed = line.strip()
        if trimmed and any(p.search(trimmed) for p in patterns):
            if contains_citation(trimmed):
                protected += 1
            else:
                removed += 1
                continue
        kept.append(line)
    return kept, removed, protected


def _strip_matching_lines(
    text: str, patterns: Iterable[re.Pattern]
) -> tuple[str, int, int]:
    kept, removed, protected = _filter_lines(split_lines(text), patterns)
    return "\n".join(kept), removed, protected


def drop_artifact_lines(text: str, min_len: int) -> tuple[str, int, int]:
    """Drop short lines and page-number lines; blank lines are kept."""
    if min_len <= 0:
        return text, 0, 0

    kept: list[str] = []
    removed = 0
    protected = 0
    for line in split_lines(text):
        trimmed = line.strip()
        if not trimmed:
            kept.append(line)
            continue
        if count_visible_chars(trimmed) < min_len or is_likely_page_number(trimmed):
            if contains_citation(trimmed):
                protected += 1
            else:
                removed += 1
                continue
        kept.append(line)
    return "\n".join(kept), removed, protected


def drop_repeated_lines(
    text: str,
    threshold: int = REPEATED_LINE_THRESHOLD,
    max_len: int = REPEATED_LINE_MAX_LEN,
) -> tuple[str, int, int]:
    """Drop short lines that recur at least ``threshold`` times.

    Stands in for header/footer detection when the extract has no pages.
    """
    lines = split_lines(text)
    counts = Counter(
        t for t in (line.strip() for line in lines) if t and len(t) <= max_len
    )
    repetitive = {t for t, n in counts.items() if n >= threshold}
    if not repetitive:
        return text, 0, 0

    kept: list[str] = []
    removed = 0
    protected = 0
    for line in lines:
        trimmed = line.strip()
        if trimmed in repetitive:
            if contains_citation(trimmed):
                protected += 1
            else:
                removed += 1
                continue
        kept.append(line)
    return "\n".join(kept), removed, protected


def is_known_publisher(hint: str) -> bool:
    return hint.strip().lower() in PUBLISHER_PATTERNS


def strip_publisher_boilerplate(text: str, hint: str = "") -> tuple[str, int, int]:
    """Remove copyright notices, license banners and portal furniture.

    Args:
        text: Text to clean
        hint: Publisher family adding extra patterns (springer, elsevier,
            wiley, nature, frontiers); unknown hints add nothing
    """
    patterns = BOILERPLATE_PATTERNS + PUBLISHER_PATTERNS.get(hint.strip().lower(), ())
    return _strip_matching_lines(text, patterns)


def strip_front_matter(text: str) -> tuple[str, int, int]:
    """Remove keyword, date, funding and similar lines before the Introduction.

    Without an Introduction heading the whole text is treated as front matter.
    """
    lines = split_lines(text)
    intro_idx = next(
        (i for i, line in enumerate(lines) if _INTRODUCTION.match(line.strip())),
        len(lines),
    )
    kept, removed, protected = _filter_lines(lines[:intro_idx], FRONT_MATTER_PATTERNS)
    return "\n".join(kept + lines[intro_idx:]), removed, protected


def strip_correspondence_emails(text: str) -> tuple[str, int, int]:
    """Remove e-mail addresses and correspondence lines."""
    return _strip_matching_lines(text, (_EMAIL, _CORRESPONDENCE_LEAD))


def strip_figures_and_tables(text: str) -> tuple[str, int, int]:
    """Remove figure and table captions."""
    return _strip_matching_lines(text, CAPTION_PATTERNS)
