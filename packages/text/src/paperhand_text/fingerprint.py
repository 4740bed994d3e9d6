"""Keyword and concept fingerprints for citation re-attachment.

A fingerprint is the (keywords, concepts) pair of a sentence. Concepts are
the more discriminating half: named substances, abbreviations and conditions.

Cross-language matching goes through an alias table that maps a lowercase
surface term to a canonical concept:

    >>> fp = FingerprintExtractor({"kurkuma": "curcumin"})
    >>> fp.extract_concepts("Kurkuma wirkt stark.")
    ['curcumin']
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import yaml

from paperhand_common import PayloadError, get_logger

logger = get_logger(__name__)

STOP_WORDS = frozenset(
    {
        # English
        "that", "this", "with", "from", "they", "were", "been", "have", "their",
        "said", "each", "which", "them", "than", "many", "some", "these",
        "would", "there", "what",
        # German
        "und", "eine", "einer", "eines", "dass", "sich", "sind", "wird",
        "wurde", "wurden", "werden", "kann", "können", "durch", "über",
    }
)  # fmt: skip

SCIENTIFIC_SUFFIXES: tuple[str, ...] = (
    "tion", "ism", "ment", "ness", "ity", "ogy", "ics", "ine", "ase", "ose",
)  # fmt: skip
SCIENTIFIC_PREFIXES: tuple[str, ...] = (
    "anti", "pro", "pre", "post", "inter", "intra", "extra", "trans",
)  # fmt: skip

MIN_KEYWORD_LENGTH = 5

_WORD = re.compile(r"[^\W\d_]+")
_ALIAS_TOKEN = re.compile(r"[\w-]+")

CONCEPT_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\b[A-Z][a-z]+(?:in|mine|cin|ide|ase|ose)\b"),  # Curcumin, Dopamine
    re.compile(r"\b[A-Z]{2,}\b"),  # TNF, NF
    re.compile(r"\b\d*[A-Z]\d*\b"),  # vitamin C, B12
    re.compile(r"\banti-\w+\b"),
    re.compile(r"\b\w+therapy\b"),
    re.compile(r"\b\w+disease\b"),
)

MEDICAL_TERMS = re.compile(
    r"\b(?:cancer|tumor|inflammation|oxidative|therapeutic|clinical|efficacy"
    r"|bioavailability|metabolism|pharmacokinetic|antioxidant|neuroprotective"
    r"|cardioprotective|hepatoprotective|chemopreventive)\b"
)


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def is_scientific_term(token: str) -> bool:
    """Heuristic for domain vocabulary.

    Checks the lowercase form against suffix and prefix lists, and the
    original form for internal capitalization ("NFkappaB", "mTOR").
    """
    lowered = token.lower()
    if lowered.endswith(SCIENTIFIC_SUFFIXES) or lowered.startswith(SCIENTIFIC_PREFIXES):
        return True
    tail = token[1:]
    return any(ch.isupper() for ch in tail) and any(ch.islower() for ch in token)


@dataclass(frozen=True)
class Fingerprint:
    """Keywords and concepts of one sentence."""

    keywords: list[str] = field(default_factory=list)
    concepts: list[str] = field(default_factory=list)


class FingerprintExtractor:
    """Extract keyword and concept fingerprints from sentences.

    The same extractor must fingerprint both the original sentences and the
    rewritten ones, otherwise scores are meaningless.
    """

    def __init__(self, concept_aliases: Optional[dict[str, str]] = None):
        """Initialize extractor.

        Args:
            concept_aliases: Map of surface term to canonical concept
                (case-insensitive keys, e.g. {"kurkuma": "curcumin"})
        """
        self.concept_aliases: dict[str, str] = {
            key.lower(): value.lower() for key, value in (concept_aliases or {}).items()
        }

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "FingerprintExtractor":
        """Create extractor with aliases loaded from a YAML file."""
        return cls(concept_aliases=load_concept_aliases(yaml_path))

    def extract_keywords(self, sentence: str) -> list[str]:
        """Lowercase scientific-looking words longer than four letters.

        Example:
            >>> FingerprintExtractor().extract_keywords("Inflammation and metabolism")
            ['inflammation', 'metabolism']
        """
        keywords = []
        for token in _WORD.findall(sentence):
            lowered = token.lower()
            if len(lowered) < MIN_KEYWORD_LENGTH or lowered in STOP_WORDS:
                continue
            if is_scientific_term(token):
                keywords.append(lowered)
        return _dedupe(keywords)

    def extract_concepts(self, sentence: str) -> list[str]:
        """Lowercase biomedical concepts, canonicalized through the alias table."""
        concepts: list[str] = []
        for pattern in CONCEPT_PATTERNS:
            concepts.extend(m.lower() for m in pattern.findall(sentence))
        concepts.extend(MEDICAL_TERMS.findall(sentence.lower()))

        if self.concept_aliases:
            concepts = [self.concept_aliases.get(c, c) for c in concepts]
            for token in _ALIAS_TOKEN.findall(sentence):
                canonical = self.concept_aliases.get(token.lower())
                if canonical:
                    concepts.append(canonical)

        return _dedupe(concepts)

    def fingerprint(self, sentence: str) -> Fingerprint:
        return Fingerprint(
            keywords=self.extract_keywords(sentence),
            concepts=self.extract_concepts(sentence),
        )


def load_concept_aliases(yaml_path: Union[str, Path]) -> dict[str, str]:
    """Load a concept alias table from YAML.

    Two shapes are accepted and may be mixed:

        kurkuma: curcumin              # surface term -> canonical concept
        anti-inflammatory:             # canonical concept -> surface terms
          - entzündungshemmend
          - entzündungshemmende

    Args:
        yaml_path: Path to the YAML file

    Returns:
        Dict of lowercase surface term to lowercase canonical concept

    Raises:
        FileNotFoundError: If the file does not exist
        PayloadError: If the file is not a mapping of strings
    """
    path = Path(yaml_path)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise PayloadError(f"Concept alias file must contain a mapping: {path}")

    aliases: dict[str, str] = {}
    for key, value in data.items():
        if isinstance(value, str):
            aliases[str(key).lower()] = value.lower()
        elif isinstance(value, list):
            for surface in value:
                aliases[str(surface).lower()] = str(key).lower()
        else:
            raise PayloadError(
                f"Alias for '{key}' must be a string or a list of strings: {path}"
            )

    logger.info("concept_aliases_loaded", path=str(path), entry_count=len(aliases))
    return aliases
