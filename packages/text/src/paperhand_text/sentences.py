"""Sentence splitting tuned for scientific prose."""

import hashlib
import re

ABBREVIATIONS: tuple[str, ...] = (
    "et al.",
    "i.e.",
    "e.g.",
    "cf.",
    "vs.",
    "etc.",
    "Dr.",
    "Prof.",
    "Fig.",
    "Tab.",
)

MIN_SENTENCE_LENGTH = 10

# Stands in for the periods of protected abbreviations while splitting
_MASK = "\x00"

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+(?=[A-Z])")


def split_into_sentences(text: str) -> list[str]:
    """Split text at terminal punctuation followed by a capitalized word.

    Known abbreviations never end a sentence. Sentences shorter than
    10 characters after trimming are discarded.

    Example:
        >>> split_into_sentences("Smith et al. reported this. Dr. Jones agreed.")
        ['Smith et al. reported this.', 'Dr. Jones agreed.']
    """
    protected = text.replace(_MASK, "")
    for abbr in ABBREVIATIONS:
        protected = protected.replace(abbr, abbr.replace(".", _MASK))

    sentences = []
    for part in _SENTENCE_BOUNDARY.split(protected):
        part = part.replace(_MASK, ".").strip()
        if len(part) >= MIN_SENTENCE_LENGTH:
            sentences.append(part)
    return sentences


def generate_sentence_id(sentence: str, index: int) -> str:
    """Stable id from the sentence position and the digest of its first 50 bytes.

    Example:
        >>> generate_sentence_id("Curcumin reduces inflammation [1].", 0)[:7]
        'sent_0_'
    """
    digest = hashlib.md5(sentence.encode("utf-8")[:50]).hexdigest()
    return f"sent_{index}_{digest[:8]}"
