"""Pydantic models for the paperhand system.

These schemas define the contract between the text core, the command line
and any service layer that exposes the core over JSON.
"""

import json
import math
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)


_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


def _coerce_bool(value: Any) -> Optional[bool]:
    """Coerce loosely-typed booleans; None when the value is not understood."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


def _coerce_float(value: Any) -> Optional[float]:
    """Finite float, or None; "inf" and "nan" are not understood."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _coerce_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


class NormalizeOptions(BaseModel):
    """Switches for the text normalizer.

    Accepts string-encoded booleans and numbers ("true", "0.5", "3"). A value
    that cannot be coerced is dropped and the field keeps its default.
    """

    model_config = ConfigDict(extra="ignore")

    normalize_unicode: bool = True
    fix_hyphenation: bool = True
    collapse_whitespace: bool = True
    header_footer_detection: bool = True
    header_footer_threshold: float = Field(
        0.6, description="Fraction of pages a header/footer line must recur in"
    )
    min_artifact_line_len: int = Field(
        0, ge=0, description="Drop lines with fewer visible characters (0 = off)"
    )
    keep_page_breaks: bool = False
    language_hint: str = Field(
        "", description="Carried through for callers; the normalizer does not read it"
    )

    strip_publisher_boilerplate: bool = False
    strip_figures_and_tables: bool = True
    strip_front_matter: bool = False
    strip_correspondence_emails: bool = True
    publisher_hint: str = ""

    @model_validator(mode="before")
    @classmethod
    def coerce_loose_values(cls, data: Any) -> Any:
        """Coerce string-typed values and drop the ones that make no sense."""
        if not isinstance(data, dict):
            return data

        coerced: dict[str, Any] = {}
        for key, value in data.items():
            field = cls.model_fields.get(key)
            if field is None:
                continue
            if field.annotation is bool:
                converted = _coerce_bool(value)
            elif field.annotation is float:
                converted = _coerce_float(value)
            elif field.annotation is int:
                converted = _coerce_int(value)
            else:
                converted = value if isinstance(value, str) else None
            if converted is not None:
                coerced[key] = converted
        return coerced

    @field_validator("header_footer_threshold")
    @classmethod
    def default_invalid_threshold(cls, v: float) -> float:
        """Non-positive or non-finite thresholds fall back to 0.6."""
        return v if v > 0 and math.isfinite(v) else 0.6

    @field_validator("min_artifact_line_len", mode="before")
    @classmethod
    def clamp_artifact_len(cls, v: Any) -> Any:
        """Negative lengths disable artifact stripping."""
        if isinstance(v, int) and v < 0:
            return 0
        return v


_OPTION_KEYS = tuple(NormalizeOptions.model_fields)


class NormalizeRequest(BaseModel):
    """Normalizer input: an arbitrary extract plus options.

    The extract may arrive as ``extract``, ``pdf_extract``, a JSON string in
    ``pdf_extract_json`` or plain text in ``pdf_text``. Option keys may sit at
    the top level or under ``options``; nested keys win.
    """

    extract: Any
    options: NormalizeOptions = Field(default_factory=NormalizeOptions)

    @model_validator(mode="before")
    @classmethod
    def gather_payload(cls, data: Any) -> Any:
        """Resolve extract aliases and merge top-level option keys."""
        if not isinstance(data, dict):
            return data

        extract = data.get("extract")
        if extract is None:
            extract = data.get("pdf_extract")
        if extract is None:
            raw_json = data.get("pdf_extract_json")
            if isinstance(raw_json, str) and raw_json.strip():
                try:
                    extract = json.loads(raw_json)
                except json.JSONDecodeError as e:
                    raise ValueError(f"pdf_extract_json is not valid JSON: {e}") from e
        if extract is None:
            pdf_text = data.get("pdf_text")
            if isinstance(pdf_text, str) and pdf_text.strip():
                extract = pdf_text
        if extract is None:
            raise ValueError(
                "'extract' (or 'pdf_extract'/'pdf_extract_json'/'pdf_text') is required"
            )

        options: dict[str, Any] = {k: data[k] for k in _OPTION_KEYS if k in data}
        nested = data.get("options")
        if isinstance(nested, NormalizeOptions):
            nested = nested.model_dump()
        if isinstance(nested, dict):
            options.update(nested)

        return {"extract": extract, "options": options}


class Page(BaseModel):
    """Cleaned text of a single source page."""

    index: int = Field(..., ge=0, description="0-based position in the extract")
    text: str


class NormalizationStats(BaseModel):
    """Counters collected while normalizing."""

    num_pages: int = 0
    num_words: int = 0
    num_chars: int = 0
    hyphen_fixes: int = 0
    headers_removed: int = 0
    footers_removed: int = 0
    dropped_lines: int = 0
    removed_boilerplate: int = 0
    removed_captions: int = 0
    protected_lines: int = Field(
        0, description="Lines kept only because they carry a citation"
    )


class NormalizedText(BaseModel):
    """Result of normalizing one extract."""

    full_text: str
    pages: Optional[list[Page]] = None
    stats: NormalizationStats = Field(default_factory=NormalizationStats)
    warnings: list[str] = Field(default_factory=list)

    @field_validator("full_text")
    @classmethod
    def validate_full_text_not_blank(cls, v: str) -> str:
        """A successful normalization never carries blank text."""
        if not v or not v.strip():
            raise ValueError("full_text must be non-empty")
        return v


class CitationMapping(BaseModel):
    """An original sentence with the citations it carries and its fingerprint."""

    original_sentence: str
    citations: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    concepts: list[str] = Field(default_factory=list)
    sentence_id: str = ""


class CitationResult(BaseModel):
    """Citations, references and sentence mappings found in one text."""

    in_text_citations: list[str] = Field(default_factory=list)
    full_references: list[str] = Field(default_factory=list)
    citation_patterns: dict[str, list[str]] = Field(default_factory=dict)
    citation_mappings: list[CitationMapping] = Field(default_factory=list)

    @computed_field
    @property
    def citation_count(self) -> int:
        return len(self.in_text_citations)

    @computed_field
    @property
    def reference_count(self) -> int:
        return len(self.full_references)


class InjectionRequest(BaseModel):
    """Injector input: rewritten text plus mappings from the original text."""

    simplified_text: str = Field(..., min_length=1)
    mappings: list[CitationMapping] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def resolve_mapping_aliases(cls, data: Any) -> Any:
        """Accept ``original_mappings`` or a JSON string in ``mappings_json``."""
        if not isinstance(data, dict) or "mappings" in data:
            return data
        data = dict(data)
        if "original_mappings" in data:
            data["mappings"] = data.pop("original_mappings")
        elif isinstance(data.get("mappings_json"), str):
            try:
                data["mappings"] = json.loads(data.pop("mappings_json"))
            except json.JSONDecodeError as e:
                raise ValueError(f"mappings_json is not valid JSON: {e}") from e
        return data


class InjectionResult(BaseModel):
    """Citation-annotated text and a few counters."""

    enhanced_text: str
    original_length: int = 0
    enhanced_length: int = 0
    injected_sentences: int = 0


class ReferenceStripResult(BaseModel):
    """Text with its reference section removed."""

    cleaned_text: str
    size_before: int
    size_after: int

    @computed_field
    @property
    def size_reduction(self) -> int:
        return self.size_before - self.size_after

    @computed_field
    @property
    def reduction_percent(self) -> int:
        if self.size_before == 0:
            return 0
        return int(self.size_reduction / self.size_before * 100)


class SourceItem(BaseModel):
    """A numbered source referenced as [n] in an answer."""

    number: int
    doi: str = ""
    pmid: str = ""
    title: str = ""
    year: int = 0
    journal: str = ""
    authors: list[str] = Field(default_factory=list)
    doc_id: str = ""

    @field_validator("doi", "pmid", "title", "journal", "doc_id", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        """Null string fields are treated as missing."""
        return "" if v is None else v

    @field_validator("year", mode="before")
    @classmethod
    def none_year_to_zero(cls, v: Any) -> Any:
        """Null or blank years mean 'no date'."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return 0
        return v


class BibliographyRequest(BaseModel):
    """Answer text with [n] citations plus the numbered source catalog."""

    answer_text: str = ""
    sources: list[SourceItem] = Field(default_factory=list)


class BibliographyResult(BaseModel):
    """Ordered and rendered reference list."""

    ordered_sources: list[SourceItem] = Field(default_factory=list)
    formatted: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
