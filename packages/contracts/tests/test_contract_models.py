"""Tests for Pydantic models in contracts package.

Focus: boundary coercion, validators, derived fields
"""

import json

import pytest
from pydantic import ValidationError

from paperhand_contracts import (
    CitationMapping,
    CitationResult,
    InjectionRequest,
    NormalizedText,
    NormalizeOptions,
    NormalizeRequest,
    ReferenceStripResult,
    SourceItem,
)


class TestNormalizeOptions:
    """Test NormalizeOptions defaults and coercion."""

    def test_defaults(self):
        """Defaults match the service defaults."""
        opts = NormalizeOptions()

        assert opts.normalize_unicode is True
        assert opts.fix_hyphenation is True
        assert opts.collapse_whitespace is True
        assert opts.header_footer_detection is True
        assert opts.header_footer_threshold == 0.6
        assert opts.min_artifact_line_len == 0
        assert opts.keep_page_breaks is False
        assert opts.strip_publisher_boilerplate is False
        assert opts.strip_figures_and_tables is True
        assert opts.strip_front_matter is False
        assert opts.strip_correspondence_emails is True
        assert opts.publisher_hint == ""

    def test_string_booleans_coerced(self):
        """String booleans from loosely-typed callers are accepted."""
        opts = NormalizeOptions.model_validate(
            {
                "normalize_unicode": "false",
                "keep_page_breaks": "Yes",
                "strip_front_matter": "1",
                "fix_hyphenation": "off",
            }
        )

        assert opts.normalize_unicode is False
        assert opts.keep_page_breaks is True
        assert opts.strip_front_matter is True
        assert opts.fix_hyphenation is False

    def test_numeric_strings_coerced(self):
        """Numeric strings become floats and ints."""
        opts = NormalizeOptions.model_validate(
            {"header_footer_threshold": " 0.5 ", "min_artifact_line_len": "4"}
        )

        assert opts.header_footer_threshold == 0.5
        assert opts.min_artifact_line_len == 4

    def test_uncoercible_values_keep_defaults(self):
        """Garbage values are ignored rather than rejected."""
        opts = NormalizeOptions.model_validate(
            {"collapse_whitespace": "maybe", "header_footer_threshold": "lots"}
        )

        assert opts.collapse_whitespace is True
        assert opts.header_footer_threshold == 0.6

    def test_non_positive_threshold_defaults(self):
        """Zero or negative thresholds fall back to 0.6."""
        assert NormalizeOptions(header_footer_threshold=0).header_footer_threshold == 0.6
        assert NormalizeOptions(header_footer_threshold=-1).header_footer_threshold == 0.6

    @pytest.mark.parametrize("value", ["inf", "-inf", "nan", " Infinity ", float("inf")])
    def test_non_finite_threshold_defaults(self, value):
        """Infinite or NaN thresholds fall back to 0.6."""
        opts = NormalizeOptions.model_validate({"header_footer_threshold": value})
        assert opts.header_footer_threshold == 0.6

    def test_language_hint_carried(self):
        """The language hint is kept as given."""
        opts = NormalizeOptions.model_validate({"language_hint": "de"})
        assert opts.model_dump()["language_hint"] == "de"

    def test_unknown_keys_ignored(self):
        """Unknown option keys do not fail validation."""
        opts = NormalizeOptions.model_validate({"turbo": True})
        assert not hasattr(opts, "turbo")


class TestNormalizeRequest:
    """Test request payload resolution."""

    def test_extract_and_nested_options(self):
        """Plain shape: extract plus options."""
        req = NormalizeRequest.model_validate(
            {"extract": {"pages": []}, "options": {"keep_page_breaks": True}}
        )

        assert req.extract == {"pages": []}
        assert req.options.keep_page_breaks is True

    def test_pdf_extract_alias(self):
        """pdf_extract is accepted as the extract."""
        req = NormalizeRequest.model_validate({"pdf_extract": ["a", "b"]})
        assert req.extract == ["a", "b"]

    def test_pdf_extract_json_string(self):
        """pdf_extract_json is decoded from a JSON string."""
        payload = {"pdf_extract_json": json.dumps({"text": "Hello"})}
        req = NormalizeRequest.model_validate(payload)
        assert req.extract == {"text": "Hello"}

    def test_pdf_extract_json_invalid(self):
        """Invalid JSON in pdf_extract_json is a validation error."""
        with pytest.raises(ValidationError):
            NormalizeRequest.model_validate({"pdf_extract_json": "{not json"})

    def test_pdf_text_fallback(self):
        """pdf_text is the last fallback."""
        req = NormalizeRequest.model_validate({"pdf_text": "Plain text"})
        assert req.extract == "Plain text"

    def test_missing_extract_rejected(self):
        """A payload without any extract key is invalid."""
        with pytest.raises(ValidationError):
            NormalizeRequest.model_validate({"options": {}})

    def test_top_level_options_nested_wins(self):
        """Top-level option keys apply, nested keys override them."""
        req = NormalizeRequest.model_validate(
            {
                "extract": "x",
                "publisher_hint": "springer",
                "keep_page_breaks": "true",
                "options": {"keep_page_breaks": "false"},
            }
        )

        assert req.options.publisher_hint == "springer"
        assert req.options.keep_page_breaks is False


class TestNormalizedText:
    """Test NormalizedText invariant."""

    def test_blank_full_text_rejected(self):
        """A result with blank text cannot be constructed."""
        with pytest.raises(ValidationError):
            NormalizedText(full_text="   ")

    def test_pages_optional(self):
        """Pages default to None for unpaged input."""
        result = NormalizedText(full_text="Body")
        assert result.pages is None
        assert result.warnings == []


class TestCitationResult:
    """Test derived counters on CitationResult."""

    def test_counts_serialized(self):
        """citation_count and reference_count appear in dumps."""
        result = CitationResult(
            in_text_citations=["[1]", "[2]"],
            full_references=["1. Smith J. A study. J Med. 2020;1:1-2."],
            citation_mappings=[
                CitationMapping(original_sentence="A claim [1].", citations=["[1]"])
            ],
        )

        dumped = result.model_dump()
        assert dumped["citation_count"] == 2
        assert dumped["reference_count"] == 1

    def test_round_trip_ignores_counts(self):
        """Serialized results can be read back."""
        result = CitationResult(in_text_citations=["[1]"])
        restored = CitationResult.model_validate_json(result.model_dump_json())
        assert restored.in_text_citations == ["[1]"]


class TestInjectionRequest:
    """Test mapping aliases on InjectionRequest."""

    def test_original_mappings_alias(self):
        """original_mappings is accepted."""
        req = InjectionRequest.model_validate(
            {
                "simplified_text": "Text.",
                "original_mappings": [{"original_sentence": "S", "citations": ["[1]"]}],
            }
        )
        assert req.mappings[0].citations == ["[1]"]

    def test_mappings_json_string(self):
        """mappings_json is decoded from a JSON string."""
        req = InjectionRequest.model_validate(
            {
                "simplified_text": "Text.",
                "mappings_json": json.dumps([{"original_sentence": "S"}]),
            }
        )
        assert req.mappings[0].original_sentence == "S"

    def test_empty_text_rejected(self):
        """Simplified text cannot be empty."""
        with pytest.raises(ValidationError):
            InjectionRequest(simplified_text="")


class TestReferenceStripResult:
    """Test derived size fields."""

    def test_reduction(self):
        result = ReferenceStripResult(cleaned_text="abc", size_before=200, size_after=50)
        assert result.size_reduction == 150
        assert result.reduction_percent == 75

    def test_zero_size(self):
        result = ReferenceStripResult(cleaned_text="", size_before=0, size_after=0)
        assert result.reduction_percent == 0


class TestSourceItem:
    """Test SourceItem null handling."""

    def test_nulls_become_missing(self):
        """JSON nulls are treated as missing fields."""
        item = SourceItem.model_validate(
            {"number": 1, "doi": None, "year": None, "journal": None}
        )

        assert item.doi == ""
        assert item.year == 0
        assert item.journal == ""
        assert item.authors == []
