"""Tests for bibliography ordering and rendering."""

from paperhand_contracts import SourceItem
from paperhand_text import (
    build_bibliography,
    format_bibliography,
    format_reference,
    parse_citation_order,
)


class TestParseCitationOrder:
    """Test [n] parsing."""

    def test_first_occurrence_order(self):
        assert parse_citation_order("... [2] ... [1] ... [2] ...") == [2, 1]

    def test_non_positive_ignored(self):
        assert parse_citation_order("[0] [3] [00]") == [3]

    def test_other_brackets_ignored(self):
        assert parse_citation_order("[a] [1, 2] [ 3 ]") == []


class TestBuildBibliography:
    """Test ordering and warnings."""

    def test_citation_order_then_uncited(self, numbered_sources):
        ordered, warnings = build_bibliography("... [2] ... [1] ... [2] ...", numbered_sources)

        assert [s.number for s in ordered] == [2, 1, 3]
        assert warnings == []

    def test_fallback_to_numeric_order(self, numbered_sources):
        ordered, warnings = build_bibliography("No citations here.", numbered_sources[::-1])

        assert [s.number for s in ordered] == [1, 2, 3]
        assert warnings == []

    def test_unknown_citation_warns(self, numbered_sources):
        ordered, warnings = build_bibliography("See [4] and [1].", numbered_sources)

        assert [s.number for s in ordered] == [1, 2, 3]
        assert warnings == ["citation [4] has no matching source"]

    def test_gaps_reported(self):
        sources = [SourceItem(number=1), SourceItem(number=4)]
        ordered, warnings = build_bibliography("[4]", sources)

        assert [s.number for s in ordered] == [4, 1]
        assert warnings == ["source numbers 2-3 missing"]

    def test_single_gap_and_run_reported_separately(self):
        sources = [SourceItem(number=n) for n in (1, 3, 7)]
        _, warnings = build_bibliography("", sources)

        assert warnings == ["source number 2 missing", "source numbers 4-6 missing"]

    def test_large_number_gives_one_gap_warning(self):
        """A huge source number does not expand into one warning per missing number."""
        sources = [SourceItem(number=1), SourceItem(number=3_000_000)]
        ordered, warnings = build_bibliography("see [1]", sources)

        assert [s.number for s in ordered] == [1, 3_000_000]
        assert warnings == ["source numbers 2-2999999 missing"]

    def test_duplicate_numbers_last_wins(self):
        sources = [SourceItem(number=1, title="Old"), SourceItem(number=1, title="New")]
        ordered, warnings = build_bibliography("[1]", sources)

        assert [s.title for s in ordered] == ["New"]
        assert warnings == ["duplicate source number 1, using the last one"]

    def test_no_sources(self):
        assert build_bibliography("[1]", []) == ([], ["no sources provided"])


class TestFormatReference:
    """Test single-entry rendering."""

    def test_full_entry(self, numbered_sources):
        assert format_reference(numbered_sources[0]) == (
            "Smith J, Doe A (2020). Curcumin and inflammation. J Nutr Biochem. "
            "doi:10.1000/jnb.2020.01"
        )

    def test_missing_fields(self):
        assert format_reference(SourceItem(number=1)) == "Unknown Authors (n.d.). Untitled."

    def test_pmid_without_journal(self, numbered_sources):
        assert format_reference(numbered_sources[2]) == (
            "Unknown Authors (n.d.). Green tea catechins. pmid:12345678"
        )

    def test_doi_and_pmid(self):
        source = SourceItem(number=1, title="T", doi="10.1/x", pmid="42", year=2001)
        assert format_reference(source) == "Unknown Authors (2001). T. doi:10.1/x pmid:42"


class TestFormatBibliography:
    """Test the combined result."""

    def test_result(self, numbered_sources):
        result = format_bibliography("See [3].", numbered_sources)

        assert [s.number for s in result.ordered_sources] == [3, 1, 2]
        assert result.formatted[0].startswith("Unknown Authors (n.d.). Green tea catechins.")
        assert len(result.formatted) == 3
        assert result.warnings == []

    def test_empty_catalog(self):
        result = format_bibliography("See [1].", [])

        assert result.ordered_sources == []
        assert result.formatted == []
        assert result.warnings == ["no sources provided"]
