"""Shared fixtures for text core tests."""

import pytest

from paperhand_contracts import CitationMapping, SourceItem


PAPER_TEXT = """Curcumin exhibits potent anti-inflammatory properties (Smith et al., 2020). Resveratrol improves vascular function in older adults [1]. The weather was pleasant during the whole study period.

References
1. Smith J, Doe A. Curcumin and inflammation. J Nutr Biochem. 2020;12(3):45-52. doi:10.1000/jnb.2020.01
2. Miller K. Resveratrol review. Vasc Med. 2019;8:101-110."""


@pytest.fixture
def paper_text() -> str:
    """Short paper body followed by a numbered reference list."""
    return PAPER_TEXT


@pytest.fixture
def curcumin_mapping() -> CitationMapping:
    """Mapping for an original sentence about curcumin."""
    return CitationMapping(
        original_sentence=(
            "Curcumin exhibits potent anti-inflammatory properties (Smith et al., 2020)."
        ),
        citations=["(Smith et al., 2020)"],
        keywords=[],
        concepts=["curcumin", "anti-inflammatory"],
        sentence_id="sent_0_abcdef12",
    )


@pytest.fixture
def german_aliases() -> dict[str, str]:
    """Alias table pairing German surface terms with English concepts."""
    return {
        "kurkuma": "curcumin",
        "entzündungshemmende": "anti-inflammatory",
    }


@pytest.fixture
def numbered_sources() -> list[SourceItem]:
    """Three catalog entries numbered 1..3."""
    return [
        SourceItem(
            number=1,
            title="Curcumin and inflammation",
            year=2020,
            journal="J Nutr Biochem",
            authors=["Smith J", "Doe A"],
            doi="10.1000/jnb.2020.01",
        ),
        SourceItem(number=2, title="Resveratrol review", year=2019, authors=["Miller K"]),
        SourceItem(number=3, title="Green tea catechins", pmid="12345678"),
    ]
