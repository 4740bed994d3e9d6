"""Fixtures for CLI testing."""

import json

import pytest
from typer.testing import CliRunner

from paperhand_common import get_settings


PAPER_TEXT = """Curcumin exhibits potent anti-inflammatory properties (Smith et al., 2020). Resveratrol improves vascular function in older adults [1].

References
1. Smith J, Doe A. Curcumin and inflammation. J Nutr Biochem. 2020;12(3):45-52. doi:10.1000/jnb.2020.01
2. Miller K. Resveratrol review. Vasc Med. 2019;8:101-110."""


@pytest.fixture(autouse=True)
def quiet_settings(monkeypatch):
    """Keep logs quiet and settings fresh for every invocation."""
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    monkeypatch.delenv("CONCEPT_ALIASES_PATH", raising=False)
    monkeypatch.delenv("TRACE_CONSOLE", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def paper_file(tmp_path):
    """Paper text with a numbered reference list."""
    path = tmp_path / "paper.txt"
    path.write_text(PAPER_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def aliases_file(tmp_path):
    """YAML concept aliases for German rewrites."""
    path = tmp_path / "aliases.yaml"
    path.write_text(
        "kurkuma: curcumin\n"
        "anti-inflammatory:\n"
        "  - entzündungshemmende\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def injection_request(tmp_path):
    """Injection request with one curcumin mapping."""
    payload = {
        "simplified_text": "Kurkuma kann starke entzündungshemmende Wirkungen haben.",
        "original_mappings": [
            {
                "original_sentence": (
                    "Curcumin exhibits potent anti-inflammatory properties "
                    "(Smith et al., 2020)."
                ),
                "citations": ["(Smith et al., 2020)"],
                "keywords": [],
                "concepts": ["curcumin", "anti-inflammatory"],
                "sentence_id": "sent_0_abcdef12",
            }
        ],
    }
    path = tmp_path / "inject.json"
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def bibliography_request(tmp_path):
    """Answer citing [2] before [1] with a three-entry catalog."""
    payload = {
        "answer_text": "Curcumin helps [2]. It was confirmed later [1][2].",
        "sources": [
            {"number": 1, "title": "Curcumin and inflammation", "year": 2020,
             "authors": ["Smith J", "Doe A"], "journal": "J Nutr Biochem"},
            {"number": 2, "title": "Resveratrol review", "year": 2019,
             "authors": ["Miller K"]},
            {"number": 3, "title": "Green tea catechins", "pmid": "12345678",
             "year": None},
        ],
    }
    path = tmp_path / "bibliography.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path
