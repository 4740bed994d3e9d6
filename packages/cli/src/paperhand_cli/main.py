"""Paperhand CLI - Main entry point.

Provides the `paperhand` command-line interface.

Usage:
    paperhand normalize extract.json > normalized.json
    paperhand extract paper.txt --format report
    cat request.json | paperhand inject - --aliases aliases.yaml

Every command reads from a file path or `-` (stdin) and prints JSON on
stdout. Logs go to stderr.
"""

import json
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError

from paperhand_common import (
    PayloadError,
    configure_logging,
    get_settings,
    init_telemetry,
)
from paperhand_contracts import (
    BibliographyRequest,
    InjectionRequest,
    NormalizeRequest,
)
from paperhand_text import (
    FingerprintExtractor,
    extract_citations,
    format_bibliography,
    inject_citations_with_stats,
    normalize_extract,
    remove_references_section,
)

from paperhand_cli.formatters import (
    OutputFormat,
    format_bibliography_text,
    format_citation_result,
    format_json,
)


# Create the Typer app
app = typer.Typer(
    name="paperhand",
    help="Clean scientific PDF text, extract citations and re-attach them to rewrites.",
    add_completion=False,
)


@app.callback()
def main():
    """Configure logging and tracing from the environment."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_output=settings.log_format == "json")
    if settings.trace_console:
        init_telemetry(service_name="paperhand-cli", console=True)


def read_input(source: str) -> str:
    """Read a file path, or stdin when source is '-'."""
    if source == "-":
        return typer.get_text_stream("stdin").read()
    path = Path(source)
    if not path.is_file():
        raise PayloadError(f"input file not found: {source}")
    return path.read_text(encoding="utf-8")


def parse_json(raw: str) -> Any:
    """Decode a JSON payload, wrapping decoder errors in PayloadError."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise PayloadError(f"invalid JSON input: {e}") from e


def text_payload(raw: str) -> str:
    """Plain text, or the ``text`` field when the input is a JSON object carrying one."""
    stripped = raw.lstrip()
    if stripped.startswith("{"):
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError:
            return raw
        if isinstance(data, dict) and isinstance(data.get("text"), str):
            return data["text"]
    return raw


def normalize_payload(raw: str) -> dict[str, Any]:
    """Build a NormalizeRequest payload from JSON or plain text input.

    A JSON object is used as the request itself. Any other JSON value is
    treated as the extract. Input that is not JSON is plain text.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return {"pdf_text": raw}
    if isinstance(data, dict) and any(
        key in data for key in ("extract", "pdf_extract", "pdf_extract_json", "pdf_text")
    ):
        return data
    return {"extract": data}


def load_fingerprints(aliases: Optional[Path]) -> Optional[FingerprintExtractor]:
    """Fingerprint extractor with concept aliases from --aliases or the settings."""
    if aliases is None:
        configured = get_settings().concept_aliases_path
        if not configured:
            return None
        aliases = Path(configured)
    return FingerprintExtractor.from_yaml(aliases)


def fail(e: Exception) -> None:
    """Print an error and exit with status 1."""
    if isinstance(e, ValidationError):
        message = f"invalid payload: {e.error_count()} validation error(s)\n{e}"
    else:
        message = str(e)
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


@app.command()
def normalize(
    source: str = typer.Argument(
        "-", help="Extract JSON (or plain text) file, '-' for stdin"
    ),
):
    """Normalize a PDF extract into clean full text.

    The input is either a request object ({"extract": ..., "options": {...}})
    or any extract JSON value. Plain text input is normalized as is.

    Examples:

        paperhand normalize extract.json

        echo '{"pdf_text": "...", "keep_page_breaks": "true"}' | paperhand normalize -
    """
    try:
        request = NormalizeRequest.model_validate(normalize_payload(read_input(source)))
        result = normalize_extract(request.extract, request.options)
        typer.echo(format_json(result))
    except Exception as e:
        fail(e)


@app.command()
def extract(
    source: str = typer.Argument("-", help="Text file (or JSON with 'text'), '-' for stdin"),
    format: OutputFormat = typer.Option(
        OutputFormat.json,
        "--format",
        "-f",
        help="Output format",
    ),
    aliases: Optional[Path] = typer.Option(
        None,
        "--aliases",
        help="YAML file with concept aliases used for the sentence fingerprints",
    ),
):
    """Extract in-text citations, references and sentence mappings.

    Examples:

        paperhand extract paper.txt

        paperhand extract paper.txt --format report
    """
    try:
        text = text_payload(read_input(source))
        result = extract_citations(text, fingerprints=load_fingerprints(aliases))
        typer.echo(format_citation_result(result, format))
    except Exception as e:
        fail(e)


@app.command()
def inject(
    source: str = typer.Argument(
        "-", help="Injection request JSON file, '-' for stdin"
    ),
    aliases: Optional[Path] = typer.Option(
        None,
        "--aliases",
        help="YAML file with concept aliases (e.g. German terms -> English concepts)",
    ),
):
    """Re-attach citations from the original mappings to a rewritten text.

    The request carries "simplified_text" and "mappings" (as produced by
    `paperhand extract`). Without --aliases, the CONCEPT_ALIASES_PATH
    setting is used when present.

    Examples:

        paperhand inject request.json --aliases aliases.yaml
    """
    try:
        request = InjectionRequest.model_validate(parse_json(read_input(source)))
        result = inject_citations_with_stats(
            request.simplified_text, request.mappings, load_fingerprints(aliases)
        )
        typer.echo(format_json(result))
    except Exception as e:
        fail(e)


@app.command("strip-references")
def strip_references(
    source: str = typer.Argument("-", help="Text file (or JSON with 'text'), '-' for stdin"),
):
    """Remove the reference section from a text.

    Examples:

        paperhand strip-references paper.txt
    """
    try:
        result = remove_references_section(text_payload(read_input(source)))
        typer.echo(format_json(result))
    except Exception as e:
        fail(e)


@app.command()
def bibliography(
    source: str = typer.Argument(
        "-", help="Bibliography request JSON file, '-' for stdin"
    ),
    format: OutputFormat = typer.Option(
        OutputFormat.json,
        "--format",
        "-f",
        help="Output format (report prints a numbered list)",
    ),
):
    """Order sources by first [n] citation in an answer and render them.

    Examples:

        paperhand bibliography answer.json

        paperhand bibliography answer.json --format report
    """
    try:
        request = BibliographyRequest.model_validate(parse_json(read_input(source)))
        result = format_bibliography(request.answer_text, request.sources)
        if format == OutputFormat.report:
            typer.echo(format_bibliography_text(result))
        else:
            typer.echo(format_json(result))
    except Exception as e:
        fail(e)


if __name__ == "__main__":
    app()
