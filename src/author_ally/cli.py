from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, TypedDict

import typer
import yaml

from .analysis import analyze_corpus
from .config import AuthorAllyConfig, load_config
from .models import Document, DocumentAnalytics

app = typer.Typer(help="Author Ally writing analytics CLI.", no_args_is_help=True)


@app.callback()
def configure(
    log_level: str = typer.Option(
        "WARNING", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)."
    ),
) -> None:
    """Author Ally writing analytics CLI."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def analyze(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=True, file_okay=True
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, readable=True
    ),
    words_per_minute: int | None = typer.Option(
        None, "--words-per-minute", help="Reading speed used for reading time."
    ),
    exclude_spaces: bool = typer.Option(
        False,
        "--exclude-spaces",
        help="Report character_count without whitespace.",
    ),
) -> None:
    """Analyze documents and emit a JSON summary."""
    try:
        cfg = load_config(config)
    except (ValueError, yaml.YAMLError) as exc:
        raise typer.BadParameter(f"Invalid config {config}: {exc}") from exc
    if words_per_minute is not None:
        cfg.words_per_minute = words_per_minute
    if cfg.words_per_minute <= 0:
        raise typer.BadParameter("words_per_minute must be positive.")
    if exclude_spaces:
        cfg.count_spaces = False
    documents = _load_documents(input_path)
    summary = _build_summary(analyze_corpus(documents, cfg))
    typer.echo(json.dumps({"documents": summary}, indent=2))


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = AuthorAllyConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


# File types the CLI reads as plain-text documents.
SUPPORTED_INPUT_EXTENSIONS = {".txt", ".md"}


class ReadabilityPayload(TypedDict):
    score: float
    level: str
    sentence_count: int
    syllable_count: int


class DocumentSummary(TypedDict):
    doc_id: str
    word_count: int
    character_count: int
    character_count_no_spaces: int
    reading_time_minutes: int
    readability: ReadabilityPayload
    tips: List[str]


def _load_documents(input_path: Path) -> List[Document]:
    """Expand the input path into documents keyed by their relative path."""
    if input_path.is_file():
        return [_document_from_file(input_path, input_path.name)]

    files = sorted(
        p
        for p in input_path.rglob("*")
        if p.is_file() and p.suffix.lower() in SUPPORTED_INPUT_EXTENSIONS
    )
    return [
        _document_from_file(file, file.relative_to(input_path).as_posix())
        for file in files
    ]


def _document_from_file(path: Path, doc_id: str) -> Document:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise typer.BadParameter(f"{path} is not UTF-8 text.") from exc
    return Document(doc_id=doc_id, text=text)


def _build_summary(results: Dict[str, DocumentAnalytics]) -> List[DocumentSummary]:
    """Create a JSON-serializable summary for each analyzed document."""
    summary: List[DocumentSummary] = []
    for doc_id, analytics in sorted(results.items()):
        readability = analytics.readability
        summary.append(
            {
                "doc_id": doc_id,
                "word_count": analytics.word_count,
                "character_count": analytics.character_count,
                "character_count_no_spaces": analytics.character_count_no_spaces,
                "reading_time_minutes": analytics.reading_time_minutes,
                "readability": {
                    "score": readability.score,
                    "level": readability.level.value,
                    "sentence_count": readability.sentence_count,
                    "syllable_count": readability.syllable_count,
                },
                "tips": list(analytics.tips),
            }
        )
    return summary


if __name__ == "__main__":
    main()
