from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, TypedDict

import typer
import yaml

from .config import AnalyzerConfig, load_config
from .extraction import SUPPORTED_INPUT_EXTENSIONS, load_document
from .models import Document, ScoreResult
from .pipeline import AnalysisOptions, analyze as run_analysis
from .report import render_text_report

app = typer.Typer(help="Assignment AI-likelihood and quality analyzer.", no_args_is_help=True)

# Maximum number of files accepted in one batch.
MAX_BATCH_FILES = 30


class BestMatchPayload(TypedDict):
    name: str
    percentage: float


class RepeatedWordPayload(TypedDict):
    word: str
    count: int


class DocumentSummary(TypedDict):
    name: str
    selected_subject: str | None
    word_count: int
    char_count: int
    sentence_count: int
    avg_sentence_length: float
    ai_likelihood: int
    ai_label: str
    content_mark: int
    quality: Dict[str, float]
    subjects: List[str]
    repeated_words: List[RepeatedWordPayload]
    best_match: BestMatchPayload | None
    highlighted_sentence_indices: List[int]
    highlighted_percent: int
    code_line_count: int
    code_percentage: int
    possible_screenshot: bool


@app.command()
def analyze(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=True, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    reference: Path | None = typer.Option(
        None, "--reference", "-r", help="Reference corpus text file."
    ),
    workers: int | None = typer.Option(
        None, "--workers", "-w", help="Documents analyzed in parallel (1 = sequential)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Analyze the input files and emit a JSON summary."""
    _configure_logging(verbose)
    cfg = _build_config(config, reference, workers)
    documents = _load_documents(input_path)
    results = run_analysis(documents, cfg)
    typer.echo(json.dumps({"documents": [_result_dict(r) for r in results]}, indent=2))


@app.command()
def report(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=True, file_okay=True
    ),
    output_path: Path | None = typer.Option(
        None, "--output-path", "-o", dir_okay=False, help="Write the report here."
    ),
    subject: str | None = typer.Option(
        None, "--subject", "-s", help="Subject selected for the batch."
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    reference: Path | None = typer.Option(
        None, "--reference", "-r", help="Reference corpus text file."
    ),
    workers: int | None = typer.Option(
        None, "--workers", "-w", help="Documents analyzed in parallel (1 = sequential)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Analyze the input files and render the plain-text report."""
    _configure_logging(verbose)
    cfg = _build_config(config, reference, workers)
    documents = _load_documents(input_path)
    results = run_analysis(documents, cfg, AnalysisOptions(selected_subject=subject))
    text = render_text_report(results, repeated_limit=cfg.report_repeated_words)
    if output_path is None:
        typer.echo(text)
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    typer.echo(f"Wrote report for {len(results)} file(s) to {output_path}")


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = AnalyzerConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_config(
    config_path: Path | None, reference: Path | None, workers: int | None
) -> AnalyzerConfig:
    """Load the configuration and apply CLI overrides."""
    try:
        cfg = load_config(config_path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    if reference is not None:
        cfg.reference_corpus_path = str(reference)
    if workers is not None:
        cfg.workers = max(1, workers)
    return cfg


def _load_documents(input_path: Path) -> List[Document]:
    """Expand the input path into documents, sorted for deterministic output."""
    if input_path.is_file():
        return [_read_document(input_path, input_path.name)]

    files = sorted(
        p
        for p in input_path.rglob("*")
        if p.is_file() and p.suffix.lower() in SUPPORTED_INPUT_EXTENSIONS
    )
    if not files:
        raise typer.BadParameter(
            f"No supported files ({', '.join(sorted(SUPPORTED_INPUT_EXTENSIONS))}) "
            f"found in {input_path}",
            param_hint="--input-path",
        )
    if len(files) > MAX_BATCH_FILES:
        raise typer.BadParameter(
            f"Please select up to {MAX_BATCH_FILES} files (found {len(files)}).",
            param_hint="--input-path",
        )
    return [_read_document(file, str(file.relative_to(input_path))) for file in files]


def _read_document(path: Path, doc_id: str) -> Document:
    try:
        return load_document(path, doc_id)
    except OSError as exc:
        raise typer.BadParameter(f"Analysis failed: {exc}") from exc


def _result_dict(result: ScoreResult) -> DocumentSummary:
    """Serialize a ScoreResult so it can be emitted in JSON."""
    best: BestMatchPayload | None = None
    if result.best_match.name:
        best = {
            "name": result.best_match.name,
            "percentage": round(result.best_match.percentage, 2),
        }
    quality: Dict[str, Any] = asdict(result.quality)
    return {
        "name": result.name,
        "selected_subject": result.selected_subject,
        "word_count": result.word_count,
        "char_count": result.char_count,
        "sentence_count": result.sentence_count,
        "avg_sentence_length": result.avg_sentence_length,
        "ai_likelihood": result.ai_likelihood,
        "ai_label": result.ai_label,
        "content_mark": result.content_mark,
        "quality": {key: round(value, 2) for key, value in quality.items()},
        "subjects": list(result.subjects),
        "repeated_words": [
            {"word": item.word, "count": item.count} for item in result.repeated_words
        ],
        "best_match": best,
        "highlighted_sentence_indices": sorted(result.highlighted_sentence_indices),
        "highlighted_percent": result.highlighted_percent,
        "code_line_count": result.code_line_count,
        "code_percentage": result.code_percentage,
        "possible_screenshot": result.possible_screenshot,
    }


if __name__ == "__main__":
    main()
