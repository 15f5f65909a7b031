"""Human-readable plain-text reports for analysed batches."""

from __future__ import annotations

from datetime import datetime
from typing import List, Sequence

from .models import ScoreResult
from .patterns import DEFAULT_SUBJECT

TITLE = "AI Assignment Analysis System"
RULE = "=" * 60
SECTION_RULE = "-" * 60
DISCLAIMER = (
    "Disclaimer: AI detection is based on linguistic patterns and provides an "
    "estimated likelihood, not a confirmed result."
)
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_bytes(size: int) -> str:
    """Format a byte count as B/KB/MB/GB with two decimals."""
    if size <= 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB"]
    value = float(size)
    power = 0
    while value >= 1024 and power < len(units) - 1:
        value /= 1024
        power += 1
    return f"{value:.2f} {units[power]}"


def format_repeated(result: ScoreResult, limit: int = 5) -> str:
    items = [f"{item.word}({item.count})" for item in result.repeated_words[:limit]]
    return ", ".join(items) or "N/A"


def format_best_match(result: ScoreResult) -> str:
    if not result.best_match.name:
        return "None"
    return f"{result.best_match.name} ({result.best_match.percentage:.2f}%)"


def render_text_report(
    results: Sequence[ScoreResult],
    selected_subject: str | None = None,
    generated_at: datetime | None = None,
    *,
    repeated_limit: int = 5,
) -> str:
    """Render the batch report: header, statistics, per-file sections, footer."""
    generated_at = generated_at or datetime.now()
    subject = (
        selected_subject
        or next((r.selected_subject for r in results if r.selected_subject), None)
        or DEFAULT_SUBJECT
    )

    detected: List[str] = []
    for result in results:
        for label in result.subjects:
            if label not in detected:
                detected.append(label)

    header = [
        TITLE,
        f"Report generated: {generated_at.strftime(TIMESTAMP_FORMAT)}",
        f"Subject (selected): {subject}",
        f"Subjects detected: {', '.join(detected) or DEFAULT_SUBJECT}",
        RULE,
        "Files analyzed:",
        "\n".join(
            f"- {result.name} ({format_bytes(result.byte_size) if result.byte_size else 'n/a'})"
            for result in results
        ),
        RULE,
    ]

    total_words = sum(result.word_count for result in results)
    total_sentences = sum(result.sentence_count for result in results)
    overall_avg = total_words / total_sentences if total_sentences else 0.0
    summary = [
        "Basic statistics:",
        f"Total word count: {total_words}",
        f"Total sentence count: {total_sentences}",
        f"Average sentence length (overall): {overall_avg:.2f}",
        RULE,
    ]

    sections: List[str] = []
    for result in results:
        sections.extend(
            _file_section(result, result.selected_subject or subject, repeated_limit)
        )
        sections.append(SECTION_RULE)

    footer = [DISCLAIMER, "End of report"]
    return "\n\n".join(
        "\n".join(block) for block in (header, summary, sections, footer)
    )


def render_file_report(result: ScoreResult, text: str = "", *, preview_chars: int = 2000) -> str:
    """Render the short single-file report with a text preview."""
    lines = [
        "AI Assignment Analysis - Single File",
        f"File: {result.name or 'Unnamed'}",
        f"Words: {result.word_count}",
        f"Sentences: {result.sentence_count}",
        f"AI likelihood: {result.ai_likelihood}%",
        f"Mark: {result.content_mark} / 100",
        f"Top repeated words: {format_repeated(result)}",
        "---",
        text[:preview_chars],
    ]
    return "\n".join(lines)


def _file_section(result: ScoreResult, subject: str, repeated_limit: int) -> List[str]:
    return [
        f"File: {result.name}",
        f"- Selected Subject: {subject}",
        f"- Detected Subjects: {', '.join(result.subjects) or DEFAULT_SUBJECT}",
        f"- AI likelihood: {result.ai_likelihood}%",
        f"- AI label: {result.ai_label}",
        f"- Word Count: {result.word_count}",
        f"- Character Count: {result.char_count}",
        f"- Sentences: {result.sentence_count}",
        f"- Avg. sentence length: {result.avg_sentence_length}",
        f"- Top repeated words: {format_repeated(result, repeated_limit)}",
        f"- Mark: {result.content_mark} / 100",
        f"- Best match: {format_best_match(result)}",
        f"- Highlighted AI-like text: {result.highlighted_percent}%",
        f"- Code content: {result.code_line_count} lines ({result.code_percentage}%)",
        f"- Image / screenshot likely: {'Yes' if result.possible_screenshot else 'No'}",
    ]
