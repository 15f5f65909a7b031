from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Document:
    """Represents an ingested document."""

    doc_id: str
    text: str
    byte_size: int = 0
    source_name: str = ""

    @property
    def name(self) -> str:
        return self.source_name or self.doc_id


@dataclass(frozen=True, slots=True)
class Sentence:
    """A sentence and its inclusive-exclusive character offsets."""

    text: str
    start_char: int
    end_char: int

    @property
    def span_length(self) -> int:
        return self.end_char - self.start_char


@dataclass(slots=True)
class SpanFeatures:
    """AI-likelihood signals computed over a text span."""

    word_count: int
    sentence_count: int
    avg_sentence_length: float
    stddev_sentence_length: float
    length_variation: int
    unique_ratio: float
    starter_ratio: float
    phrase_hits: int
    irregularities: int
    repeated_word_count: int
    reference_ratio: float | None = None


@dataclass(frozen=True, slots=True)
class RepeatedWord:
    word: str
    count: int


@dataclass(frozen=True, slots=True)
class BestMatch:
    """Most similar other document in a batch."""

    name: str = ""
    percentage: float = 0.0


@dataclass(frozen=True, slots=True)
class QualityBreakdown:
    """The seven Content-Quality sub-scores, each in [0, 100]."""

    structure: float = 0.0
    clarity: float = 0.0
    language: float = 0.0
    depth: float = 0.0
    originality: float = 0.0
    relevance: float = 0.0
    consistency: float = 0.0


@dataclass(frozen=True, slots=True)
class HighlightSelection:
    """Sentences flagged as AI-like under the coverage cap."""

    indices: frozenset[int] = frozenset()
    signal_counts: Tuple[int, ...] = ()
    highlighted_char_count: int = 0
    highlighted_percent: int = 0


@dataclass(frozen=True, slots=True)
class SentenceScore:
    """Per-sentence AI-likelihood, kept for previews."""

    index: int
    sentence: Sentence
    ai_likelihood: int
    ai_label: str
    signal_count: int
    highlighted: bool


@dataclass(frozen=True, slots=True)
class ScoreResult:
    """Full analysis record for one document."""

    name: str
    byte_size: int
    word_count: int
    char_count: int
    sentence_count: int
    avg_sentence_length: float
    ai_likelihood: int
    ai_label: str
    content_mark: int
    quality: QualityBreakdown
    subjects: Tuple[str, ...]
    repeated_words: Tuple[RepeatedWord, ...]
    best_match: BestMatch
    highlighted_sentence_indices: frozenset[int]
    highlighted_char_count: int
    highlighted_percent: int
    code_line_count: int
    code_percentage: int
    possible_screenshot: bool
    sentences: Tuple[SentenceScore, ...] = ()
    selected_subject: str | None = None
