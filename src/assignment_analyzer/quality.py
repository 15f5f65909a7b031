"""
Content-Quality "Mark": a 0-100 composite of seven weighted sub-scores.

Each sub-score blends two or three signals through fixed breakpoint tables
and is clamped to [0, 100] before weighting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .config import QualityWeights
from .features import (
    expressive_punctuation_count,
    monotone_triples,
    numeric_token_count,
    paragraph_count,
    population_stddev,
    proper_noun_count,
    quality_formal_count,
    round_half_up,
    top_repeated_words,
    transition_count,
)
from .models import QualityBreakdown
from .tokenization import normalize_to_words

# Word-count tiers for content depth: (upper bound, points).
WORD_COUNT_TIERS = ((50, 20.0), (150, 40.0), (300, 60.0), (1000, 80.0))
WORD_COUNT_TOP_POINTS = 95.0
ORIGINALITY_TOP_WORDS = 5


@dataclass(slots=True)
class QualityInputs:
    """Everything the quality sub-scores read from a document."""

    text: str
    words: Sequence[str]
    sentences: Sequence[str]
    sentence_scores: Sequence[int]

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def sentence_count(self) -> int:
        return len(self.sentences)

    @property
    def char_count(self) -> int:
        return len(self.text)


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


def _sentence_lengths(sentences: Sequence[str]) -> list[int]:
    return [len(normalize_to_words(sentence)) for sentence in sentences]


def structure_score(data: QualityInputs) -> float:
    paragraphs = max(1, paragraph_count(data.text))
    per_paragraph = data.sentence_count / paragraphs
    if 2 <= per_paragraph <= 6:
        para_score = 80.0
    elif per_paragraph > 0:
        para_score = 50.0
    else:
        para_score = 20.0

    spread = population_stddev(_sentence_lengths(data.sentences))
    if spread > 3:
        variety_score = 90.0
    elif spread > 1.5:
        variety_score = 70.0
    else:
        variety_score = 40.0
    return _clamp(para_score * 0.4 + variety_score * 0.6)


def clarity_score(data: QualityInputs) -> float:
    avg_words = data.word_count / data.sentence_count if data.sentence_count else 0.0
    if 8 < avg_words < 30:
        length_score = 80.0
    elif avg_words > 5:
        length_score = 60.0
    else:
        length_score = 30.0

    if len(data.sentence_scores) <= 1:
        return _clamp(length_score)

    # Even per-sentence AI scores read as a coherent voice.
    spread = population_stddev(list(data.sentence_scores))
    if spread < 20:
        coherence_score = 85.0
    elif spread < 40:
        coherence_score = 70.0
    else:
        coherence_score = 50.0
    return _clamp(length_score * 0.4 + coherence_score * 0.6)


def language_score(data: QualityInputs) -> float:
    diversity = len(set(data.words)) / max(1, data.word_count) * 100
    if 35 < diversity < 75:
        diversity_score = 90.0
    elif diversity > 20:
        diversity_score = 70.0
    else:
        diversity_score = 40.0

    formal = quality_formal_count(data.text)
    formal_score = min(100.0, formal / max(1, data.sentence_count) * 100)

    punctuation = expressive_punctuation_count(data.text)
    punct_score = min(100.0, punctuation / max(1, data.word_count) * 300)
    return _clamp(diversity_score * 0.4 + formal_score * 0.3 + punct_score * 0.3)


def depth_score(data: QualityInputs) -> float:
    words = data.word_count
    length_score = WORD_COUNT_TOP_POINTS
    for upper, points in WORD_COUNT_TIERS:
        if words < upper:
            length_score = points
            break

    chars_per_word = data.char_count / words if words else 0.0
    if 3.5 < chars_per_word < 7:
        density_score = 85.0
    elif chars_per_word > 3:
        density_score = 70.0
    else:
        density_score = 50.0

    sentence_depth = min(100.0, data.sentence_count / max(1, words) * 2000)
    return _clamp(length_score * 0.5 + density_score * 0.3 + sentence_depth * 0.2)


def originality_score(data: QualityInputs) -> float:
    top = top_repeated_words(data.words, ORIGINALITY_TOP_WORDS)
    repetition_rate = sum(item.count for item in top) / max(1, data.word_count) * 100
    repetition_score = max(20.0, 100 - repetition_rate * 2)

    unique = len(set(data.words)) / max(1, data.word_count) * 100
    if unique > 40:
        uniqueness_score = 90.0
    elif unique > 25:
        uniqueness_score = 70.0
    else:
        uniqueness_score = 40.0
    return _clamp(repetition_score * 0.5 + uniqueness_score * 0.5)


def relevance_score(data: QualityInputs) -> float:
    proper_nouns = proper_noun_count(data.sentences)
    proper_score = min(90.0, max(40.0, proper_nouns * 3.0))
    number_score = min(85.0, numeric_token_count(data.text) * 2.0)
    question_score = 70.0 if "?" in data.text else 50.0
    return _clamp(proper_score * 0.4 + number_score * 0.3 + question_score * 0.3)


def consistency_score(data: QualityInputs) -> float:
    transitions = transition_count(data.text)
    transition_score = min(90.0, 50.0 + transitions * 10) if transitions else 50.0

    flow_score = 50.0
    if data.sentence_count > 3:
        changes = monotone_triples(_sentence_lengths(data.sentences))
        flow_score = min(95.0, 50.0 + changes * 8)

    paragraphs = paragraph_count(data.text)
    coherence_score = min(90.0, 60.0 + paragraphs * 3) if paragraphs > 1 else 50.0
    return _clamp(transition_score * 0.4 + flow_score * 0.3 + coherence_score * 0.3)


def quality_breakdown(data: QualityInputs) -> QualityBreakdown:
    if not data.words:
        return QualityBreakdown()
    return QualityBreakdown(
        structure=structure_score(data),
        clarity=clarity_score(data),
        language=language_score(data),
        depth=depth_score(data),
        originality=originality_score(data),
        relevance=relevance_score(data),
        consistency=consistency_score(data),
    )


def content_mark(
    breakdown: QualityBreakdown, weights: QualityWeights | None = None
) -> int:
    """Weighted sum of the sub-scores, rounded and clamped to [0, 100]."""
    weights = weights or QualityWeights()
    total = (
        breakdown.structure * weights.structure
        + breakdown.clarity * weights.clarity
        + breakdown.language * weights.language
        + breakdown.depth * weights.depth
        + breakdown.originality * weights.originality
        + breakdown.relevance * weights.relevance
        + breakdown.consistency * weights.consistency
    )
    return max(0, min(100, round_half_up(total)))
