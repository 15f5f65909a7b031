from __future__ import annotations

from typing import AbstractSet, List, Sequence

from .config import AiLikelihoodSettings
from .features import compute_span_features, round_half_up
from .models import Sentence, SpanFeatures
from .tokenization import normalize_to_words

HUMAN_LABEL = "Human-written"
MIXED_LABEL = "Mixed (AI + Human)"
AI_LABEL = "Likely AI-generated"


def ai_likelihood(features: SpanFeatures, settings: AiLikelihoodSettings | None = None) -> int:
    """Accumulate threshold points into a 0-100 AI-likelihood score."""
    settings = settings or AiLikelihoodSettings()
    if features.word_count == 0:
        return 0

    score = 0.0
    avg = features.avg_sentence_length
    if (
        settings.consistency_min_avg <= avg <= settings.consistency_max_avg
        and features.stddev_sentence_length < settings.consistency_max_stddev
    ):
        score += settings.consistency_points
    if features.length_variation < settings.range_max_variation:
        score += settings.range_points
    if features.unique_ratio < settings.uniqueness_threshold:
        score += settings.uniqueness_points
    if features.sentence_count and features.starter_ratio < settings.starter_threshold:
        score += settings.starter_points

    score += min(features.phrase_hits * settings.phrase_points, settings.phrase_cap)

    if features.irregularities == 0:
        score += settings.irregularity_points
    if features.repeated_word_count > features.word_count * settings.repetition_ratio:
        score += settings.repetition_points

    ratio = features.reference_ratio
    if ratio is not None and ratio > settings.reference_activation:
        score += ratio * settings.reference_weight

    if (
        features.sentence_count > settings.long_min_sentences
        and avg > settings.long_min_avg
    ):
        score += settings.long_points

    return max(0, min(round_half_up(score), 100))


def label_ai_score(score: int, settings: AiLikelihoodSettings | None = None) -> str:
    settings = settings or AiLikelihoodSettings()
    if score < settings.mixed_label_from:
        return HUMAN_LABEL
    if score < settings.ai_label_from:
        return MIXED_LABEL
    return AI_LABEL


def score_text(
    text: str,
    words: Sequence[str],
    sentences: Sequence[str],
    *,
    settings: AiLikelihoodSettings | None = None,
    reference_words: AbstractSet[str] | None = None,
) -> int:
    """Extract span features and compose the AI-likelihood in one step."""
    settings = settings or AiLikelihoodSettings()
    features = compute_span_features(
        text,
        words,
        sentences,
        reference_words=reference_words,
        repetition_min_count=settings.repetition_min_count,
    )
    return ai_likelihood(features, settings)


def score_sentences(
    sentences: Sequence[Sentence],
    *,
    settings: AiLikelihoodSettings | None = None,
    reference_words: AbstractSet[str] | None = None,
) -> List[int]:
    """Score each sentence as a one-sentence document."""
    return [
        score_text(
            sentence.text,
            normalize_to_words(sentence.text),
            [sentence.text],
            settings=settings,
            reference_words=reference_words,
        )
        for sentence in sentences
    ]
