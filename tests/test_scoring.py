from assignment_analyzer.config import AiLikelihoodSettings
from assignment_analyzer.features import compute_span_features
from assignment_analyzer.models import SpanFeatures
from assignment_analyzer.scoring import (
    AI_LABEL,
    HUMAN_LABEL,
    MIXED_LABEL,
    ai_likelihood,
    label_ai_score,
    score_sentences,
    score_text,
)
from assignment_analyzer.tokenization import normalize_to_words, split_sentences
from tests.utils import REPEATED_TEXT


def _features(**overrides) -> SpanFeatures:
    values = dict(
        word_count=100,
        sentence_count=5,
        avg_sentence_length=10.0,
        stddev_sentence_length=8.0,
        length_variation=20,
        unique_ratio=0.8,
        starter_ratio=0.9,
        phrase_hits=0,
        irregularities=2,
        repeated_word_count=0,
    )
    values.update(overrides)
    return SpanFeatures(**values)


def test_repeated_text_accumulates_expected_flags():
    """Range, vocabulary, starters, tidy punctuation and repetition: 15+15+10+10+10."""
    sentences = [s.text for s in split_sentences(REPEATED_TEXT)]
    score = score_text(REPEATED_TEXT, normalize_to_words(REPEATED_TEXT), sentences)

    assert score == 60
    assert label_ai_score(score) == MIXED_LABEL


def test_empty_text_scores_zero():
    assert score_text("", [], []) == 0
    assert ai_likelihood(_features(word_count=0, irregularities=0)) == 0


def test_human_like_features_score_zero():
    assert ai_likelihood(_features()) == 0


def test_phrase_hits_are_capped():
    assert ai_likelihood(_features(phrase_hits=2)) == 12
    assert ai_likelihood(_features(phrase_hits=10)) == 20


def test_repeated_formal_phrase_scores_once():
    """Four "Moreover" openers add the points of a single phrase."""
    text = "Moreover we went. Moreover it rained. Moreover we left. Moreover done."
    sentences = [s.text for s in split_sentences(text)]
    features = compute_span_features(text, normalize_to_words(text), sentences)
    assert features.phrase_hits == 1


def test_consistency_and_long_document_bonus():
    features = _features(
        sentence_count=9,
        avg_sentence_length=15.0,
        stddev_sentence_length=2.0,
        phrase_hits=5,
        irregularities=1,
    )
    assert ai_likelihood(features) == 45


def test_reference_overlap_only_counts_above_activation():
    assert ai_likelihood(_features(reference_ratio=0.05)) == 0
    assert ai_likelihood(_features(reference_ratio=0.5)) == 15


def test_score_is_clamped_to_100():
    features = _features(
        sentence_count=12,
        avg_sentence_length=15.0,
        stddev_sentence_length=0.0,
        length_variation=0,
        unique_ratio=0.1,
        starter_ratio=0.1,
        phrase_hits=10,
        irregularities=0,
        repeated_word_count=50,
        reference_ratio=1.0,
    )
    assert ai_likelihood(features) == 100


def test_custom_settings_change_points():
    settings = AiLikelihoodSettings(irregularity_points=40.0)
    assert ai_likelihood(_features(irregularities=0), settings) == 40


def test_labels_follow_cutoffs():
    assert label_ai_score(0) == HUMAN_LABEL
    assert label_ai_score(34) == HUMAN_LABEL
    assert label_ai_score(35) == MIXED_LABEL
    assert label_ai_score(69) == MIXED_LABEL
    assert label_ai_score(70) == AI_LABEL
    assert label_ai_score(100) == AI_LABEL


def test_score_sentences_treats_each_sentence_as_document():
    """A lone sentence gets the range and punctuation flags but no starter flag."""
    sentences = split_sentences(REPEATED_TEXT)
    assert score_sentences(sentences) == [25, 25, 25]
    assert score_sentences([]) == []
