"""
Statistical signals extracted from text spans.

Every extractor is a pure function of text, words and sentence texts and
returns its neutral value (usually 0) for empty input.
"""

from __future__ import annotations

import statistics
from collections import Counter
from typing import AbstractSet, Iterable, List, Pattern, Sequence, Tuple

from .models import RepeatedWord, SpanFeatures
from .patterns import (
    CAPITALIZED_WORD_RE,
    CODE_LINE_RE,
    DIGIT_RUN_RE,
    EXPRESSIVE_PUNCTUATION_RE,
    FORMAL_PHRASE_PATTERNS,
    LINE_SPLIT_RE,
    PUNCTUATION_IRREGULARITY_RE,
    QUALITY_FORMAL_PATTERNS,
    TRANSITION_PATTERNS,
)
from .tokenization import normalize_to_words, split_paragraphs


def sentence_word_counts(sentences: Iterable[str]) -> List[int]:
    """Normalized word count of each sentence, skipping word-less sentences."""
    counts = (len(normalize_to_words(sentence)) for sentence in sentences)
    return [count for count in counts if count > 0]


def mean_length(lengths: Sequence[int]) -> float:
    return float(statistics.mean(lengths)) if lengths else 0.0


def sample_stddev(values: Sequence[float]) -> float:
    """Sample standard deviation; 0 for fewer than two values."""
    if len(values) <= 1:
        return 0.0
    return float(statistics.stdev(values))


def population_stddev(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return float(statistics.pstdev(values))


def length_variation(lengths: Sequence[int]) -> int:
    """Difference between the longest and shortest sentence."""
    if not lengths:
        return 0
    return max(lengths) - min(lengths)


def unique_ratio(words: Sequence[str]) -> float:
    if not words:
        return 0.0
    return len(set(words)) / len(words)


def starter_ratio(sentences: Sequence[str]) -> float:
    """Unique opening words divided by the number of sentences."""
    starters = [sentence.strip().split(" ")[0].lower() for sentence in sentences]
    if not starters:
        return 0.0
    return len(set(starters)) / len(starters)


def count_pattern_hits(text: str, patterns: Iterable[Pattern[str]]) -> int:
    """Total number of matches of all patterns in text."""
    if not text:
        return 0
    return sum(len(pattern.findall(text)) for pattern in patterns)


def formal_phrase_hits(text: str) -> int:
    """Number of distinct formal phrases present; repeats count once."""
    if not text:
        return 0
    return sum(1 for pattern in FORMAL_PHRASE_PATTERNS if pattern.search(text))


def quality_formal_count(text: str) -> int:
    return count_pattern_hits(text, QUALITY_FORMAL_PATTERNS)


def transition_count(text: str) -> int:
    return count_pattern_hits(text, TRANSITION_PATTERNS)


def punctuation_irregularities(text: str) -> int:
    """Count doubled commas, doubled ``!``/``?`` and runs of 2+ spaces."""
    if not text:
        return 0
    return len(PUNCTUATION_IRREGULARITY_RE.findall(text))


def repeated_word_count(words: Sequence[str], min_count: int = 4) -> int:
    """Number of distinct words occurring more than ``min_count`` times."""
    frequencies = Counter(words)
    return sum(1 for count in frequencies.values() if count > min_count)


def reference_ratio(words: Sequence[str], reference_words: AbstractSet[str]) -> float:
    """Fraction of words that also occur in the reference vocabulary."""
    if not words:
        return 0.0
    matches = sum(1 for word in words if word in reference_words)
    return matches / len(words)


def paragraph_count(text: str) -> int:
    return len(split_paragraphs(text))


def proper_noun_count(sentences: Iterable[str]) -> int:
    """Capitalized words per sentence, not counting the sentence opener."""
    total = 0
    for sentence in sentences:
        capitalized = CAPITALIZED_WORD_RE.findall(sentence.strip())
        total += max(0, len(capitalized) - 1)
    return total


def numeric_token_count(text: str) -> int:
    if not text:
        return 0
    return len(DIGIT_RUN_RE.findall(text))


def expressive_punctuation_count(text: str) -> int:
    if not text:
        return 0
    return len(EXPRESSIVE_PUNCTUATION_RE.findall(text))


def monotone_triples(lengths: Sequence[int]) -> int:
    """Count runs of three sentences getting steadily longer or shorter."""
    changes = 0
    for idx in range(2, len(lengths)):
        a, b, c = lengths[idx - 2], lengths[idx - 1], lengths[idx]
        if (c > b > a) or (c < b < a):
            changes += 1
    return changes


def top_repeated_words(words: Sequence[str], limit: int = 8) -> Tuple[RepeatedWord, ...]:
    """Most frequent words, ties kept in first-seen order."""
    if limit <= 0:
        return ()
    return tuple(
        RepeatedWord(word=word, count=count)
        for word, count in Counter(words).most_common(limit)
    )


def code_line_stats(text: str) -> Tuple[int, int]:
    """Return (code-like line count, percentage of lines that look like code)."""
    lines = LINE_SPLIT_RE.split(text or "")
    code_lines = sum(1 for line in lines if CODE_LINE_RE.search(line))
    percentage = round_half_up(code_lines / max(1, len(lines)) * 100)
    return code_lines, percentage


def is_possible_screenshot(
    text: str, byte_size: int, min_bytes: int = 100_000, max_chars: int = 200
) -> bool:
    """Large source file that yielded almost no text."""
    return byte_size > min_bytes and len((text or "").strip()) < max_chars


def round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def compute_span_features(
    text: str,
    words: Sequence[str],
    sentences: Sequence[str],
    *,
    reference_words: AbstractSet[str] | None = None,
    repetition_min_count: int = 4,
) -> SpanFeatures:
    """
    Compute the AI-likelihood signals of a span.

    Documents pass all of their sentence texts; a single sentence is scored
    by passing ``[sentence]`` so both levels share one implementation.
    """
    analysed = [sentence for sentence in sentences if normalize_to_words(sentence)]
    lengths = sentence_word_counts(analysed)
    return SpanFeatures(
        word_count=len(words),
        sentence_count=len(analysed),
        avg_sentence_length=mean_length(lengths),
        stddev_sentence_length=sample_stddev(lengths),
        length_variation=length_variation(lengths),
        unique_ratio=unique_ratio(words),
        starter_ratio=starter_ratio(analysed),
        phrase_hits=formal_phrase_hits(text),
        irregularities=punctuation_irregularities(text),
        repeated_word_count=repeated_word_count(words, repetition_min_count),
        reference_ratio=(
            reference_ratio(words, reference_words) if reference_words else None
        ),
    )
