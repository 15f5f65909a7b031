from __future__ import annotations

import math
from collections import Counter
from typing import Dict, Sequence

from .config import HighlightSettings
from .features import round_half_up
from .models import HighlightSelection, Sentence
from .patterns import SIGNAL_PATTERNS
from .tokenization import normalize_to_words

# Sentences shorter than this never count as mechanical or non-specific.
MIN_WORDS_FOR_TONE_SIGNALS = 6


def sentence_signals(text: str) -> Dict[str, bool]:
    """Evaluate the independent AI-style heuristics for one sentence."""
    stripped = (text or "").strip()
    words = normalize_to_words(stripped)
    long_enough = len(words) > MIN_WORDS_FOR_TONE_SIGNALS
    frequencies = Counter(words)
    return {
        "generic": bool(SIGNAL_PATTERNS["generic"].search(stripped)),
        "template": bool(SIGNAL_PATTERNS["template"].search(stripped)),
        "transition": bool(SIGNAL_PATTERNS["transition"].search(stripped)),
        "repetitive": any(count >= 3 for count in frequencies.values()),
        "vague": bool(SIGNAL_PATTERNS["vague"].search(stripped)),
        "mechanical": long_enough and not SIGNAL_PATTERNS["pronoun"].search(stripped),
        "passive": bool(SIGNAL_PATTERNS["passive"].search(stripped)),
        "nonspecific": long_enough
        and not SIGNAL_PATTERNS["digit"].search(stripped)
        and not SIGNAL_PATTERNS["proper_noun"].search(stripped),
    }


def signal_count(text: str) -> int:
    return sum(1 for fired in sentence_signals(text).values() if fired)


def select_highlights(
    sentences: Sequence[Sentence],
    document_length: int,
    settings: HighlightSettings | None = None,
) -> HighlightSelection:
    """
    Pick AI-like sentences to highlight without exceeding the coverage cap.

    Candidates carry at least ``min_signals`` signals; they are taken in
    order of descending signal count, shorter sentences first on ties, while
    the accepted character total stays within ``coverage_cap`` of the document.
    """
    settings = settings or HighlightSettings()
    counts = tuple(signal_count(sentence.text) for sentence in sentences)
    if document_length <= 0:
        return HighlightSelection(signal_counts=counts)

    candidates = [
        (idx, count, sentences[idx].span_length)
        for idx, count in enumerate(counts)
        if count >= settings.min_signals
    ]
    candidates.sort(key=lambda item: (-item[1], item[2]))

    cap = math.floor(document_length * settings.coverage_cap)
    accepted: set[int] = set()
    total = 0
    for idx, _, length in candidates:
        if total + length <= cap:
            total += length
            accepted.add(idx)

    return HighlightSelection(
        indices=frozenset(accepted),
        signal_counts=counts,
        highlighted_char_count=total,
        highlighted_percent=round_half_up(total / document_length * 100),
    )
