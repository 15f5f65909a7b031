from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from .models import BestMatch
from .tokenization import normalize_to_words

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReferenceCorpus:
    """Static reference text, read once and shared read-only."""

    text: str
    words: frozenset[str]

    @classmethod
    def from_text(cls, text: str) -> "ReferenceCorpus":
        return cls(text=text, words=frozenset(normalize_to_words(text)))

    def __bool__(self) -> bool:
        return bool(self.words)


def load_reference_corpus(path: str | Path | None) -> ReferenceCorpus | None:
    """Load the reference corpus, returning None when it is absent or unreadable."""
    if path is None:
        return None
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning("Reference corpus %s could not be read: %s", path, exc)
        return None
    corpus = ReferenceCorpus.from_text(text)
    if not corpus:
        logger.warning("Reference corpus %s contains no words; ignoring it", path)
        return None
    logger.debug("Loaded reference corpus %s (%d distinct words)", path, len(corpus.words))
    return corpus


def similarity_percentage(words: Sequence[str], other_words: Sequence[str]) -> float:
    """Percentage of ``words`` that also appear anywhere in ``other_words``."""
    if not words:
        return 0.0
    other = set(other_words)
    common = sum(1 for word in words if word in other)
    return common / len(words) * 100


def best_matches(names: Sequence[str], word_lists: Sequence[Sequence[str]]) -> List[BestMatch]:
    """For each document, the most similar other document in the batch."""
    matches: List[BestMatch] = []
    for idx, words in enumerate(word_lists):
        best = BestMatch()
        for other_idx, other_words in enumerate(word_lists):
            if other_idx == idx:
                continue
            pct = similarity_percentage(words, other_words)
            if pct > best.percentage:
                best = BestMatch(name=names[other_idx], percentage=pct)
        matches.append(best)
    return matches
