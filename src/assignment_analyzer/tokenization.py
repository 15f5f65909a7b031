from __future__ import annotations

from typing import List

from .models import Sentence
from .patterns import PARAGRAPH_BREAK_RE, SENTENCE_END_RE, STRIP_CHARACTERS, WHITESPACE_RE

_STRIP_TABLE = str.maketrans("", "", STRIP_CHARACTERS)


def normalize_to_words(text: str | None) -> List[str]:
    """Lowercase, strip punctuation and split text into word tokens."""
    if not text:
        return []
    cleaned = text.lower().translate(_STRIP_TABLE)
    cleaned = WHITESPACE_RE.sub(" ", cleaned).strip()
    if not cleaned:
        return []
    return [word for word in cleaned.split(" ") if word]


def split_sentences(text: str | None) -> List[Sentence]:
    """
    Split text into sentences closed by runs of ``.``, ``!`` or ``?``.

    Each sentence spans from the end of the previous terminator run to the end
    of its own, so spans partition the text; trailing unterminated text forms a
    final sentence. Whitespace-only spans are dropped.
    """
    if not text:
        return []

    sentences: List[Sentence] = []
    last_index = 0
    for match in SENTENCE_END_RE.finditer(text):
        end_index = match.end()
        sentence = text[last_index:end_index].strip()
        if sentence:
            sentences.append(Sentence(sentence, last_index, end_index))
        last_index = end_index

    if last_index < len(text):
        remaining = text[last_index:].strip()
        if remaining:
            sentences.append(Sentence(remaining, last_index, len(text)))
    return sentences


def split_paragraphs(text: str | None) -> List[str]:
    """Split text on blank-line runs, dropping empty paragraphs."""
    if not text:
        return []
    return [part for part in PARAGRAPH_BREAK_RE.split(text) if part.strip()]
