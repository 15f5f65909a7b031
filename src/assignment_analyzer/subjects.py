from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Pattern, Tuple

from .patterns import DEFAULT_SUBJECT, DEFAULT_SUBJECT_PATTERNS, compile_table


class SubjectClassifier:
    """Keyword-pattern matcher assigning topic labels to text."""

    def __init__(
        self,
        patterns: Mapping[str, Iterable[str]] | None = None,
        *,
        max_subjects: int = 3,
    ) -> None:
        table = DEFAULT_SUBJECT_PATTERNS if patterns is None else patterns
        self._patterns: Dict[str, List[Pattern[str]]] = compile_table(table)
        self._max_subjects = max_subjects

    @property
    def labels(self) -> List[str]:
        return list(self._patterns)

    def hit_counts(self, text: str) -> Dict[str, int]:
        """Return matched subjects with their total pattern hits."""
        lowered = (text or "").lower()
        counts: Dict[str, int] = {}
        for label, patterns in self._patterns.items():
            hits = sum(len(pattern.findall(lowered)) for pattern in patterns)
            if hits > 0:
                counts[label] = hits
        return counts

    def classify(self, text: str) -> Tuple[str, ...]:
        """Top subjects by descending hit count, or ``("General",)``."""
        counts = self.hit_counts(text)
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        labels = tuple(label for label, _ in ranked[: self._max_subjects])
        return labels or (DEFAULT_SUBJECT,)


_default_classifier: SubjectClassifier | None = None


def detect_subjects(text: str) -> Tuple[str, ...]:
    """Classify text with the built-in subject table."""
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = SubjectClassifier()
    return _default_classifier.classify(text)
