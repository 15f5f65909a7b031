from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping

import yaml

from .patterns import DEFAULT_SUBJECT_PATTERNS


@dataclass(slots=True)
class AiLikelihoodSettings:
    """Thresholds and point values for the AI-likelihood composer."""

    consistency_min_avg: float = 12.0
    consistency_max_avg: float = 20.0
    consistency_max_stddev: float = 6.0
    consistency_points: float = 20.0
    range_max_variation: int = 8
    range_points: float = 15.0
    uniqueness_threshold: float = 0.6
    uniqueness_points: float = 15.0
    starter_threshold: float = 0.5
    starter_points: float = 10.0
    phrase_points: float = 6.0
    phrase_cap: float = 20.0
    irregularity_points: float = 10.0
    repetition_min_count: int = 4
    repetition_ratio: float = 0.05
    repetition_points: float = 10.0
    reference_activation: float = 0.05
    reference_weight: float = 30.0
    long_min_sentences: int = 8
    long_min_avg: float = 14.0
    long_points: float = 5.0
    mixed_label_from: int = 35
    ai_label_from: int = 70


@dataclass(slots=True)
class QualityWeights:
    """Weights of the seven Content-Quality sub-scores."""

    structure: float = 0.20
    clarity: float = 0.20
    language: float = 0.15
    depth: float = 0.15
    originality: float = 0.10
    relevance: float = 0.10
    consistency: float = 0.10


@dataclass(slots=True)
class HighlightSettings:
    """Candidate threshold and coverage cap for sentence highlighting."""

    min_signals: int = 3
    coverage_cap: float = 0.30


@dataclass(slots=True)
class AnalyzerConfig:
    """Configuration options for the analysis pipeline."""

    ai: AiLikelihoodSettings = field(default_factory=AiLikelihoodSettings)
    quality: QualityWeights = field(default_factory=QualityWeights)
    highlight: HighlightSettings = field(default_factory=HighlightSettings)
    subjects: Dict[str, List[str]] = field(
        default_factory=lambda: {
            label: list(patterns)
            for label, patterns in DEFAULT_SUBJECT_PATTERNS.items()
        }
    )
    reference_corpus_path: str | None = None
    screenshot_min_bytes: int = 100_000
    screenshot_max_chars: int = 200
    repeated_words_limit: int = 8
    report_repeated_words: int = 5
    workers: int = 1

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


_NESTED_BLOCKS: dict[str, type] = {
    "ai": AiLikelihoodSettings,
    "quality": QualityWeights,
    "highlight": HighlightSettings,
}


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(AnalyzerConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    for name, block_type in _NESTED_BLOCKS.items():
        if name not in data:
            continue
        value = data[name]
        if isinstance(value, block_type):
            kwargs[name] = value
        elif isinstance(value, Mapping):
            kwargs[name] = _build_block(block_type, value)
        else:
            raise ValueError(f"Configuration block '{name}' must be a mapping.")
    if "subjects" in data:
        kwargs["subjects"] = _build_subjects(data["subjects"])
    return kwargs


def _build_block(block_type: type, data: Mapping[str, Any]) -> Any:
    block_allowed = {field.name for field in fields(block_type)}
    filtered = {key: data[key] for key in data if key in block_allowed}
    return block_type(**filtered)


def _build_subjects(value: Any) -> dict[str, list[str]]:
    if not isinstance(value, Mapping):
        raise ValueError("'subjects' must map subject labels to pattern lists.")
    subjects: dict[str, list[str]] = {}
    for label, patterns in value.items():
        if isinstance(patterns, str):
            patterns = [patterns]
        subjects[str(label)] = [str(pattern) for pattern in patterns or []]
    return subjects


def config_from_dict(data: Mapping[str, Any] | None) -> AnalyzerConfig:
    """Build an AnalyzerConfig from a dictionary-like input."""
    if data is None:
        return AnalyzerConfig()
    return AnalyzerConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> AnalyzerConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> AnalyzerConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return AnalyzerConfig()
    return config_from_yaml(path)
