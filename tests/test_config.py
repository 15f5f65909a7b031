from pathlib import Path

import pytest

from assignment_analyzer.config import (
    AnalyzerConfig,
    config_from_dict,
    config_from_yaml,
    load_config,
)
from assignment_analyzer.patterns import DEFAULT_SUBJECT_PATTERNS


def test_defaults():
    cfg = load_config()
    assert cfg == AnalyzerConfig()
    assert cfg.ai.consistency_points == 20
    assert cfg.highlight.coverage_cap == 0.30
    assert cfg.subjects == DEFAULT_SUBJECT_PATTERNS
    weights = cfg.quality
    total = (
        weights.structure
        + weights.clarity
        + weights.language
        + weights.depth
        + weights.originality
        + weights.relevance
        + weights.consistency
    )
    assert total == pytest.approx(1.0)


def test_default_subjects_are_copied():
    cfg = AnalyzerConfig()
    cfg.subjects["Programming"].append(r"\bfoo\b")
    assert r"\bfoo\b" not in DEFAULT_SUBJECT_PATTERNS["Programming"]


def test_config_from_dict_builds_nested_blocks_and_ignores_unknown_keys():
    cfg = config_from_dict(
        {
            "workers": 4,
            "ai": {"phrase_cap": 30, "bogus": 1},
            "highlight": {"min_signals": 2},
            "unknown": True,
        }
    )
    assert cfg.workers == 4
    assert cfg.ai.phrase_cap == 30
    assert cfg.ai.phrase_points == 6
    assert cfg.highlight.min_signals == 2
    assert cfg.quality == AnalyzerConfig().quality


def test_config_from_dict_rejects_non_mapping_blocks():
    with pytest.raises(ValueError):
        config_from_dict({"ai": 5})
    with pytest.raises(ValueError):
        config_from_dict({"subjects": ["Programming"]})


def test_subjects_accept_single_pattern_strings():
    cfg = config_from_dict({"subjects": {"Chemistry": r"\bmolecule\b"}})
    assert cfg.subjects == {"Chemistry": [r"\bmolecule\b"]}


def test_to_dict_round_trips():
    cfg = config_from_dict({"workers": 2, "quality": {"structure": 0.3}})
    assert config_from_dict(cfg.to_dict()) == cfg


def test_config_from_yaml(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "reference_corpus_path: corpus.txt\nai:\n  mixed_label_from: 40\n",
        encoding="utf-8",
    )
    cfg = config_from_yaml(path)
    assert cfg.reference_corpus_path == "corpus.txt"
    assert cfg.ai.mixed_label_from == 40


def test_config_from_yaml_empty_and_invalid(tmp_path: Path):
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert config_from_yaml(empty) == AnalyzerConfig()

    listing = tmp_path / "list.yaml"
    listing.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        config_from_yaml(listing)
