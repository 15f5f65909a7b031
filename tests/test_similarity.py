import pytest

from assignment_analyzer.models import BestMatch
from assignment_analyzer.similarity import (
    ReferenceCorpus,
    best_matches,
    load_reference_corpus,
    similarity_percentage,
)


def test_similarity_percentage_is_directional():
    assert similarity_percentage(["a", "b", "c", "d"], ["a", "b", "x"]) == 50
    assert similarity_percentage(["a", "b", "x"], ["a", "b", "c", "d"]) == pytest.approx(200 / 3)
    assert similarity_percentage([], ["a"]) == 0


def test_best_matches_prefers_first_strictly_better():
    names = ["a.txt", "b.txt", "c.txt"]
    words = [["cat", "dog"], ["cat", "dog"], ["fish"]]
    matches = best_matches(names, words)

    assert matches[0] == BestMatch("b.txt", 100.0)
    assert matches[1] == BestMatch("a.txt", 100.0)
    assert matches[2] == BestMatch()


def test_best_matches_single_document_has_no_match():
    assert best_matches(["only.txt"], [["word"]]) == [BestMatch()]


def test_reference_corpus_from_text():
    corpus = ReferenceCorpus.from_text("The cat, the mat!")
    assert corpus.words == frozenset({"the", "cat", "mat"})
    assert corpus
    assert not ReferenceCorpus.from_text("...")


def test_load_reference_corpus(tmp_path):
    path = tmp_path / "reference.txt"
    path.write_text("Sorting algorithms and data structures.", encoding="utf-8")
    corpus = load_reference_corpus(path)

    assert corpus is not None
    assert "sorting" in corpus.words


def test_load_reference_corpus_handles_missing_or_empty(tmp_path, caplog):
    assert load_reference_corpus(None) is None

    with caplog.at_level("WARNING"):
        assert load_reference_corpus(tmp_path / "missing.txt") is None
    assert "could not be read" in caplog.text

    empty = tmp_path / "empty.txt"
    empty.write_text("  ", encoding="utf-8")
    assert load_reference_corpus(empty) is None
