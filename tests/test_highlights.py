from assignment_analyzer.config import HighlightSettings
from assignment_analyzer.highlights import select_highlights, sentence_signals, signal_count
from assignment_analyzer.tokenization import split_sentences
from tests.utils import REPEATED_TEXT

FLAGGED = "However, many things could be observed in general terms here."


def test_sentence_signals_for_flagged_sentence():
    signals = sentence_signals(FLAGGED)

    assert signals["transition"]
    assert signals["vague"]
    assert signals["mechanical"]
    assert not signals["generic"]
    assert not signals["passive"]
    # "However" counts as a capitalized name.
    assert not signals["nonspecific"]
    assert signal_count(FLAGGED) == 3


def test_short_sentences_skip_tone_signals():
    signals = sentence_signals("The cat sat on the mat.")
    assert not signals["mechanical"]
    assert not signals["nonspecific"]
    assert signal_count("The cat sat on the mat.") == 0


def test_personal_and_specific_sentences_are_not_mechanical():
    signals = sentence_signals("In 2019 we measured the runtime of our merge sort.")
    assert not signals["mechanical"]
    assert not signals["nonspecific"]


def test_passive_and_repetitive_signals():
    assert sentence_signals("The value was computed twice.")["passive"]
    assert sentence_signals("go go go now")["repetitive"]


def test_select_highlights_respects_coverage_cap():
    text = " ".join([FLAGGED] * 5)
    sentences = split_sentences(text)
    selection = select_highlights(sentences, len(text))

    assert len(text) == 309
    assert selection.signal_counts == (3, 3, 3, 3, 3)
    assert selection.indices == frozenset({0})
    assert selection.highlighted_char_count == 61
    assert selection.highlighted_percent == 20


def test_select_highlights_with_relaxed_settings():
    text = " ".join([FLAGGED] * 5)
    sentences = split_sentences(text)
    selection = select_highlights(
        sentences, len(text), HighlightSettings(min_signals=3, coverage_cap=1.0)
    )
    assert selection.indices == frozenset(range(5))
    assert selection.highlighted_char_count == len(text)
    assert selection.highlighted_percent == 100


def test_no_candidates_means_no_highlights():
    sentences = split_sentences(REPEATED_TEXT)
    selection = select_highlights(sentences, len(REPEATED_TEXT))
    assert selection.indices == frozenset()
    assert selection.highlighted_char_count == 0
    assert selection.highlighted_percent == 0


def test_empty_document():
    selection = select_highlights([], 0)
    assert selection.indices == frozenset()
    assert selection.signal_counts == ()
