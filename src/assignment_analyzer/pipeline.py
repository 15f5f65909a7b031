from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import List, Sequence

from .cache import AnalysisCache, settings_key
from .config import AnalyzerConfig
from .features import code_line_stats, is_possible_screenshot, top_repeated_words
from .highlights import select_highlights
from .models import BestMatch, Document, ScoreResult, SentenceScore
from .quality import QualityInputs, content_mark, quality_breakdown
from .scoring import label_ai_score, score_sentences, score_text
from .similarity import ReferenceCorpus, best_matches, load_reference_corpus
from .subjects import SubjectClassifier
from .tokenization import normalize_to_words, split_sentences

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AnalysisOptions:
    """Per-run options: an optional reference corpus and the chosen subject."""

    reference_corpus: ReferenceCorpus | str | None = None
    selected_subject: str | None = None


def analyze_document(
    doc: Document,
    config: AnalyzerConfig,
    *,
    classifier: SubjectClassifier | None = None,
    reference: ReferenceCorpus | None = None,
    selected_subject: str | None = None,
) -> ScoreResult:
    """Run the scoring pipeline for a single document."""
    classifier = classifier or SubjectClassifier(config.subjects)
    text = doc.text or ""
    words = normalize_to_words(text)
    sentences = split_sentences(text)
    sentence_texts = [sentence.text for sentence in sentences]
    reference_words = reference.words if reference else None

    ai_score = score_text(
        text,
        words,
        sentence_texts,
        settings=config.ai,
        reference_words=reference_words,
    )
    sentence_scores = score_sentences(
        sentences, settings=config.ai, reference_words=reference_words
    )
    highlights = select_highlights(sentences, len(text), config.highlight)
    breakdown = quality_breakdown(
        QualityInputs(
            text=text,
            words=words,
            sentences=sentence_texts,
            sentence_scores=sentence_scores,
        )
    )
    code_lines, code_pct = code_line_stats(text)

    sentence_count = len(sentences)
    avg_sentence = round(len(words) / sentence_count, 2) if sentence_count else 0.0
    logger.debug(
        "Analyzed %s: words=%d sentences=%d ai=%d",
        doc.name,
        len(words),
        sentence_count,
        ai_score,
    )
    return ScoreResult(
        name=doc.name,
        byte_size=doc.byte_size,
        word_count=len(words),
        char_count=len(text),
        sentence_count=sentence_count,
        avg_sentence_length=avg_sentence,
        ai_likelihood=ai_score,
        ai_label=label_ai_score(ai_score, config.ai),
        content_mark=content_mark(breakdown, config.quality),
        quality=breakdown,
        subjects=classifier.classify(text),
        repeated_words=top_repeated_words(words, config.repeated_words_limit),
        best_match=BestMatch(),
        highlighted_sentence_indices=highlights.indices,
        highlighted_char_count=highlights.highlighted_char_count,
        highlighted_percent=highlights.highlighted_percent,
        code_line_count=code_lines,
        code_percentage=code_pct,
        possible_screenshot=is_possible_screenshot(
            text,
            doc.byte_size,
            config.screenshot_min_bytes,
            config.screenshot_max_chars,
        ),
        sentences=tuple(
            SentenceScore(
                index=idx,
                sentence=sentence,
                ai_likelihood=score,
                ai_label=label_ai_score(score, config.ai),
                signal_count=signals,
                highlighted=idx in highlights.indices,
            )
            for idx, (sentence, score, signals) in enumerate(
                zip(sentences, sentence_scores, highlights.signal_counts)
            )
        ),
        selected_subject=selected_subject,
    )


def analyze(
    documents: Sequence[Document],
    config: AnalyzerConfig | None = None,
    options: AnalysisOptions | None = None,
    *,
    cache: AnalysisCache[ScoreResult] | None = None,
) -> List[ScoreResult]:
    """
    Analyze a batch of documents, one result per document in input order.

    Documents are scored independently (in parallel when ``config.workers``
    exceeds one); pairwise similarity then fills in each ``best_match``.
    """
    config = config or AnalyzerConfig()
    options = options or AnalysisOptions()
    reference = _resolve_reference(config, options)
    classifier = SubjectClassifier(config.subjects)
    subject = options.selected_subject
    settings = (
        settings_key(config, reference.words if reference else None)
        if cache is not None
        else ""
    )

    def run(doc: Document) -> ScoreResult:
        if cache is not None:
            cached = cache.get(doc, settings)
            if cached is not None:
                return replace(cached, name=doc.name, selected_subject=subject)
        result = analyze_document(
            doc,
            config,
            classifier=classifier,
            reference=reference,
            selected_subject=subject,
        )
        if cache is not None:
            cache.put(doc, result, settings)
        return result

    if config.workers > 1 and len(documents) > 1:
        with ThreadPoolExecutor(max_workers=config.workers) as executor:
            results = list(executor.map(run, documents))
    else:
        results = [run(doc) for doc in documents]

    if len(documents) < 2:
        return results

    matches = best_matches(
        [doc.name for doc in documents],
        [normalize_to_words(doc.text) for doc in documents],
    )
    return [replace(result, best_match=match) for result, match in zip(results, matches)]


def _resolve_reference(
    config: AnalyzerConfig, options: AnalysisOptions
) -> ReferenceCorpus | None:
    reference = options.reference_corpus
    if isinstance(reference, ReferenceCorpus):
        return reference or None
    if isinstance(reference, str):
        corpus = ReferenceCorpus.from_text(reference)
        return corpus or None
    return load_reference_corpus(config.reference_corpus_path)
