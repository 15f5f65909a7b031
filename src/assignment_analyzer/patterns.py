"""
Heuristic vocabularies and precompiled pattern tables.

Every phrase list and regular expression the analyzers rely on lives here so
the heuristics can be versioned and tuned as data. Tables are compiled once
at import time and looked up by feature or subject name.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Mapping, Pattern

logger = logging.getLogger(__name__)

# Characters stripped by the word normalizer.
STRIP_CHARACTERS = ".,/#!$%^&*;:{}=-_`~()[]\"'<>?@+"

# Stock phrasing typical of generated prose (AI-likelihood).
FORMAL_PHRASES = (
    "in conclusion",
    "overall",
    "furthermore",
    "moreover",
    "it is important to note",
    "this highlights that",
    "on the other hand",
    "as a result",
    "in summary",
    "this demonstrates",
    "it can be observed",
    "in addition",
)

# Formal connectives rewarded by the language-quality sub-score.
QUALITY_FORMAL_WORDS = (
    "moreover",
    "furthermore",
    "therefore",
    "however",
    "hence",
    "thus",
    "consequently",
    "additionally",
    "nevertheless",
    "indeed",
    "meanwhile",
)

# Discourse markers counted by the consistency sub-score.
TRANSITION_WORDS = (
    "moreover",
    "however",
    "therefore",
    "meanwhile",
    "furthermore",
    "additionally",
    "thus",
    "hence",
    "consequently",
    "nevertheless",
)

DEFAULT_SUBJECT_PATTERNS: Dict[str, List[str]] = {
    "Programming": [
        r"\bfunction\b",
        r"\bdef\b",
        r"\bclass\b",
        r"\bconsole\.log\b",
        r"\bsystem\.out\b",
        r"#include",
        r"\bimport\b",
        r"\bpublic\b",
        r"\bprivate\b",
        r"\bvar\b",
        r"\blet\b",
        r"\bconst\b",
    ],
    "Data Structures": [
        r"\bstack\b",
        r"\bqueue\b",
        r"\blinked list\b",
        r"\bbinary tree\b",
        r"\bhash table\b",
        r"\bgraph\b",
        r"\bdfs\b",
        r"\bbfs\b",
    ],
    "Algorithms": [
        r"\bsort\b",
        r"\bsearch\b",
        r"\bdynamic programming\b",
        r"\bgreedy\b",
        r"\bbinary search\b",
        r"\bmerge sort\b",
        r"\bquick sort\b",
    ],
    "Databases": [
        r"\bselect\b",
        r"\binsert\b",
        r"\bupdate\b",
        r"\bdelete\b",
        r"\bfrom\b",
        r"\bwhere\b",
        r"\bjoin\b",
        r"\bsql\b",
        r"\bnosql\b",
    ],
    "Operating Systems": [
        r"\bprocess\b",
        r"\bthread\b",
        r"\bscheduler\b",
        r"\bkernel\b",
        r"\bmutex\b",
        r"\bdeadlock\b",
    ],
    "Networks": [
        r"\bprotocol\b",
        r"\btcp\b",
        r"\budp\b",
        r"\bip\b",
        r"\brouting\b",
        r"\blayer\b",
    ],
    "Software Engineering": [
        r"\buml\b",
        r"\brequirements\b",
        r"\btesting\b",
        r"\bversion control\b",
        r"\bagile\b",
        r"\bwaterfall\b",
    ],
    "Web Development": [
        r"<html",
        r"<body",
        r"<script",
        r"css",
        r"\bhttp\b",
        r"\bhtml\b",
        r"\bcss\b",
        r"\bjavascript\b",
    ],
    "AI/ML": [
        r"\bmachine learning\b",
        r"\bneural network\b",
        r"\bdeep learning\b",
        r"\bclassification\b",
        r"\bregression\b",
        r"\bsvm\b",
        r"\bpython\b\s+import\s+tensorflow",
    ],
    "Cybersecurity": [
        r"\bencryption\b",
        r"\bssl\b",
        r"\btls\b",
        r"\battack\b",
        r"\bvulnerability\b",
        r"\bcrypt\b",
    ],
    "Computer Architecture": [
        r"\bcache\b",
        r"\binstruction\b",
        r"\bpipeline\b",
        r"\bregister\b",
        r"\balu\b",
    ],
}

DEFAULT_SUBJECT = "General"


def compile_patterns(
    patterns: Iterable[str], flags: int = 0, *, name: str = ""
) -> List[Pattern[str]]:
    """Compile patterns, logging and skipping any that are malformed."""
    compiled: List[Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern, flags))
        except re.error as exc:
            logger.warning("Skipping malformed pattern %r for %s: %s", pattern, name, exc)
    return compiled


def compile_phrases(phrases: Iterable[str]) -> List[Pattern[str]]:
    """Compile literal phrases into word-bounded case-insensitive patterns."""
    return [
        re.compile(r"\b" + re.escape(phrase) + r"\b", re.IGNORECASE)
        for phrase in phrases
    ]


def compile_table(
    table: Mapping[str, Iterable[str]], flags: int = 0
) -> Dict[str, List[Pattern[str]]]:
    """Compile a label -> patterns table, keeping insertion order of labels."""
    return {
        label: compile_patterns(patterns, flags, name=label)
        for label, patterns in table.items()
    }


FORMAL_PHRASE_PATTERNS = compile_phrases(FORMAL_PHRASES)
QUALITY_FORMAL_PATTERNS = compile_phrases(QUALITY_FORMAL_WORDS)
TRANSITION_PATTERNS = compile_phrases(TRANSITION_WORDS)

PUNCTUATION_IRREGULARITY_RE = re.compile(r",,|!!|\?\?| {2,}")
SENTENCE_END_RE = re.compile(r"[.!?]+")
PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")
WHITESPACE_RE = re.compile(r"\s+")
CAPITALIZED_WORD_RE = re.compile(r"\b[A-Z][a-z]+\b")
DIGIT_RUN_RE = re.compile(r"\d+")
EXPRESSIVE_PUNCTUATION_RE = re.compile(r"[!?;:\u2014-]")
CODE_LINE_RE = re.compile(
    r"\b(function|def|class|console\.|System\.|#include|import |public |private |var |let |const )\b"
    r"|\{|;\s*$"
)
LINE_SPLIT_RE = re.compile(r"\r?\n")

# Per-sentence highlight signals, keyed by signal name.
SIGNAL_PATTERNS: Dict[str, Pattern[str]] = {
    "generic": re.compile(
        r"\b(in conclusion|overall|this paper|this document|this study|the purpose of)\b",
        re.IGNORECASE,
    ),
    "template": re.compile(
        r"^\s*(first|second|third|finally|in the first|in the second)\b"
        r"|\b\d+\.|\b(i|ii|iii)\b",
        re.IGNORECASE,
    ),
    "transition": re.compile(
        r"\b(moreover|furthermore|therefore|however|thus|consequently|additionally)\b",
        re.IGNORECASE,
    ),
    "vague": re.compile(
        r"\b(some|many|various|several|often|generally|typically|may|might|could)\b",
        re.IGNORECASE,
    ),
    "pronoun": re.compile(r"\b(I|we|my|our|us|mine)\b", re.IGNORECASE),
    "passive": re.compile(r"\bis\s+\w+ed\b|\bwas\s+\w+ed\b", re.IGNORECASE),
    "digit": re.compile(r"\d"),
    "proper_noun": re.compile(r"\b[A-Z][a-z]{2,}\b"),
}
