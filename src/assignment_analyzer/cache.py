from __future__ import annotations

import hashlib
import json
import threading
from typing import AbstractSet, Dict, Generic, TypeVar

from .config import AnalyzerConfig
from .models import Document

T = TypeVar("T")

# Config fields with no effect on a document's scores.
_UNSCORED_FIELDS = ("workers", "reference_corpus_path")


def content_key(document: Document) -> str:
    """SHA-256 of the document text plus its byte size."""
    digest = hashlib.sha256(document.text.encode("utf-8"))
    digest.update(str(document.byte_size).encode("ascii"))
    return digest.hexdigest()


def settings_key(
    config: AnalyzerConfig, reference_words: AbstractSet[str] | None = None
) -> str:
    """
    SHA-256 of everything besides the document that shapes its result.

    The reference corpus is keyed by its vocabulary rather than its path, so
    the same words loaded from different places share entries.
    """
    payload = config.to_dict()
    for name in _UNSCORED_FIELDS:
        payload.pop(name, None)
    digest = hashlib.sha256(json.dumps(payload, sort_keys=True).encode("utf-8"))
    if reference_words:
        digest.update(b"\x00reference\x00")
        digest.update("\n".join(sorted(reference_words)).encode("utf-8"))
    return digest.hexdigest()


class AnalysisCache(Generic[T]):
    """Optional memo of per-document analyses keyed by content and settings hashes."""

    def __init__(self) -> None:
        self._entries: Dict[str, T] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, document: Document, settings: str = "") -> T | None:
        key = _entry_key(document, settings)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
            else:
                self.hits += 1
            return entry

    def put(self, document: Document, value: T, settings: str = "") -> None:
        key = _entry_key(document, settings)
        with self._lock:
            self._entries[key] = value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def _entry_key(document: Document, settings: str) -> str:
    return f"{settings}:{content_key(document)}"
