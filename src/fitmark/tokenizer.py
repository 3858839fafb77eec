"""Tokenization and stop-word cleaning for BM25 relevance scoring."""

from __future__ import annotations

import re
from typing import Iterable, List

STOP_WORDS = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
        "has", "he", "in", "is", "it", "its", "of", "on", "that", "the",
        "to", "was", "were", "will", "with", "this", "but", "they",
        "have", "had", "what", "when", "where", "who", "which", "why", "how",
    }
)

_SPLIT_RE = re.compile(r"\W+")


def tokenize(text: str) -> List[str]:
    """Lowercase and split on non-word runs, dropping single-character tokens."""
    if not text or not text.strip():
        return []
    return [t for t in _SPLIT_RE.split(text.lower()) if len(t) > 1]


def clean_tokens(tokens: Iterable[str]) -> List[str]:
    return [t for t in tokens if len(t) > 2 and t.lower() not in STOP_WORDS]


__all__ = ["STOP_WORDS", "tokenize", "clean_tokens"]
