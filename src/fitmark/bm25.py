"""BM25 ranking over a pre-tokenized corpus.

Built on ``rank_bm25``'s corpus bookkeeping, with the non-negative
``ln((N - df + 0.5) / (df + 0.5) + 1)`` IDF variant so a term present in every
document still carries a small positive weight.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Sequence

import numpy as np
from rank_bm25 import BM25


class BM25Ranker(BM25):
    """Scores each corpus document against a tokenized query.

    Instances are built per call: the corpus statistics (document lengths,
    average length, IDF table) are fixed at construction and never updated.
    Terms are compared case-insensitively.
    """

    def __init__(self, corpus: Iterable[Sequence[str]], k1: float = 1.2, b: float = 0.75):
        self.k1 = k1
        self.b = b
        super().__init__([list(doc) for doc in corpus])

    def _initialize(self, corpus: List[List[str]]) -> Dict[str, int]:
        corpus = [[token.lower() for token in document] for document in corpus]
        if not corpus:
            self.avgdl = 1.0
            return {}
        return super()._initialize(corpus)

    def _calc_idf(self, nd: Dict[str, int]) -> None:
        for term, df in nd.items():
            self.idf[term] = math.log((self.corpus_size - df + 0.5) / (df + 0.5) + 1)

    def get_scores(self, query: Iterable[str]) -> np.ndarray:
        score = np.zeros(self.corpus_size)
        doc_len = np.array(self.doc_len, dtype=float)
        for term in dict.fromkeys(t.lower() for t in query):
            idf = self.idf.get(term)
            if idf is None:
                continue
            tf = np.array([doc.get(term, 0) for doc in self.doc_freqs], dtype=float)
            norm = tf + self.k1 * (1 - self.b + self.b * doc_len / self.avgdl)
            gain = np.divide(tf * (self.k1 + 1), norm, out=np.zeros_like(tf), where=tf > 0)
            score += idf * gain
        return score


__all__ = ["BM25Ranker"]
