"""Relevance provider backed by the in-memory ``TermIndex``.

A "find similar" query works in two steps:

1. **Expansion** -- the query document is treated as the single known
   relevant document, and its terms are ranked by the Robertson /
   Sparck Jones relevance weight.  The best ``expand_terms`` terms form
   an OR query.
2. **Ranking** -- every document containing at least one query term is
   scored with BM25.  Weights are turned into percentages relative to
   the best match, scaled by the fraction of query terms that match
   contains, and the threshold is applied as a percentage cutoff.
"""

from __future__ import annotations

import math

import structlog

from similar.errors import ProviderQueryError
from similar.matching.config import RelevanceConfig
from similar.models import Document, RelevanceMatch

from .index import TermIndex

# Guards int() truncation against floating-point noise (99.99999 -> 100).
_PERCENT_EPSILON = 1e-9


class IndexRelevanceProvider:
    """Answer ``find`` queries against a committed ``TermIndex``."""

    def __init__(self, index: TermIndex, config: RelevanceConfig | None = None) -> None:
        self.index = index
        self.config = config or RelevanceConfig()
        self._log = structlog.get_logger().bind(component="relevance")

    def expansion_terms(self, document: Document) -> list[str]:
        """Pick the terms of ``document`` that best characterise it.

        Rare terms rank first; ties are broken alphabetically.
        """
        n_docs = self.index.document_count
        weighted = [
            (_relevance_weight(n_docs, self.index.document_frequency(term)), term)
            for term in self.index.term_frequencies(document.id)
        ]
        weighted.sort(key=lambda item: (-item[0], item[1]))
        return [term for _, term in weighted[: self.config.expand_terms]]

    def find(self, document: Document, threshold: int) -> list[RelevanceMatch]:
        """Return documents related to ``document`` with score >= ``threshold``."""
        if not self.index.committed:
            raise ProviderQueryError("index has not been committed")
        try:
            self.index.document(document.id)
        except KeyError as exc:
            raise ProviderQueryError(f"document {document.id} is not indexed") from exc

        terms = self.expansion_terms(document)
        if not terms:
            self._log.debug("no_expansion_terms", document_id=document.id)
            return []

        weights, matched = self._score(terms)
        if not weights:
            return []

        top_id = max(weights, key=lambda doc_id: (weights[doc_id], -doc_id))
        top_weight = weights[top_id]
        if top_weight <= 0:
            return []
        scale = matched[top_id] / len(terms) / top_weight

        matches = []
        for doc_id, weight in weights.items():
            percent = min(100, int(weight * scale * 100 + _PERCENT_EPSILON))
            if percent >= threshold:
                matches.append(RelevanceMatch(document_id=doc_id, score=percent))

        matches.sort(key=lambda m: (-m.score, m.document_id))
        return matches

    def _score(self, terms: list[str]) -> tuple[dict[int, float], dict[int, int]]:
        """BM25 weight and number of matched query terms per candidate."""
        cfg = self.config
        n_docs = self.index.document_count
        avg_length = self.index.average_length or 1.0
        weights: dict[int, float] = {}
        matched: dict[int, int] = {}

        for term in terms:
            postings = self.index.postings(term)
            term_weight = _bm25_term_weight(n_docs, len(postings)) * cfg.query_term_weight
            for doc_id, tf in postings.items():
                norm_length = max(
                    self.index.document_length(doc_id) / avg_length,
                    cfg.bm25_min_normlen,
                )
                k = cfg.bm25_k1 * ((1 - cfg.bm25_b) + cfg.bm25_b * norm_length)
                weights[doc_id] = weights.get(doc_id, 0.0) + term_weight * (
                    (cfg.bm25_k1 + 1) * tf / (k + tf)
                )
                matched[doc_id] = matched.get(doc_id, 0) + 1

        return weights, matched


def _relevance_weight(n_docs: int, doc_freq: int) -> float:
    """Robertson/Sparck Jones weight with the query document as R = r = 1.

    Uses the same damping as ``_bm25_term_weight`` so the weight stays
    positive; terms shared by every document rank last.
    """
    ratio = (1.5 * (n_docs - doc_freq + 0.5)) / (0.5 * (doc_freq - 0.5))
    if ratio < 2:
        ratio = ratio * 0.5 + 1
    return math.log(ratio)


def _bm25_term_weight(n_docs: int, doc_freq: int) -> float:
    """Inverse document frequency without relevance information.

    Common terms would get a negative idf; those are damped into a small
    positive weight instead.
    """
    ratio = (n_docs - doc_freq + 0.5) / (doc_freq + 0.5)
    if ratio < 2:
        ratio = ratio * 0.5 + 1
    return math.log(ratio)
