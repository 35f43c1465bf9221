"""Tests for the index-backed relevance provider."""

from __future__ import annotations

import pytest

from similar.errors import ProviderQueryError
from similar.indexing import IndexRelevanceProvider, TermIndex
from similar.matching.config import RelevanceConfig
from similar.models import Document


def _index(*texts: str) -> TermIndex:
    idx = TermIndex()
    for i, text in enumerate(texts, start=1):
        idx.add_document(f"doc{i}", text)
    idx.commit()
    return idx


FOX = "the quick brown fox jumps over the lazy dog"
FOX_VARIANT = "the quick brown fox leaps over the lazy dog"
MARKETS = "stock markets fell sharply amid inflation fears"


class TestFind:
    def test_near_duplicate_found(self) -> None:
        idx = _index(FOX, FOX_VARIANT, MARKETS)
        provider = IndexRelevanceProvider(idx)

        matches = provider.find(idx.document(1), 50)

        assert [m.document_id for m in matches] == [1, 2]
        assert matches[0].score == 100
        assert 50 <= matches[1].score < 100

    def test_threshold_cuts_off(self) -> None:
        idx = _index(FOX, FOX_VARIANT, MARKETS)
        provider = IndexRelevanceProvider(idx)
        assert [m.document_id for m in provider.find(idx.document(1), 90)] == [1]

    def test_unrelated_document_never_matches(self) -> None:
        idx = _index(FOX, FOX_VARIANT, MARKETS)
        provider = IndexRelevanceProvider(idx)
        assert [m.document_id for m in provider.find(idx.document(3), 0)] == [3]

    def test_sorted_by_descending_score(self) -> None:
        idx = _index(FOX, FOX_VARIANT, "the lazy dog sleeps", MARKETS)
        matches = IndexRelevanceProvider(idx).find(idx.document(1), 0)
        scores = [m.score for m in matches]
        assert scores == sorted(scores, reverse=True)
        assert all(0 <= s <= 100 for s in scores)

    def test_identical_documents_score_full(self) -> None:
        idx = _index(FOX, FOX)
        matches = IndexRelevanceProvider(idx).find(idx.document(2), 100)
        assert sorted(m.document_id for m in matches) == [1, 2]

    def test_empty_document_has_no_matches(self) -> None:
        idx = _index("", FOX)
        assert IndexRelevanceProvider(idx).find(idx.document(1), 0) == []

    def test_threshold_monotonic(self) -> None:
        idx = _index(FOX, FOX_VARIANT, "the lazy dog sleeps", MARKETS)
        provider = IndexRelevanceProvider(idx)
        previous: set[int] | None = None
        for threshold in range(0, 101, 10):
            found = {m.document_id for m in provider.find(idx.document(1), threshold)}
            if previous is not None:
                assert found <= previous
            previous = found


class TestExpansion:
    def test_rare_terms_first(self) -> None:
        idx = _index(FOX, FOX_VARIANT, MARKETS)
        terms = IndexRelevanceProvider(idx).expansion_terms(idx.document(1))
        assert terms[0] == "jump"
        assert set(terms) == {"the", "quick", "brown", "fox", "jump", "over", "lazi", "dog"}

    def test_expand_terms_limit(self) -> None:
        idx = _index(FOX, MARKETS)
        provider = IndexRelevanceProvider(idx, RelevanceConfig(expand_terms=3))
        assert len(provider.expansion_terms(idx.document(1))) == 3


class TestErrors:
    def test_uncommitted_index(self) -> None:
        idx = TermIndex()
        doc = idx.add_document("a", FOX)
        with pytest.raises(ProviderQueryError, match="committed"):
            IndexRelevanceProvider(idx).find(doc, 50)

    def test_unknown_document(self) -> None:
        idx = _index(FOX)
        with pytest.raises(ProviderQueryError, match="not indexed"):
            IndexRelevanceProvider(idx).find(Document(id=9, label="ghost"), 50)
