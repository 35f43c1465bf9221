"""In-memory inverted index over the files of one directory."""

from __future__ import annotations

from collections import Counter

from similar.models import Document

from .normalizer import index_terms


class TermIndex:
    """Inverted index with per-document term frequencies.

    Documents receive contiguous 1-based ids in insertion order.  Once
    ``commit`` is called the document set is frozen and the index can be
    queried.
    """

    def __init__(self) -> None:
        self._documents: list[Document] = []
        self._term_freqs: list[Counter[str]] = []
        self._lengths: list[int] = []
        self._postings: dict[str, dict[int, int]] = {}
        self._total_length = 0
        self.committed = False

    def add_document(self, label: str, text: str) -> Document:
        """Index ``text`` under a new document id labelled ``label``."""
        if self.committed:
            raise RuntimeError("cannot add documents to a committed index")

        document = Document(id=len(self._documents) + 1, label=label)
        freqs = Counter(index_terms(text))
        self._documents.append(document)
        self._term_freqs.append(freqs)
        self._lengths.append(sum(freqs.values()))
        self._total_length += self._lengths[-1]
        for term, count in freqs.items():
            self._postings.setdefault(term, {})[document.id] = count
        return document

    def commit(self) -> None:
        self.committed = True

    @property
    def document_count(self) -> int:
        return len(self._documents)

    @property
    def last_document_id(self) -> int:
        return len(self._documents)

    @property
    def average_length(self) -> float:
        if not self._documents:
            return 0.0
        return self._total_length / len(self._documents)

    def document(self, document_id: int) -> Document:
        if not 1 <= document_id <= len(self._documents):
            raise KeyError(document_id)
        return self._documents[document_id - 1]

    def documents(self) -> list[Document]:
        return list(self._documents)

    def document_length(self, document_id: int) -> int:
        self.document(document_id)
        return self._lengths[document_id - 1]

    def term_frequencies(self, document_id: int) -> Counter[str]:
        self.document(document_id)
        return self._term_freqs[document_id - 1]

    def term_frequency(self, term: str, document_id: int) -> int:
        return self._postings.get(term, {}).get(document_id, 0)

    def document_frequency(self, term: str) -> int:
        return len(self._postings.get(term, {}))

    def postings(self, term: str) -> dict[int, int]:
        """Return ``{document_id: term frequency}`` for ``term``."""
        return self._postings.get(term, {})
