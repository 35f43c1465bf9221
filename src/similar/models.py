"""Core data types shared by the indexing and clustering layers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Document:
    """An indexed file.

    Attributes:
        id: Stable 1-based identifier assigned at indexing time.
        label: Display label (the file path).
    """

    id: int
    label: str


@dataclass(frozen=True)
class RelevanceMatch:
    """One related document and its relevance score (0..100)."""

    document_id: int
    score: int


class RelevanceQuery(Protocol):
    """Capability boundary to a relevance engine.

    ``find`` returns all and only the documents whose relevance to
    ``document`` is at least ``threshold``, ordered by descending score.
    The query document itself may appear in the result.
    """

    def find(self, document: Document, threshold: int) -> list[RelevanceMatch]:
        ...
