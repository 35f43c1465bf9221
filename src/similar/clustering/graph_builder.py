"""Directed similarity graph construction.

Queries the relevance provider once per document and links every
document to the documents it finds related at or above the threshold.
The adjacency is index-based: ``successors[v]`` lists the targets of
vertex ``v``, with vertex 0 unused so that 1-based document ids can be
used directly.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import networkx as nx
import structlog

from similar.models import Document, RelevanceQuery


class SimilarityGraph:
    """Vertex-indexed directed graph over document ids.

    Self-loops are never stored and parallel edges collapse into one.
    Edge scores are kept for diagnostics only; they play no part in
    component extraction.
    """

    def __init__(self, document_count: int) -> None:
        if document_count < 0:
            raise ValueError("document_count must be non-negative")
        self.document_count = document_count
        self._successors: list[list[int]] = [[] for _ in range(document_count + 1)]
        self._scores: dict[tuple[int, int], int] = {}
        self.failed_documents: list[int] = []

    def __len__(self) -> int:
        return self.document_count

    def _check_vertex(self, vertex: int) -> None:
        if not 1 <= vertex <= self.document_count:
            raise IndexError(f"vertex {vertex} outside 1..{self.document_count}")

    def add_edge(self, source: int, target: int, score: int = 0) -> bool:
        """Insert ``source -> target``.

        Returns ``True`` if a new edge was added, ``False`` for self-loops
        and edges already present.
        """
        self._check_vertex(source)
        self._check_vertex(target)
        if source == target or (source, target) in self._scores:
            return False
        self._successors[source].append(target)
        self._scores[(source, target)] = score
        return True

    def has_edge(self, source: int, target: int) -> bool:
        return (source, target) in self._scores

    def successors(self, vertex: int) -> list[int]:
        self._check_vertex(vertex)
        return self._successors[vertex]

    def score(self, source: int, target: int) -> int:
        return self._scores[(source, target)]

    def vertices(self) -> range:
        return range(1, self.document_count + 1)

    def edges(self) -> Iterator[tuple[int, int]]:
        """Yield edges grouped by source, in insertion order."""
        for source in self.vertices():
            for target in self._successors[source]:
                yield source, target

    @property
    def edge_count(self) -> int:
        return len(self._scores)

    def to_networkx(self, labels: dict[int, str] | None = None) -> nx.DiGraph:
        """Return a ``networkx.DiGraph`` copy with ``score`` edge attributes."""
        G = nx.DiGraph()
        for vertex in self.vertices():
            if labels is not None and vertex in labels:
                G.add_node(vertex, label=labels[vertex])
            else:
                G.add_node(vertex)
        for source, target in self.edges():
            G.add_edge(source, target, score=self._scores[(source, target)])
        return G


def build_similarity_graph(
    documents: Iterable[Document],
    provider: RelevanceQuery,
    threshold: int,
) -> SimilarityGraph:
    """Build the directed similarity graph for a fixed corpus.

    Documents are queried in ascending id order so repeated runs insert
    edges in the same order.  The provider has already applied the
    threshold; only self-matches are dropped here.  Any exception raised
    by a query is logged and treated as "no matches" for that document,
    so one broken document never aborts the run.

    Args:
        documents: The committed corpus (ids 1..N).
        provider: Relevance engine answering one query per document.
        threshold: Minimum relevance score passed through to the provider.

    Returns:
        A ``SimilarityGraph`` with one vertex per document.
    """
    log = structlog.get_logger().bind(threshold=threshold)
    ordered = sorted(documents, key=lambda d: d.id)
    graph = SimilarityGraph(ordered[-1].id if ordered else 0)

    for document in ordered:
        try:
            matches = provider.find(document, threshold)
        except Exception as exc:
            log.warning(
                "relevance_query_failed",
                document_id=document.id,
                label=document.label,
                error=str(exc),
                exc_info=True,
            )
            graph.failed_documents.append(document.id)
            continue

        for match in matches:
            if match.document_id != document.id:
                graph.add_edge(document.id, match.document_id, match.score)

    log.debug(
        "graph_built",
        vertices=graph.document_count,
        edges=graph.edge_count,
        failed=len(graph.failed_documents),
    )
    return graph
