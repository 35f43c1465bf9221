"""Cluster reporting: turn a component partition into printable clusters.

Singleton components are dropped -- a file similar only to itself is not
a cluster.  Clusters are ordered by ascending component id and members
by ascending document id.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import asdict, dataclass, field

from similar.matching.config import ClusterConfig

from .graph_builder import SimilarityGraph

TEXT_HEADER = "Non trivial strong connected components of the similarity graph:"


@dataclass
class Cluster:
    """One non-trivial strongly-connected component.

    Attributes:
        component_id: Id assigned by the component extractor.
        document_ids: Member ids in ascending order.
        labels: Member labels, aligned with ``document_ids``.
        mean_score: Average relevance score of the edges inside the
            cluster, ``None`` if the graph carries no scores for them.
    """

    component_id: int
    document_ids: list[int]
    labels: list[str]
    mean_score: float | None = None

    def __len__(self) -> int:
        return len(self.document_ids)


@dataclass
class ClusterReport:
    """Ordered non-trivial clusters plus run statistics."""

    clusters: list[Cluster] = field(default_factory=list)
    document_count: int = 0
    edge_count: int = 0
    component_count: int = 0
    failed_documents: list[int] = field(default_factory=list)
    threshold: int | None = None

    def label_sets(self) -> list[set[str]]:
        return [set(c.labels) for c in self.clusters]


def report(
    graph: SimilarityGraph,
    components: dict[int, int],
    label_of: Callable[[int], str],
    config: ClusterConfig | None = None,
) -> ClusterReport:
    """Group vertices by component and keep the non-trivial groups.

    Args:
        graph: The similarity graph the components were computed on.
        components: Vertex -> component id mapping.
        label_of: Display label for a document id.
        config: Minimum cluster size (default 2).

    Returns:
        A ``ClusterReport`` with clusters in ascending component id order.
    """
    if config is None:
        config = ClusterConfig()

    members: dict[int, list[int]] = {}
    for vertex in graph.vertices():
        members.setdefault(components[vertex], []).append(vertex)

    clusters: list[Cluster] = []
    for component_id in sorted(members):
        vertices = members[component_id]
        if len(vertices) < config.min_cluster_size:
            continue
        clusters.append(
            Cluster(
                component_id=component_id,
                document_ids=vertices,
                labels=[label_of(v) for v in vertices],
                mean_score=_mean_internal_score(graph, vertices),
            )
        )

    return ClusterReport(
        clusters=clusters,
        document_count=graph.document_count,
        edge_count=graph.edge_count,
        component_count=len(members),
        failed_documents=list(graph.failed_documents),
    )


def _mean_internal_score(graph: SimilarityGraph, vertices: list[int]) -> float | None:
    """Average score over edges with both endpoints in ``vertices``."""
    inside = set(vertices)
    scores = [
        graph.score(v, t)
        for v in vertices
        for t in graph.successors(v)
        if t in inside
    ]
    if not scores:
        return None
    return sum(scores) / len(scores)


def render_text(result: ClusterReport) -> str:
    """Render clusters as bracketed blocks, one tab-indented label per line."""
    lines = [TEXT_HEADER]
    for cluster in result.clusters:
        lines.append("{")
        lines.extend(f"\t{label}" for label in cluster.labels)
        lines.append("}")
    return "\n".join(lines) + "\n"


def render_json(result: ClusterReport) -> str:
    """Render the report and its statistics as a JSON document."""
    payload = asdict(result)
    for cluster in payload["clusters"]:
        if cluster["mean_score"] is not None:
            cluster["mean_score"] = round(cluster["mean_score"], 2)
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
