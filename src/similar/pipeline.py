"""Similarity pipeline: relevance queries -> graph -> components -> report.

All functions are PURE with respect to the corpus and the provider --
no file-system access happens here.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from similar.clustering import (
    ClusterReport,
    SimilarityGraph,
    build_similarity_graph,
    report,
    strongly_connected_components,
)
from similar.errors import InvalidThresholdError
from similar.matching.config import ClusterConfig
from similar.models import Document, RelevanceQuery


@dataclass
class PipelineResult:
    """Complete result of one clustering run.

    Attributes:
        graph: The directed similarity graph.
        components: Vertex -> component id mapping.
        report: Non-trivial clusters and statistics.
        labels: Document id -> label for every document of the corpus.
    """

    graph: SimilarityGraph
    components: dict[int, int]
    report: ClusterReport
    labels: dict[int, str]


def validate_threshold(threshold: object) -> int:
    """Return ``threshold`` if it is an integer in [0, 100].

    Raises:
        InvalidThresholdError: For anything else (``bool`` included).
    """
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise InvalidThresholdError(threshold)
    if not 0 <= threshold <= 100:
        raise InvalidThresholdError(threshold)
    return threshold


def run_with_graph(
    documents: Iterable[Document],
    provider: RelevanceQuery,
    threshold: int,
    cluster_config: ClusterConfig | None = None,
) -> PipelineResult:
    """Run the full pipeline and keep the intermediate graph.

    The threshold is validated before any query is issued.  An empty
    corpus yields an empty report.
    """
    threshold = validate_threshold(threshold)
    corpus = sorted(documents, key=lambda d: d.id)
    labels = {d.id: d.label for d in corpus}
    log = structlog.get_logger().bind(threshold=threshold, documents=len(corpus))

    graph = build_similarity_graph(corpus, provider, threshold)
    components = strongly_connected_components(graph)
    result = report(graph, components, labels.__getitem__, cluster_config)
    result.threshold = threshold

    if graph.failed_documents:
        log.warning(
            "relevance_queries_degraded",
            failed_documents=len(graph.failed_documents),
        )
    log.info(
        "clustering_complete",
        edges=graph.edge_count,
        components=result.component_count,
        clusters=len(result.clusters),
    )
    return PipelineResult(
        graph=graph, components=components, report=result, labels=labels
    )


def run(
    documents: Iterable[Document],
    provider: RelevanceQuery,
    threshold: int,
    cluster_config: ClusterConfig | None = None,
) -> ClusterReport:
    """Cluster ``documents`` and return the non-trivial clusters."""
    return run_with_graph(documents, provider, threshold, cluster_config).report
