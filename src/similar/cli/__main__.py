"""CLI entry point: python -m similar.cli PATH [THRESHOLD]"""

import argparse
import sys
from pathlib import Path

import networkx as nx
import structlog

from similar.clustering import render_json, render_text
from similar.config.settings import get_settings
from similar.errors import InvalidThresholdError, SimilarError
from similar.indexing import IndexRelevanceProvider
from similar.ingestion import index_directory, temporary_index
from similar.logging_config import configure_logging
from similar.matching.config import SimilarityConfig, load_similarity_config
from similar.pipeline import PipelineResult, run_with_graph, validate_threshold

DESCRIPTION = """\
similar indexes the files in PATH and computes the relevance between the
terms of every pair of files.  A directed similarity graph is built with a
vertex for each indexed file; an edge A->B exists iff the relevance of B
for the terms in A is at least THRESHOLD.  similar prints the non-trivial
strongly connected components of that graph.
"""


def parse_threshold(raw: str | None, config: SimilarityConfig) -> int:
    """Parse the THRESHOLD argument, falling back to the configured default."""
    if raw is None:
        return config.threshold
    try:
        value = int(raw)
    except ValueError as exc:
        raise InvalidThresholdError(raw) from exc
    return validate_threshold(value)


def cluster_directory(
    directory: Path,
    threshold: int,
    config: SimilarityConfig,
    index_dir_name: str,
    show_progress: bool = True,
) -> PipelineResult:
    """Index ``directory`` in a temporary index and cluster its files."""
    threshold = validate_threshold(threshold)

    def progress(count: int) -> None:
        sys.stderr.write(f"indexing files ({count} done)\r")
        sys.stderr.flush()

    with temporary_index(directory, index_dir_name) as index:
        index_directory(
            directory,
            index,
            exclude={index_dir_name},
            on_progress=progress if show_progress else None,
        )
        if show_progress:
            sys.stderr.write("\nindexing done.\n")

        provider = IndexRelevanceProvider(index, config.relevance)
        return run_with_graph(index.documents(), provider, threshold, config.cluster)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="similar",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("path", type=Path, help="Directory that contains the files to compare")
    parser.add_argument(
        "threshold",
        nargs="?",
        default=None,
        help=(
            "Cut-off percentage (0-100) that decides if two files are similar; "
            "at 100 files must be really close to be considered similar"
        ),
    )
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Report format (default: text)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file (default: the bundled similarity.yaml)",
    )
    parser.add_argument(
        "--graph-out",
        type=Path,
        default=None,
        help="Write the similarity graph as GraphML to this path",
    )
    parser.add_argument("--quiet", action="store_true", help="Do not print indexing progress")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    configure_logging(json_output=settings.log_json, log_level=settings.log_level)
    log = structlog.get_logger()

    try:
        if args.config is not None:
            config = load_similarity_config(args.config, required=True)
        else:
            config = load_similarity_config(settings.config_path)
        threshold = parse_threshold(args.threshold, config)
        result = cluster_directory(
            args.path,
            threshold,
            config,
            settings.index_dir_name,
            show_progress=not args.quiet,
        )
    except (SimilarError, ValueError) as exc:
        log.error("run_failed", path=str(args.path), error=str(exc))
        sys.stderr.write(f"\n{exc}\n")
        return 1

    if args.graph_out is not None:
        try:
            nx.write_graphml(result.graph.to_networkx(result.labels), args.graph_out)
        except OSError as exc:
            log.error("graph_write_failed", path=str(args.graph_out), error=str(exc))
            sys.stderr.write(f"\ncould not write graph: {exc}\n")
            return 1
        log.info("graph_written", path=str(args.graph_out))

    if args.format == "json":
        sys.stdout.write(render_json(result.report))
    else:
        sys.stdout.write(render_text(result.report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
