"""Directory loader: index every regular file of one directory.

Traversal is non-recursive.  Files are visited in name order so that
document ids, and therefore edge insertion order, are reproducible.
Unreadable files are logged and skipped.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from similar.errors import CorpusError
from similar.indexing import TermIndex

logger = structlog.get_logger()


@dataclass
class IndexStats:
    """Outcome of indexing a directory.

    Attributes:
        indexed: Number of files added to the index.
        skipped: Paths that could not be read.
    """

    indexed: int = 0
    skipped: list[Path] = field(default_factory=list)


def check_corpus_directory(path: Path) -> Path:
    """Return ``path`` if it is an existing directory.

    Raises:
        CorpusError: If the path is missing or not a directory.
    """
    if not path.exists() or not path.is_dir():
        raise CorpusError(f"Not a directory: {path}")
    return path


def iter_regular_files(directory: Path, exclude: set[str] | None = None) -> Iterator[Path]:
    """Yield regular files directly inside ``directory``, sorted by name.

    Entries whose name is in ``exclude`` are never yielded.
    """
    exclude = exclude or set()
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if entry.name in exclude:
            continue
        if entry.is_file():
            yield entry


def index_directory(
    directory: Path,
    index: TermIndex,
    exclude: set[str] | None = None,
    on_progress: Callable[[int], None] | None = None,
) -> IndexStats:
    """Index the files of ``directory`` and commit the index.

    Files are decoded as UTF-8 with undecodable bytes replaced; the file
    path is used as the document label.

    Args:
        directory: Corpus directory (not traversed recursively).
        index: Fresh, uncommitted index to fill.
        exclude: File or directory names to ignore.
        on_progress: Called with the running count after each file.

    Returns:
        An ``IndexStats`` with indexed/skipped counts.
    """
    check_corpus_directory(directory)
    stats = IndexStats()

    for path in iter_regular_files(directory, exclude):
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.warning("file_unreadable", path=str(path), error=str(exc))
            stats.skipped.append(path)
            continue

        index.add_document(str(path), text)
        stats.indexed += 1
        if on_progress is not None:
            on_progress(stats.indexed)

    index.commit()
    logger.info(
        "indexing_complete",
        directory=str(directory),
        indexed=stats.indexed,
        skipped=len(stats.skipped),
    )
    return stats
