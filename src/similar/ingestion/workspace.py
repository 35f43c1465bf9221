"""Scoped temporary index for one run over a directory.

The index itself lives in memory; the ``.tmp-similar-db`` directory
created next to the corpus marks the run in progress so two runs never
index the same directory concurrently.  It is removed on exit.
"""

from __future__ import annotations

import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog

from similar.errors import CorpusError, IndexLockedError
from similar.indexing import TermIndex

from .directory_loader import check_corpus_directory

DEFAULT_INDEX_DIR_NAME = ".tmp-similar-db"


@contextmanager
def temporary_index(
    directory: Path, index_dir_name: str = DEFAULT_INDEX_DIR_NAME
) -> Iterator[TermIndex]:
    """Yield a fresh ``TermIndex`` owned by this run.

    Raises:
        CorpusError: ``directory`` is not a directory, or the temporary
            index directory could not be removed afterwards.
        IndexLockedError: The temporary index directory already exists.
    """
    log = structlog.get_logger().bind(directory=str(directory))
    check_corpus_directory(directory)
    index_path = directory / index_dir_name

    try:
        index_path.mkdir()
    except FileExistsError as exc:
        raise IndexLockedError(
            f"Temporary database already exists ({index_path})"
        ) from exc

    log.debug("index_opened", index_path=str(index_path))
    try:
        yield TermIndex()
    finally:
        try:
            shutil.rmtree(index_path)
        except OSError as exc:
            log.error("index_cleanup_failed", index_path=str(index_path), error=str(exc))
            raise CorpusError(f"could not remove tmp database: {index_path}") from exc
        log.debug("index_closed", index_path=str(index_path))
