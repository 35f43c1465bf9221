"""Corpus loading and the per-run temporary index."""

from .directory_loader import IndexStats, check_corpus_directory, index_directory, iter_regular_files
from .workspace import DEFAULT_INDEX_DIR_NAME, temporary_index

__all__ = [
    "DEFAULT_INDEX_DIR_NAME",
    "IndexStats",
    "check_corpus_directory",
    "index_directory",
    "iter_regular_files",
    "temporary_index",
]
