"""Tests for the scoped temporary index."""

from __future__ import annotations

from pathlib import Path

import pytest

from similar.errors import CorpusError, IndexLockedError
from similar.indexing import TermIndex
from similar.ingestion import DEFAULT_INDEX_DIR_NAME, temporary_index


class TestTemporaryIndex:
    def test_directory_created_and_removed(self, tmp_path: Path) -> None:
        marker = tmp_path / DEFAULT_INDEX_DIR_NAME
        with temporary_index(tmp_path) as index:
            assert isinstance(index, TermIndex)
            assert marker.is_dir()
        assert not marker.exists()

    def test_removed_on_error(self, tmp_path: Path) -> None:
        with pytest.raises(RuntimeError, match="boom"):
            with temporary_index(tmp_path):
                raise RuntimeError("boom")
        assert not (tmp_path / DEFAULT_INDEX_DIR_NAME).exists()

    def test_existing_index_is_locked(self, tmp_path: Path) -> None:
        (tmp_path / DEFAULT_INDEX_DIR_NAME).mkdir()
        with pytest.raises(IndexLockedError, match="already exists"):
            with temporary_index(tmp_path):
                pass
        # The pre-existing directory belongs to someone else and is kept.
        assert (tmp_path / DEFAULT_INDEX_DIR_NAME).is_dir()

    def test_custom_name(self, tmp_path: Path) -> None:
        with temporary_index(tmp_path, ".custom-index"):
            assert (tmp_path / ".custom-index").is_dir()
        assert not (tmp_path / ".custom-index").exists()

    def test_not_a_directory(self, tmp_path: Path) -> None:
        with pytest.raises(CorpusError):
            with temporary_index(tmp_path / "missing"):
                pass

    def test_fresh_index_per_run(self, tmp_path: Path) -> None:
        with temporary_index(tmp_path) as first:
            first.add_document("a", "text")
        with temporary_index(tmp_path) as second:
            assert second.document_count == 0
