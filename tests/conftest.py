"""Shared test fixtures."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest
import structlog


@pytest.fixture(autouse=True)
def _quiet_structlog():
    """Route structlog to stderr at WARNING so stdout stays clean."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def fox_corpus(tmp_path: Path) -> Path:
    """Directory with two near-duplicate files and one unrelated file."""
    corpus = tmp_path / "corpus"
    corpus.mkdir()
    (corpus / "a.txt").write_text("the quick brown fox jumps over the lazy dog\n")
    (corpus / "b.txt").write_text("the quick brown fox leaps over the lazy dog\n")
    (corpus / "c.txt").write_text("stock markets fell sharply amid inflation fears\n")
    return corpus
