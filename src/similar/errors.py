"""Exception types raised by the similarity pipeline.

Only precondition errors (invalid threshold, unreadable corpus, locked
index) are fatal.  ``ProviderQueryError`` is local to one document and
is always recovered by the graph builder.
"""


class SimilarError(Exception):
    """Base class for all errors raised by ``similar``."""


class InvalidThresholdError(SimilarError, ValueError):
    """Threshold outside the 0..100 relevance range."""

    def __init__(self, threshold: object) -> None:
        super().__init__(f"threshold must be between 0 and 100, got {threshold!r}")
        self.threshold = threshold


class ProviderQueryError(SimilarError, RuntimeError):
    """A relevance query failed for a single document."""


class CorpusError(SimilarError, OSError):
    """The corpus directory is missing, not a directory, or unusable."""


class IndexLockedError(SimilarError, FileExistsError):
    """The temporary index directory already exists."""


class ConfigError(SimilarError, ValueError):
    """A configuration file is missing, malformed, or invalid."""
