"""Full-text indexing and the relevance provider used by the CLI."""

from .index import TermIndex
from .normalizer import index_terms, stem, tokenize
from .relevance import IndexRelevanceProvider

__all__ = ["IndexRelevanceProvider", "TermIndex", "index_terms", "stem", "tokenize"]
