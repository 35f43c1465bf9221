"""Similarity run configuration with sensible defaults.

All parameters can be overridden via the ``similarity.yaml`` shipped
next to the settings module, or a file passed with ``--config``.
If the default file does not exist, defaults are used.
"""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from similar.errors import ConfigError


class RelevanceConfig(BaseModel):
    """Parameters for the query-expansion relevance engine."""

    expand_terms: int = Field(default=40, ge=1)
    bm25_k1: float = Field(default=1.0, ge=0.0)
    bm25_b: float = Field(default=0.5, ge=0.0, le=1.0)
    bm25_min_normlen: float = Field(default=0.5, gt=0.0)
    query_term_weight: float = Field(default=1.0, gt=0.0)


class ClusterConfig(BaseModel):
    """Constraints for reporting strongly-connected components."""

    min_cluster_size: int = 2

    @field_validator("min_cluster_size")
    @classmethod
    def at_least_pairs(cls, value: int) -> int:
        if value < 2:
            raise ValueError("min_cluster_size must be at least 2")
        return value


class SimilarityConfig(BaseModel):
    """Top-level configuration combining all sub-configs."""

    threshold: int = 80
    relevance: RelevanceConfig = RelevanceConfig()
    cluster: ClusterConfig = ClusterConfig()

    @field_validator("threshold")
    @classmethod
    def threshold_in_range(cls, value: int) -> int:
        if not 0 <= value <= 100:
            raise ValueError("threshold must be between 0 and 100")
        return value

    @model_validator(mode="after")
    def warn_on_permissive_threshold(self) -> "SimilarityConfig":
        """Log a warning when every document would link to every other."""
        if self.threshold == 0:
            structlog.get_logger().warning(
                "threshold_links_everything",
                threshold=self.threshold,
            )
        return self


def load_similarity_config(path: Path, required: bool = False) -> SimilarityConfig:
    """Load configuration from a YAML file.

    If the file does not exist and ``required`` is ``False``, returns a
    ``SimilarityConfig`` with all default values.  Partial overrides are
    supported -- only the keys present in the YAML file will override
    defaults.

    Raises:
        ConfigError: The file is required but missing, is not valid YAML,
            is not a mapping, or fails validation.
    """
    if not path.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {path}")
        return SimilarityConfig()

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {path} must be a mapping")

    try:
        return SimilarityConfig(**data)
    except ValidationError as exc:
        raise ConfigError(f"Validation error for {path}: {exc}") from exc
