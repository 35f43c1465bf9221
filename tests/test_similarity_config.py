"""Tests for configuration loading."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from similar.config.settings import Settings
from similar.errors import ConfigError
from similar.matching.config import (
    ClusterConfig,
    RelevanceConfig,
    SimilarityConfig,
    load_similarity_config,
)


class TestLoadFromYaml:
    def test_partial_override(self, tmp_path: Path) -> None:
        config_path = tmp_path / "similarity.yaml"
        config_path.write_text(yaml.dump({"threshold": 65, "relevance": {"expand_terms": 10}}))
        cfg = load_similarity_config(config_path)
        assert cfg.threshold == 65
        assert cfg.relevance.expand_terms == 10
        assert cfg.relevance.bm25_b == 0.5
        assert cfg.cluster == ClusterConfig()

    def test_load_shipped_config(self) -> None:
        """The bundled similarity.yaml should load without errors."""
        cfg = load_similarity_config(Settings().config_path, required=True)
        assert cfg == SimilarityConfig()

    def test_empty_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "empty.yaml"
        config_path.write_text("")
        assert load_similarity_config(config_path) == SimilarityConfig()

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        assert load_similarity_config(tmp_path / "nope.yaml") == SimilarityConfig()

    def test_missing_required_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_similarity_config(tmp_path / "nope.yaml", required=True)

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("threshold: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_similarity_config(config_path)

    def test_non_mapping_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "list.yaml"
        config_path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_similarity_config(config_path)

    def test_invalid_values(self, tmp_path: Path) -> None:
        config_path = tmp_path / "range.yaml"
        config_path.write_text("threshold: 250\n")
        with pytest.raises(ConfigError, match="Validation error"):
            load_similarity_config(config_path)


class TestValidation:
    @pytest.mark.parametrize("threshold", [-1, 101])
    def test_threshold_range(self, threshold: int) -> None:
        with pytest.raises(ValidationError):
            SimilarityConfig(threshold=threshold)

    def test_min_cluster_size(self) -> None:
        with pytest.raises(ValidationError):
            ClusterConfig(min_cluster_size=1)

    def test_expand_terms_positive(self) -> None:
        with pytest.raises(ValidationError):
            RelevanceConfig(expand_terms=0)

    def test_bm25_b_range(self) -> None:
        with pytest.raises(ValidationError):
            RelevanceConfig(bm25_b=1.5)

    def test_defaults(self) -> None:
        cfg = SimilarityConfig()
        assert cfg.threshold == 80
        assert cfg.relevance.expand_terms == 40
        assert cfg.cluster.min_cluster_size == 2


class TestSettings:
    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("SIMILAR_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("SIMILAR_INDEX_DIR_NAME", ".idx")
        settings = Settings()
        assert settings.log_level == "DEBUG"
        assert settings.index_dir_name == ".idx"
        assert settings.log_json is False

    def test_default_config_path_is_bundled(self, monkeypatch) -> None:
        monkeypatch.delenv("SIMILAR_CONFIG_PATH", raising=False)
        settings = Settings()
        assert settings.config_path.is_absolute()
        assert settings.config_path.name == "similarity.yaml"
        assert settings.config_path.is_file()
