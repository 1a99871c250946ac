"""Tests for configuration and report models."""

import pytest
from pydantic import ValidationError

from dihypergraph import HypergraphConfig, HypergraphCore, HypergraphStats, ValidationResult


class TestHypergraphConfig:
    def test_defaults(self):
        config = HypergraphConfig()
        assert config.max_workers is None
        assert config.chunk_size == 1024

    def test_rejects_non_positive(self):
        with pytest.raises(ValidationError):
            HypergraphConfig(max_workers=0)
        with pytest.raises(ValidationError):
            HypergraphConfig(chunk_size=0)

    def test_frozen(self):
        config = HypergraphConfig()
        with pytest.raises(ValidationError):
            config.chunk_size = 5

    def test_from_env(self):
        config = HypergraphConfig.from_env(
            {"DIHYPERGRAPH_MAX_WORKERS": "4", "DIHYPERGRAPH_CHUNK_SIZE": "32"}
        )
        assert config.max_workers == 4
        assert config.chunk_size == 32

    def test_from_env_empty_values_use_defaults(self):
        config = HypergraphConfig.from_env({"DIHYPERGRAPH_MAX_WORKERS": ""})
        assert config == HypergraphConfig()

    def test_from_env_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("DIHYPERGRAPH_CHUNK_SIZE", "9")
        monkeypatch.delenv("DIHYPERGRAPH_MAX_WORKERS", raising=False)
        assert HypergraphConfig.from_env().chunk_size == 9

    def test_from_env_malformed_raises(self):
        with pytest.raises(ValidationError):
            HypergraphConfig.from_env({"DIHYPERGRAPH_CHUNK_SIZE": "lots"})

    def test_graph_uses_config(self):
        config = HypergraphConfig(chunk_size=3)
        assert HypergraphCore(config).config is config
        assert HypergraphCore().config == HypergraphConfig()


class TestReports:
    def test_stats_serializes(self, social_graph):
        data = social_graph.stats().model_dump()
        assert data["vertex_count"] == 7
        assert HypergraphStats(**data) == social_graph.stats()

    def test_validation_result_defaults(self):
        result = ValidationResult(valid=True)
        assert result.errors == []
        assert result.warnings == []
