"""Pydantic models for configuration and reports.

The engine's own value types (indexes, Hyperedge, RemovalPreview) are plain
dataclasses in dihypergraph.engine; these models cover the caller-facing
settings and the summaries the engine reports back.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

ENV_MAX_WORKERS = "DIHYPERGRAPH_MAX_WORKERS"
ENV_CHUNK_SIZE = "DIHYPERGRAPH_CHUNK_SIZE"


class HypergraphConfig(BaseModel):
    """Tuning knobs for the parallel iteration adapters.

    max_workers=None lets the thread pool pick its own default. chunk_size
    alone determines how a bulk query is split, so results never depend on
    the number of workers.
    """

    model_config = ConfigDict(frozen=True)

    max_workers: int | None = Field(default=None, ge=1)
    chunk_size: int = Field(default=1024, ge=1)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> HypergraphConfig:
        """Read DIHYPERGRAPH_MAX_WORKERS and DIHYPERGRAPH_CHUNK_SIZE.

        Unset or empty variables fall back to the defaults; malformed values
        raise pydantic.ValidationError.
        """
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        if env.get(ENV_MAX_WORKERS):
            values["max_workers"] = env[ENV_MAX_WORKERS]
        if env.get(ENV_CHUNK_SIZE):
            values["chunk_size"] = env[ENV_CHUNK_SIZE]
        return cls.model_validate(values)


class HypergraphStats(BaseModel):
    """Summary counts for a hypergraph.

    Reports live entity counts, how many hyperedges are unary or self-loops,
    and the state of both identifier registries.
    """

    vertex_count: int
    hyperedge_count: int
    unary_count: int
    self_loop_count: int
    next_vertex_index: int
    next_hyperedge_index: int
    retired_vertex_count: int
    retired_hyperedge_count: int


class ValidationResult(BaseModel):
    """Result of a hypergraph consistency check.

    Contains a pass/fail flag, a list of errors, and a list of warnings
    found during validation.
    """

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
