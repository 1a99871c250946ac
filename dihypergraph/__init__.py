"""dihypergraph: an in-memory directed hypergraph with stable indexes."""

__version__ = "0.1.0"

from dihypergraph.engine import (
    AdjacencyIndex,
    Hyperedge,
    HyperedgeIndex,
    Hypergraph,
    HypergraphCore,
    IndexRegistry,
    ParallelQuery,
    RemovalPreview,
    VertexIndex,
    render_dot,
    to_dot,
)
from dihypergraph.errors import (
    DuplicateHyperedgeError,
    EmptyHyperedgeError,
    HyperedgeNotFoundError,
    HypergraphError,
    IndexOverflowError,
    InvalidContractionError,
    NotEnoughHyperedgesError,
    VertexNotFoundError,
)
from dihypergraph.models import HypergraphConfig, HypergraphStats, ValidationResult

__all__ = [
    "AdjacencyIndex",
    "DuplicateHyperedgeError",
    "EmptyHyperedgeError",
    "Hyperedge",
    "HyperedgeIndex",
    "HyperedgeNotFoundError",
    "Hypergraph",
    "HypergraphConfig",
    "HypergraphCore",
    "HypergraphError",
    "HypergraphStats",
    "IndexOverflowError",
    "IndexRegistry",
    "InvalidContractionError",
    "NotEnoughHyperedgesError",
    "ParallelQuery",
    "RemovalPreview",
    "ValidationResult",
    "VertexIndex",
    "VertexNotFoundError",
    "__version__",
    "render_dot",
    "to_dot",
]
