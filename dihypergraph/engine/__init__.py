from dihypergraph.engine.adjacency import AdjacencyIndex
from dihypergraph.engine.core import Hyperedge, Hypergraph, HypergraphCore, RemovalPreview
from dihypergraph.engine.dot import render_dot, to_dot
from dihypergraph.engine.indexes import MAX_INDEX, HyperedgeIndex, IndexRegistry, VertexIndex
from dihypergraph.engine.parallel import ParallelQuery

__all__ = [
    "VertexIndex",
    "HyperedgeIndex",
    "IndexRegistry",
    "MAX_INDEX",
    "AdjacencyIndex",
    "Hyperedge",
    "RemovalPreview",
    "HypergraphCore",
    "Hypergraph",  # short alias
    "ParallelQuery",
    "render_dot",
    "to_dot",
]
