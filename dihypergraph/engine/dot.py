"""Graphviz DOT export.

A hyperedge of arity > 2 cannot be drawn as plain pairwise arcs, so every
hyperedge becomes an auxiliary box node labelled with its weight, with one
arc per position to the member vertex at that position. Vertices come
first, then hyperedges, both in store insertion order, so identical
operation sequences always render identical text.

Only the DOT source is generated; no Graphviz binary is needed.
"""

from __future__ import annotations

import logging
from typing import IO, TYPE_CHECKING

import graphviz

if TYPE_CHECKING:
    from dihypergraph.engine.core import HypergraphCore

logger = logging.getLogger(__name__)

GRAPH_ATTR = {"rankdir": "LR"}
NODE_ATTR = {"shape": "circle", "fontsize": "8.0"}
EDGE_ATTR = {"arrowsize": "0.5", "fontsize": "8.0", "penwidth": "0.5"}


def vertex_node_name(index: object) -> str:
    return f"v{index}"


def hyperedge_node_name(index: object) -> str:
    return f"h{index}"


def build_digraph(graph: HypergraphCore) -> graphviz.Digraph:
    """Build a graphviz.Digraph from a consistent snapshot of the graph."""
    with graph.batch():
        vertices = graph.get_vertex_items()
        hyperedges = list(graph.iter_hyperedges())

    dot = graphviz.Digraph(
        name="hypergraph",
        graph_attr=GRAPH_ATTR,
        node_attr=NODE_ATTR,
        edge_attr=EDGE_ATTR,
    )
    for index, payload in vertices:
        dot.node(vertex_node_name(index), label=graphviz.escape(str(payload)))
    for edge in hyperedges:
        center = hyperedge_node_name(edge.index)
        dot.node(center, label=graphviz.escape(str(edge.weight)), shape="box")
        for position, vertex in enumerate(edge.vertices):
            dot.edge(center, vertex_node_name(vertex), label=str(position))
    return dot


def to_dot(graph: HypergraphCore) -> str:
    """Return the DOT document for the graph."""
    return build_digraph(graph).source


def render_dot(graph: HypergraphCore, sink: IO[str]) -> None:
    """Write the DOT document to a writable text sink.

    Errors raised by the sink propagate unchanged.
    """
    source = to_dot(graph)
    sink.write(source)
    logger.debug("Wrote %d characters of DOT output", len(source))
