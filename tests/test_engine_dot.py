"""Tests for Graphviz DOT export."""

import io

import pytest

from dihypergraph import HyperedgeIndex, HypergraphCore, VertexIndex, render_dot, to_dot


class FailingSink:
    def write(self, text):
        raise OSError("disk full")


class TestDotExport:
    """Tests for to_dot / write_dot."""

    def test_header_and_defaults(self, social_graph):
        source = social_graph.to_dot()
        assert source.startswith("digraph hypergraph {")
        assert "rankdir=LR" in source
        assert source.rstrip().endswith("}")

    def test_vertex_nodes(self, social_graph):
        source = social_graph.to_dot()
        assert "v0 [label=Ava]" in source
        assert "v6 [label=Ghanda]" in source

    def test_hyperedge_nodes_and_arcs(self, social_graph):
        source = social_graph.to_dot()
        assert 'h0 [label="cat video" shape=box]' in source
        assert "h0 -> v5 [label=0]" in source
        assert "h0 -> v0 [label=1]" in source
        assert "h0 -> v6 [label=2]" in source

    def test_self_loop_keeps_every_position(self, social_graph):
        source = social_graph.to_dot()
        assert "h4 -> v1 [label=2]" in source
        assert "h4 -> v1 [label=3]" in source
        assert "h4 -> v4 [label=0]" in source
        assert "h4 -> v4 [label=4]" in source

    def test_unary_hyperedge(self, social_graph):
        source = social_graph.to_dot()
        assert "h3 -> v3 [label=0]" in source
        assert "h3 -> v3 [label=1]" not in source

    def test_vertices_precede_hyperedges(self, social_graph):
        source = social_graph.to_dot()
        assert source.index("v6 [label=Ghanda]") < source.index("h0 [label=")
        assert source.index("h0 [label=") < source.index("h1 [label=") < source.index("h4 [label=")

    def test_updates_keep_output_position(self, social_graph):
        social_graph.update_weight(HyperedgeIndex(0), "kitten video")
        source = social_graph.to_dot()
        assert source.index('h0 [label="kitten video"') < source.index('h1 [label="dog video"')

    def test_removed_entities_are_absent(self, social_graph):
        social_graph.remove_vertex(VertexIndex(0))
        source = social_graph.to_dot()
        assert "v0 " not in source
        assert "h0 " not in source
        assert "h4 -> v2 [label=1]" in source

    def test_deterministic(self, social_graph):
        assert social_graph.to_dot() == social_graph.to_dot()

    def test_identical_operations_give_identical_output(self):
        def build():
            graph = HypergraphCore()
            a, b, c = (graph.add_vertex(name) for name in "abc")
            graph.add_hyperedge([c, a, b], 1.5)
            graph.add_hyperedge([b], "solo")
            graph.remove_vertex(a)
            graph.add_hyperedge([c, c], None)
            return graph

        assert build().to_dot() == build().to_dot()

    def test_empty_graph(self, graph):
        source = graph.to_dot()
        assert "->" not in source
        assert "[label=" not in source

    def test_write_dot_matches_to_dot(self, social_graph):
        sink = io.StringIO()
        social_graph.write_dot(sink)
        assert sink.getvalue() == social_graph.to_dot() == to_dot(social_graph)

    def test_render_dot_function(self, social_graph):
        sink = io.StringIO()
        render_dot(social_graph, sink)
        assert sink.getvalue().startswith("digraph hypergraph {")

    def test_sink_error_propagates(self, social_graph):
        with pytest.raises(OSError, match="disk full"):
            social_graph.write_dot(FailingSink())

    def test_export_does_not_mutate(self, social_graph):
        before = social_graph.stats()
        social_graph.to_dot()
        assert social_graph.stats() == before
