"""Shared fixtures for dihypergraph tests."""

import pytest

from dihypergraph import HypergraphCore


@pytest.fixture()
def graph():
    """Fresh empty hypergraph."""
    return HypergraphCore()


@pytest.fixture()
def social_graph():
    """Hypergraph of people sharing activities.

    Vertices (7):
        ava=0, bianca=1, charles=2, daena=3, ewan=4, faarooq=5, ghanda=6

    Hyperedges (5):
        0: faarooq -> ava -> ghanda                      "cat video"
        1: faarooq -> ava -> ghanda                      "dog video" (non-simple)
        2: ewan -> ava -> bianca                         "beaver video"
        3: daena                                         "play online" (unary)
        4: ewan -> charles -> bianca -> bianca -> ewan   "pass the ball" (self-loop)
    """
    g = HypergraphCore()
    names = ["Ava", "Bianca", "Charles", "Daena", "Ewan", "Faarooq", "Ghanda"]
    ava, bianca, charles, daena, ewan, faarooq, ghanda = (g.add_vertex(n) for n in names)

    g.add_hyperedge([faarooq, ava, ghanda], "cat video")
    g.add_hyperedge([faarooq, ava, ghanda], "dog video")
    g.add_hyperedge([ewan, ava, bianca], "beaver video")
    g.add_hyperedge([daena], "play online")
    g.add_hyperedge([ewan, charles, bianca, bianca, ewan], "pass the ball")
    return g
