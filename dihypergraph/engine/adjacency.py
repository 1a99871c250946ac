"""Reference-counted adjacency derived from hyperedge sequences.

The index is maintained as a side effect of hyperedge store mutations and is
never authoritative on its own: rebuilding it from the stored hyperedges must
always give the same counts (see HypergraphCore.validate).

Counting conventions:
    - Membership: a vertex belongs to a hyperedge once, however many times it
      appears in the sequence. Repetitions are tracked as occurrences.
    - Successor/predecessor pairs: every consecutive window of a sequence
      contributes one count, so [v, v, v] gives the pair (v, v) a count of 2.

Counts are decremented on removal and an entry disappears only when its count
reaches zero, since several hyperedges may justify the same pair.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from dihypergraph.engine.indexes import HyperedgeIndex, VertexIndex


def _windows(vertices: Sequence[VertexIndex]) -> list[tuple[VertexIndex, VertexIndex]]:
    return list(zip(vertices, vertices[1:]))


def _decrement(counter: Counter, key: object, amount: int = 1) -> None:
    remaining = counter[key] - amount
    if remaining > 0:
        counter[key] = remaining
    else:
        del counter[key]


class AdjacencyIndex:
    """Vertex -> hyperedge memberships and vertex -> neighbour window counts."""

    def __init__(self) -> None:
        self._memberships: dict[VertexIndex, Counter[HyperedgeIndex]] = {}
        self._successors: dict[VertexIndex, Counter[VertexIndex]] = {}
        self._predecessors: dict[VertexIndex, Counter[VertexIndex]] = {}

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._memberships

    # ========== Mutation (driven by the stores) ==========

    def add_vertex(self, vertex: VertexIndex) -> None:
        self._memberships.setdefault(vertex, Counter())
        self._successors.setdefault(vertex, Counter())
        self._predecessors.setdefault(vertex, Counter())

    def discard_vertex(self, vertex: VertexIndex) -> None:
        """Drop the entries of a vertex that no longer has any membership."""
        if self._memberships.get(vertex):
            raise ValueError(f"{vertex!r} still belongs to hyperedges")
        self._memberships.pop(vertex, None)
        self._successors.pop(vertex, None)
        self._predecessors.pop(vertex, None)

    def register(self, hyperedge: HyperedgeIndex, vertices: Sequence[VertexIndex]) -> None:
        for vertex in vertices:
            self._memberships[vertex][hyperedge] += 1
        for source, target in _windows(vertices):
            self._successors[source][target] += 1
            self._predecessors[target][source] += 1

    def unregister(self, hyperedge: HyperedgeIndex, vertices: Sequence[VertexIndex]) -> None:
        for vertex in vertices:
            _decrement(self._memberships[vertex], hyperedge)
        for source, target in _windows(vertices):
            _decrement(self._successors[source], target)
            _decrement(self._predecessors[target], source)

    def clear_relations(self) -> None:
        """Forget every membership and pair while keeping the vertices."""
        for vertex in self._memberships:
            self._memberships[vertex] = Counter()
            self._successors[vertex] = Counter()
            self._predecessors[vertex] = Counter()

    def clear(self) -> None:
        self._memberships.clear()
        self._successors.clear()
        self._predecessors.clear()

    # ========== Queries (vertex existence is checked by the caller) ==========

    def hyperedges_of(self, vertex: VertexIndex) -> list[HyperedgeIndex]:
        return sorted(self._memberships[vertex])

    def occurrences(self, vertex: VertexIndex, hyperedge: HyperedgeIndex) -> int:
        return self._memberships[vertex][hyperedge]

    def successors(self, vertex: VertexIndex) -> list[VertexIndex]:
        return sorted(self._successors[vertex])

    def predecessors(self, vertex: VertexIndex) -> list[VertexIndex]:
        return sorted(self._predecessors[vertex])

    def neighbors(self, vertex: VertexIndex) -> list[VertexIndex]:
        return sorted(set(self._successors[vertex]) | set(self._predecessors[vertex]))

    def degree(self, vertex: VertexIndex) -> int:
        return len(self._memberships[vertex])

    def out_degree(self, vertex: VertexIndex) -> int:
        return sum(self._successors[vertex].values())

    def in_degree(self, vertex: VertexIndex) -> int:
        return sum(self._predecessors[vertex].values())

    def pair_count(self, source: VertexIndex, target: VertexIndex) -> int:
        return self._successors[source][target]

    def snapshot(self) -> dict[str, dict[VertexIndex, dict]]:
        """Plain-dict copy of the counts, used for integrity checks."""
        return {
            "memberships": {v: dict(c) for v, c in self._memberships.items()},
            "successors": {v: dict(c) for v, c in self._successors.items()},
            "predecessors": {v: dict(c) for v, c in self._predecessors.items()},
        }

    @classmethod
    def rebuild(
        cls,
        vertices: Sequence[VertexIndex],
        hyperedges: Sequence[tuple[HyperedgeIndex, Sequence[VertexIndex]]],
    ) -> AdjacencyIndex:
        """Build a fresh index from the authoritative stores."""
        index = cls()
        for vertex in vertices:
            index.add_vertex(vertex)
        for hyperedge, members in hyperedges:
            index.register(hyperedge, members)
        return index
