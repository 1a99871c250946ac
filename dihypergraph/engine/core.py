"""Core directed hypergraph storage and operations.

A hyperedge is an ordered sequence of vertices plus a weight. The store
supports non-simple hypergraphs (same sequence, different weights),
self-loops (a vertex repeated within one sequence) and unary hyperedges
(a single-vertex sequence).

Vertices and hyperedges are addressed by stable indexes that are never
reused. Hyperedges hold their vertices by index and the adjacency index keeps
the reverse direction, so removing a vertex can cascade to its hyperedges
without any back-references between entities.

Thread Safety:
    All operations on HypergraphCore are protected by an internal RLock
    (reentrant lock). Mutations are therefore serialized, and readers never
    observe a half-applied mutation.

    For atomic batch operations, use the batch() context manager:
        with graph.batch():
            a = graph.add_vertex("a")
            b = graph.add_vertex("b")
            graph.add_hyperedge([a, b], 1)
"""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Generator, Hashable, Iterable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, replace
from itertools import chain
from typing import IO, Any

from dihypergraph.engine.adjacency import AdjacencyIndex
from dihypergraph.engine.dot import render_dot, to_dot
from dihypergraph.engine.indexes import HyperedgeIndex, IndexRegistry, VertexIndex
from dihypergraph.engine.parallel import ParallelQuery
from dihypergraph.errors import (
    DuplicateHyperedgeError,
    EmptyHyperedgeError,
    HyperedgeNotFoundError,
    InvalidContractionError,
    NotEnoughHyperedgesError,
    VertexNotFoundError,
)
from dihypergraph.models import HypergraphConfig, HypergraphStats, ValidationResult

logger = logging.getLogger(__name__)

HyperedgeKey = tuple[tuple[VertexIndex, ...], Hashable]


def _check_hashable(weight: Any) -> None:
    try:
        hash(weight)
    except TypeError:
        raise TypeError(
            f"Hyperedge weight must be hashable, got: {type(weight).__name__}"
        ) from None


@dataclass(frozen=True)
class Hyperedge:
    """An ordered, weighted relationship between vertices.

    Position i of the sequence is a predecessor of position i + 1.

    Attributes:
        index: Stable identifier of the hyperedge
        vertices: Ordered vertex indexes (repetitions allowed)
        weight: Hashable value distinguishing hyperedges over the same sequence

    Raises:
        TypeError: If index or a vertex has the wrong type, or weight is unhashable
        EmptyHyperedgeError: If vertices is empty
    """

    index: HyperedgeIndex
    vertices: tuple[VertexIndex, ...]
    weight: Any

    def __post_init__(self) -> None:
        if not isinstance(self.index, HyperedgeIndex):
            raise TypeError(
                f"Hyperedge index must be a HyperedgeIndex, got: {type(self.index).__name__}"
            )
        if not isinstance(self.vertices, tuple):
            object.__setattr__(self, "vertices", tuple(self.vertices))
        if not self.vertices:
            raise EmptyHyperedgeError(self.weight)
        for vertex in self.vertices:
            if not isinstance(vertex, VertexIndex):
                raise TypeError(
                    f"Hyperedge vertices must be VertexIndex, got: {type(vertex).__name__}"
                )
        _check_hashable(self.weight)

    @property
    def key(self) -> HyperedgeKey:
        """The (sequence, weight) pair that identifies this hyperedge's content."""
        return (self.vertices, self.weight)

    @property
    def vertex_set(self) -> frozenset[VertexIndex]:
        return frozenset(self.vertices)

    @property
    def windows(self) -> list[tuple[VertexIndex, VertexIndex]]:
        """Consecutive (predecessor, successor) pairs in sequence order."""
        return list(zip(self.vertices, self.vertices[1:]))

    @property
    def is_unary(self) -> bool:
        return len(self.vertices) == 1

    @property
    def is_self_loop(self) -> bool:
        """True if any vertex appears more than once in the sequence."""
        return len(set(self.vertices)) < len(self.vertices)


@dataclass(frozen=True)
class RemovalPreview:
    """What remove_vertex() would delete, computed without mutating anything."""

    vertex: VertexIndex
    hyperedges: tuple[HyperedgeIndex, ...]

    @property
    def hyperedge_count(self) -> int:
        return len(self.hyperedges)


class HypergraphCore:
    """Directed hypergraph with stable indexes and incremental adjacency.

    Design principles:
    - Identifiers come from monotonic registries and are retired, never reused
    - Hyperedges are unique on their (sequence, weight) pair
    - Adjacency is derived, reference-counted state
    - Payloads and weights are opaque; weights only need to be hashable
    """

    def __init__(self, config: HypergraphConfig | None = None) -> None:
        self.config = config or HypergraphConfig()
        self._vertex_registry: IndexRegistry[VertexIndex] = IndexRegistry(VertexIndex)
        self._hyperedge_registry: IndexRegistry[HyperedgeIndex] = IndexRegistry(HyperedgeIndex)
        # Both stores keep insertion order; updates replace values in place
        self._vertices: dict[VertexIndex, Any] = {}
        self._hyperedges: dict[HyperedgeIndex, Hyperedge] = {}
        self._hyperedges_by_key: dict[HyperedgeKey, HyperedgeIndex] = {}
        self._adjacency = AdjacencyIndex()
        # Reentrant because cascading and composite operations call other
        # locked methods
        self._lock = threading.RLock()

    def __getstate__(self) -> dict[str, Any]:
        """Support for pickle/deepcopy - exclude the lock."""
        state = self.__dict__.copy()
        del state["_lock"]
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        """Support for pickle/deepcopy - recreate the lock."""
        self.__dict__.update(state)
        self._lock = threading.RLock()

    def __deepcopy__(self, memo: dict) -> HypergraphCore:
        """Support for copy.deepcopy - create new instance with copied data.

        Thread-safe: acquires lock during copy to prevent concurrent modifications.
        """
        with self._lock:
            new_graph = HypergraphCore.__new__(HypergraphCore)
            memo[id(self)] = new_graph

            new_graph.config = self.config
            new_graph._vertex_registry = copy.deepcopy(self._vertex_registry, memo)
            new_graph._hyperedge_registry = copy.deepcopy(self._hyperedge_registry, memo)
            new_graph._vertices = copy.deepcopy(self._vertices, memo)
            new_graph._hyperedges = copy.deepcopy(self._hyperedges, memo)
            new_graph._hyperedges_by_key = copy.deepcopy(self._hyperedges_by_key, memo)
            new_graph._adjacency = copy.deepcopy(self._adjacency, memo)

            new_graph._lock = threading.RLock()

            return new_graph

    def __repr__(self) -> str:
        return (
            f"HypergraphCore(vertices={len(self._vertices)}, "
            f"hyperedges={len(self._hyperedges)})"
        )

    def __iter__(self) -> Iterator[tuple[Any, list[Any]]]:
        """Yield (weight, [vertex payloads]) per hyperedge in insertion order."""
        with self._lock:
            rows = [
                (edge.weight, [self._vertices[v] for v in edge.vertices])
                for edge in self._hyperedges.values()
            ]
        return iter(rows)

    # ========== Thread Safety ==========

    @contextmanager
    def batch(self) -> Generator[None, None, None]:
        """Hold lock for multiple operations - provides isolation, NOT rollback.

        Use this context manager when performing multiple operations that should
        appear atomic to other threads (they see either none or all changes).

        WARNING: This does NOT provide transaction rollback. If an exception
        occurs mid-batch, partial changes will persist. Use
        preview_remove_vertex() before a cascading removal if you need to
        know its effect up front.

        Yields:
            None
        """
        with self._lock:
            yield

    # ========== Internal helpers (caller holds the lock) ==========

    def _require_vertex(self, index: VertexIndex, operation: str) -> None:
        if not isinstance(index, VertexIndex):
            raise TypeError(f"{operation} expects a VertexIndex, got: {type(index).__name__}")
        if index not in self._vertices:
            raise VertexNotFoundError(index, operation)

    def _require_hyperedge(self, index: HyperedgeIndex, operation: str) -> Hyperedge:
        if not isinstance(index, HyperedgeIndex):
            raise TypeError(
                f"{operation} expects a HyperedgeIndex, got: {type(index).__name__}"
            )
        edge = self._hyperedges.get(index)
        if edge is None:
            raise HyperedgeNotFoundError(index, operation)
        return edge

    def _require_sequence(
        self, vertices: Iterable[VertexIndex], operation: str
    ) -> tuple[VertexIndex, ...]:
        members = tuple(vertices)
        for vertex in members:
            self._require_vertex(vertex, operation)
        return members

    def _check_key_free(self, key: HyperedgeKey, owner: HyperedgeIndex | None = None) -> None:
        existing = self._hyperedges_by_key.get(key)
        if existing is not None and existing != owner:
            raise DuplicateHyperedgeError(existing, key[0], key[1])

    def _insert_hyperedge(self, edge: Hyperedge) -> None:
        self._hyperedges[edge.index] = edge
        self._hyperedges_by_key[edge.key] = edge.index
        self._adjacency.register(edge.index, edge.vertices)

    def _drop_hyperedge(self, edge: Hyperedge) -> None:
        self._adjacency.unregister(edge.index, edge.vertices)
        if self._hyperedges_by_key.get(edge.key) == edge.index:
            del self._hyperedges_by_key[edge.key]
        del self._hyperedges[edge.index]
        self._hyperedge_registry.retire(edge.index)

    def _replace_hyperedge(self, old: Hyperedge, new: Hyperedge) -> None:
        # Same index, so the dict keeps the original insertion position
        if old.vertices != new.vertices:
            self._adjacency.unregister(old.index, old.vertices)
            self._adjacency.register(new.index, new.vertices)
        if self._hyperedges_by_key.get(old.key) == old.index:
            del self._hyperedges_by_key[old.key]
        self._hyperedges_by_key[new.key] = new.index
        self._hyperedges[new.index] = new

    # ========== Vertex Operations ==========

    def add_vertex(self, payload: Any) -> VertexIndex:
        """Add a vertex carrying an opaque payload and return its index."""
        with self._lock:
            index = self._vertex_registry.allocate()
            self._vertices[index] = payload
            self._adjacency.add_vertex(index)
            logger.debug("Added %r", index)
            return index

    def get_vertex(self, index: VertexIndex) -> Any:
        """Get the payload of a vertex.

        Raises:
            VertexNotFoundError: If the vertex does not exist
        """
        with self._lock:
            self._require_vertex(index, "get_vertex")
            return self._vertices[index]

    # Alias in the vertex-weight vocabulary
    get_vertex_weight = get_vertex

    def update_vertex(self, index: VertexIndex, payload: Any) -> None:
        """Replace the payload of a vertex in place.

        The index, the insertion position and all adjacency are unchanged.

        Raises:
            VertexNotFoundError: If the vertex does not exist
        """
        with self._lock:
            self._require_vertex(index, "update_vertex")
            self._vertices[index] = payload
            logger.debug("Updated payload of %r", index)

    def has_vertex(self, index: VertexIndex) -> bool:
        with self._lock:
            return index in self._vertices

    def count_vertices(self) -> int:
        with self._lock:
            return len(self._vertices)

    def get_vertices(self) -> list[VertexIndex]:
        """All live vertex indexes in insertion order."""
        with self._lock:
            return list(self._vertices)

    def get_vertex_items(self) -> list[tuple[VertexIndex, Any]]:
        """All (index, payload) pairs in insertion order."""
        with self._lock:
            return list(self._vertices.items())

    def preview_remove_vertex(self, index: VertexIndex) -> RemovalPreview:
        """Report which hyperedges remove_vertex() would delete.

        Nothing is mutated, so callers can inspect the cascade before
        committing to it.

        Raises:
            VertexNotFoundError: If the vertex does not exist
        """
        with self._lock:
            self._require_vertex(index, "preview_remove_vertex")
            return RemovalPreview(index, tuple(self._adjacency.hyperedges_of(index)))

    def remove_vertex(self, index: VertexIndex) -> list[HyperedgeIndex]:
        """Remove a vertex and every hyperedge that references it.

        Hyperedges are removed whole rather than truncated, since a hyperedge
        missing one of its vertices would dangle. The vertex index and the
        removed hyperedge indexes are retired.

        Args:
            index: The vertex to remove

        Returns:
            The removed hyperedge indexes, ascending

        Raises:
            VertexNotFoundError: If the vertex does not exist
        """
        with self._lock:
            self._require_vertex(index, "remove_vertex")
            removed = self._adjacency.hyperedges_of(index)
            for hyperedge in removed:
                self._drop_hyperedge(self._hyperedges[hyperedge])
            self._adjacency.discard_vertex(index)
            del self._vertices[index]
            self._vertex_registry.retire(index)
            logger.info("Removed %r with %d incident hyperedge(s)", index, len(removed))
            return removed

    # ========== Hyperedge Operations ==========

    def add_hyperedge(self, vertices: Sequence[VertexIndex], weight: Any) -> HyperedgeIndex:
        """Add a hyperedge joining vertices in order.

        Insertion is idempotent on the (sequence, weight) pair: adding a pair
        that already exists returns the existing index. The same sequence with
        a different weight creates a distinct hyperedge.

        Args:
            vertices: Ordered vertex indexes; repetitions are allowed
            weight: Hashable weight

        Returns:
            The index of the new or already existing hyperedge

        Raises:
            EmptyHyperedgeError: If vertices is empty
            VertexNotFoundError: If a referenced vertex does not exist
            TypeError: If weight is unhashable
        """
        with self._lock:
            members = tuple(vertices)
            if not members:
                raise EmptyHyperedgeError(weight)
            self._require_sequence(members, "add_hyperedge")
            _check_hashable(weight)

            existing = self._hyperedges_by_key.get((members, weight))
            if existing is not None:
                logger.debug("Hyperedge %r already joins %r", existing, members)
                return existing

            index = self._hyperedge_registry.allocate()
            self._insert_hyperedge(Hyperedge(index, members, weight))
            logger.debug("Added %r over %d vertices", index, len(members))
            return index

    def get_hyperedge(self, index: HyperedgeIndex) -> Hyperedge:
        """Get a hyperedge (sequence and weight) by index.

        Raises:
            HyperedgeNotFoundError: If the hyperedge does not exist
        """
        with self._lock:
            return self._require_hyperedge(index, "get_hyperedge")

    def get_hyperedge_vertices(self, index: HyperedgeIndex) -> list[VertexIndex]:
        with self._lock:
            return list(self._require_hyperedge(index, "get_hyperedge_vertices").vertices)

    def weight_of(self, index: HyperedgeIndex) -> Any:
        with self._lock:
            return self._require_hyperedge(index, "weight_of").weight

    get_hyperedge_weight = weight_of

    def is_unary(self, index: HyperedgeIndex) -> bool:
        with self._lock:
            return self._require_hyperedge(index, "is_unary").is_unary

    def is_self_loop(self, index: HyperedgeIndex) -> bool:
        with self._lock:
            return self._require_hyperedge(index, "is_self_loop").is_self_loop

    def has_hyperedge(self, index: HyperedgeIndex) -> bool:
        with self._lock:
            return index in self._hyperedges

    def count_hyperedges(self) -> int:
        with self._lock:
            return len(self._hyperedges)

    def get_hyperedges(self) -> list[HyperedgeIndex]:
        """All live hyperedge indexes in insertion order."""
        with self._lock:
            return list(self._hyperedges)

    def iter_hyperedges(self) -> Iterator[Hyperedge]:
        """Iterate over a snapshot of the hyperedges in insertion order."""
        with self._lock:
            edges = list(self._hyperedges.values())
        return iter(edges)

    def find_hyperedge(self, vertices: Sequence[VertexIndex], weight: Any) -> HyperedgeIndex | None:
        """Look up the hyperedge holding an exact (sequence, weight) pair."""
        with self._lock:
            return self._hyperedges_by_key.get((tuple(vertices), weight))

    def update_weight(self, index: HyperedgeIndex, weight: Any) -> None:
        """Change the weight of a hyperedge.

        Setting the current weight again is a no-op. "Current" is decided by
        ==, so setting True over a weight of 1 (or 5.0 over 5) keeps the
        stored value.

        Raises:
            HyperedgeNotFoundError: If the hyperedge does not exist
            DuplicateHyperedgeError: If another hyperedge already has this
                sequence with the new weight
            TypeError: If weight is unhashable
        """
        with self._lock:
            edge = self._require_hyperedge(index, "update_weight")
            _check_hashable(weight)
            if weight == edge.weight:
                return
            self._check_key_free((edge.vertices, weight), owner=index)
            self._replace_hyperedge(edge, replace(edge, weight=weight))
            logger.debug("Updated weight of %r", index)

    update_hyperedge_weight = update_weight

    def update_hyperedge_vertices(
        self, index: HyperedgeIndex, vertices: Sequence[VertexIndex]
    ) -> None:
        """Replace the vertex sequence of a hyperedge, keeping its weight.

        An unchanged sequence is a no-op.

        Raises:
            HyperedgeNotFoundError: If the hyperedge does not exist
            EmptyHyperedgeError: If vertices is empty
            VertexNotFoundError: If a referenced vertex does not exist
            DuplicateHyperedgeError: If another hyperedge already holds the
                new sequence with this weight
        """
        with self._lock:
            edge = self._require_hyperedge(index, "update_hyperedge_vertices")
            members = tuple(vertices)
            if not members:
                raise EmptyHyperedgeError(index=index)
            self._require_sequence(members, "update_hyperedge_vertices")
            if members == edge.vertices:
                return
            self._check_key_free((members, edge.weight), owner=index)
            self._replace_hyperedge(edge, replace(edge, vertices=members))
            logger.debug("Updated vertices of %r", index)

    def reverse_hyperedge(self, index: HyperedgeIndex) -> None:
        """Reverse the direction of a hyperedge's sequence."""
        with self._lock:
            edge = self._require_hyperedge(index, "reverse_hyperedge")
            self.update_hyperedge_vertices(index, edge.vertices[::-1])

    def remove_hyperedge(self, index: HyperedgeIndex) -> None:
        """Remove a hyperedge and retire its index.

        Raises:
            HyperedgeNotFoundError: If the hyperedge does not exist
        """
        with self._lock:
            edge = self._require_hyperedge(index, "remove_hyperedge")
            self._drop_hyperedge(edge)
            logger.debug("Removed %r", index)

    def contract_hyperedge_vertices(
        self,
        index: HyperedgeIndex,
        vertices: Sequence[VertexIndex],
        target: VertexIndex,
    ) -> list[VertexIndex]:
        """Merge some vertices of a hyperedge into one of them.

        Every hyperedge containing any of the contracted vertices has them
        replaced by target, then consecutive repetitions are collapsed. All
        resulting (sequence, weight) pairs are checked before anything is
        changed.

        Args:
            index: Hyperedge whose vertices are contracted
            vertices: Vertices to merge; all must belong to the hyperedge
            target: The vertex they are merged into; must be one of vertices

        Returns:
            The new vertex sequence of the hyperedge

        Raises:
            HyperedgeNotFoundError: If the hyperedge does not exist
            VertexNotFoundError: If a listed vertex does not exist
            InvalidContractionError: If target is not listed or a vertex is
                not part of the hyperedge
            DuplicateHyperedgeError: If a contracted hyperedge would collide
                with another one
        """
        with self._lock:
            edge = self._require_hyperedge(index, "contract_hyperedge_vertices")
            contracted = set(self._require_sequence(vertices, "contract_hyperedge_vertices"))
            if target not in contracted:
                raise InvalidContractionError(
                    index, sorted(contracted), target, "target must be one of the vertices"
                )
            missing = sorted(contracted - edge.vertex_set)
            if missing:
                raise InvalidContractionError(
                    index, sorted(contracted), target, f"{missing!r} not in the hyperedge"
                )

            affected = sorted(
                set(chain.from_iterable(self._adjacency.hyperedges_of(v) for v in contracted))
            )
            updates: dict[HyperedgeIndex, tuple[VertexIndex, ...]] = {}
            for hyperedge in affected:
                current = self._hyperedges[hyperedge].vertices
                mapped = [target if v in contracted else v for v in current]
                collapsed = tuple(
                    v
                    for position, v in enumerate(mapped)
                    if position == 0 or v != mapped[position - 1]
                )
                if collapsed != current:
                    updates[hyperedge] = collapsed

            claimed: dict[HyperedgeKey, HyperedgeIndex] = {}
            for hyperedge, members in updates.items():
                key = (members, self._hyperedges[hyperedge].weight)
                owner = self._hyperedges_by_key.get(key)
                if owner is not None and owner != hyperedge and owner not in updates:
                    raise DuplicateHyperedgeError(owner, members, key[1])
                if key in claimed:
                    raise DuplicateHyperedgeError(claimed[key], members, key[1])
                claimed[key] = hyperedge

            for hyperedge, members in updates.items():
                current_edge = self._hyperedges[hyperedge]
                self._replace_hyperedge(current_edge, replace(current_edge, vertices=members))
            logger.debug(
                "Contracted %d vertices into %r across %d hyperedge(s)",
                len(contracted),
                target,
                len(updates),
            )
            return list(self._hyperedges[index].vertices)

    def join_hyperedges(self, indexes: Sequence[HyperedgeIndex]) -> HyperedgeIndex:
        """Concatenate hyperedges into the first one and remove the rest.

        The first hyperedge keeps its index and weight.

        Raises:
            NotEnoughHyperedgesError: If fewer than two hyperedges are given
            ValueError: If a hyperedge is listed twice
            HyperedgeNotFoundError: If a hyperedge does not exist
            DuplicateHyperedgeError: If the joined sequence collides with a
                hyperedge that is not part of the join
        """
        indexes = list(indexes)
        if len(indexes) < 2:
            raise NotEnoughHyperedgesError("join_hyperedges", len(indexes))
        if len(set(indexes)) != len(indexes):
            raise ValueError(f"join_hyperedges got repeated hyperedges: {indexes!r}")

        with self._lock:
            edges = [self._require_hyperedge(i, "join_hyperedges") for i in indexes]
            head, tail = edges[0], edges[1:]
            joined = tuple(chain.from_iterable(edge.vertices for edge in edges))
            owner = self._hyperedges_by_key.get((joined, head.weight))
            if owner is not None and owner not in indexes:
                raise DuplicateHyperedgeError(owner, joined, head.weight)

            for edge in tail:
                self._drop_hyperedge(edge)
            self._replace_hyperedge(head, replace(head, vertices=joined))
            logger.debug("Joined %d hyperedges into %r", len(edges), head.index)
            return head.index

    def get_hyperedges_intersections(
        self, indexes: Sequence[HyperedgeIndex]
    ) -> list[VertexIndex]:
        """Vertices shared by every listed hyperedge, ascending.

        Raises:
            NotEnoughHyperedgesError: If fewer than two hyperedges are given
            HyperedgeNotFoundError: If a hyperedge does not exist
        """
        indexes = list(indexes)
        if len(indexes) < 2:
            raise NotEnoughHyperedgesError("get_hyperedges_intersections", len(indexes))
        with self._lock:
            vertex_sets = [
                self._require_hyperedge(i, "get_hyperedges_intersections").vertex_set
                for i in indexes
            ]
            return sorted(frozenset.intersection(*vertex_sets))

    def get_hyperedges_connecting(
        self, source: VertexIndex, target: VertexIndex
    ) -> list[HyperedgeIndex]:
        """Hyperedges in which source is immediately followed by target."""
        with self._lock:
            self._require_vertex(source, "get_hyperedges_connecting")
            self._require_vertex(target, "get_hyperedges_connecting")
            if not self._adjacency.pair_count(source, target):
                return []
            return [
                hyperedge
                for hyperedge in self._adjacency.hyperedges_of(source)
                if (source, target) in self._hyperedges[hyperedge].windows
            ]

    def clear_hyperedges(self) -> int:
        """Remove every hyperedge, keeping the vertices. Returns the count removed."""
        with self._lock:
            count = len(self._hyperedges)
            for index in self._hyperedges:
                self._hyperedge_registry.retire(index)
            self._hyperedges.clear()
            self._hyperedges_by_key.clear()
            self._adjacency.clear_relations()
            logger.info("Cleared %d hyperedge(s)", count)
            return count

    def clear(self) -> None:
        """Remove everything. Identifiers keep counting from where they were."""
        with self._lock:
            for vertex in self._vertices:
                self._vertex_registry.retire(vertex)
            for hyperedge in self._hyperedges:
                self._hyperedge_registry.retire(hyperedge)
            vertex_count, hyperedge_count = len(self._vertices), len(self._hyperedges)
            self._vertices.clear()
            self._hyperedges.clear()
            self._hyperedges_by_key.clear()
            self._adjacency.clear()
            logger.info(
                "Cleared %d vertex(es) and %d hyperedge(s)", vertex_count, hyperedge_count
            )

    # ========== Adjacency Queries ==========

    def hyperedges_of_vertex(self, index: VertexIndex) -> list[HyperedgeIndex]:
        """Hyperedges containing a vertex, ascending.

        Raises:
            VertexNotFoundError: If the vertex does not exist
        """
        with self._lock:
            self._require_vertex(index, "hyperedges_of_vertex")
            return self._adjacency.hyperedges_of(index)

    get_vertex_hyperedges = hyperedges_of_vertex

    def get_full_vertex_hyperedges(self, index: VertexIndex) -> list[list[VertexIndex]]:
        """Vertex sequences of the hyperedges containing a vertex."""
        with self._lock:
            self._require_vertex(index, "get_full_vertex_hyperedges")
            return [
                list(self._hyperedges[hyperedge].vertices)
                for hyperedge in self._adjacency.hyperedges_of(index)
            ]

    def successors(self, index: VertexIndex) -> list[VertexIndex]:
        """Vertices that directly follow this one in some hyperedge."""
        with self._lock:
            self._require_vertex(index, "successors")
            return self._adjacency.successors(index)

    get_adjacent_vertices_from = successors

    def predecessors(self, index: VertexIndex) -> list[VertexIndex]:
        """Vertices that directly precede this one in some hyperedge."""
        with self._lock:
            self._require_vertex(index, "predecessors")
            return self._adjacency.predecessors(index)

    get_adjacent_vertices_to = predecessors

    def _full_adjacency(
        self, index: VertexIndex, operation: str, outgoing: bool
    ) -> list[tuple[VertexIndex, list[HyperedgeIndex]]]:
        self._require_vertex(index, operation)
        found: dict[VertexIndex, list[HyperedgeIndex]] = {}
        for hyperedge in self._adjacency.hyperedges_of(index):
            for source, target in self._hyperedges[hyperedge].windows:
                anchor, other = (source, target) if outgoing else (target, source)
                if anchor != index:
                    continue
                justified = found.setdefault(other, [])
                if not justified or justified[-1] != hyperedge:
                    justified.append(hyperedge)
        return list(found.items())

    def get_full_adjacent_vertices_from(
        self, index: VertexIndex
    ) -> list[tuple[VertexIndex, list[HyperedgeIndex]]]:
        """Each successor paired with the hyperedges in which it follows index.

        Successors are listed by first appearance, scanning hyperedges in
        ascending order and each sequence front to back. A hyperedge is
        listed once per successor however many windows it contributes.

        Raises:
            VertexNotFoundError: If the vertex does not exist
        """
        with self._lock:
            return self._full_adjacency(index, "get_full_adjacent_vertices_from", outgoing=True)

    def get_full_adjacent_vertices_to(
        self, index: VertexIndex
    ) -> list[tuple[VertexIndex, list[HyperedgeIndex]]]:
        """Each predecessor paired with the hyperedges in which it precedes index."""
        with self._lock:
            return self._full_adjacency(index, "get_full_adjacent_vertices_to", outgoing=False)

    def neighbors(self, index: VertexIndex) -> list[VertexIndex]:
        """Successors and predecessors combined, ascending.

        A vertex with a self-loop window lists itself.
        """
        with self._lock:
            self._require_vertex(index, "neighbors")
            return self._adjacency.neighbors(index)

    def degree(self, index: VertexIndex) -> int:
        """Number of hyperedges the vertex belongs to."""
        with self._lock:
            self._require_vertex(index, "degree")
            return self._adjacency.degree(index)

    def in_degree(self, index: VertexIndex) -> int:
        """Number of sequence windows ending at the vertex."""
        with self._lock:
            self._require_vertex(index, "in_degree")
            return self._adjacency.in_degree(index)

    get_vertex_degree_in = in_degree

    def out_degree(self, index: VertexIndex) -> int:
        """Number of sequence windows starting at the vertex."""
        with self._lock:
            self._require_vertex(index, "out_degree")
            return self._adjacency.out_degree(index)

    get_vertex_degree_out = out_degree

    def adjacency_count(self, source: VertexIndex, target: VertexIndex) -> int:
        """How many windows, across all hyperedges, go from source to target."""
        with self._lock:
            self._require_vertex(source, "adjacency_count")
            self._require_vertex(target, "adjacency_count")
            return self._adjacency.pair_count(source, target)

    def occurrences(self, vertex: VertexIndex, hyperedge: HyperedgeIndex) -> int:
        """How many times a vertex appears in a hyperedge's sequence."""
        with self._lock:
            self._require_vertex(vertex, "occurrences")
            self._require_hyperedge(hyperedge, "occurrences")
            return self._adjacency.occurrences(vertex, hyperedge)

    # ========== Bulk Queries & Export ==========

    def parallel(
        self, max_workers: int | None = None, chunk_size: int | None = None
    ) -> ParallelQuery:
        """Fan-out query adapter over this graph. Defaults come from self.config."""
        return ParallelQuery(self, max_workers=max_workers, chunk_size=chunk_size)

    def to_dot(self) -> str:
        """Render the graph as a Graphviz DOT document."""
        return to_dot(self)

    def write_dot(self, sink: IO[str]) -> None:
        """Write the DOT document to a text sink. Sink errors propagate."""
        render_dot(self, sink)

    # ========== Statistics & Validation ==========

    def stats(self) -> HypergraphStats:
        """Get hypergraph statistics."""
        with self._lock:
            edges = self._hyperedges.values()
            return HypergraphStats(
                vertex_count=len(self._vertices),
                hyperedge_count=len(self._hyperedges),
                unary_count=sum(1 for e in edges if e.is_unary),
                self_loop_count=sum(1 for e in edges if e.is_self_loop),
                next_vertex_index=self._vertex_registry.next_value,
                next_hyperedge_index=self._hyperedge_registry.next_value,
                retired_vertex_count=self._vertex_registry.retired_count,
                retired_hyperedge_count=self._hyperedge_registry.retired_count,
            )

    def validate(self) -> ValidationResult:
        """Validate store integrity against the derived indexes.

        Checks for:
        - Hyperedges referencing non-existent vertices
        - Live entities whose index was retired or never issued
        - (sequence, weight) index consistency
        - Adjacency counts that differ from a full rebuild

        Isolated vertices are reported as warnings.
        """
        with self._lock:
            errors: list[str] = []
            warnings: list[str] = []

            for index, edge in self._hyperedges.items():
                missing = [v for v in edge.vertices if v not in self._vertices]
                if missing:
                    errors.append(f"{index!r} references non-existent vertices: {missing}")
                if not self._hyperedge_registry.was_issued(index):
                    errors.append(f"{index!r} was never issued")
                if self._hyperedge_registry.is_retired(index):
                    errors.append(f"{index!r} is live but retired")
                if self._hyperedges_by_key.get(edge.key) != index:
                    errors.append(f"Key index does not resolve {index!r}")

            for index in self._vertices:
                if not self._vertex_registry.was_issued(index):
                    errors.append(f"{index!r} was never issued")
                if self._vertex_registry.is_retired(index):
                    errors.append(f"{index!r} is live but retired")

            if len(self._hyperedges_by_key) != len(self._hyperedges):
                errors.append(
                    f"Key index has {len(self._hyperedges_by_key)} entries "
                    f"for {len(self._hyperedges)} hyperedges"
                )

            expected = AdjacencyIndex.rebuild(
                list(self._vertices),
                [(edge.index, edge.vertices) for edge in self._hyperedges.values()],
            ).snapshot()
            actual = self._adjacency.snapshot()
            for section, entries in expected.items():
                if actual[section] != entries:
                    errors.append(f"Adjacency {section} differ from a rebuild")

            isolated = [v for v in self._vertices if not self._adjacency.degree(v)]
            if isolated:
                warnings.append(f"{len(isolated)} vertex(es) belong to no hyperedge")

            return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


# Short alias for the public API
Hypergraph = HypergraphCore
