"""Fork-join bulk queries over a hypergraph snapshot.

A query copies the stores under the graph's lock, splits the copy into
chunks of ``chunk_size`` items and hands the chunks to a thread pool. Chunk
boundaries depend only on ``chunk_size`` and partial results are reduced in
chunk order, so every query returns the same value for any ``max_workers``.
Only associative/commutative reductions are offered: counts, sums, unions
and filtered collections re-sorted into ascending index order.

The graph must not be mutated while a query runs.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from fractions import Fraction
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from dihypergraph.engine.core import Hyperedge, HypergraphCore
    from dihypergraph.engine.indexes import HyperedgeIndex, VertexIndex

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")
PartialT = TypeVar("PartialT")


def _exact_partial(values: list[Any]) -> tuple[Any, bool, list[float]]:
    """Sum values without rounding: floats are accumulated as Fractions.

    Returns the exact total, whether any float was seen, and the non-finite
    floats, which have no exact representation.
    """
    total: Any = 0
    inexact = False
    non_finite: list[float] = []
    for value in values:
        if isinstance(value, float):
            inexact = True
            if math.isfinite(value):
                total += Fraction(value)
            else:
                non_finite.append(value)
        else:
            total += value
    return total, inexact, non_finite


class ParallelQuery:
    """Data-parallel read-only queries over one HypergraphCore.

    Workers are threads, so under the GIL pure-Python predicates and key
    functions do not run on more than one core at a time. Expect speedups
    only when the callables release the GIL (I/O, C extensions); the
    worker count never changes the result.

    Args:
        graph: The graph to query
        max_workers: Thread pool size; 1 runs inline. Defaults to graph.config
        chunk_size: Items per task. Defaults to graph.config
    """

    def __init__(
        self,
        graph: HypergraphCore,
        max_workers: int | None = None,
        chunk_size: int | None = None,
    ) -> None:
        self._graph = graph
        self.max_workers = max_workers if max_workers is not None else graph.config.max_workers
        self.chunk_size = chunk_size if chunk_size is not None else graph.config.chunk_size
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got: {self.max_workers}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be at least 1, got: {self.chunk_size}")

    def __repr__(self) -> str:
        return f"ParallelQuery(max_workers={self.max_workers}, chunk_size={self.chunk_size})"

    # ========== Fork-join plumbing ==========

    def _vertex_snapshot(self) -> list[tuple[VertexIndex, Any]]:
        return self._graph.get_vertex_items()

    def _hyperedge_snapshot(self) -> list[Hyperedge]:
        return list(self._graph.iter_hyperedges())

    def _run(
        self,
        items: Sequence[ItemT],
        worker: Callable[[Sequence[ItemT]], PartialT],
    ) -> list[PartialT]:
        """Apply worker to each chunk; partials come back in chunk order."""
        chunks = [
            items[start : start + self.chunk_size]
            for start in range(0, len(items), self.chunk_size)
        ]
        if self.max_workers == 1 or len(chunks) <= 1:
            return [worker(chunk) for chunk in chunks]
        logger.debug(
            "Fanning out %d chunk(s) of up to %d item(s) to %s worker(s)",
            len(chunks),
            self.chunk_size,
            self.max_workers or "default",
        )
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(worker, chunks))

    # ========== Counts ==========

    def count_vertices(self, predicate: Callable[[Any], bool] | None = None) -> int:
        """Count vertices whose payload matches predicate (all if None)."""

        def worker(chunk: Sequence[tuple[VertexIndex, Any]]) -> int:
            return sum(1 for _, payload in chunk if predicate is None or predicate(payload))

        return sum(self._run(self._vertex_snapshot(), worker))

    def count_hyperedges(self, predicate: Callable[[Hyperedge], bool] | None = None) -> int:
        """Count hyperedges matching predicate (all if None)."""

        def worker(chunk: Sequence[Hyperedge]) -> int:
            return sum(1 for edge in chunk if predicate is None or predicate(edge))

        return sum(self._run(self._hyperedge_snapshot(), worker))

    # ========== Sums ==========

    def sum_weights(
        self,
        key: Callable[[Any], Any] | None = None,
        predicate: Callable[[Hyperedge], bool] | None = None,
    ) -> Any:
        """Sum hyperedge weights, or key(weight) when weights are not numbers.

        Floats are summed exactly and rounded once at the end, so the result
        equals math.fsum over the same values regardless of chunking.
        """

        def worker(chunk: Sequence[Hyperedge]) -> tuple[Any, bool, list[float]]:
            return _exact_partial(
                [
                    key(edge.weight) if key is not None else edge.weight
                    for edge in chunk
                    if predicate is None or predicate(edge)
                ]
            )

        total: Any = 0
        inexact = False
        non_finite: list[float] = []
        for partial_total, partial_inexact, partial_non_finite in self._run(
            self._hyperedge_snapshot(), worker
        ):
            total += partial_total
            inexact = inexact or partial_inexact
            non_finite.extend(partial_non_finite)

        if not inexact:
            return total
        return sum(non_finite, float(total))

    # ========== Collections ==========

    def filter_vertices(self, predicate: Callable[[Any], bool]) -> list[VertexIndex]:
        """Indexes of vertices whose payload matches, ascending."""

        def worker(chunk: Sequence[tuple[VertexIndex, Any]]) -> list[VertexIndex]:
            return [index for index, payload in chunk if predicate(payload)]

        return sorted(index for part in self._run(self._vertex_snapshot(), worker) for index in part)

    def filter_hyperedges(self, predicate: Callable[[Hyperedge], bool]) -> list[HyperedgeIndex]:
        """Indexes of hyperedges matching predicate, ascending."""

        def worker(chunk: Sequence[Hyperedge]) -> list[HyperedgeIndex]:
            return [edge.index for edge in chunk if predicate(edge)]

        return sorted(
            index for part in self._run(self._hyperedge_snapshot(), worker) for index in part
        )

    def vertex_union(
        self, predicate: Callable[[Hyperedge], bool] | None = None
    ) -> set[VertexIndex]:
        """Every vertex that belongs to at least one matching hyperedge."""

        def worker(chunk: Sequence[Hyperedge]) -> set[VertexIndex]:
            found: set[VertexIndex] = set()
            for edge in chunk:
                if predicate is None or predicate(edge):
                    found.update(edge.vertices)
            return found

        return set().union(*self._run(self._hyperedge_snapshot(), worker))

    def map_hyperedges(self, fn: Callable[[Hyperedge], Any]) -> dict[HyperedgeIndex, Any]:
        """Apply fn to every hyperedge; results keyed by index, ascending."""

        def worker(chunk: Sequence[Hyperedge]) -> list[tuple[HyperedgeIndex, Any]]:
            return [(edge.index, fn(edge)) for edge in chunk]

        pairs = [pair for part in self._run(self._hyperedge_snapshot(), worker) for pair in part]
        return dict(sorted(pairs, key=lambda pair: pair[0]))
