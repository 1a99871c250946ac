"""Stable identifiers for vertices and hyperedges.

Identifiers are issued by a monotonically increasing counter and are never
recycled: once an entity is removed its identifier is retired for good, so a
caller holding a stale identifier gets a not-found error instead of silently
resolving to an unrelated entity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from dihypergraph.errors import IndexOverflowError

MAX_INDEX = 2**63 - 1


@dataclass(frozen=True, order=True)
class VertexIndex:
    """Stable identifier of a vertex.

    Raises:
        TypeError: If value is not an int
        ValueError: If value is negative
    """

    value: int

    def __post_init__(self) -> None:
        _check_value(self.value, "VertexIndex")

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"VertexIndex({self.value})"

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class HyperedgeIndex:
    """Stable identifier of a hyperedge.

    Raises:
        TypeError: If value is not an int
        ValueError: If value is negative
    """

    value: int

    def __post_init__(self) -> None:
        _check_value(self.value, "HyperedgeIndex")

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"HyperedgeIndex({self.value})"

    def __str__(self) -> str:
        return str(self.value)


def _check_value(value: int, kind: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{kind} value must be an int, got: {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{kind} value must be non-negative, got: {value}")


IndexT = TypeVar("IndexT", VertexIndex, HyperedgeIndex)


class IndexRegistry(Generic[IndexT]):
    """Issues identifiers of one kind and remembers which ones were retired.

    The registry is a pure counter plus a retired set, not a free-list:
    allocate() always returns a value strictly greater than every value
    issued before it.
    """

    def __init__(self, kind: type[IndexT], max_index: int = MAX_INDEX) -> None:
        self._kind = kind
        self._max_index = max_index
        self._next = 0
        self._retired: set[int] = set()

    @property
    def kind(self) -> type[IndexT]:
        return self._kind

    @property
    def next_value(self) -> int:
        """The raw value the next allocate() call will return."""
        return self._next

    @property
    def retired_count(self) -> int:
        return len(self._retired)

    def allocate(self) -> IndexT:
        """Issue a fresh identifier.

        Raises:
            IndexOverflowError: If the counter would pass its limit
        """
        if self._next > self._max_index:
            raise IndexOverflowError(
                f"{self._kind.__name__} counter exhausted after {self._max_index}"
            )
        index = self._kind(self._next)
        self._next += 1
        return index

    def retire(self, index: IndexT) -> None:
        """Permanently retire an identifier. Retiring twice is a no-op.

        Raises:
            TypeError: If index is of the wrong kind
            ValueError: If index was never issued by this registry
        """
        if not isinstance(index, self._kind):
            raise TypeError(
                f"Expected {self._kind.__name__}, got: {type(index).__name__}"
            )
        if not self.was_issued(index):
            raise ValueError(f"{index!r} was never issued")
        self._retired.add(index.value)

    def was_issued(self, index: IndexT) -> bool:
        return isinstance(index, self._kind) and index.value < self._next

    def is_retired(self, index: IndexT) -> bool:
        return isinstance(index, self._kind) and index.value in self._retired
