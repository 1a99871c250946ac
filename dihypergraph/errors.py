"""Exceptions raised by the hypergraph engine.

Every recoverable failure derives from HypergraphError and carries the
offending identifiers as attributes, so callers can tell exactly which
input was rejected. Identifier overflow is the one fatal
condition and lives outside that hierarchy.
"""

from __future__ import annotations

from typing import Any


class HypergraphError(Exception):
    """Base class for recoverable hypergraph errors."""


class VertexNotFoundError(HypergraphError, LookupError):
    """A referenced VertexIndex does not currently exist."""

    def __init__(self, index: Any, operation: str | None = None) -> None:
        self.index = index
        self.operation = operation
        message = f"{index!r} was not found"
        if operation:
            message = f"{operation}: {message}"
        super().__init__(message)


class HyperedgeNotFoundError(HypergraphError, LookupError):
    """A referenced HyperedgeIndex does not currently exist."""

    def __init__(self, index: Any, operation: str | None = None) -> None:
        self.index = index
        self.operation = operation
        message = f"{index!r} was not found"
        if operation:
            message = f"{operation}: {message}"
        super().__init__(message)


class EmptyHyperedgeError(HypergraphError, ValueError):
    """A hyperedge was given an empty vertex sequence."""

    def __init__(self, weight: Any = None, index: Any = None) -> None:
        self.weight = weight
        self.index = index
        if index is not None:
            message = f"{index!r} cannot be updated with an empty vertex sequence"
        else:
            message = f"Hyperedge with weight {weight!r} must contain at least one vertex"
        super().__init__(message)


class DuplicateHyperedgeError(HypergraphError, ValueError):
    """A (sequence, weight) pair is already held by another hyperedge."""

    def __init__(self, existing: Any, vertices: Any, weight: Any) -> None:
        self.existing = existing
        self.vertices = list(vertices)
        self.weight = weight
        super().__init__(
            f"{existing!r} already joins {self.vertices!r} with weight {weight!r}"
        )


class InvalidContractionError(HypergraphError, ValueError):
    """A contraction request does not describe vertices of the hyperedge."""

    def __init__(self, index: Any, vertices: Any, target: Any, reason: str) -> None:
        self.index = index
        self.vertices = list(vertices)
        self.target = target
        super().__init__(
            f"Contraction of {self.vertices!r} into {target!r} on {index!r} is invalid: {reason}"
        )


class NotEnoughHyperedgesError(HypergraphError, ValueError):
    """An operation that combines hyperedges was given fewer than two."""

    def __init__(self, operation: str, count: int) -> None:
        self.operation = operation
        self.count = count
        super().__init__(f"{operation} needs at least two hyperedges, got {count}")


class IndexOverflowError(RuntimeError):
    """The identifier counter ran past its limit. Not recoverable."""
