"""
Exceptions raised for malformed graph input.

Cyclic input is not an error anywhere in taskgraph: algorithms report it
through empty orders and ``is_valid`` flags instead.
"""

from __future__ import annotations


class TaskGraphError(Exception):
    """Base class for taskgraph errors."""


class VertexIndexError(TaskGraphError, IndexError, ValueError):
    """A vertex index outside [0, n) was passed to a graph or algorithm call."""

    def __init__(self, vertex: int, vertex_count: int) -> None:
        self.vertex = vertex
        self.vertex_count = vertex_count
        super().__init__(
            f"Invalid vertex index {vertex}: expected 0 <= index < {vertex_count}"
        )
