"""
Weighted directed graph over integer vertices 0..n-1 with optional task labels.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Sequence

from taskgraph.config.settings import AnalysisSettings, default_settings
from taskgraph.errors import VertexIndexError

DEFAULT_LABEL_PREFIX = "Task_"
DEFAULT_WEIGHT = 1.0


@dataclass(frozen=True)
class Edge:
    """An outgoing edge: target vertex and real-valued weight."""

    to: int
    weight: float = DEFAULT_WEIGHT


class WeightedDigraph:
    """
    Adjacency-list directed graph with a fixed vertex count.

    Edges are kept per source vertex in insertion order. Duplicate edges and
    self-loops are allowed. Labels are optional; unlabeled vertices render as
    ``<label_prefix><index>``.
    """

    def __init__(self, n: int, *, label_prefix: str = DEFAULT_LABEL_PREFIX) -> None:
        if n < 0:
            raise ValueError(f"Vertex count must be non-negative, got {n}")
        self._n = n
        self._adjacency: list[list[Edge]] = [[] for _ in range(n)]
        self._id_to_label: dict[int, str] = {}
        self._label_to_id: dict[str, int] = {}
        self._label_prefix = label_prefix

    @property
    def n(self) -> int:
        """Number of vertices; fixed at construction."""
        return self._n

    vertex_count = n

    @property
    def label_prefix(self) -> str:
        return self._label_prefix

    def __len__(self) -> int:
        return self._n

    def _check_vertex(self, vertex: int) -> None:
        if not 0 <= vertex < self._n:
            raise VertexIndexError(vertex, self._n)

    def add_edge(self, u: int, v: int, weight: float = DEFAULT_WEIGHT) -> None:
        """Append edge u -> v. Raises VertexIndexError if u or v is out of range."""
        self._check_vertex(u)
        self._check_vertex(v)
        weight = float(weight)
        if not math.isfinite(weight):
            raise ValueError(f"Edge weight must be finite, got {weight}")
        self._adjacency[u].append(Edge(v, weight))

    def set_label(self, vertex: int, name: str) -> None:
        self._check_vertex(vertex)
        previous = self._id_to_label.get(vertex)
        if previous is not None and self._label_to_id.get(previous) == vertex:
            del self._label_to_id[previous]
        self._id_to_label[vertex] = name
        self._label_to_id[name] = vertex

    def get_label(self, vertex: int) -> str:
        """Label for vertex, or the synthesized ``<prefix><index>`` name if unset."""
        self._check_vertex(vertex)
        return self._id_to_label.get(vertex, f"{self._label_prefix}{vertex}")

    def get_id_for_label(self, name: str) -> int | None:
        """Vertex index for an explicitly set label, or None."""
        return self._label_to_id.get(name)

    def labels(self) -> Mapping[int, str]:
        """Explicitly set labels (vertex -> name); synthesized names are not included."""
        return dict(self._id_to_label)

    def neighbors(self, u: int) -> tuple[Edge, ...]:
        """Outgoing edges of u in insertion order."""
        self._check_vertex(u)
        return tuple(self._adjacency[u])

    def edges(self) -> Iterator[tuple[int, Edge]]:
        """All edges as (source, Edge), by source index then insertion order."""
        for u, out in enumerate(self._adjacency):
            for edge in out:
                yield u, edge

    def edge_count(self) -> int:
        return sum(len(out) for out in self._adjacency)

    def in_degrees(self) -> list[int]:
        """In-degree of every vertex, from a single scan of all edges."""
        in_degree = [0] * self._n
        for out in self._adjacency:
            for edge in out:
                in_degree[edge.to] += 1
        return in_degree

    def reverse(self) -> WeightedDigraph:
        """New graph with every edge flipped; labels are copied."""
        reversed_graph = WeightedDigraph(self._n, label_prefix=self._label_prefix)
        for vertex, name in self._id_to_label.items():
            reversed_graph.set_label(vertex, name)
        for u, edge in self.edges():
            reversed_graph.add_edge(edge.to, u, edge.weight)
        return reversed_graph

    def __repr__(self) -> str:
        return f"WeightedDigraph(n={self._n}, edges={self.edge_count()})"

    def __str__(self) -> str:
        lines = [f"Graph with {self._n} vertices and {self.edge_count()} edges:"]
        for u, out in enumerate(self._adjacency):
            targets = " ".join(
                f"{self.get_label(e.to)}({e.weight})" for e in out
            )
            lines.append(f"{self.get_label(u)} -> {targets}".rstrip())
        return "\n".join(lines)


def build_digraph(
    n: int,
    edges: Iterable[Sequence],
    labels: Sequence[str] | Mapping[int, str] | None = None,
    *,
    settings: AnalysisSettings | None = None,
) -> WeightedDigraph:
    """
    Build a WeightedDigraph from an edge list.

    Each edge is (u, v) or (u, v, weight); (u, v) uses settings.default_weight.
    labels is either a sequence (label i for vertex i) or a vertex -> name mapping.
    """
    if settings is None:
        settings = default_settings()
    graph = WeightedDigraph(n, label_prefix=settings.label_prefix)

    if labels is not None:
        items = labels.items() if isinstance(labels, Mapping) else enumerate(labels)
        for vertex, name in items:
            graph.set_label(vertex, name)

    for edge in edges:
        if len(edge) == 2:
            u, v = edge
            graph.add_edge(u, v, settings.default_weight)
        elif len(edge) == 3:
            u, v, weight = edge
            graph.add_edge(u, v, weight)
        else:
            raise ValueError(f"Edge must be (u, v) or (u, v, weight), got {edge!r}")
    return graph
