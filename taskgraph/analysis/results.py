"""
Result objects returned by the analysis algorithms, and deterministic dict
conversion for report rendering.

Results carry data only; printing and formatting belong to the caller.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cached_property
from typing import Literal

from taskgraph.analysis.metrics import Metrics, metrics_to_dict
from taskgraph.errors import VertexIndexError
from taskgraph.graph.digraph import WeightedDigraph

NO_PREDECESSOR = -1

PathMode = Literal["shortest", "longest"]


@dataclass(frozen=True)
class TopologicalResult:
    """Topological order plus validity (False when the graph has a cycle)."""

    order: tuple[int, ...]
    metrics: Metrics
    is_valid: bool


@dataclass(frozen=True)
class SCCResult:
    """
    SCC partition, its condensation DAG, and the metrics of the traversal.

    components[i] is condensation vertex i. Components are listed in the
    order Tarjan's algorithm closes them.
    """

    components: tuple[tuple[int, ...], ...]
    condensation: WeightedDigraph
    metrics: Metrics

    @property
    def component_count(self) -> int:
        return len(self.components)

    @cached_property
    def _vertex_to_component(self) -> tuple[int, ...]:
        # components partition 0..n-1, so n is the total member count
        mapping = [0] * sum(len(c) for c in self.components)
        for i, component in enumerate(self.components):
            for v in component:
                mapping[v] = i
        return tuple(mapping)

    def component_of(self, vertex: int) -> int:
        """Index of the component containing vertex."""
        mapping = self._vertex_to_component
        if not 0 <= vertex < len(mapping):
            raise VertexIndexError(vertex, len(mapping))
        return mapping[vertex]

    def cyclic_components(self, graph: WeightedDigraph) -> tuple[tuple[int, ...], ...]:
        """Components that contain a cycle: size > 1, or a single vertex with a self-loop."""
        cyclic: list[tuple[int, ...]] = []
        for component in self.components:
            if len(component) > 1:
                cyclic.append(component)
                continue
            (vertex,) = component
            if any(e.to == vertex for e in graph.neighbors(vertex)):
                cyclic.append(component)
        return tuple(cyclic)


@dataclass(frozen=True)
class PathResult:
    """
    Single-source DAG distances and predecessors.

    Unreached vertices hold +inf (shortest) or -inf (longest) and predecessor
    NO_PREDECESSOR. When is_valid is False the graph had a cycle and no
    relaxation was performed.
    """

    distances: tuple[float, ...]
    predecessors: tuple[int, ...]
    metrics: Metrics
    is_valid: bool
    source: int
    mode: PathMode

    def is_reached(self, vertex: int) -> bool:
        return math.isfinite(self.distances[vertex])

    def reachable(self) -> tuple[int, ...]:
        """Vertices with a finite distance, in index order."""
        return tuple(v for v in range(len(self.distances)) if self.is_reached(v))

    def get_path(self, source: int, target: int) -> list[int]:
        """
        Vertex sequence from source to target, rebuilt by walking predecessors
        back from target. Empty if target was never reached.
        """
        n = len(self.predecessors)
        if not 0 <= target < n:
            raise VertexIndexError(target, n)
        if self.predecessors[target] == NO_PREDECESSOR and target != source:
            return []
        path: list[int] = []
        current = target
        while current != NO_PREDECESSOR:
            path.append(current)
            if current == source:
                break
            current = self.predecessors[current]
        path.reverse()
        return path

    def get_path_to(self, target: int) -> list[int]:
        return self.get_path(self.source, target)


@dataclass(frozen=True)
class CriticalPathResult:
    """Longest path from the synthetic source, its length, and metrics."""

    path: tuple[int, ...]
    length: float
    source: int | None  # None only for the empty graph
    metrics: Metrics
    is_valid: bool = True


@dataclass(frozen=True)
class ScheduleAnalysis:
    """
    Output of the full pipeline: SCCs of the raw graph, a topological order of
    the condensation, and the critical path through the condensation.
    """

    graph: WeightedDigraph
    scc: SCCResult
    topological: TopologicalResult
    critical_path: CriticalPathResult
    has_cycles: bool

    def execution_order(self) -> list[tuple[int, ...]]:
        """Original-vertex groups in a valid execution order."""
        return [self.scc.components[c] for c in self.topological.order]

    def critical_tasks(self) -> list[tuple[int, ...]]:
        """Original-vertex groups along the condensation critical path."""
        return [self.scc.components[c] for c in self.critical_path.path]


def _distance_or_none(value: float) -> float | None:
    return value if math.isfinite(value) else None


def topological_result_to_dict(result: TopologicalResult, graph: WeightedDigraph) -> dict:
    """JSON-serializable dict; order is given both as indices and labels."""
    return {
        "is_valid": result.is_valid,
        "order": list(result.order),
        "labels": [graph.get_label(v) for v in result.order],
        "metrics": metrics_to_dict(result.metrics),
    }


def scc_result_to_dict(result: SCCResult, graph: WeightedDigraph) -> dict:
    """
    JSON-serializable dict. Components keep closure order; vertices inside a
    component are sorted for stable output.
    """
    condensation = result.condensation
    return {
        "component_count": result.component_count,
        "components": [
            {
                "id": i,
                "label": condensation.get_label(i),
                "size": len(component),
                "vertices": sorted(component),
                "labels": [graph.get_label(v) for v in sorted(component)],
            }
            for i, component in enumerate(result.components)
        ],
        "condensation_edges": [
            {"source": u, "target": e.to, "weight": e.weight}
            for u, e in condensation.edges()
        ],
        "metrics": metrics_to_dict(result.metrics),
    }


def path_result_to_dict(result: PathResult, graph: WeightedDigraph) -> dict:
    """JSON-serializable dict; unreached distances become None."""
    return {
        "mode": result.mode,
        "is_valid": result.is_valid,
        "source": result.source,
        "distances": {
            graph.get_label(v): _distance_or_none(d)
            for v, d in enumerate(result.distances)
        },
        "predecessors": list(result.predecessors),
        "metrics": metrics_to_dict(result.metrics),
    }


def critical_path_to_dict(result: CriticalPathResult, graph: WeightedDigraph) -> dict:
    return {
        "is_valid": result.is_valid,
        "source": result.source,
        "length": result.length,
        "path": list(result.path),
        "labels": [graph.get_label(v) for v in result.path],
        "metrics": metrics_to_dict(result.metrics),
    }


def schedule_analysis_to_dict(analysis: ScheduleAnalysis) -> dict:
    """
    Return a JSON-serializable dict with deterministic ordering for a full
    pipeline run. Topological and critical-path sections refer to
    condensation vertices and carry condensation labels.
    """
    condensation = analysis.scc.condensation
    return {
        "vertex_count": analysis.graph.n,
        "edge_count": analysis.graph.edge_count(),
        "has_cycles": analysis.has_cycles,
        "scc": scc_result_to_dict(analysis.scc, analysis.graph),
        "topological": topological_result_to_dict(analysis.topological, condensation),
        "critical_path": critical_path_to_dict(analysis.critical_path, condensation),
    }
