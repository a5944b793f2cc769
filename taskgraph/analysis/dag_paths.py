"""
Single-source shortest and longest paths over a DAG, and critical-path extraction.

Distances are relaxed in topological order, so any edge weight sign is
fine as long as the graph is acyclic. A cyclic graph yields is_valid=False.
"""

from __future__ import annotations

import logging
import math
import operator

from taskgraph.analysis.metrics import BasicMetrics, Metrics
from taskgraph.analysis.results import (
    NO_PREDECESSOR,
    CriticalPathResult,
    PathMode,
    PathResult,
)
from taskgraph.analysis.topological import TopologicalOrderer
from taskgraph.config.settings import AnalysisSettings, default_settings
from taskgraph.errors import VertexIndexError
from taskgraph.graph.digraph import WeightedDigraph

LOGGER = logging.getLogger(__name__)

# mode -> (unreached sentinel, "candidate improves current" comparison)
_MODES = {
    "shortest": (math.inf, operator.lt),
    "longest": (-math.inf, operator.gt),
}


class DAGPathAnalyzer:
    """
    Shortest, longest and critical paths on a DAG.

    settings.critical_path_baseline sets the distance a critical-path end
    vertex must exceed (0.0 by default).
    """

    def __init__(self, settings: AnalysisSettings | None = None) -> None:
        self.settings = settings if settings is not None else default_settings()

    def shortest_paths(self, graph: WeightedDigraph, source: int, metrics: Metrics) -> PathResult:
        return self._relax(graph, source, metrics, "shortest")

    def longest_paths(self, graph: WeightedDigraph, source: int, metrics: Metrics) -> PathResult:
        return self._relax(graph, source, metrics, "longest")

    def _relax(
        self,
        graph: WeightedDigraph,
        source: int,
        metrics: Metrics,
        mode: PathMode,
    ) -> PathResult:
        """
        DAG dynamic programming from source. Counter: relaxations, one per
        edge examined out of a reached vertex.
        """
        n = graph.n
        if not 0 <= source < n:
            raise VertexIndexError(source, n)
        unreached, improves = _MODES[mode]

        distances = [unreached] * n
        predecessors = [NO_PREDECESSOR] * n

        metrics.start_timing()
        # The ordering step records into its own sink, not the caller's
        order = TopologicalOrderer().sort(graph, BasicMetrics())

        if len(order) != n:
            metrics.stop_timing()
            LOGGER.debug("%s paths from %d: graph has a cycle, skipping relaxation", mode, source)
            return PathResult(
                distances=tuple(distances),
                predecessors=tuple(predecessors),
                metrics=metrics,
                is_valid=False,
                source=source,
                mode=mode,
            )

        distances[source] = 0.0
        for u in order:
            if distances[u] == unreached:
                continue
            for edge in graph.neighbors(u):
                metrics.increment_counter("relaxations")
                candidate = distances[u] + edge.weight
                if improves(candidate, distances[edge.to]):
                    distances[edge.to] = candidate
                    predecessors[edge.to] = u

        metrics.stop_timing()
        LOGGER.debug(
            "%s paths from %d: %d of %d vertices reached",
            mode,
            source,
            sum(1 for d in distances if d != unreached),
            n,
        )
        return PathResult(
            distances=tuple(distances),
            predecessors=tuple(predecessors),
            metrics=metrics,
            is_valid=True,
            source=source,
            mode=mode,
        )

    def find_critical_path(self, graph: WeightedDigraph, metrics: Metrics) -> CriticalPathResult:
        """
        Longest path from a synthetic source.

        The source is the lowest-index vertex with in-degree zero, or vertex 0
        if every vertex has an incoming edge. The path ends at the vertex with
        the greatest finite longest-distance strictly above the baseline, the
        source itself excluded; if none qualifies the path is just [source]
        with length 0.0.
        """
        n = graph.n
        if n == 0:
            return CriticalPathResult(
                path=(),
                length=0.0,
                source=None,
                metrics=metrics,
                is_valid=True,
            )

        in_degree = graph.in_degrees()
        source = next((v for v in range(n) if in_degree[v] == 0), 0)

        result = self.longest_paths(graph, source, metrics)

        end = source
        best = self.settings.critical_path_baseline
        for v, distance in enumerate(result.distances):
            if v == source:
                continue
            if math.isfinite(distance) and distance > best:
                best = distance
                end = v

        path = result.get_path(source, end)
        length = best if end != source else 0.0
        LOGGER.debug(
            "critical path from %s to %s: length %s over %d vertices (valid=%s)",
            graph.get_label(source),
            graph.get_label(end),
            length,
            len(path),
            result.is_valid,
        )
        return CriticalPathResult(
            path=tuple(path),
            length=length,
            source=source,
            metrics=result.metrics,
            is_valid=result.is_valid,
        )
