"""
Topological ordering: Kahn's queue-based sort and an iterative depth-first variant.

A cyclic graph is reported by an empty order, never by an exception.
"""

from __future__ import annotations

import logging
from collections import deque

from taskgraph.analysis.metrics import BasicMetrics, Metrics
from taskgraph.analysis.results import TopologicalResult
from taskgraph.graph.digraph import WeightedDigraph

LOGGER = logging.getLogger(__name__)


class TopologicalOrderer:
    """Stateless; every call takes the graph and the metrics sink to record into."""

    def sort(self, graph: WeightedDigraph, metrics: Metrics) -> list[int]:
        """
        Kahn's algorithm. Returns every vertex such that u precedes v for each
        edge u -> v, or [] when the graph contains a cycle.

        Zero in-degree vertices are seeded in ascending index order.
        Counters: queue_pushes, queue_pops.
        """
        n = graph.n
        metrics.start_timing()

        in_degree = graph.in_degrees()
        queue: deque[int] = deque()
        for v in range(n):
            if in_degree[v] == 0:
                queue.append(v)
                metrics.increment_counter("queue_pushes")

        order: list[int] = []
        while queue:
            u = queue.popleft()
            metrics.increment_counter("queue_pops")
            order.append(u)
            for edge in graph.neighbors(u):
                in_degree[edge.to] -= 1
                if in_degree[edge.to] == 0:
                    queue.append(edge.to)
                    metrics.increment_counter("queue_pushes")

        metrics.stop_timing()

        if len(order) != n:
            LOGGER.debug(
                "topological sort: cycle detected, ordered %d of %d vertices",
                len(order),
                n,
            )
            return []
        LOGGER.debug("topological sort: ordered %d vertices", n)
        return order

    def sort_dfs(self, graph: WeightedDigraph, metrics: Metrics) -> list[int]:
        """
        Reverse depth-first postorder using an explicit work stack.

        Does not check for cycles: on cyclic input the result is a permutation
        that violates at least one edge. Use sort() to confirm acyclicity.
        Counters: dfs_visits, stack_pushes, stack_pops.
        """
        n = graph.n
        adjacency = [graph.neighbors(u) for u in range(n)]
        visited = [False] * n
        postorder: list[int] = []

        metrics.start_timing()

        for root in range(n):
            if visited[root]:
                continue
            visited[root] = True
            metrics.increment_counter("dfs_visits")
            work = [(root, iter(adjacency[root]))]
            while work:
                u, remaining = work[-1]
                for edge in remaining:
                    if not visited[edge.to]:
                        visited[edge.to] = True
                        metrics.increment_counter("dfs_visits")
                        work.append((edge.to, iter(adjacency[edge.to])))
                        break
                else:
                    work.pop()
                    postorder.append(u)
                    metrics.increment_counter("stack_pushes")

        metrics.stop_timing()

        order: list[int] = []
        while postorder:
            order.append(postorder.pop())
            metrics.increment_counter("stack_pops")
        return order

    def get_results(self, graph: WeightedDigraph, metrics: Metrics) -> TopologicalResult:
        """Kahn's sort bundled with its metrics; is_valid is len(order) == n."""
        order = self.sort(graph, metrics)
        return TopologicalResult(
            order=tuple(order),
            metrics=metrics,
            is_valid=len(order) == graph.n,
        )


def topological_sort(graph: WeightedDigraph, metrics: Metrics | None = None) -> list[int]:
    """Convenience: TopologicalOrderer().sort with a fresh BasicMetrics when none is given."""
    return TopologicalOrderer().sort(graph, metrics if metrics is not None else BasicMetrics())
