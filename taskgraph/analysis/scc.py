"""
Strongly connected components via Tarjan's algorithm, and the condensation DAG.

The traversal keeps its own work stack of (vertex, remaining-edges) frames so
that long dependency chains do not hit the interpreter recursion limit.
"""

from __future__ import annotations

import logging

from taskgraph.analysis.metrics import BasicMetrics, Metrics
from taskgraph.analysis.results import SCCResult
from taskgraph.errors import VertexIndexError
from taskgraph.graph.digraph import WeightedDigraph

LOGGER = logging.getLogger(__name__)

_UNVISITED = -1


class StronglyConnectedComponents:
    """Tarjan SCC decomposition over a WeightedDigraph."""

    def find_sccs(self, graph: WeightedDigraph, metrics: Metrics) -> list[tuple[int, ...]]:
        """
        Partition the vertices into strongly connected components.

        Roots are tried in ascending index order and neighbours in edge
        insertion order. Each component lists its vertices in stack-pop order
        (the component root last). Components are returned in closure order.
        Counters: dfs_visits, edge_traversals, stack_pops.
        """
        n = graph.n
        adjacency = [graph.neighbors(u) for u in range(n)]
        index = [_UNVISITED] * n
        low = [0] * n
        on_stack = [False] * n
        stack: list[int] = []
        components: list[tuple[int, ...]] = []
        next_index = 0

        metrics.start_timing()

        for root in range(n):
            if index[root] != _UNVISITED:
                continue

            index[root] = low[root] = next_index
            next_index += 1
            stack.append(root)
            on_stack[root] = True
            metrics.increment_counter("dfs_visits")
            work = [(root, iter(adjacency[root]))]

            while work:
                u, remaining = work[-1]
                descended = False
                for edge in remaining:
                    v = edge.to
                    metrics.increment_counter("edge_traversals")
                    if index[v] == _UNVISITED:
                        index[v] = low[v] = next_index
                        next_index += 1
                        stack.append(v)
                        on_stack[v] = True
                        metrics.increment_counter("dfs_visits")
                        work.append((v, iter(adjacency[v])))
                        descended = True
                        break
                    if on_stack[v]:
                        low[u] = min(low[u], index[v])
                if descended:
                    continue

                # u is finished: propagate its low-link to the DFS parent
                work.pop()
                if work:
                    parent = work[-1][0]
                    low[parent] = min(low[parent], low[u])

                if low[u] == index[u]:
                    component: list[int] = []
                    while True:
                        w = stack.pop()
                        on_stack[w] = False
                        component.append(w)
                        metrics.increment_counter("stack_pops")
                        if w == u:
                            break
                    components.append(tuple(component))

        metrics.stop_timing()
        LOGGER.debug("tarjan: %d vertices -> %d components", n, len(components))
        return components

    def build_condensation_graph(
        self,
        graph: WeightedDigraph,
        components: list[tuple[int, ...]] | tuple[tuple[int, ...], ...],
    ) -> WeightedDigraph:
        """
        One vertex per component; one edge per ordered pair of distinct
        components joined by at least one original edge.

        Parallel crossing edges collapse to the first one met when scanning
        vertices in index order and edges in insertion order; its weight is
        kept as is. Singleton components keep the original label; larger ones
        are labelled SCC_<i>_<size>_tasks.

        Raises VertexIndexError for a member outside [0, n) and ValueError
        when the components do not cover every vertex exactly once.
        """
        condensation = WeightedDigraph(len(components), label_prefix=graph.label_prefix)
        vertex_to_component = [_UNVISITED] * graph.n
        for i, component in enumerate(components):
            if not component:
                raise ValueError(f"Component {i} is empty")
            for v in component:
                if not 0 <= v < graph.n:
                    raise VertexIndexError(v, graph.n)
                if vertex_to_component[v] != _UNVISITED:
                    raise ValueError(
                        f"Vertex {v} appears in components {vertex_to_component[v]} and {i}"
                    )
                vertex_to_component[v] = i
            if len(component) == 1:
                condensation.set_label(i, graph.get_label(component[0]))
            else:
                condensation.set_label(i, f"SCC_{i}_{len(component)}_tasks")

        uncovered = [v for v, c in enumerate(vertex_to_component) if c == _UNVISITED]
        if uncovered:
            raise ValueError(f"Vertices not in any component: {uncovered}")

        added: set[tuple[int, int]] = set()
        for u, edge in graph.edges():
            cu = vertex_to_component[u]
            cv = vertex_to_component[edge.to]
            if cu == cv or (cu, cv) in added:
                continue
            condensation.add_edge(cu, cv, edge.weight)
            added.add((cu, cv))

        LOGGER.debug(
            "condensation: %d components, %d edges (from %d original edges)",
            condensation.n,
            condensation.edge_count(),
            graph.edge_count(),
        )
        return condensation

    def get_results(self, graph: WeightedDigraph, metrics: Metrics) -> SCCResult:
        """find_sccs followed by build_condensation_graph, with the metrics used."""
        components = self.find_sccs(graph, metrics)
        condensation = self.build_condensation_graph(graph, components)
        return SCCResult(
            components=tuple(components),
            condensation=condensation,
            metrics=metrics,
        )


def find_sccs(graph: WeightedDigraph, metrics: Metrics | None = None) -> list[tuple[int, ...]]:
    """Convenience: StronglyConnectedComponents().find_sccs with a fresh BasicMetrics by default."""
    return StronglyConnectedComponents().find_sccs(
        graph, metrics if metrics is not None else BasicMetrics()
    )
