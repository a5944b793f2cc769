"""
ScheduleAnalyzer: orchestrate scc -> condensation -> topological order -> critical path.
"""

from __future__ import annotations

import logging

from taskgraph.analysis.dag_paths import DAGPathAnalyzer
from taskgraph.analysis.metrics import BasicMetrics, Metrics
from taskgraph.analysis.results import ScheduleAnalysis
from taskgraph.analysis.scc import StronglyConnectedComponents
from taskgraph.analysis.topological import TopologicalOrderer
from taskgraph.config.settings import AnalysisSettings, load_settings
from taskgraph.graph.digraph import WeightedDigraph

LOGGER = logging.getLogger(__name__)


class ScheduleAnalyzer:
    """Run the full analysis pipeline over a task-dependency graph."""

    def __init__(self, settings: AnalysisSettings | dict | None = None) -> None:
        self.settings = load_settings(settings)

    def analyze(
        self,
        graph: WeightedDigraph,
        *,
        metrics: Metrics | None = None,
    ) -> ScheduleAnalysis:
        """
        Build a ScheduleAnalysis from a WeightedDigraph.

        Topological order and critical path are computed on the condensation,
        which is always acyclic, so both are valid even for cyclic input.
        When metrics is given it is shared by every stage and its counters
        accumulate (timing reflects the last stage); otherwise each stage gets
        its own BasicMetrics.
        """

        def stage_metrics() -> Metrics:
            return metrics if metrics is not None else BasicMetrics()

        scc = StronglyConnectedComponents().get_results(graph, stage_metrics())
        topological = TopologicalOrderer().get_results(scc.condensation, stage_metrics())
        critical_path = DAGPathAnalyzer(self.settings).find_critical_path(
            scc.condensation, stage_metrics()
        )
        has_cycles = bool(scc.cyclic_components(graph))

        LOGGER.info(
            "schedule analysis: %d tasks, %d components, cycles=%s, critical length %s",
            graph.n,
            scc.component_count,
            has_cycles,
            critical_path.length,
        )
        return ScheduleAnalysis(
            graph=graph,
            scc=scc,
            topological=topological,
            critical_path=critical_path,
            has_cycles=has_cycles,
        )


def analyze_schedule(
    graph: WeightedDigraph,
    *,
    settings: AnalysisSettings | dict | None = None,
    metrics: Metrics | None = None,
) -> ScheduleAnalysis:
    """Convenience: run ScheduleAnalyzer(settings).analyze(graph, metrics=...)."""
    return ScheduleAnalyzer(settings).analyze(graph, metrics=metrics)
