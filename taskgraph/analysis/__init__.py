"""Graph analysis: SCC decomposition, topological ordering, DAG paths, and the pipeline."""

from taskgraph.analysis.analyzer import ScheduleAnalyzer, analyze_schedule
from taskgraph.analysis.dag_paths import DAGPathAnalyzer
from taskgraph.analysis.metrics import BasicMetrics, Metrics, metrics_to_dict
from taskgraph.analysis.results import (
    NO_PREDECESSOR,
    CriticalPathResult,
    PathResult,
    ScheduleAnalysis,
    SCCResult,
    TopologicalResult,
    critical_path_to_dict,
    path_result_to_dict,
    schedule_analysis_to_dict,
    scc_result_to_dict,
    topological_result_to_dict,
)
from taskgraph.analysis.scc import StronglyConnectedComponents, find_sccs
from taskgraph.analysis.topological import TopologicalOrderer, topological_sort

__all__ = [
    "BasicMetrics",
    "CriticalPathResult",
    "DAGPathAnalyzer",
    "Metrics",
    "NO_PREDECESSOR",
    "PathResult",
    "SCCResult",
    "ScheduleAnalysis",
    "ScheduleAnalyzer",
    "StronglyConnectedComponents",
    "TopologicalOrderer",
    "TopologicalResult",
    "analyze_schedule",
    "critical_path_to_dict",
    "find_sccs",
    "metrics_to_dict",
    "path_result_to_dict",
    "schedule_analysis_to_dict",
    "scc_result_to_dict",
    "topological_result_to_dict",
    "topological_sort",
]
