"""taskgraph: cycle detection, execution ordering and critical paths for task-dependency graphs."""

from taskgraph.analysis import (
    BasicMetrics,
    DAGPathAnalyzer,
    ScheduleAnalyzer,
    StronglyConnectedComponents,
    TopologicalOrderer,
    analyze_schedule,
)
from taskgraph.config import AnalysisSettings, load_settings
from taskgraph.errors import TaskGraphError, VertexIndexError
from taskgraph.graph import Edge, WeightedDigraph, build_digraph

__version__ = "0.1.0"

__all__ = [
    "AnalysisSettings",
    "BasicMetrics",
    "DAGPathAnalyzer",
    "Edge",
    "ScheduleAnalyzer",
    "StronglyConnectedComponents",
    "TaskGraphError",
    "TopologicalOrderer",
    "VertexIndexError",
    "WeightedDigraph",
    "analyze_schedule",
    "build_digraph",
    "load_settings",
]
