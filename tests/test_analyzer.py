"""Tests for the ScheduleAnalyzer pipeline and the result dict conversions."""

import json

from taskgraph import analyze_schedule
from taskgraph.analysis import (
    BasicMetrics,
    DAGPathAnalyzer,
    ScheduleAnalyzer,
    StronglyConnectedComponents,
    TopologicalOrderer,
    path_result_to_dict,
    schedule_analysis_to_dict,
    scc_result_to_dict,
    topological_result_to_dict,
)
from taskgraph.graph import WeightedDigraph, build_digraph


def _cyclic_plan() -> WeightedDigraph:
    """0->1->2->0 is a cycle that feeds 3 (weight 4), then 4 (weight 2)."""
    return build_digraph(5, [(0, 1), (1, 2), (2, 0), (2, 3, 4.0), (3, 4, 2.0)])


def _acyclic_plan() -> WeightedDigraph:
    return build_digraph(
        4,
        [(0, 1, 3.0), (1, 2, 5.0), (0, 3, 2.0)],
        labels=["design", "build", "ship", "docs"],
    )


def test_pipeline_on_cyclic_graph():
    analysis = ScheduleAnalyzer().analyze(_cyclic_plan())
    assert analysis.has_cycles is True
    assert analysis.scc.components == ((4,), (3,), (2, 1, 0))
    assert analysis.topological.is_valid
    assert analysis.topological.order == (2, 1, 0)
    assert analysis.execution_order() == [(2, 1, 0), (3,), (4,)]
    assert analysis.critical_path.is_valid
    assert analysis.critical_path.path == (2, 1, 0)
    assert analysis.critical_path.length == 6.0
    assert analysis.critical_tasks() == [(2, 1, 0), (3,), (4,)]


def test_pipeline_on_dag_matches_direct_critical_path():
    g = _acyclic_plan()
    analysis = analyze_schedule(g)
    direct = DAGPathAnalyzer().find_critical_path(g, BasicMetrics())
    assert analysis.has_cycles is False
    assert analysis.scc.component_count == g.n
    assert analysis.critical_path.length == direct.length == 8.0
    names = [analysis.scc.condensation.get_label(c) for c in analysis.critical_path.path]
    assert names == ["design", "build", "ship"]


def test_pipeline_self_loop_counts_as_cycle():
    g = build_digraph(2, [(0, 1), (1, 1)])
    analysis = analyze_schedule(g)
    assert analysis.has_cycles is True
    assert analysis.scc.component_count == 2
    assert analysis.topological.is_valid


def test_pipeline_empty_graph():
    analysis = analyze_schedule(WeightedDigraph(0))
    assert analysis.scc.components == ()
    assert analysis.topological.order == ()
    assert analysis.topological.is_valid
    assert analysis.critical_path.path == ()
    assert analysis.has_cycles is False


def test_pipeline_separate_metrics_per_stage():
    analysis = analyze_schedule(_cyclic_plan())
    assert analysis.scc.metrics is not analysis.topological.metrics
    assert analysis.topological.metrics is not analysis.critical_path.metrics
    assert analysis.scc.metrics.get_counter("relaxations") == 0


def test_pipeline_shared_metrics_accumulate():
    m = BasicMetrics()
    analysis = analyze_schedule(_cyclic_plan(), metrics=m)
    assert analysis.scc.metrics is m and analysis.critical_path.metrics is m
    assert m.get_counter("dfs_visits") == 5
    assert m.get_counter("edge_traversals") == 5
    assert m.get_counter("stack_pops") == 5
    assert m.get_counter("queue_pops") == 3
    assert m.get_counter("relaxations") == 2


def test_pipeline_settings_dict():
    g = build_digraph(2, [(0, 1, -1.0)])
    analysis = analyze_schedule(g, settings={"critical_path_baseline": -5})
    assert analysis.critical_tasks() == [(0,), (1,)]
    assert analysis.critical_path.length == -1.0


def test_schedule_analysis_to_dict_is_json_serializable():
    analysis = analyze_schedule(_cyclic_plan())
    d = schedule_analysis_to_dict(analysis)
    json.dumps(d)
    assert d["vertex_count"] == 5
    assert d["edge_count"] == 5
    assert d["has_cycles"] is True
    assert d["scc"]["component_count"] == 3
    assert d["scc"]["components"][2] == {
        "id": 2,
        "label": "SCC_2_3_tasks",
        "size": 3,
        "vertices": [0, 1, 2],
        "labels": ["Task_0", "Task_1", "Task_2"],
    }
    assert d["scc"]["condensation_edges"] == [
        {"source": 1, "target": 0, "weight": 2.0},
        {"source": 2, "target": 1, "weight": 4.0},
    ]
    assert d["topological"]["labels"] == ["SCC_2_3_tasks", "Task_3", "Task_4"]
    assert d["critical_path"]["length"] == 6.0


def test_schedule_analysis_to_dict_deterministic():
    a = schedule_analysis_to_dict(analyze_schedule(_cyclic_plan()))
    b = schedule_analysis_to_dict(analyze_schedule(_cyclic_plan()))
    a_scc = {k: v for k, v in a["scc"].items() if k != "metrics"}
    b_scc = {k: v for k, v in b["scc"].items() if k != "metrics"}
    assert a_scc == b_scc
    assert a["topological"]["order"] == b["topological"]["order"]


def test_topological_result_to_dict_invalid():
    g = build_digraph(2, [(0, 1), (1, 0)])
    d = topological_result_to_dict(TopologicalOrderer().get_results(g, BasicMetrics()), g)
    assert d["is_valid"] is False
    assert d["order"] == [] and d["labels"] == []


def test_path_result_to_dict_unreached_is_none():
    g = _acyclic_plan()
    result = DAGPathAnalyzer().shortest_paths(g, 1, BasicMetrics())
    d = path_result_to_dict(result, g)
    json.dumps(d)
    assert d["mode"] == "shortest"
    assert d["distances"] == {"design": None, "build": 0.0, "ship": 5.0, "docs": None}
    assert d["metrics"]["counters"] == {"relaxations": 1}


def test_scc_result_to_dict_singletons():
    g = _acyclic_plan()
    d = scc_result_to_dict(StronglyConnectedComponents().get_results(g, BasicMetrics()), g)
    assert [c["size"] for c in d["components"]] == [1, 1, 1, 1]
    assert sorted(c["label"] for c in d["components"]) == ["build", "design", "docs", "ship"]
