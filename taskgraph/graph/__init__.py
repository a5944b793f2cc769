"""Weighted task-dependency graph."""

from taskgraph.graph.digraph import (
    DEFAULT_LABEL_PREFIX,
    DEFAULT_WEIGHT,
    Edge,
    WeightedDigraph,
    build_digraph,
)

__all__ = [
    "DEFAULT_LABEL_PREFIX",
    "DEFAULT_WEIGHT",
    "Edge",
    "WeightedDigraph",
    "build_digraph",
]
