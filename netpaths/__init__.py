"""netpaths: weighted shortest paths and betweenness centrality.

netpaths computes single-source and all-pairs shortest paths on weighted
directed or undirected multigraphs, counts equal-cost paths and derives exact
betweenness centrality with Brandes' algorithm. Multi-source work can be split
across a process or thread pool.

Primary API:
    WeightedGraph - Strict weighted multigraph
    dijkstra() - Single-source shortest paths with path counting
    MultiSourceDijkstra - Traversal states for many sources
    ShortestPaths - Path and distance queries
    BetweennessCentrality - Centrality scores
    analyze() - Run the whole pipeline in one call
    read_graphml(), write_graphml() - GraphML input and export

Example:
    from netpaths import WeightedGraph, analyze

    g = WeightedGraph("undirected")
    for v in "ABCD":
        g.add_vertex(v)
    g.add_edge("A", "B", weight=1)
    g.add_edge("B", "C", weight=1)
    g.add_edge("C", "D", weight=1)

    result = analyze(g)
    result.paths.path("A", "D")       # ['A', 'B', 'C', 'D']
    result.betweenness.measure("B")   # 2.0
"""

from __future__ import annotations

from netpaths import logging
from netpaths._version import __version__
from netpaths.algorithms.betweenness import BetweennessCentrality
from netpaths.algorithms.connectivity import depth_first_traversal, is_connected
from netpaths.algorithms.dijkstra import SingleSourceDijkstra, dijkstra
from netpaths.algorithms.multi_source import MultiSourceDijkstra
from netpaths.algorithms.paths import ShortestPaths, reconstruct_path
from netpaths.algorithms.types import TraversalState
from netpaths.analysis import AnalysisResult, analyze
from netpaths.exceptions import (
    DuplicateEdge,
    DuplicateVertex,
    EdgeNotFound,
    GraphError,
    GraphFormatError,
    InvalidArgument,
    InvalidVertex,
    PathNotFound,
)
from netpaths.graph import EdgeType, WeightedGraph
from netpaths.io import read_graphml, write_graphml

__all__ = [
    # Version
    "__version__",
    # Graph
    "WeightedGraph",
    "EdgeType",
    # Algorithms
    "dijkstra",
    "SingleSourceDijkstra",
    "TraversalState",
    "MultiSourceDijkstra",
    "ShortestPaths",
    "reconstruct_path",
    "BetweennessCentrality",
    "depth_first_traversal",
    "is_connected",
    # Analysis (primary API)
    "analyze",
    "AnalysisResult",
    # I/O
    "read_graphml",
    "write_graphml",
    # Errors
    "GraphError",
    "InvalidArgument",
    "InvalidVertex",
    "DuplicateVertex",
    "DuplicateEdge",
    "EdgeNotFound",
    "PathNotFound",
    "GraphFormatError",
    # Utilities
    "logging",
]
