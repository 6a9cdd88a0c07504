"""Graph primitives.

This package provides the weighted multigraph container `WeightedGraph` that
all traversal and centrality algorithms read from.
"""

from netpaths.graph.weighted_graph import (
    AttrDict,
    EdgeID,
    EdgeType,
    Vertex,
    Weight,
    WeightedGraph,
)

__all__ = ["AttrDict", "EdgeID", "EdgeType", "Vertex", "Weight", "WeightedGraph"]
