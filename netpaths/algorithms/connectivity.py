"""Depth-first traversal and connectivity check.

Only undirected graphs are validated; a directed graph is always reported as
not connected since strong connectivity is not checked.
"""

from __future__ import annotations

from typing import List, Set

from netpaths.exceptions import InvalidArgument, InvalidVertex
from netpaths.graph import Vertex, WeightedGraph


def depth_first_traversal(graph: WeightedGraph, src: Vertex) -> Set[Vertex]:
    """Return every vertex reachable from ``src``, ``src`` included.

    Raises:
        InvalidArgument: If ``src`` is None.
        InvalidVertex: If ``src`` is not in ``graph``.
    """
    if src is None:
        raise InvalidArgument("source vertex should not be None")
    if not graph.has_vertex(src):
        raise InvalidVertex(f"Vertex '{src}' does not exist in the graph.")

    visited: Set[Vertex] = set()
    stack: List[Vertex] = [src]
    while stack:
        node = stack.pop()
        if node in visited:
            continue
        visited.add(node)
        for succ in graph.successors(node):
            if succ not in visited:
                stack.append(succ)
    return visited


def is_connected(graph: WeightedGraph) -> bool:
    """Return True if ``graph`` is undirected, non-empty and connected."""
    if graph.vertex_count() == 0:
        return False
    if graph.is_directed():
        return False
    start = graph.vertices()[0]
    return len(depth_first_traversal(graph, start)) == graph.vertex_count()
