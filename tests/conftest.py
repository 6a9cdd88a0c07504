"""Shared graph fixtures.

Edge weights are small integers so every distance is exact and equal-cost
paths tie reliably.
"""

from __future__ import annotations

import pytest

from netpaths.graph import EdgeType, WeightedGraph


def build_graph(edge_type, vertices, edges):
    """Build a graph from ``(u, v, weight)`` triples with keys in input order."""
    g = WeightedGraph(edge_type)
    for v in vertices:
        g.add_vertex(v)
    for u, v, w in edges:
        g.add_edge(u, v, weight=w)
    return g


@pytest.fixture
def diamond():
    #     [1]      [1]
    #   ┌─────►B─────┐
    #   │            ▼
    #   A            D
    #   │            ▲
    #   └─────►C─────┘
    #     [1]      [1]
    return build_graph(
        EdgeType.DIRECTED,
        "ABCD",
        [("A", "B", 1), ("A", "C", 1), ("B", "D", 1), ("C", "D", 1)],
    )


@pytest.fixture
def line4():
    #     [1]     [1]     [1]
    #  A ───── B ───── C ───── D
    return build_graph(
        EdgeType.UNDIRECTED,
        "ABCD",
        [("A", "B", 1), ("B", "C", 1), ("C", "D", 1)],
    )


@pytest.fixture
def with_isolated():
    #     [1]     [2]
    #  A ───── B ───── C        E
    return build_graph(
        EdgeType.UNDIRECTED,
        "ABCE",
        [("A", "B", 1), ("B", "C", 2)],
    )


@pytest.fixture
def parallel_edges():
    #      [1] x2       [2]
    #   A ═══════► B ───────► C
    #   │                     ▲
    #   └─────────────────────┘
    #             [5]
    g = WeightedGraph(EdgeType.DIRECTED)
    for v in "ABC":
        g.add_vertex(v)
    g.add_edge("A", "B", key=0, weight=1)
    g.add_edge("A", "B", key=1, weight=1)
    g.add_edge("B", "C", key=2, weight=2)
    g.add_edge("A", "C", key=3, weight=5)
    return g


MESH_EDGES = [
    ("A", "B", 1),
    ("A", "C", 4),
    ("B", "C", 2),
    ("B", "D", 5),
    ("C", "D", 1),
    ("C", "E", 3),
    ("D", "E", 1),
    ("D", "F", 2),
    ("E", "F", 4),
    ("F", "G", 1),
]


@pytest.fixture
def mesh():
    """Undirected simple graph with several equal-cost routes."""
    return build_graph(EdgeType.UNDIRECTED, "ABCDEFG", MESH_EDGES)


@pytest.fixture
def directed_mesh():
    """Directed simple graph: mesh edges in one direction plus a few back edges."""
    back = [("G", "A", 3), ("E", "B", 2), ("D", "A", 4)]
    return build_graph(EdgeType.DIRECTED, "ABCDEFG", MESH_EDGES + back)
