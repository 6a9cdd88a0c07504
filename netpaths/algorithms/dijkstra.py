"""Single-source shortest paths (Dijkstra) with path counting.

The traversal records, besides distances, every equal-cost predecessor, the
number of shortest paths reaching each vertex and the order in which vertices
were settled. Brandes' betweenness pass needs all three.

Notes:
    Equal-cost detection compares floating-point distances exactly. Ties that
    differ only by representation error are treated as distinct costs; this
    is a known limitation kept so that path counts stay reproducible.
"""

from __future__ import annotations

from heapq import heappop, heappush
from itertools import count
from typing import List, Tuple

from netpaths.algorithms.types import INF, TraversalState
from netpaths.exceptions import InvalidArgument, InvalidVertex
from netpaths.graph import Vertex, WeightedGraph


def _init_state(graph: WeightedGraph, source: Vertex) -> TraversalState:
    state = TraversalState(source=source)
    for v in graph.vertices():
        state.distance[v] = INF
        state.predecessors[v] = []
        state.path_count[v] = 0
    state.distance[source] = 0.0
    state.path_count[source] = 1
    return state


def dijkstra(graph: WeightedGraph, source: Vertex) -> TraversalState:
    """Compute shortest paths from ``source`` to every reachable vertex.

    Args:
        graph: Graph to traverse. It is only read.
        source: Vertex to start from.

    Returns:
        A fresh :class:`TraversalState` for ``source``.

    Raises:
        InvalidArgument: If ``source`` is None.
        InvalidVertex: If ``source`` is not in ``graph``.
    """
    if source is None:
        raise InvalidArgument("source vertex should not be None")
    if not graph.has_vertex(source):
        raise InvalidVertex(f"Source vertex '{source}' is not in the graph.")

    state = _init_state(graph, source)
    distance = state.distance
    predecessors = state.predecessors
    path_count = state.path_count
    visited = state.visited

    # The counter keeps heap entries ordered without comparing vertices.
    tie = count()
    min_pq: List[Tuple[float, int, Vertex]] = [(0.0, next(tie), source)]

    while min_pq:
        _, _, node = heappop(min_pq)
        if node in visited:
            # Stale entry; the vertex was settled through a shorter path.
            continue

        visited.add(node)
        state.visit_order.append(node)
        node_dist = distance[node]

        for neighbor, _key, weight in graph.iter_out_edges(node):
            if neighbor in visited:
                # Settled vertices are final.
                continue

            new_dist = node_dist + weight
            if new_dist == INF:
                # Overflowed sum; the neighbor is not reached through this edge.
                continue
            if new_dist < distance[neighbor]:
                distance[neighbor] = new_dist
                path_count[neighbor] = 0
                predecessors[neighbor] = []
                heappush(min_pq, (new_dist, next(tie), neighbor))

            if new_dist == distance[neighbor]:
                path_count[neighbor] += path_count[node]
                predecessors[neighbor].append(node)

    return state


class SingleSourceDijkstra:
    """Stateless engine bound to one graph.

    Each :meth:`compute` call produces an independent state, so one engine can
    serve many sources.
    """

    def __init__(self, graph: WeightedGraph) -> None:
        if graph is None:
            raise InvalidArgument("graph should not be None")
        self.graph = graph

    def compute(self, source: Vertex) -> TraversalState:
        """Run Dijkstra from ``source``. See :func:`dijkstra`."""
        return dijkstra(self.graph, source)
