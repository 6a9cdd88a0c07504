"""Types and data structures for traversal results.

Defines the per-source traversal record produced by Dijkstra and consumed by
path reconstruction and betweenness accumulation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Set

from netpaths.exceptions import InvalidArgument, PathNotFound
from netpaths.graph import Vertex

INF = float("inf")


@dataclass
class TraversalState:
    """Shortest-path traversal record for one source vertex.

    Attributes:
        source: Vertex the traversal started from.
        visited: Vertices reachable from ``source``.
        distance: Shortest distance per vertex. Every vertex of the graph has an
            entry; unreachable ones stay at ``inf``.
        predecessors: All immediate predecessors on some shortest path, in
            relaxation order.
        path_count: Number of distinct shortest paths per vertex (0 when
            unreachable, 1 for ``source``).
        visit_order: Vertices in settlement order (non-decreasing distance).
            Iterate it reversed to walk from the farthest vertex back.
    """

    source: Vertex
    visited: Set[Vertex] = field(default_factory=set)
    distance: Dict[Vertex, float] = field(default_factory=dict)
    predecessors: Dict[Vertex, List[Vertex]] = field(default_factory=dict)
    path_count: Dict[Vertex, int] = field(default_factory=dict)
    visit_order: List[Vertex] = field(default_factory=list)

    def _check_reached(self, dst: Vertex) -> None:
        if dst is None:
            raise InvalidArgument("destination vertex should not be None")
        if dst not in self.visited:
            raise PathNotFound(f"No path found from '{self.source}' to '{dst}'.")

    def path_to(self, dst: Vertex) -> List[Vertex]:
        """Return one shortest path from the source to ``dst``, source first.

        When several shortest paths exist, the last recorded predecessor is
        followed at every step.

        Raises:
            InvalidArgument: If ``dst`` is None.
            PathNotFound: If ``dst`` was not reached.
        """
        self._check_reached(dst)
        path: List[Vertex] = []
        node = dst
        while True:
            path.append(node)
            preds = self.predecessors[node]
            if not preds:
                break
            node = preds[-1]
        path.reverse()
        return path

    def distance_to(self, dst: Vertex) -> float:
        """Return the shortest distance from the source to ``dst``.

        Raises:
            InvalidArgument: If ``dst`` is None.
            PathNotFound: If ``dst`` was not reached.
        """
        self._check_reached(dst)
        return self.distance[dst]

    def reachable_distances(self) -> Dict[Vertex, float]:
        """Return distances restricted to the visited vertices."""
        return {v: self.distance[v] for v in self.visit_order}
