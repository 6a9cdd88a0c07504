"""Weighted multigraph with strict vertex and edge management.

`WeightedGraph` stores vertices and uniquely keyed, non-negatively weighted
edges in a NetworkX multigraph. Directed graphs are backed by
``networkx.MultiDiGraph`` and undirected ones by ``networkx.MultiGraph``. In an
undirected graph every incident edge is an out-edge of both endpoints.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, Hashable, Iterator, List, Optional, Tuple, Union

import networkx as nx

from netpaths.exceptions import (
    DuplicateEdge,
    DuplicateVertex,
    EdgeNotFound,
    InvalidArgument,
    InvalidVertex,
)

Vertex = Hashable
EdgeID = Hashable
Weight = Union[int, float]
AttrDict = Dict[str, Any]
EdgeTuple = Tuple[Vertex, Vertex, EdgeID, AttrDict]


class EdgeType(str, Enum):
    """Direction semantics shared by all edges of a graph."""

    DIRECTED = "directed"
    UNDIRECTED = "undirected"


class WeightedGraph:
    """A multigraph with explicit vertex management and unique edge keys.

    This class enforces:
      - No automatic creation of missing vertices when adding an edge.
      - No duplicate vertices or edge keys.
      - Finite, non-negative numeric edge weights.
      - Self-loops and parallel edges are allowed as distinct edge keys.

    When no key is provided, edges get a monotonically increasing integer key.
    The graph is treated as read-only while analyses run over it.
    """

    def __init__(self, edge_type: EdgeType = EdgeType.DIRECTED) -> None:
        if edge_type is None:
            raise InvalidArgument("edge type should not be None")
        self.edge_type = EdgeType(edge_type)
        self._nx: nx.MultiGraph
        if self.edge_type is EdgeType.DIRECTED:
            self._nx = nx.MultiDiGraph()
        else:
            self._nx = nx.MultiGraph()
        self._edges: Dict[EdgeID, EdgeTuple] = {}
        # This counter only advances; removed edges do not reuse keys.
        self._next_edge_id: int = 0

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.edge_type.value}, "
            f"vertices={self.vertex_count()}, edges={self.edge_count()})"
        )

    def __contains__(self, v: object) -> bool:
        return v is not None and v in self._nx

    def __len__(self) -> int:
        return self.vertex_count()

    def is_directed(self) -> bool:
        return self.edge_type is EdgeType.DIRECTED

    def vertex_count(self) -> int:
        return self._nx.number_of_nodes()

    def edge_count(self) -> int:
        return len(self._edges)

    def vertices(self) -> List[Vertex]:
        """Return the vertices in insertion order."""
        return list(self._nx.nodes)

    def edges(self) -> List[EdgeID]:
        """Return the edge keys in insertion order."""
        return list(self._edges)

    def has_vertex(self, v: Vertex) -> bool:
        if v is None:
            raise InvalidArgument("vertex should not be None")
        return v in self._nx

    def has_edge(self, e: EdgeID) -> bool:
        if e is None:
            raise InvalidArgument("edge should not be None")
        return e in self._edges

    #
    # Mutation
    #
    def add_vertex(self, v: Vertex, **attr: Any) -> None:
        """Add a single vertex, disallowing duplicates.

        Raises:
            InvalidArgument: If ``v`` is None.
            DuplicateVertex: If the vertex already exists.
        """
        if v is None:
            raise InvalidArgument("added vertex should not be None")
        if v in self._nx:
            raise DuplicateVertex(f"Vertex '{v}' already exists in this graph.")
        self._nx.add_node(v, **attr)

    def add_edge(
        self,
        u: Vertex,
        v: Vertex,
        key: Optional[EdgeID] = None,
        weight: Weight = 1.0,
        **attr: Any,
    ) -> EdgeID:
        """Add an edge from ``u`` to ``v``.

        Both endpoints must already exist. An explicit integer key pushes the
        internal counter past it so later auto-assigned keys never collide.

        Args:
            u: Source vertex.
            v: Target vertex.
            key: Unique edge key; generated when omitted.
            weight: Finite, non-negative edge weight.
            **attr: Additional edge attributes.

        Returns:
            The key of the new edge.

        Raises:
            InvalidArgument: On None endpoints or a weight that is negative,
                infinite, NaN or non-numeric.
            InvalidVertex: If an endpoint does not exist.
            DuplicateEdge: If ``key`` is already in use.
        """
        if u is None or v is None:
            raise InvalidArgument("connected vertices should not be None")
        if u not in self._nx:
            raise InvalidVertex(f"Source vertex '{u}' does not exist.")
        if v not in self._nx:
            raise InvalidVertex(f"Target vertex '{v}' does not exist.")
        try:
            weight = float(weight)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"Edge weight {weight!r} is not a number.") from exc
        if not math.isfinite(weight) or weight < 0:
            raise InvalidArgument(
                f"Edge weight must be finite and non-negative, got {weight}."
            )

        if key is None:
            key = self._next_edge_id
            self._next_edge_id += 1
        else:
            if key in self._edges:
                raise DuplicateEdge(f"Edge with id '{key}' already exists.")
            if isinstance(key, int) and key >= self._next_edge_id:
                self._next_edge_id = key + 1

        self._nx.add_edge(u, v, key=key, weight=weight, **attr)
        self._edges[key] = (u, v, key, self._nx[u][v][key])
        return key

    #
    # Queries
    #
    def _edge(self, e: EdgeID) -> EdgeTuple:
        if e is None:
            raise InvalidArgument("edge should not be None")
        try:
            return self._edges[e]
        except KeyError:
            raise EdgeNotFound(f"Edge with id='{e}' not found.") from None

    def _require_vertex(self, v: Vertex) -> None:
        if v is None:
            raise InvalidArgument("vertex should not be None")
        if v not in self._nx:
            raise InvalidVertex(f"Vertex '{v}' does not exist in the graph.")

    def endpoints(self, e: EdgeID) -> Tuple[Vertex, Vertex]:
        """Return ``(source, target)`` of an edge as it was added."""
        u, v, _, _ = self._edge(e)
        return u, v

    def weight(self, e: EdgeID) -> float:
        return self._edge(e)[3]["weight"]

    def edge_attr(self, e: EdgeID) -> AttrDict:
        return self._edge(e)[3]

    def opposite(self, e: EdgeID, v: Vertex) -> Vertex:
        """Return the endpoint of ``e`` that is not ``v``.

        Raises:
            InvalidArgument: If ``e`` is not incident to ``v``.
        """
        self._require_vertex(v)
        u, w, _, _ = self._edge(e)
        if u == v:
            return w
        if w == v:
            return u
        raise InvalidArgument(f"Edge '{e}' does not connect vertex '{v}'.")

    def out_edges(self, v: Vertex) -> List[EdgeID]:
        """Return the keys of the edges leaving ``v``.

        For undirected graphs these are all edges incident to ``v``; a
        self-loop is listed once.
        """
        self._require_vertex(v)
        return [key for _, nbrs in self._nx.adj[v].items() for key in nbrs]

    def iter_out_edges(self, v: Vertex) -> Iterator[Tuple[Vertex, EdgeID, float]]:
        """Yield ``(neighbor, key, weight)`` for every edge leaving ``v``."""
        self._require_vertex(v)
        for neighbor, keyed in self._nx.adj[v].items():
            for key, attr in keyed.items():
                yield neighbor, key, attr["weight"]

    def successors(self, v: Vertex) -> List[Vertex]:
        self._require_vertex(v)
        return list(self._nx.adj[v])

    def to_networkx(self) -> nx.MultiGraph:
        """Return an independent NetworkX copy of the underlying multigraph."""
        return self._nx.copy()
