"""Betweenness centrality via Brandes' dependency accumulation.

Brandes' algorithm reuses the traversal states: for each source it walks the
settlement order backwards (farthest vertex first) and pushes every vertex's
dependency onto its shortest-path predecessors in proportion to their path
counts. The dependency of a vertex on a source is that source's contribution
to the vertex's centrality.

For undirected graphs every unordered pair is seen twice, once from each end,
so reported scores are halved.

Reference:
    U. Brandes, "A faster algorithm for betweenness centrality",
    Journal of Mathematical Sociology 25(2), 2001.
"""

from __future__ import annotations

from concurrent.futures import Executor, Future
from typing import Dict, Iterable, List, Mapping, Optional

from netpaths.algorithms.types import TraversalState
from netpaths.exceptions import InvalidArgument
from netpaths.graph import Vertex, WeightedGraph
from netpaths.logging import get_logger
from netpaths.parallel import partition, validate_pool_args, wait_tasks

logger = get_logger(__name__)

Scores = Dict[Vertex, float]


def source_dependencies(state: TraversalState) -> Scores:
    """Return the dependency of ``state.source`` on every vertex.

    The entry of the source itself is the accumulated scratch value and is not
    a centrality contribution; callers skip it.
    """
    dependency: Scores = dict.fromkeys(state.distance, 0.0)
    predecessors = state.predecessors
    path_count = state.path_count

    for w in reversed(state.visit_order):
        # w is reachable, hence path_count[w] >= 1
        pc_w = path_count[w]
        carried = 1.0 + dependency[w]
        for v in predecessors[w]:
            dependency[v] += (path_count[v] / pc_w) * carried
    return dependency


def accumulate(
    scores: Scores,
    states: Mapping[Vertex, TraversalState],
    sources: Iterable[Vertex],
) -> Scores:
    """Add the dependencies of ``sources`` into ``scores`` in place.

    A source without a traversal state is logged and skipped.

    Returns:
        ``scores``, for chaining.
    """
    for s in sources:
        state = states.get(s)
        if state is None:
            logger.warning(f"No traversal state for '{s}'; skipping it as a source")
            continue
        for w, dep in source_dependencies(state).items():
            if w != s and dep:
                scores[w] = scores.get(w, 0.0) + dep
    return scores


def _betweenness_partition(
    states: Dict[Vertex, TraversalState], sources: List[Vertex]
) -> Scores:
    """Pool task body: partial raw scores for one partition of sources."""
    partial = accumulate({}, states, sources)
    logger.debug(f"Betweenness finished on a partition of {len(sources)} sources")
    return partial


class BetweennessCentrality:
    """Exact betweenness centrality for every vertex of a graph.

    Args:
        graph: The graph the states were computed on.
        states: Traversal state per source, normally one for every vertex
            (``MultiSourceDijkstra.states``).
    """

    def __init__(
        self, graph: WeightedGraph, states: Mapping[Vertex, TraversalState]
    ) -> None:
        if graph is None:
            raise InvalidArgument("graph should not be None")
        if states is None:
            raise InvalidArgument("traversal states should not be None")
        self.graph = graph
        self._states: Dict[Vertex, TraversalState] = dict(states)
        self._raw: Scores = {}

    def _reset(self) -> List[Vertex]:
        self._raw.clear()
        vertices = self.graph.vertices()
        for v in vertices:
            self._raw[v] = 0.0
        return vertices

    def compute(self) -> None:
        """Compute raw scores sequentially using every vertex as a source."""
        vertices = self._reset()
        accumulate(self._raw, self._states, vertices)

    def compute_parallel(self, executor: Executor, n: int) -> List[Future]:
        """Submit ``n`` partition tasks over the vertex set.

        Every task returns the partial raw scores of its sources; call
        :meth:`gather` to add them into the accumulator.

        Raises:
            InvalidArgument: If ``executor`` is None or ``n <= 1``.
        """
        validate_pool_args(executor, n)
        vertices = self._reset()

        tasks: List[Future] = []
        offset = 0
        for chunk in partition(vertices, n):
            logger.debug(f"Betweenness partition [{offset}, {offset + len(chunk)})")
            offset += len(chunk)
            subset = {s: self._states[s] for s in chunk if s in self._states}
            tasks.append(executor.submit(_betweenness_partition, subset, chunk))
        return tasks

    def gather(self, tasks: Iterable[Future]) -> None:
        """Wait for ``tasks`` and add their partial scores."""
        for partial in wait_tasks(tasks):
            for v, score in partial.items():
                self._raw[v] = self._raw.get(v, 0.0) + score

    def _report(self, raw: float) -> float:
        if self.graph.is_directed():
            return raw
        return raw / 2.0

    def measure(self, v: Optional[Vertex]) -> float:
        """Return the betweenness centrality of ``v``.

        Raises:
            InvalidArgument: If ``v`` is None or has no computed measure.
        """
        if v is None:
            raise InvalidArgument("vertex should not be None")
        if v not in self._raw:
            raise InvalidArgument(f"No betweenness centrality measure found for '{v}'.")
        return self._report(self._raw[v])

    def measures(self) -> Scores:
        """Return the reported score of every vertex."""
        return {v: self._report(raw) for v, raw in self._raw.items()}
