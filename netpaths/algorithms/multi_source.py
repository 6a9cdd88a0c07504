"""Dijkstra over many sources, sequentially or on a worker pool.

The parallel variant splits the sources into contiguous partitions and submits
one task per partition. A task computes the traversal state of each of its
sources locally and returns them together; :meth:`MultiSourceDijkstra.gather`
waits on the tasks and publishes the states. Partitions are disjoint, so a
source key is written exactly once.
"""

from __future__ import annotations

from concurrent.futures import Executor, Future
from typing import Dict, Iterable, List, Optional, Sequence

from netpaths.algorithms.dijkstra import dijkstra
from netpaths.algorithms.types import TraversalState
from netpaths.exceptions import GraphError, InvalidArgument
from netpaths.graph import Vertex, WeightedGraph
from netpaths.logging import get_logger
from netpaths.parallel import partition, validate_pool_args, wait_tasks

logger = get_logger(__name__)

StateMap = Dict[Vertex, TraversalState]


def compute_states(graph: WeightedGraph, sources: Iterable[Vertex]) -> StateMap:
    """Run Dijkstra for each source and collect the states.

    A source that fails validation is logged and skipped; the remaining
    sources are still processed.

    Args:
        graph: Graph to traverse.
        sources: Source vertices.

    Returns:
        Mapping of source vertex to its traversal state.
    """
    states: StateMap = {}
    for src in sources:
        try:
            states[src] = dijkstra(graph, src)
        except GraphError as exc:
            logger.error(f"Skipping source '{src}': {exc}")
    return states


def _compute_partition(graph: WeightedGraph, sources: List[Vertex]) -> StateMap:
    """Pool task body: compute the states of one partition."""
    states = compute_states(graph, sources)
    logger.debug(f"Dijkstra finished on a partition of {len(sources)} sources")
    return states


class MultiSourceDijkstra:
    """Traversal states for a set of sources over one graph.

    Attributes:
        graph: The graph traversed (not modified).
    """

    def __init__(self, graph: WeightedGraph) -> None:
        if graph is None:
            raise InvalidArgument("graph should not be None")
        self.graph = graph
        self._states: StateMap = {}

    @property
    def states(self) -> StateMap:
        """Mapping of source vertex to traversal state (a shallow copy)."""
        return dict(self._states)

    def state(self, source: Vertex) -> Optional[TraversalState]:
        return self._states.get(source)

    def compute(self, sources: Optional[Sequence[Vertex]]) -> None:
        """Compute states for ``sources`` sequentially.

        Raises:
            InvalidArgument: If ``sources`` is None.
        """
        if sources is None:
            raise InvalidArgument("list of sources should not be None")
        self._states.update(compute_states(self.graph, sources))

    def compute_parallel(
        self,
        executor: Executor,
        n: int,
        sources: Optional[Sequence[Vertex]],
    ) -> List[Future]:
        """Submit ``n`` partition tasks computing states for ``sources``.

        Returns immediately. Pass the returned tasks to :meth:`gather` before
        reading :attr:`states`.

        Args:
            executor: Pool to submit to.
            n: Number of partitions, greater than 1.
            sources: Source vertices.

        Returns:
            One future per partition.

        Raises:
            InvalidArgument: If ``executor`` or ``sources`` is None, or
                ``n <= 1``.
        """
        validate_pool_args(executor, n)
        if sources is None:
            raise InvalidArgument("list of sources should not be None")

        tasks: List[Future] = []
        offset = 0
        for chunk in partition(list(sources), n):
            logger.debug(f"Dijkstra partition [{offset}, {offset + len(chunk)})")
            offset += len(chunk)
            tasks.append(executor.submit(_compute_partition, self.graph, chunk))
        return tasks

    def gather(self, tasks: Iterable[Future]) -> None:
        """Wait for ``tasks`` and publish the states they computed."""
        for partial in wait_tasks(tasks):
            self._states.update(partial)
        logger.debug(f"Collected traversal states for {len(self._states)} sources")
