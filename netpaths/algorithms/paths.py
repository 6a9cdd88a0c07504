"""Concrete shortest paths reconstructed from traversal states.

For every computed source and every vertex it reached, one vertex sequence is
rebuilt by following predecessors back to the source. Where several shortest
paths exist the last recorded predecessor is taken at each step, so the chosen
path depends on edge insertion order rather than on any canonical ordering.
"""

from __future__ import annotations

from concurrent.futures import Executor, Future
from typing import Dict, Iterable, List, Mapping

from netpaths.algorithms.types import TraversalState
from netpaths.exceptions import InvalidArgument, PathNotFound
from netpaths.graph import Vertex
from netpaths.logging import get_logger
from netpaths.parallel import partition, validate_pool_args, wait_tasks

logger = get_logger(__name__)

PathMap = Dict[Vertex, List[Vertex]]


def reconstruct_path(state: TraversalState, dst: Vertex) -> List[Vertex]:
    """Return the path from ``state.source`` to ``dst``, source first.

    Raises:
        InvalidArgument: If ``dst`` is None.
        PathNotFound: If ``dst`` was not reached from the source.
    """
    return state.path_to(dst)


def paths_for_state(state: TraversalState) -> PathMap:
    """Reconstruct a path to every vertex visited by ``state``."""
    return {dst: reconstruct_path(state, dst) for dst in state.visit_order}


def _paths_partition(
    states: Dict[Vertex, TraversalState], sources: List[Vertex]
) -> Dict[Vertex, PathMap]:
    """Pool task body: reconstruct paths for one partition of sources."""
    result = {src: paths_for_state(states[src]) for src in sources}
    logger.debug(f"Shortest paths finished on a partition of {len(sources)} sources")
    return result


class ShortestPaths:
    """Path and distance queries over a set of computed traversal states.

    Args:
        states: Mapping of source vertex to traversal state, typically
            ``MultiSourceDijkstra.states``.
    """

    def __init__(self, states: Mapping[Vertex, TraversalState]) -> None:
        if states is None:
            raise InvalidArgument("traversal states should not be None")
        self._states: Dict[Vertex, TraversalState] = dict(states)
        self._paths: Dict[Vertex, PathMap] = {}

    @property
    def sources(self) -> List[Vertex]:
        return list(self._states)

    def compute(self) -> None:
        """Reconstruct paths for every computed source sequentially."""
        self._paths.clear()
        for src, state in self._states.items():
            self._paths[src] = paths_for_state(state)

    def compute_parallel(self, executor: Executor, n: int) -> List[Future]:
        """Submit ``n`` partition tasks reconstructing all paths.

        Call :meth:`gather` with the returned tasks before querying.

        Raises:
            InvalidArgument: If ``executor`` is None or ``n <= 1``.
        """
        validate_pool_args(executor, n)
        self._paths.clear()

        tasks: List[Future] = []
        offset = 0
        for chunk in partition(self.sources, n):
            logger.debug(f"Shortest paths partition [{offset}, {offset + len(chunk)})")
            offset += len(chunk)
            subset = {src: self._states[src] for src in chunk}
            tasks.append(executor.submit(_paths_partition, subset, chunk))
        return tasks

    def gather(self, tasks: Iterable[Future]) -> None:
        """Wait for ``tasks`` and collect the paths they reconstructed."""
        for partial in wait_tasks(tasks):
            self._paths.update(partial)

    def _state(self, src: Vertex) -> TraversalState:
        if src is None:
            raise InvalidArgument("source vertex should not be None")
        try:
            return self._states[src]
        except KeyError:
            raise PathNotFound(
                f"Shortest paths not computed for source '{src}'."
            ) from None

    def paths_from(self, src: Vertex) -> PathMap:
        """Return the path to every destination reached from ``src`` (a copy).

        Raises:
            InvalidArgument: If ``src`` is None.
            PathNotFound: If paths were not computed for ``src``.
        """
        if src is None:
            raise InvalidArgument("source vertex should not be None")
        if src not in self._paths:
            raise PathNotFound(f"Shortest paths not computed for source '{src}'.")
        return dict(self._paths[src])

    def distances_from(self, src: Vertex) -> Dict[Vertex, float]:
        """Return the distance map of ``src`` (``inf`` for unreached vertices)."""
        return dict(self._state(src).distance)

    def path(self, src: Vertex, dst: Vertex) -> List[Vertex]:
        """Return the shortest path from ``src`` to ``dst``.

        Raises:
            InvalidArgument: If ``src`` or ``dst`` is None.
            PathNotFound: If paths were not computed for ``src`` or ``dst``
                was not reached.
        """
        if dst is None:
            raise InvalidArgument("destination vertex should not be None")
        paths = self.paths_from(src)
        if dst not in paths:
            raise PathNotFound(f"No path found from '{src}' to '{dst}'.")
        return paths[dst]

    def distance(self, src: Vertex, dst: Vertex) -> float:
        """Return the shortest distance from ``src`` to ``dst``.

        Raises:
            InvalidArgument: If ``src`` or ``dst`` is None.
            PathNotFound: If no state exists for ``src`` or ``dst`` was not
                reached.
        """
        return self._state(src).distance_to(dst)
