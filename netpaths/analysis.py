"""One-call analysis pipeline.

``analyze`` runs Dijkstra from every vertex, reconstructs all shortest paths
and computes betweenness centrality, either sequentially or on a worker pool.
"""

from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Dict, Mapping, Optional

from netpaths.algorithms.betweenness import BetweennessCentrality
from netpaths.algorithms.connectivity import is_connected
from netpaths.algorithms.multi_source import MultiSourceDijkstra
from netpaths.algorithms.paths import ShortestPaths
from netpaths.algorithms.types import INF, TraversalState
from netpaths.config import ANALYSIS_CONFIG
from netpaths.exceptions import InvalidArgument
from netpaths.graph import Vertex, WeightedGraph
from netpaths.logging import get_logger
from netpaths.parallel import create_executor

logger = get_logger(__name__)


@dataclass
class AnalysisResult:
    """Everything computed by :func:`analyze`.

    Attributes:
        graph: The analysed graph.
        states: Traversal state per source vertex.
        paths: Path and distance queries.
        betweenness: Centrality scores.
        diameter: Largest finite shortest-path distance (0.0 when no pair is
            connected).
        connected: Result of the connectivity check.
    """

    graph: WeightedGraph
    states: Dict[Vertex, TraversalState]
    paths: ShortestPaths
    betweenness: BetweennessCentrality
    diameter: float
    connected: bool


def diameter(states: Mapping[Vertex, TraversalState]) -> float:
    """Return the longest shortest-path distance, ignoring unreachable pairs."""
    longest = 0.0
    for state in states.values():
        for d in state.distance.values():
            if d != INF and d > longest:
                longest = d
    return longest


def analyze(
    graph: WeightedGraph,
    nthreads: int = 1,
    executor: Optional[str] = None,
) -> AnalysisResult:
    """Run all-pairs shortest paths and betweenness on ``graph``.

    Args:
        graph: Graph to analyse.
        nthreads: Number of workers and partitions; 1 or less runs
            sequentially.
        executor: Pool kind, ``"process"`` or ``"thread"``. Defaults to the
            configured kind.

    Returns:
        An :class:`AnalysisResult`.
    """
    if graph is None:
        raise InvalidArgument("graph should not be None")

    kind = executor or ANALYSIS_CONFIG.executor
    vertices = graph.vertices()
    multi = MultiSourceDijkstra(graph)
    start = perf_counter()

    if nthreads > 1:
        logger.info(
            f"Running analysis on {len(vertices)} vertices with {nthreads} {kind} workers"
        )
        with create_executor(kind, nthreads) as pool:
            logger.info("Running Dijkstra on every vertex")
            multi.gather(multi.compute_parallel(pool, nthreads, vertices))

            states = multi.states
            paths = ShortestPaths(states)
            betweenness = BetweennessCentrality(graph, states)

            logger.info("Aggregating shortest paths and calculating betweenness")
            path_tasks = paths.compute_parallel(pool, nthreads)
            betweenness_tasks = betweenness.compute_parallel(pool, nthreads)
            paths.gather(path_tasks)
            betweenness.gather(betweenness_tasks)
    else:
        logger.info(f"Running sequential analysis on {len(vertices)} vertices")
        multi.compute(vertices)
        states = multi.states

        logger.info("Aggregating shortest paths")
        paths = ShortestPaths(states)
        paths.compute()

        logger.info("Calculating betweenness")
        betweenness = BetweennessCentrality(graph, states)
        betweenness.compute()

    logger.info(f"Analysis completed in {perf_counter() - start:.2f} seconds")
    return AnalysisResult(
        graph=graph,
        states=states,
        paths=paths,
        betweenness=betweenness,
        diameter=diameter(states),
        connected=is_connected(graph),
    )
