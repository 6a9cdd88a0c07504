"""Command-line interface for netpaths."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import List, NoReturn, Optional, Sequence

from netpaths.algorithms.betweenness import BetweennessCentrality
from netpaths.algorithms.dijkstra import dijkstra
from netpaths.algorithms.multi_source import MultiSourceDijkstra
from netpaths.analysis import AnalysisResult, analyze
from netpaths.config import ANALYSIS_CONFIG, GRAPHML_CONFIG
from netpaths.exceptions import GraphFormatError
from netpaths.graph import Vertex, WeightedGraph
from netpaths.io import read_graphml, write_graphml
from netpaths.logging import (
    disable_debug_logging,
    enable_debug_logging,
    get_logger,
    set_global_log_level,
)
from netpaths.parallel import EXECUTOR_KINDS, create_executor

logger = get_logger(__name__)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _print_graph_summary(result: AnalysisResult) -> None:
    graph = result.graph
    names = ", ".join(GRAPHML_CONFIG.vertex_name(v) for v in graph.vertices())
    edge_ids = ", ".join(str(e) for e in graph.edges())

    print("GRAPH SUMMARY")
    print("-" * 30)
    print(f"   Number of vertices: {graph.vertex_count()}")
    print(f"   Number of edges: {graph.edge_count()}")
    print(f"   Vertices ids: {names}")
    print(f"   Edges ids: {edge_ids}")
    if result.connected:
        print("   Graph is connected")
    else:
        print("   Graph is not connected")
    print(f"   Diameter: {result.diameter}")


def _print_shortest_path(
    src: Vertex, dst: Vertex, path: Sequence[Vertex], distance: float
) -> None:
    name = GRAPHML_CONFIG.vertex_name
    path_str = " --> ".join(name(v) for v in path)
    print(f"Source: {name(src)} | Destination: {name(dst)}")
    print(f"\tPath: {path_str}")
    print(f"\tDistance: {distance}")


def _print_betweenness(v: Vertex, value: float) -> None:
    print(f"{GRAPHML_CONFIG.vertex_name(v)} betweenness: {value}")


def _fail(message: str, exc: Exception) -> NoReturn:
    logger.error(f"{message}: {type(exc).__name__}: {exc}")
    print(f"❌ ERROR: {message}")
    print(f"  {type(exc).__name__}: {exc}")
    sys.exit(1)


def _run_all(
    graph: WeightedGraph, nthreads: int, executor: str, output: Optional[Path]
) -> None:
    """Full all-pairs shortest paths and betweenness run."""
    try:
        result = analyze(graph, nthreads=nthreads, executor=executor)
    except Exception as e:
        _fail("Failed to analyze graph", e)

    _print_graph_summary(result)

    for src in graph.vertices():
        paths = result.paths.paths_from(src)
        distances = result.paths.distances_from(src)
        for dst, path in paths.items():
            _print_shortest_path(src, dst, path, distances[dst])

    for v in graph.vertices():
        _print_betweenness(v, result.betweenness.measure(v))

    if output is not None:
        logger.info(f"Writing results to {output}")
        try:
            write_graphml(output, graph, result.betweenness, result.paths)
        except OSError as e:
            _fail(f"Failed to write results to {output}", e)
        print(f"✅ Results written to: {output}")


def _run_shortest(graph: WeightedGraph, src: str, dst: str) -> None:
    """Single-source Dijkstra from ``src`` and the path to ``dst``."""
    logger.info(f"Running Dijkstra on {src}")
    try:
        state = dijkstra(graph, src)
        path = state.path_to(dst)
        distance = state.distance_to(dst)
    except Exception as e:
        _fail(f"Failed to find a shortest path from {src} to {dst}", e)
    _print_shortest_path(src, dst, path, distance)


def _run_betweenness(
    graph: WeightedGraph, vertex: str, nthreads: int, executor: str
) -> None:
    """Betweenness of a single vertex, computed over all sources."""
    logger.info(f"Calculating betweenness measure for {vertex}")
    vertices = graph.vertices()
    multi = MultiSourceDijkstra(graph)
    try:
        if nthreads > 1:
            with create_executor(executor, nthreads) as pool:
                multi.gather(multi.compute_parallel(pool, nthreads, vertices))
                betweenness = BetweennessCentrality(graph, multi.states)
                betweenness.gather(betweenness.compute_parallel(pool, nthreads))
        else:
            multi.compute(vertices)
            betweenness = BetweennessCentrality(graph, multi.states)
            betweenness.compute()
        value = betweenness.measure(vertex)
    except Exception as e:
        _fail(f"Failed to compute betweenness of {vertex}", e)
    _print_betweenness(vertex, value)


def _run(
    path: Path,
    nthreads: int,
    executor: str,
    shortest: Optional[List[str]],
    betweenness: Optional[str],
    output: Optional[Path],
) -> None:
    start = perf_counter()
    try:
        graphs = read_graphml(path)
    except GraphFormatError as e:
        _fail(f"Failed to read graph from {path}", e)

    if not graphs:
        logger.warning(f"File {path} does not contain graph data")
        return

    graph = graphs[0]
    if len(graphs) > 1:
        logger.info(f"{path} holds {len(graphs)} graphs; using the first one")
    logger.info(
        f"Loaded {graph.edge_type.value} graph with {graph.vertex_count()} vertices"
        f" and {graph.edge_count()} edges"
    )

    if (shortest is None and betweenness is None) or output is not None:
        _run_all(graph, nthreads, executor, output)
    else:
        if shortest is not None:
            _run_shortest(graph, shortest[0], shortest[1])
        if betweenness is not None:
            _run_betweenness(graph, betweenness, nthreads, executor)

    logger.info(f"Completed in {_format_duration(perf_counter() - start)}")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``netpaths`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="netpaths",
        description="Compute shortest paths and betweenness centrality of a graph.",
    )
    parser.add_argument("input", type=Path, help="Path to a GraphML file")
    parser.add_argument(
        "--nthreads",
        "-n",
        type=int,
        default=ANALYSIS_CONFIG.default_nthreads,
        help="Number of workers; 1 runs sequentially (default: %(default)s)",
    )
    parser.add_argument(
        "--shortest",
        "-s",
        nargs=2,
        metavar=("SOURCE", "DESTINATION"),
        help="Print the shortest path between two vertices",
    )
    parser.add_argument(
        "--betweenness",
        "-b",
        metavar="VERTEX",
        help="Print the betweenness centrality of a vertex",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the graph with all results to this GraphML file",
    )
    parser.add_argument(
        "--executor",
        choices=EXECUTOR_KINDS,
        default=ANALYSIS_CONFIG.executor,
        help="Worker pool flavour (default: %(default)s)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress informational logs"
    )

    # Determine effective arguments (support both direct calls and module entrypoint)
    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    # Configure logging based on arguments
    if args.verbose:
        enable_debug_logging()
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        disable_debug_logging()

    _run(
        path=args.input,
        nthreads=args.nthreads,
        executor=args.executor,
        shortest=args.shortest,
        betweenness=args.betweenness,
        output=args.output,
    )


if __name__ == "__main__":
    main()
