"""Shortest-path and centrality algorithms.

Modules:
    types: the per-source ``TraversalState`` record.
    dijkstra: single-source Dijkstra with path counting.
    multi_source: sequential and pool-partitioned multi-source runs.
    paths: path reconstruction and distance queries.
    betweenness: Brandes' betweenness centrality.
    connectivity: depth-first traversal and connectivity check.
"""
