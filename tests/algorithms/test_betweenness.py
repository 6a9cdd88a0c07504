from concurrent.futures import ThreadPoolExecutor

import networkx as nx
import pytest

from netpaths.algorithms.betweenness import (
    BetweennessCentrality,
    accumulate,
    source_dependencies,
)
from netpaths.algorithms.dijkstra import dijkstra
from netpaths.algorithms.multi_source import MultiSourceDijkstra
from netpaths.exceptions import InvalidArgument
from netpaths.graph import WeightedGraph


def _betweenness(graph):
    multi = MultiSourceDijkstra(graph)
    multi.compute(graph.vertices())
    bc = BetweennessCentrality(graph, multi.states)
    bc.compute()
    return bc


def _reference(graph):
    if graph.is_directed():
        ref = nx.DiGraph(graph.to_networkx())
    else:
        ref = nx.Graph(graph.to_networkx())
    return nx.betweenness_centrality(ref, normalized=False, weight="weight")


class TestBetweennessCentrality:
    def test_undirected_line(self, line4):
        bc = _betweenness(line4)
        assert bc.measures() == {"A": 0.0, "B": 2.0, "C": 2.0, "D": 0.0}

    def test_isolated_vertex_is_zero(self, with_isolated):
        bc = _betweenness(with_isolated)
        assert bc.measure("E") == 0.0
        assert bc.measure("B") == 1.0

    def test_diamond_splits_between_routes(self, diamond):
        bc = _betweenness(diamond)
        assert bc.measures() == {"A": 0.0, "B": 0.5, "C": 0.5, "D": 0.0}

    def test_parallel_edges(self, parallel_edges):
        # Both A->C shortest paths run through B
        bc = _betweenness(parallel_edges)
        assert bc.measure("B") == pytest.approx(1.0)
        assert bc.measure("A") == 0.0

    @pytest.mark.parametrize("fixture", ["mesh", "directed_mesh", "with_isolated"])
    def test_matches_networkx(self, request, fixture):
        graph = request.getfixturevalue(fixture)
        bc = _betweenness(graph)
        assert bc.measures() == pytest.approx(_reference(graph))

    @pytest.mark.parametrize("n", [2, 3, 4])
    def test_parallel_matches_sequential(self, mesh, n):
        sequential = _betweenness(mesh)

        multi = MultiSourceDijkstra(mesh)
        with ThreadPoolExecutor(max_workers=n) as pool:
            multi.gather(multi.compute_parallel(pool, n, mesh.vertices()))
            bc = BetweennessCentrality(mesh, multi.states)
            tasks = bc.compute_parallel(pool, n)
            assert len(tasks) == n
            bc.gather(tasks)

        assert bc.measures() == pytest.approx(sequential.measures())

    def test_missing_states_contribute_nothing(self, line4, caplog):
        bc = BetweennessCentrality(line4, {})
        bc.compute()

        assert bc.measures() == {"A": 0.0, "B": 0.0, "C": 0.0, "D": 0.0}
        assert "No traversal state" in caplog.text

    def test_recompute_resets_scores(self, line4):
        bc = _betweenness(line4)
        bc.compute()
        assert bc.measure("B") == 2.0

    def test_measure_errors(self, line4):
        bc = _betweenness(line4)
        with pytest.raises(InvalidArgument):
            bc.measure(None)
        with pytest.raises(InvalidArgument):
            bc.measure("Z")

    def test_constructor_errors(self, line4):
        with pytest.raises(InvalidArgument):
            BetweennessCentrality(None, {})
        with pytest.raises(InvalidArgument):
            BetweennessCentrality(line4, None)

    def test_parallel_invalid_arguments(self, line4):
        bc = BetweennessCentrality(line4, {})
        with pytest.raises(InvalidArgument):
            bc.compute_parallel(None, 2)
        with ThreadPoolExecutor(max_workers=1) as pool:
            with pytest.raises(InvalidArgument):
                bc.compute_parallel(pool, 1)


def test_source_dependencies(diamond):
    deps = source_dependencies(dijkstra(diamond, "A"))
    # D is reached twice, once through each of B and C
    assert deps["B"] == 0.5
    assert deps["C"] == 0.5
    assert deps["D"] == 0.0


def test_accumulate_skips_source_entry(line4):
    states = {"A": dijkstra(line4, "A")}
    scores = accumulate({}, states, ["A"])
    assert scores == {"B": 2.0, "C": 1.0}


def test_dependency_split_across_three_routes():
    #        ┌──►B──┐
    #   A ───┼──►C──┼──► D ──► F
    #        └──►E──┘
    g = WeightedGraph()
    for v in "ABCDEF":
        g.add_vertex(v)
    for mid in "BCE":
        g.add_edge("A", mid, weight=1)
        g.add_edge(mid, "D", weight=1)
    g.add_edge("D", "F", weight=1)

    state = dijkstra(g, "A")
    assert state.path_count["F"] == 3

    deps = source_dependencies(state)
    assert deps["D"] == 1.0
    # Each route carries a third of D's own pair plus its share of F
    for mid in "BCE":
        assert deps[mid] == (1 / 3) * 2.0
