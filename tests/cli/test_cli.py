import logging
from pathlib import Path

import pytest

from netpaths import cli
from netpaths.io import read_graphml
from netpaths.logging import set_global_log_level

LINE_GRAPH = """<?xml version="1.0" encoding="UTF-8"?>
<graphml xmlns="http://graphml.graphdrawing.org/xmlns">
  <key id="v_id" for="node" attr.name="id" attr.type="string"/>
  <key id="e_id" for="edge" attr.name="id" attr.type="string"/>
  <key id="e_weight" for="edge" attr.name="weight" attr.type="double"/>
  <graph id="G" edgedefault="undirected">
    <node id="n1"><data key="v_id">1</data></node>
    <node id="n2"><data key="v_id">2</data></node>
    <node id="n3"><data key="v_id">3</data></node>
    <node id="n4"><data key="v_id">4</data></node>
    <edge source="n1" target="n2">
      <data key="e_id">0</data><data key="e_weight">1.0</data>
    </edge>
    <edge source="n2" target="n3">
      <data key="e_id">1</data><data key="e_weight">1.0</data>
    </edge>
    <edge source="n3" target="n4">
      <data key="e_id">2</data><data key="e_weight">1.0</data>
    </edge>
  </graph>
</graphml>
"""


@pytest.fixture(autouse=True)
def _restore_log_level():
    yield
    set_global_log_level(logging.INFO)


@pytest.fixture
def graph_file(tmp_path: Path) -> Path:
    path = tmp_path / "line.graphml"
    path.write_text(LINE_GRAPH, encoding="utf-8")
    return path


def test_full_run(graph_file, capsys):
    cli.main([str(graph_file), "-n", "1"])
    out = capsys.readouterr().out

    assert "Number of vertices: 4" in out
    assert "Number of edges: 3" in out
    assert "Vertices ids: n1, n2, n3, n4" in out
    assert "Edges ids: 0, 1, 2" in out
    assert "Graph is connected" in out
    assert "Diameter: 3.0" in out
    assert "Source: n1 | Destination: n4" in out
    assert "\tPath: n1 --> n2 --> n3 --> n4" in out
    assert "\tDistance: 3.0" in out
    assert "n2 betweenness: 2.0" in out
    assert "n1 betweenness: 0.0" in out


def test_full_run_with_thread_pool(graph_file, capsys):
    cli.main([str(graph_file), "-n", "3", "--executor", "thread"])
    out = capsys.readouterr().out
    assert "n3 betweenness: 2.0" in out
    assert out.count("Source: ") == 16


def test_shortest_path(graph_file, capsys):
    cli.main([str(graph_file), "-s", "4", "2"])
    out = capsys.readouterr().out

    assert "Source: n4 | Destination: n2" in out
    assert "Path: n4 --> n3 --> n2" in out
    assert "Distance: 2.0" in out
    assert "betweenness" not in out
    assert "Number of vertices" not in out


def test_betweenness_of_one_vertex(graph_file, capsys):
    cli.main([str(graph_file), "-b", "3", "-n", "1"])
    out = capsys.readouterr().out
    assert "n3 betweenness: 2.0" in out
    assert "Source: " not in out


def test_betweenness_with_thread_pool(graph_file, capsys):
    cli.main([str(graph_file), "-b", "2", "-n", "2", "--executor", "thread"])
    assert "n2 betweenness: 2.0" in capsys.readouterr().out


def test_shortest_and_betweenness(graph_file, capsys):
    cli.main([str(graph_file), "-s", "1", "3", "-b", "1", "-n", "1"])
    out = capsys.readouterr().out
    assert "Path: n1 --> n2 --> n3" in out
    assert "n1 betweenness: 0.0" in out


def test_output_forces_full_run(graph_file, tmp_path, capsys):
    out_path = tmp_path / "result.graphml"
    cli.main([str(graph_file), "-s", "1", "2", "-n", "1", "-o", str(out_path)])
    out = capsys.readouterr().out

    assert "Number of vertices: 4" in out
    assert f"Results written to: {out_path}" in out
    g = read_graphml(out_path)[0]
    assert g.vertices() == ["1", "2", "3", "4"]


def test_unknown_vertex_exits_with_error(graph_file, capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main([str(graph_file), "-s", "1", "9"])
    assert exc_info.value.code == 1
    out = capsys.readouterr().out
    assert "ERROR: Failed to find a shortest path from 1 to 9" in out
    assert "Path:" not in out

    with pytest.raises(SystemExit) as exc_info:
        cli.main([str(graph_file), "-b", "9", "-n", "1"])
    assert exc_info.value.code == 1
    assert "betweenness:" not in capsys.readouterr().out


def test_missing_file_exits_with_error(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        cli.main([str(tmp_path / "missing.graphml")])
    assert exc_info.value.code == 1


def test_unwritable_output_exits_with_error(graph_file, tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        cli.main([str(graph_file), "-n", "1", "-o", str(tmp_path / "no" / "o.xml")])
    assert exc_info.value.code == 1


def test_file_without_graph(tmp_path, capsys, caplog):
    path = tmp_path / "empty.graphml"
    path.write_text("<graphml/>", encoding="utf-8")

    cli.main([str(path)])

    assert "Source: " not in capsys.readouterr().out
    assert "does not contain graph data" in caplog.text


def test_no_arguments_prints_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 0
    assert "usage: netpaths" in capsys.readouterr().out


def test_verbose_and_quiet_set_log_level(graph_file):
    cli.main([str(graph_file), "-s", "1", "2", "--verbose"])
    assert logging.getLogger("netpaths").level == logging.DEBUG

    cli.main([str(graph_file), "-s", "1", "2", "--quiet"])
    assert logging.getLogger("netpaths").level == logging.WARNING

    cli.main([str(graph_file), "-s", "1", "2"])
    assert logging.getLogger("netpaths").level == logging.INFO
