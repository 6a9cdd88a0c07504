"""GraphML reading and result export.

The dialect uses custom data keys:

- ``v_id`` (node): vertex identifier.
- ``e_id`` / ``e_weight`` (edge): edge identifier and weight.
- ``betweenness`` (node): computed centrality.
- ``shortest_paths`` (node): one ``<target v_id=...>`` element per reachable
  destination, holding ``<path>`` (vertex names joined by the path separator)
  and ``<distance>``.

The ``edgedefault`` attribute of ``<graph>`` selects directed or undirected
edges. Element names are matched without their namespace so documents with or
without the GraphML default namespace are both accepted.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Set, Tuple, Union

from netpaths.algorithms.betweenness import BetweennessCentrality
from netpaths.algorithms.paths import ShortestPaths
from netpaths.config import GRAPHML_CONFIG, GraphMLConfig
from netpaths.exceptions import GraphError, GraphFormatError
from netpaths.graph import EdgeType, Vertex, WeightedGraph
from netpaths.logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]

VERTEX_KEYS = frozenset({"v_id"})
EDGE_KEYS = frozenset({"e_id", "e_weight"})


def _local_name(tag: object) -> str:
    """Strip a ``{namespace}`` prefix from an element tag."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _descendants(elem: ET.Element, name: str) -> Iterator[ET.Element]:
    for child in elem.iter():
        if child is not elem and _local_name(child.tag) == name:
            yield child


def _parse_data(elem: ET.Element, keys: Set[str]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for data in _descendants(elem, "data"):
        key = data.get("key")
        if key in keys:
            values[key] = "".join(data.itertext()).strip()
    return values


def _parse_vertices(graph_elem: ET.Element) -> Dict[str, Vertex]:
    """Map each node element id to its ``v_id``; nodes without one are dropped."""
    vertices: Dict[str, Vertex] = {}
    for node in _descendants(graph_elem, "node"):
        node_id = node.get("id")
        if not node_id:
            logger.warning("Skipping node without an id attribute")
            continue
        data = _parse_data(node, VERTEX_KEYS)
        if len(data) == len(VERTEX_KEYS):
            vertices[node_id] = data["v_id"]
    return vertices


def _parse_edges(graph_elem: ET.Element) -> List[Tuple[str, float, str, str]]:
    """Return ``(e_id, weight, source_id, target_id)`` for complete edges."""
    edges = []
    for edge in _descendants(graph_elem, "edge"):
        data = _parse_data(edge, EDGE_KEYS)
        if len(data) != len(EDGE_KEYS):
            continue
        try:
            weight = float(data["e_weight"])
        except ValueError as exc:
            raise GraphFormatError(
                f"Invalid weight '{data['e_weight']}' for edge '{data['e_id']}'"
            ) from exc
        edges.append(
            (data["e_id"], weight, edge.get("source", ""), edge.get("target", ""))
        )
    return edges


def _build_graph(graph_elem: ET.Element) -> WeightedGraph:
    edge_type = EdgeType.UNDIRECTED
    if graph_elem.get("edgedefault") == "directed":
        edge_type = EdgeType.DIRECTED

    graph = WeightedGraph(edge_type)

    vertices = _parse_vertices(graph_elem)
    for vertex in vertices.values():
        try:
            graph.add_vertex(vertex)
        except GraphError as exc:
            logger.warning(f"Skipping vertex: {exc}")

    for e_id, weight, src_id, dst_id in _parse_edges(graph_elem):
        if src_id not in vertices or dst_id not in vertices:
            logger.debug(f"Skipping edge '{e_id}' with unknown endpoint")
            continue
        try:
            graph.add_edge(vertices[src_id], vertices[dst_id], key=e_id, weight=weight)
        except GraphError as exc:
            logger.warning(f"Skipping edge '{e_id}': {exc}")

    return graph


def read_graphml(path: PathLike) -> List[WeightedGraph]:
    """Read every ``<graph>`` of a GraphML document.

    Args:
        path: Location of the document.

    Returns:
        One graph per ``<graph>`` element, in document order. Empty if the
        document holds no graph.

    Raises:
        GraphFormatError: If the file cannot be read or parsed.
    """
    try:
        root = ET.parse(path).getroot()
    except (ET.ParseError, OSError) as exc:
        raise GraphFormatError(f"Could not parse graphml '{path}': {exc}") from exc

    graph_elems = [root] if _local_name(root.tag) == "graph" else []
    graph_elems.extend(_descendants(root, "graph"))
    graphs = [_build_graph(elem) for elem in graph_elems]
    logger.debug(f"Parsed {len(graphs)} graph(s) from {path}")
    return graphs


def _sub(
    parent: ET.Element, tag: str, text: Optional[str] = None, **attrs: str
) -> ET.Element:
    elem = ET.SubElement(parent, tag, attrs)
    if text is not None:
        elem.text = text
    return elem


def _add_key(
    root: ET.Element, key_id: str, domain: str, name: str, attr_type: str
) -> None:
    attrs = {"id": key_id, "for": domain, "attr.name": name, "attr.type": attr_type}
    _sub(root, "key", **attrs)


def _write_vertex(
    graph_elem: ET.Element,
    vertex: Vertex,
    betweenness: BetweennessCentrality,
    paths: ShortestPaths,
    config: GraphMLConfig,
) -> None:
    node = _sub(graph_elem, "node", id=config.vertex_name(vertex))
    _sub(node, "data", str(vertex), key="v_id")

    try:
        _sub(node, "data", str(betweenness.measure(vertex)), key="betweenness")
    except GraphError as exc:
        logger.warning(f"No betweenness written for '{vertex}': {exc}")

    paths_elem = _sub(node, "data", key="shortest_paths")
    try:
        vertex_paths = paths.paths_from(vertex)
        distances = paths.distances_from(vertex)
    except GraphError as exc:
        logger.warning(f"No shortest paths written for '{vertex}': {exc}")
        return

    for target, path in vertex_paths.items():
        target_elem = _sub(paths_elem, "target", v_id=config.vertex_name(target))
        path_str = config.path_separator.join(config.vertex_name(v) for v in path)
        _sub(target_elem, "path", path_str)
        _sub(target_elem, "distance", str(distances[target]))


def write_graphml(
    path: PathLike,
    graph: WeightedGraph,
    betweenness: BetweennessCentrality,
    paths: ShortestPaths,
    config: Optional[GraphMLConfig] = None,
) -> None:
    """Write ``graph`` with its betweenness and shortest paths to ``path``.

    Args:
        path: Output file.
        graph: Analysed graph.
        betweenness: Computed centrality.
        paths: Computed shortest paths.
        config: Naming and namespace settings; defaults to the global config.

    Raises:
        OSError: If the file cannot be written.
    """
    config = config or GRAPHML_CONFIG

    root = ET.Element(
        "graphml",
        {
            "xmlns": config.namespace,
            "xmlns:xsi": config.xsi_namespace,
            "xsi:schemaLocation": config.schema_location,
        },
    )
    _add_key(root, "v_id", "node", "id", "string")
    _add_key(root, "e_id", "edge", "id", "string")
    _add_key(root, "e_weight", "edge", "weight", "double")
    _add_key(root, "betweenness", "node", "betweenness", "double")
    sp_key = _sub(root, "key", **{"id": "shortest_paths", "for": "node"})
    _sub(sp_key, "desc", config.shortest_paths_desc)

    graph_elem = _sub(root, "graph", id="G", edgedefault=graph.edge_type.value)

    for vertex in graph.vertices():
        _write_vertex(graph_elem, vertex, betweenness, paths, config)

    for key in graph.edges():
        src, dst = graph.endpoints(key)
        edge = _sub(
            graph_elem,
            "edge",
            source=config.vertex_name(src),
            target=config.vertex_name(dst),
        )
        _sub(edge, "data", str(key), key="e_id")
        _sub(edge, "data", str(graph.weight(key)), key="e_weight")

    tree = ET.ElementTree(root)
    ET.indent(tree, space="\t")
    tree.write(path, encoding="UTF-8", xml_declaration=True)
    logger.debug(
        f"Wrote {graph.vertex_count()} vertices and {graph.edge_count()} edges to {path}"
    )
