"""Configuration classes for netpaths components."""

from dataclasses import dataclass


@dataclass
class AnalysisConfig:
    """Configuration for shortest-path and betweenness runs."""

    # Worker count used by the CLI when -n/--nthreads is not given
    default_nthreads: int = 4

    # Pool flavour: "process" or "thread"
    executor: str = "process"


@dataclass
class GraphMLConfig:
    """Naming and namespace settings for GraphML export."""

    namespace: str = "http://graphml.graphdrawing.org/xmlns"
    xsi_namespace: str = "http://www.w3.org/2001/XMLSchema-instance"
    schema_location: str = (
        "http://graphml.graphdrawing.org/xmlns "
        "http://graphml.graphdrawing.org/xmlns/1.0/graphml.xsd"
    )

    # Node element ids are "<prefix><v_id>"
    vertex_prefix: str = "n"
    path_separator: str = "-"
    shortest_paths_desc: str = "All the shortest paths with this vertex as source"

    def vertex_name(self, vertex: object) -> str:
        """Return the element id used for ``vertex`` in the document."""
        return f"{self.vertex_prefix}{vertex}"


# Global configuration instances
ANALYSIS_CONFIG = AnalysisConfig()
GRAPHML_CONFIG = GraphMLConfig()
