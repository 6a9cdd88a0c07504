"""GraphML input and result export."""

from netpaths.io.graphml import read_graphml, write_graphml

__all__ = ["read_graphml", "write_graphml"]
