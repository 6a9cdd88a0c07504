"""Exception hierarchy for graph storage and path analysis.

Every error derives from :class:`GraphError`. The concrete classes also derive
from the closest built-in type so callers that already catch ``ValueError`` or
``KeyError`` keep working.
"""


class GraphError(Exception):
    """Base class for netpaths errors."""


class InvalidArgument(GraphError, ValueError):
    """A required parameter is missing or out of range."""


class InvalidVertex(InvalidArgument, KeyError):
    """The vertex does not exist in the graph."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead
        return str(self.args[0]) if self.args else ""


class DuplicateVertex(InvalidArgument):
    """The vertex already exists in the graph."""


class DuplicateEdge(InvalidArgument):
    """An edge with the same key already exists in the graph."""


class EdgeNotFound(GraphError, KeyError):
    """The edge does not exist in the graph."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class PathNotFound(GraphError, LookupError):
    """No path, or no computed state, exists for the requested vertices."""


class GraphFormatError(GraphError, OSError):
    """The input document could not be read or parsed."""
