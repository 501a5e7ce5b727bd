"""Public graph API surface.

Persistence lives in ``microdot.graph.storage`` and is imported from there
directly, since it depends on the exporters.
"""

from microdot.graph.backend import IndexedGraph
from microdot.graph.commands import (
    CommandResult,
    DeleteNode,
    ExpandEdge,
    GraphCommand,
    InsertAfterNode,
    InsertBeforeNode,
    InsertNode,
    LinkEdge,
    RenameNode,
    Search,
    SelectNode,
    SetDirection,
    UnlinkEdge,
)
from microdot.graph.labels import (
    HashTag,
    NodeAnnotations,
    Variable,
    extract_hashtags,
    extract_variables,
    parse_label,
)
from microdot.graph.manager import Edge, Graph, Node, ValueExtractor
from microdot.graph.parser import COMMAND_SYNTAX, parse_command, parse_commands
from microdot.graph.values import Duration, Value, ValueKind

__all__ = [
    "COMMAND_SYNTAX",
    "CommandResult",
    "DeleteNode",
    "Duration",
    "Edge",
    "ExpandEdge",
    "Graph",
    "GraphCommand",
    "HashTag",
    "IndexedGraph",
    "InsertAfterNode",
    "InsertBeforeNode",
    "InsertNode",
    "LinkEdge",
    "Node",
    "NodeAnnotations",
    "RenameNode",
    "Search",
    "SelectNode",
    "SetDirection",
    "UnlinkEdge",
    "Value",
    "ValueExtractor",
    "ValueKind",
    "Variable",
    "extract_hashtags",
    "extract_variables",
    "parse_command",
    "parse_commands",
    "parse_label",
]
