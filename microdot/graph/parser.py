"""Terse textual command language for graph edits.

One command per line, e.g. ``i Write the docs``, ``l n0 n1`` or ``exp e0
Review``. Ids are identifier-shaped; labels run to the end of the line.
The grammar is parsed with a shared Lark LALR parser whose transformer
builds the command value objects directly.
"""

import logging
from typing import Iterable, List

from lark import Lark, Transformer, v_args
from lark.exceptions import LarkError

from microdot.errors import CommandParseError
from microdot.graph.commands import (
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

logger = logging.getLogger("microdot.graph.parser")

COMMAND_GRAMMAR = r"""
?start: insert
      | delete
      | delete_keep
      | select
      | link
      | unlink
      | rename
      | after
      | before
      | expand
      | left_right
      | top_bottom
      | search

insert: "i" _SEP LABEL
delete: "d" _SEP ID
delete_keep: "dk" _SEP ID
select: "sel" _SEP ID
link: "l" _SEP ID _SEP ID
unlink: "u" _SEP ID
rename: "r" _SEP ID _SEP LABEL
after: "aft" _SEP ID _SEP LABEL
before: "bef" _SEP ID _SEP LABEL
expand: "exp" _SEP ID _SEP LABEL
left_right: "lr"
top_bottom: "tb"
search: ("search" | "s") _SEP LABEL
      | "/" LABEL

ID: /[A-Za-z_][A-Za-z0-9_]*/
LABEL: /[^\r\n]+/
_SEP: /[ \t]+/
"""

# Usage lines for help output, in grammar order.
COMMAND_SYNTAX = [
    ("i <label>", "insert a node"),
    ("d <node>", "delete a node and its edges"),
    ("dk <node>", "delete a node, linking its predecessors to its successors"),
    ("sel <node>", "select a node"),
    ("l <from> <to>", "link two nodes"),
    ("u <edge>", "unlink an edge"),
    ("r <node> <label>", "rename a node"),
    ("aft <node> <label>", "insert a node after another"),
    ("bef <node> <label>", "insert a node before another"),
    ("exp <edge> <label>", "expand an edge with a new node"),
    ("lr | tb", "lay the graph out left-right or top-bottom"),
    ("search <text> | s <text> | /<text>", "highlight matching nodes"),
]


@v_args(inline=True)
class _CommandBuilder(Transformer):
    """Turns each grammar rule into its command value object."""

    def insert(self, label):
        return InsertNode(str(label))

    def delete(self, node_id):
        return DeleteNode(str(node_id))

    def delete_keep(self, node_id):
        return DeleteNode(str(node_id), keep_edges=True)

    def select(self, node_id):
        return SelectNode(str(node_id))

    def link(self, from_id, to_id):
        return LinkEdge(str(from_id), str(to_id))

    def unlink(self, edge_id):
        return UnlinkEdge(str(edge_id))

    def rename(self, node_id, label):
        return RenameNode(str(node_id), str(label))

    def after(self, node_id, label):
        return InsertAfterNode(str(node_id), str(label))

    def before(self, node_id, label):
        return InsertBeforeNode(str(node_id), str(label))

    def expand(self, edge_id, label):
        return ExpandEdge(str(edge_id), str(label))

    def left_right(self):
        return SetDirection(True)

    def top_bottom(self):
        return SetDirection(False)

    def search(self, fragment):
        return Search(str(fragment).strip())


_PARSER = Lark(
    COMMAND_GRAMMAR,
    parser="lalr",
    lexer="contextual",
    transformer=_CommandBuilder(),
)


def parse_command(line: str) -> GraphCommand:
    """Parse one command line.

    Surrounding whitespace is ignored.

    Args:
        line: Command text such as ``r n0 New label``.

    Returns:
        GraphCommand: The parsed command.

    Raises:
        CommandParseError: If the line is not a valid command.
    """
    text = line.strip()
    try:
        command = _PARSER.parse(text)
    except LarkError as e:
        logger.debug("Lark parsing failed for %r: %s", text, e)
        raise CommandParseError(f'could not parse command: "{text}"') from e
    logger.debug("Parsed %r as %r", text, command)
    return command


def parse_commands(lines: Iterable[str]) -> List[GraphCommand]:
    """Parse several command lines, failing on the first bad one.

    Raises:
        CommandParseError: If any line is not a valid command.
    """
    return [parse_command(line) for line in lines]
