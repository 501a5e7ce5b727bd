"""Graph command value objects and command results.

Each command describes one edit to a Graph; ``Graph.apply_command`` turns it
into a call on the matching mutator. Commands are what a textual command
language or a REPL produces, and they carry a one-line help description.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class CommandResult:
    """Human-readable outcome of a graph command.

    ``ok`` is False when the command referenced something that does not
    exist; in that case the graph was not modified.
    """

    message: str
    ok: bool = True

    @classmethod
    def failure(cls, message: str) -> CommandResult:
        return cls(message, ok=False)

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class InsertNode:
    label: str

    def help_text(self) -> str:
        return f'Insert a node labelled "{self.label}" into the graph'


@dataclass(frozen=True)
class DeleteNode:
    id: str
    keep_edges: bool = False

    def help_text(self) -> str:
        if self.keep_edges:
            return f"Delete the <{self.id}> node, reconnecting its neighbours"
        return f"Delete the <{self.id}> node"


@dataclass(frozen=True)
class LinkEdge:
    from_id: str
    to_id: str

    def help_text(self) -> str:
        return f"Link the <{self.from_id}> node to the <{self.to_id}> node"


@dataclass(frozen=True)
class UnlinkEdge:
    id: str

    def help_text(self) -> str:
        return f"Unlink the <{self.id}> edge"


@dataclass(frozen=True)
class RenameNode:
    id: str
    label: str

    def help_text(self) -> str:
        return f'Rename the <{self.id}> node to "{self.label}"'


@dataclass(frozen=True)
class SelectNode:
    id: str

    def help_text(self) -> str:
        return f"Select the <{self.id}> node and highlight it"


@dataclass(frozen=True)
class InsertAfterNode:
    id: str
    label: str

    def help_text(self) -> str:
        return f'Insert a node labelled "{self.label}" after the node with id "{self.id}"'


@dataclass(frozen=True)
class InsertBeforeNode:
    id: str
    label: str

    def help_text(self) -> str:
        return f'Insert a node labelled "{self.label}" before the node with id "{self.id}"'


@dataclass(frozen=True)
class ExpandEdge:
    id: str
    label: str

    def help_text(self) -> str:
        return f'Expand the <{self.id}> edge with a new node labelled "{self.label}"'


@dataclass(frozen=True)
class SetDirection:
    is_left_right: bool

    def help_text(self) -> str:
        orientation = "left to right" if self.is_left_right else "top to bottom"
        return f"Change the orientation of the graph to {orientation}"


@dataclass(frozen=True)
class Search:
    fragment: str

    def help_text(self) -> str:
        return f"Search for <{self.fragment}> and highlight matching nodes"


GraphCommand = Union[
    InsertNode,
    DeleteNode,
    LinkEdge,
    UnlinkEdge,
    RenameNode,
    SelectNode,
    InsertAfterNode,
    InsertBeforeNode,
    ExpandEdge,
    SetDirection,
    Search,
]

__all__ = [
    "CommandResult",
    "DeleteNode",
    "ExpandEdge",
    "GraphCommand",
    "InsertAfterNode",
    "InsertBeforeNode",
    "InsertNode",
    "LinkEdge",
    "RenameNode",
    "Search",
    "SelectNode",
    "SetDirection",
    "UnlinkEdge",
]
