"""Command implementations for the ``microdot`` console script."""

from microdot.cli.analyze import cost_command, paths_command, search_command
from microdot.cli.edit import apply_command
from microdot.cli.export import export_command

__all__ = [
    "apply_command",
    "cost_command",
    "export_command",
    "paths_command",
    "search_command",
]
