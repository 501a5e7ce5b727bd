"""Analysis commands: critical path, total cost and label search.

Results go to stdout through a rich Console; diagnostics go to the log.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from microdot.analysis.paths import (
    CostCalculator,
    find_cost,
    find_longest_path,
    find_shortest_path,
)
from microdot.cli.common import config_from_args, load_existing_graph
from microdot.errors import MicrodotError

logger = logging.getLogger("microdot.cli.analyze")


def _variable_name(args, default: str) -> str:
    name: Optional[str] = getattr(args, "variable", None)
    if not name:
        return default
    return name[1:] if name.startswith("$") else name


def paths_command(args, console: Optional[Console] = None) -> int:
    """Report the critical (or cheapest) path through a graph.

    Args:
        args: Parsed command-line arguments containing:
            - graph: Graph file to read
            - variable: Cost variable name (optional)
            - shortest: Select the cheapest path instead of the dearest

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    console = console or Console()
    try:
        config = config_from_args(args)
        graph = load_existing_graph(args, config)
        if graph is None:
            return 1
        variable = _variable_name(args, config.cost_variable)
        shortest = getattr(args, "shortest", False)

        logger.info(
            "Performing %s path analysis using variable %s",
            "shortest" if shortest else "critical",
            variable,
        )
        calculator = CostCalculator(variable)
        finder = find_shortest_path if shortest else find_longest_path
        path = finder(graph, calculator)

        if path.is_empty:
            console.print("No path found")
            return 0

        table = Table(title="Shortest path" if shortest else "Critical path")
        table.add_column("Step", justify="right", style="cyan", no_wrap=True)
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column(escape(variable), justify="right")
        table.add_column("Label", style="green")

        for i, node_id in enumerate(path.ids, start=1):
            value = graph.find_node_variable_value(node_id, variable)
            label = graph.find_node_label(node_id) or ""
            table.add_row(
                f"Step {i}",
                node_id,
                escape(str(value)) if value is not None else "",
                escape(label),
            )

        console.print(table)
        if path.cost is not None:
            console.print(f"Total cost: {escape(str(path.cost))}", highlight=False)
        console.print(f"Total length: {len(path)}", highlight=False)
        return 0

    except (MicrodotError, OSError) as exc:
        logger.error("Path analysis failed: %s", exc)
        return 1


def cost_command(args, console: Optional[Console] = None) -> int:
    """Print the sum of a variable over every node of a graph."""
    console = console or Console()
    try:
        config = config_from_args(args)
        graph = load_existing_graph(args, config)
        if graph is None:
            return 1
        variable = _variable_name(args, config.cost_variable)

        logger.info("Performing cost analysis using variable %s", variable)
        cost = find_cost(graph, CostCalculator(variable))
        console.print(f"Total cost: {escape(str(cost))}", highlight=False)
        return 0

    except (MicrodotError, OSError) as exc:
        logger.error("Cost analysis failed: %s", exc)
        return 1


def search_command(args, console: Optional[Console] = None) -> int:
    """Print the nodes whose label contains a fragment."""
    console = console or Console()
    try:
        config = config_from_args(args)
        graph = load_existing_graph(args, config)
        if graph is None:
            return 1
        result = graph.highlight_search_results(args.fragment)
        console.print(str(result), markup=False, highlight=False, soft_wrap=True, end="")
        return 0

    except (MicrodotError, OSError) as exc:
        logger.error("Search failed: %s", exc)
        return 1
