"""Path and cost analysis."""

from microdot.analysis.paths import (
    CostCalculator,
    Path,
    find_cost,
    find_longest_path,
    find_shortest_path,
)

__all__ = [
    "CostCalculator",
    "Path",
    "find_cost",
    "find_longest_path",
    "find_shortest_path",
]
