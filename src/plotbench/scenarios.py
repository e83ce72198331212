"""Benchmark scenarios.

A scenario names one kind of plot that both stacks draw from the same data.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class Scenario:
    name: str
    description: str
    sizes: Tuple[int, ...]  # Default problem sizes for scaling studies
    has_stat: bool = False  # Declarative spec applies a non-identity stat


SCENARIOS: Dict[str, Scenario] = {
    s.name: s
    for s in (
        Scenario("points", "Scatter of n points", (100, 1_000, 10_000, 100_000)),
        Scenario("lines", "Ten random-walk paths with n vertices in total", (100, 1_000, 10_000, 100_000)),
        Scenario("polygons", "n rectangles (bars)", (10, 100, 1_000, 10_000)),
        Scenario(
            "composite",
            "Two facets of points coloured by group with per-group mean lines",
            (100, 1_000, 10_000, 100_000),
            has_stat=True,
        ),
        Scenario("histogram", "30-bin histogram of n samples", (100, 1_000, 10_000, 100_000), has_stat=True),
    )
}


def scenario_names() -> List[str]:
    return list(SCENARIOS)


def get_scenario(name: str) -> Scenario:
    try:
        return SCENARIOS[name]
    except KeyError:
        raise ValueError(f"Unknown scenario: {name}. Available: {scenario_names()}") from None
