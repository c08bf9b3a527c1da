"""Search result data structure."""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List


@dataclass
class SearchResult:
    """
    Outcome of one tabu search run.

    Attributes:
        best_cost: Cost of the best solution (minimization sense)
        best_elements: Selected elements of the best solution, sorted
        runtime: Wall-clock seconds spent in `solve()`
        iterations: Number of local-search iterations performed
        constructive_cost: Cost of the solution returned by the constructive phase
        cost_log: Best cost after each local-search iteration
        config: Parameters the run was launched with
    """
    best_cost: float
    best_elements: List[int]
    runtime: float
    iterations: int
    constructive_cost: float
    cost_log: List[float] = field(default_factory=list)
    config: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
