"""Tabu Search for the QBF with adjacency constraints."""

import time
from collections import deque
from typing import Deque, List, Optional

from ..model.evaluator import Evaluator
from ..model.result import SearchResult
from ..model.solution import Solution
from .config import TabuConfig
from .engine import SearchEngine, SearchState, TabuProblem
from .moves import PairedMove
from .neighborhoods import MoveExplorer
from .stopping import StopCriterion


def adjacency_candidates(domain_size: int, solution: Solution) -> List[int]:
    """Elements i such that none of i-1, i, i+1 is selected."""
    return [
        i for i in range(domain_size)
        if not (i in solution or (i - 1) in solution or (i + 1) in solution)
    ]


class QBFTabu(TabuProblem):
    """
    QBF specialization of the tabu search hooks.

    Feasibility: two consecutive variables may not both be set, so an
    element is a candidate only while neither it nor its neighbors are
    selected. The all-zero assignment costs 0.

    Args:
        config: Search parameters (validated here)
    """

    def __init__(self, config: Optional[TabuConfig] = None):
        self.config = config or TabuConfig()
        self.config.validate()
        self.stop = StopCriterion(self.config.iterations, self.config.time_limit)
        self.explorer = MoveExplorer(self.config, self.stop)

    def make_cl(self, evaluator: Evaluator) -> List[int]:
        return list(range(evaluator.domain_size()))

    def make_rcl(self) -> List[int]:
        return []

    def make_tl(self, tenure: int) -> Deque[Optional[int]]:
        return deque([None] * (2 * tenure), maxlen=2 * tenure)

    def update_cl(self, state: SearchState, solution: Solution) -> None:
        state.cl = adjacency_candidates(state.evaluator.domain_size(), solution)

    def create_empty_sol(self) -> Solution:
        return Solution(cost=0.0)

    def neighborhood_move(self, state: SearchState) -> PairedMove:
        return self.explorer.neighborhood_move(state, self)

    def solve_stop_criteria(self, best_cost: float) -> bool:
        return self.stop(best_cost)

    def sort(self, solution: Solution) -> None:
        solution.sort()

    def reset(self) -> None:
        self.stop.start()


def tabu_search(evaluator: Evaluator, config: Optional[TabuConfig] = None) -> SearchResult:
    """
    Run one tabu search on `evaluator` and collect the outcome.

    Args:
        evaluator: Objective function to minimize (e.g. QBFInverse)
        config: Search parameters (defaults to TabuConfig())

    Returns:
        SearchResult with the best cost, sorted best elements and run statistics
    """
    config = config or TabuConfig()
    problem = QBFTabu(config)
    engine = SearchEngine(
        problem,
        evaluator,
        tenure=config.tenure,
        seed=config.seed,
        verbose=config.verbose,
    )

    start_time = time.perf_counter()
    best_sol = engine.solve()
    runtime = time.perf_counter() - start_time

    best = best_sol.copy()
    problem.sort(best)

    return SearchResult(
        best_cost=best.cost,
        best_elements=list(best.elements),
        runtime=runtime,
        iterations=engine.iterations,
        constructive_cost=engine.constructive_cost,
        cost_log=list(engine.cost_log),
        config=config.to_dict(),
    )
