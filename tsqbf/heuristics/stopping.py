"""Stop criterion for the local-search phase (iteration and time budgets)."""

import time
from typing import Optional


class StopCriterion:
    """
    Non-improvement counter plus wall-clock budget.

    Each call compares the best cost with `flag_cost`. A strict
    improvement lowers the flag and resets the counter; anything else
    counts as a non-improving iteration. The search halts once the
    counter reaches `iterations` or `time_limit` seconds have elapsed
    since `start()`.

    `flag_cost` starts at 0.0: for the QBF the empty solution costs 0,
    so only solutions strictly below it count as progress.
    """

    def __init__(self, iterations: int, time_limit: float, flag_cost: float = 0.0):
        self.iterations = iterations
        self.time_limit = time_limit
        self.initial_flag_cost = flag_cost
        self.flag_cost = flag_cost
        self.total = 0
        self.start_time: Optional[float] = None

    def start(self) -> None:
        self.flag_cost = self.initial_flag_cost
        self.total = 0
        self.start_time = time.perf_counter()

    def elapsed(self) -> float:
        if self.start_time is None:
            return 0.0
        return time.perf_counter() - self.start_time

    def no_improvement_ratio(self) -> float:
        """total / iterations, or 0.0 for a non-positive budget."""
        if self.iterations <= 0:
            return 0.0
        return self.total / self.iterations

    def __call__(self, best_cost: float) -> bool:
        if self.start_time is None:
            self.start()

        if best_cost < self.flag_cost:
            self.flag_cost = best_cost
            self.total = 0
        else:
            self.total += 1

        return self.total >= self.iterations or self.elapsed() >= self.time_limit
