"""Generic Tabu Search driver (minimization).

The driver knows nothing about the problem being solved: every
problem-specific decision (candidate lists, tabu memory layout, the
neighborhood move, the stop rule) goes through a `TabuProblem`
implementation handed to the engine.
"""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Deque, List, Optional

from ..model.evaluator import Evaluator
from ..model.solution import Solution
from .construction import grasp_constructor
from .moves import PairedMove


@dataclass
class SearchState:
    """
    Mutable state of one search, owned by a single engine.

    Attributes:
        evaluator: Objective function being minimized
        rng: Random source shared by construction and local search
        cl: Candidate List of elements that may enter the incumbent
        rcl: Restricted Candidate List (construction only)
        tabu_list: Recently inserted/removed elements (None = no-op slot)
        incumbent_sol: Solution currently being modified
        best_sol: Best solution found so far (never aliases incumbent_sol)
    """
    evaluator: Evaluator
    rng: random.Random
    cl: List[int] = field(default_factory=list)
    rcl: List[int] = field(default_factory=list)
    tabu_list: Optional[Deque[Optional[int]]] = None
    incumbent_sol: Optional[Solution] = None
    best_sol: Optional[Solution] = None


class TabuProblem(ABC):
    """Problem-specific hooks the engine calls during a search."""

    @abstractmethod
    def make_cl(self, evaluator: Evaluator) -> List[int]:
        """Initial Candidate List."""

    @abstractmethod
    def make_rcl(self) -> List[int]:
        """Initial (empty) Restricted Candidate List."""

    @abstractmethod
    def make_tl(self, tenure: int) -> Deque[Optional[int]]:
        """Tabu List for the local-search phase."""

    @abstractmethod
    def update_cl(self, state: SearchState, solution: Solution) -> None:
        """Rebuild `state.cl` from scratch against `solution`."""

    @abstractmethod
    def create_empty_sol(self) -> Solution:
        """A solution with no element selected and its exact cost."""

    @abstractmethod
    def neighborhood_move(self, state: SearchState) -> PairedMove:
        """Apply exactly one move to `state.incumbent_sol` and return it."""

    @abstractmethod
    def solve_stop_criteria(self, best_cost: float) -> bool:
        """True once the local search should halt."""

    @abstractmethod
    def sort(self, solution: Solution) -> None:
        """Put the solution's elements in canonical order (for reporting)."""

    def reset(self) -> None:
        """Clear per-run state before a new search."""


class SearchEngine:
    """
    Tabu Search mainframe: greedy randomized construction followed by a
    tabu-governed local search.

    Args:
        problem: Problem-specific hooks
        evaluator: Objective function being minimized
        tenure: Tabu tenure (>= 1)
        seed: Seed of the engine's random source. It is applied at
            construction and again right before the local search, so the
            local search is reproducible independently of construction.
        verbose: Print progress
        record_moves: Keep every committed move in `moves` (off by default;
            the list grows by one entry per iteration)

    `cost_log` always holds the best cost after each iteration, one float
    per iteration, like the convergence log of the other heuristics.
    """

    def __init__(
        self,
        problem: TabuProblem,
        evaluator: Evaluator,
        tenure: int,
        seed: int = 0,
        verbose: bool = False,
        record_moves: bool = False,
    ):
        if tenure < 1:
            raise ValueError(f"tenure must be >= 1, got {tenure}")

        self.problem = problem
        self.tenure = tenure
        self.seed = seed
        self.verbose = verbose
        self.record_moves = record_moves

        self.state = SearchState(evaluator=evaluator, rng=random.Random(seed))

        self.cost_log: List[float] = []
        self.moves: List[PairedMove] = []
        self.iterations = 0
        self.constructive_cost: Optional[float] = None

    @property
    def best_sol(self) -> Optional[Solution]:
        return self.state.best_sol

    @property
    def incumbent_sol(self) -> Optional[Solution]:
        return self.state.incumbent_sol

    def constructive_heuristic(self) -> Solution:
        """Build a feasible starting solution (see `grasp_constructor`)."""
        return grasp_constructor(self.state, self.problem)

    def solve(self) -> Solution:
        """
        Run construction then local search until the stop criterion fires.

        Returns:
            The best solution found (an independent copy of the incumbent
            at the moment it improved).
        """
        state = self.state
        state.rng.seed(self.seed)
        self.problem.reset()
        self.cost_log = []
        self.moves = []
        self.iterations = 0

        state.best_sol = self.problem.create_empty_sol()
        self.constructive_heuristic()
        self.constructive_cost = state.incumbent_sol.cost
        state.tabu_list = self.problem.make_tl(self.tenure)
        state.rng.seed(self.seed)

        if self.verbose:
            print(f"Constructive phase: cost={self.constructive_cost:.2f}, "
                  f"size={len(state.incumbent_sol)}")

        while not self.problem.solve_stop_criteria(state.best_sol.cost):
            move = self.problem.neighborhood_move(state)
            if self.record_moves:
                self.moves.append(move)
            self.iterations += 1

            if state.incumbent_sol.cost < state.best_sol.cost:
                state.best_sol = state.incumbent_sol.copy()
                if self.verbose:
                    print(f"(Iter. {self.iterations}) New best solution: "
                          f"cost={state.best_sol.cost:.2f}")

            self.cost_log.append(state.best_sol.cost)

        if self.verbose:
            print(f"Local search stopped after {self.iterations} iterations: "
                  f"best_cost={state.best_sol.cost:.2f}")

        return state.best_sol
