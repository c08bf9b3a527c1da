"""Objective function interface consumed by the search engine."""

from abc import ABC, abstractmethod

from .solution import Solution


class Evaluator(ABC):
    """
    Contract every objective function must satisfy.

    Delta-cost methods never mutate the solution; `evaluate` performs a
    full re-evaluation and stores the result in `solution.cost`.
    """

    @abstractmethod
    def domain_size(self) -> int:
        """Number of decision variables (elements are 0..domain_size-1)."""

    @abstractmethod
    def evaluate(self, solution: Solution) -> float:
        """Full evaluation; also updates `solution.cost`."""

    @abstractmethod
    def evaluate_insertion_cost(self, element: int, solution: Solution) -> float:
        """Cost variation of adding `element` to `solution`."""

    @abstractmethod
    def evaluate_removal_cost(self, element: int, solution: Solution) -> float:
        """Cost variation of removing `element` from `solution`."""

    @abstractmethod
    def evaluate_exchange_cost(self, elem_in: int, elem_out: int, solution: Solution) -> float:
        """Cost variation of removing `elem_out` and adding `elem_in`."""
