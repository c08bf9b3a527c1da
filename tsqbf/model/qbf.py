"""Quadratic Binary Function objective: f(x) = x^T A x."""

import numpy as np

from .evaluator import Evaluator
from .instance import QBFInstance
from .solution import Solution


class QBF(Evaluator):
    """
    Quadratic binary function over x in {0, 1}^n.

    The coefficient matrix is upper triangular, as read from instance
    files, but every formula below uses A[i, j] + A[j, i] so a full
    matrix works just as well.

    Delta costs are computed from the solution's membership only; the
    variable vector is rebuilt from the solution on every call, so the
    evaluator holds no per-solution state.
    """

    # Multiplier applied to every value handed to the search
    sign = 1.0

    def __init__(self, instance: QBFInstance):
        instance.validate()
        self.size = instance.size
        self.A = np.asarray(instance.A, dtype=float)
        # Symmetric part used by every contribution: A[i, j] + A[j, i]
        self._sym = self.A + self.A.T

    def domain_size(self) -> int:
        return self.size

    def _variables(self, solution: Solution) -> np.ndarray:
        x = np.zeros(self.size, dtype=float)
        if len(solution) > 0:
            x[solution.elements] = 1.0
        return x

    def _contribution(self, i: int, x: np.ndarray) -> float:
        """sum_{j != i} x_j (A[i,j] + A[j,i]) + A[i,i]"""
        total = float(np.dot(x, self._sym[i])) - x[i] * self._sym[i, i]
        return total + self.A[i, i]

    def _insertion(self, i: int, x: np.ndarray) -> float:
        if x[i] == 1:
            return 0.0
        return self._contribution(i, x)

    def _removal(self, i: int, x: np.ndarray) -> float:
        if x[i] == 0:
            return 0.0
        return -self._contribution(i, x)

    def _exchange(self, elem_in: int, elem_out: int, x: np.ndarray) -> float:
        if elem_in == elem_out:
            return 0.0
        if x[elem_in] == 1:
            return self._removal(elem_out, x)
        if x[elem_out] == 0:
            return self._insertion(elem_in, x)

        total = self._contribution(elem_in, x) - self._contribution(elem_out, x)
        total -= self._sym[elem_in, elem_out]
        return float(total)

    def evaluate_qbf(self, solution: Solution) -> float:
        """Value of f(x) for the solution, never negated."""
        x = self._variables(solution)
        return float(x @ self.A @ x)

    def evaluate(self, solution: Solution) -> float:
        solution.cost = self.sign * self.evaluate_qbf(solution)
        return solution.cost

    def evaluate_insertion_cost(self, element: int, solution: Solution) -> float:
        return self.sign * self._insertion(element, self._variables(solution))

    def evaluate_removal_cost(self, element: int, solution: Solution) -> float:
        return self.sign * self._removal(element, self._variables(solution))

    def evaluate_exchange_cost(self, elem_in: int, elem_out: int, solution: Solution) -> float:
        return self.sign * self._exchange(elem_in, elem_out, self._variables(solution))


class QBFInverse(QBF):
    """
    Negated QBF, so that maximizing f(x) becomes a minimization.

    The search engine always minimizes; use this evaluator to look for
    the maximum of f itself.
    """

    sign = -1.0
