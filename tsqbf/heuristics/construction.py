"""Greedy randomized constructive heuristic."""

import math
from typing import TYPE_CHECKING

from ..model.solution import Solution

if TYPE_CHECKING:
    from .engine import SearchState, TabuProblem


def constructive_stop_criteria(state: 'SearchState', previous_cost: float) -> bool:
    """
    Stop once the candidate list is empty or the last insertion did not
    strictly improve the incumbent.
    """
    if not state.cl:
        return True
    return not previous_cost > state.incumbent_sol.cost


def grasp_constructor(state: 'SearchState', problem: 'TabuProblem') -> Solution:
    """
    Build a feasible solution by repeated randomized insertion.

    At each step:
    1. Evaluate the insertion delta-cost of every candidate in CL and
       record the lowest and highest values
    2. Build the RCL from every candidate that ties the lowest OR the
       highest delta-cost
    3. Insert one RCL element chosen uniformly at random, re-evaluate
       the incumbent and rebuild CL against it

    The loop ends when CL is empty or when an insertion fails to lower
    the incumbent cost. An empty initial CL returns the empty solution.

    Args:
        state: Search state; `cl`, `rcl` and `incumbent_sol` are replaced
        problem: Problem hooks providing CL construction and empty solutions

    Returns:
        The constructed solution (also stored as `state.incumbent_sol`)
    """
    evaluator = state.evaluator

    state.cl = problem.make_cl(evaluator)
    state.rcl = problem.make_rcl()
    state.incumbent_sol = problem.create_empty_sol()
    incumbent = state.incumbent_sol

    # +inf guarantees the first round runs whenever CL is non-empty
    previous_cost = math.inf

    while not constructive_stop_criteria(state, previous_cost):
        max_cost = -math.inf
        min_cost = math.inf
        previous_cost = incumbent.cost

        deltas = [evaluator.evaluate_insertion_cost(c, incumbent) for c in state.cl]
        for delta in deltas:
            if delta < min_cost:
                min_cost = delta
            if delta > max_cost:
                max_cost = delta

        for c, delta in zip(state.cl, deltas):
            if delta <= min_cost or delta >= max_cost:
                state.rcl.append(c)

        in_cand = state.rcl[state.rng.randrange(len(state.rcl))]
        incumbent.add(in_cand)
        evaluator.evaluate(incumbent)
        state.rcl.clear()

        problem.update_cl(state, incumbent)

    return incumbent
