"""Neighborhood moves for local search: insertion, removal and exchange."""

import math
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List, Optional

from ..model.evaluator import Evaluator
from ..model.solution import Solution
from .config import TabuConfig
from .moves import NULL_MOVE, PairedMove
from .stopping import StopCriterion

if TYPE_CHECKING:
    from .engine import SearchState, TabuProblem


def insertion_moves(candidates: Iterable[int]) -> List[PairedMove]:
    return [PairedMove.insertion(c) for c in candidates]


def removal_moves(candidates: Iterable[int]) -> List[PairedMove]:
    return [PairedMove.removal(c) for c in candidates]


def exchange_moves(cand_out: int, candidates: Iterable[int]) -> List[PairedMove]:
    """One exchange per candidate, skipping the element being removed."""
    return [PairedMove.exchange(c, cand_out) for c in candidates if c != cand_out]


class ScanPhase(Enum):
    NO_IMPROVING = 0
    IMPROVING = 1


class ScanState:
    """
    Tracks the best admissible move seen while scanning the move list.

    The phase moves to IMPROVING as soon as the recorded minimum
    delta-cost is negative. Under first-improving selection that
    transition ends the scan; under best-improving the scan always runs
    to the end of the sampled prefix.
    """

    def __init__(self, first_improving: bool):
        self.first_improving = first_improving
        self.phase = ScanPhase.NO_IMPROVING
        self.min_delta = math.inf
        self.best_move: PairedMove = NULL_MOVE

    def record(self, move: PairedMove, delta: float) -> bool:
        """
        Offer an admissible move. Returns True if scanning should stop.
        """
        if delta < self.min_delta:
            self.min_delta = delta
            self.best_move = move

        if self.phase is ScanPhase.NO_IMPROVING and self.min_delta < 0.0:
            self.phase = ScanPhase.IMPROVING

        return self.first_improving and self.phase is ScanPhase.IMPROVING


class MoveExplorer:
    """
    Generates, samples, evaluates and commits one local-search move.

    Args:
        config: Neighborhood controls (percent, first_improving, removal_source)
        stop: Stop criterion, read for the non-improvement ratio that
            drives adaptive sampling
    """

    def __init__(self, config: TabuConfig, stop: StopCriterion):
        self.percent = config.percent
        self.first_improving = config.first_improving
        self.removal_source = config.removal_source
        self.stop = stop

    def build_moves(self, state: 'SearchState', problem: 'TabuProblem') -> List[PairedMove]:
        """
        Full move list for the incumbent.

        - Insertions: one per element of CL
        - Removals: one per element of CL ('candidates' source) or of the
          incumbent ('incumbent' source)
        - Exchanges: for each incumbent element, CL is rebuilt against the
          incumbent without it, and one exchange is created per CL member

        `state.cl` is left holding the last exchange rebuild.
        """
        incumbent = state.incumbent_sol

        problem.update_cl(state, incumbent)
        moves = insertion_moves(state.cl)

        if self.removal_source == 'incumbent':
            moves.extend(removal_moves(incumbent))
        else:
            moves.extend(removal_moves(state.cl))

        for cand_out in incumbent:
            reduced = incumbent.copy()
            reduced.remove(cand_out)
            problem.update_cl(state, reduced)
            moves.extend(exchange_moves(cand_out, state.cl))

        return moves

    def sample_length(self, n_moves: int) -> int:
        """
        Number of moves to scan from the shuffled list.

        Normally `percent * n_moves`. In adaptive mode (percent < 1.0) the
        fraction follows the non-improvement ratio once it exceeds percent.
        """
        length = int(n_moves * self.percent)

        ratio = self.stop.no_improvement_ratio()
        if self.percent < 1.0 and ratio > self.percent:
            length = int(n_moves * ratio)

        return min(length, n_moves)

    @staticmethod
    def move_cost(evaluator: Evaluator, move: PairedMove, solution: Solution) -> float:
        if move.cand_in is not None and move.cand_out is not None:
            return evaluator.evaluate_exchange_cost(move.cand_in, move.cand_out, solution)
        if move.cand_in is not None:
            return evaluator.evaluate_insertion_cost(move.cand_in, solution)
        return evaluator.evaluate_removal_cost(move.cand_out, solution)

    @staticmethod
    def is_tabu(element: Optional[int], tabu_list) -> bool:
        return element is not None and element in tabu_list

    def is_admissible(self, move: PairedMove, delta: float, state: 'SearchState') -> bool:
        """Not tabu on either side, or good enough to beat the best (aspiration)."""
        tabu_list = state.tabu_list
        if not self.is_tabu(move.cand_in, tabu_list) and not self.is_tabu(move.cand_out, tabu_list):
            return True
        return state.incumbent_sol.cost + delta < state.best_sol.cost

    def select(self, state: 'SearchState', moves: List[PairedMove]) -> PairedMove:
        """
        Shuffle the move list, scan the sampled prefix and return the
        chosen move (NULL_MOVE if nothing in the prefix is admissible).
        """
        state.rng.shuffle(moves)
        length = self.sample_length(len(moves))

        scan = ScanState(self.first_improving)
        for move in moves[:length]:
            delta = self.move_cost(state.evaluator, move, state.incumbent_sol)
            if not self.is_admissible(move, delta, state):
                continue
            if scan.record(move, delta):
                break

        return scan.best_move

    def commit(self, state: 'SearchState', move: PairedMove) -> None:
        """
        Rotate the tabu list and apply the move.

        Two entries leave the front of the tabu list; the removed element
        (or None) and then the inserted element (or None) join the back.
        A removal drawn from the candidate list may name an element that is
        not selected: the solution is left as is but the element still
        becomes tabu.
        """
        incumbent = state.incumbent_sol
        tabu_list = state.tabu_list

        tabu_list.popleft()
        if move.cand_out is not None and move.cand_out in incumbent:
            incumbent.remove(move.cand_out)
        tabu_list.append(move.cand_out)

        tabu_list.popleft()
        if move.cand_in is not None:
            incumbent.add(move.cand_in)
        tabu_list.append(move.cand_in)

        state.evaluator.evaluate(incumbent)

    def neighborhood_move(self, state: 'SearchState', problem: 'TabuProblem') -> PairedMove:
        moves = self.build_moves(state, problem)
        move = self.select(state, moves)
        self.commit(state, move)
        return move
