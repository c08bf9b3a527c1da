"""Tests for move generation, selection and commit."""

import random
from collections import deque

import pytest

from tsqbf.heuristics import (
    MoveExplorer, NULL_MOVE, PairedMove, QBFTabu, ScanPhase, ScanState,
    SearchState, StopCriterion, TabuConfig, adjacency_candidates,
)
from tsqbf.heuristics.neighborhoods import exchange_moves, insertion_moves, removal_moves
from tsqbf.model import Solution

from test_engine import LinearEvaluator


def make_state(weights, elements, tabu, best_cost=None, seed=0):
    evaluator = LinearEvaluator(weights)
    incumbent = Solution(elements)
    evaluator.evaluate(incumbent)
    best = incumbent.copy()
    if best_cost is not None:
        best.cost = best_cost
    return SearchState(
        evaluator=evaluator,
        rng=random.Random(seed),
        tabu_list=deque(tabu, maxlen=len(tabu)),
        incumbent_sol=incumbent,
        best_sol=best,
    )


def make_explorer(**overrides):
    params = dict(tenure=2, iterations=100, time_limit=60.0)
    params.update(overrides)
    config = TabuConfig(**params)
    stop = StopCriterion(config.iterations, config.time_limit)
    stop.start()
    return MoveExplorer(config, stop)


def test_paired_move_kinds():
    assert PairedMove.insertion(4).kind == 'insertion'
    assert PairedMove.removal(4).kind == 'removal'
    assert PairedMove.exchange(1, 4).kind == 'exchange'
    assert NULL_MOVE.is_null
    assert NULL_MOVE.kind == 'null'
    with pytest.raises(ValueError):
        PairedMove.exchange(1, None)
    with pytest.raises(ValueError):
        PairedMove.insertion(None)


def test_exchange_moves_skip_removed_element():
    moves = exchange_moves(3, [0, 1, 2, 4])
    assert moves == [PairedMove(c, 3) for c in [0, 1, 2, 4]]
    assert PairedMove(3, 3) not in exchange_moves(3, [0, 1, 2, 3, 4])
    assert len(exchange_moves(3, [0, 1, 2, 3, 4])) == 4


def test_adjacency_candidates():
    sol = Solution([3, 7])
    assert adjacency_candidates(10, sol) == [0, 1, 5, 9]
    assert adjacency_candidates(4, Solution()) == [0, 1, 2, 3]


def test_build_moves_counts_and_removal_quirk():
    """Incumbent {3, 7} on 10 variables."""
    problem = QBFTabu(TabuConfig(tenure=2))
    state = make_state([0.0] * 10, [3, 7], [None] * 4)

    moves = problem.explorer.build_moves(state, problem)

    insertions = [m for m in moves if m.kind == 'insertion']
    removals = [m for m in moves if m.kind == 'removal']
    exchanges = [m for m in moves if m.kind == 'exchange']

    assert insertions == insertion_moves([0, 1, 5, 9])
    # Removals are drawn from the candidate list, not from the incumbent
    assert removals == removal_moves([0, 1, 5, 9])
    assert sorted(m.cand_in for m in exchanges if m.cand_out == 3) == [0, 1, 2, 4, 5, 9]
    assert sorted(m.cand_in for m in exchanges if m.cand_out == 7) == [0, 1, 5, 6, 8, 9]
    assert len(moves) == 20


def test_build_moves_incumbent_removal_source():
    problem = QBFTabu(TabuConfig(tenure=2, removal_source='incumbent'))
    state = make_state([0.0] * 10, [3, 7], [None] * 4)

    moves = problem.explorer.build_moves(state, problem)

    removals = [m for m in moves if m.kind == 'removal']
    assert removals == removal_moves([3, 7])


def test_sample_length_fixed_and_adaptive():
    explorer = make_explorer(percent=0.5)
    assert explorer.sample_length(10) == 5

    # Stagnation above the sampled fraction widens the sample
    explorer.stop.total = 80
    assert explorer.sample_length(10) == 8

    full = make_explorer(percent=1.0)
    full.stop.total = 80
    assert full.sample_length(10) == 10


def test_scan_state_first_improving_exits_on_negative():
    scan = ScanState(first_improving=True)
    assert not scan.record(PairedMove.insertion(1), 2.0)
    assert scan.phase is ScanPhase.NO_IMPROVING
    assert scan.record(PairedMove.insertion(2), -1.0)
    assert scan.phase is ScanPhase.IMPROVING
    assert scan.best_move == PairedMove.insertion(2)


def test_scan_state_best_improving_keeps_minimum():
    scan = ScanState(first_improving=False)
    assert not scan.record(PairedMove.insertion(1), -1.0)
    assert not scan.record(PairedMove.insertion(2), -4.0)
    assert not scan.record(PairedMove.insertion(3), -2.0)
    assert scan.min_delta == -4.0
    assert scan.best_move == PairedMove.insertion(2)


def test_select_first_vs_best_improving():
    weights = [-1.0, 0.0, -5.0, 0.0, -2.0]
    moves = [PairedMove.insertion(e) for e in (0, 2, 4)]

    first = make_explorer(first_improving=True)
    state = make_state(weights, [], [None] * 4)
    chosen = first.select(state, list(moves))
    # The first admissible move in shuffled order is already improving
    shuffled = list(moves)
    random.Random(0).shuffle(shuffled)
    assert chosen == shuffled[0]

    best = make_explorer(first_improving=False)
    state = make_state(weights, [], [None] * 4)
    assert best.select(state, list(moves)) == PairedMove.insertion(2)


def test_select_scans_only_the_sampled_prefix():
    """percent=0.5 over 4 insertions: only the first two shuffled moves count."""
    weights = [0.0, 0.0, 0.0, -9.0]
    moves = [PairedMove.insertion(e) for e in range(4)]
    shuffled = list(moves)
    random.Random(0).shuffle(shuffled)

    explorer = make_explorer(percent=0.5, first_improving=False)
    length = explorer.sample_length(len(moves))
    assert length == 2
    # With seed 0 the strongly improving move lands outside the prefix
    assert PairedMove.insertion(3) not in shuffled[:length]

    state = make_state(weights, [], [None] * 4)
    chosen = explorer.select(state, list(moves))

    assert chosen in shuffled[:length]
    assert chosen != PairedMove.insertion(3)

    # Stagnation widens the sample to the whole list
    wide = make_explorer(percent=0.5, first_improving=False)
    wide.stop.total = wide.stop.iterations
    assert wide.sample_length(len(moves)) == 4

    state = make_state(weights, [], [None] * 4)
    assert wide.select(state, list(moves)) == PairedMove.insertion(3)


def test_tabu_move_is_skipped_without_aspiration():
    explorer = make_explorer(first_improving=False)
    # Element 1 is tabu; inserting it would not beat the best cost
    state = make_state([0.0, -1.0, 3.0], [], [1, None, None, None], best_cost=-10.0)

    chosen = explorer.select(state, [PairedMove.insertion(1), PairedMove.insertion(2)])

    assert chosen == PairedMove.insertion(2)


def test_aspiration_overrides_tabu_on_both_sides():
    explorer = make_explorer(first_improving=False)
    # Incumbent {0} costs 0; exchanging 0 for 3 gives -5 < best (0)
    state = make_state([0.0, 0.0, 0.0, -5.0], [0], [3, 0, None, None])

    move = PairedMove.exchange(3, 0)
    chosen = explorer.select(state, [move])

    assert chosen == move


def test_null_move_commit_leaves_incumbent_unchanged():
    explorer = make_explorer(first_improving=False)
    state = make_state([0.0, 1.0, 2.0], [0], [1, 2, 7, 8])
    before = list(state.incumbent_sol.elements)

    # Both candidates are tabu and neither beats the best cost
    chosen = explorer.select(state, [PairedMove.insertion(1), PairedMove.insertion(2)])
    assert chosen == NULL_MOVE

    explorer.commit(state, chosen)

    assert state.incumbent_sol.elements == before
    assert list(state.tabu_list) == [7, 8, None, None]


def test_commit_exchange_updates_solution_and_tabu_list():
    explorer = make_explorer()
    state = make_state([1.0, 0.0, 0.0, -2.0], [0], [None] * 4)

    explorer.commit(state, PairedMove.exchange(3, 0))

    assert state.incumbent_sol.elements == [3]
    assert state.incumbent_sol.cost == -2.0
    assert list(state.tabu_list) == [None, None, 0, 3]


def test_commit_removal_of_unselected_candidate_only_marks_tabu():
    explorer = make_explorer()
    state = make_state([1.0, 0.0, 0.0, 0.0], [0], [None] * 4)

    explorer.commit(state, PairedMove.removal(3))

    assert state.incumbent_sol.elements == [0]
    assert list(state.tabu_list) == [None, None, 3, None]
