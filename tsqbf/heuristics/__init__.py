"""Heuristic algorithms: Tabu Search engine, QBF specialization and move operators"""

from .config import TabuConfig
from .moves import PairedMove, NULL_MOVE
from .stopping import StopCriterion
from .engine import SearchEngine, SearchState, TabuProblem
from .construction import grasp_constructor
from .neighborhoods import MoveExplorer, ScanState, ScanPhase
from .tabu import QBFTabu, tabu_search, adjacency_candidates

__all__ = [
    'TabuConfig', 'PairedMove', 'NULL_MOVE', 'StopCriterion',
    'SearchEngine', 'SearchState', 'TabuProblem', 'grasp_constructor',
    'MoveExplorer', 'ScanState', 'ScanPhase',
    'QBFTabu', 'tabu_search', 'adjacency_candidates'
]
