"""Model components: solutions, evaluators, QBF instances and I/O"""

from .solution import Solution
from .evaluator import Evaluator
from .instance import QBFInstance
from .qbf import QBF, QBFInverse
from .result import SearchResult
from .instance_generator import generate_instance, save_instance, load_instance, generate_instance_set

__all__ = ['Solution', 'Evaluator', 'QBFInstance', 'QBF', 'QBFInverse', 'SearchResult',
           'generate_instance', 'save_instance', 'load_instance', 'generate_instance_set']
