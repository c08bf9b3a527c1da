"""Tabu Search configuration."""

from dataclasses import dataclass, asdict
from typing import Any, Dict

REMOVAL_SOURCES = ('candidates', 'incumbent')


@dataclass
class TabuConfig:
    """
    Parameters of a tabu search run on the QBF.

    Attributes:
        tenure: Tabu tenure; the tabu list holds 2 * tenure entries
        iterations: Consecutive non-improving checks before stopping
        time_limit: Wall-clock budget in seconds for the whole search
        percent: Fraction of the shuffled move list scanned per iteration.
            Values below 1.0 also enable adaptive sampling: the scanned
            fraction grows with the non-improvement ratio.
        first_improving: Stop scanning at the first admissible improving move
            (False = best-improving over the scanned prefix)
        removal_source: Where removal moves come from:
            'candidates' draws them from the insertion candidate list,
            'incumbent' from the elements currently selected
        seed: Seed of the search's random source (reset before local search)
        verbose: Print progress
    """
    # Tabu parameters
    tenure: int = 10
    iterations: int = 100000
    time_limit: float = 1800.0

    # Neighborhood controls
    percent: float = 1.0
    first_improving: bool = True
    removal_source: str = 'candidates'

    # Randomness
    seed: int = 0

    verbose: bool = False

    def validate(self) -> None:
        """Raises ValueError on an unusable configuration."""
        if self.tenure < 1:
            raise ValueError(f"tenure must be >= 1, got {self.tenure}")
        if self.iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {self.iterations}")
        if self.time_limit <= 0:
            raise ValueError(f"time_limit must be positive, got {self.time_limit}")
        if not 0.0 < self.percent <= 1.0:
            raise ValueError(f"percent must be in (0, 1], got {self.percent}")
        if self.removal_source not in REMOVAL_SOURCES:
            raise ValueError(
                f"removal_source must be one of {REMOVAL_SOURCES}, got {self.removal_source!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
