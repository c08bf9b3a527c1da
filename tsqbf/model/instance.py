"""Instance data structure for the quadratic binary function problem."""

from dataclasses import dataclass
import numpy as np


@dataclass
class QBFInstance:
    """
    Coefficients of a quadratic binary function f(x) = x^T A x.

    Attributes:
        size: Number of binary variables (n)

        A: Coefficient matrix, shape (n, n)
            A[i, j] = interaction between variables i and j
            Instance files only store the upper triangle (j >= i);
            the lower triangle is left at zero.

        name: Optional label (usually the file stem, e.g. 'qbf060')
    """
    size: int
    A: np.ndarray  # shape (n, n)
    name: str = ''

    def validate(self) -> None:
        """
        Validate shapes and values.
        Raises ValueError if validation fails.
        """
        if self.size < 0:
            raise ValueError(f"size must be non-negative, got {self.size}")
        if self.A.shape != (self.size, self.size):
            raise ValueError(f"A shape {self.A.shape} != ({self.size}, {self.size})")
        if not np.all(np.isfinite(self.A)):
            raise ValueError("A must contain only finite coefficients")
