"""
Convex quadratic test problem.

f(x) = 1/2 x^T A x - b^T x with A symmetric positive definite. With the
default A = 2I and b = 0 this is f(x) = x^T x.
"""
from typing import List, Optional

import numpy as np
from numpy.typing import NDArray

from .problem import Problem


class Quadratic(Problem):
    """
    Quadratic f(x) = 1/2 x^T A x - b^T x.

    The unique minimizer solves A x = b.

    Attributes:
        A: (n, n) SPD matrix.
        b: (n,) linear term.

    Example:
        >>> from pycg.problems import Quadratic
        >>> problem = Quadratic(dimension=3)   # f(x) = x . x
        >>> problem.value(np.ones(3))
        3.0
    """

    def __init__(
        self,
        A: Optional[NDArray[np.floating]] = None,
        b: Optional[NDArray[np.floating]] = None,
        dimension: int = 2,
    ) -> None:
        """
        Initialize quadratic problem.

        Args:
            A: SPD matrix. Defaults to 2 * I.
            b: Linear term. Defaults to zeros.
            dimension: Size used when A is not given.

        Raises:
            ValueError: If shapes are inconsistent or dimension < 1.
        """
        if A is None:
            if dimension < 1:
                raise ValueError(f"dimension must be >= 1, got {dimension}")
            A = 2.0 * np.eye(dimension)
        A = np.array(A, dtype=float)
        if A.ndim != 2 or A.shape[0] != A.shape[1]:
            raise ValueError(f"A must be square, got shape {A.shape}")
        n = A.shape[0]
        b = np.zeros(n) if b is None else np.array(b, dtype=float)
        if b.shape != (n,):
            raise ValueError(f"b must have shape ({n},), got {b.shape}")
        self.A = A
        self.b = b

    @property
    def dimension(self) -> int:
        return self.A.shape[0]

    def value(self, x: NDArray[np.floating]) -> float:
        return float(0.5 * x @ (self.A @ x) - self.b @ x)

    def gradient(self, x: NDArray[np.floating]) -> NDArray[np.floating]:
        return self.A @ x - self.b

    @property
    def initial_x(self) -> NDArray[np.floating]:
        return np.arange(1.0, self.dimension + 1.0)

    @property
    def solutions(self) -> List[NDArray[np.floating]]:
        return [np.linalg.solve(self.A, self.b)]

    def get_name(self) -> str:
        return f"Quadratic(n={self.dimension})"
