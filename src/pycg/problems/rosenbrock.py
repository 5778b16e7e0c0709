"""
Extended Rosenbrock function.

f(x) = sum_{i} 100 (x_{i+1} - x_i^2)^2 + (1 - x_i)^2

A narrow curved valley; the classic stress test for line searches and
conjugate gradient restarts. Minimum f = 0 at x = (1, ..., 1).
"""
from typing import List

import numpy as np
from numpy.typing import NDArray

from .problem import Problem


class Rosenbrock(Problem):
    """
    Extended Rosenbrock problem in n >= 2 variables.

    Example:
        >>> from pycg.problems import Rosenbrock
        >>> problem = Rosenbrock()
        >>> problem.value(np.ones(2))
        0.0
    """

    def __init__(self, dimension: int = 2) -> None:
        if dimension < 2:
            raise ValueError(f"dimension must be >= 2, got {dimension}")
        self._dimension = dimension

    @property
    def dimension(self) -> int:
        return self._dimension

    def value(self, x: NDArray[np.floating]) -> float:
        return float(
            np.sum(100.0 * (x[1:] - x[:-1] ** 2) ** 2 + (1.0 - x[:-1]) ** 2)
        )

    def gradient(self, x: NDArray[np.floating]) -> NDArray[np.floating]:
        g = np.zeros_like(x, dtype=float)
        t = x[1:] - x[:-1] ** 2
        g[:-1] += -400.0 * x[:-1] * t - 2.0 * (1.0 - x[:-1])
        g[1:] += 200.0 * t
        return g

    @property
    def initial_x(self) -> NDArray[np.floating]:
        x0 = np.ones(self._dimension)
        x0[::2] = -1.2
        return x0

    @property
    def solutions(self) -> List[NDArray[np.floating]]:
        return [np.ones(self._dimension)]

    def get_name(self) -> str:
        return f"Rosenbrock(n={self._dimension})"
