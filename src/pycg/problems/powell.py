"""
Extended Powell singular function.

For each block of four variables:
    (x1 + 10 x2)^2 + 5 (x3 - x4)^2 + (x2 - 2 x3)^4 + 10 (x1 - x4)^4

The Hessian is singular at the minimizer x = 0, so convergence is only
linear; a useful check that the driver stops on the f criterion.
"""
from typing import List

import numpy as np
from numpy.typing import NDArray

from .problem import Problem


class Powell(Problem):
    """Extended Powell singular function (dimension a multiple of 4)."""

    def __init__(self, dimension: int = 4) -> None:
        if dimension < 4 or dimension % 4 != 0:
            raise ValueError(f"dimension must be a positive multiple of 4, got {dimension}")
        self._dimension = dimension

    @property
    def dimension(self) -> int:
        return self._dimension

    def _blocks(self, x: NDArray[np.floating]):
        x = x.reshape(-1, 4)
        return x[:, 0], x[:, 1], x[:, 2], x[:, 3]

    def value(self, x: NDArray[np.floating]) -> float:
        x1, x2, x3, x4 = self._blocks(x)
        return float(np.sum(
            (x1 + 10.0 * x2) ** 2
            + 5.0 * (x3 - x4) ** 2
            + (x2 - 2.0 * x3) ** 4
            + 10.0 * (x1 - x4) ** 4
        ))

    def gradient(self, x: NDArray[np.floating]) -> NDArray[np.floating]:
        x1, x2, x3, x4 = self._blocks(x)
        t1 = x1 + 10.0 * x2
        t2 = x3 - x4
        t3 = x2 - 2.0 * x3
        t4 = x1 - x4
        g = np.empty((x1.size, 4))
        g[:, 0] = 2.0 * t1 + 40.0 * t4 ** 3
        g[:, 1] = 20.0 * t1 + 4.0 * t3 ** 3
        g[:, 2] = 10.0 * t2 - 8.0 * t3 ** 3
        g[:, 3] = -10.0 * t2 - 40.0 * t4 ** 3
        return g.ravel()

    @property
    def initial_x(self) -> NDArray[np.floating]:
        return np.tile([3.0, -1.0, 0.0, 1.0], self._dimension // 4)

    @property
    def solutions(self) -> List[NDArray[np.floating]]:
        return [np.zeros(self._dimension)]

    def get_name(self) -> str:
        return f"Powell(n={self._dimension})"
