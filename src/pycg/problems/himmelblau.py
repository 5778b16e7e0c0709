"""
Himmelblau's function.

f(x, y) = (x^2 + y - 11)^2 + (x + y^2 - 7)^2

Four global minima with f = 0.
"""
from typing import List

import numpy as np
from numpy.typing import NDArray

from .problem import Problem


class Himmelblau(Problem):
    """Himmelblau's function (two variables, four minima)."""

    def __init__(self, dimension: int = 2) -> None:
        if dimension != 2:
            raise ValueError(f"Himmelblau is two-dimensional, got dimension={dimension}")

    @property
    def dimension(self) -> int:
        return 2

    def value(self, x: NDArray[np.floating]) -> float:
        return float((x[0] ** 2 + x[1] - 11.0) ** 2 + (x[0] + x[1] ** 2 - 7.0) ** 2)

    def gradient(self, x: NDArray[np.floating]) -> NDArray[np.floating]:
        a = x[0] ** 2 + x[1] - 11.0
        b = x[0] + x[1] ** 2 - 7.0
        return np.array([4.0 * x[0] * a + 2.0 * b, 2.0 * a + 4.0 * x[1] * b])

    @property
    def initial_x(self) -> NDArray[np.floating]:
        return np.array([2.0, 2.0])

    @property
    def solutions(self) -> List[NDArray[np.floating]]:
        return [
            np.array([3.0, 2.0]),
            np.array([-2.805118, 3.131312]),
            np.array([-3.779310, -3.283186]),
            np.array([3.584428, -1.848126]),
        ]

    def get_name(self) -> str:
        return "Himmelblau"
