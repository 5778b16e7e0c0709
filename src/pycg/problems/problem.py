"""
Abstract base class for test problems.

A Problem bundles an objective, its analytic gradient, a standard
starting point and the known minimizers. Problems are used by the
examples, the test suite and the command line interface.
"""
from abc import ABC, abstractmethod
from typing import List

import numpy as np
from numpy.typing import NDArray

from pycg.core.function import DifferentiableFunction


class Problem(ABC):
    """
    Abstract base for unconstrained test problems.

    Example:
        >>> class Sphere(Problem):
        ...     def value(self, x):
        ...         return float(np.sum(x**2))
        ...     def gradient(self, x):
        ...         return 2.0 * x
        ...     ...
    """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Number of variables."""
        pass

    @abstractmethod
    def value(self, x: NDArray[np.floating]) -> float:
        """Objective value at x."""
        pass

    @abstractmethod
    def gradient(self, x: NDArray[np.floating]) -> NDArray[np.floating]:
        """Gradient at x (new array)."""
        pass

    @property
    @abstractmethod
    def initial_x(self) -> NDArray[np.floating]:
        """Standard starting point (new array)."""
        pass

    @property
    def solutions(self) -> List[NDArray[np.floating]]:
        """Known minimizers (may be empty)."""
        return []

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this problem."""
        pass

    @property
    def name(self) -> str:
        return self.get_name()

    def value_and_gradient(
        self,
        x: NDArray[np.floating],
        out: NDArray[np.floating],
    ) -> float:
        """Write the gradient into out and return the value."""
        np.copyto(out, self.gradient(x))
        return self.value(x)

    def as_function(self) -> DifferentiableFunction:
        """Evaluator with in-place gradient for the minimizers."""

        def g(x: NDArray[np.floating], out: NDArray[np.floating]) -> None:
            np.copyto(out, self.gradient(x))

        return DifferentiableFunction(self.value, g, self.value_and_gradient)
