"""
Objective/gradient evaluator contract.

The driver needs three operations on the objective: the value alone,
the gradient written into a caller-owned buffer, and both at once.
DifferentiableFunction bundles them, filling in the combined call when
the user only provides the separate pieces.
"""
from typing import Callable, Optional

import numpy as np

ValueFunction = Callable[[np.ndarray], float]
GradientInPlace = Callable[[np.ndarray, np.ndarray], None]
ValueAndGradient = Callable[[np.ndarray, np.ndarray], float]


class DifferentiableFunction:
    """
    Objective with gradient, evaluated into pre-allocated buffers.

    Attributes:
        f: x -> objective value.
        g: (x, out) -> None, writes the gradient at x into out.
        fg: (x, out) -> value, writes the gradient and returns the value.

    Example:
        >>> def f(x):
        ...     return float(x @ x)
        >>> def g(x, out):
        ...     out[:] = 2.0 * x
        >>> df = DifferentiableFunction(f, g)
        >>> gr = np.empty(3)
        >>> df.fg(np.ones(3), gr)
        3.0
    """

    def __init__(
        self,
        f: ValueFunction,
        g: GradientInPlace,
        fg: Optional[ValueAndGradient] = None,
    ) -> None:
        """
        Initialize evaluator.

        Args:
            f: Objective function.
            g: In-place gradient function.
            fg: Optional combined evaluation. Defaults to f followed by g.
        """
        if not callable(f) or not callable(g):
            raise TypeError("f and g must be callable")
        if fg is not None and not callable(fg):
            raise TypeError("fg must be callable")
        self.f = f
        self.g = g
        self.fg = fg if fg is not None else self._default_fg

    def _default_fg(self, x: np.ndarray, out: np.ndarray) -> float:
        self.g(x, out)
        return self.f(x)

    @classmethod
    def from_gradient(
        cls,
        f: ValueFunction,
        grad: Callable[[np.ndarray], np.ndarray],
    ) -> "DifferentiableFunction":
        """
        Adapt a gradient that returns a fresh array.

        Args:
            f: Objective function.
            grad: x -> gradient array (same shape as x).

        Returns:
            DifferentiableFunction copying grad(x) into the output buffer.
        """

        def g(x: np.ndarray, out: np.ndarray) -> None:
            np.copyto(out, np.asarray(grad(x), dtype=float).reshape(out.shape))

        return cls(f, g)
