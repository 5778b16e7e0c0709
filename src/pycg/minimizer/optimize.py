"""
Convenience entry point mirroring the keyword-driven optimize() API.
"""
from typing import Any, Callable, Optional

import numpy as np

from pycg.core.function import DifferentiableFunction

from .conjugate_gradient import ConjugateGradient
from .minimizer import OptimizationResults

METHODS = {
    "cg": ConjugateGradient,
    "conjugate_gradient": ConjugateGradient,
}


def optimize(
    f: Callable[[np.ndarray], float],
    g: Callable[[np.ndarray, np.ndarray], None],
    initial_x: np.ndarray,
    method: str = "cg",
    fg: Optional[Callable[[np.ndarray, np.ndarray], float]] = None,
    **options: Any,
) -> OptimizationResults:
    """
    Minimize f from initial_x.

    Args:
        f: Objective function.
        g: In-place gradient (x, out) -> None.
        initial_x: Starting point.
        method: Algorithm name; only "cg" is available.
        fg: Optional combined value-and-gradient evaluation.
        **options: Keyword arguments for the minimizer (tolerances,
            iterations, trace flags, linesearch, eta, P, precondprep).

    Returns:
        OptimizationResults.

    Raises:
        ValueError: If method is unknown.

    Example:
        >>> def f(x):
        ...     return float(x @ x)
        >>> def g(x, out):
        ...     out[:] = 2.0 * x
        >>> optimize(f, g, np.array([1.0, 2.0])).converged
        True
    """
    key = method.lower()
    if key not in METHODS:
        raise ValueError(
            f"Unknown method '{method}'. Choose from: {', '.join(sorted(METHODS))}"
        )
    minimizer = METHODS[key](**options)
    return minimizer.minimize(DifferentiableFunction(f, g, fg), initial_x)
