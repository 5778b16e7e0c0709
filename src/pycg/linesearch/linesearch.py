"""
Abstract base class for line searches.

This module provides the LineSearch ABC defining the contract the
conjugate gradient driver relies on, and linefunc(), the
one-dimensional restriction phi(alpha) = f(x + alpha * s) shared by
all implementations.
"""
import math
from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np

from pycg.core.function import DifferentiableFunction
from pycg.core.vectors import dot

from .results import LineSearchResults


def linefunc(
    df: DifferentiableFunction,
    x: np.ndarray,
    s: np.ndarray,
    alpha: float,
    x_ls: np.ndarray,
    gr_ls: np.ndarray,
    calc_grad: bool,
) -> Tuple[float, float]:
    """
    Evaluate phi(alpha) and optionally phi'(alpha).

    Writes x + alpha * s into x_ls (and the gradient there into gr_ls
    when calc_grad is set).

    Returns:
        (phi, dphi). dphi is NaN when not requested or when phi is not
        finite.
    """
    np.multiply(s, alpha, out=x_ls)
    x_ls += x
    if calc_grad:
        val = float(df.fg(x_ls, gr_ls))
        if math.isfinite(val):
            return val, dot(gr_ls, s)
        return val, math.nan
    return float(df.f(x_ls)), math.nan


class LineSearch(ABC):
    """
    Abstract base for line searches (Strategy Pattern).

    A line search receives the cache seeded with (0, phi0, dphi0) and a
    trial step, and returns an accepted step length together with the
    number of function and gradient evaluations it consumed. It must
    either return a step with a finite objective value or raise
    LineSearchError.
    """

    @abstractmethod
    def __call__(
        self,
        df: DifferentiableFunction,
        x: np.ndarray,
        s: np.ndarray,
        x_ls: np.ndarray,
        gr_ls: np.ndarray,
        lsr: LineSearchResults,
        c: float,
        mayterminate: bool,
    ) -> Tuple[float, int, int]:
        """
        Find an acceptable step along s.

        Args:
            df: Objective and gradient.
            x: Current position (read-only).
            s: Search direction (read-only).
            x_ls: Scratch buffer for trial positions.
            gr_ls: Scratch buffer for trial gradients.
            lsr: Cache seeded with the zero step.
            c: Initial trial step (finite, positive).
            mayterminate: The trial step came from a quadratic fit and
                may be accepted as soon as it satisfies Wolfe.

        Returns:
            (alpha, f_calls, g_calls)
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this line search."""
        pass
