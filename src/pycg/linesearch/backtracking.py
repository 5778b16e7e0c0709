"""
Backtracking (Armijo) line search.

Shrinks the trial step until the sufficient decrease condition holds,
using a safeguarded quadratic interpolation for the new step. Cheaper
than the Hager-Zhang search but gives no curvature guarantee, so the
conjugate gradient direction may need restarting more often.
"""
import math
from typing import Tuple

import numpy as np

from pycg.core.exceptions import LineSearchError
from pycg.core.function import DifferentiableFunction

from .linesearch import LineSearch, linefunc
from .results import LineSearchResults


class BacktrackingLineSearch(LineSearch):
    """
    Armijo backtracking line search with quadratic interpolation.

    Attributes:
        c1: Sufficient decrease parameter.
        rhohi: Largest allowed shrink ratio per step.
        rholo: Smallest allowed shrink ratio per step.
        iterations: Maximum number of reductions.

    Example:
        >>> from pycg.linesearch import BacktrackingLineSearch
        >>> minimizer = ConjugateGradient(linesearch=BacktrackingLineSearch())
    """

    def __init__(
        self,
        c1: float = 1e-4,
        rhohi: float = 0.5,
        rholo: float = 0.1,
        iterations: int = 1000,
    ) -> None:
        """
        Initialize backtracking line search.

        Raises:
            ValueError: If any parameter is outside its valid range.
        """
        if not 0 < c1 < 1:
            raise ValueError(f"c1 must be in (0, 1), got {c1}")
        if not 0 < rholo <= rhohi < 1:
            raise ValueError(
                f"Need 0 < rholo <= rhohi < 1, got rholo={rholo}, rhohi={rhohi}"
            )
        if iterations <= 0:
            raise ValueError(f"iterations must be positive, got {iterations}")

        self.c1 = c1
        self.rhohi = rhohi
        self.rholo = rholo
        self.iterations = iterations

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
        """Run the line search. See LineSearch.__call__."""
        f_calls = 0
        g_calls = 0

        f_x = lsr.value[0]
        gxp = lsr.slope[0]
        if not (c > 0 and math.isfinite(c)):
            raise LineSearchError(f"Initial step must be finite and positive, got {c}")
        alpha = c

        f_x_new, _ = linefunc(df, x, s, alpha, x_ls, gr_ls, False)
        f_calls += 1
        iteration = 0
        while not math.isfinite(f_x_new) or f_x_new > f_x + self.c1 * alpha * gxp:
            iteration += 1
            if iteration > self.iterations:
                raise LineSearchError("Too many iterations in backtracking line search")
            if math.isfinite(f_x_new):
                # minimizer of the quadratic through f_x, gxp and f_x_new
                alphatmp = -(gxp * alpha**2) / (2.0 * (f_x_new - f_x - gxp * alpha))
                alphatmp = min(alphatmp, alpha * self.rhohi)
                alpha = max(alphatmp, alpha * self.rholo)
            else:
                lsr.nfailures += 1
                alpha *= self.rholo
            f_x_new, _ = linefunc(df, x, s, alpha, x_ls, gr_ls, False)
            f_calls += 1
        lsr.push(alpha, f_x_new, math.nan)
        return alpha, f_calls, g_calls

    def get_name(self) -> str:
        """Return line search name."""
        return f"Backtracking(c1={self.c1})"
