"""
Initial step-size selection (HZ stages I0-I2).

alphainit picks the very first trial step from the scale of the
starting point; alphatry refines the previous accepted step with a
quadratic fit before each line search.
"""
import math
from typing import Tuple

import numpy as np

from pycg.core.function import DifferentiableFunction
from pycg.core.vectors import infnorm

from .linesearch import linefunc
from .results import LineSearchResults

ITERFINITEMAX = int(math.ceil(-math.log2(np.finfo(float).eps)))


def alphainit(
    alpha: float,
    x: np.ndarray,
    gr: np.ndarray,
    f_x: float,
    psi0: float = 0.01,
) -> float:
    """
    Choose an initial step when none is known (HZ I0).

    Args:
        alpha: Previous step, or NaN if there is none.
        x: Starting point.
        gr: Gradient at x.
        f_x: Objective value at x.
        psi0: Scale factor.

    Returns:
        alpha unchanged if it is not NaN, otherwise a positive step
        scaled to x, gr and f_x.
    """
    if not math.isnan(alpha):
        return alpha
    alpha = 1.0
    gr_max = infnorm(gr)
    if gr_max != 0.0:
        x_max = infnorm(x)
        if x_max != 0.0:
            alpha = psi0 * x_max / gr_max
        elif f_x != 0.0:
            alpha = psi0 * abs(f_x) / float(np.dot(gr.ravel(), gr.ravel()))
    return alpha


def alphatry(
    alpha: float,
    df: DifferentiableFunction,
    x: np.ndarray,
    s: np.ndarray,
    x_ls: np.ndarray,
    gr_ls: np.ndarray,
    lsr: LineSearchResults,
    psi1: float = 0.2,
    psi2: float = 2.0,
    psi3: float = 0.1,
    iterfinitemax: int = ITERFINITEMAX,
    alphamax: float = math.inf,
) -> Tuple[float, bool, int, int]:
    """
    Propose the trial step for the next line search (HZ I1-I2).

    Evaluates phi at psi1 * alpha and fits a quadratic through phi(0),
    phi'(0) and that test step. If the fit is convex and phi did not go
    uphill, the quadratic minimizer is returned and the line search may
    accept it without bracketing.

    Args:
        alpha: Previously accepted step.
        df: Objective and gradient.
        x, s: Current position and search direction.
        x_ls, gr_ls: Scratch buffers.
        lsr: Cache seeded with (0, phi0, dphi0).
        psi1: Fraction of alpha for the test step.
        psi2: Expansion factor when the fit is not convex.
        psi3: Shrink factor while the test step is non-finite.
        iterfinitemax: Maximum shrinks before giving up.
        alphamax: Largest admissible step.

    Returns:
        (alpha, mayterminate, f_calls, g_calls)
    """
    f_calls = 0
    g_calls = 0

    phi0 = lsr.value[0]
    dphi0 = lsr.slope[0]

    alphatest = min(psi1 * alpha, alphamax)
    phitest, _ = linefunc(df, x, s, alphatest, x_ls, gr_ls, False)
    f_calls += 1

    iterfinite = 1
    while not math.isfinite(phitest):
        alphatest = psi3 * alphatest
        phitest, _ = linefunc(df, x, s, alphatest, x_ls, gr_ls, False)
        f_calls += 1
        lsr.nfailures += 1
        iterfinite += 1
        if iterfinite >= iterfinitemax:
            return 0.0, True, f_calls, g_calls

    # quadratic coefficient of phi through phi0, dphi0 and the test step
    a = ((phitest - phi0) / alphatest - dphi0) / alphatest
    mayterminate = False
    if math.isfinite(a) and a > 0 and phitest <= phi0:
        alpha = -dphi0 / 2.0 / a
        if alpha <= alphamax:
            mayterminate = True
        else:
            alpha = alphamax
    elif phitest > phi0:
        alpha = alphatest
    else:
        alpha *= psi2
    alpha = min(alphamax, alpha)
    return alpha, mayterminate, f_calls, g_calls
