"""
Search direction updates for the conjugate gradient driver.

hz_direction_update implements the Hager-Zhang (2012) limited-memory
CG rule: a preconditioned hybrid beta bounded below by eta_k so that
the new direction cannot collapse onto the previous one.
descent_restart resets a corrupted direction to steepest descent.

References:
    W. W. Hager and H. Zhang (2006) Algorithm 851: CG_DESCENT.
    W. W. Hager and H. Zhang (2012) The limited memory conjugate
    gradient method.
"""
import logging
from typing import Tuple

import numpy as np

from pycg.core.vectors import dot
from pycg.preconditioner import Preconditioner

logger = logging.getLogger(__name__)


def descent_restart(gr: np.ndarray, s: np.ndarray) -> Tuple[float, bool]:
    """
    Ensure s is a descent direction for gradient gr.

    If gr . s is not negative (including NaN from a corrupted
    direction), s is overwritten in place with -gr and the slope is
    recomputed.

    Args:
        gr: Current gradient.
        s: Search direction, modified in place on restart.

    Returns:
        (dphi0, recovered). recovered is False when even steepest
        descent has no negative slope, i.e. the gradient is zero or
        corrupted.
    """
    dphi0 = dot(gr, s)
    if not dphi0 < 0:
        logger.debug("Direction is not a descent direction (dphi0 = %g), restarting", dphi0)
        np.negative(gr, out=s)
        dphi0 = dot(gr, s)
        if not dphi0 < 0:
            return dphi0, False
    return dphi0, True


def hz_direction_update(
    s: np.ndarray,
    gr: np.ndarray,
    gr_previous: np.ndarray,
    y: np.ndarray,
    pgr: np.ndarray,
    P: Preconditioner,
    eta: float,
) -> float:
    """
    Compute the next search direction in place (HZ2012 beta).

    With d = s the direction just used and y = gr - gr_previous:

        eta_k = eta * (d . gr_previous) / (d^T P^{-1} d)
        beta_k = (y . P gr - (y^T P y)(gr . d) / (y . d)) / (y . d)
        beta = max(beta_k, eta_k)
        s <- beta * s - P gr

    The division by y . d is not guarded; a vanishing denominator gives
    an infinite or NaN beta, which descent_restart then treats as a
    non-descent direction.

    Args:
        s: Direction used in the last step; overwritten with the new one.
        gr: Gradient at the new point.
        gr_previous: Gradient at the previous point.
        y: Scratch buffer, receives gr - gr_previous.
        pgr: Scratch buffer, receives P gr.
        P: Preconditioner, already prepared at the new point.
        eta: Lower-bound parameter for beta.

    Returns:
        beta used for the update.
    """
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        dPd = np.float64(P.inverse_dot(s, s))
        etak = np.float64(eta) * np.float64(dot(s, gr_previous)) / dPd
        np.subtract(gr, gr_previous, out=y)
        ydots = np.float64(dot(y, s))
        P.forward(pgr, gr)
        ypgr = np.float64(dot(y, pgr))
        yPy = np.float64(P.forward_dot(y, y))
        grdots = np.float64(dot(gr, s))
        betak = (ypgr - yPy * grdots / ydots) / ydots
        beta = np.maximum(betak, etak)
        s *= beta
        s -= pgr
    return float(beta)
