"""
Multi-criterion convergence test.
"""
from typing import Tuple

import numpy as np

from pycg.core.vectors import infnorm, maxdiff


def assess_convergence(
    x: np.ndarray,
    x_previous: np.ndarray,
    f_x: float,
    f_x_previous: float,
    gr: np.ndarray,
    xtol: float,
    ftol: float,
    grtol: float,
) -> Tuple[bool, bool, bool, bool]:
    """
    Evaluate the three independent convergence criteria.

    - x: largest componentwise move below xtol.
    - f: relative change of f below ftol, or the step failed to
      decrease f at all.
    - gradient: infinity norm of the gradient below grtol.

    Returns:
        (x_converged, f_converged, gr_converged, converged), where
        converged is true if any criterion holds.
    """
    x_converged = maxdiff(x, x_previous) < xtol

    f_converged = (
        abs(f_x - f_x_previous) / (abs(f_x) + ftol) < ftol
        or np.nextafter(f_x, np.inf) >= f_x_previous
    )

    gr_converged = infnorm(gr) < grtol

    converged = x_converged or f_converged or gr_converged
    return x_converged, bool(f_converged), gr_converged, converged
