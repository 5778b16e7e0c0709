"""
Hager-Zhang approximate Wolfe line search.

Independent implementation of the line search from:
    W. W. Hager and H. Zhang (2006) Algorithm 851: CG_DESCENT, a
    conjugate gradient method with guaranteed descent. ACM Transactions
    on Mathematical Software 32: 113-137.

Stage labels in comments (B0-B3, S1-S4, U0-U3) refer to that paper.

Differences from the paper:
- Wolfe conditions are only tested on steps produced by quadratic or
  secant interpolation, never on bisection or expansion steps.
- Non-finite function values shrink the trial step instead of failing.
- A maximum step alphamax is honoured throughout bracketing.
"""
import logging
import math
from typing import Tuple

import numpy as np

from pycg.core.exceptions import LineSearchError
from pycg.core.function import DifferentiableFunction

from .initial_step import ITERFINITEMAX
from .linesearch import LineSearch, linefunc
from .results import LineSearchResults

logger = logging.getLogger(__name__)

DEFAULTDELTA = 0.1
DEFAULTSIGMA = 0.9


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def satisfies_wolfe(
    c: float,
    phic: float,
    dphic: float,
    phi0: float,
    dphi0: float,
    philim: float,
    delta: float,
    sigma: float,
) -> bool:
    """
    Test the Wolfe or approximate Wolfe conditions at step c.

    Returns:
        True if either (sufficient decrease and curvature) or the
        approximate Wolfe pair holds.
    """
    wolfe1 = delta * dphi0 >= (phic - phi0) / c and dphic >= sigma * dphi0
    wolfe2 = (
        (2.0 * delta - 1.0) * dphi0 >= dphic >= sigma * dphi0
        and phic <= philim
    )
    return wolfe1 or wolfe2


def secant(a: float, b: float, dphia: float, dphib: float) -> float:
    """
    Root of the secant through (a, dphia) and (b, dphib).

    Equal slopes have no root; NaN is returned so that any bracket
    comparison on the result is false.
    """
    if dphib == dphia:
        return math.nan
    return (a * dphib - b * dphia) / (dphib - dphia)


class HagerZhangLineSearch(LineSearch):
    """
    Hager-Zhang line search.

    Finds a step satisfying the Wolfe or approximate Wolfe conditions by
    bracketing, double secant steps, and bisection.

    Attributes:
        delta: Sufficient decrease parameter (0 < delta < 0.5).
        sigma: Curvature parameter (delta <= sigma < 1).
        alphamax: Largest admissible step.
        rho: Bracket expansion factor.
        epsilon: Relative tolerance defining phi_lim = phi0 + eps|phi0|.
        gamma: Required bracket shrink ratio per secant2 step.
        linesearchmax: Maximum bracketing plus secant iterations.
        psi3: Shrink factor applied while evaluations are non-finite.

    Example:
        >>> from pycg.linesearch import HagerZhangLineSearch
        >>> linesearch = HagerZhangLineSearch(sigma=0.9)
        >>> minimizer = ConjugateGradient(linesearch=linesearch)
    """

    def __init__(
        self,
        delta: float = DEFAULTDELTA,
        sigma: float = DEFAULTSIGMA,
        alphamax: float = math.inf,
        rho: float = 5.0,
        epsilon: float = 1e-6,
        gamma: float = 0.66,
        linesearchmax: int = 50,
        psi3: float = 0.1,
    ) -> None:
        """
        Initialize Hager-Zhang line search.

        Raises:
            ValueError: If any parameter is outside its valid range.
        """
        if not 0 < delta < 0.5:
            raise ValueError(f"delta must be in (0, 0.5), got {delta}")
        if not delta <= sigma < 1:
            raise ValueError(f"sigma must be in [delta, 1), got {sigma}")
        if alphamax <= 0:
            raise ValueError(f"alphamax must be positive, got {alphamax}")
        if rho <= 1:
            raise ValueError(f"rho must be greater than 1, got {rho}")
        if epsilon < 0:
            raise ValueError(f"epsilon must be non-negative, got {epsilon}")
        if not 0 < gamma < 1:
            raise ValueError(f"gamma must be in (0, 1), got {gamma}")
        if linesearchmax <= 0:
            raise ValueError(f"linesearchmax must be positive, got {linesearchmax}")
        if not 0 < psi3 < 1:
            raise ValueError(f"psi3 must be in (0, 1), got {psi3}")

        self.delta = delta
        self.sigma = sigma
        self.alphamax = alphamax
        self.rho = rho
        self.epsilon = epsilon
        self.gamma = gamma
        self.linesearchmax = linesearchmax
        self.psi3 = psi3

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
        alphamax = self.alphamax

        phi0 = lsr.value[0]
        dphi0 = lsr.slope[0]
        if not _finite(phi0, dphi0):
            raise LineSearchError("Initial value and slope must be finite")
        if not (c > 0 and math.isfinite(c) and c <= alphamax):
            raise LineSearchError(
                f"Initial step must be finite and in (0, alphamax], got {c}"
            )
        philim = phi0 + self.epsilon * abs(phi0)

        phic, dphic = linefunc(df, x, s, c, x_ls, gr_ls, True)
        f_calls += 1
        g_calls += 1

        iterfinite = 1
        while not _finite(phic, dphic) and iterfinite < ITERFINITEMAX:
            mayterminate = False
            lsr.nfailures += 1
            iterfinite += 1
            c *= self.psi3
            phic, dphic = linefunc(df, x, s, c, x_ls, gr_ls, True)
            f_calls += 1
            g_calls += 1
        if not _finite(phic, dphic):
            logger.warning(
                "Failed to achieve finite new evaluation point, using alpha=0"
            )
            return 0.0, f_calls, g_calls
        lsr.push(c, phic, dphic)

        # a quadratic-fit step may be accepted without bracketing
        if mayterminate and satisfies_wolfe(
            c, phic, dphic, phi0, dphi0, philim, self.delta, self.sigma
        ):
            logger.debug("Wolfe condition satisfied on point alpha = %g", c)
            return c, f_calls, g_calls

        # Initial bracketing step (HZ, stages B0-B3)
        isbracketed = False
        ia = 0
        ib = 1
        iteration = 1
        while not isbracketed and iteration < self.linesearchmax:
            if dphic >= 0:
                # upward slope found: b is here, search back for a
                ib = len(lsr) - 1
                for i in range(ib - 1, -1, -1):
                    if lsr.value[i] <= philim:
                        ia = i
                        break
                isbracketed = True
            elif lsr.value[-1] > philim:
                # crested over a peak while still descending: bisect
                ib = len(lsr) - 1
                ia = ib - 1
                ia, ib, f_up, g_up = self._bisect(
                    df, x, s, x_ls, gr_ls, lsr, ia, ib, philim
                )
                f_calls += f_up
                g_calls += g_up
                isbracketed = True
            else:
                # still going downhill, expand
                cold = c
                c *= self.rho
                if c > alphamax:
                    c = (alphamax + cold) / 2
                    if c == cold or np.nextafter(c, math.inf) >= alphamax:
                        return cold, f_calls, g_calls
                phic, dphic = linefunc(df, x, s, c, x_ls, gr_ls, True)
                f_calls += 1
                g_calls += 1
                iterfinite = 1
                while (
                    not _finite(phic, dphic)
                    and c > np.nextafter(cold, math.inf)
                    and iterfinite < ITERFINITEMAX
                ):
                    alphamax = c
                    lsr.nfailures += 1
                    iterfinite += 1
                    c = (cold + c) / 2
                    phic, dphic = linefunc(df, x, s, c, x_ls, gr_ls, True)
                    f_calls += 1
                    g_calls += 1
                if not _finite(phic, dphic):
                    return cold, f_calls, g_calls
                elif dphic < 0 and c == alphamax:
                    # on the edge of the allowed region, still decreasing
                    if iterfinite >= ITERFINITEMAX:
                        logger.warning(
                            "Failed to expand interval to bracket with finite "
                            "values (c = %g, alphamax = %g, phic = %g, dphic = %g)",
                            c, alphamax, phic, dphic,
                        )
                    return c, f_calls, g_calls
                lsr.push(c, phic, dphic)
            iteration += 1

        while iteration < self.linesearchmax:
            a = lsr.alpha[ia]
            b = lsr.alpha[ib]
            if b - a <= np.spacing(b):
                return a, f_calls, g_calls
            iswolfe, iA, iB, f_up, g_up = self._secant2(
                df, x, s, x_ls, gr_ls, lsr, ia, ib, philim
            )
            f_calls += f_up
            g_calls += g_up
            if iswolfe:
                return lsr.alpha[iA], f_calls, g_calls
            A = lsr.alpha[iA]
            B = lsr.alpha[iB]
            if B - A < self.gamma * (b - a):
                if (
                    np.nextafter(lsr.value[ia], math.inf) >= lsr.value[ib]
                    and np.nextafter(lsr.value[iA], math.inf) >= lsr.value[iB]
                ):
                    # so flat that secant made no progress
                    return A, f_calls, g_calls
                ia = iA
                ib = iB
            else:
                # secant converging too slowly, bisect
                c = (A + B) / 2
                phic, dphic = linefunc(df, x, s, c, x_ls, gr_ls, True)
                f_calls += 1
                g_calls += 1
                if not _finite(phic, dphic):
                    raise LineSearchError(
                        f"Non-finite evaluation while bisecting at alpha = {c}"
                    )
                lsr.push(c, phic, dphic)
                ia, ib, f_up, g_up = self._update(
                    df, x, s, x_ls, gr_ls, lsr, iA, iB, len(lsr) - 1, philim
                )
                f_calls += f_up
                g_calls += g_up
            iteration += 1

        raise LineSearchError(
            "Linesearch failed to converge, reached maximum iterations."
        )

    def _secant2(
        self,
        df: DifferentiableFunction,
        x: np.ndarray,
        s: np.ndarray,
        x_ls: np.ndarray,
        gr_ls: np.ndarray,
        lsr: LineSearchResults,
        ia: int,
        ib: int,
        philim: float,
    ) -> Tuple[bool, int, int, int, int]:
        """HZ, stages S1-S4. Returns (iswolfe, iA, iB, f_calls, g_calls)."""
        phi0 = lsr.value[0]
        dphi0 = lsr.slope[0]
        a = lsr.alpha[ia]
        b = lsr.alpha[ib]
        dphia = lsr.slope[ia]
        dphib = lsr.slope[ib]
        if not (dphia < 0 and dphib >= 0):
            raise LineSearchError(
                "Search direction is not a direction of descent; this may "
                "indicate that user-provided derivatives are inaccurate "
                f"(dphia = {dphia:g}; dphib = {dphib:g})"
            )
        c = secant(a, b, dphia, dphib)
        phic, dphic = linefunc(df, x, s, c, x_ls, gr_ls, True)
        f_calls = 1
        g_calls = 1
        if not _finite(phic, dphic):
            raise LineSearchError(f"Non-finite evaluation at secant step {c}")
        lsr.push(c, phic, dphic)
        ic = len(lsr) - 1
        if satisfies_wolfe(
            c, phic, dphic, phi0, dphi0, philim, self.delta, self.sigma
        ):
            return True, ic, ic, f_calls, g_calls

        iA, iB, f_up, g_up = self._update(
            df, x, s, x_ls, gr_ls, lsr, ia, ib, ic, philim
        )
        f_calls += f_up
        g_calls += g_up
        a = lsr.alpha[iA]
        b = lsr.alpha[iB]
        if iB == ic:
            # b was replaced, take a secant step on the a side too
            c = secant(lsr.alpha[ib], lsr.alpha[iB], lsr.slope[ib], lsr.slope[iB])
        elif iA == ic:
            c = secant(lsr.alpha[ia], lsr.alpha[iA], lsr.slope[ia], lsr.slope[iA])
        if a <= c <= b:
            phic, dphic = linefunc(df, x, s, c, x_ls, gr_ls, True)
            f_calls += 1
            g_calls += 1
            if not _finite(phic, dphic):
                raise LineSearchError(f"Non-finite evaluation at secant step {c}")
            lsr.push(c, phic, dphic)
            ic = len(lsr) - 1
            if satisfies_wolfe(
                c, phic, dphic, phi0, dphi0, philim, self.delta, self.sigma
            ):
                return True, ic, ic, f_calls, g_calls
            iA, iB, f_up, g_up = self._update(
                df, x, s, x_ls, gr_ls, lsr, iA, iB, ic, philim
            )
            f_calls += f_up
            g_calls += g_up
        return False, iA, iB, f_calls, g_calls

    def _update(
        self,
        df: DifferentiableFunction,
        x: np.ndarray,
        s: np.ndarray,
        x_ls: np.ndarray,
        gr_ls: np.ndarray,
        lsr: LineSearchResults,
        ia: int,
        ib: int,
        ic: int,
        philim: float,
    ) -> Tuple[int, int, int, int]:
        """
        HZ, stages U0-U3.

        Given a third point c, keep the two points that still bracket a
        minimum (HZ eq. 29). Returns (ia, ib, f_calls, g_calls).
        """
        a = lsr.alpha[ia]
        b = lsr.alpha[ib]
        c = lsr.alpha[ic]
        phic = lsr.value[ic]
        dphic = lsr.slope[ic]
        if c < a or c > b:
            return ia, ib, 0, 0
        if dphic >= 0:
            return ia, ic, 0, 0
        elif phic <= philim:
            return ic, ib, 0, 0
        # phic above phi_lim with downward slope: minimum lies in [a, c]
        return self._bisect(df, x, s, x_ls, gr_ls, lsr, ia, ic, philim)

    def _bisect(
        self,
        df: DifferentiableFunction,
        x: np.ndarray,
        s: np.ndarray,
        x_ls: np.ndarray,
        gr_ls: np.ndarray,
        lsr: LineSearchResults,
        ia: int,
        ib: int,
        philim: float,
    ) -> Tuple[int, int, int, int]:
        """HZ, stage U3 with theta = 0.5. Returns (ia, ib, f_calls, g_calls)."""
        f_calls = 0
        g_calls = 0
        a = lsr.alpha[ia]
        b = lsr.alpha[ib]
        while b - a > np.spacing(b):
            d = (a + b) / 2
            phid, gphi = linefunc(df, x, s, d, x_ls, gr_ls, True)
            f_calls += 1
            g_calls += 1
            if not _finite(phid, gphi):
                raise LineSearchError(
                    f"Non-finite evaluation while bisecting at alpha = {d}"
                )
            lsr.push(d, phid, gphi)
            id_ = len(lsr) - 1
            if gphi >= 0:
                return ia, id_, f_calls, g_calls
            elif phid <= philim:
                a = d
                ia = id_
            else:
                b = d
                ib = id_
        return ia, ib, f_calls, g_calls

    def get_name(self) -> str:
        """Return line search name."""
        return f"HagerZhang(delta={self.delta}, sigma={self.sigma})"
