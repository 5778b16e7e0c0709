"""
Preconditioned nonlinear conjugate gradient minimizer (Hager-Zhang).

This is an independent implementation of:
    W. W. Hager and H. Zhang (2006) Algorithm 851: CG_DESCENT, a
    conjugate gradient method with guaranteed descent. ACM Transactions
    on Mathematical Software 32: 113-137.
with the direction update of:
    W. W. Hager and H. Zhang (2012) The limited memory conjugate
    gradient method.

All iterate buffers are allocated once per run and updated in place.
"""
import logging
import math
from typing import Any, Callable, Optional, Sequence

import numpy as np

from pycg.core.exceptions import NonFiniteValueError, OptimizationError
from pycg.core.function import DifferentiableFunction
from pycg.core.vectors import isfinite_all
from pycg.linesearch import HagerZhangLineSearch, LineSearchResults, alphainit, alphatry
from pycg.observer import Observer
from pycg.preconditioner import Preconditioner, as_preconditioner

from .convergence import assess_convergence
from .direction import descent_restart, hz_direction_update
from .minimizer import Minimizer, OptimizationResults, TerminationReason

logger = logging.getLogger(__name__)


def _prepare(P: Preconditioner, x: np.ndarray) -> None:
    P.prepare(x)


class ConjugateGradient(Minimizer):
    """
    Nonlinear conjugate gradient minimizer with HZ2012 direction updates.

    Each iteration checks that the search direction is a descent
    direction (restarting from steepest descent if not), picks a trial
    step with alphatry, runs the line search, moves, re-evaluates, tests
    convergence and finally computes the next direction with the
    safeguarded hybrid beta.

    Attributes:
        linesearch: Line search strategy (callable, see LineSearch).
        eta: Lower-bound parameter of the hybrid beta.
        P: Preconditioner.
        precondprep: Callback (P, x) run once per iteration before P is
            used. Defaults to P.prepare(x).

    Example:
        >>> from pycg.minimizer import ConjugateGradient
        >>> minimizer = ConjugateGradient(grtol=1e-10)
        >>> result = minimizer.minimize(df, np.array([1.0, 2.0]))
        >>> result.converged
        True
    """

    def __init__(
        self,
        xtol: float = 1e-32,
        ftol: float = 1e-8,
        grtol: float = 1e-8,
        iterations: int = 1000,
        store_trace: bool = False,
        show_trace: bool = False,
        extended_trace: bool = False,
        linesearch: Optional[Callable[..., Any]] = None,
        eta: float = 0.4,
        P: Any = None,
        precondprep: Optional[Callable[[Preconditioner, np.ndarray], None]] = None,
        observers: Optional[Sequence[Observer]] = None,
    ) -> None:
        """
        Initialize Conjugate Gradient minimizer.

        Args:
            xtol: Position convergence tolerance.
            ftol: Relative function convergence tolerance.
            grtol: Gradient convergence tolerance.
            iterations: Maximum number of iterations.
            store_trace: Keep per-iteration states in the results.
            show_trace: Print per-iteration states.
            extended_trace: Record x, gradient and step as well.
            linesearch: Line search; HagerZhangLineSearch() if None.
            eta: Lower-bound parameter of beta (positive).
            P: Preconditioner, diagonal weights, SPD matrix, or None.
            precondprep: Preconditioner refresh callback (P, x).
            observers: Extra observers notified every iteration.

        Raises:
            ValueError: If eta is not positive or another option is invalid.
            TypeError: If linesearch/precondprep are not callable or P is
                not a supported preconditioner.
        """
        super().__init__(
            xtol=xtol,
            ftol=ftol,
            grtol=grtol,
            iterations=iterations,
            store_trace=store_trace,
            show_trace=show_trace,
            extended_trace=extended_trace,
            observers=observers,
        )
        if eta <= 0:
            raise ValueError(f"eta must be positive, got {eta}")
        if linesearch is not None and not callable(linesearch):
            raise TypeError("linesearch must be callable")
        if precondprep is not None and not callable(precondprep):
            raise TypeError("precondprep must be callable")

        self.eta = eta
        self.linesearch = linesearch if linesearch is not None else HagerZhangLineSearch()
        self.P = as_preconditioner(P)
        self.precondprep = precondprep if precondprep is not None else _prepare

    def minimize(
        self,
        df: DifferentiableFunction,
        initial_x: np.ndarray,
    ) -> OptimizationResults:
        """
        Minimize df starting from initial_x.

        Args:
            df: Objective and gradient.
            initial_x: Starting point (any shape; not modified).

        Returns:
            OptimizationResults.

        Raises:
            NonFiniteValueError: Non-finite value or gradient at the
                start, or non-finite value after a step.
            LineSearchError: The line search failed.
        """
        initial_x = np.array(initial_x, dtype=float)
        shape = initial_x.shape
        df = self._flatten(df, shape)
        P = self.P
        linesearch = self.linesearch

        # Current and previous state
        x = initial_x.ravel().copy()
        x_previous = x.copy()
        gr = np.empty_like(x)
        gr_previous = np.empty_like(x)

        # Preconditioned gradient, search direction, beta workspace
        pgr = np.empty_like(x)
        s = np.empty_like(x)
        y = np.empty_like(x)

        # Line search scratch
        x_ls = np.empty_like(x)
        gr_ls = np.empty_like(x)

        iteration = 0
        f_calls, g_calls = 0, 0

        f_x = float(df.fg(x, gr))
        f_calls, g_calls = f_calls + 1, g_calls + 1
        f_x_previous = math.nan
        np.copyto(gr_previous, gr)

        if not math.isfinite(f_x):
            raise NonFiniteValueError(
                f"Must have finite starting value, got {f_x}"
            ).attach_progress(iteration, f_calls, g_calls, initial_x)
        if not isfinite_all(gr):
            bad = np.flatnonzero(~np.isfinite(gr)).tolist()
            raise NonFiniteValueError(
                f"Gradient must have all finite values at starting point; "
                f"non-finite components: {bad}"
            ).attach_progress(iteration, f_calls, g_calls, initial_x)

        alpha = alphainit(math.nan, x, gr, f_x)
        lsr = LineSearchResults()

        observer, trace = self._build_observers()
        self._notify(observer, iteration, f_x, x.reshape(shape), gr.reshape(shape), alpha)

        # Initial search direction s = -P gr
        self.precondprep(P, x)
        P.forward(s, gr)
        np.negative(s, out=s)

        x_converged, f_converged, gr_converged = False, False, False
        converged = False
        degenerate = False
        try:
            while not converged and iteration < self.iterations:
                dphi0, recovered = descent_restart(gr, s)
                if not recovered:
                    logger.info(
                        "No descent direction at iteration %d (dphi0 = %g), stopping",
                        iteration, dphi0,
                    )
                    degenerate = True
                    break

                iteration += 1

                lsr.clear()
                lsr.push(0.0, f_x, dphi0)

                # Initial step size (HZ I1-I2)
                alpha, mayterminate, f_update, g_update = alphatry(
                    alpha, df, x, s, x_ls, gr_ls, lsr
                )
                f_calls, g_calls = f_calls + f_update, g_calls + g_update

                alpha, f_update, g_update = linesearch(
                    df, x, s, x_ls, gr_ls, lsr, alpha, mayterminate
                )
                f_calls, g_calls = f_calls + f_update, g_calls + g_update

                np.copyto(x_previous, x)
                np.multiply(s, alpha, out=x_ls)
                x += x_ls

                np.copyto(gr_previous, gr)
                f_x_previous = f_x
                f_x = float(df.fg(x, gr))
                f_calls, g_calls = f_calls + 1, g_calls + 1

                if not math.isfinite(f_x):
                    raise NonFiniteValueError(
                        f"Objective must return finite values, got {f_x} "
                        f"at iteration {iteration}"
                    )

                x_converged, f_converged, gr_converged, converged = assess_convergence(
                    x, x_previous, f_x, f_x_previous, gr,
                    self.xtol, self.ftol, self.grtol,
                )

                self.precondprep(P, x)
                hz_direction_update(s, gr, gr_previous, y, pgr, P, self.eta)

                self._notify(
                    observer, iteration, f_x, x.reshape(shape), gr.reshape(shape), alpha
                )
        except OptimizationError as exc:
            exc.attach_progress(
                iteration, f_calls, g_calls, x.reshape(shape),
                trace.states if trace is not None else None,
            )
            raise
        finally:
            observer.finalize()

        if converged:
            termination = TerminationReason.CONVERGED
        elif degenerate:
            termination = TerminationReason.DEGENERATE_DIRECTION
        else:
            termination = TerminationReason.ITERATION_LIMIT

        return OptimizationResults(
            method="Conjugate Gradient",
            initial_x=initial_x,
            minimum=x.reshape(shape),
            f_minimum=f_x,
            iterations=iteration,
            iteration_converged=iteration == self.iterations,
            x_converged=x_converged,
            xtol=self.xtol,
            f_converged=f_converged,
            ftol=self.ftol,
            gr_converged=gr_converged,
            grtol=self.grtol,
            trace=list(trace.states) if trace is not None else [],
            f_calls=f_calls,
            g_calls=g_calls,
            termination=termination,
        )

    def get_name(self) -> str:
        """Get human-readable name."""
        name = getattr(self.linesearch, "get_name", None)
        ls_name = name() if callable(name) else repr(self.linesearch)
        return (
            f"ConjugateGradient(eta={self.eta}, iterations={self.iterations}, "
            f"linesearch={ls_name}, P={self.P.get_name()})"
        )
