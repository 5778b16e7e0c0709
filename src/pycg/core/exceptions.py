"""
Exception hierarchy for fatal optimizer conditions.

Recoverable numerical breakdowns (e.g. a non-descent search direction)
are handled inside the driver and never raise. Conditions that violate
the objective or line-search contract abort the run with one of the
errors below; they carry whatever progress had been made so the caller
can still inspect it.
"""
from typing import List, Optional

import numpy as np


class OptimizationError(RuntimeError):
    """
    Base class for errors that abort an optimization run.

    Attributes:
        iteration: Iterations completed before the abort.
        f_calls: Objective evaluations consumed before the abort.
        g_calls: Gradient evaluations consumed before the abort.
        x: Position at the time of the abort (copy), if available.
        trace: Trace states recorded before the abort.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.iteration: int = 0
        self.f_calls: int = 0
        self.g_calls: int = 0
        self.x: Optional[np.ndarray] = None
        self.trace: List = []

    def attach_progress(
        self,
        iteration: int,
        f_calls: int,
        g_calls: int,
        x: Optional[np.ndarray] = None,
        trace: Optional[List] = None,
    ) -> "OptimizationError":
        """Record partial progress on the exception and return it."""
        self.iteration = iteration
        self.f_calls = f_calls
        self.g_calls = g_calls
        self.x = None if x is None else x.copy()
        self.trace = list(trace) if trace is not None else []
        return self


class NonFiniteValueError(OptimizationError):
    """Objective value or gradient is Inf/NaN where it must be finite."""


class LineSearchError(OptimizationError):
    """The line search could not honour its contract."""
