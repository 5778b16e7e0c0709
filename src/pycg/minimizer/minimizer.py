"""
Abstract base class for minimizers.

This module provides the Minimizer ABC holding the options shared by
all gradient-based minimizers (tolerances, iteration budget, trace
flags), the OptimizationResults dataclass, and the TerminationReason
enum describing how a run ended.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from pycg.core.function import DifferentiableFunction
from pycg.core.vectors import infnorm
from pycg.observer import (
    CompositeObserver,
    Observer,
    OptimizationState,
    PrintObserver,
    TraceObserver,
)


class TerminationReason(Enum):
    """Terminal state of the minimizer state machine."""
    CONVERGED = "converged"
    ITERATION_LIMIT = "iteration limit reached"
    DEGENERATE_DIRECTION = "no descent direction"


@dataclass
class OptimizationResults:
    """
    Result of a minimization run.

    Attributes:
        method: Algorithm name.
        initial_x: Starting point (copy, caller's shape).
        minimum: Final point (caller's shape).
        f_minimum: Objective value at the final point.
        iterations: Number of iterations performed.
        iteration_converged: True if the iteration budget was exhausted.
        x_converged: Position change fell below xtol.
        xtol: Position tolerance.
        f_converged: Relative objective change fell below ftol.
        ftol: Function tolerance.
        gr_converged: Gradient infinity norm fell below grtol.
        grtol: Gradient tolerance.
        trace: Stored OptimizationState snapshots (empty unless traced).
        f_calls: Total objective evaluations.
        g_calls: Total gradient evaluations.
        termination: Terminal state reached.
    """
    method: str
    initial_x: np.ndarray
    minimum: np.ndarray
    f_minimum: float
    iterations: int
    iteration_converged: bool
    x_converged: bool
    xtol: float
    f_converged: bool
    ftol: float
    gr_converged: bool
    grtol: float
    trace: List[OptimizationState] = field(default_factory=list)
    f_calls: int = 0
    g_calls: int = 0
    termination: TerminationReason = TerminationReason.CONVERGED

    @property
    def converged(self) -> bool:
        """True if any convergence criterion was met."""
        return self.x_converged or self.f_converged or self.gr_converged

    def summary(self) -> str:
        """Human-readable multi-line summary."""
        return "\n".join([
            "Results of Optimization Algorithm",
            f" * Algorithm: {self.method}",
            f" * Starting Point: {np.array2string(self.initial_x, precision=6)}",
            f" * Minimum: {np.array2string(self.minimum, precision=6)}",
            f" * Value of Function at Minimum: {self.f_minimum:.6e}",
            f" * Iterations: {self.iterations}",
            " * Convergence: "
            f"{self.converged}",
            f"   * |x - x'| < {self.xtol:.1e}: {self.x_converged}",
            f"   * |f(x) - f(x')| / |f(x)| < {self.ftol:.1e}: {self.f_converged}",
            f"   * |g(x)| < {self.grtol:.1e}: {self.gr_converged}",
            f"   * Exceeded Maximum Number of Iterations: {self.iteration_converged}",
            f"   * Termination: {self.termination.value}",
            f" * Objective Function Calls: {self.f_calls}",
            f" * Gradient Calls: {self.g_calls}",
        ])

    def __str__(self) -> str:
        return self.summary()


class Minimizer(ABC):
    """
    Abstract base for gradient-based minimizers (Strategy Pattern).

    Holds the convergence tolerances, the iteration budget and the trace
    configuration, and provides the helpers every minimizer needs to
    flatten the problem, notify observers and assemble results.

    Attributes:
        xtol: Position convergence tolerance.
        ftol: Relative function convergence tolerance.
        grtol: Gradient (infinity norm) convergence tolerance.
        iterations: Maximum number of iterations.
        store_trace: Keep per-iteration states in the results.
        show_trace: Print per-iteration states.
        extended_trace: Also record x, gradient and step in each state.
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
        observers: Optional[Sequence[Observer]] = None,
    ) -> None:
        """
        Initialize minimizer.

        Args:
            xtol: Position convergence tolerance.
            ftol: Relative function convergence tolerance.
            grtol: Gradient convergence tolerance.
            iterations: Maximum number of iterations.
            store_trace: Keep per-iteration states in the results.
            show_trace: Print per-iteration states.
            extended_trace: Record x, gradient and step as well.
            observers: Extra observers notified every iteration.

        Raises:
            ValueError: If a tolerance is negative or iterations is not
                positive.
        """
        if xtol < 0:
            raise ValueError(f"xtol must be non-negative, got {xtol}")
        if ftol < 0:
            raise ValueError(f"ftol must be non-negative, got {ftol}")
        if grtol < 0:
            raise ValueError(f"grtol must be non-negative, got {grtol}")
        if iterations <= 0:
            raise ValueError(f"iterations must be positive, got {iterations}")

        self.xtol = xtol
        self.ftol = ftol
        self.grtol = grtol
        self.iterations = iterations
        self.store_trace = store_trace
        self.show_trace = show_trace
        self.extended_trace = extended_trace
        self.observers: List[Observer] = list(observers or [])

    @abstractmethod
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
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name."""
        pass

    def _build_observers(self) -> Tuple[CompositeObserver, Optional[TraceObserver]]:
        """Observers for one run; the TraceObserver (if any) backs results.trace."""
        observers: List[Observer] = []
        trace = None
        if self.store_trace or self.extended_trace:
            trace = TraceObserver()
            observers.append(trace)
        if self.show_trace:
            observers.append(PrintObserver())
        observers.extend(self.observers)
        return CompositeObserver(observers), trace

    def _notify(
        self,
        observer: CompositeObserver,
        iteration: int,
        f_x: float,
        x: np.ndarray,
        gr: np.ndarray,
        alpha: float,
    ) -> None:
        """Build a state snapshot and hand it to observers due this iteration."""
        if not any(iteration % obs.interval == 0 for obs in observer.observers):
            return
        metadata = {}
        if self.extended_trace:
            metadata["x"] = x.copy()
            metadata["g(x)"] = gr.copy()
            metadata["Current step size"] = alpha
        observer.observe(OptimizationState(iteration, f_x, infnorm(gr), metadata))

    @staticmethod
    def _flatten(
        df: DifferentiableFunction,
        shape: Tuple[int, ...],
    ) -> DifferentiableFunction:
        """
        Adapt df to flat 1-D buffers.

        The objective is called with reshaped views, so gradients it
        writes land directly in the driver's flat buffers.
        """
        if len(shape) == 1:
            return df

        def f(x: np.ndarray) -> float:
            return df.f(x.reshape(shape))

        def g(x: np.ndarray, out: np.ndarray) -> None:
            df.g(x.reshape(shape), out.reshape(shape))

        def fg(x: np.ndarray, out: np.ndarray) -> float:
            return df.fg(x.reshape(shape), out.reshape(shape))

        return DifferentiableFunction(f, g, fg)
