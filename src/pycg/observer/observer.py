"""
Observer module for monitoring optimizer progress.

Provides the Observer pattern for storing and printing the iteration
trace of a run. The driver only builds an OptimizationState snapshot
when at least one observer is attached.
"""
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, TextIO


@dataclass
class OptimizationState:
    """
    Snapshot of the optimizer after one iteration.

    Attributes:
        iteration: Iteration number (0 is the starting point).
        value: Objective value.
        gradnorm: Infinity norm of the gradient.
        metadata: Extended trace entries ("x", "g(x)", "Current step size").
    """
    iteration: int
    value: float
    gradnorm: float
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [f"{self.iteration:6d}   {self.value:14e}   {self.gradnorm:14e}"]
        for key, value in self.metadata.items():
            lines.append(f" * {key}: {value}")
        return "\n".join(lines)


class Observer(ABC):
    """
    Abstract base for optimizer observers (Observer Pattern).

    Observers are notified after each iteration with the current state.

    Attributes:
        interval: How often to call observe() (in iterations).

    Example:
        >>> observer = TraceObserver()
        >>> minimizer = ConjugateGradient(observers=[observer])
    """

    def __init__(self, interval: int = 1) -> None:
        """
        Initialize observer.

        Args:
            interval: Observation interval in iterations. Default=1.
        """
        if interval < 1:
            raise ValueError(f"Interval must be >= 1, got {interval}")
        self.interval = interval

    @abstractmethod
    def observe(self, state: OptimizationState) -> None:
        """
        Record observation.

        Args:
            state: Snapshot of the current iteration.
        """
        pass

    def finalize(self) -> None:
        """Called at end of the run for cleanup."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get observer name."""
        pass


class CompositeObserver(Observer):
    """
    Fans one state out to several observers.

    The driver wraps the trace, print and user observers in one of these;
    each child only sees iterations that are a multiple of its interval.
    """

    def __init__(self, observers: Sequence[Observer]) -> None:
        super().__init__(interval=1)
        self.observers = list(observers)

    def observe(self, state: OptimizationState) -> None:
        for child in self.observers:
            if state.iteration % child.interval == 0:
                child.observe(state)

    def finalize(self) -> None:
        for child in self.observers:
            child.finalize()

    def get_name(self) -> str:
        return "Composite[" + ", ".join(child.get_name() for child in self.observers) + "]"


class TraceObserver(Observer):
    """
    Stores every observed state; this is the trace returned in the
    optimization results.
    """

    def __init__(self, interval: int = 1) -> None:
        super().__init__(interval)
        self.states: List[OptimizationState] = []

    def observe(self, state: OptimizationState) -> None:
        self.states.append(state)

    def get_name(self) -> str:
        return f"TraceObserver(interval={self.interval})"


class PrintObserver(Observer):
    """
    Prints optimizer progress, one row per iteration.
    """

    HEADER = (
        "Iter     Function value   Gradient norm \n"
        "------   --------------   --------------"
    )

    def __init__(self, interval: int = 1, stream: Optional[TextIO] = None) -> None:
        super().__init__(interval)
        self.stream = stream
        self._printed_header = False

    def observe(self, state: OptimizationState) -> None:
        """Print state row (header before the first row)."""
        stream = self.stream if self.stream is not None else sys.stdout
        if not self._printed_header:
            print(self.HEADER, file=stream)
            self._printed_header = True
        print(state, file=stream)

    def get_name(self) -> str:
        return f"PrintObserver(interval={self.interval})"
