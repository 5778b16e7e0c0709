"""
Observer module for monitoring optimizer progress.
"""

from .observer import (
    CompositeObserver,
    Observer,
    OptimizationState,
    PrintObserver,
    TraceObserver,
)

__all__ = [
    "Observer",
    "OptimizationState",
    "CompositeObserver",
    "TraceObserver",
    "PrintObserver",
]
