"""
Core module: evaluator contract, vector primitives, errors, and schemas.
"""

from .exceptions import LineSearchError, NonFiniteValueError, OptimizationError
from .function import DifferentiableFunction
from .schemas import CGOptions
from .vectors import dot, infnorm, isfinite_all, maxdiff

__all__ = [
    "DifferentiableFunction",
    "CGOptions",
    "OptimizationError",
    "NonFiniteValueError",
    "LineSearchError",
    "dot",
    "infnorm",
    "isfinite_all",
    "maxdiff",
]
