"""
pycg - Preconditioned Nonlinear Conjugate Gradient Optimizer.

An unconstrained minimizer implementing the Hager-Zhang CG_DESCENT
family of conjugate gradient methods with the limited-memory (2012)
hybrid beta. Users supply an objective and its gradient; the driver
iterates to a stationary point.

Main features:
- HZ2012 safeguarded hybrid beta with descent restarts
- Identity, diagonal, and general (matrix) preconditioners
- Hager-Zhang approximate Wolfe line search and Armijo backtracking
- Optional iteration trace via observers
- YAML configuration for complete runs
"""

__version__ = "0.1.0"
__author__ = "pycg Team"

from .core import DifferentiableFunction, LineSearchError, NonFiniteValueError, OptimizationError
from .linesearch import BacktrackingLineSearch, HagerZhangLineSearch
from .minimizer import ConjugateGradient, OptimizationResults, TerminationReason, optimize
from .preconditioner import DiagonalPreconditioner, IdentityPreconditioner, MatrixPreconditioner, Preconditioner

__all__ = [
    "ConjugateGradient",
    "OptimizationResults",
    "TerminationReason",
    "optimize",
    "DifferentiableFunction",
    "OptimizationError",
    "NonFiniteValueError",
    "LineSearchError",
    "Preconditioner",
    "IdentityPreconditioner",
    "DiagonalPreconditioner",
    "MatrixPreconditioner",
    "HagerZhangLineSearch",
    "BacktrackingLineSearch",
]
