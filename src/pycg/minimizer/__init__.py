"""
Minimizer module for unconstrained optimization.

Provides:
- ConjugateGradient: Hager-Zhang preconditioned nonlinear CG
- assess_convergence: x / f / gradient convergence test
- descent_restart, hz_direction_update: direction rules
- optimize: keyword-driven entry point
"""

from .conjugate_gradient import ConjugateGradient
from .convergence import assess_convergence
from .direction import descent_restart, hz_direction_update
from .minimizer import Minimizer, OptimizationResults, TerminationReason
from .optimize import optimize

__all__ = [
    "Minimizer",
    "OptimizationResults",
    "TerminationReason",
    "ConjugateGradient",
    "assess_convergence",
    "descent_restart",
    "hz_direction_update",
    "optimize",
]
