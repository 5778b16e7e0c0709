"""
Test problems for unconstrained minimization.

Provides:
- Quadratic: 1/2 x^T A x - b^T x (default x . x)
- Rosenbrock: extended Rosenbrock valley
- Himmelblau: four-minimum 2-D function
- Powell: extended Powell singular function
"""

from .himmelblau import Himmelblau
from .powell import Powell
from .problem import Problem
from .quadratic import Quadratic
from .rosenbrock import Rosenbrock

PROBLEMS = {
    "quadratic": Quadratic,
    "rosenbrock": Rosenbrock,
    "himmelblau": Himmelblau,
    "powell": Powell,
}

__all__ = [
    "Problem",
    "Quadratic",
    "Rosenbrock",
    "Himmelblau",
    "Powell",
    "PROBLEMS",
]
