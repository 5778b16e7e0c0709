"""
Preconditioner module for the conjugate gradient driver.

Provides the preconditioner variants:
- IdentityPreconditioner: no preconditioning
- DiagonalPreconditioner: P = diag(p)
- MatrixPreconditioner: dense SPD matrix
"""

from .diagonal import DiagonalPreconditioner
from .identity import IdentityPreconditioner
from .matrix import MatrixPreconditioner
from .preconditioner import Preconditioner, as_preconditioner

__all__ = [
    "Preconditioner",
    "IdentityPreconditioner",
    "DiagonalPreconditioner",
    "MatrixPreconditioner",
    "as_preconditioner",
]
