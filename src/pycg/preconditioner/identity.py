"""
Identity preconditioner (no preconditioning).

Simply copies its input; both inner products reduce to the plain dot
product. This is what the driver uses when P is None.
"""
import numpy as np

from pycg.core.vectors import dot

from .preconditioner import Preconditioner


class IdentityPreconditioner(Preconditioner):
    """
    Identity preconditioner - P = I.

    Example:
        >>> from pycg.preconditioner import IdentityPreconditioner
        >>> P = IdentityPreconditioner()
        >>> P.forward_dot(a, b) == np.dot(a, b)
        True
    """

    def forward(self, out: np.ndarray, A: np.ndarray) -> np.ndarray:
        np.copyto(out, A)
        return out

    def forward_dot(self, A: np.ndarray, B: np.ndarray) -> float:
        return dot(A, B)

    def inverse_dot(self, A: np.ndarray, B: np.ndarray) -> float:
        return dot(A, B)

    def get_name(self) -> str:
        """Return preconditioner name."""
        return "Identity"
