"""
Diagonal preconditioner.

P = diag(p). All entries of p must be nonzero; inverse_dot divides by
them and this is not checked at runtime.
"""
import numpy as np

from pycg.core.vectors import dot

from .preconditioner import Preconditioner


class DiagonalPreconditioner(Preconditioner):
    """
    Diagonal preconditioner P = diag(p).

    The weights may be refreshed in place from prepare() by a subclass
    or by the driver's precondprep callback, e.g. to track an inverse
    Hessian diagonal.

    Attributes:
        p: Diagonal weights (1-D, nonzero entries).

    Example:
        >>> P = DiagonalPreconditioner(np.array([2.0, 4.0]))
        >>> P.inverse_dot(np.ones(2), np.ones(2))
        0.75
    """

    def __init__(self, p: np.ndarray) -> None:
        """
        Initialize diagonal preconditioner.

        Args:
            p: Diagonal weights. Copied to a float64 1-D array.

        Raises:
            ValueError: If p is not one-dimensional.
        """
        p = np.array(p, dtype=float)
        if p.ndim != 1:
            raise ValueError(f"p must be one-dimensional, got shape {p.shape}")
        self.p = p

    def forward(self, out: np.ndarray, A: np.ndarray) -> np.ndarray:
        np.multiply(self.p, A, out=out)
        return out

    def forward_dot(self, A: np.ndarray, B: np.ndarray) -> float:
        return dot(A, self.p * B)

    def inverse_dot(self, A: np.ndarray, B: np.ndarray) -> float:
        return dot(A, B / self.p)

    def get_name(self) -> str:
        """Return preconditioner name."""
        return f"Diagonal(n={self.p.size})"
