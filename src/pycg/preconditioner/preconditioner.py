"""
Abstract base class for preconditioners.

This module provides the Preconditioner ABC that defines the three
operations the conjugate gradient driver needs (forward application,
weighted inner product, inverse-weighted inner product) and the
as_preconditioner() helper that normalizes user input.
"""
from abc import ABC, abstractmethod
from typing import Any

import numpy as np


class Preconditioner(ABC):
    """
    Abstract base for preconditioners (Strategy Pattern).

    A preconditioner is a symmetric positive definite linear operator P
    applied to the gradient to improve the conditioning of the search
    direction. The driver calls prepare(x) once per iteration and then
    uses the operations below; it never mutates the preconditioner
    itself.

    Example:
        >>> P = DiagonalPreconditioner(np.array([1.0, 0.5]))
        >>> out = np.empty(2)
        >>> P.forward(out, np.array([2.0, 2.0]))
        array([2., 1.])
    """

    @abstractmethod
    def forward(self, out: np.ndarray, A: np.ndarray) -> np.ndarray:
        """
        Apply P to A, writing the result into out.

        Args:
            out: Output buffer, same length as A. Must not alias A.
            A: Input vector.

        Returns:
            out
        """
        pass

    @abstractmethod
    def forward_dot(self, A: np.ndarray, B: np.ndarray) -> float:
        """Return A^T P B."""
        pass

    @abstractmethod
    def inverse_dot(self, A: np.ndarray, B: np.ndarray) -> float:
        """Return A^T P^{-1} B."""
        pass

    def prepare(self, x: np.ndarray) -> None:
        """
        Refresh the preconditioner at the current point.

        Called once before the initial direction and once per iteration
        before the direction update. Default is a no-op.

        Args:
            x: Current position (read-only).
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get human-readable name of this preconditioner."""
        pass


def as_preconditioner(P: Any) -> Preconditioner:
    """
    Normalize the driver's P option to a Preconditioner.

    Args:
        P: None (identity), a Preconditioner, a 1-D array of diagonal
            weights, or a 2-D symmetric positive definite matrix.

    Returns:
        Preconditioner instance.

    Raises:
        TypeError: If P is none of the above.
    """
    from .diagonal import DiagonalPreconditioner
    from .identity import IdentityPreconditioner
    from .matrix import MatrixPreconditioner

    if P is None:
        return IdentityPreconditioner()
    if isinstance(P, Preconditioner):
        return P
    if isinstance(P, (np.ndarray, list, tuple)):
        arr = np.asarray(P, dtype=float)
        if arr.ndim == 1:
            return DiagonalPreconditioner(arr)
        if arr.ndim == 2:
            return MatrixPreconditioner(arr)
    raise TypeError(
        f"Unsupported preconditioner of type {type(P).__name__}; "
        "expected None, a Preconditioner, a 1-D or a 2-D array"
    )
