"""
General (dense matrix) preconditioner.

P is an explicit symmetric positive definite matrix. Its inverse is
formed once from the Cholesky factor and rebuilt whenever the matrix
is replaced via set_matrix().
"""
import numpy as np

from pycg.core.vectors import dot

from .preconditioner import Preconditioner


class MatrixPreconditioner(Preconditioner):
    """
    Dense SPD preconditioner.

    Attributes:
        M: Preconditioner matrix (n x n).

    Example:
        >>> M = np.array([[2.0, 0.5], [0.5, 1.0]])
        >>> P = MatrixPreconditioner(M)
        >>> out = P.forward(np.empty(2), np.ones(2))
    """

    def __init__(self, M: np.ndarray) -> None:
        """
        Initialize matrix preconditioner.

        Args:
            M: Symmetric positive definite matrix.

        Raises:
            ValueError: If M is not square or not symmetric.
            numpy.linalg.LinAlgError: If M is not positive definite.
        """
        self.set_matrix(M)

    def set_matrix(self, M: np.ndarray) -> None:
        """Replace the matrix and refactorize."""
        M = np.array(M, dtype=float)
        if M.ndim != 2 or M.shape[0] != M.shape[1]:
            raise ValueError(f"M must be a square matrix, got shape {M.shape}")
        # cholesky only reads the lower triangle
        if not np.allclose(M, M.T):
            raise ValueError("M must be symmetric")
        L_inv = np.linalg.inv(np.linalg.cholesky(M))
        self.M = M
        self._M_inv = L_inv.T @ L_inv

    def forward(self, out: np.ndarray, A: np.ndarray) -> np.ndarray:
        np.matmul(self.M, A, out=out)
        return out

    def forward_dot(self, A: np.ndarray, B: np.ndarray) -> float:
        return dot(A, self.M @ B)

    def inverse_dot(self, A: np.ndarray, B: np.ndarray) -> float:
        return dot(A, self._M_inv @ B)

    def get_name(self) -> str:
        """Return preconditioner name."""
        return f"Matrix(n={self.M.shape[0]})"
