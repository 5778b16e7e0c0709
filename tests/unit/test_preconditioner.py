"""
Unit tests for preconditioner module.
"""
import numpy as np
import pytest

from pycg.core.vectors import dot

from pycg.preconditioner import (
    DiagonalPreconditioner,
    IdentityPreconditioner,
    MatrixPreconditioner,
    Preconditioner,
    as_preconditioner,
)


class TestIdentityPreconditioner:
    """Tests for IdentityPreconditioner."""

    def test_forward_copies(self) -> None:
        """forward should copy A into out."""
        P = IdentityPreconditioner()
        A = np.array([1.0, -2.0, 3.0])
        out = np.zeros(3)
        P.forward(out, A)
        np.testing.assert_array_equal(out, A)
        assert out is not A

    def test_dots_are_plain(self) -> None:
        """Both inner products reduce to the plain dot product."""
        P = IdentityPreconditioner()
        A = np.array([1.0, 2.0])
        B = np.array([3.0, 4.0])
        assert P.forward_dot(A, B) == pytest.approx(11.0)
        assert P.inverse_dot(A, B) == pytest.approx(11.0)


class TestDiagonalPreconditioner:
    """Tests for DiagonalPreconditioner."""

    def test_forward(self) -> None:
        """out[i] = p[i] * A[i]."""
        P = DiagonalPreconditioner(np.array([2.0, 0.5, -1.0]))
        out = np.empty(3)
        P.forward(out, np.array([1.0, 4.0, 3.0]))
        np.testing.assert_allclose(out, [2.0, 2.0, -3.0])

    def test_forward_dot(self) -> None:
        """forward_dot = sum A[i] p[i] B[i]."""
        P = DiagonalPreconditioner(np.array([2.0, 4.0]))
        assert P.forward_dot(np.array([1.0, 1.0]), np.array([3.0, 0.5])) == pytest.approx(8.0)

    def test_inverse_dot(self) -> None:
        """inverse_dot = sum A[i] B[i] / p[i]."""
        P = DiagonalPreconditioner(np.array([2.0, 4.0]))
        assert P.inverse_dot(np.ones(2), np.ones(2)) == pytest.approx(0.75)

    def test_ones_match_identity(self) -> None:
        """All-ones weights give exactly the identity results."""
        rng = np.random.RandomState(0)
        A = rng.randn(7)
        B = rng.randn(7)
        D = DiagonalPreconditioner(np.ones(7))
        I = IdentityPreconditioner()
        assert D.forward_dot(A, B) == I.forward_dot(A, B)
        assert D.inverse_dot(A, B) == I.inverse_dot(A, B)

    def test_rejects_2d(self) -> None:
        """Weights must be one-dimensional."""
        with pytest.raises(ValueError):
            DiagonalPreconditioner(np.ones((2, 2)))


class TestMatrixPreconditioner:
    """Tests for MatrixPreconditioner."""

    def test_operations(self) -> None:
        """forward, forward_dot and inverse_dot agree with dense algebra."""
        M = np.array([[2.0, 0.5], [0.5, 1.0]])
        P = MatrixPreconditioner(M)
        A = np.array([1.0, -1.0])
        B = np.array([0.5, 2.0])

        out = np.empty(2)
        P.forward(out, A)
        np.testing.assert_allclose(out, M @ A)
        assert P.forward_dot(A, B) == pytest.approx(A @ M @ B)
        assert P.inverse_dot(A, B) == pytest.approx(A @ np.linalg.solve(M, B))

    def test_non_square(self) -> None:
        """Non-square matrices are rejected."""
        with pytest.raises(ValueError):
            MatrixPreconditioner(np.ones((2, 3)))

    def test_not_positive_definite(self) -> None:
        """Indefinite matrices fail the Cholesky factorization."""
        with pytest.raises(np.linalg.LinAlgError):
            MatrixPreconditioner(np.array([[1.0, 0.0], [0.0, -1.0]]))

    def test_not_symmetric(self) -> None:
        """Non-symmetric matrices are rejected before factorization."""
        with pytest.raises(ValueError, match="symmetric"):
            MatrixPreconditioner(np.array([[2.0, 1.5], [0.0, 1.0]]))

    def test_set_matrix_refreshes_inverse(self) -> None:
        """Replacing the matrix also replaces the cached inverse."""
        P = MatrixPreconditioner(np.eye(2))
        M = np.array([[4.0, 1.0], [1.0, 3.0]])
        P.set_matrix(M)
        A = np.array([1.0, 2.0])
        B = np.array([-1.0, 0.5])
        assert P.inverse_dot(A, B) == pytest.approx(A @ np.linalg.solve(M, B))


def _spd(n: int) -> np.ndarray:
    rng = np.random.RandomState(3)
    Q = rng.randn(n, n)
    return Q @ Q.T + n * np.eye(n)


@pytest.mark.parametrize(
    "P",
    [
        IdentityPreconditioner(),
        DiagonalPreconditioner(np.array([0.5, 2.0, 1.0, 4.0])),
        MatrixPreconditioner(_spd(4)),
    ],
    ids=["identity", "diagonal", "matrix"],
)
class TestPreconditionerConsistency:
    """The three operations describe the same operator."""

    def test_forward_dot_matches_forward(self, P) -> None:
        rng = np.random.RandomState(11)
        A = rng.randn(4)
        B = rng.randn(4)
        assert P.forward_dot(A, B) == pytest.approx(dot(P.forward(np.empty(4), A), B))

    def test_inverse_dot_undoes_forward(self, P) -> None:
        rng = np.random.RandomState(12)
        A = rng.randn(4)
        B = rng.randn(4)
        assert P.inverse_dot(P.forward(np.empty(4), A), B) == pytest.approx(dot(A, B))


class TestAsPreconditioner:
    """Tests for as_preconditioner()."""

    def test_none_is_identity(self) -> None:
        assert isinstance(as_preconditioner(None), IdentityPreconditioner)

    def test_instance_passthrough(self) -> None:
        P = DiagonalPreconditioner(np.ones(2))
        assert as_preconditioner(P) is P

    def test_vector_is_diagonal(self) -> None:
        assert isinstance(as_preconditioner([1.0, 2.0]), DiagonalPreconditioner)

    def test_matrix(self) -> None:
        assert isinstance(as_preconditioner(np.eye(3)), MatrixPreconditioner)

    def test_unsupported(self) -> None:
        """Anything else should raise TypeError."""
        with pytest.raises(TypeError):
            as_preconditioner("diagonal")

    def test_all_are_preconditioners(self) -> None:
        for P in (None, [1.0], np.eye(1)):
            assert isinstance(as_preconditioner(P), Preconditioner)
