"""
Unit tests for assess_convergence().
"""
import numpy as np

from pycg.minimizer import assess_convergence


class TestAssessConvergence:
    """Tests for the multi-criterion convergence test."""

    def test_nothing_converged(self) -> None:
        flags = assess_convergence(
            np.array([1.0]), np.array([2.0]), 1.0, 2.0, np.array([1.0]),
            1e-8, 1e-8, 1e-8,
        )
        assert flags == (False, False, False, False)

    def test_x_converged(self) -> None:
        x_conv, f_conv, gr_conv, conv = assess_convergence(
            np.array([1.0, 1.0]), np.array([1.0, 1.0 + 1e-12]), 1.0, 2.0,
            np.array([1.0, 1.0]), 1e-10, 1e-8, 1e-8,
        )
        assert x_conv and conv
        assert not f_conv and not gr_conv

    def test_f_converged_relative(self) -> None:
        _, f_conv, _, conv = assess_convergence(
            np.array([1.0]), np.array([2.0]), 1.0, 1.0 + 1e-12,
            np.array([1.0]), 0.0, 1e-8, 1e-8,
        )
        assert f_conv and conv

    def test_f_converged_without_decrease(self) -> None:
        """A step that does not lower f counts as f convergence."""
        _, f_conv, _, _ = assess_convergence(
            np.array([1.0]), np.array([2.0]), 3.0, 1.0,
            np.array([1.0]), 0.0, 0.0, 0.0,
        )
        assert f_conv

    def test_gradient_converged(self) -> None:
        _, _, gr_conv, conv = assess_convergence(
            np.array([1.0]), np.array([2.0]), 1.0, 2.0,
            np.array([1e-10, -1e-9]), 1e-8, 1e-8, 1e-8,
        )
        assert gr_conv and conv

    def test_gradient_uses_infinity_norm(self) -> None:
        _, _, gr_conv, _ = assess_convergence(
            np.array([1.0]), np.array([2.0]), 1.0, 2.0,
            np.array([0.5, -2.0]), 0.0, 0.0, 1.0,
        )
        assert not gr_conv

    def test_zero_tolerances(self) -> None:
        """With zero tolerances only an exact hit or no decrease converges."""
        flags = assess_convergence(
            np.array([1.0]), np.array([2.0]), 1.0, 2.0, np.array([0.0]),
            0.0, 0.0, 0.0,
        )
        assert flags == (False, False, False, False)
