"""
Unit tests for linesearch module.
"""
import math

import numpy as np
import pytest

from pycg.core import DifferentiableFunction, LineSearchError
from pycg.core.vectors import dot
from pycg.linesearch import (
    BacktrackingLineSearch,
    HagerZhangLineSearch,
    LineSearchResults,
    alphainit,
    alphatry,
    linefunc,
    satisfies_wolfe,
    secant,
)
from pycg.problems import Quadratic, Rosenbrock


def seeded(df: DifferentiableFunction, x: np.ndarray, s: np.ndarray) -> LineSearchResults:
    """Cache seeded with the zero step, as the driver does."""
    gr = np.empty_like(x)
    phi0 = df.fg(x, gr)
    lsr = LineSearchResults()
    lsr.push(0.0, phi0, dot(gr, s))
    return lsr


@pytest.fixture
def rosenbrock_setup():
    """Rosenbrock at its standard start, steepest descent direction."""
    problem = Rosenbrock()
    df = problem.as_function()
    x = problem.initial_x
    s = -problem.gradient(x)
    return df, x, s


# =============================================================================
# Cache and helpers
# =============================================================================


class TestLineSearchResults:
    """Tests for LineSearchResults."""

    def test_push_and_clear(self) -> None:
        lsr = LineSearchResults()
        lsr.push(0.0, 1.0, -2.0)
        lsr.push(0.5, 0.5, 0.1)
        lsr.nfailures = 3
        assert len(lsr) == 2
        assert lsr.alpha == [0.0, 0.5]

        lsr.clear()
        assert len(lsr) == 0
        assert lsr.nfailures == 0


class TestLinefunc:
    """Tests for linefunc()."""

    def test_value_and_slope(self) -> None:
        """phi(alpha) and phi'(alpha) of x . x along s."""
        df = Quadratic(dimension=2).as_function()
        x = np.array([1.0, 0.0])
        s = np.array([-1.0, 0.0])
        x_ls = np.empty(2)
        gr_ls = np.empty(2)

        phi, dphi = linefunc(df, x, s, 0.25, x_ls, gr_ls, True)

        assert phi == pytest.approx(0.5625)
        assert dphi == pytest.approx(-1.5)
        np.testing.assert_allclose(x_ls, [0.75, 0.0])

    def test_without_gradient(self) -> None:
        """Slope is NaN when not requested."""
        df = Quadratic(dimension=2).as_function()
        _, dphi = linefunc(df, np.ones(2), -np.ones(2), 0.5, np.empty(2), np.empty(2), False)
        assert math.isnan(dphi)

    def test_does_not_modify_inputs(self) -> None:
        df = Quadratic(dimension=2).as_function()
        x = np.array([1.0, 2.0])
        s = np.array([-1.0, -1.0])
        linefunc(df, x, s, 0.5, np.empty(2), np.empty(2), True)
        np.testing.assert_array_equal(x, [1.0, 2.0])
        np.testing.assert_array_equal(s, [-1.0, -1.0])


class TestWolfeHelpers:
    """Tests for satisfies_wolfe() and secant()."""

    def test_exact_minimizer_is_wolfe(self) -> None:
        """phi(c) = (c - 1)^2: c = 1 satisfies Wolfe."""
        assert satisfies_wolfe(1.0, 0.0, 0.0, 1.0, -2.0, 1.0, 0.1, 0.9)

    def test_tiny_step_is_not_wolfe(self) -> None:
        """A step too short fails the curvature condition."""
        c = 1e-3
        phic = (c - 1.0) ** 2
        dphic = 2.0 * (c - 1.0)
        assert not satisfies_wolfe(c, phic, dphic, 1.0, -2.0, 1.0, 0.1, 0.9)

    def test_secant_root(self) -> None:
        """Secant of a linear derivative hits its root."""
        assert secant(0.0, 2.0, -2.0, 2.0) == pytest.approx(1.0)

    def test_secant_equal_slopes(self) -> None:
        """Parallel slopes have no root and fall outside any bracket."""
        c = secant(17.5, 10.5, 3.0, 3.0)
        assert math.isnan(c)
        assert not (10.5 <= c <= 17.5)


# =============================================================================
# Initial step
# =============================================================================


class TestAlphaInit:
    """Tests for alphainit()."""

    def test_keeps_known_step(self) -> None:
        assert alphainit(0.3, np.ones(2), np.ones(2), 1.0) == 0.3

    def test_scales_with_x(self) -> None:
        """psi0 * |x|_inf / |g|_inf."""
        alpha = alphainit(math.nan, np.array([1.0, 2.0, 3.0]), np.array([2.0, 4.0, 6.0]), 14.0)
        assert alpha == pytest.approx(0.005)

    def test_x_zero_uses_f(self) -> None:
        """psi0 * |f| / |g|^2 when x is zero."""
        alpha = alphainit(math.nan, np.zeros(2), np.array([1.0, 1.0]), 4.0)
        assert alpha == pytest.approx(0.02)

    def test_zero_gradient(self) -> None:
        assert alphainit(math.nan, np.ones(2), np.zeros(2), 1.0) == 1.0


class TestAlphaTry:
    """Tests for alphatry()."""

    def test_quadratic_fit_is_exact(self) -> None:
        """On x . x the quadratic fit recovers the exact minimizer."""
        df = Quadratic(dimension=3).as_function()
        x = np.array([1.0, 2.0, 3.0])
        s = -2.0 * x
        lsr = seeded(df, x, s)

        alpha, mayterminate, f_calls, g_calls = alphatry(
            0.005, df, x, s, np.empty(3), np.empty(3), lsr
        )

        assert alpha == pytest.approx(0.5)
        assert mayterminate
        assert f_calls == 1
        assert g_calls == 0

    def test_uphill_trial_step_is_returned(self) -> None:
        """A trial step that increases phi is returned unchanged."""
        df = Quadratic(dimension=1).as_function()
        x = np.array([1.0])
        s = np.array([-1.0])
        lsr = seeded(df, x, s)

        alpha, mayterminate, _, _ = alphatry(20.0, df, x, s, np.empty(1), np.empty(1), lsr)

        assert alpha == pytest.approx(4.0)
        assert not mayterminate

    def test_respects_alphamax(self) -> None:
        df = Quadratic(dimension=3).as_function()
        x = np.array([1.0, 2.0, 3.0])
        s = -2.0 * x
        lsr = seeded(df, x, s)

        alpha, mayterminate, _, _ = alphatry(
            0.005, df, x, s, np.empty(3), np.empty(3), lsr, alphamax=0.1
        )

        assert alpha == pytest.approx(0.1)
        assert not mayterminate

    def test_non_finite_trial_step_shrinks(self) -> None:
        """Non-finite trial steps are shrunk and counted as failures."""
        def f(x):
            return math.inf if x[0] < 0.5 else float((x[0] - 1.0) ** 2)

        def g(x, out):
            out[0] = 2.0 * (x[0] - 1.0)

        df = DifferentiableFunction(f, g)
        x = np.array([2.0])
        s = np.array([-1.0])
        lsr = seeded(df, x, s)

        alpha, _, f_calls, _ = alphatry(10.0, df, x, s, np.empty(1), np.empty(1), lsr)

        assert lsr.nfailures == 1
        assert f_calls == 2
        assert math.isfinite(alpha) and alpha > 0


# =============================================================================
# Hager-Zhang
# =============================================================================


class TestHagerZhangLineSearch:
    """Tests for HagerZhangLineSearch."""

    def test_returns_wolfe_point(self, rosenbrock_setup) -> None:
        """The accepted step satisfies (approximate) Wolfe."""
        df, x, s = rosenbrock_setup
        ls = HagerZhangLineSearch()
        lsr = seeded(df, x, s)
        phi0, dphi0 = lsr.value[0], lsr.slope[0]

        alpha, f_calls, g_calls = ls(df, x, s, np.empty(2), np.empty(2), lsr, 1.0, False)

        phic, dphic = linefunc(df, x, s, alpha, np.empty(2), np.empty(2), True)
        philim = phi0 + ls.epsilon * abs(phi0)
        assert alpha > 0
        assert satisfies_wolfe(alpha, phic, dphic, phi0, dphi0, philim, ls.delta, ls.sigma)
        assert f_calls == g_calls
        assert f_calls == len(lsr) - 1

    def test_accepts_quadratic_fit(self) -> None:
        """With mayterminate a Wolfe trial step is returned immediately."""
        df = Quadratic(dimension=3).as_function()
        x = np.array([1.0, 2.0, 3.0])
        s = -2.0 * x
        lsr = seeded(df, x, s)

        alpha, f_calls, g_calls = HagerZhangLineSearch()(
            df, x, s, np.empty(3), np.empty(3), lsr, 0.5, True
        )

        assert alpha == 0.5
        assert (f_calls, g_calls) == (1, 1)

    def test_expands_short_step(self) -> None:
        """A far too short trial step is expanded to bracket the minimum."""
        df = Quadratic(dimension=2).as_function()
        x = np.array([1.0, 1.0])
        s = -x
        lsr = seeded(df, x, s)

        alpha, _, _ = HagerZhangLineSearch()(
            df, x, s, np.empty(2), np.empty(2), lsr, 1e-3, False
        )

        assert alpha > 0.5
        assert alpha < 1.5

    def test_non_finite_trial_shrinks(self) -> None:
        """Non-finite values at the trial step shrink it."""
        def f(x):
            return math.nan if x[0] < 0.0 else float((x[0] - 1.0) ** 2)

        def g(x, out):
            out[0] = 2.0 * (x[0] - 1.0)

        df = DifferentiableFunction(f, g)
        x = np.array([3.0])
        s = np.array([-1.0])
        lsr = seeded(df, x, s)

        alpha, _, _ = HagerZhangLineSearch()(
            df, x, s, np.empty(1), np.empty(1), lsr, 10.0, False
        )

        assert lsr.nfailures >= 1
        assert 0 < alpha <= 3.0

    def test_piecewise_linear_line_function(self) -> None:
        """Huber loss is linear away from its minimum; the search still lands on Wolfe."""
        delta = 0.1

        def f(x):
            r = np.abs(x - 1.0)
            return float(np.sum(np.where(r <= delta, 0.5 * r**2, delta * (r - 0.5 * delta))))

        def g(x, out):
            np.clip(x - 1.0, -delta, delta, out=out)

        df = DifferentiableFunction(f, g)
        x = np.array([-3.0, 5.0, -7.0])
        gr = np.empty(3)
        df.g(x, gr)
        s = -gr
        lsr = seeded(df, x, s)
        phi0, dphi0 = lsr.value[0], lsr.slope[0]
        ls = HagerZhangLineSearch()

        alpha, _, _ = ls(df, x, s, np.empty(3), np.empty(3), lsr, 150.0, False)

        phic, dphic = linefunc(df, x, s, alpha, np.empty(3), np.empty(3), True)
        philim = phi0 + ls.epsilon * abs(phi0)
        assert alpha > 0
        assert satisfies_wolfe(alpha, phic, dphic, phi0, dphi0, philim, ls.delta, ls.sigma)

    def test_exhausted_budget_raises(self, rosenbrock_setup) -> None:
        """linesearchmax = 1 leaves no room for bracketing."""
        df, x, s = rosenbrock_setup
        lsr = seeded(df, x, s)
        ls = HagerZhangLineSearch(linesearchmax=1)
        with pytest.raises(LineSearchError):
            ls(df, x, s, np.empty(2), np.empty(2), lsr, 1e-4, False)

    def test_non_finite_start_raises(self) -> None:
        df = Quadratic(dimension=1).as_function()
        lsr = LineSearchResults()
        lsr.push(0.0, math.nan, -1.0)
        with pytest.raises(LineSearchError):
            HagerZhangLineSearch()(
                df, np.ones(1), -np.ones(1), np.empty(1), np.empty(1), lsr, 1.0, False
            )

    def test_invalid_step_raises(self) -> None:
        df = Quadratic(dimension=1).as_function()
        x = np.ones(1)
        s = -np.ones(1)
        lsr = seeded(df, x, s)
        with pytest.raises(LineSearchError):
            HagerZhangLineSearch()(df, x, s, np.empty(1), np.empty(1), lsr, 0.0, False)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"delta": 0.0},
            {"delta": 0.6},
            {"sigma": 0.05},
            {"sigma": 1.0},
            {"rho": 1.0},
            {"gamma": 1.5},
            {"linesearchmax": 0},
            {"alphamax": 0.0},
        ],
    )
    def test_invalid_parameters(self, kwargs) -> None:
        with pytest.raises(ValueError):
            HagerZhangLineSearch(**kwargs)

    def test_get_name(self) -> None:
        assert "HagerZhang" in HagerZhangLineSearch().get_name()


# =============================================================================
# Backtracking
# =============================================================================


class TestBacktrackingLineSearch:
    """Tests for BacktrackingLineSearch."""

    def test_satisfies_armijo(self, rosenbrock_setup) -> None:
        """The accepted step gives sufficient decrease."""
        df, x, s = rosenbrock_setup
        ls = BacktrackingLineSearch()
        lsr = seeded(df, x, s)
        phi0, dphi0 = lsr.value[0], lsr.slope[0]

        alpha, f_calls, g_calls = ls(df, x, s, np.empty(2), np.empty(2), lsr, 1.0, False)

        phic, _ = linefunc(df, x, s, alpha, np.empty(2), np.empty(2), False)
        assert 0 < alpha <= 1.0
        assert phic <= phi0 + ls.c1 * alpha * dphi0
        assert g_calls == 0
        assert f_calls >= 1
        assert lsr.alpha[-1] == alpha

    def test_accepts_good_step(self) -> None:
        """The trial step is kept when it already satisfies Armijo."""
        df = Quadratic(dimension=2).as_function()
        x = np.array([1.0, 1.0])
        s = -x
        lsr = seeded(df, x, s)
        alpha, f_calls, _ = BacktrackingLineSearch()(
            df, x, s, np.empty(2), np.empty(2), lsr, 1.0, False
        )
        assert alpha == 1.0
        assert f_calls == 1

    def test_too_many_iterations(self) -> None:
        df = Quadratic(dimension=1).as_function()
        x = np.array([1.0])
        s = np.array([-2.0])
        lsr = seeded(df, x, s)
        with pytest.raises(LineSearchError):
            BacktrackingLineSearch(iterations=1)(
                df, x, s, np.empty(1), np.empty(1), lsr, 100.0, False
            )

    @pytest.mark.parametrize(
        "kwargs",
        [{"c1": 0.0}, {"c1": 1.0}, {"rholo": 0.6, "rhohi": 0.5}, {"iterations": 0}],
    )
    def test_invalid_parameters(self, kwargs) -> None:
        with pytest.raises(ValueError):
            BacktrackingLineSearch(**kwargs)
