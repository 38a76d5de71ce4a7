# tests/test_interpolation.py
import numpy as np
import pytest
from scipy import interpolate

from numcourse.exceptions import InterpolationError
from numcourse.numerics.interp import (
    CubicSpline,
    LagrangeInterpolant,
    PiecewiseLinear,
    QuadraticSpline,
    barycentric_weights,
    chebyshev_nodes,
    equispaced_nodes,
    fritsch_carlson,
    hat_function,
    lagrange_basis,
    lagrange_basis_matrix,
    make_nodes,
    vandermonde_coefficients,
)
from numcourse.problems import runge

# --- Nodes ------------------------------------------------------------------


def test_equispaced_nodes_include_endpoints() -> None:
    x = equispaced_nodes(-1.0, 3.0, 4)
    np.testing.assert_allclose(x, [-1.0, 0.0, 1.0, 2.0, 3.0])
    np.testing.assert_allclose(equispaced_nodes(0.0, 2.0, 0), [1.0])


def test_chebyshev_nodes_are_sorted_interior_roots() -> None:
    n = 7
    x = chebyshev_nodes(-1.0, 1.0, n)
    assert x.shape == (n + 1,)
    assert np.all(np.diff(x) > 0.0)
    assert x[0] > -1.0 and x[-1] < 1.0
    # roots of T_{n+1}
    np.testing.assert_allclose(np.cos((n + 1) * np.arccos(x)), 0.0, atol=1e-12)

    y = chebyshev_nodes(2.0, 6.0, n)
    np.testing.assert_allclose(y, 4.0 + 2.0 * x)


def test_make_nodes_dispatch() -> None:
    np.testing.assert_allclose(make_nodes("chebyshev", 0.0, 1.0, 3), chebyshev_nodes(0.0, 1.0, 3))
    with pytest.raises(ValueError):
        make_nodes("random", 0.0, 1.0, 3)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        equispaced_nodes(1.0, 0.0, 3)


# --- Lagrange ---------------------------------------------------------------


def test_basis_is_kronecker_delta_at_nodes() -> None:
    x = np.array([0.0, 2.0, 3.0, 4.0])
    np.testing.assert_allclose(lagrange_basis_matrix(x, x), np.eye(4), atol=1e-14)

    l1 = lagrange_basis(x, 1)
    np.testing.assert_allclose(l1(x), [0.0, 1.0, 0.0, 0.0], atol=1e-14)


def test_basis_partition_of_unity() -> None:
    x = chebyshev_nodes(-1.0, 1.0, 9)
    xq = np.linspace(-1.0, 1.0, 37)
    np.testing.assert_allclose(lagrange_basis_matrix(x, xq).sum(axis=1), 1.0, atol=1e-12)


def test_barycentric_weights_annihilate_low_powers() -> None:
    x = np.array([0.0, 0.4, 1.1, 1.5, 2.0])
    w = barycentric_weights(x)
    for k in range(x.size - 1):
        assert np.sum(w * x**k) == pytest.approx(0.0, abs=1e-10)


def test_interpolant_reproduces_polynomial(rng) -> None:
    g = rng(11)
    x = np.sort(g.uniform(-1.0, 1.0, size=6))
    coeffs = g.normal(size=5)  # degree 4 < 6 nodes
    p_true = np.polynomial.Polynomial(coeffs)

    p = LagrangeInterpolant(x, p_true(x))
    xq = np.linspace(-1.0, 1.0, 41)

    assert p.degree == 5
    np.testing.assert_allclose(p(xq), p_true(xq), atol=1e-10)
    np.testing.assert_allclose(p.derivative()(xq), p_true.deriv()(xq), atol=1e-9)
    np.testing.assert_allclose(p.to_polynomial()(xq), p_true(xq), atol=1e-10)


def test_interpolant_exact_at_nodes_and_matches_basis_form() -> None:
    x = np.array([0.0, 2.0, 3.0, 4.0])
    y = np.array([1.0, 1.0, 2.0, 0.0])
    p = LagrangeInterpolant(x, y)

    np.testing.assert_array_equal(p(x), y)
    assert p(2.0).ndim == 0

    xq = np.linspace(-0.5, 4.5, 23)
    np.testing.assert_allclose(p(xq), lagrange_basis_matrix(x, xq) @ y, atol=1e-12)


def test_vandermonde_coefficients_recover_monomials() -> None:
    x = np.array([-1.0, 0.5, 2.0])
    y = 1.0 + 2.0 * x + 3.0 * x**2
    np.testing.assert_allclose(vandermonde_coefficients(x, y), [1.0, 2.0, 3.0], atol=1e-12)


def test_duplicate_nodes_rejected() -> None:
    with pytest.raises(InterpolationError):
        LagrangeInterpolant([0.0, 1.0, 1.0], [0.0, 1.0, 2.0])
    with pytest.raises(InterpolationError):
        LagrangeInterpolant([0.0, 1.0], [0.0])


def test_runge_phenomenon_equispaced_vs_chebyshev() -> None:
    xq = np.linspace(-1.0, 1.0, 2001)

    def max_err(kind: str, n: int) -> float:
        x = make_nodes(kind, -1.0, 1.0, n)  # type: ignore[arg-type]
        return float(np.max(np.abs(LagrangeInterpolant(x, runge(x))(xq) - runge(xq))))

    # equispaced error grows with the degree, Chebyshev error decays
    assert max_err("equispaced", 20) > max_err("equispaced", 10) > 1.0
    assert max_err("chebyshev", 20) < max_err("chebyshev", 10) < 0.2
    assert max_err("chebyshev", 20) < 0.05


# --- Piecewise linear -------------------------------------------------------


def test_hat_functions_partition_unity() -> None:
    x = np.array([0.0, 0.5, 1.5, 2.0, 3.5])
    xq = np.linspace(0.0, 3.5, 71)
    total = sum(hat_function(x, j)(xq) for j in range(x.size))
    np.testing.assert_allclose(total, 1.0, atol=1e-14)

    phi2 = hat_function(x, 2)
    np.testing.assert_allclose(phi2(x), [0.0, 0.0, 1.0, 0.0, 0.0])
    assert phi2(1.0) == pytest.approx(0.5)
    assert phi2(3.0) == 0.0


def test_piecewise_linear_values_and_locality() -> None:
    x = np.array([0.0, 2.0, 3.0, 4.0])
    y = np.array([1.0, 1.0, 2.0, 0.0])
    s = PiecewiseLinear(x, y)

    np.testing.assert_allclose(s(x), y)
    assert s(2.5) == pytest.approx(1.5)
    assert s(3.5) == pytest.approx(1.0)
    np.testing.assert_allclose(s.slopes, [0.0, 1.0, -2.0])

    # moving y_3 leaves [x_0, x_2] untouched
    y2 = y.copy()
    y2[3] = 10.0
    xq = np.linspace(0.0, 3.0, 31)
    np.testing.assert_array_equal(PiecewiseLinear(x, y2)(xq), s(xq))


def test_piecewise_linear_outside_span() -> None:
    x = np.array([0.0, 1.0, 2.0])
    y = np.array([0.0, 1.0, 3.0])
    assert np.isnan(PiecewiseLinear(x, y)(-0.5))
    assert np.isnan(PiecewiseLinear(x, y).derivative(2.5))

    ext = PiecewiseLinear(x, y, extrapolate=True)
    assert ext(-0.5) == pytest.approx(-0.5)
    assert ext(3.0) == pytest.approx(5.0)
    assert ext.derivative(2.0) == pytest.approx(2.0)


def test_piecewise_linear_needs_increasing_nodes() -> None:
    with pytest.raises(InterpolationError):
        PiecewiseLinear([0.0, 2.0, 1.0], [0.0, 1.0, 2.0])
    with pytest.raises(InterpolationError):
        PiecewiseLinear([0.0], [1.0])


# --- Quadratic spline -------------------------------------------------------


def test_quadratic_spline_interpolates_and_is_c1() -> None:
    x = np.array([0.0, 2.0, 3.0, 4.0])
    y = np.array([1.0, 1.0, 2.0, 0.0])
    s = QuadraticSpline(x, y)

    np.testing.assert_allclose(s(x), y, atol=1e-14)
    # default start slope makes the first piece linear
    assert s.c[2, 0] == 0.0
    np.testing.assert_allclose(s.slopes, [0.0, 0.0, 2.0, -6.0])

    h = np.diff(x)
    left_slope = s.c[1, :-1] + 2.0 * s.c[2, :-1] * h[:-1]
    np.testing.assert_allclose(left_slope, s.c[1, 1:], atol=1e-12)
    np.testing.assert_allclose(s.derivative(x[:-1]), s.slopes[:-1], atol=1e-12)


def test_quadratic_spline_reproduces_parabola_with_exact_start_slope() -> None:
    x = np.array([0.0, 0.3, 1.0, 1.2, 2.0])
    f = lambda t: 2.0 * t * t - t + 0.5  # noqa: E731
    s = QuadraticSpline(x, f(x), start_slope=-1.0)

    xq = np.linspace(0.0, 2.0, 41)
    np.testing.assert_allclose(s(xq), f(xq), atol=1e-12)
    np.testing.assert_allclose(s(xq, nu=2), 4.0, atol=1e-10)


# --- Cubic spline -----------------------------------------------------------


@pytest.fixture
def spline_data(rng, irregular_grid):
    g = rng(99)
    x = irregular_grid(g, n=9, x0=-1.0)
    y = np.sin(2.0 * x) + 0.3 * x
    xq = np.linspace(x[0] - 0.1, x[-1] + 0.1, 97)
    return x, y, xq


@pytest.mark.parametrize(
    "bc, scipy_bc",
    [
        ("not-a-knot", "not-a-knot"),
        ("natural", "natural"),
        (("clamped", 0.7, -1.2), ((1, 0.7), (1, -1.2))),
    ],
)
def test_cubic_spline_matches_scipy(spline_data, bc, scipy_bc) -> None:
    x, y, xq = spline_data
    ours = CubicSpline(x, y, bc=bc)
    ref = interpolate.CubicSpline(x, y, bc_type=scipy_bc)

    for nu in (0, 1, 2):
        np.testing.assert_allclose(ours(xq, nu=nu), ref(xq, nu), rtol=1e-9, atol=1e-10)
    np.testing.assert_allclose(ours.moments, ref(x, 2), atol=1e-9)


def test_natural_spline_has_zero_end_moments(spline_data) -> None:
    x, y, _ = spline_data
    s = CubicSpline(x, y, bc="natural")
    assert s.moments[0] == 0.0 and s.moments[-1] == 0.0


def test_not_a_knot_reproduces_cubic() -> None:
    x = np.array([0.0, 0.5, 0.9, 1.6, 2.0, 3.0])
    p = np.polynomial.Polynomial([1.0, -2.0, 0.5, 0.25])
    s = CubicSpline(x, p(x))

    xq = np.linspace(-0.5, 3.5, 81)
    np.testing.assert_allclose(s(xq), p(xq), atol=1e-10)
    np.testing.assert_allclose(s(xq, nu=3), 6.0 * 0.25, atol=1e-9)


def test_clamped_with_exact_slopes_reproduces_cubic() -> None:
    x = np.array([0.0, 1.0, 1.5, 3.0])
    p = np.polynomial.Polynomial([0.0, 1.0, -1.0, 0.5])
    dp = p.deriv()
    s = CubicSpline(x, p(x), bc=("clamped", dp(0.0), dp(3.0)))
    np.testing.assert_allclose(s(np.linspace(0.0, 3.0, 31)), p(np.linspace(0.0, 3.0, 31)), atol=1e-12)


def test_not_a_knot_few_nodes() -> None:
    # three nodes: the interpolating parabola; two nodes: the line
    x3 = np.array([0.0, 1.0, 3.0])
    f = lambda t: t * t - 2.0 * t + 3.0  # noqa: E731
    xq = np.linspace(-1.0, 4.0, 21)
    np.testing.assert_allclose(CubicSpline(x3, f(x3))(xq), f(xq), atol=1e-12)

    s2 = CubicSpline([1.0, 3.0], [2.0, 6.0])
    np.testing.assert_allclose(s2(xq), 2.0 * xq, atol=1e-12)


def test_cubic_spline_bad_bc() -> None:
    with pytest.raises(InterpolationError):
        CubicSpline([0.0, 1.0, 2.0], [0.0, 1.0, 0.0], bc="periodic")  # type: ignore[arg-type]
    with pytest.raises(InterpolationError):
        CubicSpline([0.0, 1.0, 2.0], [0.0, 1.0, 0.0], bc=("fixed", 0.0, 0.0))


def test_spline_beats_global_polynomial_on_runge() -> None:
    x = equispaced_nodes(-1.0, 1.0, 16)
    xq = np.linspace(-1.0, 1.0, 1001)
    err_poly = np.max(np.abs(LagrangeInterpolant(x, runge(x))(xq) - runge(xq)))
    err_spline = np.max(np.abs(CubicSpline(x, runge(x))(xq) - runge(xq)))
    assert err_spline < 0.05 < err_poly


# --- Monotone cubic ---------------------------------------------------------


def test_fritsch_carlson_is_monotone_and_interpolates() -> None:
    x = np.array([0.0, 1.0, 2.0, 3.0, 4.0, 5.0])
    y = np.array([0.0, 0.1, 0.1, 2.0, 2.1, 5.0])
    p = fritsch_carlson(x, y)

    np.testing.assert_allclose(p(x), y, atol=1e-14)
    xq = np.linspace(-1.0, 6.0, 701)
    assert np.all(np.diff(p(xq)) >= -1e-14)
    # flat interval stays flat
    np.testing.assert_allclose(p(np.linspace(1.0, 2.0, 11)), 0.1, atol=1e-14)
    assert p(-1.0) == 0.0 and p(6.0) == 5.0


def test_fritsch_carlson_rejects_non_monotone() -> None:
    with pytest.raises(InterpolationError):
        fritsch_carlson(np.array([0.0, 1.0, 2.0]), np.array([0.0, 1.0, 0.5]))
