"""
Quadratic and cubic interpolating splines.

Both are stored as local power series on each interval [x_i, x_{i+1}]

    S_i(x) = sum_k c[k, i] * (x - x_i)**k

so evaluation and derivatives share one code path. Queries outside the node
span use the end pieces (polynomial extrapolation).

Cubic splines are built in moment form: the unknowns are M_i = S''(x_i),
the interior equations

    h_{i-1} M_{i-1} + 2 (h_{i-1} + h_i) M_i + h_i M_{i+1} = 6 (delta_i - delta_{i-1})

are tridiagonal, and the boundary condition closes the system. Quadratic
splines are built from node slopes d_i with d_i + d_{i+1} = 2 delta_i, a
lower-bidiagonal system.
"""

from __future__ import annotations

from typing import Literal

import numpy as np
from numpy.typing import NDArray

from ...exceptions import InterpolationError
from ..tridiag import Tridiag, solve_bidiag_lower, solve_tridiag_thomas

type CubicBC = Literal["not-a-knot", "natural"] | tuple[str, float, float]


def _prepare(nodes: NDArray, values: NDArray) -> tuple[NDArray, NDArray]:
    x = np.asarray(nodes, dtype=float)
    y = np.asarray(values, dtype=float)
    if x.ndim != 1:
        raise InterpolationError("nodes must be 1D")
    if y.shape != x.shape:
        raise InterpolationError("values must have the same shape as nodes")
    if x.size < 2:
        raise InterpolationError("need at least 2 nodes")
    if np.any(np.diff(x) <= 0.0):
        raise InterpolationError("nodes must be strictly increasing")
    return x, y


class _PiecewisePolynomial:
    __slots__ = ("x", "c")

    def __init__(self, x: NDArray[np.floating], c: NDArray[np.floating]) -> None:
        self.x = x
        self.c = c  # (order, n_intervals), c[k] multiplies (x - x_i)**k

    @property
    def order(self) -> int:
        return self.c.shape[0]

    def __call__(self, xq: NDArray | float, nu: int = 0) -> NDArray[np.floating]:
        if nu < 0:
            raise ValueError("nu must be >= 0")
        q = np.asarray(xq, dtype=float)
        i = np.clip(np.searchsorted(self.x, q, side="right") - 1, 0, self.x.size - 2)
        t = q - self.x[i]

        out = np.zeros_like(t, dtype=float)
        # Horner on the nu-th derivative of the local power series
        for k in range(self.order - 1, nu - 1, -1):
            fac = 1.0
            for m in range(nu):
                fac *= k - m
            out = out * t + fac * self.c[k, i]
        return out

    def derivative(self, xq: NDArray | float) -> NDArray[np.floating]:
        return self(xq, nu=1)


class QuadraticSpline(_PiecewisePolynomial):
    """C1 piecewise-quadratic interpolant.

    The node slopes satisfy ``d_i + d_{i+1} = 2*delta_i``, where ``delta_i``
    is the secant slope of interval i. One extra condition fixes the family:
    ``start_slope`` (default ``delta_0``, which makes the first piece linear).
    Errors in the start slope propagate undamped with alternating sign, a
    known weakness of quadratic splines.
    """

    __slots__ = ("slopes",)

    def __init__(
        self, nodes: NDArray, values: NDArray, start_slope: float | None = None
    ) -> None:
        x, y = _prepare(nodes, values)
        h = np.diff(x)
        delta = np.diff(y) / h
        N = x.size

        s0 = float(delta[0]) if start_slope is None else float(start_slope)
        rhs = np.concatenate(([s0], 2.0 * delta))
        d = solve_bidiag_lower(np.ones(N), np.ones(N - 1), rhs)

        c = np.empty((3, N - 1), dtype=float)
        c[0] = y[:-1]
        c[1] = d[:-1]
        c[2] = (delta - d[:-1]) / h
        super().__init__(x, c)
        self.slopes = d


class CubicSpline(_PiecewisePolynomial):
    """C2 cubic interpolating spline.

    ``bc`` is one of

    - ``"not-a-knot"`` (default): S''' continuous at x_1 and x_{N-2}.
      Three nodes give the interpolating parabola, two give the line.
    - ``"natural"``: S''(x_0) = S''(x_{N-1}) = 0.
    - ``("clamped", s0, sn)``: prescribed end slopes.

    ``moments`` holds the second derivatives at the nodes.
    """

    __slots__ = ("moments", "bc")

    def __init__(self, nodes: NDArray, values: NDArray, bc: CubicBC = "not-a-knot") -> None:
        x, y = _prepare(nodes, values)
        h = np.diff(x)
        delta = np.diff(y) / h

        if isinstance(bc, tuple):
            if len(bc) != 3 or bc[0] != "clamped":
                raise InterpolationError("tuple bc must be ('clamped', s0, sn)")
            M = _moments_clamped(h, delta, float(bc[1]), float(bc[2]))
        elif bc == "natural":
            M = _moments_natural(h, delta)
        elif bc == "not-a-knot":
            M = _moments_not_a_knot(x, h, delta)
        else:
            raise InterpolationError(
                f"Unknown bc '{bc}'. Expected 'not-a-knot', 'natural' or ('clamped', s0, sn)"
            )

        c = np.empty((4, x.size - 1), dtype=float)
        c[0] = y[:-1]
        c[1] = delta - h * (2.0 * M[:-1] + M[1:]) / 6.0
        c[2] = 0.5 * M[:-1]
        c[3] = (M[1:] - M[:-1]) / (6.0 * h)
        super().__init__(x, c)
        self.moments = M
        self.bc = bc


def _interior_system(h: NDArray, delta: NDArray) -> tuple[NDArray, NDArray, NDArray, NDArray]:
    # Rows i = 1..N-2 of the moment equations, unknowns M_1..M_{N-2}
    lower = h[1:-1].copy()
    diag = 2.0 * (h[:-1] + h[1:])
    upper = h[1:-1].copy()
    rhs = 6.0 * np.diff(delta)
    return lower, diag, upper, rhs


def _moments_natural(h: NDArray, delta: NDArray) -> NDArray[np.floating]:
    N = h.size + 1
    M = np.zeros(N, dtype=float)
    if N > 2:
        lower, diag, upper, rhs = _interior_system(h, delta)
        M[1:-1] = solve_tridiag_thomas(Tridiag(lower, diag, upper), rhs)
    return M


def _moments_clamped(h: NDArray, delta: NDArray, s0: float, sn: float) -> NDArray[np.floating]:
    N = h.size + 1
    diag = np.empty(N)
    lower = np.empty(N - 1)
    upper = np.empty(N - 1)
    rhs = np.empty(N)

    diag[0], upper[0], rhs[0] = 2.0 * h[0], h[0], 6.0 * (delta[0] - s0)
    diag[-1], lower[-1], rhs[-1] = 2.0 * h[-1], h[-1], 6.0 * (sn - delta[-1])
    if N > 2:
        _, diag[1:-1], _, rhs[1:-1] = _interior_system(h, delta)
        lower[:-1] = h[:-1]
        upper[1:] = h[1:]
    return solve_tridiag_thomas(Tridiag(lower, diag, upper), rhs)


def _moments_not_a_knot(x: NDArray, h: NDArray, delta: NDArray) -> NDArray[np.floating]:
    N = x.size
    if N == 2:
        return np.zeros(2)
    if N == 3:
        # Single parabola: constant second derivative
        return np.full(3, 2.0 * (delta[1] - delta[0]) / (x[2] - x[0]))

    lower, diag, upper, rhs = _interior_system(h, delta)

    # Eliminate M_0 = (1 + h0/h1) M_1 - (h0/h1) M_2 from the first interior row
    h0, h1 = h[0], h[1]
    diag[0] = (h0 + h1) * (h0 + 2.0 * h1) / h1
    upper[0] = (h1 * h1 - h0 * h0) / h1

    # and M_n = (1 + hn/hm) M_{n-1} - (hn/hm) M_{n-2} from the last
    hm, hn = h[-2], h[-1]
    diag[-1] = (hn + hm) * (hn + 2.0 * hm) / hm
    lower[-1] = (hm * hm - hn * hn) / hm

    M = np.empty(N, dtype=float)
    M[1:-1] = solve_tridiag_thomas(Tridiag(lower, diag, upper), rhs)
    M[0] = (1.0 + h0 / h1) * M[1] - (h0 / h1) * M[2]
    M[-1] = (1.0 + hn / hm) * M[-2] - (hn / hm) * M[-3]
    return M
