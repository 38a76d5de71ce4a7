"""
Global polynomial interpolation in Lagrange form.

Three equivalent representations of the degree-n interpolant through
(x_j, y_j), j = 0..n, are provided:

- Lagrange basis  p(x) = sum_j y_j l_j(x),  l_j(x_k) = delta_jk
- barycentric     p(x) = sum_j w_j y_j/(x-x_j) / sum_j w_j/(x-x_j)
- monomial        p(x) = sum_k c_k x^k  via the Vandermonde system

The barycentric form is what ``LagrangeInterpolant`` evaluates: it is O(n)
per point once the weights are known and numerically stable. The
Vandermonde path is kept for comparison; its condition number grows
exponentially with n.
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.polynomial import Polynomial
from numpy.typing import NDArray

from ...exceptions import InterpolationError


def _as_nodes(nodes: NDArray) -> NDArray[np.floating]:
    x = np.asarray(nodes, dtype=float)
    if x.ndim != 1 or x.size == 0:
        raise InterpolationError("nodes must be a non-empty 1D array")
    if np.unique(x).size != x.size:
        raise InterpolationError("nodes must be distinct")
    return x


def barycentric_weights(nodes: NDArray) -> NDArray[np.floating]:
    """w_j = 1 / prod_{k != j} (x_j - x_k)."""
    x = _as_nodes(nodes)
    diff = x[:, None] - x[None, :]
    np.fill_diagonal(diff, 1.0)
    return 1.0 / np.prod(diff, axis=1)


def lagrange_basis_matrix(nodes: NDArray, xq: NDArray) -> NDArray[np.floating]:
    """Evaluate every basis polynomial at every query point.

    Returns an array of shape (len(xq), len(nodes)) with entry [i, j] equal to
    l_j(xq_i). Rows sum to one (the basis reproduces constants).
    """
    x = _as_nodes(nodes)
    q = np.atleast_1d(np.asarray(xq, dtype=float))
    n = x.size

    out = np.ones((q.size, n), dtype=float)
    for j in range(n):
        for k in range(n):
            if k != j:
                out[:, j] *= (q - x[k]) / (x[j] - x[k])
    return out


def lagrange_basis(nodes: NDArray, j: int) -> Callable[[NDArray], NDArray]:
    """Return the j-th Lagrange basis polynomial l_j as a vectorized callable."""
    x = _as_nodes(nodes)
    if not (0 <= j < x.size):
        raise IndexError(f"j={j} out of range for {x.size} nodes")

    def l_j(xq: NDArray) -> NDArray:
        q = np.asarray(xq, dtype=float)
        vals = lagrange_basis_matrix(x, q.ravel())[:, j]
        if q.ndim == 0:
            return np.asarray(vals[0])
        return vals.reshape(q.shape)

    return l_j


def vandermonde_matrix(nodes: NDArray) -> NDArray[np.floating]:
    """V[i, k] = x_i**k (increasing powers)."""
    return np.vander(_as_nodes(nodes), increasing=True)


def vandermonde_coefficients(nodes: NDArray, values: NDArray) -> NDArray[np.floating]:
    """Monomial coefficients c (increasing powers) from V c = y."""
    V = vandermonde_matrix(nodes)
    y = np.asarray(values, dtype=float)
    if y.shape != (V.shape[0],):
        raise InterpolationError("values must have the same length as nodes")
    return np.linalg.solve(V, y)


class LagrangeInterpolant:
    """Degree-n polynomial interpolant through (nodes, values).

    Callable on scalars or arrays. Exact at the nodes by construction.
    """

    __slots__ = ("nodes", "values", "weights")

    def __init__(self, nodes: NDArray, values: NDArray) -> None:
        self.nodes = _as_nodes(nodes)
        self.values = np.asarray(values, dtype=float)
        if self.values.shape != self.nodes.shape:
            raise InterpolationError("values must have the same shape as nodes")
        self.weights = barycentric_weights(self.nodes)

    @property
    def degree(self) -> int:
        return self.nodes.size - 1

    def __call__(self, xq: NDArray | float) -> NDArray[np.floating]:
        q_in = np.asarray(xq, dtype=float)
        q = np.atleast_1d(q_in).ravel()

        diff = q[:, None] - self.nodes[None, :]
        hit = diff == 0.0
        with np.errstate(divide="ignore", invalid="ignore"):
            tmp = self.weights[None, :] / diff
            out = (tmp @ self.values) / tmp.sum(axis=1)

        rows, cols = np.nonzero(hit)
        out[rows] = self.values[cols]

        if q_in.ndim == 0:
            return np.asarray(out[0])
        return out.reshape(q_in.shape)

    def differentiation_matrix(self) -> NDArray[np.floating]:
        """D with (D @ values)[i] = p'(x_i)."""
        x, w = self.nodes, self.weights
        n = x.size
        D = np.zeros((n, n), dtype=float)
        for i in range(n):
            for j in range(n):
                if i != j:
                    D[i, j] = (w[j] / w[i]) / (x[i] - x[j])
            D[i, i] = -np.sum(D[i])
        return D

    def derivative(self) -> LagrangeInterpolant:
        """Interpolant of p' on the same nodes (exact: deg p' < number of nodes)."""
        if self.nodes.size == 1:
            return LagrangeInterpolant(self.nodes, np.zeros(1))
        return LagrangeInterpolant(self.nodes, self.differentiation_matrix() @ self.values)

    def to_polynomial(self) -> Polynomial:
        """The same polynomial as a ``numpy.polynomial.Polynomial``.

        The result keeps NumPy's scaled domain/window, which is much better
        conditioned than raw monomial coefficients.
        """
        return Polynomial.fit(self.nodes, self.values, deg=self.degree)

    def __repr__(self) -> str:
        return f"LagrangeInterpolant(degree={self.degree})"
