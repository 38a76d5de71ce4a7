"""Piecewise-linear (C0) interpolation and its hat-function basis."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import NDArray

from ...exceptions import InterpolationError


def _as_sorted_nodes(nodes: NDArray, min_points: int = 2) -> NDArray[np.floating]:
    x = np.asarray(nodes, dtype=float)
    if x.ndim != 1:
        raise InterpolationError("nodes must be 1D")
    if x.size < min_points:
        raise InterpolationError(f"need at least {min_points} nodes")
    if np.any(np.diff(x) <= 0.0):
        raise InterpolationError("nodes must be strictly increasing")
    return x


def hat_function(nodes: NDArray, j: int) -> Callable[[NDArray], NDArray]:
    """Piecewise-linear Lagrange basis phi_j: 1 at x_j, 0 at every other node.

    Supported on [x_{j-1}, x_{j+1}]; the end hats are one-sided.
    """
    x = _as_sorted_nodes(nodes)
    n = x.size
    if not (0 <= j < n):
        raise IndexError(f"j={j} out of range for {n} nodes")

    def phi(xq: NDArray) -> NDArray:
        q = np.asarray(xq, dtype=float)
        out = np.zeros_like(q, dtype=float)
        if j > 0:
            rise = (q >= x[j - 1]) & (q <= x[j])
            out = np.where(rise, (q - x[j - 1]) / (x[j] - x[j - 1]), out)
        if j < n - 1:
            fall = (q >= x[j]) & (q <= x[j + 1])
            out = np.where(fall, (x[j + 1] - q) / (x[j + 1] - x[j]), out)
        return np.where(q == x[j], 1.0, out)

    return phi


class PiecewiseLinear:
    """C0 piecewise-linear interpolant.

    On [x_i, x_{i+1}] the value depends only on y_i and y_{i+1}. Outside the
    node span the result is NaN unless ``extrapolate=True``, in which case the
    end segments are extended.
    """

    __slots__ = ("nodes", "values", "extrapolate")

    def __init__(self, nodes: NDArray, values: NDArray, *, extrapolate: bool = False):
        self.nodes = _as_sorted_nodes(nodes)
        self.values = np.asarray(values, dtype=float)
        if self.values.shape != self.nodes.shape:
            raise InterpolationError("values must have the same shape as nodes")
        self.extrapolate = bool(extrapolate)

    @property
    def slopes(self) -> NDArray[np.floating]:
        return np.diff(self.values) / np.diff(self.nodes)

    def __call__(self, xq: NDArray | float) -> NDArray[np.floating]:
        q = np.asarray(xq, dtype=float)
        x, y = self.nodes, self.values

        i = np.clip(np.searchsorted(x, q, side="right") - 1, 0, x.size - 2)
        t = (q - x[i]) / (x[i + 1] - x[i])
        out = (1.0 - t) * y[i] + t * y[i + 1]

        if not self.extrapolate:
            out = np.where((q < x[0]) | (q > x[-1]), np.nan, out)
        return np.asarray(out, dtype=float)

    def derivative(self, xq: NDArray | float) -> NDArray[np.floating]:
        """Segment slope at ``xq`` (right-continuous; the last node takes the last slope)."""
        q = np.asarray(xq, dtype=float)
        i = np.clip(np.searchsorted(self.nodes, q, side="right") - 1, 0, self.nodes.size - 2)
        out = self.slopes[i]
        if not self.extrapolate:
            out = np.where((q < self.nodes[0]) | (q > self.nodes[-1]), np.nan, out)
        return np.asarray(out, dtype=float)
