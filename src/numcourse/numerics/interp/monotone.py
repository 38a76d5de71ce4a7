from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import NDArray

from ...exceptions import InterpolationError
from ..fd.diff import diff1_nonuniform


def fritsch_carlson(x: NDArray, y: NDArray) -> Callable[[np.ndarray], np.ndarray]:
    """Monotone piecewise-cubic Hermite interpolant (Fritsch-Carlson 1980).

    Node slopes start from the 3-point finite-difference derivative and are
    then limited so each Hermite piece stays monotone. Outside [x_0, x_{N-1}]
    the end values are held constant.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    if x.shape != y.shape or x.ndim != 1:
        raise InterpolationError("x and y must be 1D arrays of the same shape")
    if x.size < 2:
        raise InterpolationError("Need at least 2 points")
    if np.any(np.diff(x) <= 0.0):
        raise InterpolationError("x must be strictly increasing")

    dy = np.diff(y)
    if not (np.all(dy >= 0.0) or np.all(dy <= 0.0)):
        raise InterpolationError("y must be monotone (nondecreasing or nonincreasing)")

    h = np.diff(x)
    delta = dy / h

    if x.size == 2:
        d = np.array([delta[0], delta[0]])
    else:
        d = diff1_nonuniform(y, x).astype(np.float64, copy=True)

    # Flat interval: both adjacent slopes vanish
    flat = delta == 0.0
    d[:-1][flat] = 0.0
    d[1:][flat] = 0.0

    # Slopes must share the sign of the secant
    d[:-1] = np.where(d[:-1] * delta > 0.0, d[:-1], 0.0)
    d[1:] = np.where(d[1:] * delta > 0.0, d[1:], 0.0)

    # Project (alpha, beta) onto the circle of radius 3 along the ray
    for i in range(delta.size):
        if delta[i] == 0.0:
            continue
        a = d[i] / delta[i]
        b = d[i + 1] / delta[i]
        m = max(a, b)
        if m > 3.0:
            tau = 3.0 / m
            d[i] *= tau
            d[i + 1] *= tau

    def p(xq: np.ndarray) -> np.ndarray:
        xq_in = np.asarray(xq, dtype=np.float64)
        xq_1d = np.atleast_1d(xq_in)

        out = np.empty_like(xq_1d, dtype=np.float64)

        left = xq_1d <= x[0]
        right = xq_1d >= x[-1]
        mid = ~(left | right)

        out[left] = y[0]
        out[right] = y[-1]

        if np.any(mid):
            xm = xq_1d[mid]
            idx = np.clip(np.searchsorted(x, xm) - 1, 0, x.size - 2)

            hloc = x[idx + 1] - x[idx]
            t = (xm - x[idx]) / hloc

            h00 = 2 * t**3 - 3 * t**2 + 1
            h10 = t**3 - 2 * t**2 + t
            h01 = -2 * t**3 + 3 * t**2
            h11 = t**3 - t**2

            out[mid] = (
                h00 * y[idx] + h10 * hloc * d[idx] + h01 * y[idx + 1] + h11 * hloc * d[idx + 1]
            )

        if xq_in.ndim == 0:
            return np.asarray(out[0], dtype=np.float64)
        return out.reshape(xq_in.shape)

    return p
