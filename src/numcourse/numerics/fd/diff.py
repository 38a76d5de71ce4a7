"""Finite-difference differentiation of sampled data and of callables.

``diff1_nonuniform``/``diff2_nonuniform`` differentiate samples on a strictly
increasing 1D grid along a chosen axis (batched inputs are supported).
Interior points use the 3-point central stencils from
:mod:`numcourse.numerics.fd.stencils`. The end points use one-sided 3-point
Lagrange formulas, which are less reliable than the interior on irregular or
noisy data.

``difference_quotient`` evaluates the classical two-point quotients of a
callable. Truncation-vs-round-off error studies are built on it.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Literal

import numpy as np
from numpy.typing import NDArray

from .stencils import (
    d1_central_nonuniform_coeffs,
    d2_central_nonuniform_coeffs,
    lagrange_3pt_weights,
)
from .validate import validate_inputs

QuotientKind = Literal["forward", "backward", "central"]


def _apply_3pt(
    y: NDArray, x: NDArray, axis: int, deriv: int
) -> NDArray:
    x = np.asarray(x, dtype=float)
    y = np.asarray(y)
    axis = validate_inputs(y, x, axis)

    y_moved = np.moveaxis(y, axis, -1)  # (..., N)
    out = np.empty_like(y_moved, dtype=float)

    hm = x[1:-1] - x[:-2]
    hp = x[2:] - x[1:-1]

    coeffs = d1_central_nonuniform_coeffs if deriv == 1 else d2_central_nonuniform_coeffs
    dl, dd, du = coeffs(hm, hp)
    out[..., 1:-1] = (
        dl * y_moved[..., :-2] + dd * y_moved[..., 1:-1] + du * y_moved[..., 2:]
    )

    w0, w1, w2 = lagrange_3pt_weights(x[0], x[1], x[2], x[0], deriv=deriv)
    out[..., 0] = w0 * y_moved[..., 0] + w1 * y_moved[..., 1] + w2 * y_moved[..., 2]

    w0, w1, w2 = lagrange_3pt_weights(x[-3], x[-2], x[-1], x[-1], deriv=deriv)
    out[..., -1] = w0 * y_moved[..., -3] + w1 * y_moved[..., -2] + w2 * y_moved[..., -1]

    return np.moveaxis(out, -1, axis)


def diff1_nonuniform(y: NDArray, x: NDArray, axis: int = -1) -> NDArray:
    """Compute the first derivative dy/dx on a nonuniform 1D grid.

    Parameters
    ----------
    y:
        Samples on the grid ``x``. May be N-D; ``y.shape[axis]`` must equal
        ``len(x)``.
    x:
        Strictly increasing 1D grid of shape (n,), n >= 3.
    axis:
        Axis of ``y`` that corresponds to ``x`` (default: last).

    Returns
    -------
    np.ndarray
        Same shape as ``y``. Second order in the interior and at both ends
        for smooth data (exact for quadratics).

    Raises
    ------
    ValueError
        If ``x`` is not 1D, not strictly increasing, or does not match ``y``.
    """
    return _apply_3pt(y, x, axis, deriv=1)


def diff2_nonuniform(y: NDArray, x: NDArray, axis: int = -1) -> NDArray:
    """Compute the second derivative d^2y/dx^2 on a nonuniform 1D grid.

    Same conventions and errors as :func:`diff1_nonuniform`. Exact for
    quadratics.
    """
    return _apply_3pt(y, x, axis, deriv=2)


def difference_quotient(
    f: Callable[[NDArray], NDArray],
    x0: float,
    h: float | NDArray[np.floating],
    kind: QuotientKind = "central",
) -> NDArray[np.floating]:
    """Two-point difference quotient of ``f`` at ``x0`` for step(s) ``h``.

    - forward:  (f(x0+h) - f(x0)) / h          truncation error O(h)
    - backward: (f(x0) - f(x0-h)) / h          truncation error O(h)
    - central:  (f(x0+h) - f(x0-h)) / (2h)     truncation error O(h^2)

    ``f`` must accept NumPy arrays. ``h`` may be an array of steps.
    """
    h_arr = np.asarray(h, dtype=float)
    if np.any(h_arr <= 0.0):
        raise ValueError("h must be > 0")
    x0 = float(x0)

    if kind == "forward":
        out = (np.asarray(f(x0 + h_arr)) - np.asarray(f(np.full_like(h_arr, x0)))) / h_arr
    elif kind == "backward":
        out = (np.asarray(f(np.full_like(h_arr, x0))) - np.asarray(f(x0 - h_arr))) / h_arr
    elif kind == "central":
        out = (np.asarray(f(x0 + h_arr)) - np.asarray(f(x0 - h_arr))) / (2.0 * h_arr)
    else:
        raise ValueError(f"Unknown kind '{kind}'. Expected forward, backward or central")
    return np.asarray(out, dtype=float)
