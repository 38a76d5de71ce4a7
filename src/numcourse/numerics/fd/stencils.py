"""
numerics/fd/stencils.py (pure coefficients/weights)

Every function returns the weights (dl, dd, du) of a 3-point stencil
acting on (u_{i-1}, u_i, u_{i+1}). Nothing here applies a stencil to data:
``diff.py`` multiplies weights by samples, ``pde/operators.py`` multiplies
them by PDE coefficients to build tridiagonal operators.

Grid spacings follow the convention
    hm = x_i - x_{i-1}
    hp = x_{i+1} - x_i
and may be scalars or arrays (vectorized).
"""

from __future__ import annotations

import numpy as np


def d1_central_nonuniform_coeffs(hm, hp):
    """Central 3-point coefficients for the first derivative on a nonuniform grid.

    Returns (dl, dd, du) such that
        y'(x_i) ≈ dl*y_{i-1} + dd*y_i + du*y_{i+1}

    Among the infinitely many consistent 3-point first-derivative
    approximations with unequal spacing, this is the unique one whose
    leading truncation term is O(hm*hp), i.e. second order. The diagonal
    weight vanishes when hm == hp and the stencil reduces to
    (y_{i+1} - y_{i-1}) / (2h).
    """
    denom = hm * hp * (hm + hp)
    dl = -hp * hp / denom
    dd = (hp * hp - hm * hm) / denom
    du = hm * hm / denom
    return dl, dd, du


def d2_central_nonuniform_coeffs(hm, hp):
    """Central 3-point coefficients for the second derivative on a nonuniform grid.

    Returns (dl, dd, du) such that
        y''(x_i) ≈ dl*y_{i-1} + dd*y_i + du*y_{i+1}

    Second order on uniform grids, first order when hm != hp.
    """
    dl = 2.0 / (hm * (hm + hp))
    dd = -2.0 / (hm * hp)
    du = 2.0 / (hp * (hm + hp))
    return dl, dd, du


def d1_backward_coeffs(hm):  # (u_i - u_{i-1})/hm
    return -1.0 / hm, 1.0 / hm, 0.0


def d1_forward_coeffs(hp):  # (u_{i+1} - u_i)/hp
    return 0.0, -1.0 / hp, 1.0 / hp


def d1_upstream_weighted_coeffs(hm, hp, alpha, flow_sign=1.0):
    """Variably upstream-weighted first derivative.

        u'(x_i) ≈ alpha * (one-sided upstream difference)
                  + (1 - alpha) * (central difference)

    ``flow_sign > 0`` means transport toward +x, so the upstream side is
    x_{i-1} and the one-sided part is the backward difference. For
    ``flow_sign < 0`` the forward difference is used. ``alpha = 0`` gives the
    central scheme, ``alpha = 1`` full upwinding.

    ``alpha`` and ``flow_sign`` broadcast against ``hm``/``hp``.
    """
    hm = np.asarray(hm, dtype=float)
    hp = np.asarray(hp, dtype=float)
    alpha = np.asarray(alpha, dtype=float)
    if np.any((alpha < 0.0) | (alpha > 1.0)):
        raise ValueError("alpha must be in [0, 1]")

    cl, cd, cu = d1_central_nonuniform_coeffs(hm, hp)
    bl, bd, bu = d1_backward_coeffs(hm)
    fl, fd, fu = d1_forward_coeffs(hp)

    downstream = np.asarray(flow_sign, dtype=float) >= 0.0
    ul = np.where(downstream, bl, fl)
    ud = np.where(downstream, bd, fd)
    uu = np.where(downstream, bu, fu)

    dl = alpha * ul + (1.0 - alpha) * cl
    dd = alpha * ud + (1.0 - alpha) * cd
    du = alpha * uu + (1.0 - alpha) * cu
    return dl, dd, du


def lagrange_3pt_weights(
    x0: float, x1: float, x2: float, x_eval: float, deriv: int
) -> tuple[float, float, float]:
    """
    Derivative weights of the quadratic Lagrange interpolant through
    (x0, x1, x2), evaluated at x_eval. ``deriv`` is 1 or 2.

    With x_eval at an end node these are the one-sided 3-point boundary
    formulas.
    """
    if deriv == 1:
        w0 = (2.0 * x_eval - x1 - x2) / ((x0 - x1) * (x0 - x2))
        w1 = (2.0 * x_eval - x0 - x2) / ((x1 - x0) * (x1 - x2))
        w2 = (2.0 * x_eval - x0 - x1) / ((x2 - x0) * (x2 - x1))
        return w0, w1, w2
    if deriv == 2:
        w0 = 2.0 / ((x0 - x1) * (x0 - x2))
        w1 = 2.0 / ((x1 - x0) * (x1 - x2))
        w2 = 2.0 / ((x2 - x0) * (x2 - x1))
        return w0, w1, w2
    raise ValueError("deriv must be 1 or 2")
