"""
Linear Volterra integral equations of the second kind

    f(x) + int_0^x K(x, t) f(t) dt = g(x),    0 <= x <= x_end

solved by marching the composite trapezoid rule on a uniform grid. Each new
value needs only the ones already computed, so no linear system is formed:

    f_0 = g_0
    f_i = (g_i - h [K_i0 f_0 / 2 + sum_{j=1}^{i-1} K_ij f_j]) / (1 + h K_ii / 2)

The scheme is second order for smooth K and g.
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import NDArray

from ..typing import KernelFn

RhsFn = Callable[[NDArray[np.floating]], NDArray[np.floating]]


def homework_kernel(x, t):
    """K(x, t) = (x - t)^2."""
    return (x - t) ** 2


def homework_rhs(x):
    """g(x) = exp(-x^2) cos(2 pi x)."""
    x = np.asarray(x, dtype=float)
    return np.exp(-x * x) * np.cos(2.0 * np.pi * x)


def _kernel_matrix(kernel: KernelFn, x: NDArray[np.floating]) -> NDArray[np.floating]:
    X, T = np.meshgrid(x, x, indexing="ij")
    try:
        Kmat = np.asarray(kernel(X, T), dtype=float)
        if Kmat.ndim == 0:
            return np.full(X.shape, float(Kmat))
        if Kmat.shape == X.shape:
            return Kmat
    except (TypeError, ValueError):
        pass

    n = x.size
    Kmat = np.zeros((n, n), dtype=float)
    for i in range(n):
        for j in range(i + 1):
            Kmat[i, j] = float(kernel(float(x[i]), float(x[j])))
    return Kmat


def solve_volterra_trapezoid(
    kernel: KernelFn,
    g: RhsFn,
    x_end: float,
    N: int,
) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
    """Return nodes x_0..x_N (N intervals) and the trapezoid solution f."""
    if x_end <= 0.0:
        raise ValueError("x_end must be > 0")
    if N < 1:
        raise ValueError("N must be >= 1")

    x = np.linspace(0.0, x_end, N + 1)
    h = x_end / N
    gv = np.broadcast_to(np.asarray(g(x), dtype=float), x.shape)
    Kmat = _kernel_matrix(kernel, x)

    f = np.empty(N + 1, dtype=float)
    f[0] = gv[0]
    for i in range(1, N + 1):
        acc = 0.5 * Kmat[i, 0] * f[0] + Kmat[i, 1:i] @ f[1:i]
        denom = 1.0 + 0.5 * h * Kmat[i, i]
        if denom == 0.0:
            raise np.linalg.LinAlgError(
                f"1 + h K(x_i, x_i)/2 vanishes at i={i}; refine the grid"
            )
        f[i] = (gv[i] - h * acc) / denom
    return x, f


def solve_homework_volterra(N: int) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
    """K = (x-t)^2, g = exp(-x^2) cos(2 pi x) on [0, 1]."""
    return solve_volterra_trapezoid(homework_kernel, homework_rhs, 1.0, N)
