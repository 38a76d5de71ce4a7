"""Interpolation node families on a finite interval [a, b]."""

from __future__ import annotations

from typing import Literal

import numpy as np
from numpy.typing import NDArray

NodeKind = Literal["equispaced", "chebyshev"]


def _check_interval(a: float, b: float, n: int) -> None:
    if not (a < b):
        raise ValueError("Need a < b")
    if n < 0:
        raise ValueError("n must be >= 0")


def equispaced_nodes(a: float, b: float, n: int) -> NDArray[np.floating]:
    """n+1 equally spaced nodes including both end points (n+1 = 1 gives the midpoint)."""
    _check_interval(a, b, n)
    if n == 0:
        return np.array([0.5 * (a + b)], dtype=float)
    return np.linspace(a, b, n + 1, dtype=float)


def chebyshev_nodes(a: float, b: float, n: int) -> NDArray[np.floating]:
    """The n+1 roots of T_{n+1} mapped affinely to [a, b], in ascending order.

        x_k = (a+b)/2 + (b-a)/2 * cos((2k+1) pi / (2n+2)),   k = 0..n

    The end points are not nodes. Clustering towards the ends is what keeps
    the Lebesgue constant growing only logarithmically in n.
    """
    _check_interval(a, b, n)
    k = np.arange(n + 1, dtype=float)
    t = np.cos((2.0 * k + 1.0) * np.pi / (2.0 * n + 2.0))
    x = 0.5 * (a + b) + 0.5 * (b - a) * t
    return np.sort(x)


def make_nodes(kind: NodeKind, a: float, b: float, n: int) -> NDArray[np.floating]:
    if kind == "equispaced":
        return equispaced_nodes(a, b, n)
    if kind == "chebyshev":
        return chebyshev_nodes(a, b, n)
    raise ValueError(f"Unknown node kind '{kind}'. Expected equispaced or chebyshev")
