"""
Linear boundary conditions of Robin type

    alpha(t) u + beta(t) u_x = gamma(t)

at each end of [x_0, x_{N-1}]. Dirichlet (beta = 0) and Neumann (alpha = 0)
are special cases. The boundary value is never an unknown of the linear
system: it is eliminated through a 2nd-order one-sided derivative and
recovered afterwards from the interior solution.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

BoundaryFn = Callable[[float], float]  # t -> scalar


def _as_fn(v: float | BoundaryFn) -> BoundaryFn:
    if callable(v):
        return v
    c = float(v)
    return lambda _t: c


@dataclass(frozen=True, slots=True)
class RobinBCSide:
    alpha: BoundaryFn
    beta: BoundaryFn
    gamma: BoundaryFn

    def coefficients(self, t: float) -> tuple[float, float, float]:
        return float(self.alpha(t)), float(self.beta(t)), float(self.gamma(t))


@dataclass(frozen=True, slots=True)
class RobinBC:
    left: RobinBCSide
    right: RobinBCSide


def dirichlet_side(g: float | BoundaryFn) -> RobinBCSide:
    """u = g(t). ``g`` may be a constant."""
    return RobinBCSide(alpha=_as_fn(1.0), beta=_as_fn(0.0), gamma=_as_fn(g))


def neumann_side(q: float | BoundaryFn) -> RobinBCSide:
    """u_x = q(t). ``q`` may be a constant."""
    return RobinBCSide(alpha=_as_fn(0.0), beta=_as_fn(1.0), gamma=_as_fn(q))


def robin_side(
    alpha: float | BoundaryFn, beta: float | BoundaryFn, gamma: float | BoundaryFn
) -> RobinBCSide:
    return RobinBCSide(alpha=_as_fn(alpha), beta=_as_fn(beta), gamma=_as_fn(gamma))


# One-sided 3-point first-derivative weights. h0 is the boundary spacing,
# h1 the next one inwards.


def _left_dx_weights(h0: float, h1: float) -> tuple[float, float, float]:
    w0 = -(2.0 * h0 + h1) / (h0 * (h0 + h1))
    w1 = (h0 + h1) / (h0 * h1)
    w2 = -h0 / (h1 * (h0 + h1))
    return w0, w1, w2


def _right_dx_weights(h0: float, h1: float) -> tuple[float, float, float]:
    # weights on (u_{N-3}, u_{N-2}, u_{N-1})
    w_m3 = h0 / (h1 * (h0 + h1))
    w_m2 = -(h0 + h1) / (h0 * h1)
    w_m1 = (2.0 * h0 + h1) / (h0 * (h0 + h1))
    return w_m3, w_m2, w_m1


def _eliminate(
    alpha: float, beta: float, gamma: float, w_b: float, w_1: float, w_2: float, side: str
) -> tuple[float, float, float]:
    denom = alpha + beta * w_b
    if abs(denom) < 1e-14:
        raise ValueError(f"{side} boundary condition is singular: alpha + beta*w ~ 0")
    return -(beta * w_1) / denom, -(beta * w_2) / denom, gamma / denom


def elim_left_second_order(
    side: RobinBCSide, *, h0: float, h1: float, t: float
) -> tuple[float, float, float]:
    """(p1, p2, q) with u_0 = p1*u_1 + p2*u_2 + q."""
    alpha, beta, gamma = side.coefficients(t)
    w0, w1, w2 = _left_dx_weights(h0, h1)
    return _eliminate(alpha, beta, gamma, w0, w1, w2, "Left")


def elim_right_second_order(
    side: RobinBCSide, *, h0: float, h1: float, t: float
) -> tuple[float, float, float]:
    """(p1, p2, q) with u_{N-1} = p1*u_{N-2} + p2*u_{N-3} + q."""
    alpha, beta, gamma = side.coefficients(t)
    w_m3, w_m2, w_m1 = _right_dx_weights(h0, h1)
    return _eliminate(alpha, beta, gamma, w_m1, w_m2, w_m3, "Right")


def boundary_eliminations(
    x: NDArray[np.floating], bc: RobinBC, t: float
) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
    """Left and right elimination triples on grid ``x`` at time ``t``.

    Three nodes suffice when both sides are Dirichlet (p2 = 0). A derivative
    condition reaches two nodes inwards and needs at least four.
    """
    x = np.asarray(x, dtype=float)
    if x.shape[0] < 3:
        raise ValueError("Need at least 3 grid points")
    left = elim_left_second_order(
        bc.left, h0=float(x[1] - x[0]), h1=float(x[2] - x[1]), t=t
    )
    right = elim_right_second_order(
        bc.right, h0=float(x[-1] - x[-2]), h1=float(x[-2] - x[-3]), t=t
    )
    if x.shape[0] < 4 and (left[1] != 0.0 or right[1] != 0.0):
        raise ValueError("Derivative boundary conditions need at least 4 grid points")
    return left, right


def recover_boundaries_second_order(
    *,
    x: NDArray[np.floating],
    u_int: NDArray[np.floating],
    bc: RobinBC,
    t: float,
) -> tuple[float, float]:
    """Boundary values (u_0, u_{N-1}) from the interior u_1..u_{N-2}."""
    x = np.asarray(x, dtype=float)
    N = int(x.shape[0])
    u_int = np.asarray(u_int, dtype=float)
    if u_int.shape != (N - 2,):
        raise ValueError(f"u_int must have shape {(N - 2,)} got {u_int.shape}")

    (p1L, p2L, qL), (p1R, p2R, qR) = boundary_eliminations(x, bc, t)
    # p2 is zero whenever only one interior node exists
    u0 = p1L * u_int[0] + (p2L * u_int[1] if N > 3 else 0.0) + qL
    uN = p1R * u_int[-1] + (p2R * u_int[-2] if N > 3 else 0.0) + qR
    return float(u0), float(uN)


def assemble_full_solution(
    *,
    x: NDArray[np.floating],
    u_int: NDArray[np.floating],
    bc: RobinBC,
    t: float,
) -> NDArray[np.floating]:
    u0, uN = recover_boundaries_second_order(x=x, u_int=u_int, bc=bc, t=t)
    return np.concatenate(([u0], np.asarray(u_int, dtype=float), [uN]))
