from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import cast

import numpy as np
from numpy.typing import NDArray

from ...typing import ScalarFn
from ..fd.stencils import d1_upstream_weighted_coeffs, d2_central_nonuniform_coeffs
from ..grids import Grid
from ..tridiag import Tridiag
from .boundary import RobinBC, boundary_eliminations
from .types import ThetaSystem

XTInput = float | NDArray[np.floating]
XTOutput = float | NDArray[np.floating]

# Coefficient/source functions a(x,t), b(x,t), c(x,t), d(x,t).
# Scalar-only and NumPy-vectorized callables are both accepted.
ScalarXT = Callable[[XTInput, float], XTOutput]


class AdvectionScheme(str, Enum):
    """Spatial discretization of the first-derivative term b(x,t) u_x."""

    CENTRAL = "central"  # 2nd order, oscillates for grid Peclet > 2
    UPWIND = "upwind"  # 1st order, monotone, adds numerical diffusion

    @property
    def upstream_weight(self) -> float:
        return 0.0 if self is AdvectionScheme.CENTRAL else 1.0


type Advection = AdvectionScheme | str | float


def upstream_weight(advection: Advection) -> float:
    """Map an advection choice to the upstream weight alpha in [0, 1].

    ``"central"`` is alpha = 0, ``"upwind"`` is alpha = 1, and a number is
    taken as alpha itself (variable upstream weighting).
    """
    if isinstance(advection, AdvectionScheme):
        return advection.upstream_weight
    if isinstance(advection, str):
        try:
            return AdvectionScheme(advection.lower().strip()).upstream_weight
        except ValueError as e:
            raise ValueError(
                f"Unknown advection scheme '{advection}'. Expected central, upwind "
                "or a weight in [0, 1]"
            ) from e
    alpha = float(advection)
    if not (0.0 <= alpha <= 1.0):
        raise ValueError("upstream weight must be in [0, 1]")
    return alpha


def advection_label(advection: Advection) -> str:
    alpha = upstream_weight(advection)
    if alpha == 0.0:
        return AdvectionScheme.CENTRAL.value
    if alpha == 1.0:
        return AdvectionScheme.UPWIND.value
    return f"alpha={alpha:g}"


@dataclass(frozen=True, slots=True)
class LinearParabolicPDE1D:
    """1D linear parabolic PDE with Robin boundary conditions.

    PDE form:
        u_t = a(x,t) u_xx + b(x,t) u_x + c(x,t) u + d(x,t)

    Notes
    -----
    - Time marches forward: t in [0, T].
    - For advection with velocity V, b = -V: V > 0 transports toward +x.
    - Coefficient functions may be scalar-only or NumPy-vectorized.
    """

    a: ScalarXT
    b: ScalarXT
    c: ScalarXT
    bc: RobinBC
    ic: ScalarFn
    d: ScalarXT | None = None


def _eval_xt(fn: ScalarXT, x: NDArray[np.floating], t: float) -> NDArray[np.floating]:
    """Evaluate fn(x,t) on an array x.

    A vectorized call is tried first. Scalars are broadcast. If the call
    fails with a type/value error the function is evaluated pointwise.
    """
    try:
        arr = np.asarray(fn(x, t), dtype=float)
        if arr.ndim == 0:
            return np.full(x.shape, float(arr))
        if arr.shape == x.shape:
            return cast(NDArray[np.floating], arr)
    except (TypeError, ValueError):
        pass

    out = np.empty_like(x, dtype=float)
    for i, xi in enumerate(np.asarray(x, dtype=float)):
        out[i] = float(fn(float(xi), float(t)))
    return cast(NDArray[np.floating], out)


@dataclass(frozen=True, slots=True)
class _L1D:
    """Discrete L operator on interior nodes, plus boundary forcing."""

    L: Tridiag
    forcing: NDArray[np.floating]  # L u_full = L u_int + forcing


def build_L_1d(
    *,
    grid: Grid,
    t: float,
    a_fn: ScalarXT,
    b_fn: ScalarXT,
    c_fn: ScalarXT,
    bc: RobinBC,
    advection: Advection = AdvectionScheme.CENTRAL,
) -> _L1D:
    """Interior tridiagonal of u -> a u_xx + b u_x + c u with boundaries eliminated.

    The first derivative is upstream weighted: the one-sided part looks
    against the flow, i.e. backward where b < 0 and forward where b > 0.
    """
    x = np.asarray(grid.x, dtype=float)
    N = int(x.shape[0])
    if N < 3:
        raise ValueError("Need at least 3 spatial points")

    x_int = x[1:-1]
    M = int(x_int.shape[0])

    hm = x[1:-1] - x[:-2]
    hp = x[2:] - x[1:-1]
    if not np.all(hm > 0.0) or not np.all(hp > 0.0):
        raise ValueError("x grid must be strictly increasing")

    a = _eval_xt(a_fn, x_int, t)
    b = _eval_xt(b_fn, x_int, t)
    c = _eval_xt(c_fn, x_int, t)

    d2l, d2d, d2u = d2_central_nonuniform_coeffs(hm, hp)
    d1l, d1d, d1u = d1_upstream_weighted_coeffs(
        hm, hp, upstream_weight(advection), flow_sign=-b
    )

    lower = a * d2l + b * d1l  # u_{i-1}; row 0 multiplies the boundary value u_0
    diag = a * d2d + b * d1d + c
    upper = a * d2u + b * d1u  # u_{i+1}; last row multiplies u_{N-1}

    # Substitute u_b = p1 u_near + p2 u_next + q into the end rows
    forcing = np.zeros(M, dtype=float)
    left, right = boundary_eliminations(x, bc, t)
    for row, coupling, near in ((0, lower, upper), (-1, upper, lower)):
        p1, p2, q = left if row == 0 else right
        w = coupling[row]
        coupling[row] = 0.0
        diag[row] += w * p1
        forcing[row] += w * q
        if M > 1:
            near[row] += w * p2

    L = Tridiag(lower=lower[1:], diag=diag, upper=upper[:-1])
    L.check()
    return _L1D(L=L, forcing=forcing)


def build_theta_system_1d(
    *,
    problem: LinearParabolicPDE1D,
    grid: Grid,
    t_n: float,
    t_np1: float,
    theta: float,
    advection: Advection = AdvectionScheme.CENTRAL,
) -> tuple[ThetaSystem, NDArray[np.floating] | None]:
    """(I - theta dt L^{n+1}) u^{n+1} = (I + (1-theta) dt L^n) u^n + rhs_extra."""
    if not (0.0 <= theta <= 1.0):
        raise ValueError("theta must be in [0, 1]")
    dt = float(t_np1 - t_n)
    if dt <= 0.0:
        raise ValueError("Require t_np1 > t_n")

    def at(tt: float) -> _L1D:
        return build_L_1d(
            grid=grid,
            t=tt,
            a_fn=problem.a,
            b_fn=problem.b,
            c_fn=problem.c,
            bc=problem.bc,
            advection=advection,
        )

    def shifted(op: Tridiag, s: float) -> Tridiag:
        # I + s * op
        return Tridiag(lower=s * op.lower, diag=1.0 + s * op.diag, upper=s * op.upper)

    w_old, w_new = (1.0 - theta) * dt, theta * dt
    L_n, L_np1 = at(t_n), at(t_np1)
    rhs = w_old * L_n.forcing + w_new * L_np1.forcing

    if problem.d is not None:
        x_int, d = np.asarray(grid.x[1:-1], dtype=float), problem.d
        rhs = rhs + w_old * _eval_xt(d, x_int, t_n) + w_new * _eval_xt(d, x_int, t_np1)

    system = ThetaSystem(A=shifted(L_np1.L, -w_new), B=shifted(L_n.L, w_old))
    return system, (rhs if np.any(rhs) else None)
