"""Steady linear two-point boundary value problems.

    0 = a(x) u'' + b(x) u' + c(x) u + d(x)

discretized with the same interior operator as the time-dependent solver
and solved with a single tridiagonal solve.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..grids import Grid
from ..tridiag import solve_tridiag_thomas
from .boundary import RobinBC, assemble_full_solution
from .operators import Advection, AdvectionScheme, _eval_xt, build_L_1d

XFn = Callable[[float | NDArray[np.floating]], float | NDArray[np.floating]]


@dataclass(frozen=True, slots=True)
class LinearBVP1D:
    """Coefficients a, b, c, d as functions of x; boundary functions are called at t=0."""

    a: XFn
    b: XFn
    c: XFn
    bc: RobinBC
    d: XFn | None = None


def _as_xt(fn: XFn):
    return lambda x, _t: fn(x)


def solve_steady_1d(
    problem: LinearBVP1D,
    x: NDArray[np.floating],
    *,
    advection: Advection = AdvectionScheme.CENTRAL,
) -> NDArray[np.floating]:
    """Nodal solution of ``problem`` on the grid ``x`` (boundaries included).

    Raises ``numpy.linalg.LinAlgError`` if the discrete operator is singular
    (e.g. pure Neumann data).
    """
    x = np.asarray(x, dtype=float)
    if x.ndim != 1 or x.size < 3:
        raise ValueError("x must be 1D with at least 3 points")

    grid = Grid(t=np.zeros(1), x=x)
    op = build_L_1d(
        grid=grid,
        t=0.0,
        a_fn=_as_xt(problem.a),
        b_fn=_as_xt(problem.b),
        c_fn=_as_xt(problem.c),
        bc=problem.bc,
        advection=advection,
    )

    rhs = -op.forcing
    if problem.d is not None:
        rhs = rhs - _eval_xt(_as_xt(problem.d), x[1:-1], 0.0)

    u_int = solve_tridiag_thomas(op.L, rhs)
    return assemble_full_solution(x=x, u_int=u_int, bc=problem.bc, t=0.0)
