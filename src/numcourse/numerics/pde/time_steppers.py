from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import NDArray

from ..grids import Grid
from ..tridiag import Tridiag, solve_tridiag_thomas
from .boundary import RobinBC, assemble_full_solution

__all__ = ["TridiagSolver", "solve_tridiag_arrays", "theta_linear_step_robin"]

type TridiagSolver = Callable[
    [NDArray[np.floating], NDArray[np.floating], NDArray[np.floating], NDArray[np.floating]],
    NDArray[np.floating],
]


def solve_tridiag_arrays(
    lower: NDArray[np.floating],
    diag: NDArray[np.floating],
    upper: NDArray[np.floating],
    rhs: NDArray[np.floating],
) -> NDArray[np.floating]:
    """Thomas solve with the (lower, diag, upper, rhs) signature used by steppers."""
    return solve_tridiag_thomas(Tridiag(lower=lower, diag=diag, upper=upper), rhs)


def theta_linear_step_robin(
    *,
    grid: Grid,
    u_n: NDArray[np.floating],  # (N,), boundary entries are not read
    t_n: float,
    t_np1: float,
    A: Tridiag,
    B: Tridiag,
    bc: RobinBC,
    rhs_extra: NDArray[np.floating] | None = None,
    solve_tridiag: TridiagSolver = solve_tridiag_arrays,
) -> NDArray[np.floating]:
    """Advance the interior by solving A u^{n+1} = B u^n + rhs_extra.

    A and B act on u_1..u_{N-2} only, with the boundary rows already folded
    in. The two boundary values of the result come from the boundary
    conditions at t_np1.
    """
    if t_np1 <= t_n:
        raise ValueError("Require t_np1 > t_n")

    x = np.asarray(grid.x, dtype=float)
    N = int(x.shape[0])
    u_n = np.asarray(u_n, dtype=float)
    if u_n.shape != (N,):
        raise ValueError(f"u_n must have shape {(N,)} got {u_n.shape}")

    M = N - 2
    if A.check() != M or B.check() != M:
        raise ValueError(f"A,B must be sized for M=N-2={M}")

    rhs = B.mv(u_n[1:-1])
    if rhs_extra is not None:
        rhs_extra = np.asarray(rhs_extra, dtype=float)
        if rhs_extra.shape != (M,):
            raise ValueError(f"rhs_extra must have shape {(M,)} got {rhs_extra.shape}")
        rhs = rhs + rhs_extra

    u_np1_int = np.asarray(solve_tridiag(A.lower, A.diag, A.upper, rhs), dtype=float)
    if u_np1_int.shape != (M,):
        raise ValueError(f"solve_tridiag must return shape {(M,)} got {u_np1_int.shape}")

    return assemble_full_solution(x=x, u_int=u_np1_int, bc=bc, t=t_np1)
