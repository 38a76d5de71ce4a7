from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, cast

import numpy as np
from numpy.typing import NDArray

from ..grids import Grid, GridConfig, build_grid
from .boundary import assemble_full_solution
from .methods import PDEMethod1D, ThetaMethod, resolve_method
from .operators import Advection, AdvectionScheme, LinearParabolicPDE1D, advection_label
from .time_steppers import TridiagSolver, solve_tridiag_arrays


@dataclass(frozen=True, slots=True)
class PDESolution1D:
    grid: Grid
    u: NDArray[np.floating]  # (Nt, Nx), or (1, Nx) when only the final step is stored
    method: str
    advection: str

    @property
    def u_final(self) -> NDArray[np.floating]:
        return cast(NDArray[np.floating], self.u[-1])

    @property
    def t_final(self) -> float:
        return float(self.grid.t[-1])


def solve_pde_1d(
    problem: LinearParabolicPDE1D,
    *,
    grid: Grid | None = None,
    grid_cfg: GridConfig | None = None,
    method: str | ThetaMethod | PDEMethod1D = "cn",
    theta: float | None = None,
    advection: Advection = AdvectionScheme.CENTRAL,
    store: Literal["all", "final"] = "all",
    solve_tridiag: TridiagSolver = solve_tridiag_arrays,
) -> PDESolution1D:
    """March ``problem`` from t = 0 over the time nodes of the grid.

    The initial condition is sampled on the full grid and the boundary values
    are then overwritten by the boundary conditions at t = 0, so a Dirichlet
    value wins over the initial data at a corner.
    """
    if (grid is None) == (grid_cfg is None):
        raise ValueError("Provide exactly one of grid or grid_cfg")
    if store not in ("all", "final"):
        raise ValueError("store must be 'all' or 'final'")

    if grid is None:
        grid = build_grid(grid_cfg)  # type: ignore[arg-type]

    x = np.asarray(grid.x, dtype=float)
    t = np.asarray(grid.t, dtype=float)
    if x.size < 4 or t.size < 2:
        raise ValueError(f"Need Nx >= 4 and Nt >= 2, got Nx={x.size}, Nt={t.size}")

    stepper = resolve_method(method=method, theta=theta)

    u0 = np.array([float(problem.ic(float(xi))) for xi in x])
    u = assemble_full_solution(x=x, u_int=u0[1:-1], bc=problem.bc, t=float(t[0]))

    keep_all = store == "all"
    U = np.empty((t.size if keep_all else 1, x.size), dtype=float)
    U[0] = u
    for n in range(t.size - 1):
        u = stepper.step(
            problem=problem,
            grid=grid,
            u_n=u,
            t_n=float(t[n]),
            t_np1=float(t[n + 1]),
            advection=advection,
            solve_tridiag=solve_tridiag,
        )
        U[n + 1 if keep_all else 0] = u

    return PDESolution1D(
        grid=grid,
        u=U,
        method=stepper.name,
        advection=advection_label(advection),
    )
