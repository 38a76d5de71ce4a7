"""Time-stepping methods for :func:`~numcourse.numerics.pde.solve_pde_1d`.

The solver only knows the :class:`PDEMethod1D` interface. Methods are looked
up by name in a registry, so a new scheme is one ``register_method`` call.

The built-in family is the theta scheme

    (I - theta dt L^{n+1}) u^{n+1} = (I + (1 - theta) dt L^n) u^n + forcing,

registered as ``explicit`` (theta = 0), ``cn`` (1/2) and ``implicit`` (1).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray

from ..grids import Grid
from .operators import Advection, LinearParabolicPDE1D, build_theta_system_1d
from .time_steppers import TridiagSolver, theta_linear_step_robin

_THETA_NAMES = {0.0: "explicit", 0.5: "cn", 1.0: "implicit"}


def _theta_name(theta: float) -> str:
    return _THETA_NAMES.get(float(theta), f"theta={theta:g}")


@runtime_checkable
class PDEMethod1D(Protocol):
    """Advance u from t_n to t_np1 on a fixed grid."""

    @property
    def name(self) -> str:  # pragma: no cover
        ...

    def step(
        self,
        *,
        problem: LinearParabolicPDE1D,
        grid: Grid,
        u_n: NDArray[np.floating],
        t_n: float,
        t_np1: float,
        advection: Advection,
        solve_tridiag: TridiagSolver,
    ) -> NDArray[np.floating]:  # pragma: no cover
        ...


@dataclass(frozen=True, slots=True)
class ThetaMethod:
    """Method choice by weight, e.g. ``solve_pde_1d(..., method=ThetaMethod(0.75))``."""

    theta: float

    def __post_init__(self) -> None:
        if not 0.0 <= float(self.theta) <= 1.0:
            raise ValueError(f"theta must be in [0, 1], got {self.theta}")

    @property
    def name(self) -> str:
        return _theta_name(self.theta)


@dataclass(frozen=True, slots=True)
class ThetaScheme1D:
    """:class:`PDEMethod1D` for a fixed theta."""

    theta: float

    @property
    def name(self) -> str:
        return _theta_name(self.theta)

    def step(
        self,
        *,
        problem: LinearParabolicPDE1D,
        grid: Grid,
        u_n: NDArray[np.floating],
        t_n: float,
        t_np1: float,
        advection: Advection,
        solve_tridiag: TridiagSolver,
    ) -> NDArray[np.floating]:
        times = {"t_n": float(t_n), "t_np1": float(t_np1)}
        system, forcing = build_theta_system_1d(
            problem=problem, grid=grid, theta=float(self.theta), advection=advection, **times
        )
        return theta_linear_step_robin(
            grid=grid,
            u_n=u_n,
            A=system.A,
            B=system.B,
            bc=problem.bc,
            rhs_extra=forcing,
            solve_tridiag=solve_tridiag,
            **times,
        )


MethodFactory = Callable[[], PDEMethod1D]
_METHODS: dict[str, MethodFactory] = {}


def _key(name: str) -> str:
    return str(name).strip().lower()


def register_method(
    name: str,
    factory: MethodFactory,
    *,
    overwrite: bool = False,
    aliases: tuple[str, ...] = (),
) -> None:
    """Make ``factory`` reachable as ``method=name`` (or any alias), case-insensitively.

    Nothing is registered if any key is empty, or already taken while
    ``overwrite`` is False (``KeyError``).
    """
    keys = [_key(k) for k in (name, *aliases)]
    if not all(keys):
        raise ValueError("Method names and aliases must be non-empty")
    taken = [k for k in keys if k in _METHODS]
    if taken and not overwrite:
        raise KeyError(f"Already registered: {', '.join(taken)}")
    for k in keys:
        _METHODS[k] = factory


def available_methods() -> list[str]:
    return sorted(_METHODS)


def resolve_method(
    *,
    method: str | ThetaMethod | PDEMethod1D | None,
    theta: float | None,
) -> PDEMethod1D:
    """Precedence: explicit ``theta``, then a method object, then a registry key.

    ``method=None`` means Crank-Nicolson.
    """
    if theta is not None:
        return ThetaScheme1D(ThetaMethod(float(theta)).theta)
    if isinstance(method, ThetaMethod):
        return ThetaScheme1D(float(method.theta))
    if isinstance(method, PDEMethod1D):
        return method

    key = _key("cn" if method is None else method)
    if key not in _METHODS:
        raise ValueError(
            f"Unknown method '{method}'. Available: {', '.join(available_methods())}"
        )
    return _METHODS[key]()


def _register_builtin_methods() -> None:
    for theta, aliases in (
        (0.5, ("crank-nicolson", "crank_nicolson")),
        (1.0, ("backward-euler", "be", "implicit-euler")),
        (0.0, ("forward-euler", "fe", "explicit-euler")),
    ):
        register_method(
            _theta_name(theta),
            lambda th=theta: ThetaScheme1D(th),
            overwrite=True,
            aliases=aliases,
        )


_register_builtin_methods()
