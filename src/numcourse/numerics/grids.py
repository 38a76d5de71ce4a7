# src/numcourse/numerics/grids.py
"""Space-time grids for the 1D solvers.

Space is [x_lb, x_ub] with Nx nodes, uniform or sinh-clustered around
``x_center`` (useful for boundary and interior layers). Time is a uniform
grid on [0, T] with Nt levels.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import NDArray

__all__ = [
    "SpacingPolicy",
    "GridConfig",
    "Grid",
    "nodes_for_spacing",
    "build_x_grid",
    "build_time_grid",
    "build_grid",
    "const_bc",
]


class SpacingPolicy(str, Enum):
    UNIFORM = "uniform"
    CLUSTERED = "clustered"


def nodes_for_spacing(x_lb: float, x_ub: float, dx: float) -> int:
    """Node count whose uniform spacing is closest to ``dx`` (at least 3).

    The realised spacing is ``(x_ub - x_lb) / (N - 1)``, which differs from
    ``dx`` when the interval is not an integer multiple of it.
    """
    if x_ub <= x_lb:
        raise ValueError("Need x_lb < x_ub")
    if dx <= 0.0:
        raise ValueError("dx must be > 0")
    cells = round((x_ub - x_lb) / dx)
    return max(3, int(cells) + 1)


@dataclass(frozen=True, slots=True)
class GridConfig:
    Nx: int
    Nt: int
    x_lb: float
    x_ub: float
    T: float
    spacing: SpacingPolicy = SpacingPolicy.UNIFORM
    x_center: float | None = None
    cluster_strength: float = 2.0

    @classmethod
    def from_steps(
        cls, *, L: float, dx: float, T: float, dt: float, x_lb: float = 0.0
    ) -> GridConfig:
        """Uniform space-time grid on [x_lb, x_lb+L] x [0, T] from target steps."""
        if T <= 0.0 or dt <= 0.0:
            raise ValueError("T and dt must be > 0")
        x_ub = float(x_lb + L)
        return cls(
            Nx=nodes_for_spacing(x_lb, x_ub, dx),
            Nt=max(2, int(round(T / dt)) + 1),
            x_lb=float(x_lb),
            x_ub=x_ub,
            T=float(T),
        )

    @property
    def dx(self) -> float:
        """Uniform spacing (meaningful for UNIFORM grids only)."""
        return (self.x_ub - self.x_lb) / (self.Nx - 1)

    @property
    def dt(self) -> float:
        return self.T / (self.Nt - 1)

    def validate(self) -> None:
        problems = []
        if self.Nx < 3:
            problems.append("Nx must be >= 3")
        if self.Nt < 2:
            problems.append("Nt must be >= 2")
        if self.x_ub <= self.x_lb:
            problems.append("need x_lb < x_ub")
        if self.T <= 0:
            problems.append("T must be > 0")
        if self.spacing == SpacingPolicy.CLUSTERED:
            if self.x_center is None or not self.x_lb <= self.x_center <= self.x_ub:
                problems.append("clustered spacing needs x_center in [x_lb, x_ub]")
            if self.cluster_strength <= 0:
                problems.append("cluster_strength must be > 0")
        if problems:
            raise ValueError("Invalid GridConfig: " + "; ".join(problems))


@dataclass(frozen=True, slots=True)
class Grid:
    t: NDArray[np.floating]
    x: NDArray[np.floating]


def _clustered_nodes(cfg: GridConfig) -> NDArray[np.floating]:
    # s -> sinh(b s) / sinh(b) is flattest at s = 0, which is mapped to x_center
    s = np.linspace(-1.0, 1.0, cfg.Nx)
    b = float(cfg.cluster_strength)
    w = np.sinh(b * s) / np.sinh(b)

    xc = float(cfg.x_center)  # type: ignore[arg-type]
    half = np.where(w < 0.0, xc - cfg.x_lb, cfg.x_ub - xc)
    x = xc + w * half
    x[[0, -1]] = cfg.x_lb, cfg.x_ub
    return x


def _x_nodes(cfg: GridConfig) -> NDArray[np.floating]:
    if cfg.spacing == SpacingPolicy.CLUSTERED:
        x = _clustered_nodes(cfg)
    else:
        x = np.linspace(cfg.x_lb, cfg.x_ub, cfg.Nx)
    if np.any(np.diff(x) <= 0.0):
        raise ValueError("x grid must be strictly increasing")
    return x


def build_x_grid(cfg: GridConfig) -> NDArray[np.floating]:
    cfg.validate()
    return _x_nodes(cfg)


def build_time_grid(cfg: GridConfig) -> NDArray[np.floating]:
    cfg.validate()
    return np.linspace(0.0, cfg.T, cfg.Nt)


def build_grid(cfg: GridConfig) -> Grid:
    cfg.validate()
    return Grid(t=np.linspace(0.0, cfg.T, cfg.Nt), x=_x_nodes(cfg))


def const_bc(val: float) -> Callable[[float], float]:
    """Time-independent boundary value for the ``*_side`` helpers."""
    v = float(val)
    return lambda _t: v
