"""Finite-difference solvers for 1D linear parabolic and steady problems.

Supported form (1D):

    u_t = a(x,t) u_xx + b(x,t) u_x + c(x,t) u + d(x,t)

with Robin boundary conditions (Dirichlet and Neumann included), and its
steady counterpart 0 = a u'' + b u' + c u + d.
"""

from .boundary import RobinBC, RobinBCSide, dirichlet_side, neumann_side, robin_side
from .methods import (
    PDEMethod1D,
    ThetaMethod,
    ThetaScheme1D,
    available_methods,
    register_method,
)
from .operators import (
    AdvectionScheme,
    LinearParabolicPDE1D,
    build_L_1d,
    build_theta_system_1d,
    upstream_weight,
)
from .solver import PDESolution1D, solve_pde_1d
from .steady import LinearBVP1D, solve_steady_1d
from .types import ThetaSystem

__all__ = [
    # Boundary conditions
    "RobinBC",
    "RobinBCSide",
    "dirichlet_side",
    "neumann_side",
    "robin_side",
    # Problems / operators
    "AdvectionScheme",
    "upstream_weight",
    "LinearParabolicPDE1D",
    "build_L_1d",
    "build_theta_system_1d",
    # Methods / registry
    "PDEMethod1D",
    "ThetaMethod",
    "ThetaScheme1D",
    "register_method",
    "available_methods",
    # Solvers
    "PDESolution1D",
    "solve_pde_1d",
    "LinearBVP1D",
    "solve_steady_1d",
    # Low-level system container
    "ThetaSystem",
]
