"""
numcourse

Numerical methods from an introductory course, collected into one library:
interpolation, finite differences, tridiagonal solves, root finding and
1D advection-diffusion solvers, plus the diagnostics that reproduce the
lecture figures.

Everyday entry points are re-exported here:

    from numcourse import CubicSpline, solve_steady_advection_diffusion
"""

from .config import DEFAULT_NUMERICS, NumericsConfig
from .exceptions import InterpolationError, OscillationWarning, StabilityWarning
from .numerics.fd import difference_quotient, diff1_nonuniform, diff2_nonuniform
from .numerics.interp import (
    CubicSpline,
    LagrangeInterpolant,
    PiecewiseLinear,
    QuadraticSpline,
    chebyshev_nodes,
    equispaced_nodes,
)
from .numerics.tridiag import Tridiag, solve_tridiag_thomas
from .problems import (
    AdvectionDiffusionParams,
    TransportParams,
    newton_sqrt,
    solve_steady_advection_diffusion,
    solve_transport,
    solve_volterra_trapezoid,
)

__all__ = [
    # Config / errors
    "NumericsConfig",
    "DEFAULT_NUMERICS",
    "InterpolationError",
    "StabilityWarning",
    "OscillationWarning",
    # Numerics
    "Tridiag",
    "solve_tridiag_thomas",
    "difference_quotient",
    "diff1_nonuniform",
    "diff2_nonuniform",
    "equispaced_nodes",
    "chebyshev_nodes",
    "LagrangeInterpolant",
    "PiecewiseLinear",
    "QuadraticSpline",
    "CubicSpline",
    # Problems
    "AdvectionDiffusionParams",
    "solve_steady_advection_diffusion",
    "TransportParams",
    "solve_transport",
    "solve_volterra_trapezoid",
    "newton_sqrt",
]
