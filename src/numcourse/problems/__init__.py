"""The course's worked problems built on :mod:`numcourse.numerics`."""

from .advection_diffusion import (
    AdvectionDiffusionParams,
    diffusion_reaction_exact,
    grid_peclet,
    numerical_diffusion,
    optimal_upstream_weight,
    solve_diffusion_reaction,
    solve_steady_advection_diffusion,
    steady_advection_diffusion_exact,
)
from .functions import gaussian, gaussian_prime, runge, runge_prime
from .roots import certify_sqrt, newton_sqrt
from .transport import (
    TransportParams,
    amplification_factor,
    solve_transport,
    stability_threshold_dt,
    transport_exact,
)
from .volterra import homework_kernel, homework_rhs, solve_volterra_trapezoid

__all__ = [
    # Steady advection-diffusion / diffusion-reaction
    "AdvectionDiffusionParams",
    "grid_peclet",
    "numerical_diffusion",
    "steady_advection_diffusion_exact",
    "solve_steady_advection_diffusion",
    "optimal_upstream_weight",
    "diffusion_reaction_exact",
    "solve_diffusion_reaction",
    # Transient transport
    "TransportParams",
    "transport_exact",
    "solve_transport",
    "amplification_factor",
    "stability_threshold_dt",
    # Volterra
    "solve_volterra_trapezoid",
    "homework_kernel",
    "homework_rhs",
    # Roots
    "newton_sqrt",
    "certify_sqrt",
    # Sample functions
    "runge",
    "runge_prime",
    "gaussian",
    "gaussian_prime",
]
