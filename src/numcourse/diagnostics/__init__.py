"""Tables (pandas) and figures (matplotlib) that reproduce the lecture studies.

Plot helpers live in :mod:`numcourse.diagnostics.plots` and import
matplotlib lazily, so the tables work without it.
"""

from .advection_diffusion import SteadyADRun, dx_sweep, is_oscillating, peclet_sweep
from .finite_difference import difference_error_table
from .interpolation import interpolant_comparison, piecewise_vs_global, runge_table
from .tables import (
    add_local_orders,
    discrete_l2_norm,
    observed_order,
    order_columns,
    to_frame,
)
from .transport import TransportRun, transport_run, transport_sweep
from .volterra import volterra_convergence

__all__ = [
    # Tables
    "to_frame",
    "discrete_l2_norm",
    "observed_order",
    "add_local_orders",
    "order_columns",
    # Studies
    "difference_error_table",
    "runge_table",
    "interpolant_comparison",
    "piecewise_vs_global",
    "SteadyADRun",
    "is_oscillating",
    "dx_sweep",
    "peclet_sweep",
    "TransportRun",
    "transport_run",
    "transport_sweep",
    "volterra_convergence",
]
