"""Polynomial, piecewise and spline interpolation."""

from .lagrange import (
    LagrangeInterpolant,
    barycentric_weights,
    lagrange_basis,
    lagrange_basis_matrix,
    vandermonde_coefficients,
    vandermonde_matrix,
)
from .monotone import fritsch_carlson
from .nodes import NodeKind, chebyshev_nodes, equispaced_nodes, make_nodes
from .piecewise import PiecewiseLinear, hat_function
from .splines import CubicSpline, QuadraticSpline

__all__ = [
    # Nodes
    "NodeKind",
    "equispaced_nodes",
    "chebyshev_nodes",
    "make_nodes",
    # Lagrange
    "lagrange_basis",
    "lagrange_basis_matrix",
    "barycentric_weights",
    "LagrangeInterpolant",
    "vandermonde_matrix",
    "vandermonde_coefficients",
    # Piecewise / splines
    "hat_function",
    "PiecewiseLinear",
    "QuadraticSpline",
    "CubicSpline",
    "fritsch_carlson",
]
