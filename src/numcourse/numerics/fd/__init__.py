"""Finite-difference stencils and differentiation helpers."""

from .diff import difference_quotient, diff1_nonuniform, diff2_nonuniform
from .stencils import (
    d1_backward_coeffs,
    d1_central_nonuniform_coeffs,
    d1_forward_coeffs,
    d1_upstream_weighted_coeffs,
    d2_central_nonuniform_coeffs,
    lagrange_3pt_weights,
)

__all__ = [
    "d1_central_nonuniform_coeffs",
    "d2_central_nonuniform_coeffs",
    "d1_backward_coeffs",
    "d1_forward_coeffs",
    "d1_upstream_weighted_coeffs",
    "lagrange_3pt_weights",
    "diff1_nonuniform",
    "diff2_nonuniform",
    "difference_quotient",
]
