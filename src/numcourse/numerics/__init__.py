"""
Numerical building blocks: linear algebra, grids, finite differences,
interpolation, root finding and the 1D PDE core.
"""

from .grids import Grid, GridConfig, SpacingPolicy, build_grid, nodes_for_spacing
from .root_finding import RootMethod, RootResult, ensure_bracket, get_root_method
from .tridiag import (
    Tridiag,
    solve_bidiag_lower,
    solve_tridiag_scipy,
    solve_tridiag_thomas,
    tridiag_mv,
    tridiag_to_dense,
)

__all__ = [
    # Grids
    "Grid",
    "GridConfig",
    "SpacingPolicy",
    "build_grid",
    "nodes_for_spacing",
    # Root finding
    "RootMethod",
    "RootResult",
    "ensure_bracket",
    "get_root_method",
    # Tridiagonal
    "Tridiag",
    "solve_tridiag_thomas",
    "solve_tridiag_scipy",
    "solve_bidiag_lower",
    "tridiag_mv",
    "tridiag_to_dense",
]
