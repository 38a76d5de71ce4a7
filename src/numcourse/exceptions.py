class InterpolationError(ValueError):
    """Raised when interpolation data cannot define the requested interpolant.

    Typical causes are repeated nodes, too few nodes for the chosen boundary
    condition, or non-monotone data passed to a shape-preserving scheme.
    """


class StabilityWarning(RuntimeWarning):
    """Emitted when a time step exceeds the von Neumann stability threshold.

    Only conditionally stable runs (theta < 1/2) can trigger it. The run still
    completes so the growing oscillation can be inspected.
    """


class OscillationWarning(RuntimeWarning):
    """Emitted when a central advection stencil runs at grid Peclet number > 2.

    At ``Pe_G = V*dx/D > 2`` the central discretisation of the steady
    advection-diffusion operator loses its M-matrix property and the discrete
    solution oscillates node to node.
    """
