from __future__ import annotations


def main() -> None:
    import numpy as np

    from numcourse import (
        AdvectionDiffusionParams,
        CubicSpline,
        LagrangeInterpolant,
        chebyshev_nodes,
        newton_sqrt,
        solve_steady_advection_diffusion,
    )
    from numcourse.problems import optimal_upstream_weight, runge

    x = chebyshev_nodes(-1.0, 1.0, 12)
    p = LagrangeInterpolant(x, runge(x))
    s = CubicSpline(x, runge(x))
    print("p(0.3) =", float(p(0.3)), " spline(0.3) =", float(s(0.3)), " f(0.3) =", float(runge(0.3)))

    params = AdvectionDiffusionParams(L=1.0, V=1.0, D=0.01)
    alpha = float(optimal_upstream_weight(5.0))
    xs, u = solve_steady_advection_diffusion(params, dx=0.05, alpha=alpha)
    print("steady profile (Pe=5, optimal alpha):", np.round(u, 4))

    print("sqrt(10) by Newton:", newton_sqrt(10.0).root)


if __name__ == "__main__":
    main()
