# tests/test_plots.py
import numpy as np
import pandas as pd
import pytest

mpl = pytest.importorskip("matplotlib")
mpl.use("Agg", force=True)

import matplotlib.pyplot as plt  # noqa: E402

from numcourse.diagnostics import (  # noqa: E402
    difference_error_table,
    interpolant_comparison,
    peclet_sweep,
    runge_table,
)
from numcourse.diagnostics.plots import (  # noqa: E402
    plot_convergence,
    plot_difference_errors,
    plot_interpolants,
    plot_peclet_sweep,
    plot_profiles,
    plot_runge,
)
from numcourse.problems import AdvectionDiffusionParams  # noqa: E402
from numcourse.problems.functions import gaussian, gaussian_prime  # noqa: E402


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


def test_plot_convergence_with_groups_and_reference() -> None:
    h = np.array([0.1, 0.05, 0.025] * 2)
    df = pd.DataFrame(
        {"h": h, "err": np.r_[h[:3] ** 2, h[3:]], "scheme": ["a"] * 3 + ["b"] * 3}
    )
    fig, ax = plot_convergence(df, group_col="scheme", ref_orders=(1.0, 2.0))
    assert ax.get_xscale() == "log"
    assert len(ax.get_lines()) == 4

    with pytest.raises(ValueError):
        plot_convergence(df, y_col="missing")


def test_lecture_figures_render() -> None:
    fig, _ = plot_difference_errors(
        difference_error_table(np.sin, np.cos, 1.0, np.logspace(-1, -6, 6))
    )
    assert fig is not None

    fig, ax = plot_runge(runge_table(degrees=(4, 8)))
    assert len(ax.get_lines()) == 2

    nodes = np.linspace(-2.0, 2.0, 9)
    df = interpolant_comparison(gaussian, gaussian_prime, nodes, np.linspace(-2.0, 2.0, 81))
    fig, ax = plot_interpolants(df, nodes=nodes, node_values=gaussian(nodes))
    assert len(ax.get_lines()) == 4

    x = np.linspace(0.0, 1.0, 11)
    fig, ax = plot_profiles(x, {"central": 1.0 - x}, exact=(x, 1.0 - x), title="profile")
    assert ax.get_title() == "profile"

    fig, ax = plot_peclet_sweep(peclet_sweep(AdvectionDiffusionParams(), pe_list=(1.0, 5.0)))
    assert ax.get_xlabel() == "grid Peclet number"
