"""Tests for src/plotting.py — smoke tests that ensure plots don't crash."""

import sys
from pathlib import Path

import numpy as np
import pytest
import matplotlib
matplotlib.use("Agg")  # non-interactive backend for testing
import matplotlib.pyplot as plt

# Make src importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from hike import find_best_routes
from plotting import plot_routes, set_nature_style
from terrain import grid_from_rows


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


class TestSetNatureStyle:

    def test_updates_rcparams(self):
        with plt.rc_context():
            set_nature_style()
            assert plt.rcParams["figure.dpi"] == 300
            assert plt.rcParams["font.size"] == 8
            assert plt.rcParams["xtick.direction"] == "in"

    def test_idempotent_and_plots(self, scenario_grid):
        with plt.rc_context():
            set_nature_style()
            set_nature_style()
            fig, _ = plot_routes(scenario_grid, find_best_routes(scenario_grid))
            assert isinstance(fig, plt.Figure)


class TestPlotRoutes:

    def test_returns_figure_and_axes(self, scenario_grid):
        routes = find_best_routes(scenario_grid)
        fig, ax = plot_routes(scenario_grid, routes)
        assert isinstance(fig, plt.Figure)
        assert "length 8" in ax.get_title()

    def test_one_line_per_route(self, ridge_grid):
        routes = find_best_routes(ridge_grid)
        _, ax = plot_routes(ridge_grid, routes)
        solid = [ln for ln in ax.get_lines() if ln.get_linestyle() == "-"]
        assert len(solid) == 2
        # first route runs root (col 2) to leaf (col 0) along row 0
        np.testing.assert_array_equal(solid[0].get_xdata(), [2, 1, 0])
        np.testing.assert_array_equal(solid[0].get_ydata(), [0, 0, 0])

    def test_existing_axes(self, jagged_grid):
        fig, ax = plt.subplots()
        fig2, ax2 = plot_routes(jagged_grid, find_best_routes(jagged_grid),
                                ax=ax, annotate=True)
        assert fig2 is fig
        assert ax2 is ax
        assert len(ax.texts) == jagged_grid.n_cells

    def test_no_routes(self):
        grid = grid_from_rows([[3, 3]])
        _, ax = plot_routes(grid, [])
        assert ax.get_title() == "No routes"
