"""
Plotting utilities for hike search output.

Draws the elevation grid with the best routes overlaid, root to leaf.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import matplotlib.pyplot as plt

from routes import Route
from terrain import ElevationGrid


# ---------------------------------------------------------------------------
# Style helper
# ---------------------------------------------------------------------------

def set_nature_style() -> None:
    """Apply compact publication defaults for route maps (300 dpi, 8 pt).

    Updates ``plt.rcParams`` in place: small sans-serif text, thin axes,
    inward ticks and tight bounding boxes on save.  Safe to call multiple
    times.
    """
    plt.rcParams.update({
        "figure.dpi": 300,
        "savefig.dpi": 300,
        "savefig.bbox": "tight",
        "font.family": "sans-serif",
        "font.sans-serif": ["Helvetica", "Arial", "DejaVu Sans"],
        "font.size": 8,
        "axes.titlesize": 8,
        "axes.labelsize": 8,
        "axes.linewidth": 0.5,
        "legend.fontsize": 7,
        "lines.linewidth": 1.5,
        "xtick.direction": "in",
        "ytick.direction": "in",
        "xtick.labelsize": 7,
        "ytick.labelsize": 7,
    })


# ---------------------------------------------------------------------------
# Route map
# ---------------------------------------------------------------------------

def plot_routes(
    grid: ElevationGrid,
    routes: Sequence[Route],
    ax: plt.Axes | None = None,
    cmap: str = "terrain",
    annotate: bool = False,
    figsize: tuple[float, float] = (6, 5),
) -> tuple[plt.Figure, plt.Axes]:
    """Plot the elevation grid with each route drawn on top.

    Row 0 is drawn at the top.  Missing cells of jagged grids are left
    blank.  Each route is drawn from its root (triangle) to its leaf
    (circle).

    Parameters
    ----------
    grid : ElevationGrid
        Grid the routes were found in.
    routes : sequence of Route
        Routes to overlay (typically the output of
        :func:`hike.find_best_routes`).
    ax : Axes or None, optional
        Axes to draw into.  A new figure is created when ``None``.
    cmap : str, optional
        Colour map for elevations (default ``"terrain"``).
    annotate : bool, optional
        Write each cell's elevation in its centre (useful for small grids).
    figsize : tuple, optional
        Figure size when a new figure is created.

    Returns
    -------
    fig : matplotlib.figure.Figure
    ax : Axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    Z = np.ma.masked_array(grid.values.astype(float), mask=~grid.valid)
    im = ax.imshow(Z, cmap=cmap, origin="upper", interpolation="nearest")
    if grid.n_cells:
        fig.colorbar(im, ax=ax, label="Elevation")

    if annotate:
        for cell in grid:
            ax.text(cell.col, cell.row, str(cell.value),
                    ha="center", va="center", fontsize=7)

    for n, route in enumerate(routes):
        rc = np.array([grid.rc(k) for k in reversed(route.cells)])
        rows, cols = rc[:, 0], rc[:, 1]
        line, = ax.plot(cols, rows, "-", lw=2,
                        label=f"route {n + 1} (steep {route.steepness})")
        ax.plot(cols[0], rows[0], "^", color=line.get_color(), ms=8)
        ax.plot(cols[-1], rows[-1], "o", color=line.get_color(), ms=6)

    if routes:
        ax.set_title(
            f"{len(routes)} route(s), length {routes[0].length}, "
            f"steep {routes[0].steepness}"
        )
        ax.legend(loc="upper right", fontsize=7)
    else:
        ax.set_title("No routes")

    ax.set_xlabel("Column")
    ax.set_ylabel("Row")
    return fig, ax
