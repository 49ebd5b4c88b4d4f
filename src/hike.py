"""
Longest steepest hike: end-to-end search over an elevation grid.

Builds the descending-edge graph, explores it from every source cell,
offers every reconstructed walk to a shared :class:`routes.BestRouteSelector`
and returns the routes that tie for greatest length and steepness.

Exploration is sequential by default.  :func:`explore_parallel` fans the
sources out over a bounded thread pool; it yields the same best set (up to
discovery order) and is not necessarily faster on small grids, where the
per-task overhead dominates.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Sequence

import numpy as np

from adjacency import DescendingGraph, build_descending_graph
from explorer import explore_from
from routes import BestRouteSelector, Route, collect_routes
from terrain import ElevationGrid, load_elevation_map

logger = logging.getLogger(__name__)

MAX_WORKERS = 50
"""Upper bound on source explorations in flight at once."""


# ---------------------------------------------------------------------------
# Exploration strategies
# ---------------------------------------------------------------------------

def _explore_source(
    graph: DescendingGraph,
    values: Sequence[int] | np.ndarray,
    source: int,
    selector: BestRouteSelector,
) -> int:
    traversal = explore_from(graph, source)
    return collect_routes(traversal, values, selector)


def explore_sequential(
    graph: DescendingGraph,
    values: Sequence[int] | np.ndarray,
    selector: BestRouteSelector,
) -> int:
    """Explore every source cell in row-major order.

    Returns
    -------
    int
        Total number of candidate routes offered.
    """
    n_offered = 0
    for source in graph.sources():
        n_offered += _explore_source(graph, values, source, selector)
    return n_offered


def explore_parallel(
    graph: DescendingGraph,
    values: Sequence[int] | np.ndarray,
    selector: BestRouteSelector,
    max_workers: int = MAX_WORKERS,
) -> int:
    """Explore source cells concurrently.

    Each task owns its traversal state; only *selector* is shared, and it
    serialises its own updates.

    Parameters
    ----------
    graph : DescendingGraph
    values : sequence of int
        Elevations indexed by arena index.
    selector : BestRouteSelector
    max_workers : int
        Maximum number of explorations running at once (default
        :data:`MAX_WORKERS`).

    Returns
    -------
    int
        Total number of candidate routes offered.

    Raises
    ------
    ValueError
        If *max_workers* is smaller than 1.
    """
    if max_workers < 1:
        raise ValueError("max_workers must be >= 1.")

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(_explore_source, graph, values, source, selector)
            for source in graph.sources()
        ]
        return sum(fut.result() for fut in futures)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def find_best_routes(
    grid: ElevationGrid,
    parallel: bool = False,
    max_workers: int = MAX_WORKERS,
    debug: bool = False,
) -> list[Route]:
    """Find the longest, then steepest, descending routes in *grid*.

    Parameters
    ----------
    grid : ElevationGrid
    parallel : bool
        Use :func:`explore_parallel` instead of :func:`explore_sequential`.
    max_workers : int
        Worker bound for the parallel mode.
    debug : bool, optional
        If ``True``, emit per-source diagnostic log messages.

    Returns
    -------
    list of Route
        Every route tying for best length and steepness; empty only for an
        empty grid.
    """
    if debug:
        logger.setLevel(logging.DEBUG)
        logging.getLogger(explore_from.__module__).setLevel(logging.DEBUG)

    if grid.is_empty:
        logger.info("Empty grid; nothing to explore")
        return []

    graph = build_descending_graph(grid)
    values = grid.flat_values()
    selector = BestRouteSelector()

    if parallel:
        n_offered = explore_parallel(graph, values, selector, max_workers=max_workers)
    else:
        n_offered = explore_sequential(graph, values, selector)

    best = selector.routes
    logger.info(
        "Explored %d sources (%s), %d candidates: %d best route(s), "
        "length=%d, steepness=%d",
        len(graph.sources()), "parallel" if parallel else "sequential",
        n_offered, len(best), selector.length, selector.steepness,
    )
    return best


def find_best_routes_in_file(path: str | Path, **kwargs: Any) -> list[Route]:
    """Load a map file and run :func:`find_best_routes` on it."""
    return find_best_routes(load_elevation_map(path), **kwargs)
