"""
Routes, route reconstruction and best-route selection.

A :class:`Route` is stored leaf first, root last.  Its steepness is the
elevation of the root minus the elevation of the leaf.

:class:`BestRouteSelector` keeps every route that ties for the greatest
length and, among those, the greatest steepness.  Each offer is one locked
compare-and-update step, so collectors running in different threads can
share a selector.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from explorer import Traversal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Route:
    """One descending walk.

    Attributes
    ----------
    cells : tuple of int
        Arena indices, leaf first, root last.
    values : tuple of int
        Elevations of *cells*, same order.
    """

    cells: tuple[int, ...]
    values: tuple[int, ...]

    @property
    def length(self) -> int:
        return len(self.cells)

    @property
    def steepness(self) -> int:
        if not self.values:
            return 0
        return self.values[-1] - self.values[0]

    @property
    def leaf(self) -> int:
        return self.cells[0]

    @property
    def root(self) -> int:
        return self.cells[-1]

    def path(self) -> list[int]:
        """Elevations root to leaf, the order a hiker walks them."""
        return list(reversed(self.values))


# ---------------------------------------------------------------------------
# Best-route selection
# ---------------------------------------------------------------------------

class BestRouteSelector:
    """Accumulator for the best routes seen so far.

    Invariant: all retained routes share one length and one steepness, and
    no offered route had a greater length, or equal length and greater
    steepness.  Ties are kept without deduplication.
    """

    def __init__(self):
        self._routes: list[Route] = []
        self._offered = 0
        self._lock = threading.Lock()

    def offer(self, route: Route) -> bool:
        """Compare *route* against the current best and update in place.

        Returns
        -------
        bool
            ``True`` if *route* is now part of the best set.
        """
        with self._lock:
            self._offered += 1

            if not self._routes:
                self._routes.append(route)
                return True

            best = self._routes[0]
            if route.length > best.length:
                self._routes = [route]
                return True
            if route.length < best.length:
                return False

            if route.steepness < best.steepness:
                return False
            if route.steepness > best.steepness:
                self._routes = [route]
                return True

            self._routes.append(route)
            return True

    @property
    def routes(self) -> list[Route]:
        """Snapshot of the current best set."""
        with self._lock:
            return list(self._routes)

    @property
    def length(self) -> int:
        with self._lock:
            return self._routes[0].length if self._routes else 0

    @property
    def steepness(self) -> int:
        with self._lock:
            return self._routes[0].steepness if self._routes else 0

    @property
    def offered(self) -> int:
        with self._lock:
            return self._offered

    def __len__(self) -> int:
        with self._lock:
            return len(self._routes)


# ---------------------------------------------------------------------------
# Route collection
# ---------------------------------------------------------------------------

def reconstruct_route(
    traversal: Traversal,
    leaf: int,
    values: Sequence[int] | np.ndarray,
) -> Route:
    """Follow parent links from *leaf* back to the traversal root.

    Parameters
    ----------
    traversal : Traversal
        Completed exploration run.
    leaf : int
        Arena index of the last cell of the walk.
    values : sequence of int
        Elevations indexed by arena index.

    Returns
    -------
    Route
        Leaf first, root last.
    """
    cells = [int(leaf)]
    k = traversal.parent[leaf]
    while k >= 0:
        cells.append(int(k))
        k = traversal.parent[k]
    return Route(cells=tuple(cells), values=tuple(int(values[c]) for c in cells))


def collect_routes(
    traversal: Traversal,
    values: Sequence[int] | np.ndarray,
    selector: BestRouteSelector,
) -> int:
    """Offer every walk of a traversal to *selector*.

    The single-cell walk at the root is offered first, then the walk ending
    at each discovered cell in discovery order, including cells that are
    not dead ends.

    Returns
    -------
    int
        Number of candidates offered.
    """
    selector.offer(reconstruct_route(traversal, traversal.root, values))
    for k in traversal.order:
        selector.offer(reconstruct_route(traversal, k, values))
    return traversal.n_discovered + 1
