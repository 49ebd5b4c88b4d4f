"""
Depth-first exploration of the descending-edge graph from one source cell.

Each run owns its own :class:`Traversal`; nothing is shared between runs.
The parent of a cell is the cell that first discovered it, so the parent
links form a tree rooted at the source even though the graph itself is a
DAG.  Which incoming edge wins is decided by neighbour order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from adjacency import DescendingGraph

logger = logging.getLogger(__name__)


@dataclass
class Traversal:
    """State of one exploration run.

    Attributes
    ----------
    root : int
        Arena index of the source cell.
    parent : np.ndarray
        Parent arena index per cell, ``-1`` where none was recorded.
    visited : np.ndarray
        Boolean flag per arena index.
    order : list of int
        Discovered cells in discovery order (root excluded).
    """

    root: int
    parent: np.ndarray
    visited: np.ndarray
    order: list[int] = field(default_factory=list)

    @property
    def n_discovered(self) -> int:
        return len(self.order)

    def parent_map(self) -> dict[int, int]:
        """Child → parent mapping, in discovery order."""
        return {k: int(self.parent[k]) for k in self.order}


def explore_from(graph: DescendingGraph, source: int) -> Traversal:
    """Depth-first walk over descending edges starting at *source*.

    Uses an explicit stack of ``(cell, next neighbour position)`` frames,
    visiting cells in exactly the order of the recursive formulation.

    Parameters
    ----------
    graph : DescendingGraph
    source : int
        Arena index of the starting cell.

    Returns
    -------
    Traversal
    """
    n = graph.n_nodes
    parent = np.full(n, -1, dtype=np.int64)
    visited = np.zeros(n, dtype=bool)
    order: list[int] = []

    source = int(source)
    visited[source] = True
    stack = [(source, 0)]

    while stack:
        k, pos = stack[-1]
        nbrs = graph.neighbours(k)
        while pos < len(nbrs) and visited[nbrs[pos]]:
            pos += 1
        if pos == len(nbrs):
            stack.pop()
            continue

        child = int(nbrs[pos])
        stack[-1] = (k, pos + 1)
        parent[child] = k
        visited[child] = True
        order.append(child)
        stack.append((child, 0))

    logger.debug("Source %d: discovered %d cells", source, len(order))
    return Traversal(root=source, parent=parent, visited=visited, order=order)
