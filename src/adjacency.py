"""
Descending-edge graph over an elevation grid.

Every existing cell gets the ordered list of its orthogonal neighbours that
lie strictly lower, stored as one row of a CSR matrix indexed by arena
index.  A cell is a *source* when every neighbour it has is strictly lower
(a cell with no neighbours at all is trivially a source).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from scipy.sparse import csr_matrix

from terrain import ElevationGrid

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Module-level constants
# ---------------------------------------------------------------------------

NEIGHBOUR_OFFSETS: tuple[tuple[int, int], ...] = (
    (0, -1),   # west
    (1, 0),    # south
    (0, 1),    # east
    (-1, 0),   # north
)
"""(dj_row, di_col) offsets, in the order neighbours are inspected."""


@dataclass(frozen=True)
class DescendingGraph:
    """Adjacency records for every cell of a grid.

    Attributes
    ----------
    edges : scipy.sparse.csr_matrix
        ``(n, n)`` matrix over arena indices.  Row *k* holds the descending
        neighbours of cell *k* in :data:`NEIGHBOUR_OFFSETS` order; the
        stored value is the elevation drop along the edge.
    is_source : np.ndarray
        Boolean flag per arena index.
    """

    edges: csr_matrix
    is_source: np.ndarray

    @property
    def n_nodes(self) -> int:
        return self.edges.shape[0]

    @property
    def n_edges(self) -> int:
        return int(self.edges.nnz)

    def neighbours(self, k: int) -> np.ndarray:
        """Descending neighbours of *k*, in inspection order."""
        start, stop = self.edges.indptr[k], self.edges.indptr[k + 1]
        return self.edges.indices[start:stop]

    def sources(self) -> np.ndarray:
        """Arena indices of source cells, row-major."""
        return np.flatnonzero(self.is_source)


def build_descending_graph(grid: ElevationGrid) -> DescendingGraph:
    """Compute descending neighbours and source flags for every cell.

    Parameters
    ----------
    grid : ElevationGrid
        Loaded grid.  Bounds are checked against :attr:`ElevationGrid.valid`,
        so rows of unequal length are handled per row.

    Returns
    -------
    DescendingGraph
    """
    Ny, Nx = grid.shape
    n = Ny * Nx
    Z = grid.values
    valid = grid.valid

    indptr = np.zeros(n + 1, dtype=np.int64)
    indices: list[int] = []
    drops: list[int] = []
    is_source = np.zeros(n, dtype=bool)

    for j in range(Ny):
        for i in range(Nx):
            k = j * Nx + i
            if valid[j, i]:
                z0 = Z[j, i]
                source = True
                for dj, di in NEIGHBOUR_OFFSETS:
                    jn, i_n = j + dj, i + di
                    if not (0 <= jn < Ny and 0 <= i_n < Nx and valid[jn, i_n]):
                        continue
                    zn = Z[jn, i_n]
                    if zn < z0:
                        indices.append(jn * Nx + i_n)
                        drops.append(int(z0 - zn))
                    else:
                        source = False
                is_source[k] = source
            indptr[k + 1] = len(indices)

    edges = csr_matrix(
        (
            np.asarray(drops, dtype=np.int64),
            np.asarray(indices, dtype=np.int64),
            indptr,
        ),
        shape=(n, n),
    )
    is_source.setflags(write=False)

    logger.info(
        "Descending graph: %d cells, %d edges, %d sources",
        grid.n_cells, edges.nnz, int(is_source.sum()),
    )
    return DescendingGraph(edges=edges, is_source=is_source)
