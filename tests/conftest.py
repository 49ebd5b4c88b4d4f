"""
Shared test fixtures for the hike search.

Provides small hand-checked grids plus a brute-force enumerator of every
descending walk from every source cell, used as an oracle by the property
tests.  No data files are needed.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from adjacency import build_descending_graph
from terrain import grid_from_rows


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def all_source_walks(grid):
    """Enumerate every descending walk that starts at a source cell.

    Walks are returned root first as tuples of arena indices.  Exponential
    in general; only use on small grids.
    """
    graph = build_descending_graph(grid)
    walks = []

    def _extend(walk):
        walks.append(tuple(walk))
        for nb in graph.neighbours(walk[-1]):
            _extend(walk + [int(nb)])

    for source in graph.sources():
        _extend([int(source)])
    return walks


def random_grid(seed, shape=(4, 4), high=10):
    """Seeded random integer grid with at least one source cell.

    Values lie in ``[0, high)`` except one randomly placed cell set to
    *high*, which is then a strict maximum and hence a source.
    """
    rs = np.random.RandomState(seed)
    Z = rs.randint(0, high, size=shape)
    Z.flat[rs.randint(Z.size)] = high
    return grid_from_rows(Z.tolist())


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def scenario_grid():
    """3×3 grid whose only source is the 9 in the bottom-right corner."""
    return grid_from_rows([[4, 3, 2], [5, 6, 1], [7, 8, 9]], declared_rows=3)


@pytest.fixture
def single_cell_grid():
    return grid_from_rows([[7]], declared_rows=1)


@pytest.fixture
def ridge_grid():
    """One row with a peak in the middle: two mirror-image best routes."""
    return grid_from_rows([[1, 2, 3, 2, 1]])


@pytest.fixture
def two_sources_grid():
    """Two sources, each with a 3-cell route; steepness 5 versus 2."""
    return grid_from_rows([[5, 4, 0, 10, 9, 8]])


@pytest.fixture
def jagged_grid():
    """Second row shorter than the first."""
    return grid_from_rows([[5, 4, 3], [6]])


@pytest.fixture
def map_file(tmp_path):
    """Write the 4×4 example map to disk and return its path."""
    path = tmp_path / "map.txt"
    path.write_text(
        "4\n"
        "4 8 7 3\n"
        "2 5 9 3\n"
        "6 3 2 5\n"
        "4 4 1 6\n"
    )
    return path
