"""
Elevation grids: the cell arena and the map-file loader.

A map file holds an advisory row count on its first line, followed by one
line of whitespace-separated integer elevations per row.  Rows may differ
in length; shorter rows are padded in the arena and masked out through
:attr:`ElevationGrid.valid`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, NamedTuple, Sequence

import numpy as np

logger = logging.getLogger(__name__)

_INT_TOKEN = re.compile(r"[+-]?[0-9]+")
_INT64 = np.iinfo(np.int64)


class Cell(NamedTuple):
    """One grid cell: elevation plus its position."""

    value: int
    row: int
    col: int


class GridLoadError(ValueError):
    """Raised when a map file contains a token that is not an integer."""

    def __init__(self, row: int, col: int, token: str):
        self.row = row
        self.col = col
        self.token = token
        super().__init__(
            f"could not parse element[{row}][{col}]: {token!r} to int"
        )


# ---------------------------------------------------------------------------
# Grid container
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ElevationGrid:
    """Read-only arena of grid cells.

    Attributes
    ----------
    values : np.ndarray
        ``(n_rows, width)`` integer elevations.  Entries outside a row's
        length are padding and must be ignored.
    valid : np.ndarray
        Boolean mask, ``True`` where a cell exists.
    declared_rows : int or None
        Row count announced by the map-file header, if any.
    """

    values: np.ndarray
    valid: np.ndarray
    declared_rows: int | None = None

    @property
    def shape(self) -> tuple[int, int]:
        return self.values.shape

    @property
    def n_rows(self) -> int:
        return self.values.shape[0]

    @property
    def width(self) -> int:
        return self.values.shape[1]

    @property
    def n_cells(self) -> int:
        """Number of existing cells (padding excluded)."""
        return int(self.valid.sum())

    @property
    def is_empty(self) -> bool:
        return self.n_cells == 0

    @property
    def row_lengths(self) -> list[int]:
        return [int(n) for n in self.valid.sum(axis=1)]

    def index(self, row: int, col: int) -> int:
        """Arena index of ``(row, col)``."""
        return row * self.width + col

    def rc(self, k: int) -> tuple[int, int]:
        """Inverse of :meth:`index`."""
        return divmod(int(k), self.width)

    def cell(self, k: int) -> Cell:
        row, col = self.rc(k)
        return Cell(int(self.values[row, col]), row, col)

    def flat_values(self) -> np.ndarray:
        """Elevations indexed by arena index."""
        return self.values.ravel()

    def __iter__(self) -> Iterator[Cell]:
        for row, col in zip(*np.nonzero(self.valid)):
            yield Cell(int(self.values[row, col]), int(row), int(col))


def grid_from_rows(
    rows: Sequence[Sequence[int]],
    declared_rows: int | None = None,
) -> ElevationGrid:
    """Build an :class:`ElevationGrid` from nested integer rows.

    Parameters
    ----------
    rows : sequence of sequences of int
        Row-major elevations.  Rows may have different lengths.
    declared_rows : int or None
        Advisory row count, stored as-is.

    Returns
    -------
    ElevationGrid
    """
    n_rows = len(rows)
    width = max((len(r) for r in rows), default=0)

    values = np.zeros((n_rows, width), dtype=np.int64)
    valid = np.zeros((n_rows, width), dtype=bool)
    for j, row in enumerate(rows):
        values[j, :len(row)] = row
        valid[j, :len(row)] = True

    values.setflags(write=False)
    valid.setflags(write=False)
    return ElevationGrid(values=values, valid=valid, declared_rows=declared_rows)


# ---------------------------------------------------------------------------
# Map-file parsing
# ---------------------------------------------------------------------------

def _parse_int(token: str, row: int, col: int) -> int:
    """Parse an ASCII decimal integer that fits in int64."""
    if not _INT_TOKEN.fullmatch(token):
        raise GridLoadError(row, col, token)
    value = int(token)
    if not _INT64.min <= value <= _INT64.max:
        raise GridLoadError(row, col, token)
    return value


def parse_elevation_lines(lines: Iterable[str]) -> ElevationGrid:
    """Parse map-file lines into an :class:`ElevationGrid`.

    Parameters
    ----------
    lines : iterable of str
        Header line followed by one line per grid row.  Blank lines are
        skipped.

    Returns
    -------
    ElevationGrid

    Raises
    ------
    GridLoadError
        If the header or any elevation is not an integer.  ``row`` is the
        0-based data row (the header reports row 0, column 0).
    """
    declared_rows = None
    rows: list[list[int]] = []

    for line in lines:
        tokens = line.split()
        if not tokens:
            continue

        if declared_rows is None:
            declared_rows = _parse_int(tokens[0], 0, 0)
            continue

        j = len(rows)
        rows.append([_parse_int(tok, j, i) for i, tok in enumerate(tokens)])

    if declared_rows is not None and declared_rows != len(rows):
        logger.warning(
            "Header declares %d rows but %d were read; using %d",
            declared_rows, len(rows), len(rows),
        )

    grid = grid_from_rows(rows, declared_rows=declared_rows)
    logger.info(
        "Loaded %d × %d grid (%d cells)", grid.n_rows, grid.width, grid.n_cells,
    )
    return grid


def load_elevation_map(path: str | Path) -> ElevationGrid:
    """Read a map file from disk.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    GridLoadError
        If the file contains a non-integer token.
    """
    with open(path, "r", encoding="utf-8") as f:
        return parse_elevation_lines(f)
