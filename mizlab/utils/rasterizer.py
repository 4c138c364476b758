"""Rasterization utilities — integer line drawing, polyline union, cell grids.

Every cell is an ``(x, y)`` tuple of Python ints. Nothing here rounds or
truncates on the caller's behalf except ``truncate_coordinate``.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from mizlab.errors import InvalidArgumentError

Coordinate = tuple[int, int]


def is_integer(value: object) -> bool:
    # bool is an Integral subclass but never a grid coordinate
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, numbers.Integral)


def truncate_coordinate(value: object) -> int:
    """Truncate a real coordinate toward zero: 2.9 → 2, -2.9 → -2."""
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise InvalidArgumentError(f"Coordinate must be a real number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise InvalidArgumentError(f"Coordinate must be finite, got {value!r}")
    return int(value)


def rasterize(x0: int, y0: int, x1: int, y1: int) -> list[Coordinate]:
    """Bresenham cells from (x0, y0) to (x1, y1), both endpoints included.

    The walk always starts from the lexicographically smaller endpoint so that
    swapping the endpoints yields the same cells in reverse order.

    Raises:
        InvalidArgumentError: if any argument is not an integer.
    """
    args = (x0, y0, x1, y1)
    if not all(is_integer(a) for a in args):
        raise InvalidArgumentError("All of arguments must be Integer")

    start = (int(x0), int(y0))
    end = (int(x1), int(y1))
    if start <= end:
        return _walk(start, end)
    cells = _walk(end, start)
    cells.reverse()
    return cells


def _walk(start: Coordinate, end: Coordinate) -> list[Coordinate]:
    x0, y0 = start
    x1, y1 = end
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1

    cells: list[Coordinate] = []
    if dx >= dy:
        # x dominant: one cell per column
        err = 2 * dy - dx
        y = y0
        for i in range(dx + 1):
            cells.append((x0 + i * sx, y))
            if err > 0:
                y += sy
                err -= 2 * dx
            err += 2 * dy
    else:
        err = 2 * dx - dy
        x = x0
        for i in range(dy + 1):
            cells.append((x, y0 + i * sy))
            if err > 0:
                x += sx
                err -= 2 * dy
            err += 2 * dx
    return cells


def segment_cell_count(start: Coordinate, end: Coordinate) -> int:
    """Number of cells ``rasterize`` returns for one segment, without walking it."""
    return max(abs(end[0] - start[0]), abs(end[1] - start[1])) + 1


def polyline_cell_count(points: Sequence[Coordinate]) -> int:
    """Upper bound on the size of ``rasterize_polyline(points)``.

    Shared endpoints and crossings are counted once per segment, so the real
    FilledSet can be smaller.
    """
    return sum(segment_cell_count(a, b) for a, b in zip(points, points[1:]))


def rasterize_polyline(points: Sequence[Coordinate]) -> frozenset[Coordinate]:
    """Union of the cells of every consecutive segment. <2 points → empty set."""
    filled: set[Coordinate] = set()
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        filled.update(rasterize(x0, y0, x1, y1))
    return frozenset(filled)


def cells_to_grid(
    cells: Iterable[Coordinate],
    padding: int = 0,
) -> tuple[NDArray[np.int8], Coordinate]:
    """Render cells onto a dense grid covering their bounding box.

    Args:
        cells: Filled (x, y) cells.
        padding: Empty border added on every side.

    Returns:
        (grid, origin) where grid[row, col] = 1 for a filled cell, rows follow
        y and columns follow x, and origin is the (x, y) of grid[0, 0].
    """
    pts = np.array(sorted(cells), dtype=np.int64).reshape(-1, 2)
    if len(pts) == 0:
        return np.zeros((0, 0), dtype=np.int8), (0, 0)

    xmin, ymin = pts.min(axis=0)
    xmax, ymax = pts.max(axis=0)
    width = int(xmax - xmin) + 1 + 2 * padding
    height = int(ymax - ymin) + 1 + 2 * padding

    grid = np.zeros((height, width), dtype=np.int8)
    grid[pts[:, 1] - ymin + padding, pts[:, 0] - xmin + padding] = 1
    return grid, (int(xmin) - padding, int(ymin) - padding)


def grid_to_text(
    grid: NDArray[np.int8],
    filled: str = "X",
    empty: str = ".",
) -> str:
    """Convert a grid to a text representation."""
    rows = []
    for row in grid:
        rows.append(" ".join(filled if cell else empty for cell in row))
    return "\n".join(rows)


def grid_fill_percentage(grid: NDArray[np.int8]) -> float:
    """Percentage of filled cells."""
    total = grid.size
    if total == 0:
        return 0.0
    return float(np.sum(grid) / total * 100)
